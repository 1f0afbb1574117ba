"""
Jobs gateway integration.

HTTP client for the small backend that sits in front of the game server
database and exposes its jobs table. Connection details come from the
stored DatabaseConfig; credentials travel in x-username / x-password /
x-database headers.
"""

from typing import Any, Optional
import requests
import structlog

from config import settings
from models.job import DatabaseConfig
from exceptions import JobsGatewayError

logger = structlog.get_logger(__name__)


class JobsGatewayClient:
    """
    Client for one configured gateway.

    Every call raises JobsGatewayError on network failure or a non-2xx
    answer.
    """

    def __init__(self, config: DatabaseConfig, timeout: Optional[float] = None):
        self.config = config
        self.base_url = f"http://{config.host}:{config.port}"
        self.timeout = timeout or settings.jobs_gateway_timeout_seconds

    def _headers(self, include_database: bool = True) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "x-username": self.config.username,
            "x-password": self.config.password,
        }
        if include_database:
            headers["x-database"] = self.config.database
        return headers

    def _request(
        self,
        method: str,
        path: str,
        failure_message: str,
        **kwargs: Any
    ) -> requests.Response:
        url = f"{self.base_url}{path}"

        try:
            logger.debug("jobs_gateway_request", method=method, path=path)
            response = requests.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error("jobs_gateway_unreachable", path=path, error=str(e))
            raise JobsGatewayError(failure_message, {"reason": str(e)})

        if not response.ok:
            logger.error(
                "jobs_gateway_error",
                method=method,
                path=path,
                status_code=response.status_code
            )
            raise JobsGatewayError(failure_message, {"status_code": response.status_code})

        return response

    def _json(self, response: requests.Response, failure_message: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error("jobs_gateway_invalid_json", error=str(e))
            raise JobsGatewayError(failure_message, {"reason": "invalid JSON"})

    def connect(self) -> bool:
        """Open a gateway connection with the stored credentials."""
        self._request(
            "POST", "/connect",
            "Could not connect to the jobs database",
            json=self.config.model_dump(),
        )
        return True

    def list_jobs(self) -> list[dict[str, Any]]:
        """All rows of the jobs table."""
        message = "Could not fetch jobs"
        response = self._request(
            "GET", "/jobs", message,
            params={"database": self.config.database},
            headers=self._headers(include_database=False),
        )
        data = self._json(response, message)
        if not isinstance(data, list):
            raise JobsGatewayError(message, {"reason": "expected a list of jobs"})
        return data

    def create_job(self, job: dict[str, Any]) -> dict[str, Any]:
        message = "Could not create job"
        response = self._request(
            "POST", "/jobs", message,
            json=job,
            headers=self._headers(),
        )
        return self._json(response, message)

    def update_job(self, job_id: int, updates: dict[str, Any]) -> dict[str, Any]:
        message = "Could not update job"
        response = self._request(
            "PUT", f"/jobs/{job_id}", message,
            json=updates,
            headers=self._headers(),
        )
        return self._json(response, message)

    def delete_job(self, job_id: int) -> None:
        self._request(
            "DELETE", f"/jobs/{job_id}",
            "Could not delete job",
            headers=self._headers(),
        )

    def test_connection(self) -> dict[str, Any]:
        """Gateway's own connection test answer ({success, message})."""
        message = "Connection test failed"
        response = self._request(
            "POST", "/test-connection", message,
            json=self.config.model_dump(),
        )
        return self._json(response, message)

    def database_stats(self) -> dict[str, Any]:
        message = "Could not fetch database stats"
        response = self._request(
            "GET", "/database-stats", message,
            headers=self._headers(),
        )
        return self._json(response, message)
