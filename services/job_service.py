"""
Job service.

Manages the game server's jobs table through the jobs gateway, using the
database configuration saved from the configuration page.
"""

from typing import Any, Optional
import structlog
from pydantic import ValidationError as PydanticValidationError

from config import LocalStorage, get_local_storage
from integrations.jobs_gateway import JobsGatewayClient
from models.job import (
    Job,
    JobCreate,
    JobUpdate,
    DatabaseConfig,
    ConnectionTestResult,
    DatabaseStats,
)
from exceptions import (
    DatabaseNotConfiguredError,
    JobsGatewayError,
    JobNotFoundError,
)
from utils.text_utils import matches_search

logger = structlog.get_logger(__name__)

DATABASE_CONFIG_KEY = "database_config"


class JobService:
    """
    Jobs table access.

    Every job operation needs a complete database configuration (host,
    username and database); without one DatabaseNotConfiguredError is
    raised before any request is made.
    """

    def __init__(self, storage: Optional[LocalStorage] = None):
        self.storage = storage or get_local_storage()
        self.connected = False

    # ===================
    # CONFIGURATION
    # ===================

    def get_config(self) -> Optional[DatabaseConfig]:
        """Saved configuration, or None if nothing usable is stored."""
        raw = self.storage.get_item(DATABASE_CONFIG_KEY)
        if raw is None:
            return None

        try:
            return DatabaseConfig.model_validate(raw)
        except PydanticValidationError as e:
            logger.warning("database_config_invalid", error_count=e.error_count())
            return None

    def save_config(self, config: DatabaseConfig) -> DatabaseConfig:
        self.storage.set_item(DATABASE_CONFIG_KEY, config.model_dump())
        self.connected = False

        logger.info(
            "database_config_saved",
            host=config.host,
            port=config.port,
            database=config.database
        )
        return config

    def has_valid_config(self) -> bool:
        config = self.get_config()
        return config is not None and config.is_complete

    def _client(self) -> JobsGatewayClient:
        config = self.get_config()
        if config is None or not config.is_complete:
            raise DatabaseNotConfiguredError()
        return JobsGatewayClient(config)

    def connect(self) -> bool:
        """
        Connect the gateway to the configured database.

        Raises:
            DatabaseNotConfiguredError: If the configuration is incomplete
            JobsGatewayError: If the gateway refuses
        """
        self.connected = self._client().connect()
        logger.info("jobs_database_connected")
        return self.connected

    # ===================
    # JOBS
    # ===================

    def _to_job(self, row: Any) -> Job:
        try:
            return Job.model_validate(row)
        except PydanticValidationError as e:
            raise JobsGatewayError(
                "Gateway returned an invalid job",
                {"error_count": e.error_count()}
            )

    def get_all(
        self,
        search: Optional[str] = None,
        job_type: Optional[str] = None,
        whitelisted: Optional[bool] = None
    ) -> list[Job]:
        """
        Get jobs, optionally filtered.

        Args:
            search: Matches name or label (case and accent-insensitive)
            job_type: Exact job type
            whitelisted: Whitelist flag

        Raises:
            DatabaseNotConfiguredError: If the configuration is incomplete
            JobsGatewayError: If the gateway fails
        """
        jobs = [self._to_job(row) for row in self._client().list_jobs()]

        if search:
            jobs = [j for j in jobs if matches_search(search, j.name, j.label)]
        if job_type:
            jobs = [j for j in jobs if j.type == job_type]
        if whitelisted is not None:
            jobs = [j for j in jobs if bool(j.whitelisted) == whitelisted]

        logger.debug("jobs_fetched", count=len(jobs))
        return jobs

    def get_by_id(self, job_id: int) -> Job:
        for job in self.get_all():
            if job.id == job_id:
                return job
        raise JobNotFoundError(job_id)

    def get_types(self) -> list[str]:
        """Distinct job types, sorted."""
        return sorted({job.type for job in self.get_all() if job.type})

    def create(self, data: JobCreate) -> Job:
        job = self._to_job(self._client().create_job(data.model_dump(exclude_none=True)))
        logger.info("job_created", job_id=job.id, name=job.name)
        return job

    def update(self, job_id: int, data: JobUpdate) -> Job:
        updates = data.model_dump(exclude_unset=True)
        job = self._to_job(self._client().update_job(job_id, updates))
        logger.info("job_updated", job_id=job_id, fields=list(updates))
        return job

    def delete(self, job_id: int) -> None:
        self._client().delete_job(job_id)
        logger.info("job_deleted", job_id=job_id)

    # ===================
    # DIAGNOSTICS
    # ===================

    def test_connection(self) -> ConnectionTestResult:
        """Ask the gateway to test the saved configuration. Never raises."""
        config = self.get_config()
        if config is None:
            return ConnectionTestResult(success=False, message="No database configuration")

        if not config.is_complete:
            return ConnectionTestResult(
                success=False,
                message="Missing required configuration (host, username, database)"
            )

        try:
            answer = JobsGatewayClient(config).test_connection()
            return ConnectionTestResult.model_validate(answer)
        except (JobsGatewayError, PydanticValidationError) as e:
            logger.warning("jobs_connection_test_failed", error=str(e))
            return ConnectionTestResult(success=False, message="Error testing the connection")

    def get_stats(self) -> DatabaseStats:
        """Gateway statistics; zeros when not configured or unreachable."""
        if not self.has_valid_config():
            return DatabaseStats()

        try:
            return DatabaseStats.model_validate(self._client().database_stats())
        except (JobsGatewayError, PydanticValidationError) as e:
            logger.warning("jobs_stats_failed", error=str(e))
            return DatabaseStats()


# Singleton instance
_job_service: Optional[JobService] = None


def get_job_service() -> JobService:
    """Get or create job service instance."""
    global _job_service
    if _job_service is None:
        _job_service = JobService()
    return _job_service
