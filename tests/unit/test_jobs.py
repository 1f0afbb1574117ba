"""
Unit tests for the jobs gateway client and JobService.

Gateway HTTP calls are mocked at requests.request.

Run: pytest tests/unit/test_jobs.py -v
"""

from unittest.mock import patch, MagicMock

import pytest
import requests

from integrations.jobs_gateway import JobsGatewayClient
from services.job_service import DATABASE_CONFIG_KEY
from models.job import DatabaseConfig, JobCreate, JobUpdate
from exceptions import DatabaseNotConfiguredError, JobsGatewayError, JobNotFoundError
from tests.factories import JobFactory

CONFIG = DatabaseConfig(
    host="10.0.0.5",
    port=3307,
    username="admin",
    password="secret",
    database="oneway",
)


def _response(data=None, status_code=200):
    response = MagicMock()
    response.ok = 200 <= status_code < 300
    response.status_code = status_code
    response.json.return_value = data
    return response


@pytest.fixture
def configured_service(job_service):
    job_service.save_config(CONFIG)
    return job_service


@pytest.fixture
def mock_request():
    with patch("integrations.jobs_gateway.requests.request") as mock:
        yield mock


# ===================
# GATEWAY CLIENT
# ===================

class TestJobsGatewayClient:

    def test_list_jobs_request(self, mock_request):
        # Arrange
        mock_request.return_value = _response([JobFactory.create(id=1)])
        client = JobsGatewayClient(CONFIG, timeout=5)

        # Act
        jobs = client.list_jobs()

        # Assert
        assert len(jobs) == 1
        method, url = mock_request.call_args.args
        kwargs = mock_request.call_args.kwargs
        assert (method, url) == ("GET", "http://10.0.0.5:3307/jobs")
        assert kwargs["params"] == {"database": "oneway"}
        assert kwargs["headers"]["x-username"] == "admin"
        assert kwargs["headers"]["x-password"] == "secret"
        assert "x-database" not in kwargs["headers"]
        assert kwargs["timeout"] == 5

    def test_write_requests_send_database_header(self, mock_request):
        mock_request.return_value = _response({"id": 3, "name": "taxi"})

        JobsGatewayClient(CONFIG).update_job(3, {"label": "Taxi"})

        method, url = mock_request.call_args.args
        assert (method, url) == ("PUT", "http://10.0.0.5:3307/jobs/3")
        assert mock_request.call_args.kwargs["headers"]["x-database"] == "oneway"
        assert mock_request.call_args.kwargs["json"] == {"label": "Taxi"}

    def test_non_2xx_raises(self, mock_request):
        mock_request.return_value = _response(status_code=500)

        with pytest.raises(JobsGatewayError) as exc:
            JobsGatewayClient(CONFIG).list_jobs()

        assert exc.value.message == "Could not fetch jobs"
        assert exc.value.details["status_code"] == 500
        assert exc.value.status_code == 503

    def test_network_error_raises(self, mock_request):
        mock_request.side_effect = requests.exceptions.ConnectTimeout("timeout")

        with pytest.raises(JobsGatewayError):
            JobsGatewayClient(CONFIG).connect()

    def test_invalid_json_raises(self, mock_request):
        response = _response()
        response.json.side_effect = ValueError("bad json")
        mock_request.return_value = response

        with pytest.raises(JobsGatewayError):
            JobsGatewayClient(CONFIG).database_stats()

    def test_list_must_be_a_list(self, mock_request):
        mock_request.return_value = _response({"jobs": []})

        with pytest.raises(JobsGatewayError):
            JobsGatewayClient(CONFIG).list_jobs()


# ===================
# CONFIGURATION
# ===================

class TestJobServiceConfig:

    def test_no_config(self, job_service):
        assert job_service.get_config() is None
        assert job_service.has_valid_config() is False

    def test_save_and_read(self, job_service, local_storage):
        job_service.save_config(CONFIG)

        assert job_service.get_config() == CONFIG
        assert local_storage.get_item(DATABASE_CONFIG_KEY)["host"] == "10.0.0.5"
        assert job_service.has_valid_config() is True

    def test_incomplete_config(self, job_service):
        job_service.save_config(DatabaseConfig(host="10.0.0.5"))

        assert job_service.has_valid_config() is False

    def test_invalid_stored_config(self, job_service, local_storage):
        local_storage.set_item(DATABASE_CONFIG_KEY, {"port": "not-a-port"})

        assert job_service.get_config() is None

    def test_jobs_need_config(self, job_service, mock_request):
        with pytest.raises(DatabaseNotConfiguredError):
            job_service.get_all()

        mock_request.assert_not_called()

    def test_connect(self, configured_service, mock_request):
        mock_request.return_value = _response({"success": True})

        assert configured_service.connect() is True
        assert configured_service.connected is True
        assert mock_request.call_args.kwargs["json"]["database"] == "oneway"

    def test_saving_config_resets_connection(self, configured_service, mock_request):
        mock_request.return_value = _response({"success": True})
        configured_service.connect()

        configured_service.save_config(CONFIG)

        assert configured_service.connected is False


# ===================
# JOBS
# ===================

class TestJobServiceJobs:

    @pytest.fixture
    def jobs(self):
        return [
            JobFactory.create(id=1, name="police", label="Policía", type="leo", whitelisted=True),
            JobFactory.create(id=2, name="ambulance", label="EMS", type="ems", whitelisted=True),
            JobFactory.create(id=3, name="taxi", label="Taxi", whitelisted=False),
        ]

    def test_get_all_filters(self, configured_service, mock_request, jobs):
        mock_request.return_value = _response(jobs)

        assert [j.name for j in configured_service.get_all(search="policia")] == ["police"]
        assert [j.id for j in configured_service.get_all(job_type="ems")] == [2]
        assert [j.id for j in configured_service.get_all(whitelisted=False)] == [3]

    def test_extra_columns_pass_through(self, configured_service, mock_request):
        mock_request.return_value = _response([JobFactory.create(id=1, salary_bonus=10)])

        job = configured_service.get_all()[0]

        assert job.model_dump()["salary_bonus"] == 10

    def test_get_types(self, configured_service, mock_request, jobs):
        mock_request.return_value = _response(jobs)

        assert configured_service.get_types() == ["ems", "leo"]

    def test_get_by_id(self, configured_service, mock_request, jobs):
        mock_request.return_value = _response(jobs)

        assert configured_service.get_by_id(2).label == "EMS"
        with pytest.raises(JobNotFoundError):
            configured_service.get_by_id(99)

    def test_create_drops_empty_fields(self, configured_service, mock_request):
        mock_request.return_value = _response({"id": 9, "name": "miner"})

        job = configured_service.create(JobCreate(name="miner", whitelisted=False))

        assert job.id == 9
        assert mock_request.call_args.kwargs["json"] == {"name": "miner", "whitelisted": False}

    def test_update_sends_only_set_fields(self, configured_service, mock_request):
        mock_request.return_value = _response({"id": 3, "name": "taxi", "label": "Taxi VIP"})

        job = configured_service.update(3, JobUpdate(label="Taxi VIP"))

        assert job.label == "Taxi VIP"
        assert mock_request.call_args.kwargs["json"] == {"label": "Taxi VIP"}

    def test_invalid_row_raises(self, configured_service, mock_request):
        mock_request.return_value = _response([{"label": "no id"}])

        with pytest.raises(JobsGatewayError):
            configured_service.get_all()

    def test_delete(self, configured_service, mock_request):
        mock_request.return_value = _response(status_code=204)

        configured_service.delete(3)

        assert mock_request.call_args.args == ("DELETE", "http://10.0.0.5:3307/jobs/3")


# ===================
# DIAGNOSTICS
# ===================

class TestJobServiceDiagnostics:

    def test_connection_without_config(self, job_service):
        result = job_service.test_connection()

        assert result.success is False
        assert result.message == "No database configuration"

    def test_connection_incomplete(self, job_service):
        job_service.save_config(DatabaseConfig(host="x"))

        assert job_service.test_connection().message == (
            "Missing required configuration (host, username, database)"
        )

    def test_connection_success(self, configured_service, mock_request):
        mock_request.return_value = _response({"success": True, "message": "OK"})

        result = configured_service.test_connection()

        assert (result.success, result.message) == (True, "OK")

    def test_connection_gateway_failure(self, configured_service, mock_request):
        mock_request.side_effect = requests.exceptions.ConnectionError("refused")

        result = configured_service.test_connection()

        assert (result.success, result.message) == (False, "Error testing the connection")

    def test_stats(self, configured_service, mock_request):
        mock_request.return_value = _response({"jobs": 12, "connected": True})

        stats = configured_service.get_stats()

        assert (stats.jobs, stats.connected) == (12, True)

    def test_stats_never_fail(self, configured_service, mock_request):
        mock_request.return_value = _response(status_code=502)

        assert configured_service.get_stats().jobs == 0

    def test_stats_without_config(self, job_service):
        assert job_service.get_stats().connected is False
