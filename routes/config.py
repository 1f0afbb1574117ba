"""
Config API routes.

Jobs database configuration, connection test and statistics.
"""

from fastapi import APIRouter
import structlog

from models.job import DatabaseConfig, ConnectionTestResult, DatabaseStats
from services.job_service import get_job_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()

PASSWORD_MASK = "********"


def _masked(config: DatabaseConfig) -> DatabaseConfig:
    if not config.password:
        return config
    return config.model_copy(update={"password": PASSWORD_MASK})


# ===================
# READ
# ===================

@router.get("/database", response_model=DatabaseConfig)
async def get_database_config():
    """Saved jobs database configuration (password masked)."""
    try:
        config = get_job_service().get_config() or DatabaseConfig()
        return _masked(config)
    except Exception as e:
        return handle_error(e)


@router.get("/database/stats", response_model=DatabaseStats)
async def get_database_stats():
    """Jobs database statistics; zeros when not configured or unreachable."""
    try:
        return get_job_service().get_stats()
    except Exception as e:
        return handle_error(e)


# ===================
# WRITE
# ===================

@router.put("/database", response_model=DatabaseConfig)
async def save_database_config(data: DatabaseConfig):
    """
    Save the jobs database configuration.

    Sending the masked password back keeps the stored one.
    """
    try:
        service = get_job_service()
        if data.password == PASSWORD_MASK:
            current = service.get_config()
            data = data.model_copy(update={"password": current.password if current else ""})

        return _masked(service.save_config(data))
    except Exception as e:
        return handle_error(e)


@router.post("/database/test", response_model=ConnectionTestResult)
async def test_database_connection():
    """Test the saved configuration through the gateway."""
    try:
        return get_job_service().test_connection()
    except Exception as e:
        return handle_error(e)
