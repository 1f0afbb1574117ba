"""
Jobs API routes.

CRUD over the game server's jobs table through the jobs gateway.
"""

from fastapi import APIRouter, Query
from typing import Optional
import structlog

from models.job import Job, JobCreate, JobUpdate, JobListResponse
from services.job_service import get_job_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=JobListResponse)
async def list_jobs(
    search: Optional[str] = Query(None, description="Search in name or label"),
    type: Optional[str] = Query(None, description="Filter by job type"),
    whitelisted: Optional[bool] = Query(None, description="Filter by whitelist flag"),
):
    """
    List jobs with optional filters.

    Raises:
        400: Database not configured
        503: Gateway unavailable
    """
    try:
        jobs = get_job_service().get_all(search=search, job_type=type, whitelisted=whitelisted)
        return JobListResponse(data=jobs, total=len(jobs))
    except Exception as e:
        return handle_error(e)


@router.get("/types", response_model=list[str])
async def list_job_types():
    """Distinct job types."""
    try:
        return get_job_service().get_types()
    except Exception as e:
        return handle_error(e)


@router.post("/connect")
async def connect():
    """Connect the gateway to the configured database."""
    try:
        return {"connected": get_job_service().connect()}
    except Exception as e:
        return handle_error(e)


@router.get("/{job_id}", response_model=Job)
async def get_job(job_id: int):
    """
    Get a single job.

    Raises:
        404: Job not found
    """
    try:
        return get_job_service().get_by_id(job_id)
    except Exception as e:
        return handle_error(e)


@router.post("", response_model=Job, status_code=201)
async def create_job(data: JobCreate):
    """Create a job."""
    try:
        return get_job_service().create(data)
    except Exception as e:
        return handle_error(e)


@router.put("/{job_id}", response_model=Job)
async def update_job(job_id: int, data: JobUpdate):
    """Update a job. Only provided fields are sent."""
    try:
        return get_job_service().update(job_id, data)
    except Exception as e:
        return handle_error(e)


@router.delete("/{job_id}", status_code=204)
async def delete_job(job_id: int):
    """Delete a job."""
    try:
        get_job_service().delete(job_id)
        return None  # 204 No Content
    except Exception as e:
        return handle_error(e)
