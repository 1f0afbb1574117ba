"""
Job schemas for the external jobs table.

Job rows come from the game server database through the jobs gateway and
may carry columns this API does not know about; those are passed through.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional

from models.base import BaseSchema


class Job(BaseModel):
    """Row of the jobs table."""

    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    label: Optional[str] = None
    type: Optional[str] = None
    whitelisted: Optional[bool] = None
    grades: Optional[Any] = None


class JobCreate(BaseModel):
    """New job; unknown columns are forwarded to the gateway."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    label: Optional[str] = None
    type: Optional[str] = None
    whitelisted: Optional[bool] = None
    grades: Optional[Any] = None


class JobUpdate(BaseModel):
    """Partial job update."""

    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, min_length=1)
    label: Optional[str] = None
    type: Optional[str] = None
    whitelisted: Optional[bool] = None
    grades: Optional[Any] = None


class JobListResponse(BaseSchema):
    """Filtered jobs."""

    data: list[Job]
    total: int


class DatabaseConfig(BaseSchema):
    """Connection details for the jobs gateway."""

    host: str = ""
    port: int = Field(3306, ge=1, le=65535)
    username: str = ""
    password: str = ""
    database: str = ""

    @property
    def is_complete(self) -> bool:
        """host, username and database are required to talk to the gateway."""
        return bool(self.host and self.username and self.database)


class ConnectionTestResult(BaseSchema):
    """Gateway connection test outcome."""

    success: bool
    message: str


class DatabaseStats(BaseSchema):
    """Gateway database statistics."""

    jobs: int = 0
    connected: bool = False
