"""
Webhook schemas.

Webhooks are Discord-compatible URLs notified when dashboard events happen.
"""

from pydantic import Field
from typing import Any, Optional
from enum import Enum

from models.base import BaseSchema


class WebhookEvent(str, Enum):
    """Events a webhook can subscribe to."""
    NEGOCIO_CREADO = "negocio_creado"
    NEGOCIO_EDITADO = "negocio_editado"
    VENTA_REALIZADA = "venta_realizada"
    ITEM_CREADO = "item_creado"


class WebhookCreate(BaseSchema):
    """Register a webhook for one event."""

    tipo_evento: WebhookEvent
    url: str = Field(..., min_length=1, description="Discord webhook URL")
    activo: bool = True


class WebhookUpdate(BaseSchema):
    """Partial webhook update."""

    tipo_evento: Optional[WebhookEvent] = None
    url: Optional[str] = Field(None, min_length=1)
    activo: Optional[bool] = None


class WebhookConfig(BaseSchema):
    """Registered webhook."""

    id: int
    tipo_evento: str
    url: str
    activo: bool


class WebhookDispatchResult(BaseSchema):
    """How many webhooks accepted or rejected a notification."""

    success: int = 0
    failed: int = 0


class WebhookSendRequest(BaseSchema):
    """Manually fire an event."""

    tipo_evento: str
    data: dict[str, Any] = Field(default_factory=dict)


class WebhookTestResponse(BaseSchema):
    """Outcome of a test message."""

    sent: bool
