"""
Webhook API routes.

Registry management, test messages and manual dispatch.
"""

from fastapi import APIRouter
import structlog

from models.webhook import (
    WebhookConfig,
    WebhookCreate,
    WebhookUpdate,
    WebhookDispatchResult,
    WebhookSendRequest,
    WebhookTestResponse,
)
from services.webhook_service import get_webhook_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=list[WebhookConfig])
async def list_webhooks():
    """All registered webhooks."""
    try:
        return get_webhook_service().list_webhooks()
    except Exception as e:
        return handle_error(e)


@router.post("", response_model=WebhookConfig, status_code=201)
async def add_webhook(data: WebhookCreate):
    """
    Register a webhook.

    Raises:
        422: URL is not http(s)
    """
    try:
        return get_webhook_service().add(data)
    except Exception as e:
        return handle_error(e)


@router.post("/send", response_model=WebhookDispatchResult)
async def send_event(data: WebhookSendRequest):
    """Fire an event to every active webhook subscribed to it."""
    try:
        return get_webhook_service().send_webhook(data.tipo_evento, data.data)
    except Exception as e:
        return handle_error(e)


@router.patch("/{webhook_id}", response_model=WebhookConfig)
async def update_webhook(webhook_id: int, data: WebhookUpdate):
    """
    Update a webhook. Only provided fields are updated.

    Raises:
        404: Webhook not found
        422: URL is not http(s)
    """
    try:
        return get_webhook_service().update(webhook_id, data)
    except Exception as e:
        return handle_error(e)


@router.delete("/{webhook_id}", status_code=204)
async def delete_webhook(webhook_id: int):
    """
    Remove a webhook.

    Raises:
        404: Webhook not found
    """
    try:
        get_webhook_service().delete(webhook_id)
        return None  # 204 No Content
    except Exception as e:
        return handle_error(e)


@router.post("/{webhook_id}/test", response_model=WebhookTestResponse)
async def test_webhook(webhook_id: int):
    """
    Send the test message to a registered webhook.

    Raises:
        404: Webhook not found
    """
    try:
        service = get_webhook_service()
        webhook = service.get_by_id(webhook_id)
        return WebhookTestResponse(sent=service.test_webhook(webhook.url))
    except Exception as e:
        return handle_error(e)
