"""
Webhook service.

Keeps the webhook registry in local storage and dispatches dashboard
events to every active webhook subscribed to them.
"""

import time
from typing import Any, Optional
from urllib.parse import urlparse
import structlog

from config import LocalStorage, get_local_storage
from integrations import discord
from models.webhook import (
    WebhookConfig,
    WebhookCreate,
    WebhookUpdate,
    WebhookDispatchResult,
)
from exceptions import WebhookNotFoundError, InvalidWebhookUrlError

logger = structlog.get_logger(__name__)

WEBHOOKS_KEY = "oneway_webhooks"


def validate_webhook_url(url: str) -> str:
    """
    Check the URL is absolute http(s).

    Raises:
        InvalidWebhookUrlError: If it is not
    """
    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidWebhookUrlError(url)
    return url


class WebhookService:
    """
    Webhook registry and dispatch.

    Registry entries are stored as a list of dicts under
    "oneway_webhooks" so the file stays readable by hand.
    """

    def __init__(self, storage: Optional[LocalStorage] = None):
        self.storage = storage or get_local_storage()

    # ===================
    # REGISTRY
    # ===================

    def _load(self) -> list[WebhookConfig]:
        raw = self.storage.get_item(WEBHOOKS_KEY, [])
        if not isinstance(raw, list):
            logger.warning("webhook_registry_invalid", type=type(raw).__name__)
            return []

        webhooks = []
        for entry in raw:
            try:
                webhooks.append(WebhookConfig.model_validate(entry))
            except ValueError as e:
                logger.warning("webhook_entry_skipped", error=str(e))
        return webhooks

    def _save(self, webhooks: list[WebhookConfig]) -> None:
        self.storage.set_item(
            WEBHOOKS_KEY,
            [w.model_dump() for w in webhooks]
        )

    def _next_id(self, webhooks: list[WebhookConfig]) -> int:
        # Millisecond timestamps, bumped if two are created in the same ms
        now_ms = int(time.time() * 1000)
        highest = max((w.id for w in webhooks), default=0)
        return max(now_ms, highest + 1)

    def list_webhooks(self) -> list[WebhookConfig]:
        """All registered webhooks."""
        return self._load()

    def get_by_id(self, webhook_id: int) -> WebhookConfig:
        for webhook in self._load():
            if webhook.id == webhook_id:
                return webhook
        raise WebhookNotFoundError(webhook_id)

    def add(self, data: WebhookCreate) -> WebhookConfig:
        """
        Register a webhook.

        Raises:
            InvalidWebhookUrlError: If the URL is not http(s)
        """
        url = validate_webhook_url(data.url)
        webhooks = self._load()

        webhook = WebhookConfig(
            id=self._next_id(webhooks),
            tipo_evento=data.tipo_evento.value,
            url=url,
            activo=data.activo,
        )
        webhooks.append(webhook)
        self._save(webhooks)

        logger.info("webhook_added", webhook_id=webhook.id, tipo_evento=webhook.tipo_evento)
        return webhook

    def update(self, webhook_id: int, data: WebhookUpdate) -> WebhookConfig:
        """
        Update a webhook. Only provided fields change.

        Raises:
            WebhookNotFoundError: If the id is unknown
            InvalidWebhookUrlError: If a new URL is not http(s)
        """
        updates = data.model_dump(exclude_unset=True, mode="json")
        if updates.get("url") is not None:
            updates["url"] = validate_webhook_url(updates["url"])
        updates = {k: v for k, v in updates.items() if v is not None}

        webhooks = self._load()
        for index, webhook in enumerate(webhooks):
            if webhook.id == webhook_id:
                updated = webhook.model_copy(update=updates)
                webhooks[index] = updated
                self._save(webhooks)

                logger.info("webhook_updated", webhook_id=webhook_id, fields=list(updates))
                return updated

        raise WebhookNotFoundError(webhook_id)

    def delete(self, webhook_id: int) -> None:
        """
        Remove a webhook.

        Raises:
            WebhookNotFoundError: If the id is unknown
        """
        webhooks = self._load()
        remaining = [w for w in webhooks if w.id != webhook_id]
        if len(remaining) == len(webhooks):
            raise WebhookNotFoundError(webhook_id)

        self._save(remaining)
        logger.info("webhook_deleted", webhook_id=webhook_id)

    def get_by_event(self, event: str) -> list[WebhookConfig]:
        """Active webhooks subscribed to an event."""
        return [w for w in self._load() if w.tipo_evento == event and w.activo]

    # ===================
    # DISPATCH
    # ===================

    def send_to_url(self, url: str, payload: dict[str, Any]) -> bool:
        """POST a payload; False on any failure."""
        return discord.send_payload(url, payload)

    def send_webhook(self, event: str, data: dict[str, Any]) -> WebhookDispatchResult:
        """
        Notify every active webhook subscribed to an event.

        Args:
            event: Event name
            data: Event data (see integrations.discord.build_embed)

        Returns:
            Count of webhooks that accepted and rejected the message
        """
        webhooks = self.get_by_event(event)
        result = WebhookDispatchResult()
        if not webhooks:
            return result

        payload = discord.build_payload(event, data)
        for webhook in webhooks:
            if self.send_to_url(webhook.url, payload):
                result.success += 1
            else:
                result.failed += 1

        logger.info(
            "webhook_dispatched",
            tipo_evento=event,
            success=result.success,
            failed=result.failed
        )
        return result

    def notify(self, event: str, data: dict[str, Any]) -> WebhookDispatchResult:
        """
        send_webhook for use after a write: never raises.

        A notification failure must not undo or fail the write that
        triggered it.
        """
        try:
            return self.send_webhook(event, data)
        except Exception as e:
            logger.error("webhook_notify_failed", tipo_evento=event, error=str(e))
            return WebhookDispatchResult()

    def test_webhook(self, url: str) -> bool:
        """Send the test message to a URL."""
        url = validate_webhook_url(url)
        payload = discord.build_payload("test", {})
        sent = self.send_to_url(url, payload)

        logger.info("webhook_tested", sent=sent)
        return sent


# Singleton instance
_webhook_service: Optional[WebhookService] = None


def get_webhook_service() -> WebhookService:
    """Get or create webhook service instance."""
    global _webhook_service
    if _webhook_service is None:
        _webhook_service = WebhookService()
    return _webhook_service
