"""
Discord webhook integration.

Builds the embed payload for each dashboard event and posts it to a
webhook URL.
"""

from datetime import datetime, timezone
from typing import Any, Optional
import requests
import structlog

from config import settings

logger = structlog.get_logger(__name__)


EVENT_COLORS = {
    "negocio_creado": 0x22C55E,
    "negocio_editado": 0x3B82F6,
    "venta_realizada": 0xEAB308,
    "item_creado": 0xA855F7,
    "test": 0xF97316,
}
DEFAULT_COLOR = 0x6B7280


def format_amount(amount: Any) -> str:
    """
    Format money the way the dashboard shows it.

    Examples:
        150000 -> "RD$ 150,000"
        1234.5 -> "RD$ 1,234.5"
    """
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return f"RD$ {amount}"

    if value.is_integer():
        return f"RD$ {int(value):,}"
    return "RD$ " + f"{value:,.3f}".rstrip("0").rstrip(".")


def format_timestamp(moment: datetime) -> str:
    """Date in es-DO format, e.g. 15/1/2024, 2:45:00 p. m."""
    hour = moment.hour % 12 or 12
    suffix = "a. m." if moment.hour < 12 else "p. m."
    return (
        f"{moment.day}/{moment.month}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {suffix}"
    )


def _field(name: str, value: Any) -> dict[str, Any]:
    text = "" if value is None else str(value)
    return {"name": name, "value": text or "N/A", "inline": True}


def _business_fields(negocio: dict[str, Any], usuario: str, fecha: str) -> list[dict[str, Any]]:
    return [
        _field("📋 Nombre", negocio.get("nombre")),
        _field("🏷️ Tipo", negocio.get("tipo")),
        _field("💰 Monto", format_amount(negocio.get("monto", 0))),
        _field("📊 Estado", negocio.get("estado")),
        _field("👤 Usuario", usuario),
        _field("📅 Fecha", fecha),
    ]


def build_embed(event: str, data: dict[str, Any], now: datetime) -> dict[str, Any]:
    """
    Build the event-specific part of the embed.

    Args:
        event: Event name (negocio_creado, item_creado, ...)
        data: Event data, shaped per event
        now: Time of the notification

    Returns:
        Embed with title, description, color and fields
    """
    fecha = format_timestamp(now)
    usuario = data.get("usuario") or settings.webhook_username

    if event == "negocio_creado":
        negocio = data.get("negocio", {})
        return {
            "title": "🏢 Nuevo Negocio Creado",
            "description": f"Se ha creado un nuevo negocio: **{negocio.get('nombre')}**",
            "color": EVENT_COLORS[event],
            "fields": _business_fields(negocio, usuario, fecha),
        }

    if event == "negocio_editado":
        negocio = data.get("negocio", {})
        fields = _business_fields(negocio, usuario, fecha)
        if negocio.get("comprador_nombre"):
            fields.append(_field("🛒 Comprador", negocio["comprador_nombre"]))
        return {
            "title": "✏️ Negocio Actualizado",
            "description": f"Se ha actualizado el negocio: **{negocio.get('nombre')}**",
            "color": EVENT_COLORS[event],
            "fields": fields,
        }

    if event == "venta_realizada":
        return {
            "title": "💰 Venta Realizada",
            "description": f"Se ha vendido el negocio: **{data.get('negocio')}**",
            "color": EVENT_COLORS[event],
            "fields": [
                _field("🏢 Negocio", data.get("negocio")),
                _field("👤 Comprador", data.get("comprador")),
                _field("💰 Monto", format_amount(data.get("monto", 0))),
                _field("🆔 ID Comprador", data.get("comprador_id")),
                _field("👨‍💼 Usuario", usuario),
                _field("📅 Fecha", fecha),
            ],
        }

    if event == "item_creado":
        item = data.get("item", {})
        fields = [
            _field("📦 Ítem", item.get("nombre")),
            _field("🏢 Negocio", data.get("negocio")),
            _field("🏷️ Tipo", item.get("tipo")),
            _field("👤 Usuario", usuario),
            _field("📅 Fecha", fecha),
        ]
        if item.get("vencimiento_horas"):
            fields.append(_field("⏰ Vencimiento", f"{item['vencimiento_horas']} horas"))
        return {
            "title": "📦 Nuevo Ítem Creado",
            "description": f"Se ha creado un nuevo ítem: **{item.get('nombre')}**",
            "color": EVENT_COLORS[event],
            "fields": fields,
        }

    if event == "test":
        return {
            "title": "🧪 Webhook de Prueba",
            "description": "Este es un mensaje de prueba del sistema de webhooks.",
            "color": EVENT_COLORS[event],
            "fields": [
                _field("✅ Estado", "Funcionando correctamente"),
                _field("🔧 Sistema", "OneWay Business Management"),
                _field("📅 Fecha", fecha),
            ],
        }

    return {
        "title": "📢 Evento del Sistema",
        "description": f"Evento: {event}",
        "color": DEFAULT_COLOR,
        "fields": [
            _field("📋 Tipo", event),
            _field("📅 Fecha", fecha),
        ],
    }


def build_payload(
    event: str,
    data: Optional[dict[str, Any]] = None,
    now: Optional[datetime] = None
) -> dict[str, Any]:
    """
    Build the full webhook payload for an event.

    Returns:
        Payload with username, avatar_url and a single embed
    """
    now = now or datetime.now(timezone.utc)
    embed = {
        "timestamp": now.isoformat(),
        "footer": {"text": settings.webhook_username},
        **build_embed(event, data or {}, now),
    }

    return {
        "username": settings.webhook_username,
        "avatar_url": settings.webhook_avatar_url,
        "embeds": [embed],
    }


def send_payload(url: str, payload: dict[str, Any]) -> bool:
    """
    POST a payload to a webhook URL.

    Returns:
        True if the webhook answered 2xx, False otherwise (never raises
        for network errors)
    """
    try:
        response = requests.post(
            url,
            json=payload,
            timeout=settings.webhook_timeout_seconds
        )
    except requests.exceptions.RequestException as e:
        logger.warning("webhook_request_failed", error=str(e))
        return False

    if not 200 <= response.status_code < 300:
        logger.warning("webhook_rejected", status_code=response.status_code)
        return False

    logger.debug("webhook_delivered", status_code=response.status_code)
    return True
