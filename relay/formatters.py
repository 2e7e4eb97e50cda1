import logging
from typing import Tuple

from .constants import BANNER_PADDING, PREVIOUS_ALERTS_MARKER
from .models import InboundAlert, OutboundNotification

logger = logging.getLogger(__name__)

STATUS_SUCCESS = "success"
STATUS_UNAUTHORIZED = "unauthorized"
STATUS_UNKNOWN = "unknown"


def split_alert_text(text: str) -> Tuple[str, str]:
    """Primeira linha vira o título; o restante, a mensagem."""
    lines = text.split("\n")
    title = lines[0].strip()
    message = "\n".join(lines[1:]).strip()
    return title, message


def trim_previous_alerts(message: str) -> str:
    """
    O TrueNAS manda junto todos os alertas ainda não limpos depois de
    "Current alerts:". Corta a partir do marcador (inclusive).
    """
    index = message.find(PREVIOUS_ALERTS_MARKER)
    if index == -1:
        return message
    return message[:index]


def build_notification(alert: InboundAlert, trim_previous: bool = True) -> OutboundNotification:
    title, message = split_alert_text(alert.text)
    if trim_previous and PREVIOUS_ALERTS_MARKER in message:
        # sobra a quebra de linha que antecedia o marcador
        message = trim_previous_alerts(message).rstrip()
    return OutboundNotification(title=title, message=message)


def format_banner(notification: OutboundNotification) -> str:
    # largura conta bytes, igual ao script antigo
    width = len(notification.title.encode("utf-8")) + 2 * len(BANNER_PADDING) + 2
    return (
        f"{BANNER_PADDING} {notification.title} {BANNER_PADDING}\n"
        f"{notification.message}\n"
        f"{'=' * width}\n"
    )


def classify_status(status_code: int) -> str:
    if status_code == 200:
        return STATUS_SUCCESS
    if status_code in (400, 401, 403):
        return STATUS_UNAUTHORIZED
    return STATUS_UNKNOWN


def log_gateway_status(status_code: int) -> None:
    kind = classify_status(status_code)
    if kind == STATUS_SUCCESS:
        logger.info(">> Forwarded successfully")
    elif kind == STATUS_UNAUTHORIZED:
        logger.warning(">> Unauthorized! GOTIFY_TOKEN is incorrect. Error Code: %d", status_code)
    else:
        logger.warning(">> Unknown error while forwarding to gotify. Error Code: %d", status_code)
