import logging
import time
from typing import Optional

import requests

from .constants import GOTIFY_TOKEN_HEADER
from .metrics import GOTIFY_SEND_DURATION, GOTIFY_SENDS, MetricsSink, NoopMetrics
from .models import OutboundNotification

logger = logging.getLogger(__name__)


class GatewayTransportError(Exception):
    """Falha de rede/DNS/timeout ao falar com o Gotify (não inclui status HTTP de erro)."""


class GotifyClient:
    def __init__(self, url: str, token: str, metrics: Optional[MetricsSink] = None,
                 timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self.url = url
        self.token = token
        self.metrics = metrics if metrics is not None else NoopMetrics()
        self.timeout = timeout
        # None: cada envio usa requests.post, sem cookie jar entre alertas
        self.session = session

    @classmethod
    def from_settings(cls, settings, metrics: Optional[MetricsSink] = None) -> "GotifyClient":
        return cls(settings.gotify_url, settings.gotify_token, metrics=metrics,
                   timeout=settings.gotify_timeout)

    def send(self, notification: OutboundNotification) -> int:
        """
        Envia a notificação e devolve o status HTTP do Gotify.
        O corpo da resposta é descartado.
        """
        self.metrics.increment(GOTIFY_SENDS)
        headers = {
            "Content-Type": "application/json",
            GOTIFY_TOKEN_HEADER: self.token,
        }

        start = time.perf_counter()
        try:
            post = self.session.post if self.session is not None else requests.post
            resp = post(self.url, data=notification.to_json(), headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise GatewayTransportError(str(exc)) from exc
        finally:
            self.metrics.observe(GOTIFY_SEND_DURATION, time.perf_counter() - start)

        try:
            logger.debug("Gotify response: %s", resp.status_code)
            return resp.status_code
        finally:
            resp.close()
