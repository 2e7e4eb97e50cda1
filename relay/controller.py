import logging
import time
from typing import Optional

from flask import Flask, request
from werkzeug.exceptions import BadRequest

from .config import Settings
from .constants import SERVICE_NAME
from .formatters import build_notification, format_banner, log_gateway_status
from .metrics import (
    GOTIFY_SENDS_FAILED,
    REQUEST_DURATION,
    REQUESTS,
    REQUESTS_FAILED,
    MetricsSink,
    NoopMetrics,
)
from .models import InboundAlert, InvalidAlertError
from .services import GatewayTransportError, GotifyClient

logger = logging.getLogger(__name__)


def create_app(settings: Settings, metrics: Optional[MetricsSink] = None, client=None):
    """
    Monta o Flask app do relay.
    `client` precisa apenas de um método send(notification) -> status.
    """
    app = Flask(__name__)
    if metrics is None:
        metrics = NoopMetrics()
    if client is None:
        client = GotifyClient.from_settings(settings, metrics)

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': SERVICE_NAME}, 200

    @app.route('/', methods=['POST'])
    @app.route('/message', methods=['POST'])
    def message():
        start = time.perf_counter()
        try:
            return handle_message()
        finally:
            metrics.observe(REQUEST_DURATION, time.perf_counter() - start)

    def reject(reason, exc):
        logger.error("Error: %s: %s", reason, exc)
        metrics.increment(REQUESTS_FAILED)
        return '', 400

    def handle_message():
        metrics.increment(REQUESTS)

        try:
            body = request.get_data(cache=False)
        except (BadRequest, OSError) as exc:
            return reject("Couldn't read request body", exc)

        if settings.debug_mode:
            logger.debug("Received payload:\n\n%s", body.decode('utf-8', errors='replace'))

        try:
            alert = InboundAlert.from_body(body)
        except InvalidAlertError as exc:
            return reject("Request has invalid JSON or missing 'text' field", exc)

        notification = build_notification(alert, trim_previous=settings.trim_previous_alerts)

        # banner herdado do script original; scrapers de log podem depender dele
        print(format_banner(notification), end='', flush=True)

        try:
            status_code = client.send(notification)
        except GatewayTransportError as exc:
            logger.error("Error forwarding to Gotify: %s", exc)
            metrics.increment(GOTIFY_SENDS_FAILED)
            return '', 500

        log_gateway_status(status_code)
        return '', status_code

    if metrics.enabled:
        @app.route('/metrics', methods=['GET'])
        def scrape():
            output, content_type = metrics.render()
            return output, 200, {'Content-Type': content_type}

        logger.info("Prometheus metrics will be served on /metrics")
    else:
        logger.info("Prometheus metrics are disabled")

    return app
