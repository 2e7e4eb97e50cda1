import logging
import os
import sys

from relay.config import ConfigError, load_settings
from relay.controller import create_app
from relay.metrics import build_metrics

logger = logging.getLogger("relay")


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        settings = load_settings(os.environ)
    except ConfigError as exc:
        logger.critical("%s", exc)
        sys.exit(1)

    if settings.debug_mode:
        logging.getLogger().setLevel(logging.DEBUG)

    app = create_app(settings, metrics=build_metrics(settings))

    logger.info("Listening on %s...", settings.listen_address)
    # use_reloader=False evita dois processos (e dois registros de métricas) em DEBUG_MODE
    app.run(host=settings.listen_host, port=settings.listen_port, threaded=True, use_reloader=False)


if __name__ == '__main__':
    main()
