import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import (
    DEFAULT_LISTEN_HOST,
    DEFAULT_LISTEN_PORT,
    ENV_DEBUG_MODE,
    ENV_GOTIFY_TIMEOUT_SECONDS,
    ENV_GOTIFY_TOKEN,
    ENV_GOTIFY_URL,
    ENV_LISTEN_HOST,
    ENV_LISTEN_PORT,
    ENV_PROMETHEUS_METRICS,
    ENV_TRIM_PREVIOUS_ALERTS,
    GOTIFY_MESSAGE_SUFFIX,
    TRUTHY_VALUES,
)

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Configuração obrigatória ausente ou inválida."""


@dataclass(frozen=True)
class Settings:
    gotify_url: str
    gotify_token: str
    listen_host: str = DEFAULT_LISTEN_HOST
    listen_port: int = int(DEFAULT_LISTEN_PORT)
    metrics_enabled: bool = False
    debug_mode: bool = False
    trim_previous_alerts: bool = True
    gotify_timeout: Optional[float] = None

    @property
    def listen_address(self) -> str:
        return f"{self.listen_host}:{self.listen_port}"


def _get(environ: Mapping[str, str], key: str) -> Optional[str]:
    value = environ.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _flag(environ: Mapping[str, str], key: str, default: bool = False) -> bool:
    value = _get(environ, key)
    if value is None:
        return default
    return value.lower() in TRUTHY_VALUES


def normalize_gotify_url(url: str) -> str:
    """Garante que a URL aponte para o endpoint /message do Gotify."""
    if url.endswith(GOTIFY_MESSAGE_SUFFIX):
        return url
    return url.rstrip("/") + GOTIFY_MESSAGE_SUFFIX


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigError(f"{ENV_LISTEN_PORT} must be an integer, got {raw!r}")
    if not 0 < port < 65536:
        raise ConfigError(f"{ENV_LISTEN_PORT} out of range: {port}")
    return port


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigError(f"{ENV_GOTIFY_TIMEOUT_SECONDS} must be a number, got {raw!r}")
    if timeout <= 0:
        raise ConfigError(f"{ENV_GOTIFY_TIMEOUT_SECONDS} must be positive, got {raw!r}")
    return timeout


def load_settings(environ: Mapping[str, str]) -> Settings:
    """
    Lê a configuração uma única vez (normalmente de os.environ).
    URL e token do Gotify são obrigatórios; o resto tem default.
    """
    gotify_url = _get(environ, ENV_GOTIFY_URL)
    if not gotify_url:
        raise ConfigError("Please provide Gotify endpoint URL")
    gotify_token = _get(environ, ENV_GOTIFY_TOKEN)
    if not gotify_token:
        raise ConfigError("Please provide Gotify application token")

    settings = Settings(
        gotify_url=normalize_gotify_url(gotify_url),
        gotify_token=gotify_token,
        listen_host=_get(environ, ENV_LISTEN_HOST) or DEFAULT_LISTEN_HOST,
        listen_port=_parse_port(_get(environ, ENV_LISTEN_PORT) or DEFAULT_LISTEN_PORT),
        metrics_enabled=_flag(environ, ENV_PROMETHEUS_METRICS),
        debug_mode=_flag(environ, ENV_DEBUG_MODE),
        trim_previous_alerts=_flag(environ, ENV_TRIM_PREVIOUS_ALERTS, default=True),
        gotify_timeout=_parse_timeout(_get(environ, ENV_GOTIFY_TIMEOUT_SECONDS)),
    )
    logger.debug("Loaded settings: url=%s listen=%s metrics=%s trim=%s",
                 settings.gotify_url, settings.listen_address,
                 settings.metrics_enabled, settings.trim_previous_alerts)
    return settings
