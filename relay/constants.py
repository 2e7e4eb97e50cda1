# Variáveis de ambiente lidas na inicialização
ENV_GOTIFY_URL = "GOTIFY_URL"
ENV_GOTIFY_TOKEN = "GOTIFY_TOKEN"
ENV_LISTEN_HOST = "LISTEN_HOST"
ENV_LISTEN_PORT = "LISTEN_PORT"
ENV_PROMETHEUS_METRICS = "PROMETHEUS_METRICS"
ENV_DEBUG_MODE = "DEBUG_MODE"
ENV_TRIM_PREVIOUS_ALERTS = "TRIM_PREVIOUS_ALERTS"
ENV_GOTIFY_TIMEOUT_SECONDS = "GOTIFY_TIMEOUT_SECONDS"

DEFAULT_LISTEN_HOST = "0.0.0.0"
DEFAULT_LISTEN_PORT = "31662"

TRUTHY_VALUES = {"1", "true", "yes", "on"}

# Endpoint de envio de mensagens do Gotify
GOTIFY_MESSAGE_SUFFIX = "/message"
GOTIFY_TOKEN_HEADER = "X-Gotify-Key"

# O TrueNAS reenvia todos os alertas ainda não limpos depois deste marcador
PREVIOUS_ALERTS_MARKER = "Current alerts:"

BANNER_PADDING = "=" * 10

SERVICE_NAME = "truenas-gotify-relay"
