import os
import re

_INT = re.compile(r"[+-]?[0-9]+")


def env_int(name: str, default: int = 0) -> int:
    """Read a plain decimal integer env var.

    Absent or malformed values fall back to the default. Surrounding
    whitespace and digit separators ("1_000") count as malformed.
    """
    raw = os.getenv(name, "")
    if not _INT.fullmatch(raw):
        return default
    return int(raw)


# Chaos knobs
ERROR_RATE = env_int("ERROR_RATE")  # percent, 0-100
LATENCY_MS = env_int("LATENCY_MS")  # milliseconds added by simulated work

# HTTP server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = env_int("PORT", 8080)

# OTLP trace export (Tempo / Collector)
OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv(
    "OTEL_EXPORTER_OTLP_ENDPOINT", "observability-tempo.monitoring.svc.cluster.local:4317"
)
OTEL_INSECURE = os.getenv("OTEL_INSECURE", "true").lower() == "true"

# Resource attributes
SERVICE_NAME = os.getenv("SERVICE_NAME", "sre-observability-app")
SERVICE_VERSION = os.getenv("SERVICE_VERSION", "1.0.0")
DEPLOYMENT_ENVIRONMENT = os.getenv("DEPLOYMENT_ENVIRONMENT", "lab")
