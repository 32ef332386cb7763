"""Python client for the log ingestion gateway."""

from .client import LogGatewayClient
from .config import ClientConfig
from .errors import (
    ConfigurationError,
    LogGatewayError,
    NotConfiguredError,
    SendError,
    ValidationError,
)
from .models import BatchLogPayload, HealthResponse, Level, LogPayload, LogResponse
from .registry import configure, create_client, get_client, log, reset

__all__ = [
    "LogGatewayClient",
    "ClientConfig",
    "LogGatewayError",
    "ConfigurationError",
    "ValidationError",
    "NotConfiguredError",
    "SendError",
    "Level",
    "LogPayload",
    "BatchLogPayload",
    "LogResponse",
    "HealthResponse",
    "configure",
    "create_client",
    "get_client",
    "reset",
    "log",
]
