"""Exception hierarchy for the log gateway client."""

from __future__ import annotations

from typing import Optional


class LogGatewayError(Exception):
    """Base class for every error raised by this library."""


class ConfigurationError(LogGatewayError):
    """Missing, empty or malformed client configuration."""


class ValidationError(LogGatewayError):
    """Payload rejected locally before any network I/O."""


class NotConfiguredError(LogGatewayError):
    """A global ``log`` function was called before ``configure``."""


class SendError(LogGatewayError):
    """The request to the gateway failed or returned an unusable response."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, body: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


__all__ = [
    "LogGatewayError",
    "ConfigurationError",
    "ValidationError",
    "NotConfiguredError",
    "SendError",
]
