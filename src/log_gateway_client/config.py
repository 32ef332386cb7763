"""Configuration objects for the log gateway client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError


@dataclass(frozen=True)
class ClientConfig:
    endpoint: str
    app_id: str
    bearer_token: Optional[str] = None
    timeout: float = 5.0

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Load configuration from environment variables.

        Required:
          - LOG_GATEWAY_ENDPOINT
          - LOG_GATEWAY_APP_ID

        Optional:
          - LOG_GATEWAY_TOKEN (no Authorization header when unset)
          - LOG_GATEWAY_TIMEOUT (seconds, default 5.0)
        """
        endpoint = os.environ.get("LOG_GATEWAY_ENDPOINT")
        app_id = os.environ.get("LOG_GATEWAY_APP_ID")
        missing = [
            name
            for name, value in (("LOG_GATEWAY_ENDPOINT", endpoint), ("LOG_GATEWAY_APP_ID", app_id))
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing required environment variable(s): {', '.join(missing)}")

        token = os.environ.get("LOG_GATEWAY_TOKEN") or None
        raw_timeout = os.environ.get("LOG_GATEWAY_TIMEOUT", "5.0")
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid LOG_GATEWAY_TIMEOUT '{raw_timeout}'") from exc

        return cls(endpoint=endpoint, app_id=app_id, bearer_token=token, timeout=timeout)


__all__ = ["ClientConfig"]
