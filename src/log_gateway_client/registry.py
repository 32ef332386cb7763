"""Process-wide default client and the ``log`` convenience functions.

Prefer creating and passing a :class:`LogGatewayClient` explicitly. The
global slot exists for applications that want ``log.info(...)`` anywhere
after a single ``configure`` call at startup. Concurrent ``configure``
calls do not merge: the last one to acquire the lock wins.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional, Sequence

from .client import BatchEntryLike, LogGatewayClient, PayloadLike
from .errors import NotConfiguredError
from .models import LogResponse

logger = logging.getLogger("log_gateway_client.registry")

_NOT_CONFIGURED = "Logger not configured. Call configure(endpoint, app_id) first."


class _ClientSlot:
    def __init__(self) -> None:
        self._client: Optional[LogGatewayClient] = None
        self._lock = threading.Lock()

    def set(self, client: Optional[LogGatewayClient]) -> None:
        with self._lock:
            self._client = client

    def get(self) -> Optional[LogGatewayClient]:
        with self._lock:
            return self._client


_slot = _ClientSlot()


def create_client(*args: Any, **kwargs: Any) -> LogGatewayClient:
    """Build a client without registering it globally."""
    return LogGatewayClient(*args, **kwargs)


def configure(*args: Any, **kwargs: Any) -> LogGatewayClient:
    """Build a client, register it as the global default and return it."""
    client = create_client(*args, **kwargs)
    _slot.set(client)
    logger.info("Configured global log gateway client endpoint=%s app_id=%s", client.endpoint, client.app_id)
    return client


def get_client() -> LogGatewayClient:
    client = _slot.get()
    if client is None:
        raise NotConfiguredError(_NOT_CONFIGURED)
    return client


def reset() -> None:
    _slot.set(None)
    logger.info("Cleared global log gateway client")


class _GlobalLog:
    """Forwards each call to whichever client is currently configured."""

    async def info(self, payload: PayloadLike) -> LogResponse:
        return await get_client().info(payload)

    async def warning(self, payload: PayloadLike) -> LogResponse:
        return await get_client().warning(payload)

    async def error(self, payload: PayloadLike) -> LogResponse:
        return await get_client().error(payload)

    async def debug(self, payload: PayloadLike) -> LogResponse:
        return await get_client().debug(payload)

    async def batch(self, entries: Sequence[BatchEntryLike]) -> LogResponse:
        return await get_client().batch(entries)


log = _GlobalLog()

__all__ = ["configure", "create_client", "get_client", "reset", "log"]
