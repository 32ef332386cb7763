"""Async client for the log ingestion gateway."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel

from .config import ClientConfig
from .errors import ConfigurationError, SendError, ValidationError
from .models import BatchLogPayload, HealthResponse, Level, LogPayload, LogResponse

logger = logging.getLogger("log_gateway_client.client")

PayloadLike = Union[LogPayload, Mapping[str, Any]]
BatchEntryLike = Union[BatchLogPayload, Mapping[str, Any]]


def _utc_timestamp() -> str:
    # Millisecond precision with a Z suffix, e.g. 2024-05-01T12:00:00.123Z
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _as_record(payload: Any) -> Dict[str, Any]:
    if isinstance(payload, BaseModel):
        # Unset optional fields must not shadow generated defaults; extras are always kept.
        declared = type(payload).model_fields
        return {
            key: value
            for key, value in payload.model_dump(mode="json").items()
            if key not in declared or key in payload.model_fields_set
        }
    if isinstance(payload, Mapping):
        return dict(payload)
    raise ValidationError(f"Log payload must be a mapping, got {type(payload).__name__}")


class LogGatewayClient:
    """
    Sends structured log records to the gateway's ``/logs`` endpoint.

    The endpoint and headers are fixed at construction. Every call is a
    single request with no retry; failures surface as :class:`SendError`.
    Passing ``bearer_token`` adds an ``Authorization: Bearer`` header,
    otherwise only ``X-App-Id`` identifies the caller.
    """

    def __init__(
        self,
        endpoint: str,
        app_id: str,
        bearer_token: Optional[str] = None,
        *,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not endpoint or not isinstance(endpoint, str):
            raise ConfigurationError("LogGatewayClient requires a non-empty endpoint")
        if not app_id or not isinstance(app_id, str):
            raise ConfigurationError("LogGatewayClient requires a non-empty app_id")
        if bearer_token is not None and (not bearer_token or not isinstance(bearer_token, str)):
            raise ConfigurationError("bearer_token must be a non-empty string when provided")

        try:
            parsed = urlparse(endpoint)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid endpoint '{endpoint}': {exc}") from exc
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"Invalid endpoint '{endpoint}'. Expected an http(s) URL like http://localhost:8080"
            )

        self._endpoint = endpoint[:-1] if endpoint.endswith("/") else endpoint
        self._app_id = app_id
        self._authenticated = bearer_token is not None
        self._timeout = timeout
        self._transport = transport

        headers = {
            "X-App-Id": app_id,
            "Content-Type": "application/json",
        }
        if bearer_token is not None:
            headers["Authorization"] = f"Bearer {bearer_token}"
        for name, value in headers.items():
            try:
                value.encode("ascii")
            except UnicodeEncodeError as exc:
                raise ConfigurationError(f"{name} header value must be ASCII") from exc
        self._headers = headers
        self._health_headers = {"Content-Type": "application/json"}

    @classmethod
    def from_config(
        cls, config: ClientConfig, *, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "LogGatewayClient":
        return cls(
            config.endpoint,
            config.app_id,
            config.bearer_token,
            timeout=config.timeout,
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def app_id(self) -> str:
        return self._app_id

    @property
    def authenticated(self) -> bool:
        return self._authenticated

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    def __repr__(self) -> str:
        return f"LogGatewayClient(endpoint={self._endpoint!r}, app_id={self._app_id!r}, authenticated={self._authenticated})"

    async def info(self, payload: PayloadLike) -> LogResponse:
        return await self._send_log(Level.INFO, payload)

    async def warning(self, payload: PayloadLike) -> LogResponse:
        return await self._send_log(Level.WARN, payload)

    async def error(self, payload: PayloadLike) -> LogResponse:
        return await self._send_log(Level.ERROR, payload)

    async def debug(self, payload: PayloadLike) -> LogResponse:
        return await self._send_log(Level.DEBUG, payload)

    async def batch(self, entries: Sequence[BatchEntryLike]) -> LogResponse:
        """
        Send several records, each with its own level, in one POST.

        Unlike the single-record methods, where a caller-supplied ``level``
        is sent verbatim, every batch entry must carry a ``level`` from
        :class:`Level`.
        """
        if not isinstance(entries, (list, tuple)):
            raise ValidationError("Batch logs must be a list of log payloads")

        records: List[Dict[str, Any]] = []
        for index, entry in enumerate(entries):
            try:
                record = _as_record(entry)
            except ValidationError as exc:
                raise ValidationError(f"Batch entry {index}: {exc}") from exc
            if not record.get("msg"):
                raise ValidationError(f'Batch entry {index} must include "msg" field')
            if "level" not in record:
                raise ValidationError(f'Batch entry {index} must include "level" field')
            try:
                level = Level(record["level"])
            except ValueError as exc:
                raise ValidationError(f"Batch entry {index} has unknown level {record['level']!r}") from exc
            records.append({"timestamp": _utc_timestamp(), **record, "level": level.value})

        return await self._send(f"{self._endpoint}/logs", "POST", records, self.headers, "Failed to send batch")

    async def test_connection(self) -> HealthResponse:
        """Probe ``GET /health``. App id and token headers are not sent."""
        return await self._send(
            f"{self._endpoint}/health", "GET", None, dict(self._health_headers), "Health check failed"
        )

    async def _send_log(self, level: Level, payload: PayloadLike) -> LogResponse:
        record = {"level": level.value, "timestamp": _utc_timestamp(), **_as_record(payload)}
        if not record.get("msg"):
            raise ValidationError('Log payload must include "msg" field')
        return await self._send(f"{self._endpoint}/logs", "POST", record, self.headers, "Failed to send log")

    async def _send(
        self,
        url: str,
        method: str,
        data: Any,
        headers: Dict[str, str],
        context: str,
    ) -> Any:
        try:
            return await self._http_request(url, method, data, headers)
        except SendError as exc:
            raise SendError(f"{context}: {exc}", status_code=exc.status_code, body=exc.body) from exc

    async def _http_request(
        self,
        url: str,
        method: str,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        content: Optional[str] = None
        if data is not None:
            try:
                content = json.dumps(data, separators=(",", ":"))
            except (TypeError, ValueError) as exc:
                raise ValidationError(f"Log payload is not JSON serializable: {exc}") from exc

        logger.debug("%s %s", method, url)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(method, url, content=content, headers=headers or {})
        except httpx.RequestError as exc:
            logger.warning("Gateway request failed method=%s url=%s error=%s", method, url, exc)
            raise SendError(f"Request failed: {exc}") from exc

        text = response.text
        logger.debug("%s %s -> %s", method, url, response.status_code)
        try:
            parsed = json.loads(text)
        except ValueError as exc:
            logger.warning("Gateway returned invalid JSON status=%s url=%s", response.status_code, url)
            raise SendError(
                f"Invalid JSON response: {text}", status_code=response.status_code, body=text
            ) from exc

        if 200 <= response.status_code < 300:
            return parsed

        message = parsed.get("error") if isinstance(parsed, dict) else None
        logger.warning("Gateway rejected request status=%s url=%s", response.status_code, url)
        raise SendError(
            str(message) if message else f"HTTP {response.status_code}",
            status_code=response.status_code,
            body=text,
        )


__all__ = ["LogGatewayClient"]
