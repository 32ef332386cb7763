from __future__ import annotations

import json
from typing import Any, Callable, List

import httpx
import pytest

from log_gateway_client import registry


@pytest.fixture(autouse=True)
def clear_registry():
    registry.reset()
    yield
    registry.reset()


class RecordingGateway:
    """Fake gateway that records requests and replies with a fixed response."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []
        self._responder = responder
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture()
def gateway() -> RecordingGateway:
    return RecordingGateway(lambda request: httpx.Response(201, json={"success": True, "ingested": 1}))


@pytest.fixture()
def make_gateway() -> Callable[[Callable[[httpx.Request], httpx.Response]], RecordingGateway]:
    return RecordingGateway


@pytest.fixture()
def frozen_clock(monkeypatch) -> str:
    stamp = "2024-05-01T12:00:00.000Z"
    monkeypatch.setattr("log_gateway_client.client._utc_timestamp", lambda: stamp)
    return stamp
