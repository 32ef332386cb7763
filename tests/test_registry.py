from __future__ import annotations

import httpx
import pytest

from log_gateway_client import (
    LogGatewayClient,
    NotConfiguredError,
    configure,
    create_client,
    get_client,
    log,
    reset,
)


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["info", "warning", "error", "debug"])
async def test_log_functions_require_configure(method: str) -> None:
    with pytest.raises(NotConfiguredError, match="configure"):
        await getattr(log, method)({"msg": "too early"})


@pytest.mark.asyncio
async def test_log_batch_requires_configure() -> None:
    with pytest.raises(NotConfiguredError):
        await log.batch([{"level": "info", "msg": "too early"}])


def test_get_client_requires_configure() -> None:
    with pytest.raises(NotConfiguredError):
        get_client()


@pytest.mark.asyncio
async def test_configure_registers_and_forwards(gateway, frozen_clock) -> None:
    client = configure("http://gateway.local/", "orders", "tok", transport=gateway.transport)

    assert isinstance(client, LogGatewayClient)
    assert get_client() is client

    result = await log.warning({"msg": "low stock", "sku": "A-1"})

    assert result == {"success": True, "ingested": 1}
    assert str(gateway.requests[0].url) == "http://gateway.local/logs"
    assert gateway.body() == {"level": "warn", "timestamp": frozen_clock, "msg": "low stock", "sku": "A-1"}


@pytest.mark.asyncio
async def test_log_batch_forwards(gateway) -> None:
    configure("http://gateway.local", "orders", transport=gateway.transport)

    await log.batch([{"level": "info", "msg": "a"}, {"level": "error", "msg": "b"}])

    assert len(gateway.requests) == 1
    body = gateway.body()
    assert [entry["msg"] for entry in body] == ["a", "b"]
    assert all("timestamp" in entry for entry in body)


@pytest.mark.asyncio
async def test_reconfigure_replaces_previous_client(make_gateway) -> None:
    first = make_gateway(lambda request: httpx.Response(200, json={"success": True, "ingested": 1}))
    second = make_gateway(lambda request: httpx.Response(200, json={"success": True, "ingested": 1}))

    configure("http://one.local", "app-one", transport=first.transport)
    latest = configure("http://two.local", "app-two", transport=second.transport)
    await log.info({"msg": "hi"})

    assert get_client() is latest
    assert first.requests == []
    assert second.requests[0].headers["X-App-Id"] == "app-two"


def test_reset_clears_slot() -> None:
    configure("http://gateway.local", "orders")
    reset()
    with pytest.raises(NotConfiguredError):
        get_client()


@pytest.mark.asyncio
async def test_create_client_does_not_touch_global_state(gateway) -> None:
    billing = create_client("http://gateway.local", "billing", transport=gateway.transport)
    search = create_client("http://gateway.local", "search", transport=gateway.transport)

    await billing.info({"msg": "charged"})
    await search.info({"msg": "indexed"})

    assert [r.headers["X-App-Id"] for r in gateway.requests] == ["billing", "search"]
    with pytest.raises(NotConfiguredError):
        await log.info({"msg": "still unconfigured"})
