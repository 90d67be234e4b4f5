"""AsyncBcraClient のテスト。"""

from __future__ import annotations

import asyncio
import json

import httpx

from bcrastat import AsyncBcraClient

_BASE_URL = "https://example.invalid/estadisticas/v4.0"


def test_async_process_basic() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        payload = {"fecha": "2024-01-01", "valor": 100}
        return httpx.Response(
            status_code=200,
            content=json.dumps(payload).encode("utf-8"),
            request=request,
        )

    async def run() -> None:
        transport = httpx.MockTransport(handler)
        http_client = httpx.AsyncClient(transport=transport, base_url=_BASE_URL)
        async with AsyncBcraClient(http_client=http_client, base_url=_BASE_URL) as client:
            records = await client.process([{"idVariable": 5}])
            assert len(records) == 1
            assert records[0].json["valor"] == 100
            assert records[0].json["idVariable"] == 5
            assert records[0].paired_item == {"item": 0}

    asyncio.run(run())


def test_async_process_continue_on_fail() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/monetarias/5"):
            raise httpx.ConnectError("unreachable", request=request)
        return httpx.Response(status_code=200, json={"results": [{"valor": 1}]}, request=request)

    async def run() -> None:
        transport = httpx.MockTransport(handler)
        http_client = httpx.AsyncClient(transport=transport, base_url=_BASE_URL)
        async with AsyncBcraClient(
            http_client=http_client,
            base_url=_BASE_URL,
            continue_on_fail=True,
        ) as client:
            records = await client.process([{"idVariable": 1}, {"idVariable": 5}])
            assert [r.item_index for r in records] == [0, 1]
            assert records[1].json == {"error": "unreachable"}

    asyncio.run(run())


def test_async_monetary_get() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params.get("offset") == "0"
        return httpx.Response(status_code=200, json={"results": []}, request=request)

    async def run() -> None:
        transport = httpx.MockTransport(handler)
        http_client = httpx.AsyncClient(transport=transport, base_url=_BASE_URL)
        async with AsyncBcraClient(http_client=http_client, base_url=_BASE_URL) as client:
            payload = await client.monetary.get(1)
            assert payload == {"results": []}

    asyncio.run(run())
