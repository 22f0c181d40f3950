from __future__ import annotations

import asyncio
import logging

import httpx
import pytest

from metricsync.adapters.http_resilience import ResilientClient
from metricsync.config.http_resilience import RateLimit, ResilienceConfig


def test_client_applies_base_url_headers_and_hooks() -> None:
    seen: list[int] = []

    async def record(response: httpx.Response) -> None:
        seen.append(response.status_code)

    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == "https://api.example.test/v1/market-stats?limit=1"
        assert request.headers["x-api-key"] == "k"
        return httpx.Response(200, json={"data": []})

    config = ResilienceConfig(
        name="test",
        base_url="https://api.example.test/v1",
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        response_hooks=(record,),
        default_headers={"x-api-key": "k"},
    )

    async def run() -> httpx.Response:
        async with ResilientClient(config, transport=httpx.MockTransport(handler)) as client:
            return await client.get("/market-stats", params={"limit": "1"})

    response = asyncio.run(run())

    assert response.json() == {"data": []}
    assert seen == [200]


def test_client_without_rate_limit(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="metricsync.adapters.http_resilience")
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.method)
        return httpx.Response(204)

    async def run() -> None:
        async with ResilientClient(
            ResilienceConfig(name="plain"), transport=httpx.MockTransport(handler)
        ) as client:
            await client.request("GET", "https://example.test/ping")
            await client.get("https://example.test/ping")

    asyncio.run(run())

    assert calls == ["GET", "GET"]
    assert "[plain] GET https://example.test/ping" in caplog.text
