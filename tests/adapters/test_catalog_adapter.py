from __future__ import annotations

import asyncio
from collections.abc import Callable  # noqa: TC003
from datetime import date

import httpx
import pytest

from metricsync.adapters.catalog import (
    CatalogAPIError,
    CatalogClient,
    CatalogTransportError,
    MetricPayload,
)
from metricsync.adapters.http_resilience import ResilientClient
from metricsync.config import CatalogConfig, MissingConfigurationError, get_catalog_config
from metricsync.config.http_resilience import ResilienceConfig
from metricsync.domain.ports import CatalogFetchError, CatalogPage
from tests.helpers.catalog import raw_metric


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(async_handler))

    return factory


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> CatalogClient:
    resilience = ResilienceConfig(
        name="catalog-test",
        base_url="https://api.example.test/v1",
        default_headers={"x-api-key": "demo"},
    )
    return CatalogClient(
        config=CatalogConfig(api_key="demo", resilience=resilience),
        client_factory=_make_client_factory(handler),
    )


def test_fetch_page_sends_pagination_and_key() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/metrics"
        assert request.url.params["page"] == "2"
        assert request.url.params["limit"] == "500"
        assert request.headers["x-api-key"] == "demo"
        return httpx.Response(
            200,
            json={"data": [raw_metric("fees", extra="kept")], "total": 501, "page": 2},
        )

    async def run() -> CatalogPage:
        async with _client(handler) as client:
            return await client.fetch_page(page=2, limit=500)

    page = asyncio.run(run())

    assert page.total == 501
    assert page.page == 2
    assert page.data[0]["identifier"] == "fees"
    assert page.data[0]["extra"] == "kept"


def test_fetch_sample_data_passes_project_and_start_date() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/metrics/fees-usd"
        assert request.url.params["project"] == "ethereum"
        assert request.url.params["start_date"] == "2025-01-05"
        return httpx.Response(200, json={"ethereum": [{"date": "2025-01-05", "value": 1}]})

    async def run() -> object:
        async with _client(handler) as client:
            return await client.fetch_sample_data(
                identifier="fees-usd", project="ethereum", start_date=date(2025, 1, 5)
            )

    assert asyncio.run(run()) == {"ethereum": [{"date": "2025-01-05", "value": 1}]}


def test_error_status_raises_api_error_with_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            404,
            json={"status": 404, "error": "Not Found", "message": ["metric not found"]},
        )

    async def run() -> object:
        async with _client(handler) as client:
            return await client.fetch_endpoint("/metrics/missing")

    with pytest.raises(CatalogAPIError) as excinfo:
        asyncio.run(run())

    assert excinfo.value.status == 404
    assert "metric not found" in str(excinfo.value)
    assert isinstance(excinfo.value, CatalogFetchError)


def test_transport_failures_are_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def run() -> object:
        async with _client(handler) as client:
            return await client.fetch_endpoint("/market-stats", {"limit": "1"})

    with pytest.raises(CatalogTransportError, match="ConnectError"):
        asyncio.run(run())


def test_non_json_body_is_an_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    async def run() -> object:
        async with _client(handler) as client:
            return await client.fetch_endpoint("/assets/ethereum")

    with pytest.raises(CatalogAPIError, match="not valid JSON"):
        asyncio.run(run())


def test_requests_are_not_retried() -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        return httpx.Response(503, json={"error": "Service Unavailable"})

    async def run() -> object:
        async with _client(handler) as client:
            return await client.fetch_page(page=1, limit=10)

    with pytest.raises(CatalogAPIError):
        asyncio.run(run())

    assert len(calls) == 1


def test_client_must_be_entered() -> None:
    client = _client(lambda request: httpx.Response(200, json={}))

    with pytest.raises(RuntimeError, match="async context manager"):
        asyncio.run(client.fetch_endpoint("/market-stats"))


def test_invalid_listing_entry_is_skipped(caplog: pytest.LogCaptureFixture) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "data": [
                    raw_metric("fees"),
                    {"identifier": None, "project": "bitcoin"},
                    "not-a-metric",
                    raw_metric("txcount"),
                ],
                "total": 4,
                "page": 1,
            },
        )

    async def run() -> CatalogPage:
        async with _client(handler) as client:
            return await client.fetch_page(page=1, limit=500)

    page = asyncio.run(run())

    assert [item["identifier"] for item in page.data] == ["fees", "txcount"]
    assert page.total == 4
    assert "Skipping invalid metric 1 on page 1" in caplog.text
    assert "Skipping invalid metric 2 on page 1" in caplog.text


def test_metric_payload_fills_blank_fields() -> None:
    payload = MetricPayload.model_validate(
        {"identifier": "fees", "project": "bitcoin", "name": None}
    )

    assert payload.name == ""
    assert payload.parameters == {}


def test_default_client_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("METRICSYNC_API_KEY", raising=False)

    with pytest.raises(MissingConfigurationError):
        CatalogClient()


def test_default_client_uses_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("METRICSYNC_API_KEY", "env-key")

    client = CatalogClient()

    assert client.config == get_catalog_config()
