"""HTTP client for the metrics catalog API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from metricsync.adapters.http_resilience import ResilientClient
from metricsync.config.catalog import CatalogConfig, get_catalog_config
from metricsync.domain.ports.fetching import CatalogFetchError, CatalogPage, CatalogSource

from .schema import ErrorResponse, MetricPayload, MetricsPage

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from datetime import date
    from types import TracebackType

    from metricsync.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

METRICS_PATH = "/metrics"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class CatalogAPIError(CatalogFetchError):
    """Raised when the catalog answers with an error status or an unusable payload."""

    def __init__(self, message: str, *, status: int | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.url = url


class CatalogTransportError(CatalogFetchError):
    """Raised when a request never produced a response."""


@dataclass(slots=True)
class CatalogClient:
    """Catalog source backed by one shared HTTP client.

    Use as an async context manager; the underlying client is opened on enter
    and closed on exit.
    """

    config: CatalogConfig = field(default_factory=get_catalog_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> CatalogClient:
        self._client = self.client_factory(self.config.resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_page(self, *, page: int, limit: int) -> CatalogPage:
        payload = await self._get_json(METRICS_PATH, {"page": str(page), "limit": str(limit)})
        try:
            parsed = MetricsPage.model_validate(payload)
        except ValidationError as exc:
            raise CatalogAPIError(f"Unexpected metrics page payload: {exc}") from exc
        return CatalogPage(
            data=_valid_metrics(parsed.data, page),
            total=parsed.total,
            page=parsed.page,
        )

    async def fetch_sample_data(
        self, *, identifier: str, project: str, start_date: date
    ) -> object:
        return await self._get_json(
            f"{METRICS_PATH}/{identifier}",
            {"project": project, "start_date": start_date.isoformat()},
        )

    async def fetch_endpoint(self, path: str, params: Mapping[str, str] | None = None) -> object:
        return await self._get_json(path, params)

    async def _get_json(self, path: str, params: Mapping[str, str] | None) -> object:
        client = self._require_client()
        try:
            response = await client.get(path, params=dict(params) if params else None)
        except httpx.HTTPError as exc:
            raise CatalogTransportError(f"{type(exc).__name__}: {exc}") from exc

        if response.is_error:
            raise _api_error(response)

        try:
            return response.json()
        except ValueError as exc:
            raise CatalogAPIError(
                f"Response from {path} is not valid JSON",
                status=response.status_code,
                url=str(response.request.url),
            ) from exc

    def _require_client(self) -> ResilientClient:
        if self._client is None:
            raise RuntimeError("CatalogClient must be used as an async context manager")
        return self._client


def _api_error(response: httpx.Response) -> CatalogAPIError:
    message = response.reason_phrase or "Unknown error"
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        try:
            message = ErrorResponse.model_validate(payload).text
        except ValidationError:
            pass
    url = str(response.request.url)
    log.error(f"Catalog API error {response.status_code} for {url}: {message}")
    return CatalogAPIError(
        f"API error {response.status_code}: {message}",
        status=response.status_code,
        url=url,
    )


if TYPE_CHECKING:
    _source_check: CatalogSource = CatalogClient()


def _valid_metrics(items: list[object], page: int) -> list[dict[str, object]]:
    metrics: list[dict[str, object]] = []
    for position, item in enumerate(items):
        try:
            metrics.append(MetricPayload.model_validate(item).model_dump())
        except ValidationError as exc:
            log.warning(
                "Skipping invalid metric %s on page %s: %s",
                position,
                page,
                exc.errors(include_url=False),
            )
    return metrics
