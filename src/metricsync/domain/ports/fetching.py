"""Ports for reading the remote metrics catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import date


class CatalogFetchError(RuntimeError):
    """Raised by catalog sources when a request fails (transport, HTTP status, payload)."""


@dataclass(slots=True)
class CatalogPage:
    """One page of the paginated metrics listing, as plain JSON objects."""

    data: list[dict[str, object]] = field(default_factory=list[dict[str, object]])
    total: int = 0
    page: int = 1


@runtime_checkable
class CatalogSource(Protocol):
    """Async access to the catalog API."""

    async def fetch_page(self, *, page: int, limit: int) -> CatalogPage: ...

    async def fetch_sample_data(
        self, *, identifier: str, project: str, start_date: date
    ) -> object: ...

    async def fetch_endpoint(
        self, path: str, params: Mapping[str, str] | None = None
    ) -> object: ...


__all__ = ["CatalogFetchError", "CatalogPage", "CatalogSource"]
