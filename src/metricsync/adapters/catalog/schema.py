"""Pydantic models describing the catalog API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class MetricPayload(CatalogBaseModel):
    """One catalog entry. Unknown fields are kept so the comparison snapshot sees them."""

    identifier: str
    project: str
    name: str = ""
    description: str = ""
    data_type: str = ""
    source: str = ""
    interval: str = ""
    aggregation: str = ""
    category: str = ""
    updated_at: int | float | str | None = None
    parameters: dict[str, object] = Field(default_factory=dict[str, object])

    @field_validator(
        "name",
        "description",
        "data_type",
        "source",
        "interval",
        "aggregation",
        "category",
        mode="before",
    )
    @classmethod
    def _none_to_blank(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("parameters", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return {} if value is None else value


class MetricsPage(CatalogBaseModel):
    """Listing envelope; entries are validated one by one as ``MetricPayload``."""

    data: list[object] = Field(default_factory=list[object])
    total: int = 0
    page: int = 1


class ErrorResponse(CatalogBaseModel):
    status: int | None = None
    error: str | None = None
    message: list[str] | str | None = None

    @property
    def text(self) -> str:
        if isinstance(self.message, list):
            joined = "; ".join(self.message)
            if joined:
                return joined
        elif self.message:
            return self.message
        return self.error or "Unknown error"
