"""Remote metrics catalog configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_str, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

DEFAULT_CATALOG_BASE_URL = "https://api.blockworks.com/v1"
CATALOG_TIMEOUT_SECONDS = 30.0
API_KEY_HEADER = "x-api-key"


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Holds the catalog API credentials and client settings."""

    api_key: str
    resilience: ResilienceConfig


def get_catalog_config(*, resilience: ResilienceConfig | None = None) -> CatalogConfig:
    values = require_env_vars(("METRICSYNC_API_KEY",))
    api_key = values["METRICSYNC_API_KEY"]
    base_url = env_str("METRICSYNC_API_BASE_URL", DEFAULT_CATALOG_BASE_URL)

    return CatalogConfig(
        api_key=api_key,
        resilience=resilience
        or ResilienceConfig(
            name="catalog",
            base_url=base_url,
            timeout_seconds=env_float("METRICSYNC_API_TIMEOUT", CATALOG_TIMEOUT_SECONDS),
            ratelimit=RateLimit(max_calls=100, per_seconds=1.0),
            default_headers={API_KEY_HEADER: api_key, "Content-Type": "application/json"},
        ),
    )
