"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ProjectKind(StrEnum):
    CHAIN = "chain"
    TREASURY = "treasury"
    FUND = "fund"
    GENERIC = "generic"


class IssueKind(StrEnum):
    """Classification of a single validation finding."""

    # static checks
    DATA_TYPE = "data_type"

    # sample fetch
    FETCH_ERROR = "fetch_error"

    # sample payload structure
    MISSING_PROJECT_KEY = "missing_project_key"
    EMPTY_DATA = "empty_data"
    INVALID_FORMAT = "invalid_format"
    INVALID_POINT = "invalid_point"
    MISSING_VALUE = "missing_value"
    INVALID_VALUE_TYPE = "invalid_value_type"
    INVALID_DATE_TYPE = "invalid_date_type"
    UNEXPECTED_FIELDS = "unexpected_fields"
    MALFORMED_PAYLOAD = "malformed_payload"
