"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid or unusable."""


class MissingConfigurationError(ConfigurationError):
    """Raised when a required credential or setting is absent or blank."""
