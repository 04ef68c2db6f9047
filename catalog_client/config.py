"""
Client configuration for the catalog API.

Values come from keyword arguments or, via :meth:`ClientConfig.from_env`,
from ``DATAHUB_*`` environment variables (optionally seeded by ``.env``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from catalog_client.errors import ConfigurationError
from catalog_client.utils.env import load_dotenv, read_int

DEFAULT_TIMEOUT_SECONDS = 30
"""Per-request timeout applied to every network exchange."""

DEFAULT_RETRY_MAX = 3
"""Retries after the first attempt for retryable failures."""

DEFAULT_LIMIT = 10
"""Search page size when the caller does not pass one."""

DEFAULT_MAX_LIMIT = 100
"""Upper bound for any search page size."""

DEFAULT_MAX_LINEAGE_DEPTH = 5
"""Upper bound for lineage traversal depth."""

ENV_URL = "DATAHUB_URL"
ENV_TOKEN = "DATAHUB_TOKEN"
ENV_TIMEOUT = "DATAHUB_TIMEOUT"
ENV_RETRY_MAX = "DATAHUB_RETRY_MAX"
ENV_DEFAULT_LIMIT = "DATAHUB_DEFAULT_LIMIT"
ENV_MAX_LIMIT = "DATAHUB_MAX_LIMIT"
ENV_MAX_LINEAGE_DEPTH = "DATAHUB_MAX_LINEAGE_DEPTH"


@dataclass(frozen=True)
class ClientConfig:
    """Connection and limit settings for :class:`CatalogClient`."""

    url: str
    token: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    retry_max: int = DEFAULT_RETRY_MAX
    default_limit: int = DEFAULT_LIMIT
    max_limit: int = DEFAULT_MAX_LIMIT
    max_lineage_depth: int = DEFAULT_MAX_LINEAGE_DEPTH

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a configuration from ``DATAHUB_*`` environment variables."""
        load_dotenv()
        try:
            return cls(
                url=os.environ.get(ENV_URL, "").strip(),
                token=os.environ.get(ENV_TOKEN, "").strip(),
                timeout=read_int(ENV_TIMEOUT, DEFAULT_TIMEOUT_SECONDS),
                retry_max=read_int(ENV_RETRY_MAX, DEFAULT_RETRY_MAX),
                default_limit=read_int(ENV_DEFAULT_LIMIT, DEFAULT_LIMIT),
                max_limit=read_int(ENV_MAX_LIMIT, DEFAULT_MAX_LIMIT),
                max_lineage_depth=read_int(
                    ENV_MAX_LINEAGE_DEPTH, DEFAULT_MAX_LINEAGE_DEPTH
                ),
            )
        except ValueError as error:
            raise ConfigurationError(str(error)) from error

    def validate(self) -> None:
        if not self.url:
            raise ConfigurationError(f"{ENV_URL} is required")
        if not self.token:
            raise ConfigurationError(f"{ENV_TOKEN} is required")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if self.retry_max < 0:
            raise ConfigurationError("retry_max cannot be negative")
        if self.default_limit < 1 or self.max_limit < 1:
            raise ConfigurationError("search limits must be at least 1")
        if self.max_lineage_depth < 1:
            raise ConfigurationError("max_lineage_depth must be at least 1")
