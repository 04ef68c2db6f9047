"""Shared fixtures for the catalog client test suite."""

from __future__ import annotations

import pytest

from catalog_client.utils import env

_MANAGED_VARIABLES = (
    "DATAHUB_URL",
    "DATAHUB_TOKEN",
    "DATAHUB_TIMEOUT",
    "DATAHUB_RETRY_MAX",
    "DATAHUB_DEFAULT_LIMIT",
    "DATAHUB_MAX_LIMIT",
    "DATAHUB_MAX_LINEAGE_DEPTH",
    "LOG_LEVEL",
    "LOG_FILE",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Clear client variables and force ``.env`` to be re-read per test.
    """

    for name in _MANAGED_VARIABLES:
        # setenv first so the undo also removes values written by load_dotenv.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setattr(env, "_ENV_LOADED", False)
