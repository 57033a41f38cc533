"""Shared test fixtures for apidox.

Provides reusable fixtures for building interactions, loading the recordings
fixture, isolating configuration from the real environment, managing output
state, and running CLI commands. These fixtures are automatically discovered
by pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from apidox.models import (
    DoxConfig,
    Interaction,
    InteractionDetails,
    RecordedRequest,
    RecordedResponse,
)
from apidox.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Interaction fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_interaction() -> Callable[..., Interaction]:
    """Factory for interactions with sensible defaults.

    Keyword arguments prefixed with ``request_`` / ``response_`` go to the
    corresponding half; everything else becomes an InteractionDetails field.
    """

    def _make(**kwargs: Any) -> Interaction:
        request: dict[str, Any] = {"method": "GET", "path": "/pokemons/1", "path_params": {"id": "1"}}
        response: dict[str, Any] = {"status": 200}
        details: dict[str, Any] = {"description": "Returns a Pokemon", "resource_name": "Pokemons"}
        for key, value in kwargs.items():
            if key.startswith("request_"):
                request[key[len("request_"):]] = value
            elif key.startswith("response_"):
                response[key[len("response_"):]] = value
            else:
                details[key] = value
        return Interaction(
            request=RecordedRequest(**request),
            response=RecordedResponse(**response),
            details=InteractionDetails(**details),
        )

    return _make


@pytest.fixture
def recordings_path() -> Path:
    """Path to the pokemons recordings fixture (includes one invalid verb)."""
    return FIXTURES_DIR / "pokemons.json"


@pytest.fixture
def config() -> DoxConfig:
    """Config whitelisting X-Auth-Token with schema folders set."""
    return DoxConfig(
        headers_whitelist=["X-Auth-Token"],
        schema_request_folder_path="/schemas/requests",
        schema_response_folder_path="/schemas/responses",
    )


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Clears all APIDOX_* environment variables and changes the working
    directory to tmp_path so no project config file is picked up.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    for var in [
        "APIDOX_CONFIG",
        "APIDOX_HEADERS_WHITELIST",
        "APIDOX_SCHEMA_REQUEST_FOLDER",
        "APIDOX_SCHEMA_RESPONSE_FOLDER",
        "APIDOX_DESC_FOLDER",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, plain OutputManager for tests that don't care about output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
