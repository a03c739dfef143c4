"""Shared test fixtures for specdocs.

Provides reusable spec fixtures, isolated config environments, output state
management and a CLI runner. These fixtures are automatically discovered by
pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from specdocs.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Spec fixtures (plain dicts)
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_raw() -> dict[str, Any]:
    """Pet Store sample: four declared tags, both auth schemes, an undeclared tag."""
    with open(FIXTURES_DIR / "petstore.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def empty_spec() -> dict[str, Any]:
    return {}


@pytest.fixture
def minimal_spec() -> dict[str, Any]:
    """One untagged operation, no servers, no security schemes."""
    return {
        "openapi": "3.0.3",
        "info": {"title": "Minimal API", "version": "0.1.0"},
        "paths": {
            "/ping": {
                "get": {
                    "summary": "Ping",
                    "responses": {"200": {"description": "Pong"}},
                }
            }
        },
    }


@pytest.fixture
def no_auth_spec() -> dict[str, Any]:
    return {
        "openapi": "3.0.3",
        "info": {"title": "Public API", "version": "1.0.0", "description": "Fully public API"},
        "servers": [{"url": "https://public.api.io"}],
        "tags": [{"name": "Data"}],
        "paths": {
            "/data": {
                "get": {
                    "tags": ["Data"],
                    "summary": "Get data",
                    "responses": {
                        "200": {
                            "content": {
                                "application/json": {
                                    "schema": {"type": "array", "items": {"type": "string"}}
                                }
                            }
                        }
                    },
                }
            }
        },
    }


@pytest.fixture
def ref_spec() -> dict[str, Any]:
    """Operations referencing component schemas, including a self-cycle."""
    return {
        "openapi": "3.0.3",
        "info": {"title": "Ref API", "version": "2.0.0"},
        "servers": [{"url": "https://ref.example.com"}],
        "tags": [{"name": "Pets", "description": "Pets"}],
        "components": {
            "schemas": {
                "Pet": {
                    "type": "object",
                    "required": ["id"],
                    "properties": {
                        "id": {"type": "string"},
                        "parent": {"$ref": "#/components/schemas/Pet"},
                    },
                },
                "PetList": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}},
            }
        },
        "paths": {
            "/pets": {
                "get": {
                    "tags": ["Pets"],
                    "summary": "List pets",
                    "responses": {
                        "200": {
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/PetList"}
                                }
                            }
                        }
                    },
                }
            }
        },
    }


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path so
    that tests never touch real user config. Clears all SPECDOCS_*
    environment variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("specdocs.config._is_xdg_platform", lambda: True)

    for var in [
        "SPECDOCS_BASE_URL",
        "SPECDOCS_TITLE",
        "SPECDOCS_OUTPUT_DIR",
        "SPECDOCS_FORMAT",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a plain, colourless, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
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
