"""Shared test fixtures for apimatrix.

Provides reusable fixtures for loading spec fixtures, picking formatters,
managing output state, and running the CLI. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from apimatrix.formatters import MarkdownFormatter, WikiFormatter
from apimatrix.output import OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stderr at creation time.
    When Typer's CliRunner redirects the streams during a test, the cached
    references become stale once the test finishes. Resetting forces a
    fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_text() -> str:
    """Raw text of the small petstore spec (pet, store, and an excluded test path)."""
    return (FIXTURES_DIR / "petstore.json").read_text(encoding="utf-8")


@pytest.fixture
def petstore_raw(petstore_text: str) -> dict[str, Any]:
    """Parsed small petstore spec."""
    return json.loads(petstore_text)


@pytest.fixture
def petstore_full_text() -> str:
    """Raw text of the multi-method, multi-scheme petstore spec."""
    return (FIXTURES_DIR / "petstore_full.json").read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Formatter fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def wiki() -> WikiFormatter:
    return WikiFormatter()


@pytest.fixture
def markdown() -> MarkdownFormatter:
    return MarkdownFormatter()


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, colourless OutputManager for tests that don't care about diagnostics."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner.

    Returns a CliRunner instance that captures stdout/stderr and
    provides a consistent interface for invoking Typer apps in tests.
    """
    from typer.testing import CliRunner

    return CliRunner()
