"""Tests for the output system.

Covers:
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet mode suppression rules
- Verbose mode debug output
- Output file redirection
- Global instance management
- Convenience functions
"""

from __future__ import annotations

import pytest

from apimatrix import output as output_module
from apimatrix.output import (
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture(autouse=True)
def _reset_global_output():
    """Ensure the global output instance is reset between tests."""
    reset_output()
    yield
    reset_output()


# ------------------------------------------------------------------ #
# NO_COLOR / TERM=dumb detection
# ------------------------------------------------------------------ #


class TestColorDisabling:
    """Test that NO_COLOR and TERM=dumb are respected."""

    def test_no_color_env_disables_color(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_color_enabled_by_default(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# Data output
# ------------------------------------------------------------------ #


class TestDataOutput:
    """Report lines go to stdout verbatim."""

    def test_print_lines_to_stdout(self, capsys):
        mgr = OutputManager(no_color=True)
        mgr.print_lines(["=== pet ===", "  - '''GET''' /pet : List (Roles: All roles)"])
        captured = capsys.readouterr()
        assert captured.out == "=== pet ===\n  - '''GET''' /pet : List (Roles: All roles)\n"
        assert captured.err == ""

    def test_markup_like_text_is_not_interpreted(self, capsys):
        mgr = OutputManager()
        mgr.print_lines(["[bold]not markup[/bold]"])
        assert capsys.readouterr().out == "[bold]not markup[/bold]\n"

    def test_print_lines_to_file_truncates(self, tmp_path, capsys):
        target = tmp_path / "matrix.md"
        target.write_text("stale content\n", encoding="utf-8")
        mgr = OutputManager(no_color=True, output_file=str(target))
        mgr.print_lines(["# Title", "## pet"])
        assert target.read_text(encoding="utf-8") == "# Title\n## pet\n"
        assert capsys.readouterr().out == ""


# ------------------------------------------------------------------ #
# Diagnostics
# ------------------------------------------------------------------ #


class TestDiagnostics:
    """Diagnostics go to stderr and honour quiet/verbose."""

    def test_info_to_stderr(self, capsys):
        OutputManager(no_color=True).info("Fetching spec")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Fetching spec" in captured.err

    def test_quiet_suppresses_info_and_success(self, capsys):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.info("hidden")
        mgr.success("hidden too")
        assert capsys.readouterr().err == ""

    def test_quiet_does_not_suppress_errors(self, capsys):
        OutputManager(no_color=True, quiet=True).error("broken")
        assert "Error: broken" in capsys.readouterr().err

    def test_debug_hidden_without_verbose(self, capsys):
        OutputManager(no_color=True).debug("details")
        assert capsys.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capsys):
        OutputManager(no_color=True, verbose=True).debug("details")
        assert "[debug] details" in capsys.readouterr().err


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self):
        assert isinstance(get_output(), OutputManager)

    def test_get_output_is_cached(self):
        assert get_output() is get_output()

    def test_set_output_installs_instance(self):
        mgr = OutputManager(quiet=True)
        set_output(mgr)
        assert get_output() is mgr

    def test_reset_output_clears_instance(self):
        mgr = OutputManager()
        set_output(mgr)
        reset_output()
        assert get_output() is not mgr

    def test_convenience_functions_delegate(self, capsys):
        set_output(OutputManager(no_color=True))
        output_module.print_lines(["line"])
        output_module.error("failed")
        captured = capsys.readouterr()
        assert captured.out == "line\n"
        assert "Error: failed" in captured.err
