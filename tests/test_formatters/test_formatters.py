"""Tests for the output dialects and the formatter registry."""

from __future__ import annotations

import pytest

from apimatrix.exceptions import InvalidUsageError, UnsupportedFormatError
from apimatrix.exit_codes import EXIT_INVALID_USAGE
from apimatrix.formatters import (
    ALL_ROLES,
    FORMATTERS,
    Formatter,
    MarkdownFormatter,
    WikiFormatter,
    available_formats,
    get_formatter,
)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestGetFormatter:
    """Test name -> formatter lookup."""

    def test_wiki(self) -> None:
        assert isinstance(get_formatter("wiki"), WikiFormatter)

    def test_markdown(self) -> None:
        assert isinstance(get_formatter("markdown"), MarkdownFormatter)

    @pytest.mark.parametrize("name", ["WIKI", "Wiki", "MarkDown", "MARKDOWN"])
    def test_case_insensitive(self, name: str) -> None:
        assert get_formatter(name).name == name.lower()

    def test_returns_new_instance(self) -> None:
        assert get_formatter("wiki") is not get_formatter("wiki")

    def test_unknown_format_raises(self) -> None:
        with pytest.raises(UnsupportedFormatError, match="'xml'") as exc_info:
            get_formatter("xml")
        assert exc_info.value.format_name == "xml"
        assert exc_info.value.exit_code == EXIT_INVALID_USAGE

    def test_unknown_format_lists_supported(self) -> None:
        with pytest.raises(UnsupportedFormatError, match="markdown, wiki"):
            get_formatter("html")

    def test_unsupported_format_is_usage_error(self) -> None:
        assert issubclass(UnsupportedFormatError, InvalidUsageError)

    def test_available_formats(self) -> None:
        assert available_formats() == ["markdown", "wiki"]

    def test_registry_keys_match_names(self) -> None:
        for name, formatter_cls in FORMATTERS.items():
            assert formatter_cls.name == name


# ---------------------------------------------------------------------------
# Wiki
# ---------------------------------------------------------------------------


class TestWikiFormatter:
    def test_title(self, wiki) -> None:
        assert wiki.format_title("Petstore") == "== Permissions matrix Petstore =="

    def test_header(self, wiki) -> None:
        assert wiki.format_header("pet") == "=== pet ==="

    def test_endpoint_passthrough(self, wiki) -> None:
        line = "  - '''GET''' /pet : List (Roles: admin)"
        assert wiki.format_endpoint(line) == line

    def test_detail_with_roles(self, wiki) -> None:
        line = wiki.format_endpoint_detail("POST", "/store/order", "Place order", ["admin", "user"])
        assert line == "  - '''POST''' /store/order : Place order (Roles: admin, user)"

    def test_detail_without_roles(self, wiki) -> None:
        line = wiki.format_endpoint_detail("GET", "/pet", "List", [])
        assert line.endswith(f"(Roles: {ALL_ROLES})")
        assert "Roles: )" not in line


# ---------------------------------------------------------------------------
# Markdown
# ---------------------------------------------------------------------------


class TestMarkdownFormatter:
    def test_title(self, markdown) -> None:
        assert markdown.format_title("Petstore") == "# Permissions matrix Petstore"

    def test_header(self, markdown) -> None:
        assert markdown.format_header("store") == "## store"

    def test_endpoint_passthrough(self, markdown) -> None:
        assert markdown.format_endpoint("- **GET** /pet") == "- **GET** /pet"

    def test_detail_with_roles(self, markdown) -> None:
        line = markdown.format_endpoint_detail("DELETE", "/pet/{petId}", "deletePet", ["admin"])
        assert line == "- **DELETE** /pet/{petId} : deletePet (Roles: admin)"

    def test_detail_without_roles(self, markdown) -> None:
        line = markdown.format_endpoint_detail("GET", "/pet", "List", [])
        assert line == f"- **GET** /pet : List (Roles: {ALL_ROLES})"


class TestDialectsDiffer:
    """Both dialects keep the same structure with different glyphs."""

    @pytest.mark.parametrize("formatter_cls", [WikiFormatter, MarkdownFormatter])
    def test_roles_annotation_is_trailing(self, formatter_cls: type[Formatter]) -> None:
        line = formatter_cls().format_endpoint_detail("GET", "/a", "d", ["r"])
        assert line.endswith("(Roles: r)")

    def test_heading_levels_nest(self, wiki, markdown) -> None:
        assert wiki.format_title("T").count("=") < wiki.format_header("h").count("=")
        assert markdown.format_title("T").startswith("# ")
        assert markdown.format_header("h").startswith("## ")


class TestCustomFormatter:
    """A new dialect only needs to subclass Formatter."""

    def test_subclass_works_with_extractor(self) -> None:
        from apimatrix.parser.extractor import extract_path

        class PlainFormatter(Formatter):
            name = "plain"

            def format_title(self, title: str) -> str:
                return title

            def format_header(self, header: str) -> str:
                return header

            def format_endpoint_detail(self, method, path, description, roles):
                return f"{method} {path} {self.format_roles(roles)}"

        _, lines = extract_path(
            "/pet", {"get": {"tags": ["pet"]}}, PlainFormatter(), lambda path: False
        )
        assert lines == [f"GET /pet {ALL_ROLES}"]

    def test_abstract_methods_required(self) -> None:
        class Incomplete(Formatter):
            name = "incomplete"

        with pytest.raises(TypeError):
            Incomplete()
