"""Output dialects for the permissions report.

Each dialect is a :class:`~apimatrix.formatters.base.Formatter` subclass
registered in :data:`FORMATTERS` under the name users pass on the command
line. Adding a dialect means adding a subclass and a registry entry; the
extractor and the report builder are untouched.

Typical usage::

    from apimatrix.formatters import get_formatter

    formatter = get_formatter("markdown")
    formatter.format_header("pet")   # "## pet"
"""

from __future__ import annotations

from apimatrix.exceptions import UnsupportedFormatError
from apimatrix.formatters.base import ALL_ROLES, Formatter
from apimatrix.formatters.markdown import MarkdownFormatter
from apimatrix.formatters.wiki import WikiFormatter

DEFAULT_FORMAT = "wiki"

FORMATTERS: dict[str, type[Formatter]] = {
    WikiFormatter.name: WikiFormatter,
    MarkdownFormatter.name: MarkdownFormatter,
}


def available_formats() -> list[str]:
    """Return the registered format names in sorted order."""
    return sorted(FORMATTERS)


def get_formatter(name: str) -> Formatter:
    """Instantiate the formatter registered under *name* (case-insensitive).

    Args:
        name: Format name such as ``"wiki"`` or ``"Markdown"``.

    Returns:
        A new :class:`Formatter` instance.

    Raises:
        UnsupportedFormatError: If no formatter is registered under *name*.
    """
    formatter_cls = FORMATTERS.get(name.lower())
    if formatter_cls is None:
        raise UnsupportedFormatError(name, available_formats())
    return formatter_cls()


__all__ = [
    "ALL_ROLES",
    "DEFAULT_FORMAT",
    "FORMATTERS",
    "Formatter",
    "MarkdownFormatter",
    "WikiFormatter",
    "available_formats",
    "get_formatter",
]
