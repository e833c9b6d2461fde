"""Group extracted endpoints by API root and lay out the report.

This is the pure core of apimatrix: :func:`build_report` takes the raw text
of an OpenAPI document and a formatter and returns a
:class:`~apimatrix.models.GroupedReport`; :func:`render_report` turns that
report into the ordered output lines. Neither function performs I/O, so a
report can be built any number of times from the same text.

Ordering rules:

* groups are sorted by key, ascending;
* within a group, lines are sorted by their rendered text, so ``DELETE``
  comes before ``GET`` before ``POST`` for the same path.

Paths matched by :func:`should_exclude_path` contribute nothing, not even
an empty group.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterator
from typing import Any, Callable, Optional

from apimatrix.formatters import Formatter
from apimatrix.models import GroupedReport
from apimatrix.parser.extractor import extract_path
from apimatrix.parser.loader import get_paths, get_title, parse_document

logger = logging.getLogger(__name__)

EXCLUDED_PATH_PREFIXES: tuple[str, ...] = ("test",)
"""Literal prefixes of paths left out of the report (no leading slash added)."""


def should_exclude_path(path: str) -> bool:
    """Return ``True`` if *path* starts with one of :data:`EXCLUDED_PATH_PREFIXES`."""
    return any(path.startswith(prefix) for prefix in EXCLUDED_PATH_PREFIXES)


def group_paths_by_root(
    paths: dict[str, Any],
    formatter: Formatter,
    exclude: Callable[[str], bool] = should_exclude_path,
) -> dict[str, list[str]]:
    """Render every non-excluded path and group the lines by API root.

    Args:
        paths: The ``paths`` object of an OpenAPI document.
        formatter: Formatter used for endpoint lines.
        exclude: Predicate selecting paths to leave out.

    Returns:
        A dict whose keys (group names) are in ascending order and whose
        values are the sorted endpoint lines of that group.

    Raises:
        MissingTagsError: If a path's first operation has no tags.
        SpecParseError: If a path item or operation has the wrong shape.
    """
    grouped: dict[str, list[str]] = defaultdict(list)
    for path, path_item in paths.items():
        extracted = extract_path(path, path_item, formatter, exclude)
        if extracted is None:
            logger.debug("Skipping path '%s'", path)
            continue
        group_key, lines = extracted
        grouped[group_key].extend(lines)

    return {key: sorted(grouped[key]) for key in sorted(grouped)}


def build_report(
    content: str,
    formatter: Formatter,
    exclude: Callable[[str], bool] = should_exclude_path,
) -> Optional[GroupedReport]:
    """Parse *content* as JSON and build the grouped report.

    Args:
        content: Raw JSON text of the OpenAPI document.
        formatter: Formatter used for endpoint lines.
        exclude: Predicate selecting paths to leave out.

    Returns:
        The :class:`GroupedReport`, or ``None`` when the document has no
        ``paths`` field at all.

    Raises:
        SpecParseError: If the text is not a well-formed document or a field
            has the wrong shape (including :class:`MissingTagsError`).
    """
    return build_report_from_document(
        parse_document(content, hint="json"), formatter, exclude
    )


def build_report_from_document(
    document: dict[str, Any],
    formatter: Formatter,
    exclude: Callable[[str], bool] = should_exclude_path,
) -> Optional[GroupedReport]:
    """Same as :func:`build_report` for an already-parsed document."""
    paths = get_paths(document)
    if paths is None:
        return None

    groups = group_paths_by_root(paths, formatter, exclude)
    report = GroupedReport(title=get_title(document), groups=groups)
    logger.debug(
        "Built report with %d groups and %d endpoints",
        len(report.groups),
        report.endpoint_count,
    )
    return report


def render_report(report: GroupedReport, formatter: Formatter) -> Iterator[str]:
    """Yield the report's output lines in order.

    The title line comes first when the document has a title, followed by
    each group's header and its endpoint lines.
    """
    if report.title is not None:
        yield formatter.format_title(report.title)
    for group_key, lines in report.groups.items():
        yield formatter.format_header(group_key)
        for line in lines:
            yield formatter.format_endpoint(line)
