"""Extract report rows from the path items of an OpenAPI document.

For each path the extractor decides which group (API root) it belongs to,
reads every operation declared on it, and renders one line per operation
through the active :class:`~apimatrix.formatters.Formatter`.

The public entry points are :func:`extract_path` for one path item and
:func:`extract_roles` / :func:`describe_operation` for the per-operation
rules. Operation objects are validated through
:class:`~apimatrix.models.OperationDetails`, so a field of the wrong shape
surfaces as :class:`~apimatrix.exceptions.SpecParseError` instead of a
``TypeError`` deep inside the report.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from pydantic import ValidationError

from apimatrix.exceptions import MissingTagsError, SpecParseError
from apimatrix.formatters import Formatter
from apimatrix.models import HTTPMethod, OperationDetails

NO_DESCRIPTION = "No description"
"""Fallback description when an operation has neither summary nor operationId."""

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)


def extract_path(
    path: str,
    path_item: Any,
    formatter: Formatter,
    exclude: Callable[[str], bool],
) -> Optional[tuple[str, list[str]]]:
    """Render every operation of one path item.

    The group key is the first tag of the first operation in document
    order; it is read before *exclude* is consulted, so an untagged path
    fails even when it would have been excluded.

    Args:
        path: The path template (key under ``paths``).
        path_item: The OpenAPI *Path Item Object* for *path*.
        formatter: Formatter used to render each endpoint line.
        exclude: Predicate returning ``True`` for paths to leave out.

    Returns:
        ``(group_key, lines)`` with one line per operation, or ``None`` when
        the path is excluded or declares no operations.

    Raises:
        MissingTagsError: If the first operation has no tags.
        SpecParseError: If the path item or an operation has the wrong shape.
    """
    operations = _operations(path, path_item)
    if not operations:
        return None

    _, first_operation = operations[0]
    if not first_operation.tags:
        raise MissingTagsError(path)
    group_key = first_operation.tags[0]

    if exclude(path):
        return None

    lines = []
    for method, operation in operations:
        lines.append(
            formatter.format_endpoint_detail(
                method.upper(),
                path,
                describe_operation(operation),
                extract_roles(operation),
            )
        )
    return group_key, lines


def describe_operation(operation: OperationDetails) -> str:
    """Return the summary, else the operationId, else :data:`NO_DESCRIPTION`."""
    if operation.summary is not None:
        return operation.summary
    if operation.operation_id is not None:
        return operation.operation_id
    return NO_DESCRIPTION


def extract_roles(operation: OperationDetails) -> list[str]:
    """Flatten the roles of every scheme in every security requirement.

    Document order is kept and duplicates are not removed. An operation
    without ``security`` yields an empty list.
    """
    roles: list[str] = []
    for requirement in operation.security or []:
        for scheme_roles in requirement.values():
            roles.extend(scheme_roles)
    return roles


def _operations(path: str, path_item: Any) -> list[tuple[str, OperationDetails]]:
    """Validate and return the ``(method, operation)`` pairs of a path item."""
    if not isinstance(path_item, dict):
        raise SpecParseError(
            f"Path item '{path}' must be an object (got {type(path_item).__name__})"
        )

    operations: list[tuple[str, OperationDetails]] = []
    for key, raw_operation in path_item.items():
        if key.lower() not in _HTTP_METHODS:
            continue
        if not isinstance(raw_operation, dict):
            raise SpecParseError(
                f"Operation {key.upper()} {path} must be an object "
                f"(got {type(raw_operation).__name__})"
            )
        try:
            operations.append((key, OperationDetails.model_validate(raw_operation)))
        except ValidationError as exc:
            raise SpecParseError(
                f"Invalid operation {key.upper()} {path}: {exc}"
            ) from exc
    return operations
