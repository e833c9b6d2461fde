"""Canonical Pydantic models shared across all apimatrix modules.

The models fall into two groups:

**Configuration models** -- resolved from CLI flags and environment:
    :class:`FetchConfig`.

**Parser output models** -- produced while walking an OpenAPI document and
consumed by the formatters and the report builder:
    :class:`HTTPMethod`, :class:`OperationDetails`, and :class:`GroupedReport`.

All models use Pydantic v2. :class:`OperationDetails` ignores every
Operation Object key it does not need (parameters, responses, ...) so that
only the fields the report relies on are shape-checked.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Fetch Config ---


class FetchConfig(BaseModel):
    """HTTP settings applied when retrieving a spec from a URL."""

    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    max_retries: int = Field(default=1, description="Retries on network errors and 5xx")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


# --- Parser Output Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised as operations inside an OpenAPI path item.

    Any other path-item key (``parameters``, ``summary``, ``servers``,
    ``$ref``) is not an operation and is skipped by the extractor.
    """

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class OperationDetails(BaseModel):
    """The subset of an OpenAPI *Operation Object* needed for the report.

    ``security`` mirrors the Security Requirement Object list: each entry
    maps a scheme name to the roles (or scopes) it requires.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    tags: list[str] = Field(default_factory=list)
    summary: Optional[str] = None
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    security: Optional[list[dict[str, list[str]]]] = None


class GroupedReport(BaseModel):
    """Rendered endpoint lines grouped by API root (first tag).

    ``groups`` is built with its keys in ascending order and each list of
    lines sorted ascending, so iterating it yields the report order.
    """

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    groups: dict[str, list[str]] = Field(default_factory=dict)

    @property
    def endpoint_count(self) -> int:
        """Total number of endpoint lines across every group."""
        return sum(len(lines) for lines in self.groups.values())
