"""Abstract base class for report formatters.

A formatter turns the pieces of a permissions report (the API title, a group
key, an endpoint row) into lines of one markup dialect. Every formatter
implements the same four operations, so the extractor and the report builder
never need to know which dialect is active.

Example:
    Minimal formatter implementation::

        class PlainFormatter(Formatter):
            name = "plain"

            def format_title(self, title):
                return title.upper()

            def format_header(self, header):
                return header

            def format_endpoint_detail(self, method, path, description, roles):
                return f"{method} {path} {description} {self.format_roles(roles)}"
"""

from __future__ import annotations

from abc import ABC, abstractmethod

ALL_ROLES = "All roles"
"""Marker rendered in place of the role list when an endpoint declares no security."""


class Formatter(ABC):
    """Base class for all output dialects.

    Subclasses set :attr:`name` (the key users pass on the command line) and
    implement :meth:`format_title`, :meth:`format_header`, and
    :meth:`format_endpoint_detail`. :meth:`format_endpoint` is a pass-through
    by default since detail lines are already rendered in the dialect.
    """

    name: str = ""

    @abstractmethod
    def format_title(self, title: str) -> str:
        """Return the report heading for the API called *title*."""
        ...

    @abstractmethod
    def format_header(self, header: str) -> str:
        """Return the heading line for the group *header*."""
        ...

    def format_endpoint(self, endpoint: str) -> str:
        """Return the already-rendered endpoint line for output."""
        return endpoint

    @abstractmethod
    def format_endpoint_detail(
        self,
        method: str,
        path: str,
        description: str,
        roles: list[str],
    ) -> str:
        """Render one endpoint row.

        Args:
            method: Uppercased HTTP method (``GET``, ``POST``...).
            path: The path template, e.g. ``/pet/{petId}``.
            description: Summary, operation id, or the fallback text.
            roles: Flattened role names; empty when the endpoint is open to
                every role.

        Returns:
            The rendered line.
        """
        ...

    @staticmethod
    def format_roles(roles: list[str]) -> str:
        """Join *roles* for display, or return :data:`ALL_ROLES` when empty."""
        return ", ".join(roles) if roles else ALL_ROLES
