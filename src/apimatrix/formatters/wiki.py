"""MediaWiki-style markup: ``=`` headings and ``'''bold'''`` methods."""

from __future__ import annotations

from apimatrix.formatters.base import Formatter


class WikiFormatter(Formatter):
    """Render the report as wiki markup."""

    name = "wiki"

    def format_title(self, title: str) -> str:
        return f"== Permissions matrix {title} =="

    def format_header(self, header: str) -> str:
        return f"=== {header} ==="

    def format_endpoint_detail(
        self,
        method: str,
        path: str,
        description: str,
        roles: list[str],
    ) -> str:
        return (
            f"  - '''{method}''' {path} : {description} "
            f"(Roles: {self.format_roles(roles)})"
        )
