"""apimatrix -- Print the permissions matrix of an OpenAPI/Swagger spec.

This package fetches an OpenAPI document, groups its endpoints by their
first tag (the API "root"), and renders a report listing each endpoint's
method, path, short description, and the security roles it requires, in
wiki markup or Markdown.

Typical usage::

    apimatrix https://petstore3.swagger.io/api/v3/openapi.json
    apimatrix ./openapi.json markdown -o matrix.md

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    config: Fetch settings resolution and XDG data directory.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr output system with Rich support.
    report: Grouping, ordering, and layout of the report.
"""

__version__ = "0.1.0"
