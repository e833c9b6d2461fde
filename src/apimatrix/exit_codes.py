"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~apimatrix.exceptions.ApiMatrixError` subclass.
Shell wrappers can inspect the exit code to tell a bad URL from a bad
document without parsing stderr.

Example::

    $ apimatrix https://example.com/openapi.json xml
    $ echo $?
    2   # EXIT_INVALID_USAGE -- unsupported output format
"""

EXIT_SUCCESS = 0
"""The report was produced (or the document declares no API)."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an unknown output format."""

EXIT_CONNECTION_ERROR = 6
"""The OpenAPI document could not be fetched (timeout, DNS failure, HTTP error status)."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be parsed or has an unexpected shape."""
