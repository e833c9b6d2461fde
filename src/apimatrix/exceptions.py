"""Exception hierarchy for apimatrix.

All exceptions inherit from :class:`ApiMatrixError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`apimatrix.exit_codes`.
The top-level error handler in :func:`apimatrix.app.main` catches
``ApiMatrixError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    ApiMatrixError (exit 1)
    +-- InvalidUsageError          (exit 2)
    |   +-- UnsupportedFormatError (exit 2)
    +-- FetchError                 (exit 6)
    +-- SpecParseError             (exit 7)
    |   +-- MissingTagsError       (exit 7)
    +-- ConfigError                (exit 1)
"""

from apimatrix.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class ApiMatrixError(Exception):
    """Base exception for all apimatrix errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`apimatrix.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ApiMatrixError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class UnsupportedFormatError(InvalidUsageError):
    """Raised when the requested output format has no registered formatter."""

    def __init__(self, format_name: str, supported: list[str] | None = None):
        message = f"Unsupported format '{format_name}'"
        if supported:
            message += f" (expected one of: {', '.join(supported)})"
        super().__init__(message)
        self.format_name = format_name


class FetchError(ApiMatrixError):
    """Raised when the OpenAPI document cannot be retrieved (network or HTTP error)."""

    exit_code = EXIT_CONNECTION_ERROR


class SpecParseError(ApiMatrixError):
    """Raised when the OpenAPI document cannot be parsed or a field has the wrong shape."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class MissingTagsError(SpecParseError):
    """Raised when the first operation of a path declares no tag to group it under."""

    def __init__(self, path: str):
        super().__init__(
            f"Path '{path}' cannot be grouped: its first operation has no tags"
        )
        self.path = path


class ConfigError(ApiMatrixError):
    """Raised for invalid configuration values (bad timeout, negative retries)."""

    exit_code = EXIT_GENERIC_FAILURE
