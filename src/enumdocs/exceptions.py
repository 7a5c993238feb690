"""Exception hierarchy for enumdocs.

All exceptions inherit from :class:`EnumDocsError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`enumdocs.exit_codes`.
The top-level error handler in :func:`enumdocs.app.main` catches
``EnumDocsError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Lookup misses (unknown path, absent operation, unresolved ``$ref``, a doc
file with no matching resource) are deliberately *not* represented here:
they degrade to "no enum information" instead of failing the run.

Subclass hierarchy::

    EnumDocsError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- FetchError          (exit 6)
    +-- ParseError          (exit 7)
    +-- FileSystemError     (exit 8)
    +-- CheckFailedError    (exit 9)
    +-- ConfigError         (exit 1)
"""

from enumdocs.exit_codes import (
    EXIT_CHECK_FAILED,
    EXIT_FETCH_ERROR,
    EXIT_FILESYSTEM_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PARSE_ERROR,
)


class EnumDocsError(Exception):
    """Base exception for all enumdocs errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`enumdocs.exit_codes`. The entry point catches
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


class InvalidUsageError(EnumDocsError):
    """Raised for invalid CLI arguments (e.g. an unknown resource name)."""

    exit_code = EXIT_INVALID_USAGE


class FetchError(EnumDocsError):
    """Raised when the OpenAPI document cannot be retrieved.

    Covers transport failures (DNS, timeout, connection refused), non-2xx
    HTTP responses, and unreadable local spec files.
    """

    exit_code = EXIT_FETCH_ERROR


class ParseError(EnumDocsError):
    """Raised when the OpenAPI document is malformed or fails validation."""

    exit_code = EXIT_PARSE_ERROR


class FileSystemError(EnumDocsError):
    """Raised when a documentation file or directory cannot be read or written.

    A documentation directory that does not exist is not an error; it is
    treated as containing zero files.
    """

    exit_code = EXIT_FILESYSTEM_ERROR


class CheckFailedError(EnumDocsError):
    """Raised by ``enrich --check`` when documentation files are out of date."""

    exit_code = EXIT_CHECK_FAILED


class ConfigError(EnumDocsError):
    """Raised for configuration problems (invalid project file, bad env values)."""

    exit_code = EXIT_GENERIC_FAILURE
