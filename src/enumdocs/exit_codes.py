"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~enumdocs.exceptions.EnumDocsError` subclass.
CI scripts can inspect the exit code to tell a stale-docs failure apart
from a network outage without parsing stderr.

Example::

    $ enumdocs enrich --check
    $ echo $?
    9   # EXIT_CHECK_FAILED -- docs would change
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_FETCH_ERROR = 6
"""The OpenAPI document could not be retrieved (network failure or non-2xx status)."""

EXIT_PARSE_ERROR = 7
"""The OpenAPI document could not be parsed or validated."""

EXIT_FILESYSTEM_ERROR = 8
"""A documentation file or directory could not be read or written."""

EXIT_CHECK_FAILED = 9
"""``--check`` found documentation files that would be rewritten."""
