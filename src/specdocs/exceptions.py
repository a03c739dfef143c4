"""Exception hierarchy for specdocs.

All exceptions inherit from :class:`SpecdocsError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specdocs.exit_codes`.
The top-level error handler in :func:`specdocs.app.main` catches
``SpecdocsError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

The documentation generators themselves never raise these: malformed but
traversable specs degrade to defaults instead. Only the I/O edges (spec
loading, configuration files, CLI arguments) use this hierarchy.

Subclass hierarchy::

    SpecdocsError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- SpecParseError      (exit 7)
    +-- ConfigError         (exit 1)
"""

from specdocs.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class SpecdocsError(Exception):
    """Base exception for all specdocs errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecdocsError):
    """Raised for invalid CLI arguments (unknown output format, bad option values)."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SpecdocsError):
    """Raised when the OpenAPI spec cannot be loaded, parsed, or is not OpenAPI 3.x."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ConfigError(SpecdocsError):
    """Raised when a configuration file exists but cannot be read or validated."""
