"""Exception hierarchy for apidox.

All exceptions inherit from :class:`ApidoxError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`apidox.exit_codes`.
The top-level error handler in :func:`apidox.app.main` catches
``ApidoxError`` and exits with the appropriate code, while unexpected
exceptions exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    ApidoxError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- InvalidVerbError    (exit 3)
    +-- RecordingParseError (exit 4)
    +-- DescriptionError    (exit 5)
    +-- ConfigError         (exit 1)

None of these derive from :class:`ValueError`, so raising one inside a
Pydantic validator propagates it unchanged instead of wrapping it in a
``ValidationError``.
"""

from apidox.exit_codes import (
    EXIT_DESCRIPTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_INVALID_VERB,
    EXIT_RECORDING_PARSE_ERROR,
)


class ApidoxError(Exception):
    """Base exception for all apidox errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ApidoxError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class InvalidVerbError(ApidoxError):
    """Raised when an Action is constructed with an unrecognized HTTP verb.

    Fatal for the single interaction that carried the verb; the caller decides
    whether to reject it and carry on or to abort the run.
    """

    exit_code = EXIT_INVALID_VERB

    def __init__(self, verb: object):
        super().__init__(f"Unrecognized HTTP verb {verb}")
        self.verb = verb


class RecordingParseError(ApidoxError):
    """Raised when a recordings file cannot be loaded or fails validation."""

    exit_code = EXIT_RECORDING_PARSE_ERROR


class DescriptionError(ApidoxError):
    """Raised when a ``*.md`` description file cannot be found or read."""

    exit_code = EXIT_DESCRIPTION_ERROR


class ConfigError(ApidoxError):
    """Raised for configuration problems (missing or invalid config files)."""

    exit_code = EXIT_GENERIC_FAILURE
