"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~apidox.exceptions.ApidoxError` subclass.
CI scripts can inspect the exit code to tell a bad recordings file apart from
a rejected interaction without parsing stderr.

Example::

    $ apidox build recordings.json --strict
    $ echo $?
    3   # EXIT_INVALID_VERB -- an interaction used an unknown HTTP verb
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_INVALID_VERB = 3
"""An interaction was recorded with an unrecognized HTTP verb."""

EXIT_RECORDING_PARSE_ERROR = 4
"""The recordings file could not be read or parsed."""

EXIT_DESCRIPTION_ERROR = 5
"""A file-backed description could not be resolved."""
