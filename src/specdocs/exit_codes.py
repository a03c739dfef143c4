"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specdocs.exceptions.SpecdocsError` subclass.
CI scripts can inspect the exit code to tell a bad spec apart from a bad
invocation without parsing stderr.

Example::

    $ specdocs generate ./swagger2.json
    $ echo $?
    7   # EXIT_SPEC_PARSE_ERROR -- the document is not OpenAPI 3.x
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI specification could not be loaded or parsed."""
