"""Exception hierarchy for dscc-gen.

Library code raises these; only the CLI entry point turns them into
messages and exit codes.
"""

from __future__ import annotations


class DsccGenError(Exception):
    """Base exception for all dscc-gen errors."""

    code: str = "DSCC-UNKNOWN"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationRejected(DsccGenError):
    """A value supplied on the command line failed its validator."""

    code = "DSCC-VALIDATION"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class PreconditionError(DsccGenError):
    """A required external tool is missing."""

    code = "DSCC-PRECONDITION"


class ScaffoldError(DsccGenError):
    """The project directory could not be materialized."""

    code = "DSCC-SCAFFOLD"


class CommandError(DsccGenError):
    """An external command exited unsuccessfully."""

    code = "DSCC-COMMAND"

    def __init__(self, message: str, returncode: int = -1, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)
