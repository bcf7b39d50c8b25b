"""Exception types for fatal document errors"""

from typing import Optional


class GemsiteError(Exception):
    """Base class for errors that abort processing of a document."""


class InfoError(GemsiteError):
    """The metadata block is missing a field or contains an unexpected line."""

    def __init__(self, message: str, line: Optional[int] = None, text: Optional[str] = None):
        self.line = line
        self.text = text
        if line is not None:
            message = f"{message} on line {line}: {text!r}"
        super().__init__(message)


class CommandError(GemsiteError):
    """A command block's process failed to start or did not exit cleanly."""

    def __init__(self, line: int, returncode: Optional[int] = None, cause: Optional[Exception] = None):
        self.line = line
        self.returncode = returncode
        self.cause = cause
        if cause is not None:
            detail = f"could not run shell: {cause}"
        elif returncode is not None and returncode < 0:
            detail = f"terminated by signal {-returncode}"
        else:
            detail = f"exited with status {returncode}"
        super().__init__(f"Command on line {line} {detail}")


class TemplateError(GemsiteError):
    """The template source uses an unknown variable or is not well formed."""
