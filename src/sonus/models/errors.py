"""Exception hierarchy for sonus."""

from __future__ import annotations


class SonusError(Exception):
    """Base class for all sonus errors."""


class InvalidArgumentError(SonusError, ValueError):
    """A builder or query argument has the wrong type or value."""


class ExternalProcessError(SonusError, RuntimeError):
    """The converter or prober could not be run or exited with an error."""

    def __init__(self, message: str, *, returncode: int | None = None, output: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class ParseError(SonusError, ValueError):
    """Tool output did not have the expected shape."""

    def __init__(self, message: str, *, text: str = "") -> None:
        super().__init__(message)
        self.text = text


__all__ = ["ExternalProcessError", "InvalidArgumentError", "ParseError", "SonusError"]
