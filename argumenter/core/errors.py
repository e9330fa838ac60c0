from __future__ import annotations

from typing import Optional


class ArgumenterError(Exception):
    """Base class for every failure surfaced by a generation run."""


class SourceError(ArgumenterError):
    def __init__(self, message: str, filename: Optional[str] = None, line: Optional[int] = None):
        self.reason = message
        self.filename = filename
        self.line = line
        where = filename or "<source>"
        if line is not None:
            where = f"{where}:{line}"
        super().__init__(f"{where}: {message}")


class AssemblyError(ArgumenterError):
    pass


class FormatError(ArgumenterError):
    """
    Generated output is not well-formed Go.

    `raw` keeps the unformatted concatenated text for diagnosis.
    """

    def __init__(self, message: str, raw: str = "", line: Optional[int] = None):
        self.raw = raw
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class ConfigError(ArgumenterError):
    pass
