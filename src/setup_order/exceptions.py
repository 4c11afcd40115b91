"""Exception types raised by setup-order."""

from __future__ import annotations

from pathlib import Path


class SetupOrderError(Exception):
    """Base class for errors surfaced to callers of setup-order."""


class ConfigurationError(SetupOrderError, ValueError):
    """Invalid ordering options.

    Raised once per pass, before any statement is classified, so a bad
    configuration blocks the pass entirely instead of producing a partial
    rewrite.
    """


class ScriptParseError(SetupOrderError):
    def __init__(self, path: str | Path, message: str, *, line: int = 0, column: int = 0):
        super().__init__(f"{path}:{line + 1}:{column + 1}: {message}")
        self.path = str(path)
        self.line = line
        self.column = column
        self.reason = message
