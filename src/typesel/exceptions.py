"""typesel exception hierarchy.

All exceptions inherit from TypeselError so callers can catch the base
class when they want to handle any typesel failure uniformly.
"""

from __future__ import annotations

from pathlib import Path


class TypeselError(Exception):
    """Base exception for all typesel errors."""


class ConfigError(TypeselError):
    """Configuration-related errors (bad boolean, unknown log level, etc.)."""


class PathResolveError(TypeselError):
    """The input path cannot be mapped to a Go import path."""


class ScanError(TypeselError):
    """Errors while listing the source files of a package directory."""


class SourceParseError(TypeselError):
    """Malformed or unreadable Go source."""

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        location = ""
        if path is not None:
            location = str(path)
            if line is not None:
                location += f":{line}"
                if column is not None:
                    location += f":{column}"
            location += ": "
        super().__init__(f"{location}{message}")
        self.path = path
        self.line = line
        self.column = column
