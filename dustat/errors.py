"""Error types raised by dustat components."""

from __future__ import annotations

from pathlib import Path


class DustatError(RuntimeError):
    """Base class for every fatal dustat error."""


class InvalidInputError(DustatError):
    """Raised when the caller supplies a missing or unusable input."""


class ParseFailureError(DustatError):
    """Raised when a source file cannot be parsed; aborts the whole run."""

    def __init__(self, path: Path | str, line: int, column: int, detail: str) -> None:
        self.path = str(path)
        self.line = line
        self.column = column
        self.detail = detail
        super().__init__(f"error parsing file {self.path}:{line}:{column}: {detail}")


class MissingToolError(DustatError):
    """Raised when fix mode needs a rename tool that is not installed."""


class RenameFailureError(DustatError):
    """Raised by a renamer when a single rename could not be applied."""

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"{name}: {detail}" if detail else name)


class FixFailedError(DustatError):
    """Raised after a fix run in which at least one rename failed."""

    def __init__(self, failed: int) -> None:
        self.failed = failed
        super().__init__(f"some renames failed ({failed})")


__all__ = [
    "DustatError",
    "FixFailedError",
    "InvalidInputError",
    "MissingToolError",
    "ParseFailureError",
    "RenameFailureError",
]
