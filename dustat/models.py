"""Core data models shared across dustat components."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Position:
    """A location inside a source file; line and column are 1-based."""

    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Declaration:
    """An exported top-level name and the source range it spans."""

    name: str
    pos: Position
    end: Position
    line_count: int

    @classmethod
    def from_span(cls, name: str, pos: Position, end: Position) -> "Declaration":
        return cls(name=name, pos=pos, end=end, line_count=end.line - pos.line + 1)


@dataclass
class Issue:
    """A single unused symbol in the structured report."""

    symbol: str
    line: int


@dataclass
class FileIssues:
    """Unused symbols grouped under the file that declares them."""

    file: str
    issues: List[Issue] = field(default_factory=list)
