"""Helper utilities for constructing temporary Go projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Iterable, Mapping

from dustat.registry import Registry

FIXTURE_PROJECT = Path(__file__).resolve().parent / "goproject"


class RepoBuilder:
    """Utility for writing Go files into a throwaway project and analysing it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def analyse(self, ignore: Iterable[str] | None = None) -> Registry:
        """Return a registry that has collected and classified the project."""
        registry = Registry(self.root)
        if ignore is not None:
            registry.with_ignore_list(ignore)
        registry.run(print_result=False)
        return registry

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["FIXTURE_PROJECT", "RepoBuilder"]
