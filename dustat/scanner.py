"""Project path resolution and source tree walking."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator

from .errors import InvalidInputError

SOURCE_SUFFIX = ".go"
TEST_SUFFIX = "_test.go"

_EXCLUDED_DIRS = {
    "vendor",
    "testdata",
}


def resolve_project_path(cli_path: str) -> Path:
    """Return an absolute project path for a command-line argument."""
    if not cli_path:
        raise InvalidInputError("no project path provided")
    if cli_path == ".":
        return Path.cwd()
    return Path(cli_path).expanduser().absolute()


def is_source_file(path: Path) -> bool:
    return path.name.endswith(SOURCE_SUFFIX)


def is_test_file(path: Path) -> bool:
    return path.name.endswith(TEST_SUFFIX)


def _skip_dir(name: str, extra: frozenset[str]) -> bool:
    return name in _EXCLUDED_DIRS or name in extra or name.startswith(".")


def iter_source_files(
    root: Path, skip_dirs: Iterable[str] = (), *, prune: bool = True
) -> Iterator[Path]:
    """Yield every Go source file under ``root`` in lexical order.

    Entries of a directory are visited sorted by name, files and
    subdirectories interleaved, and each subdirectory is descended into where
    it sorts. With ``prune`` set, vendored code, ``testdata`` trees, hidden
    directories and any directory named in ``skip_dirs`` are not entered. The
    root itself is never pruned, and a root that is a file yields just itself.
    """
    if not root.is_dir():
        if is_source_file(root):
            yield root
        return
    yield from _walk(root, frozenset(skip_dirs), prune)


def _walk(directory: Path, extra: frozenset[str], prune: bool) -> Iterator[Path]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        raise InvalidInputError(f"error walking project: {exc}") from exc

    for entry in entries:
        path = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            if prune and _skip_dir(entry.name, extra):
                continue
            yield from _walk(path, extra, prune)
        elif is_source_file(path):
            yield path


__all__ = [
    "SOURCE_SUFFIX",
    "TEST_SUFFIX",
    "is_source_file",
    "is_test_file",
    "iter_source_files",
    "resolve_project_path",
]
