"""Declaration and usage registry for one analysis run.

Usage is counted by bare identifier text across the whole tree. There is no
scope, shadowing or package resolution: a local variable or a field that
happens to share an exported name counts as a use of it. Declarations are
keyed by name alone, so when two exported declarations share a name the one
visited last (see :func:`dustat.scanner.iter_source_files` for the order)
replaces the earlier one.
"""

from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, TextIO

from .analyzers.tree_sitter import GoSourceParser, collect_declarations, iter_identifiers
from .errors import InvalidInputError
from .logging import get_logger
from .models import Declaration
from .report import render_json, render_text
from .scanner import is_test_file, iter_source_files

_LOGGER = get_logger("registry")


class Registry:
    """Collects exported declarations and identifier counts, then classifies them."""

    def __init__(
        self,
        path: Path | str,
        *,
        skip_dirs: Iterable[str] = (),
        parser: Optional[GoSourceParser] = None,
    ) -> None:
        if not str(path):
            raise InvalidInputError("path cannot be empty")
        root = Path(path)
        if not root.exists():
            raise InvalidInputError(f"path does not exist: {path}")

        self.path = root
        self.ignore: Set[str] = set()
        self.declarations: Dict[str, Declaration] = {}
        self.usage_count: Counter[str] = Counter()
        self.result: List[Declaration] = []
        self.total_unused_loc = 0
        self._skip_dirs = tuple(skip_dirs)
        self._parser = parser or GoSourceParser()

    def with_ignore_list(self, ignore: Optional[Iterable[str]]) -> "Registry":
        self.ignore = set(ignore) if ignore is not None else set()
        return self

    def run(
        self,
        print_result: bool = True,
        json_output: bool = False,
        *,
        stream: Optional[TextIO] = None,
    ) -> None:
        """Parse the tree, classify declarations, and optionally print the report."""
        self.parse_files()
        self.accumulate_result()
        if print_result:
            self.report(json_output, stream=stream)

    def parse_files(self) -> None:
        """Scan every Go file, then rescan test files for additional usage.

        Test files take part in both passes: their exported declarations are
        collected in the first, and their identifiers are counted in each. The
        second pass enters every directory, skipped ones included.
        """
        self.declarations = {}
        self.usage_count = Counter()
        files = 0
        for path in iter_source_files(self.path, self._skip_dirs):
            parsed = self._parser.parse_file(path)
            for decl in collect_declarations(parsed):
                previous = self.declarations.get(decl.name)
                if previous is not None and previous.pos.filename != decl.pos.filename:
                    _LOGGER.debug(
                        "Declaration %s at %s replaces %s", decl.name, decl.pos, previous.pos
                    )
                self.declarations[decl.name] = decl
            self.usage_count.update(iter_identifiers(parsed))
            files += 1
        _LOGGER.debug(
            "First pass: %d files, %d exported declarations", files, len(self.declarations)
        )

        test_files = 0
        for path in iter_source_files(self.path, prune=False):
            if not is_test_file(path):
                continue
            parsed = self._parser.parse_file(path)
            self.usage_count.update(iter_identifiers(parsed))
            test_files += 1
        _LOGGER.debug("Second pass: %d test files", test_files)

    def accumulate_result(self) -> None:
        """Populate ``result`` with every non-ignored declaration used at most once."""
        self.result = []
        self.total_unused_loc = 0
        for name, decl in self.declarations.items():
            if name in self.ignore:
                continue
            # The declaring identifier itself accounts for one occurrence.
            if self.usage_count[name] <= 1:
                self.result.append(decl)
                self.total_unused_loc += decl.line_count
        _LOGGER.debug(
            "Found %d unused declarations spanning %d lines",
            len(self.result),
            self.total_unused_loc,
        )

    def report(self, json_output: bool = False, *, stream: Optional[TextIO] = None) -> None:
        out = stream or sys.stdout
        if json_output:
            print(render_json(self.result), file=out)
        else:
            print(render_text(self.result, self.total_unused_loc), file=out)


__all__ = ["Registry"]
