"""Plain-text and JSON rendering of unused declarations."""

from __future__ import annotations

import json
from collections import defaultdict
from dataclasses import asdict
from typing import Dict, List, Sequence

from .models import Declaration, FileIssues, Issue

DIVIDER = "=" * 56


def sort_by_line_count(result: Sequence[Declaration]) -> List[Declaration]:
    """Return declarations ascending by the number of lines they span."""
    return sorted(result, key=lambda decl: decl.line_count)


def sort_by_location(result: Sequence[Declaration]) -> List[Declaration]:
    """Return declarations ordered by file path, then line."""
    return sorted(result, key=lambda decl: (decl.pos.filename, decl.pos.line))


def render_text(result: Sequence[Declaration], total_unused_loc: int) -> str:
    if not result:
        return "No unused exported identifiers found!"

    lines = [
        "Unused Exported Symbols (ignoring test-only usage):",
        DIVIDER,
    ]
    for decl in sort_by_line_count(result):
        lines.append(f"{decl.line_count:<5} {decl.name} ({decl.pos})")
    lines.append(DIVIDER)
    lines.append(f"Total Unused Lines: {total_unused_loc}, Declarations: {len(result)}")
    return "\n".join(lines)


def build_file_issues(result: Sequence[Declaration]) -> List[FileIssues]:
    """Group declarations by file, sorting files by path and issues by line."""
    grouped: Dict[str, List[Issue]] = defaultdict(list)
    for decl in result:
        grouped[decl.pos.filename].append(Issue(symbol=decl.name, line=decl.pos.line))

    return [
        FileIssues(file=path, issues=sorted(issues, key=lambda issue: issue.line))
        for path, issues in sorted(grouped.items())
    ]


def render_json(result: Sequence[Declaration]) -> str:
    """Serialize the structured report; an empty result renders as ``[]``."""
    payload = [asdict(entry) for entry in build_file_issues(result)]
    return json.dumps(payload, indent=2, ensure_ascii=False)


__all__ = [
    "DIVIDER",
    "build_file_issues",
    "render_json",
    "render_text",
    "sort_by_line_count",
    "sort_by_location",
]
