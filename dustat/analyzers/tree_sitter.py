"""Tree-sitter powered Go declaration and identifier extraction."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

import tree_sitter_go
from tree_sitter import Language, Node, Parser, Tree

from ..errors import ParseFailureError
from ..logging import get_logger
from ..models import Declaration, Position

_LOGGER = get_logger("analyzers.tree_sitter")

GO_LANGUAGE = Language(tree_sitter_go.language())

# Node types that the Go toolchain represents as identifiers.
_IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "type_identifier",
        "field_identifier",
        "package_identifier",
        "label_name",
        "blank_identifier",
        "nil",
        "true",
        "false",
        "iota",
    }
)

_FUNCTION_TYPES = frozenset({"function_declaration", "method_declaration"})
_TYPE_SPEC_TYPES = frozenset({"type_spec", "type_alias"})
_VALUE_SPEC_TYPES = frozenset({"var_spec", "const_spec"})
_SPEC_LIST_TYPES = frozenset({"var_spec_list", "const_spec_list"})


@dataclass
class ParsedFile:
    """A parsed Go file together with the bytes it was parsed from."""

    path: Path
    source: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def start(self, node: Node) -> Position:
        row, column = node.start_point
        return Position(filename=str(self.path), line=row + 1, column=column + 1)

    def end(self, node: Node) -> Position:
        row, column = node.end_point
        return Position(filename=str(self.path), line=row + 1, column=column + 1)


class GoSourceParser:
    """Parses Go files, rejecting syntax errors, invalid UTF-8 and a missing package clause."""

    def __init__(self) -> None:
        self._parser = Parser(GO_LANGUAGE)

    def parse_file(self, path: Path) -> ParsedFile:
        try:
            source = path.read_bytes()
        except OSError as exc:
            raise ParseFailureError(path, 0, 0, str(exc)) from exc
        return self.parse_bytes(path, source)

    def parse_bytes(self, path: Path, source: bytes) -> ParsedFile:
        try:
            source.decode("utf-8")
        except UnicodeDecodeError as exc:
            line = source.count(b"\n", 0, exc.start) + 1
            column = exc.start - source.rfind(b"\n", 0, exc.start)
            raise ParseFailureError(path, line, column, "illegal UTF-8 encoding") from exc

        tree = self._parser.parse(source)
        parsed = ParsedFile(path=path, source=source, tree=tree)
        if tree.root_node.has_error:
            bad = _first_error(tree.root_node)
            if bad is None:
                bad = tree.root_node
            pos = parsed.start(bad)
            detail = f"missing {bad.type}" if bad.is_missing else "syntax error"
            raise ParseFailureError(path, pos.line, pos.column, detail)

        # Go requires the package clause first; the grammar does not.
        first = next(
            (child for child in tree.root_node.named_children if child.type != "comment"), None
        )
        if first is None:
            end = parsed.end(tree.root_node)
            raise ParseFailureError(path, end.line, end.column, "expected 'package', found EOF")
        if first.type != "package_clause":
            pos = parsed.start(first)
            raise ParseFailureError(path, pos.line, pos.column, "expected 'package'")

        _LOGGER.debug("Parsed %s", path)
        return parsed


def _first_error(node: Node) -> Optional[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.is_error or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


def _walk(node: Node) -> Iterator[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _is_exported(name: str) -> bool:
    return name[:1].isupper()


def iter_identifiers(parsed: ParsedFile) -> Iterator[str]:
    """Yield the text of every identifier token in the file, declarations included."""
    for node in _walk(parsed.root):
        if node.is_named and node.type in _IDENTIFIER_TYPES:
            yield parsed.text(node)


def collect_declarations(parsed: ParsedFile) -> List[Declaration]:
    """Return the exported top-level declarations of a parsed file in source order."""
    declarations: List[Declaration] = []
    for child in parsed.root.named_children:
        if child.type in _FUNCTION_TYPES:
            declarations.extend(_named_declarations(parsed, child))
        elif child.type == "type_declaration":
            for spec in _specs(child, _TYPE_SPEC_TYPES):
                declarations.extend(_named_declarations(parsed, spec))
        elif child.type in {"var_declaration", "const_declaration"}:
            for spec in _specs(child, _VALUE_SPEC_TYPES):
                declarations.extend(_named_declarations(parsed, spec))
    return declarations


def _specs(node: Node, spec_types: frozenset[str]) -> Iterator[Node]:
    for child in node.named_children:
        if child.type in spec_types:
            yield child
        elif child.type in _SPEC_LIST_TYPES:
            yield from _specs(child, spec_types)


def _named_declarations(parsed: ParsedFile, node: Node) -> Iterator[Declaration]:
    end = parsed.end(node)
    for name_node in node.children_by_field_name("name"):
        name = parsed.text(name_node)
        if _is_exported(name):
            yield Declaration.from_span(name, parsed.start(name_node), end)


__all__ = [
    "GO_LANGUAGE",
    "GoSourceParser",
    "ParsedFile",
    "collect_declarations",
    "iter_identifiers",
]
