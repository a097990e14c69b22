"""Tests for the tree-sitter Go analyzer."""

from __future__ import annotations

import textwrap
from collections import Counter
from pathlib import Path

import pytest

from dustat.analyzers.tree_sitter import GoSourceParser, collect_declarations, iter_identifiers
from dustat.errors import ParseFailureError


def _parse(tmp_path: Path, content: str, filename: str = "pkg.go"):  # type: ignore[no-untyped-def]
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
    return GoSourceParser().parse_file(path)


def test_collects_exported_functions_methods_and_types(tmp_path: Path) -> None:
    parsed = _parse(
        tmp_path,
        """
        package pkg

        type Server struct {
            addr string
        }

        type helper int

        func (s *Server) Start() error {
            return nil
        }

        func NewServer() *Server {
            return &Server{}
        }

        func internal() {}
        """,
    )

    declarations = {decl.name: decl for decl in collect_declarations(parsed)}

    assert set(declarations) == {"Server", "Start", "NewServer"}
    server = declarations["Server"]
    assert (server.pos.line, server.pos.column) == (3, 6)
    assert server.end.line == 5
    assert server.line_count == 3
    assert server.pos.filename == str(tmp_path / "pkg.go")
    assert declarations["Start"].line_count == 3
    assert declarations["NewServer"].pos.line == 13


def test_collects_grouped_and_multi_name_values(tmp_path: Path) -> None:
    parsed = _parse(
        tmp_path,
        """
        package pkg

        const (
            First = iota
            second
            Third
        )

        var A, b, C = 1, 2, 3

        var (
            Timeout = 30
            retries = 3
        )

        type (
            Handler func()
            Alias = Handler
        )
        """,
    )

    names = [decl.name for decl in collect_declarations(parsed)]

    assert names == ["First", "Third", "A", "C", "Timeout", "Handler", "Alias"]


def test_value_declaration_spans_whole_spec(tmp_path: Path) -> None:
    parsed = _parse(
        tmp_path,
        """
        package pkg

        var Table = map[string]int{
            "a": 1,
            "b": 2,
        }
        """,
    )

    (table,) = collect_declarations(parsed)

    assert table.pos.line == 3
    assert table.end.line == 6
    assert table.line_count == 4


def test_nested_declarations_are_not_collected(tmp_path: Path) -> None:
    parsed = _parse(
        tmp_path,
        """
        package pkg

        func run() {
            type Local struct{}
            var Inner = Local{}
            _ = Inner
        }
        """,
    )

    assert collect_declarations(parsed) == []


def test_iter_identifiers_counts_every_occurrence(tmp_path: Path) -> None:
    parsed = _parse(
        tmp_path,
        """
        package pkg

        import "fmt"

        // Widget is mentioned in this comment but comments are not counted.
        type Widget struct {
            Name string
        }

        func Describe(w Widget) string {
            return fmt.Sprint(w.Name)
        }
        """,
    )

    counts = Counter(iter_identifiers(parsed))

    assert counts["Widget"] == 2
    assert counts["Name"] == 2
    assert counts["Describe"] == 1
    assert counts["fmt"] == 1
    assert counts["Sprint"] == 1
    assert counts["pkg"] == 1
    assert counts["w"] == 2


def test_parse_failure_names_the_file(tmp_path: Path) -> None:
    with pytest.raises(ParseFailureError) as excinfo:
        _parse(
            tmp_path,
            """
            package pkg

            func Broken( {
            """,
            filename="broken.go",
        )

    error = excinfo.value
    assert error.path == str(tmp_path / "broken.go")
    assert error.line >= 1
    assert "broken.go" in str(error)


def test_parse_failure_for_unreadable_path(tmp_path: Path) -> None:
    with pytest.raises(ParseFailureError):
        GoSourceParser().parse_file(tmp_path / "missing.go")


def test_empty_file_is_a_parse_failure(tmp_path: Path) -> None:
    with pytest.raises(ParseFailureError, match="expected 'package', found EOF") as excinfo:
        _parse(tmp_path, "", filename="empty.go")

    assert excinfo.value.path == str(tmp_path / "empty.go")


def test_comment_only_file_is_a_parse_failure(tmp_path: Path) -> None:
    with pytest.raises(ParseFailureError, match="expected 'package'"):
        _parse(tmp_path, "// nothing here\n")


def test_missing_package_clause_is_a_parse_failure(tmp_path: Path) -> None:
    with pytest.raises(ParseFailureError) as excinfo:
        _parse(
            tmp_path,
            """
            func Foo() {}
            """,
        )

    assert excinfo.value.line == 1


def test_leading_comments_before_package_clause_are_accepted(tmp_path: Path) -> None:
    parsed = _parse(
        tmp_path,
        """
        // Package pkg does things.

        /* build notes */
        package pkg

        func Exported() {}
        """,
    )

    assert [decl.name for decl in collect_declarations(parsed)] == ["Exported"]


def test_invalid_utf8_is_a_parse_failure(tmp_path: Path) -> None:
    path = tmp_path / "latin1.go"

    with pytest.raises(ParseFailureError, match="illegal UTF-8 encoding") as excinfo:
        GoSourceParser().parse_bytes(path, b'package p\n\nvar s = "\xff"\n')

    assert (excinfo.value.line, excinfo.value.column) == (3, 10)
