"""Go source analyzers."""

from .tree_sitter import GoSourceParser, ParsedFile, collect_declarations, iter_identifiers

__all__ = ["GoSourceParser", "ParsedFile", "collect_declarations", "iter_identifiers"]
