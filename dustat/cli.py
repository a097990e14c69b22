"""CLI entrypoint for dustat."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Set

from .config import load_config
from .errors import DustatError, InvalidInputError
from .fixer import Fixer, GoplsRenamer
from .logging import configure_logging, get_logger
from .registry import Registry
from .scanner import resolve_project_path

_LOGGER = get_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dustat",
        description="Report exported Go identifiers that nothing else in the project uses.",
    )
    parser.add_argument(
        "path",
        help="Path to the Go project root ('.' for the current directory).",
    )
    parser.add_argument(
        "--ignore",
        default="",
        help="Comma-separated list of exported identifiers to ignore.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results in JSON format.",
    )
    parser.add_argument(
        "--fix",
        action="store_true",
        help="Automatically rename unused exported symbols to unexported.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview changes without applying them (requires --fix).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a configuration file (defaults to .dustat.yml beside the project path).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def _split_names(csv: str) -> List[str]:
    return [name.strip() for name in csv.split(",") if name.strip()]


def run(args: argparse.Namespace) -> None:
    """Execute one analysis run for parsed command-line arguments."""
    if args.dry_run and not args.fix:
        raise InvalidInputError("--dry-run requires --fix")

    project_path = resolve_project_path(args.path)
    if args.config is not None:
        config = load_config(args.config, explicit=True)
    else:
        config = load_config(project_path)

    registry = Registry(project_path, skip_dirs=config.skip_dirs)
    ignore: Set[str] = set(config.ignore)
    ignore.update(_split_names(args.ignore))
    if ignore:
        _LOGGER.debug("Ignoring %d identifiers", len(ignore))
        registry.with_ignore_list(ignore)

    json_output = bool(args.json) or config.json_output
    registry.run(print_result=not args.fix, json_output=json_output)

    if args.fix:
        Fixer(GoplsRenamer()).fix(registry.result, dry_run=bool(args.dry_run))


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for dustat."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        run(args)
    except DustatError as exc:
        parser.exit(1, f"error: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
