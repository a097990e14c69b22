"""Demote unused exported declarations through an external rename tool."""

from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence, TextIO

from .errors import FixFailedError, MissingToolError, RenameFailureError
from .logging import get_logger
from .models import Declaration, Position
from .naming import to_unexported
from .report import sort_by_location

_LOGGER = get_logger("fixer")


class Renamer(Protocol):
    """Renames the identifier at a source position, updating every reference."""

    def ensure_available(self) -> None:
        """Raise :class:`MissingToolError` when the rename tool cannot be invoked."""

    def rename(self, pos: Position, new_name: str) -> None:
        """Apply the rename or raise :class:`RenameFailureError`."""


class GoplsRenamer:
    """Runs ``gopls rename -w file:line:col newName`` for each request."""

    def __init__(
        self,
        executable: str = "gopls",
        *,
        runner: Callable[..., None] | None = None,
        which: Callable[[str], Optional[str]] | None = None,
    ) -> None:
        self.executable = executable
        self._runner = runner or self._default_runner
        self._which = which or shutil.which

    def ensure_available(self) -> None:
        if self._which(self.executable) is None:
            raise MissingToolError(
                f"{self.executable} not found. "
                "Install with: go install golang.org/x/tools/gopls@latest"
            )

    def rename(self, pos: Position, new_name: str) -> None:
        args = [self.executable, "rename", "-w", str(pos), new_name]
        _LOGGER.debug("Running %s", " ".join(args))
        try:
            self._runner(args)
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            raise RenameFailureError(str(pos), f"{exc}\n  {stderr}".rstrip()) from exc
        except OSError as exc:
            raise RenameFailureError(str(pos), str(exc)) from exc

    @staticmethod
    def _default_runner(args: Sequence[str]) -> None:
        subprocess.run(list(args), check=True, text=True, capture_output=True)


@dataclass(frozen=True)
class FixSummary:
    """Outcome counts of one fix run."""

    renamed: int
    skipped: int
    failed: int
    dry_run: bool


class Fixer:
    """Renames each unused declaration to its unexported form."""

    def __init__(
        self,
        renamer: Renamer,
        *,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self._renamer = renamer
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr

    def fix(self, result: Sequence[Declaration], *, dry_run: bool = False) -> FixSummary:
        self._renamer.ensure_available()

        if not result:
            self._print("No unused exported symbols to fix!")
            return FixSummary(renamed=0, skipped=0, failed=0, dry_run=dry_run)

        successful = skipped = failed = 0
        for decl in sort_by_location(result):
            new_name = to_unexported(decl.name)

            if new_name == decl.name:
                if dry_run:
                    self._print(f"⊘ Skip: {decl.name} (already unexported) at {decl.pos}")
                skipped += 1
                continue

            if dry_run:
                self._print(f"→ Would rename: {decl.name} -> {new_name} at {decl.pos}")
                successful += 1
                continue

            try:
                self._renamer.rename(decl.pos, new_name)
            except RenameFailureError as exc:
                print(f"✗ Failed to rename {decl.name}: {exc.detail}", file=self._stderr)
                failed += 1
                continue

            self._print(f"✓ Renamed: {decl.name} -> {new_name}")
            successful += 1

        self._print("")
        if dry_run:
            self._print(f"Dry-run summary: {successful} would be renamed, {skipped} skipped")
        else:
            self._print(f"Summary: {successful} renamed, {skipped} skipped, {failed} failed")

        summary = FixSummary(renamed=successful, skipped=skipped, failed=failed, dry_run=dry_run)
        if failed:
            raise FixFailedError(failed)
        return summary

    def _print(self, message: str) -> None:
        print(message, file=self._stdout)


__all__ = ["FixSummary", "Fixer", "GoplsRenamer", "Renamer"]
