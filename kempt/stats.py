"""Cumulative statistics for a single kempt run."""

import difflib
from dataclasses import dataclass, field
from typing import List

from .results import Change, FormattingFailure, FormattingResult


@dataclass
class RunStats:
    """Holds cumulative counts for a single kempt run."""

    # True in validate mode: changed files were reported, not written
    dry_run: bool = False

    changed: int = 0
    unchanged: int = 0
    parse_errors: int = 0

    # File and line tracking
    files_edited: List[str] = field(default_factory=list)
    lines_changed: int = 0

    @property
    def total_files(self) -> int:
        return self.changed + self.unchanged + self.parse_errors

    def record(self, path: str, original: bytes, result: FormattingResult) -> None:
        """Count one file's outcome."""
        if isinstance(result, FormattingFailure):
            self.parse_errors += 1
        elif result.change is Change.NOT_CHANGED:
            self.unchanged += 1
        else:
            self.changed += 1
            if not self.dry_run:
                self.files_edited.append(path)
            self.count_lines_changed(
                original.decode("utf-8", errors="replace"),
                result.formatted.decode("utf-8", errors="replace"),
            )

    def count_lines_changed(self, original: str, new: str) -> None:
        """Add the number of added/removed lines between *original* and *new*."""
        orig_lines = original.splitlines()
        new_lines = new.splitlines()
        diff = difflib.unified_diff(orig_lines, new_lines)
        for line in diff:
            if line.startswith(("+", "-")) and not line.startswith(("+++", "---")):
                self.lines_changed += 1

    def format_summary(self) -> List[str]:
        """Return a list of lines forming the human-readable run summary."""
        lines = ["--- kempt summary ---"]
        lines.append(f"files checked:   {self.total_files}")
        if self.dry_run:
            lines.append(f"  need format:   {self.changed}")
        else:
            lines.append(f"  reformatted:   {self.changed}")
        lines.append(f"  unchanged:     {self.unchanged}")
        lines.append(f"  parse errors:  {self.parse_errors}")
        if self.dry_run:
            lines.append(f"lines that would change: {self.lines_changed}")
            return lines
        if self.files_edited:
            flist = ", ".join(self.files_edited)
            lines.append(f"files edited ({len(self.files_edited)}): {flist}")
        else:
            lines.append("files edited: none")
        lines.append(f"lines changed: {self.lines_changed}")
        return lines
