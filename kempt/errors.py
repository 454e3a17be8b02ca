"""Kempt-specific exceptions.

Every error carries a short ``title`` and a human-readable report; the CLI
prints both to stderr and exits non-zero.  Configuration errors are raised
before any file is read.  Batch errors are raised only after every file in
the batch has been processed.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .results import FormattingFailure, NotCorrectlyFormatted, ValidateFailure

STDIN_NAME = "<stdin>"


class KemptError(Exception):
    """Base class for every error that ends a kempt run."""

    title = "ERROR"

    def report_lines(self) -> List[str]:
        return [str(self)]


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------


class ConfigurationError(KemptError):
    """Raised before any file work when the run cannot start."""


class StdinWithFilesError(ConfigurationError):
    title = "INCOMPATIBLE FLAGS"

    def __init__(self) -> None:
        super().__init__("--stdin cannot be combined with file or directory paths")

    def report_lines(self) -> List[str]:
        return [
            "I cannot format standard input and files at the same time.",
            "Either pass --stdin on its own, or pass paths without --stdin.",
        ]


class NoManifestError(ConfigurationError):
    title = "NO pyproject.toml"

    def __init__(self, start: str) -> None:
        super().__init__(f"no pyproject.toml found in {start} or any parent")
        self.start = start

    def report_lines(self) -> List[str]:
        return [
            "I was not given any files or directories, so I tried to format the"
            " whole project, but I could not find a pyproject.toml in",
            f"    {self.start}",
            "or any of its parent directories.",
            "Run kempt from inside a project, or name the files to format.",
        ]


class BadManifestError(ConfigurationError):
    title = "BAD pyproject.toml"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason

    def report_lines(self) -> List[str]:
        return [
            f"I ran into a problem with the project manifest at {self.path}:",
            f"    {self.reason}",
        ]


class BadConfigError(ConfigurationError):
    title = "BAD CONFIGURATION"

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"{key}: {reason}")
        self.key = key
        self.reason = reason

    def report_lines(self) -> List[str]:
        return [
            f"The kempt setting `{self.key}` is not usable:",
            f"    {self.reason}",
            "Check [tool.kempt] in pyproject.toml and .kempt.toml.",
        ]


class PathUnknownError(ConfigurationError):
    title = "FILE NOT FOUND"

    def __init__(self, path: str) -> None:
        super().__init__(f"file not found: {path}")
        self.path = path

    def report_lines(self) -> List[str]:
        return [
            "I could not find a file at:",
            f"    {self.path}",
            "Nothing was formatted. Is there a typo in the path?",
        ]


# ---------------------------------------------------------------------------
# Batch errors
# ---------------------------------------------------------------------------


def _display_path(path: Optional[str]) -> str:
    return STDIN_NAME if path is None else path


def _source_excerpt(failure: FormattingFailure) -> List[str]:
    """Return the offending source line with a caret under the column."""
    line = failure.error.line
    if line is None:
        return []
    lines = failure.source.decode("utf-8", errors="replace").splitlines()
    if not 1 <= line <= len(lines):
        return []
    gutter = f"{line} | "
    excerpt = [gutter + lines[line - 1]]
    column = failure.error.column
    if column is not None and column >= 1:
        excerpt.append(" " * (len(gutter) - 2) + "| " + " " * (column - 1) + "^")
    return excerpt


def parse_failure_lines(failure: FormattingFailure) -> List[str]:
    """Report lines for a single parse failure."""
    lines = [f"{_display_path(failure.path)}: {failure.error}"]
    lines.extend("    " + ln for ln in _source_excerpt(failure))
    return lines


class FormatErrors(KemptError):
    """Raised when one or more files could not be parsed in format mode."""

    title = "PARSE ERRORS"

    def __init__(self, failures: Sequence[FormattingFailure]) -> None:
        names = ", ".join(_display_path(f.path) for f in failures)
        super().__init__(f"could not parse {len(failures)} file(s): {names}")
        self.failures = list(failures)

    def report_lines(self) -> List[str]:
        lines = ["I could not format the following files because they do not parse:"]
        for failure in self.failures:
            lines.append("")
            lines.extend(parse_failure_lines(failure))
        return lines


class ValidateErrors(KemptError):
    """Raised when validation finds parse errors or unformatted files."""

    title = "VALIDATION FAILED"

    def __init__(self, failures: Sequence[ValidateFailure]) -> None:
        names = ", ".join(_display_path(f.path) for f in failures)
        super().__init__(f"{len(failures)} file(s) failed validation: {names}")
        self.failures = list(failures)

    def report_lines(self) -> List[str]:
        lines = ["The following files are not correctly formatted:"]
        for failure in self.failures:
            lines.append("")
            if isinstance(failure, NotCorrectlyFormatted):
                lines.append(f"{_display_path(failure.path)}: would reformat")
            else:
                lines.extend(parse_failure_lines(failure))
        return lines
