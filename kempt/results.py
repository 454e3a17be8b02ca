"""Per-file formatting outcomes, run inputs, and the shared result fold."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar, Union

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Project type
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Application:
    """A standalone program; no package identity."""


@dataclass(frozen=True)
class Package:
    """A named, importable distribution."""

    name: str

    @property
    def import_name(self) -> str:
        """Top-level module name the package is imported under.

        A dotted name such as ``zope.interface`` is a namespace package, so
        only the part before the first dot is its import root.
        """
        return self.name.split(".", 1)[0].replace("-", "_").lower()


ProjectType = Union[Application, Package]


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Stdin:
    """Format the single source unit on standard input."""


@dataclass(frozen=True)
class Files:
    """An explicit list of resolved file paths."""

    paths: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Project:
    """Files drawn from the manifest's source directories."""

    project_type: ProjectType
    paths: Tuple[str, ...] = ()


Inputs = Union[Stdin, Files, Project]


# ---------------------------------------------------------------------------
# Formatting results
# ---------------------------------------------------------------------------


class Change(enum.Enum):
    CHANGED = "changed"
    NOT_CHANGED = "not_changed"


@dataclass
class ParseError(Exception):
    """Raised by a formatter when the source cannot be parsed.

    ``line`` and ``column`` are 1-based and may be unknown (e.g. for
    undecodable input).
    """

    message: str
    line: Optional[int] = None
    column: Optional[int] = None

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        if self.column is None:
            return f"line {self.line}: {self.message}"
        return f"line {self.line}, column {self.column}: {self.message}"


@dataclass(frozen=True)
class FormattingSuccess:
    change: Change
    formatted: bytes


@dataclass(frozen=True)
class FormattingFailure:
    """A parse failure; ``path`` is None for stdin."""

    path: Optional[str]
    source: bytes = field(repr=False)
    error: ParseError


FormattingResult = Union[FormattingSuccess, FormattingFailure]


@dataclass(frozen=True)
class NotCorrectlyFormatted:
    """A file that parses but whose canonical rendering differs."""

    path: Optional[str]


ValidateFailure = Union[FormattingFailure, NotCorrectlyFormatted]


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def formatting_failure(
    path: Optional[str], result: FormattingResult
) -> Optional[FormattingFailure]:
    """Format mode counts only parse failures."""
    if isinstance(result, FormattingFailure):
        return result
    return None


def validate_failure(
    path: Optional[str], result: FormattingResult
) -> Optional[ValidateFailure]:
    """Validate mode also counts files that would be reformatted."""
    if isinstance(result, FormattingFailure):
        return result
    if result.change is Change.CHANGED:
        return NotCorrectlyFormatted(path)
    return None


def aggregate(
    results: Iterable[Tuple[Optional[str], FormattingResult]],
    classify: Callable[[Optional[str], FormattingResult], Optional[T]],
) -> List[T]:
    """Fold ``(path, result)`` pairs into the ordered list of failures.

    An empty list means the whole batch passed.
    """
    failures: List[T] = []
    for path, result in results:
        failure = classify(path, result)
        if failure is not None:
            failures.append(failure)
    return failures
