"""Base class for CST normalization rules."""

from typing import List, Sequence

import libcst as cst

from ..results import Application, ProjectType


class Normalizer(cst.CSTTransformer):
    """Base class for all kempt normalization rules.

    A rule rewrites the tree towards its canonical form and must be
    idempotent: running it on its own output changes nothing.
    """

    def __init__(self, project_type: ProjectType = Application()) -> None:
        super().__init__()
        self.project_type = project_type
        self.changes_made: List[str] = []

    @classmethod
    def name(cls) -> str:
        return cls.__name__

    def get_changes(self) -> Sequence[str]:
        return self.changes_made


def is_blank(line: cst.EmptyLine) -> bool:
    return line.comment is None


def collapse_blank_lines(
    lines: Sequence[cst.EmptyLine], limit: int
) -> List[cst.EmptyLine]:
    """Keep at most *limit* consecutive blank lines; comment lines are kept."""
    kept: List[cst.EmptyLine] = []
    run = 0
    for line in lines:
        if is_blank(line):
            run += 1
            if run > limit:
                continue
        else:
            run = 0
        kept.append(line)
    return kept


def strip_leading_blank_lines(lines: Sequence[cst.EmptyLine]) -> List[cst.EmptyLine]:
    kept = list(lines)
    while kept and is_blank(kept[0]):
        kept.pop(0)
    return kept


def strip_trailing_blank_lines(lines: Sequence[cst.EmptyLine]) -> List[cst.EmptyLine]:
    kept = list(lines)
    while kept and is_blank(kept[-1]):
        kept.pop()
    return kept
