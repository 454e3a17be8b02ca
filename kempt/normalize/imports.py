"""Rule: group and sort contiguous top-level imports."""

import enum
import sys
from typing import List, Optional, Tuple, Union

import libcst as cst
from libcst.helpers import get_full_name_for_node

from ..results import Package, ProjectType
from .base import Normalizer, is_blank

_ImportNode = Union[cst.Import, cst.ImportFrom]


class Section(enum.IntEnum):
    FUTURE = 0
    STDLIB = 1
    THIRD_PARTY = 2
    FIRST_PARTY = 3
    LOCAL = 4


def _import_node(stmt: cst.CSTNode) -> Optional[_ImportNode]:
    """Return the import if *stmt* is a line holding exactly one import."""
    if not isinstance(stmt, cst.SimpleStatementLine) or len(stmt.body) != 1:
        return None
    node = stmt.body[0]
    if isinstance(node, (cst.Import, cst.ImportFrom)):
        return node
    return None


def module_name(node: _ImportNode) -> str:
    if isinstance(node, cst.Import):
        return get_full_name_for_node(node.names[0].name) or ""
    if node.module is None:
        return ""
    return get_full_name_for_node(node.module) or ""


def section_for(node: _ImportNode, project_type: ProjectType) -> Section:
    """Classify an import; first party only exists in a package context."""
    if isinstance(node, cst.ImportFrom) and node.relative:
        return Section.LOCAL
    top = module_name(node).split(".")[0]
    if top == "__future__":
        return Section.FUTURE
    if isinstance(project_type, Package) and top == project_type.import_name:
        return Section.FIRST_PARTY
    if top in sys.stdlib_module_names:
        return Section.STDLIB
    return Section.THIRD_PARTY


class ImportSorter(Normalizer):
    """Sort each run of adjacent top-level import lines.

    Imports are ordered by section (future, standard library, third party,
    first party, relative), then plain ``import`` before ``from``, then by
    module name.  Sections are separated by exactly one blank line and
    blank lines inside a section are removed.  Comments travel with the
    import they precede; the lines above the first import of a run stay
    at the top of the run.

    Lines holding several statements, or anything other than an import,
    end a run and are never moved.
    """

    def _sort_key(self, item: Tuple[Section, cst.SimpleStatementLine]) -> tuple:
        section, stmt = item
        node = _import_node(stmt)
        name = module_name(node)
        return (section, isinstance(node, cst.ImportFrom), name.lower(), name)

    def _relayout(
        self, run: List[cst.SimpleStatementLine]
    ) -> List[cst.SimpleStatementLine]:
        head = run[0]
        items = [(section_for(_import_node(s), self.project_type), s) for s in run]
        items.sort(key=self._sort_key)

        result: List[cst.SimpleStatementLine] = []
        previous: Optional[Section] = None
        for section, stmt in items:
            own: List[cst.EmptyLine] = []
            if stmt is not head:
                own = [ln for ln in stmt.leading_lines if not is_blank(ln)]
            if previous is None:
                lines = list(head.leading_lines) + own
            elif section != previous:
                lines = [cst.EmptyLine(indent=False)] + own
            else:
                lines = own
            result.append(stmt.with_changes(leading_lines=lines))
            previous = section
        return result

    def leave_Module(
        self, original_node: cst.Module, updated_node: cst.Module
    ) -> cst.Module:
        body: List[cst.CSTNode] = []
        run: List[cst.SimpleStatementLine] = []
        for stmt in list(updated_node.body) + [None]:
            if stmt is not None and _import_node(stmt) is not None:
                run.append(stmt)
                continue
            if len(run) > 1:
                body.extend(self._relayout(run))
            else:
                body.extend(run)
            run = []
            if stmt is not None:
                body.append(stmt)

        if all(a is b or a.deep_equals(b) for a, b in zip(body, updated_node.body)):
            return updated_node
        self.changes_made.append("ImportSorter: sorted imports")
        return updated_node.with_changes(body=body)
