"""Rule: trailing whitespace, blank-line runs, and end of file."""

from typing import Union

import libcst as cst

from ..results import Application, ProjectType
from .base import (
    Normalizer,
    collapse_blank_lines,
    is_blank,
    strip_leading_blank_lines,
    strip_trailing_blank_lines,
)


class WhitespaceNormalizer(Normalizer):
    """Canonicalize whitespace that carries no meaning.

    * trailing spaces and tabs are removed from code lines, blank lines and
      comments;
    * runs of blank lines are capped at ``max_blank_lines`` between
      top-level statements and ``max_nested_blank_lines`` inside blocks;
    * blank lines at the start and end of the file are removed and a
      non-empty file always ends with a newline.

    String contents are never touched.
    """

    def __init__(
        self,
        project_type: ProjectType = Application(),
        max_blank_lines: int = 2,
        max_nested_blank_lines: int = 1,
    ) -> None:
        super().__init__(project_type)
        self.max_blank_lines = max_blank_lines
        self.max_nested_blank_lines = max_nested_blank_lines
        self._depth = 0

    def _note(self, change: str) -> None:
        if change not in self.changes_made:
            self.changes_made.append(change)

    def _limit(self) -> int:
        return self.max_blank_lines if self._depth == 0 else self.max_nested_blank_lines

    # -- trailing whitespace ------------------------------------------------

    def leave_TrailingWhitespace(
        self, original_node: cst.TrailingWhitespace, updated_node: cst.TrailingWhitespace
    ) -> cst.TrailingWhitespace:
        if updated_node.comment is not None or not updated_node.whitespace.value:
            return updated_node
        self._note("WhitespaceNormalizer: removed trailing whitespace")
        return updated_node.with_changes(whitespace=cst.SimpleWhitespace(""))

    def leave_Comment(
        self, original_node: cst.Comment, updated_node: cst.Comment
    ) -> cst.Comment:
        stripped = updated_node.value.rstrip()
        if stripped == updated_node.value:
            return updated_node
        self._note("WhitespaceNormalizer: removed trailing whitespace")
        return updated_node.with_changes(value=stripped)

    def leave_EmptyLine(
        self, original_node: cst.EmptyLine, updated_node: cst.EmptyLine
    ) -> cst.EmptyLine:
        if not is_blank(updated_node):
            return updated_node
        if not updated_node.indent and not updated_node.whitespace.value:
            return updated_node
        self._note("WhitespaceNormalizer: removed trailing whitespace")
        return updated_node.with_changes(
            indent=False, whitespace=cst.SimpleWhitespace("")
        )

    # -- blank-line runs ----------------------------------------------------

    def visit_IndentedBlock(self, node: cst.IndentedBlock) -> bool:
        self._depth += 1
        return True

    def leave_IndentedBlock(
        self, original_node: cst.IndentedBlock, updated_node: cst.IndentedBlock
    ) -> cst.IndentedBlock:
        self._depth -= 1
        footer = collapse_blank_lines(updated_node.footer, self.max_nested_blank_lines)
        if len(footer) == len(updated_node.footer):
            return updated_node
        self._note("WhitespaceNormalizer: collapsed blank lines")
        return updated_node.with_changes(footer=footer)

    def on_leave(
        self, original_node: cst.CSTNode, updated_node: cst.CSTNode
    ) -> Union[cst.CSTNode, cst.RemovalSentinel, cst.FlattenSentinel]:
        result = super().on_leave(original_node, updated_node)
        if not isinstance(result, cst.CSTNode) or isinstance(result, cst.Module):
            return result
        leading = getattr(result, "leading_lines", None)
        if not leading:
            return result
        collapsed = collapse_blank_lines(leading, self._limit())
        if len(collapsed) == len(leading):
            return result
        self._note("WhitespaceNormalizer: collapsed blank lines")
        return result.with_changes(leading_lines=collapsed)

    # -- start and end of file ---------------------------------------------

    def leave_Module(
        self, original_node: cst.Module, updated_node: cst.Module
    ) -> cst.Module:
        header = strip_leading_blank_lines(
            collapse_blank_lines(updated_node.header, self.max_blank_lines)
        )
        body = list(updated_node.body)
        if not body:
            header = strip_trailing_blank_lines(header)
        if not header and body:
            first_lines = strip_leading_blank_lines(body[0].leading_lines)
            if len(first_lines) != len(body[0].leading_lines):
                body[0] = body[0].with_changes(leading_lines=first_lines)
        footer = strip_trailing_blank_lines(
            collapse_blank_lines(updated_node.footer, self.max_blank_lines)
        )
        has_trailing_newline = updated_node.has_trailing_newline
        if body or header or footer:
            has_trailing_newline = True

        new_node = updated_node.with_changes(
            header=header,
            body=body,
            footer=footer,
            has_trailing_newline=has_trailing_newline,
        )
        if not new_node.deep_equals(updated_node):
            self._note("WhitespaceNormalizer: trimmed start and end of file")
        return new_node
