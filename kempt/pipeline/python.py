"""Python formatting pipeline built on libcst."""

import logging
from typing import List, Optional

import libcst as cst

from ..config import KemptConfig
from ..normalize.base import Normalizer
from ..normalize.imports import ImportSorter
from ..normalize.whitespace import WhitespaceNormalizer
from ..results import ParseError, ProjectType
from .base import SourceFormatter

logger = logging.getLogger(__name__)


class PythonFormatter(SourceFormatter[cst.Module]):
    """Parse with libcst, apply the normalization rules, render to bytes.

    The raw bytes go straight to libcst so that the declared encoding and
    line endings survive the round trip.
    """

    def __init__(self, config: Optional[KemptConfig] = None) -> None:
        self.config = config if config is not None else KemptConfig()

    def parse(self, project_type: ProjectType, source: bytes) -> cst.Module:
        try:
            return cst.parse_module(source)
        except cst.ParserSyntaxError as exc:
            raise ParseError(exc.message, exc.editor_line, exc.editor_column) from exc
        except (UnicodeDecodeError, SyntaxError) as exc:
            # Undecodable bytes or a bad coding cookie.
            raise ParseError(f"cannot decode source: {exc}") from exc

    def rules(self, project_type: ProjectType) -> List[Normalizer]:
        """Fresh rule instances, in application order."""
        rules: List[Normalizer] = []
        if self.config.sort_imports:
            rules.append(ImportSorter(project_type))
        # Runs last so it tidies whatever the other rules produced.
        rules.append(
            WhitespaceNormalizer(
                project_type,
                max_blank_lines=self.config.max_blank_lines,
                max_nested_blank_lines=self.config.max_nested_blank_lines,
            )
        )
        return rules

    def normalize(self, tree: cst.Module, project_type: ProjectType) -> cst.Module:
        for rule in self.rules(project_type):
            tree = tree.visit(rule)
            logger.debug(
                "applied %s (%d change(s))", rule.name(), len(rule.get_changes())
            )
            for change in rule.get_changes():
                logger.debug(change)
        return tree

    def render(self, tree: cst.Module) -> bytes:
        return tree.bytes
