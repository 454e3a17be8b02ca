"""Abstract parse/normalize/render pipeline driven by the engine."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..results import ProjectType

Tree = TypeVar("Tree")


class SourceFormatter(ABC, Generic[Tree]):
    """One language's formatting pipeline.

    ``parse`` is the only step allowed to fail (by raising ParseError);
    ``normalize`` and ``render`` must be total.  None of the steps may
    perform I/O.
    """

    @abstractmethod
    def parse(self, project_type: ProjectType, source: bytes) -> Tree: ...

    @abstractmethod
    def normalize(self, tree: Tree, project_type: ProjectType) -> Tree: ...

    @abstractmethod
    def render(self, tree: Tree) -> bytes: ...
