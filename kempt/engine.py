"""Run the formatting pipeline over one source unit and classify the result."""

from typing import Optional

from .pipeline.base import SourceFormatter
from .pipeline.python import PythonFormatter
from .results import (
    Change,
    FormattingFailure,
    FormattingResult,
    FormattingSuccess,
    ParseError,
    ProjectType,
)


def format_bytes(
    project_type: ProjectType,
    original: bytes,
    formatter: Optional[SourceFormatter] = None,
) -> bytes:
    """Parse, normalize and render *original*.

    Raises ParseError when the source does not parse.  No I/O happens here.
    """
    if formatter is None:
        formatter = PythonFormatter()
    tree = formatter.parse(project_type, original)
    return formatter.render(formatter.normalize(tree, project_type))


def format_with_path(
    project_type: ProjectType,
    path: Optional[str],
    original: bytes,
    formatter: Optional[SourceFormatter] = None,
) -> FormattingResult:
    """Format *original* and classify it by byte equality with the output.

    *path* is None for stdin and only travels into a failure result.
    """
    try:
        formatted = format_bytes(project_type, original, formatter)
    except ParseError as exc:
        return FormattingFailure(path, original, exc)
    if formatted == original:
        return FormattingSuccess(Change.NOT_CHANGED, formatted)
    return FormattingSuccess(Change.CHANGED, formatted)
