"""Drive the engine over the resolved inputs in format or validate mode."""

import logging
import os
import sys
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, TextIO, Tuple

from rich.console import Console
from rich.markup import escape

from .config import Flags
from .engine import format_with_path
from .errors import (
    STDIN_NAME,
    FormatErrors,
    PathUnknownError,
    ValidateErrors,
)
from .paths import resolve_inputs
from .pipeline.base import SourceFormatter
from .pipeline.python import PythonFormatter
from .results import (
    Application,
    Change,
    Files,
    FormattingFailure,
    FormattingResult,
    Inputs,
    Project,
    ProjectType,
    Stdin,
    aggregate,
    formatting_failure,
    validate_failure,
)
from .stats import RunStats

logger = logging.getLogger(__name__)

console = Console(highlight=False, soft_wrap=True)

_FORMAT_STATUS = {
    Change.CHANGED: "[green]CHANGED[/green]",
    Change.NOT_CHANGED: "[dim](no changes)[/dim]",
}
_VALIDATE_STATUS = {
    Change.CHANGED: "[red]INVALID[/red]",
    Change.NOT_CHANGED: "[green]VALID[/green]",
}
_PARSE_ERROR_STATUS = "[red](parse error)[/red]"


def run(
    paths: Sequence[str],
    flags: Flags,
    formatter: Optional[SourceFormatter] = None,
    out: Optional[Console] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
    project_root: Optional[Path] = None,
) -> List[FormattingResult]:
    """Resolve inputs and run the requested mode.

    Returns the per-file results in input order (empty if the user declined
    the prompt).  Raises a KemptError subclass when the run fails.
    """
    inputs = resolve_inputs(paths, flags.stdin, project_root)
    if formatter is None:
        formatter = PythonFormatter()
    if out is None:
        out = console
    if flags.validate:
        return validate(inputs, formatter, out, stdin)
    return format_inputs(inputs, flags, formatter, out, stdin, stdout)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def assert_files_exist(paths: Sequence[str]) -> None:
    """Raise PathUnknownError for the first path that is not a file."""
    for path in paths:
        if not os.path.isfile(path):
            raise PathUnknownError(path)


def ask(out: Console, prompt: str, answers: Optional[TextIO] = None) -> bool:
    """Ask a yes/no question; an empty answer or end of input means yes."""
    while True:
        try:
            answer = out.input(escape(prompt), stream=answers)
        except EOFError:
            out.print()
            return True
        answer = answer.strip().lower()
        if answer in ("", "y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
        prompt = "Must type 'y' for yes or 'n' for no: "


def confirm_format(
    paths: Sequence[str],
    skip_prompts: bool,
    out: Console,
    answers: Optional[TextIO] = None,
) -> bool:
    """Return True if the files may be overwritten.

    Called once, before any file is touched.
    """
    if skip_prompts or not paths:
        return True
    out.print("This will overwrite the following files to use kempt's preferred style:")
    out.print()
    for path in paths:
        out.print(f"    {escape(path)}")
    out.print()
    out.print("This cannot be undone! Make sure to back up these files before proceeding.")
    out.print()
    return ask(
        out,
        "Are you sure you want to overwrite these files with formatted versions? [Y/n]: ",
        answers,
    )


def _read_stdin(stdin: Optional[BinaryIO]) -> bytes:
    return (stdin if stdin is not None else sys.stdin.buffer).read()


# ---------------------------------------------------------------------------
# Format mode
# ---------------------------------------------------------------------------


def format_inputs(
    inputs: Inputs,
    flags: Flags,
    formatter: SourceFormatter,
    out: Console,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
    answers: Optional[TextIO] = None,
) -> List[FormattingResult]:
    if isinstance(inputs, Stdin):
        return [format_stdin(formatter, stdin, stdout)]
    if isinstance(inputs, Files):
        return format_files_on_disk(
            flags, Application(), inputs.paths, formatter, out, answers
        )
    if isinstance(inputs, Project):
        return format_files_on_disk(
            flags, inputs.project_type, inputs.paths, formatter, out, answers
        )
    raise TypeError(f"unknown inputs: {inputs!r}")


def format_stdin(
    formatter: SourceFormatter,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> FormattingResult:
    """Format standard input onto standard output; nothing else is written there."""
    result = format_with_path(Application(), None, _read_stdin(stdin), formatter)
    if isinstance(result, FormattingFailure):
        raise FormatErrors([result])
    target = stdout if stdout is not None else sys.stdout.buffer
    target.write(result.formatted)
    target.flush()
    return result


def format_files_on_disk(
    flags: Flags,
    project_type: ProjectType,
    paths: Sequence[str],
    formatter: SourceFormatter,
    out: Console,
    answers: Optional[TextIO] = None,
) -> List[FormattingResult]:
    """Confirm, then format and overwrite each changed file in order."""
    assert_files_exist(paths)
    if not confirm_format(paths, flags.skip_prompts, out, answers):
        out.print("Okay, I did not change anything!")
        return []

    stats = RunStats()
    out.print()
    results: List[Tuple[str, FormattingResult]] = []
    for path in paths:
        results.append((path, format_file(project_type, path, formatter, out, stats)))
    out.print()
    for line in stats.format_summary():
        out.print(escape(line))

    failures = aggregate(results, formatting_failure)
    if failures:
        raise FormatErrors(failures)
    return [result for _, result in results]


def format_file(
    project_type: ProjectType,
    path: str,
    formatter: SourceFormatter,
    out: Console,
    stats: RunStats,
) -> FormattingResult:
    original = Path(path).read_bytes()
    result = format_with_path(project_type, path, original, formatter)
    if isinstance(result, FormattingFailure):
        status = _PARSE_ERROR_STATUS
    else:
        if result.change is Change.CHANGED:
            Path(path).write_bytes(result.formatted)
        status = _FORMAT_STATUS[result.change]
    out.print(f"Formatting {escape(path)} {status}")
    stats.record(path, original, result)
    logger.debug("formatted %s: %s", path, type(result).__name__)
    return result


# ---------------------------------------------------------------------------
# Validate mode
# ---------------------------------------------------------------------------


def validate(
    inputs: Inputs,
    formatter: SourceFormatter,
    out: Console,
    stdin: Optional[BinaryIO] = None,
) -> List[FormattingResult]:
    if isinstance(inputs, Stdin):
        return [validate_stdin(formatter, out, stdin)]
    if isinstance(inputs, Files):
        return validate_files(Application(), inputs.paths, formatter, out)
    if isinstance(inputs, Project):
        return validate_files(inputs.project_type, inputs.paths, formatter, out)
    raise TypeError(f"unknown inputs: {inputs!r}")


def _validate_status(result: FormattingResult) -> str:
    if isinstance(result, FormattingFailure):
        return _PARSE_ERROR_STATUS
    return _VALIDATE_STATUS[result.change]


def validate_stdin(
    formatter: SourceFormatter,
    out: Console,
    stdin: Optional[BinaryIO] = None,
) -> FormattingResult:
    result = format_with_path(Application(), None, _read_stdin(stdin), formatter)
    out.print(f"Validating {STDIN_NAME} {_validate_status(result)}")
    failures = aggregate([(None, result)], validate_failure)
    if failures:
        raise ValidateErrors(failures)
    return result


def validate_files(
    project_type: ProjectType,
    paths: Sequence[str],
    formatter: SourceFormatter,
    out: Console,
) -> List[FormattingResult]:
    """Report whether each file is already formatted; never writes."""
    assert_files_exist(paths)
    stats = RunStats(dry_run=True)
    out.print()
    results: List[Tuple[str, FormattingResult]] = []
    for path in paths:
        results.append((path, validate_file(project_type, path, formatter, out, stats)))
    out.print()
    for line in stats.format_summary():
        out.print(escape(line))

    failures = aggregate(results, validate_failure)
    if failures:
        raise ValidateErrors(failures)
    return [result for _, result in results]


def validate_file(
    project_type: ProjectType,
    path: str,
    formatter: SourceFormatter,
    out: Console,
    stats: RunStats,
) -> FormattingResult:
    original = Path(path).read_bytes()
    result = format_with_path(project_type, path, original, formatter)
    out.print(f"Validating {escape(path)} {_validate_status(result)}")
    stats.record(path, original, result)
    logger.debug("validated %s: %s", path, type(result).__name__)
    return result
