"""CLI entry point: resolves inputs, drives the runner, reports failures."""

import logging
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .config import Flags, load_config
from .errors import KemptError
from .manifest import find_root
from .pipeline.python import PythonFormatter
from .runner import run

err_console = Console(stderr=True, highlight=False, soft_wrap=True)

app = typer.Typer(
    name="kempt",
    help="Format Python source files in place, or check that they are formatted.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def report(error: KemptError) -> None:
    """Print *error* as a titled block on stderr."""
    err_console.print(f"[red]-- {escape(error.title)} --[/red]")
    err_console.print()
    for line in error.report_lines():
        err_console.print(escape(line))
    err_console.print()


@app.command()
def main(
    paths: Annotated[
        Optional[List[str]],
        typer.Argument(
            help="Files or directories to format. Defaults to the project's source directories.",
            show_default=False,
        ),
    ] = None,
    stdin: Annotated[
        bool, typer.Option("--stdin", help="Format standard input onto standard output.")
    ] = False,
    skip_prompts: Annotated[
        bool,
        typer.Option(
            "--yes", "-y", "--skip-prompts", help="Overwrite files without asking first."
        ),
    ] = False,
    validate: Annotated[
        bool,
        typer.Option("--validate", help="Only check formatting; never write files."),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log debug output to stderr.")
    ] = False,
) -> None:
    """Format Python files, a whole project, or standard input."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    flags = Flags(skip_prompts=skip_prompts, stdin=stdin, validate=validate)
    root = find_root()
    try:
        config = load_config(root if root is not None else Path.cwd())
        run(paths or [], flags, formatter=PythonFormatter(config))
    except KemptError as exc:
        report(exc)
        raise typer.Exit(1)
