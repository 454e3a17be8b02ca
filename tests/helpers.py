"""Shared helpers for kempt tests."""

from io import StringIO
from pathlib import Path

from rich.console import Console

from kempt.pipeline.python import PythonFormatter
from kempt.results import Application

FORMATTED = b"import os\n\n\ndef f():\n    return os.sep\n"
UNFORMATTED = b"import os   \n\n\n\n\ndef f():\n    return os.sep\n\n\n"
BROKEN = b"def f(:\n    pass\n"

APP = Application()


def make_console() -> Console:
    """A console that records output instead of printing it."""
    return Console(file=StringIO(), highlight=False, soft_wrap=True, width=200)


def output(console: Console) -> str:
    return console.file.getvalue()


def formatter() -> PythonFormatter:
    return PythonFormatter()


def write(path: Path, data: bytes) -> str:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return str(path)
