"""Load kempt configuration from pyproject.toml and optional .kempt.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import BadConfigError


@dataclass
class KemptConfig:
    """Style knobs for the normalizer."""

    # Maximum consecutive blank lines between top-level statements
    max_blank_lines: int = 2
    # Maximum consecutive blank lines inside an indented block
    max_nested_blank_lines: int = 1

    # Group and sort contiguous top-level import runs
    sort_imports: bool = True


@dataclass(frozen=True)
class Flags:
    """Per-run command-line switches."""

    skip_prompts: bool = False
    stdin: bool = False
    validate: bool = False


def _read_toml(path: Path) -> dict:
    """Read a TOML file; return empty dict if missing or unparseable."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError, UnicodeDecodeError):
        return {}


def _check(key: str, val: object, default: object) -> None:
    """Raise BadConfigError unless *val* has the type of *default*."""
    expected = type(default)
    # bool is an int subclass; neither may stand in for the other.
    if type(val) is not expected:
        raise BadConfigError(
            key, f"expected {expected.__name__}, got {type(val).__name__} {val!r}"
        )
    if expected is int and val < 0:
        raise BadConfigError(key, f"must not be negative, got {val}")


def _apply(cfg: KemptConfig, d: dict) -> None:
    """Overlay dict values onto cfg, ignoring unknown keys.

    Raises BadConfigError when a known key has a value of the wrong type.
    """
    valid = set(cfg.__dataclass_fields__)
    for raw_key, val in d.items():
        key = raw_key.replace("-", "_")
        if key in valid:
            _check(raw_key, val, getattr(cfg, key))
            setattr(cfg, key, val)


def load_config(project_root: Optional[Path] = None) -> KemptConfig:
    """Load config from pyproject.toml [tool.kempt], then .kempt.toml."""
    if project_root is None:
        project_root = Path.cwd()
    cfg = KemptConfig()
    pyproject = _read_toml(project_root / "pyproject.toml")
    _apply(cfg, pyproject.get("tool", {}).get("kempt", {}))
    local = _read_toml(project_root / ".kempt.toml")
    _apply(cfg, local)
    return cfg
