"""Read project identity and source directories from pyproject.toml."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import BadManifestError, NoManifestError
from .results import Application, Package, ProjectType

logger = logging.getLogger(__name__)

MANIFEST_NAME = "pyproject.toml"

_DEFAULT_SOURCE_DIRS = {
    "application": ["."],
    "package": ["src"],
}


@dataclass(frozen=True)
class Manifest:
    project_type: ProjectType
    # As declared, relative to the working directory; not checked for existence.
    source_dirs: Tuple[str, ...]


def find_root(start: Optional[Path] = None) -> Optional[Path]:
    """Return the nearest directory at or above *start* holding a pyproject.toml."""
    p = (start if start is not None else Path.cwd()).resolve()
    while True:
        if (p / MANIFEST_NAME).is_file():
            return p
        if p == p.parent:
            return None
        p = p.parent


def _load(path: Path) -> dict:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except OSError as exc:
        raise BadManifestError(str(path), f"cannot read file: {exc.strerror}") from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise BadManifestError(str(path), f"invalid TOML: {exc}") from exc


def _source_dirs(path: Path, table: dict, kind: str) -> List[str]:
    dirs = table.get("source-directories", _DEFAULT_SOURCE_DIRS[kind])
    if (
        not isinstance(dirs, list)
        or not dirs
        or not all(isinstance(d, str) and d for d in dirs)
    ):
        raise BadManifestError(
            str(path),
            "[tool.kempt] source-directories must be a non-empty list of strings",
        )
    return dirs


def read_manifest(root: Path) -> Manifest:
    """Read the project type and declared source directories under *root*."""
    path = root / MANIFEST_NAME
    data = _load(path)
    table = data.get("tool", {}).get("kempt", {})
    if not isinstance(table, dict):
        raise BadManifestError(str(path), "[tool.kempt] must be a table")

    kind = table.get("type", "application")
    if kind not in _DEFAULT_SOURCE_DIRS:
        raise BadManifestError(
            str(path),
            f"[tool.kempt] type must be 'application' or 'package', not {kind!r}",
        )

    project_type: ProjectType
    if kind == "package":
        name = data.get("project", {}).get("name")
        if not isinstance(name, str) or not name:
            raise BadManifestError(
                str(path), "a package needs a [project] name to be declared"
            )
        project_type = Package(name)
    else:
        project_type = Application()

    dirs = _source_dirs(path, table, kind)
    source_dirs = tuple(os.path.relpath(root / d) for d in dirs)
    logger.debug("manifest %s: %s, source dirs %s", path, project_type, source_dirs)
    return Manifest(project_type, source_dirs)


def load_manifest(start: Optional[Path] = None) -> Manifest:
    """Locate the project root from *start* and read its manifest."""
    root = find_root(start)
    if root is None:
        raise NoManifestError(str(start if start is not None else Path.cwd()))
    return read_manifest(root)
