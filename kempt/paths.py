"""Turn command-line paths (or their absence) into the run's Inputs."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set

from .errors import StdinWithFilesError
from .manifest import load_manifest
from .results import Files, Inputs, Project, Stdin

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".py"

# Build cache, dependency environment, version control.
IGNORED_NAMES = frozenset({"__pycache__", ".venv", ".git"})


def resolve_inputs(
    paths: Sequence[str],
    stdin: bool,
    project_root: Optional[Path] = None,
) -> Inputs:
    """Decide what this run operates on.

    Raises StdinWithFilesError when --stdin is combined with paths, and the
    manifest errors from load_manifest when falling back to the project.
    """
    if stdin and paths:
        raise StdinWithFilesError()
    if stdin:
        return Stdin()
    if not paths:
        manifest = load_manifest(project_root)
        existing = [d for d in manifest.source_dirs if os.path.isdir(d)]
        for missing in set(manifest.source_dirs) - set(existing):
            logger.debug("skipping missing source directory %s", missing)
        return Project(manifest.project_type, tuple(resolve_files(existing)))
    return Files(tuple(resolve_files(paths)))


def resolve_files(paths: Iterable[str]) -> List[str]:
    """Expand paths into source files, deduplicated, in a stable order.

    A named path ending in the source suffix is kept even if it does not
    exist so that the runner can report it.
    """
    found: List[str] = []
    seen_files: Set[str] = set()
    seen_dirs: Set[str] = set()
    for path in paths:
        if os.path.isdir(path):
            candidates = _walk(path, seen_dirs)
        elif path.endswith(SOURCE_SUFFIX) and (
            os.path.isfile(path) or not os.path.lexists(path)
        ):
            candidates = [path]
        else:
            candidates = []
        for candidate in candidates:
            key = os.path.normcase(os.path.abspath(candidate))
            if key not in seen_files:
                seen_files.add(key)
                found.append(candidate)
    logger.debug("resolved %d source file(s)", len(found))
    return found


def _walk(directory: str, seen_dirs: Set[str]) -> List[str]:
    """Recursively list source files under *directory*.

    Each real directory is entered at most once, so symlink cycles end.
    """
    real = os.path.realpath(directory)
    if real in seen_dirs:
        return []
    seen_dirs.add(real)

    try:
        names = sorted(os.listdir(directory))
    except OSError as exc:
        logger.warning("cannot list %s: %s", directory, exc.strerror)
        return []

    files: List[str] = []
    for name in names:
        if name in IGNORED_NAMES:
            continue
        child = os.path.join(directory, name)
        if os.path.isdir(child):
            files.extend(_walk(child, seen_dirs))
        elif os.path.isfile(child) and name.endswith(SOURCE_SUFFIX):
            files.append(child)
    return files
