"""Full-stack example tests.

Each directory under examples/<rule>/<case>/ holds an input.py and the
expected.py the formatter must produce from it.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from kempt.engine import format_bytes, format_with_path
from kempt.results import Application, Change, FormattingSuccess, Package

EXAMPLES = Path(__file__).parent.parent / "examples"

# Cases that only make sense inside a named package.
_PROJECT_TYPES = {"03_package_first_party": Package("demo")}

CASES = sorted(p for p in EXAMPLES.glob("*/*") if (p / "input.py").is_file())


def _load(case: Path) -> tuple[bytes, bytes]:
    """Return (input_src, expected_src) for an example."""
    return (case / "input.py").read_bytes(), (case / "expected.py").read_bytes()


@pytest.mark.parametrize("case", CASES, ids=[f"{p.parent.name}/{p.name}" for p in CASES])
def test_example(case):
    source, expected = _load(case)
    project_type = _PROJECT_TYPES.get(case.name, Application())
    assert format_bytes(project_type, source) == expected


@pytest.mark.parametrize("case", CASES, ids=[f"{p.parent.name}/{p.name}" for p in CASES])
def test_expected_is_a_fixed_point(case):
    _, expected = _load(case)
    project_type = _PROJECT_TYPES.get(case.name, Application())
    result = format_with_path(project_type, str(case / "expected.py"), expected)
    assert result == FormattingSuccess(Change.NOT_CHANGED, expected)


def test_examples_exist():
    assert len(CASES) >= 6
