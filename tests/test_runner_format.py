"""Format-mode batch tests."""

from io import StringIO
from pathlib import Path

import pytest

from kempt.config import Flags
from kempt.errors import FormatErrors, PathUnknownError
from kempt.results import Change, FormattingFailure, FormattingSuccess
from kempt.runner import format_files_on_disk

from .helpers import (
    APP,
    BROKEN,
    FORMATTED,
    UNFORMATTED,
    formatter,
    make_console,
    output,
    write,
)

YES = Flags(skip_prompts=True)


def _format(paths, flags=YES, answers=None):
    console = make_console()
    results = format_files_on_disk(flags, APP, paths, formatter(), console, answers)
    return results, output(console)


def test_rewrites_changed_files(tmp_path):
    a = write(tmp_path / "a.py", FORMATTED)
    b = write(tmp_path / "b.py", UNFORMATTED)
    results, out = _format([a, b])
    assert results == [
        FormattingSuccess(Change.NOT_CHANGED, FORMATTED),
        FormattingSuccess(Change.CHANGED, FORMATTED),
    ]
    assert Path(b).read_bytes() == FORMATTED
    assert f"Formatting {a} (no changes)" in out
    assert f"Formatting {b} CHANGED" in out


def test_unchanged_files_are_not_written(tmp_path):
    a = write(tmp_path / "a.py", FORMATTED)
    mtime = Path(a).stat().st_mtime_ns
    _format([a])
    assert Path(a).stat().st_mtime_ns == mtime


def test_status_lines_follow_input_order(tmp_path):
    c = write(tmp_path / "c.py", FORMATTED)
    a = write(tmp_path / "a.py", UNFORMATTED)
    b = write(tmp_path / "b.py", FORMATTED)
    _, out = _format([c, a, b])
    assert out.index(c) < out.index(a) < out.index(b)


def test_parse_errors_fail_at_the_end(tmp_path):
    bad = write(tmp_path / "bad.py", BROKEN)
    good = write(tmp_path / "good.py", UNFORMATTED)
    worse = write(tmp_path / "worse.py", b"x = (\n")
    with pytest.raises(FormatErrors) as exc_info:
        _format([bad, good, worse])
    failures = exc_info.value.failures
    assert [f.path for f in failures] == [bad, worse]
    assert all(isinstance(f, FormattingFailure) for f in failures)
    # later files were still processed
    assert Path(good).read_bytes() == FORMATTED
    assert Path(bad).read_bytes() == BROKEN


def test_missing_file_fails_before_any_work(tmp_path):
    a = write(tmp_path / "a.py", UNFORMATTED)
    missing = str(tmp_path / "missing.py")
    console = make_console()
    with pytest.raises(PathUnknownError) as exc_info:
        format_files_on_disk(YES, APP, [a, missing], formatter(), console)
    assert exc_info.value.path == missing
    assert Path(a).read_bytes() == UNFORMATTED
    assert "Formatting" not in output(console)


def test_prompt_lists_files_and_accepts_yes(tmp_path):
    b = write(tmp_path / "b.py", UNFORMATTED)
    _, out = _format([b], flags=Flags(), answers=StringIO("y\n"))
    assert "This will overwrite the following files" in out
    assert f"    {b}" in out
    assert Path(b).read_bytes() == FORMATTED


def test_declining_changes_nothing(tmp_path):
    b = write(tmp_path / "b.py", UNFORMATTED)
    results, out = _format([b], flags=Flags(), answers=StringIO("n\n"))
    assert results == []
    assert "Okay, I did not change anything!" in out
    assert Path(b).read_bytes() == UNFORMATTED


def test_prints_summary(tmp_path):
    b = write(tmp_path / "b.py", UNFORMATTED)
    _, out = _format([b])
    assert "--- kempt summary ---" in out
    assert f"files edited (1): {b}" in out
