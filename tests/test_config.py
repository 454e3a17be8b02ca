"""Tests for kempt.config."""

import pytest

from kempt.config import Flags, KemptConfig, _apply, _read_toml, load_config
from kempt.errors import BadConfigError, ConfigurationError


# ---------------------------------------------------------------------------
# _read_toml
# ---------------------------------------------------------------------------


def test_read_toml_success(tmp_path):
    toml_file = tmp_path / "test.toml"
    toml_file.write_text("[tool.kempt]\nmax_blank_lines = 1\n", encoding="utf-8")
    result = _read_toml(toml_file)
    assert result == {"tool": {"kempt": {"max_blank_lines": 1}}}


def test_read_toml_missing_file(tmp_path):
    assert _read_toml(tmp_path / "nonexistent.toml") == {}


def test_read_toml_invalid_toml(tmp_path):
    bad_file = tmp_path / "bad.toml"
    bad_file.write_text("[tool.kempt\n", encoding="utf-8")
    assert _read_toml(bad_file) == {}


def test_read_toml_invalid_utf8(tmp_path):
    bad_file = tmp_path / "bad.toml"
    bad_file.write_bytes(b"\x80\x81\x82")
    assert _read_toml(bad_file) == {}


# ---------------------------------------------------------------------------
# _apply
# ---------------------------------------------------------------------------


def test_apply_empty_dict():
    cfg = KemptConfig()
    _apply(cfg, {})
    assert cfg == KemptConfig()


def test_apply_known_key():
    cfg = KemptConfig()
    _apply(cfg, {"sort_imports": False})
    assert cfg.sort_imports is False


def test_apply_accepts_dashed_keys():
    cfg = KemptConfig()
    _apply(cfg, {"max-nested-blank-lines": 0})
    assert cfg.max_nested_blank_lines == 0


def test_apply_ignores_manifest_keys():
    cfg = KemptConfig()
    _apply(cfg, {"type": "package", "source-directories": ["src"]})
    assert cfg == KemptConfig()


@pytest.mark.parametrize(
    "values",
    [
        {"max-blank-lines": "2"},
        {"max_nested_blank_lines": 1.5},
        {"max-blank-lines": True},
        {"sort-imports": "false"},
        {"sort_imports": 0},
    ],
)
def test_apply_rejects_wrong_types(values):
    cfg = KemptConfig()
    with pytest.raises(BadConfigError) as exc_info:
        _apply(cfg, values)
    assert isinstance(exc_info.value, ConfigurationError)
    assert exc_info.value.key == next(iter(values))
    assert cfg == KemptConfig()


def test_apply_rejects_negative_counts():
    with pytest.raises(BadConfigError, match="negative"):
        _apply(KemptConfig(), {"max-blank-lines": -1})


# ---------------------------------------------------------------------------
# load_config
# ---------------------------------------------------------------------------


def test_load_config_defaults_when_no_files(tmp_path):
    assert load_config(project_root=tmp_path) == KemptConfig()


def test_load_config_reads_pyproject_toml(tmp_path):
    (tmp_path / "pyproject.toml").write_text(
        "[tool.kempt]\nmax_blank_lines = 1\n", encoding="utf-8"
    )
    cfg = load_config(project_root=tmp_path)
    assert cfg.max_blank_lines == 1
    assert cfg.sort_imports is True


def test_load_config_local_overrides_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text(
        "[tool.kempt]\nmax_blank_lines = 1\nsort_imports = true\n", encoding="utf-8"
    )
    (tmp_path / ".kempt.toml").write_text("sort_imports = false\n", encoding="utf-8")
    cfg = load_config(project_root=tmp_path)
    assert cfg.max_blank_lines == 1  # from pyproject
    assert cfg.sort_imports is False  # overridden by .kempt.toml


def test_load_config_uses_cwd_when_no_root(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "pyproject.toml").write_text(
        "[tool.kempt]\nmax_nested_blank_lines = 2\n", encoding="utf-8"
    )
    assert load_config().max_nested_blank_lines == 2


def test_flags_default_to_interactive_format_mode():
    assert Flags() == Flags(skip_prompts=False, stdin=False, validate=False)


def test_load_config_reports_bad_value(tmp_path):
    (tmp_path / "pyproject.toml").write_text(
        '[tool.kempt]\nmax-blank-lines = "2"\n', encoding="utf-8"
    )
    with pytest.raises(BadConfigError, match="max-blank-lines"):
        load_config(project_root=tmp_path)
