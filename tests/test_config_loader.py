import pytest

from project_structure_mcp.config_loader import (
    CONFIG_ENV_VAR,
    AnalyzerSettings,
    load_settings,
    load_yaml,
    settings_from_dict,
)


def test_missing_file_gives_defaults(tmp_path):
    assert load_yaml(tmp_path / "absent.yaml") == {}
    assert load_settings(tmp_path / "absent.yaml") == AnalyzerSettings()


def test_load_settings_from_yaml(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("sort_children: true\nmax_depth: 64\nlog_level: debug\n", encoding="utf-8")
    settings = load_settings(path)
    assert settings == AnalyzerSettings(sort_children=True, max_depth=64, log_level="DEBUG")


def test_load_settings_from_env(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("max_depth: 3\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert load_settings().max_depth == 3


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == AnalyzerSettings()


def test_non_mapping_yaml_is_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_yaml(path)


@pytest.mark.parametrize(
    "raw",
    [
        {"sort_children": "yes"},
        {"max_depth": 0},
        {"max_depth": True},
        {"max_depth": "10"},
        {"log_level": "chatty"},
    ],
)
def test_invalid_settings(raw):
    with pytest.raises(ValueError):
        settings_from_dict(raw)
