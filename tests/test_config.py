from __future__ import annotations

import json

import pytest

from argumenter.core.config import GeneratorConfig, load_config
from argumenter.core.errors import ConfigError


def test_defaults_without_file():
    cfg = load_config()
    assert cfg == GeneratorConfig()
    assert cfg.tag_key == "arg"
    assert cfg.method_name == "Valid"
    assert cfg.formatter == "auto"


def test_yaml_file(tmp_path):
    f = tmp_path / "cfg.yaml"
    f.write_text("tag_key: check\nmethod_name: Validate\nformatter: builtin\n", encoding="utf-8")
    cfg = load_config(f)
    assert (cfg.tag_key, cfg.method_name, cfg.formatter) == ("check", "Validate", "builtin")


def test_json_file(tmp_path):
    f = tmp_path / "cfg.json"
    f.write_text(json.dumps({"output_suffix": "_valid.go"}), encoding="utf-8")
    assert load_config(f).output_suffix == "_valid.go"


def test_default_file_in_working_directory(tmp_path):
    (tmp_path / "argumenter.yaml").write_text("method_name: Check\n", encoding="utf-8")
    assert load_config().method_name == "Check"


def test_env_file_and_overrides(tmp_path, monkeypatch):
    f = tmp_path / "env.yaml"
    f.write_text("tag_key: fromfile\nmethod_name: FromFile\n", encoding="utf-8")
    monkeypatch.setenv("ARGUMENTER_CONFIG_FILE", str(f))
    monkeypatch.setenv("ARGUMENTER_METHOD_NAME", "FromEnv")
    monkeypatch.setenv("ARGUMENTER_LOG_LEVEL", "debug")
    cfg = load_config()
    assert cfg.tag_key == "fromfile"
    assert cfg.method_name == "FromEnv"
    assert cfg.log_level == "DEBUG"


def test_keyword_overrides_win_and_none_is_ignored(monkeypatch):
    monkeypatch.setenv("ARGUMENTER_TAG_KEY", "env")
    cfg = load_config(tag_key="kw", method_name=None)
    assert cfg.tag_key == "kw"
    assert cfg.method_name == "Valid"


def test_non_mapping_file_is_ignored(tmp_path):
    f = tmp_path / "list.json"
    f.write_text(json.dumps([1, 2]), encoding="utf-8")
    assert load_config(f) == GeneratorConfig()


def test_malformed_file_is_ignored(tmp_path):
    f = tmp_path / "bad.yaml"
    f.write_text("this: is: not: valid: yaml:\n  {{{{", encoding="utf-8")
    assert load_config(f) == GeneratorConfig()


def test_missing_explicit_file_uses_defaults(tmp_path):
    assert load_config(tmp_path / "nope.yaml") == GeneratorConfig()


@pytest.mark.parametrize(
    "values",
    [{"formatter": "clang"}, {"tag_key": "  "}, {"unknown_key": 1}],
)
def test_invalid_values_raise_config_error(tmp_path, values):
    f = tmp_path / "cfg.json"
    f.write_text(json.dumps(values), encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(f)
