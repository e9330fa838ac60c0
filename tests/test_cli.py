from __future__ import annotations

import logging

from argumenter.cli import main, split_types

PILL_SRC = """package main

type Pill struct {
	Name   string `arg:"required"`
	Amount uint8  `arg:"min=1,max=100,default=1"`
}
"""


def _write(tmp_path, text=PILL_SRC, name="pill.go"):
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_split_types():
    assert split_types("Pill, MyType,,") == ["Pill", "MyType"]
    assert split_types("") == []


def test_missing_type_is_usage_error(tmp_path, capsys):
    assert main([str(_write(tmp_path))]) == 2
    assert "usage:" in capsys.readouterr().err


def test_missing_file_is_usage_error(capsys):
    assert main(["-type", "Pill"]) == 2


def test_writes_default_output(tmp_path):
    src = _write(tmp_path)
    assert main([str(src), "-type", "Pill"]) == 0
    code = (tmp_path / "pill_argumenter.go").read_text(encoding="utf-8")
    assert code.startswith('// Code generated by "argumenter -type Pill"; DO NOT EDIT.\n')
    assert "func (p *Pill) Valid() error {" in code


def test_out_flag(tmp_path):
    src = _write(tmp_path)
    out = tmp_path / "gen" / "v.go"
    assert main([str(src), "-type=Pill", "-out", str(out)]) == 0
    assert out.exists()
    assert not (tmp_path / "pill_argumenter.go").exists()


def test_malformed_source_exits_nonzero(tmp_path, caplog):
    src = _write(tmp_path, "type Pill struct {}\n")
    with caplog.at_level(logging.ERROR):
        assert main([str(src), "-type", "Pill"]) == 1
    assert not (tmp_path / "pill_argumenter.go").exists()


def test_invalid_generated_code_exits_nonzero(tmp_path):
    src = _write(tmp_path, 'package main\n\ntype X struct {\n\tN int `arg:"default=("`\n}\n')
    assert main([str(src), "-type", "X"]) == 1
    assert not (tmp_path / "pill_argumenter.go").exists()


def test_invalid_config_is_usage_error(tmp_path):
    src = _write(tmp_path)
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("formatter: nope\n", encoding="utf-8")
    assert main([str(src), "-type", "Pill", "--config", str(cfg)]) == 2


def test_config_tag_key_is_used(tmp_path):
    src = _write(tmp_path, 'package main\n\ntype X struct {\n\tN int `check:"min=2"`\n}\n')
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("tag_key: check\nformatter: builtin\n", encoding="utf-8")
    assert main([str(src), "-type", "X", "--config", str(cfg)]) == 0
    assert "if x.N < 2 {" in (tmp_path / "pill_argumenter.go").read_text(encoding="utf-8")
