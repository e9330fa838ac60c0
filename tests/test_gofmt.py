from __future__ import annotations

import pytest

from argumenter.core.config import GeneratorConfig
from argumenter.core.emit import gofmt
from argumenter.core.emit.gofmt import format_builtin, format_source
from argumenter.core.errors import FormatError

HEADER = "package p\n\nfunc (x *X) Valid() error {\n"


def test_reindents_by_nesting_depth():
    src = HEADER + "if x.A == 0 {\n    x.A = 1\n        }\nreturn nil\n}\n"
    assert format_builtin(src) == (
        "package p\n\nfunc (x *X) Valid() error {\n\tif x.A == 0 {\n\t\tx.A = 1\n\t}\n\treturn nil\n}\n"
    )


def test_blank_lines_collapse():
    src = "package p\n\n\n\nfunc (x *X) Valid() error {\n\n\treturn nil\n\n\n}\n\n\n"
    assert format_builtin(src) == "package p\n\nfunc (x *X) Valid() error {\n\treturn nil\n}\n"


def test_tokens_are_respaced():
    src = (
        "package p\n\nfunc (x  * X)Valid( )error{\n"
        "if x.A<  -1{\nreturn errors.New( \"a  b\" )\n}\n"
        "x.D=*new( time.Duration )\n"
        "x.S=[] * T{ }\n"
        "x.M=map[ string ]int{\"k\" :1, \"j\":2}\n"
        "return nil\n}\n"
    )
    assert format_builtin(src) == (
        "package p\n\nfunc (x *X) Valid() error {\n"
        "\tif x.A < -1 {\n\t\treturn errors.New(\"a  b\")\n\t}\n"
        "\tx.D = *new(time.Duration)\n"
        "\tx.S = []*T{}\n"
        "\tx.M = map[string]int{\"k\": 1, \"j\": 2}\n"
        "\treturn nil\n}\n"
    )


def test_generic_receiver_spacing():
    src = "package p\n\nfunc (p *Page[ K , V ]) Valid() error {\nif len( p.Items ) > 50 {\nreturn errors.New(\"x\")\n}\nreturn nil\n}\n"
    assert format_builtin(src) == (
        "package p\n\nfunc (p *Page[K, V]) Valid() error {\n"
        "\tif len(p.Items) > 50 {\n\t\treturn errors.New(\"x\")\n\t}\n\treturn nil\n}\n"
    )


def test_comments_and_strings_are_kept():
    src = '// header "quoted"\n\npackage p\n\nimport "errors" //  why  not\n'
    assert format_builtin(src) == src


def test_raw_string_lines_are_verbatim():
    src = HEADER + "\tx.S = `a\n    b {\n  c`\n\treturn nil\n}\n"
    assert format_builtin(src) == src


@pytest.mark.parametrize(
    "src",
    [
        HEADER,
        "package p\n\nfunc (x *X) Valid() error }\n",
        HEADER + "\tx.A = ( }\n",
        "func (x *X) Valid() error {\n\treturn nil\n}\n",
        'package p\n\nvar s = "unterminated\n',
        # only the generated shapes are accepted
        "package p\n\nvar s = 1\n",
        "package p\n\nfunc f() {\n\treturn\n}\n",
    ],
)
def test_malformed_output_raises_with_raw_text(src):
    with pytest.raises(FormatError) as ei:
        format_builtin(src)
    assert ei.value.raw == src


@pytest.mark.parametrize(
    "statement",
    [
        # empty operand
        "if x.A <  {\n\t\treturn errors.New(\"x\")\n\t}",
        # two operands side by side
        "x.A = 1 2",
        "if x.A > 1 + {\n\t\treturn errors.New(\"x\")\n\t}",
        "x.A = if",
        "return errors.New(\"a\" \"b\")",
    ],
)
def test_statement_that_is_not_go_is_rejected(statement):
    src = HEADER + "\t" + statement + "\n\treturn nil\n}\n"
    with pytest.raises(FormatError) as ei:
        format_builtin(src)
    assert ei.value.raw == src
    assert ei.value.line == 4
    assert "syntax error" in str(ei.value)


def test_unbalanced_reports_line():
    with pytest.raises(FormatError) as ei:
        format_builtin(HEADER + "\treturn nil\n)\n")
    assert ei.value.line == 5


def test_truncated_output_reports_last_line():
    with pytest.raises(FormatError) as ei:
        format_builtin(HEADER + "\treturn nil\n")
    assert ei.value.line == 5


def test_gofmt_mode_requires_binary(monkeypatch):
    monkeypatch.setattr(gofmt.shutil, "which", lambda name: None)
    with pytest.raises(FormatError):
        format_source("package p\n", GeneratorConfig(formatter="gofmt"))


def test_auto_mode_falls_back_to_builtin(monkeypatch):
    monkeypatch.setattr(gofmt.shutil, "which", lambda name: None)
    assert format_source("package p\n\n\n", GeneratorConfig(formatter="auto")) == "package p\n"


def test_auto_mode_uses_gofmt_when_found(monkeypatch):
    calls = []

    def fake_run(text, binary):
        calls.append((text, binary))
        return "package p // gofmt\n"

    monkeypatch.setattr(gofmt.shutil, "which", lambda name: "/usr/bin/gofmt")
    monkeypatch.setattr(gofmt, "run_gofmt", fake_run)
    assert format_source("package p\n", GeneratorConfig()) == "package p // gofmt\n"
    assert calls == [("package p\n", "/usr/bin/gofmt")]


def test_gofmt_failure_keeps_unformatted_text(monkeypatch):
    def failing(text, binary):
        raise FormatError("1:1: expected declaration", raw=text)

    monkeypatch.setattr(gofmt.shutil, "which", lambda name: "/usr/bin/gofmt")
    monkeypatch.setattr(gofmt, "run_gofmt", failing)
    with pytest.raises(FormatError) as ei:
        format_source("package p\n\n\n", GeneratorConfig(formatter="gofmt"))
    assert ei.value.raw == "package p\n\n\n"


def test_gofmt_mode_leaves_syntax_checking_to_gofmt(monkeypatch):
    calls = []

    def fake_run(text, binary):
        calls.append(text)
        return text

    monkeypatch.setattr(gofmt.shutil, "which", lambda name: "/usr/bin/gofmt")
    monkeypatch.setattr(gofmt, "run_gofmt", fake_run)
    src = "package p\n\nvar s = 1\n"
    assert format_source(src, GeneratorConfig(formatter="gofmt")) == src
    assert calls == [src]
