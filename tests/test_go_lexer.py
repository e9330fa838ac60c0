from __future__ import annotations

import pytest

from argumenter.core.errors import SourceError
from argumenter.core.source.go_lexer import EOF, IDENT, KEYWORD, NUMBER, OP, SEMI, STRING, tokenize


def _kinds(text):
    return [(t.kind, t.value) for t in tokenize(text)]


def test_semicolons_inserted_after_line_enders():
    assert _kinds("x := 1\nreturn\n}\n") == [
        (IDENT, "x"), (OP, ":="), (NUMBER, "1"), (SEMI, "\n"),
        (KEYWORD, "return"), (SEMI, "\n"),
        (OP, "}"), (SEMI, "\n"),
        (EOF, ""),
    ]


def test_no_semicolon_after_open_brace_or_operator():
    kinds = [k for k, _ in _kinds("if a {\nb +\nc\n")]
    assert kinds == [KEYWORD, IDENT, OP, IDENT, OP, IDENT, SEMI, EOF]


def test_semicolon_at_end_of_input():
    assert _kinds("package p")[-2:] == [(SEMI, "\n"), (EOF, "")]


def test_comments_are_dropped():
    toks = _kinds("a // tail\n/* one */ b /* two\nlines */ c")
    assert toks == [(IDENT, "a"), (SEMI, "\n"), (IDENT, "b"), (SEMI, "\n"), (IDENT, "c"), (SEMI, "\n"), (EOF, "")]


def test_positions():
    toks = tokenize("package p\n\n  type X int\n")
    x = [t for t in toks if t.value == "X"][0]
    assert (x.line, x.col) == (3, 8)


def test_raw_string_spans_lines():
    toks = tokenize("a `x\ny` b\n")
    assert toks[1].kind == STRING
    assert toks[1].value == "`x\ny`"
    assert toks[1].line == 1
    assert [t for t in toks if t.value == "b"][0].line == 2


def test_numbers_and_operators():
    values = [t.value for t in tokenize("x <<= 0x1F + .5e3 &^ 1_000i ...")]
    assert values[:8] == ["x", "<<=", "0x1F", "+", ".5e3", "&^", "1_000i", "..."]


def test_unicode_identifiers_and_bom():
    toks = tokenize("\ufeffpackage größe\n")
    assert toks[1].kind == IDENT
    assert toks[1].value == "größe"


@pytest.mark.parametrize(
    "text,line",
    [
        ('x := "abc\n', 1),
        ("a\n`open", 2),
        ("a /* never closed", 1),
        ("a\n\n'x", 3),
        ("a @ b", 1),
    ],
)
def test_lexical_errors(text, line):
    with pytest.raises(SourceError) as ei:
        tokenize(text, "f.go")
    assert ei.value.line == line
    assert ei.value.filename == "f.go"
