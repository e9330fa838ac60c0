"""
Output formatter.

The built-in formatter parses the text with the output grammar in go_syntax
before laying it out, so anything that is not one of the shapes the
generator emits (package clause, imports, validation methods made of
if/assignment/return statements) is refused. Layout rules:

  - indentation is one tab per open brace/paren/bracket
  - tokens on a line are re-spaced: binary operators and `=` get one space
    on each side, prefix operators, calls, selectors, indexes and composite
    literal braces get none
  - lines carrying comments, and the continuation lines of raw strings,
    keep their own spacing
  - no blank lines directly inside an opening or before a closing delimiter
  - runs of blank lines collapse to one
  - exactly one trailing newline

Unlike gofmt, binary operators are always spaced; gofmt drops the spaces
around the tighter operator of a mixed expression (`a*b + c`).

With `formatter: gofmt` (or `auto` when a gofmt binary is found) the text
is piped through gofmt instead, which does its own syntax check.
"""
from __future__ import annotations

import logging
import re
import shutil
import subprocess
from typing import Dict, List, Optional, Set

from argumenter.core.config import GeneratorConfig
from argumenter.core.emit.go_syntax import LayoutHints, check_syntax
from argumenter.core.errors import FormatError, SourceError
from argumenter.core.source.go_lexer import (
    EOF,
    IDENT,
    KEYWORD,
    NUMBER,
    OP,
    RUNE,
    SEMI,
    STRING,
    GoSyntaxError,
    Token,
    tokenize,
)

_log = logging.getLogger("argumenter.format")

_PAIRS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_PAIRS.values())

_NO_SPACE_BEFORE = frozenset({",", ";", ")", "]", ".", ":"})
_NO_SPACE_AFTER = frozenset({"(", "[", "."})
# map[...], struct{...}, interface{...}
_TIGHT_KEYWORDS = frozenset({"map", "struct", "interface"})
_OPERAND_KINDS = frozenset({IDENT, NUMBER, STRING, RUNE})
_WHITESPACE = re.compile(r"\s+")

GOFMT_TIMEOUT_S = 30


def _tokens(text: str) -> List[Token]:
    try:
        return tokenize(text, "<generated>")
    except SourceError as exc:
        raise FormatError(exc.reason, raw=text, line=exc.line) from exc


def _check(text: str, tokens: List[Token]) -> LayoutHints:
    try:
        return check_syntax(tokens)
    except GoSyntaxError as exc:
        raise FormatError(str(exc), raw=text, line=exc.line_in(tokens)) from exc


# ----------------------------
# Spacing
# ----------------------------
def _space_between(a: Token, b: Token, hints: LayoutHints) -> bool:
    if b.kind == OP and b.value in _NO_SPACE_BEFORE:
        return False
    if a.kind == OP and a.value in _NO_SPACE_AFTER:
        return False
    if a in hints.prefix or b in hints.tight or (a in hints.tight and a.value == "{"):
        return False
    if a.kind == KEYWORD:
        return not (a.value in _TIGHT_KEYWORDS and b.kind == OP)
    if b.is_op("(") or b.is_op("["):
        # calls, indexes, instantiations
        return not (a.kind in _OPERAND_KINDS or a.is_op(")") or a.is_op("]"))
    if a.is_op("]"):
        # []int, []*T, [][]int
        return not (b.kind in (IDENT, KEYWORD) or b in hints.prefix)
    return True


def _join(tokens: List[Token], hints: LayoutHints) -> str:
    out = [tokens[0].value]
    for a, b in zip(tokens, tokens[1:]):
        if _space_between(a, b, hints):
            out.append(" ")
        out.append(b.value)
    return "".join(out)


def _same_text(stripped: str, tokens: List[Token]) -> bool:
    """True when the tokens account for every character of the line (no comments)."""
    return _WHITESPACE.sub("", stripped) == _WHITESPACE.sub("", "".join(t.value for t in tokens))


# ----------------------------
# Layout
# ----------------------------
def _layout(text: str, tokens: List[Token], hints: LayoutHints) -> List[str]:
    line_depth: Dict[int, int] = {}
    depth_after: Dict[int, int] = {}
    by_line: Dict[int, List[Token]] = {}
    verbatim: Set[int] = set()
    keep_spacing: Set[int] = set()

    depth = 0
    for tok in tokens:
        if tok.kind in (SEMI, EOF):
            continue
        by_line.setdefault(tok.line, []).append(tok)
        if tok.line not in line_depth:
            line_depth[tok.line] = depth - 1 if (tok.kind == OP and tok.value in _CLOSERS) else depth
        if tok.kind == STRING and "\n" in tok.value:
            # continuation lines of a raw string are content
            keep_spacing.add(tok.line)
            for k in range(1, tok.value.count("\n") + 1):
                verbatim.add(tok.line + k)
        if tok.kind == OP:
            if tok.value in _PAIRS:
                depth += 1
            elif tok.value in _CLOSERS:
                depth -= 1
        depth_after[tok.line + tok.value.count("\n")] = depth

    out: List[str] = []
    current = 0
    for lineno, raw in enumerate(text.split("\n"), start=1):
        if lineno in verbatim:
            out.append(raw)
        else:
            stripped = raw.strip()
            line_tokens = by_line.get(lineno)
            if line_tokens and lineno not in keep_spacing and _same_text(stripped, line_tokens):
                stripped = _join(line_tokens, hints)
            if stripped:
                out.append("\t" * max(line_depth.get(lineno, current), 0) + stripped)
            else:
                out.append("")
        current = depth_after.get(lineno, current)
    return out


def _collapse_blank_lines(lines: List[str]) -> str:
    result: List[str] = []
    for line in lines:
        if line == "":
            if not result or result[-1] == "" or result[-1].endswith(("{", "(")):
                continue
            result.append(line)
            continue
        if result and result[-1] == "" and line.lstrip("\t")[:1] in _CLOSERS:
            result.pop()
        result.append(line)
    while result and result[-1] == "":
        result.pop()
    return "\n".join(result) + "\n"


def format_builtin(text: str) -> str:
    tokens = _tokens(text)
    hints = _check(text, tokens)
    return _collapse_blank_lines(_layout(text, tokens, hints))


def find_gofmt(config: GeneratorConfig) -> Optional[str]:
    return shutil.which(config.gofmt_path or "gofmt")


def run_gofmt(text: str, binary: str) -> str:
    try:
        proc = subprocess.run(
            [binary],
            input=text,
            capture_output=True,
            text=True,
            timeout=GOFMT_TIMEOUT_S,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise FormatError(f"cannot run {binary}: {exc}", raw=text) from exc
    if proc.returncode != 0:
        raise FormatError((proc.stderr or "").strip() or f"{binary} exited with {proc.returncode}", raw=text)
    return proc.stdout


def format_source(text: str, config: GeneratorConfig) -> str:
    """Validate and format generated Go. Failures raise FormatError carrying the raw text."""
    if config.formatter == "builtin":
        return format_builtin(text)

    binary = find_gofmt(config)
    if binary is None:
        if config.formatter == "gofmt":
            raise FormatError(f"gofmt binary not found ({config.gofmt_path or 'gofmt'})", raw=text)
        _log.debug("gofmt not found; using builtin formatter")
        return format_builtin(text)

    _log.debug("formatting with %s", binary)
    return run_gofmt(text, binary)
