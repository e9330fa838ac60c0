"""
Go declaration source.

Reads a Go file and returns the struct types declared at top level, with
each field's classified type and the constraints of its `arg` struct tag:

    type Pill struct {
        Name   string `arg:"required"`
        Amount uint8  `arg:"min=1,max=100,default=1"`
    }

Parsing is done by the ply.yacc grammar in go_grammar; this module turns
its type specs into EntityDecls. Only struct types declared at top level
are collected, never those inside function bodies.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence, Union

from argumenter.core.classifier import classify
from argumenter.core.errors import SourceError
from argumenter.core.models import EntityDecl, FieldDecl, PackageDecl
from argumenter.core.source.go_grammar import TypeSpec, parse_declarations
from argumenter.core.source.go_lexer import (
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
from argumenter.core.tags import lookup_struct_tag, parse_tag

_log = logging.getLogger("argumenter.source")

DEFAULT_TAG_KEY = "arg"
_WORD_KINDS = frozenset({IDENT, KEYWORD, NUMBER, STRING, RUNE})


# ----------------------------
# Type expression rendering
# ----------------------------
def _space_between(a: Token, b: Token) -> bool:
    if b.kind == SEMI or (b.kind == OP and b.value in (",", ".", ")", "]", "}")):
        return False
    if a.kind == SEMI:
        return True
    if a.kind in _WORD_KINDS:
        if b.kind == OP and b.value == "<-":
            return not a.is_keyword("chan")
        return not (b.kind == OP and b.value in ("(", "[", "{"))
    # a is an operator
    if a.value == ",":
        return True
    if a.value == "<-":
        return not b.is_keyword("chan")
    return a.value in (")", "}")


def render_type(tokens: Sequence[Token]) -> str:
    """Join type tokens with canonical Go spacing (`map[string]int`, `func() error`)."""
    out: List[str] = []
    prev: Optional[Token] = None
    recv_chan = False
    for i, tok in enumerate(tokens):
        if tok.kind == SEMI:
            nxt = tokens[i + 1] if i + 1 < len(tokens) else None
            if nxt is None or nxt.is_op("}"):
                continue
        if prev is not None and (_space_between(prev, tok) or (recv_chan and tok.is_op("<-"))):
            out.append(" ")
        out.append(";" if tok.kind == SEMI else tok.value)
        # `<-chan <-chan T`: a receive-only chan cannot also take the next arrow
        recv_chan = tok.is_keyword("chan") and prev is not None and prev.is_op("<-")
        prev = tok
    return "".join(out)


def _embedded_name(tokens: Sequence[Token]) -> str:
    """`*pkg.Name` -> `Name`."""
    name = ""
    for tok in tokens:
        if tok.is_op("["):
            break
        if tok.kind == IDENT:
            name = tok.value
    return name


# ----------------------------
# Reader
# ----------------------------
def _entity(spec: TypeSpec, tag_key: str) -> EntityDecl:
    fields: List[FieldDecl] = []
    for f in spec.type.fields or []:
        descriptor = classify(render_type(f.type.tokens))
        tag, _ = lookup_struct_tag(f.tag.value if f.tag else "", tag_key)
        constraints = parse_tag(tag)
        for name in f.names or [_embedded_name(f.type.tokens)]:
            fields.append(FieldDecl(name=name, type=descriptor, tag=tag, constraints=constraints))
    _log.debug("read struct %s with %d fields", spec.name, len(fields))
    return EntityDecl(name=spec.name, type_params=spec.params, fields=fields)


def read_source(text: str, filename: str = "<source>", tag_key: str = DEFAULT_TAG_KEY) -> PackageDecl:
    """Parse Go source text into a PackageDecl. Malformed input raises SourceError."""
    tokens = tokenize(text, filename)
    try:
        syntax = parse_declarations(tokens)
    except GoSyntaxError as exc:
        raise SourceError(str(exc), filename=filename, line=exc.line_in(tokens)) from exc

    # aliases of struct literals (`type A = struct{...}`) count as struct types
    entities = [_entity(spec, tag_key) for spec in syntax.specs if spec.type.fields is not None]

    _log.info("read %d struct types from %s (package %s)", len(entities), filename, syntax.package)
    return PackageDecl(
        name=syntax.package,
        dir=os.path.dirname(filename) or ".",
        file=os.path.basename(filename),
        entities=entities,
    )


def read_file(path: Union[str, Path], tag_key: str = DEFAULT_TAG_KEY) -> PackageDecl:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(f"cannot read source: {exc}", filename=str(path)) from exc
    return read_source(text, filename=str(path), tag_key=tag_key)
