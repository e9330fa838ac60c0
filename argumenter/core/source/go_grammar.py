"""
ply.yacc grammar for Go declarations.

Only the declarations the reader needs are understood: the package clause
and top-level `type` specs, down to struct fields and type expressions.
Imports, funcs, vars and consts are consumed as balanced token runs, so
types declared inside function bodies never surface.

    source_file : package_clause top_decls
    top_decl    : TYPE type_spec SEMI | TYPE ( type_specs ) SEMI | ...
    type_spec   : IDENT type_params type | IDENT type_params = type
    field_decl  : ident_list type tag | embedded tag

A `[` right after a spec name is ambiguous between an array length and a
type parameter list; TokenStream hands it over as TPARAMS when it opens a
parameter list (`[T any]`, `[K, V any]`, `[T ~int]`), and as a plain
LBRACKET otherwise (`[N]int`).
"""
from __future__ import annotations

import copy
from typing import Dict, List, NamedTuple, Optional

from ply.yacc import yacc

from argumenter.core.source.go_lexer import (
    GO_TERMINALS,
    IDENT,
    KEYWORD,
    OP,
    SEMI,
    GoSyntaxError,
    Token,
    TokenStream,
)
from argumenter.core.source.go_soup import (  # noqa: F401  (grammar rules)
    p_atom,
    p_empty,
    p_group,
    p_soup,
    p_soup_item,
    p_soup_item_semi,
    p_soup_opt,
)

tokens = GO_TERMINALS + ("TPARAMS",)


class TypeExpr(NamedTuple):
    tokens: List[Token]
    # set for struct literals only
    fields: Optional[List["FieldSyntax"]] = None


class FieldSyntax(NamedTuple):
    names: List[str]  # empty for an embedded field
    type: TypeExpr
    tag: Optional[Token]
    line: int
    tokens: List[Token]


class TypeSpec(NamedTuple):
    name: str
    params: List[str]
    type: TypeExpr
    line: int


class SourceSyntax(NamedTuple):
    package: str
    specs: List[TypeSpec]


# ----------------------------
# File structure
# ----------------------------
def p_source_file(p):
    """source_file : package_clause top_decls"""
    p[0] = SourceSyntax(package=p[1], specs=p[2])


def p_package_clause(p):
    """package_clause : PACKAGE IDENT SEMI"""
    p[0] = p[2].value


def p_top_decls(p):
    """top_decls : empty
                 | top_decls top_decl"""
    p[0] = p[1] if len(p) == 2 else p[1] + p[2]


def p_top_decl_type(p):
    """top_decl : TYPE type_spec SEMI"""
    p[0] = [p[2]]


def p_top_decl_type_group(p):
    """top_decl : TYPE LPAREN type_specs RPAREN SEMI"""
    p[0] = p[3]


def p_top_decl_other(p):
    """top_decl : IMPORT flat SEMI
                | FUNC flat SEMI
                | VAR flat SEMI
                | CONST flat SEMI
                | SEMI"""
    p[0] = []


def p_flat(p):
    """flat : flat_item
            | flat flat_item"""
    p[0] = p[1] if len(p) == 2 else p[1] + p[2]


def p_flat_item(p):
    """flat_item : atom
                 | group"""
    p[0] = p[1]


def p_type_specs(p):
    """type_specs : empty
                  | type_spec_seq
                  | type_spec_seq SEMI"""
    p[0] = p[1]


def p_type_spec_seq(p):
    """type_spec_seq : type_spec
                     | type_spec_seq SEMI type_spec"""
    p[0] = [p[1]] if len(p) == 2 else p[1] + [p[3]]


# ----------------------------
# Type specs and parameters
# ----------------------------
def p_type_spec(p):
    """type_spec : IDENT type_params type
                 | IDENT type_params ASSIGN type"""
    p[0] = TypeSpec(name=p[1].value, params=p[2], type=p[len(p) - 1], line=p[1].line)


def p_type_params(p):
    """type_params : empty
                   | TPARAMS tparam_list RBRACKET
                   | TPARAMS tparam_list COMMA RBRACKET"""
    p[0] = p[1] if len(p) == 2 else p[2]


def p_tparam_list(p):
    """tparam_list : tparam_decl
                   | tparam_list COMMA tparam_decl"""
    p[0] = p[1] if len(p) == 2 else p[1] + p[3]


def p_tparam_decl(p):
    """tparam_decl : tname_list constraint"""
    p[0] = p[1]


def p_tname_list(p):
    """tname_list : IDENT
                  | tname_list COMMA IDENT"""
    p[0] = [p[1].value] if len(p) == 2 else p[1] + [p[3].value]


def p_constraint(p):
    """constraint : constraint_term
                  | constraint PIPE constraint_term"""


def p_constraint_term(p):
    """constraint_term : type
                       | TILDE type"""


# ----------------------------
# Type expressions
# ----------------------------
def p_type(p):
    """type : nonrecv_type"""
    p[0] = p[1]


def p_type_recv_chan(p):
    """type : ARROW CHAN type"""
    p[0] = TypeExpr([p[1], p[2]] + p[3].tokens)


def p_nonrecv_type_name(p):
    """nonrecv_type : type_name"""
    p[0] = TypeExpr(p[1])


def p_nonrecv_type_instance(p):
    """nonrecv_type : type_name LBRACKET type_list RBRACKET"""
    p[0] = TypeExpr(p[1] + [p[2]] + p[3] + [p[4]])


def p_type_name(p):
    """type_name : IDENT
                 | IDENT DOT IDENT"""
    p[0] = list(p[1:])


def p_type_list(p):
    """type_list : type
                 | type_list COMMA type"""
    p[0] = p[1].tokens if len(p) == 2 else p[1] + [p[2]] + p[3].tokens


def p_nonrecv_type_pointer(p):
    """nonrecv_type : STAR type"""
    p[0] = TypeExpr([p[1]] + p[2].tokens)


def p_nonrecv_type_slice(p):
    """nonrecv_type : LBRACKET RBRACKET type"""
    p[0] = TypeExpr([p[1], p[2]] + p[3].tokens)


def p_nonrecv_type_array(p):
    """nonrecv_type : LBRACKET soup RBRACKET type"""
    p[0] = TypeExpr([p[1]] + p[2] + [p[3]] + p[4].tokens)


def p_nonrecv_type_map(p):
    """nonrecv_type : MAP LBRACKET type RBRACKET type"""
    p[0] = TypeExpr([p[1], p[2]] + p[3].tokens + [p[4]] + p[5].tokens)


def p_nonrecv_type_chan(p):
    """nonrecv_type : CHAN nonrecv_type"""
    p[0] = TypeExpr([p[1]] + p[2].tokens)


def p_nonrecv_type_send_chan(p):
    """nonrecv_type : CHAN ARROW type"""
    p[0] = TypeExpr([p[1], p[2]] + p[3].tokens)


def p_nonrecv_type_func(p):
    """nonrecv_type : FUNC LPAREN soup_opt RPAREN result"""
    p[0] = TypeExpr([p[1], p[2]] + p[3] + [p[4]] + p[5])


def p_result(p):
    """result : empty"""
    p[0] = p[1]


def p_result_type(p):
    """result : type"""
    p[0] = p[1].tokens


def p_result_list(p):
    """result : LPAREN soup_opt RPAREN"""
    p[0] = [p[1]] + p[2] + [p[3]]


def p_nonrecv_type_interface(p):
    """nonrecv_type : INTERFACE LBRACE soup_opt RBRACE"""
    p[0] = TypeExpr([p[1], p[2]] + p[3] + [p[4]])


def p_nonrecv_type_struct(p):
    """nonrecv_type : STRUCT LBRACE field_list RBRACE"""
    fields = p[3]
    body: List[Token] = []
    for f in fields:
        if body:
            body.append(Token(SEMI, ";", f.line, 0))
        body.extend(f.tokens)
    p[0] = TypeExpr([p[1], p[2]] + body + [p[4]], fields=fields)


# ----------------------------
# Struct fields
# ----------------------------
def p_field_list(p):
    """field_list : empty
                  | field_seq
                  | field_seq SEMI"""
    p[0] = p[1]


def p_field_seq(p):
    """field_seq : field_decl
                 | field_seq SEMI field_decl"""
    p[0] = [p[1]] if len(p) == 2 else p[1] + [p[3]]


def p_field_decl_named(p):
    """field_decl : ident_list type tag"""
    names, texpr, tag = p[1], p[2], p[3]
    name_tokens: List[Token] = []
    for tok in names:
        if name_tokens:
            name_tokens.append(Token(OP, ",", tok.line, 0))
        name_tokens.append(tok)
    p[0] = FieldSyntax(
        names=[t.value for t in names],
        type=texpr,
        tag=tag,
        line=names[0].line,
        tokens=name_tokens + texpr.tokens + ([tag] if tag else []),
    )


def p_field_decl_embedded(p):
    """field_decl : embedded tag"""
    texpr, tag = p[1], p[2]
    p[0] = FieldSyntax(
        names=[],
        type=texpr,
        tag=tag,
        line=texpr.tokens[0].line,
        tokens=texpr.tokens + ([tag] if tag else []),
    )


def p_ident_list(p):
    """ident_list : IDENT
                  | ident_list COMMA IDENT"""
    p[0] = [p[1]] if len(p) == 2 else p[1] + [p[3]]


def p_embedded(p):
    """embedded : type_name
                | STAR type_name"""
    p[0] = TypeExpr(p[1] if len(p) == 2 else [p[1]] + p[2])


def p_tag(p):
    """tag : empty
           | STRING"""
    p[0] = p[1] or None


def p_error(tok):
    raise GoSyntaxError(tok.value if tok is not None else None)


_PARSER = yacc(start="source_file", debug=False, write_tables=False, tabmodule="argumenter_decl_parsetab")


# ----------------------------
# Entry point
# ----------------------------
def _opens_type_params(tokens: List[Token], j: int) -> bool:
    if j + 2 >= len(tokens) or not tokens[j].is_op("[") or tokens[j + 1].kind != IDENT:
        return False
    after = tokens[j + 2]
    if after.kind in (IDENT, KEYWORD):
        return True
    return after.kind == OP and after.value in (",", "~", "*", "[")


def _type_param_brackets(tokens: List[Token]) -> Dict[int, str]:
    """Positions of `[` opening a type parameter list on a top-level type spec."""
    out: Dict[int, str] = {}
    depth = 0
    in_group = False
    for i, tok in enumerate(tokens):
        prev = tokens[i - 1] if i else None
        if tok.kind == IDENT and prev is not None:
            at_spec = (depth == 0 and prev.is_keyword("type")) or (
                in_group and depth == 1 and (prev.kind == SEMI or prev.is_op("("))
            )
            if at_spec and _opens_type_params(tokens, i + 1):
                out[i + 1] = "TPARAMS"
        if tok.kind != OP:
            continue
        if tok.value in ("(", "[", "{"):
            if tok.value == "(" and depth == 0 and prev is not None and prev.is_keyword("type"):
                in_group = True
            depth += 1
        elif tok.value in (")", "]", "}"):
            depth -= 1
            if depth == 0:
                in_group = False
    return out


def parse_declarations(tokens: List[Token]) -> SourceSyntax:
    """Parse a token stream from go_lexer.tokenize. Syntax errors raise GoSyntaxError."""
    parser = copy.copy(_PARSER)
    return parser.parse(lexer=TokenStream(tokens, _type_param_brackets(tokens)))
