"""
ply.yacc grammar for generated output.

Accepts exactly the shapes the generator emits:

    package main
    import "errors"
    func (p *Pill[T]) Valid() error {
        if <expr> {
            <primary> = <expr or composite literal>
            return <expr>
        }
        return nil
    }

Expressions follow Go's operator precedence, so a tag argument that is not
a single Go expression (`min=`, `default=1 2`, `max=1 +`) fails the parse.

While parsing, the rules note which operators are prefix operators and
which braces belong to composite literals; the builtin formatter spaces
tokens from those hints.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import List, Set

from ply.yacc import yacc

from argumenter.core.source.go_lexer import GO_TERMINALS, GoSyntaxError, Token, TokenStream
from argumenter.core.source.go_soup import (  # noqa: F401  (grammar rules)
    p_atom,
    p_empty,
    p_group,
    p_soup,
    p_soup_item,
    p_soup_item_semi,
    p_soup_opt,
)

tokens = GO_TERMINALS

precedence = (
    ("left", "OROR"),
    ("left", "ANDAND"),
    ("left", "EQ", "NE", "LT", "LE", "GT", "GE"),
    ("left", "PLUS", "MINUS", "PIPE", "CARET"),
    ("left", "STAR", "SLASH", "PERCENT", "SHL", "SHR", "AMP", "ANDNOT"),
    ("right", "UNARY"),
)


@dataclass
class LayoutHints:
    prefix: Set[Token] = field(default_factory=set)
    # braces of composite literals and struct{} types
    tight: Set[Token] = field(default_factory=set)


def _hints(p) -> LayoutHints:
    return p.parser.hints


# ----------------------------
# File structure
# ----------------------------
def p_file(p):
    """file : PACKAGE IDENT SEMI imports methods"""


def p_imports(p):
    """imports : empty
               | imports import_decl"""


def p_import_decl(p):
    """import_decl : IMPORT import_spec SEMI
                   | IMPORT LPAREN import_specs RPAREN SEMI"""


def p_import_spec(p):
    """import_spec : STRING
                   | IDENT STRING"""


def p_import_specs(p):
    """import_specs : empty
                    | import_specs import_spec SEMI"""


def p_methods(p):
    """methods : empty
               | methods method SEMI"""


def p_method(p):
    """method : FUNC LPAREN IDENT STAR receiver_type RPAREN IDENT LPAREN RPAREN IDENT block"""
    _hints(p).prefix.add(p[4])


def p_receiver_type(p):
    """receiver_type : IDENT
                     | IDENT LBRACKET ident_list RBRACKET"""


def p_ident_list(p):
    """ident_list : IDENT
                  | ident_list COMMA IDENT"""


# ----------------------------
# Statements
# ----------------------------
def p_block(p):
    """block : LBRACE statements RBRACE"""


def p_statements(p):
    """statements : empty
                  | statement_seq
                  | statement_seq SEMI"""


def p_statement_seq(p):
    """statement_seq : statement
                     | statement_seq SEMI statement"""


def p_statement(p):
    """statement : IF expr block
                 | primary ASSIGN rhs
                 | RETURN expr"""


def p_rhs(p):
    """rhs : expr
           | composite"""


def p_composite(p):
    """composite : literal_type LBRACE elements RBRACE"""
    _hints(p).tight.update((p[2], p[4]))


def p_literal_type(p):
    """literal_type : primary
                    | slice_prefix elem_type
                    | MAP LBRACKET elem_type RBRACKET elem_type"""


def p_slice_prefix(p):
    """slice_prefix : LBRACKET RBRACKET
                    | LBRACKET expr RBRACKET
                    | LBRACKET ELLIPSIS RBRACKET"""


def p_elem_type(p):
    """elem_type : IDENT
                 | IDENT DOT IDENT
                 | slice_prefix elem_type
                 | MAP LBRACKET elem_type RBRACKET elem_type"""


def p_elem_type_pointer(p):
    """elem_type : STAR elem_type"""
    _hints(p).prefix.add(p[1])


def p_elements(p):
    """elements : empty
                | element_list
                | element_list COMMA"""


def p_element_list(p):
    """element_list : element
                    | element_list COMMA element"""


def p_element(p):
    """element : element_value
               | element_value COLON element_value"""


def p_element_value(p):
    """element_value : expr"""


def p_element_value_nested(p):
    """element_value : LBRACE elements RBRACE"""
    _hints(p).tight.update((p[1], p[3]))


# ----------------------------
# Expressions
# ----------------------------
def p_expr_binary(p):
    """expr : expr OROR expr
            | expr ANDAND expr
            | expr EQ expr
            | expr NE expr
            | expr LT expr
            | expr LE expr
            | expr GT expr
            | expr GE expr
            | expr PLUS expr
            | expr MINUS expr
            | expr PIPE expr
            | expr CARET expr
            | expr STAR expr
            | expr SLASH expr
            | expr PERCENT expr
            | expr SHL expr
            | expr SHR expr
            | expr AMP expr
            | expr ANDNOT expr"""


def p_expr_unary(p):
    """expr : PLUS expr %prec UNARY
            | MINUS expr %prec UNARY
            | BANG expr %prec UNARY
            | CARET expr %prec UNARY
            | STAR expr %prec UNARY
            | AMP expr %prec UNARY
            | ARROW expr %prec UNARY"""
    _hints(p).prefix.add(p[1])


def p_expr_primary(p):
    """expr : primary"""


def p_primary(p):
    """primary : operand
               | primary DOT IDENT
               | primary LPAREN arguments RPAREN
               | primary LBRACKET expr_list RBRACKET"""


def p_operand(p):
    """operand : IDENT
               | NUMBER
               | STRING
               | RUNE
               | LPAREN expr RPAREN"""


def p_arguments(p):
    """arguments : empty
                 | argument_list
                 | argument_list COMMA"""


def p_argument_list(p):
    """argument_list : argument
                     | argument_list COMMA argument"""


def p_argument(p):
    """argument : expr"""


def p_argument_struct(p):
    """argument : STRUCT LBRACE soup_opt RBRACE"""
    _hints(p).tight.update((p[2], p[4]))


def p_expr_list(p):
    """expr_list : expr
                 | expr_list COMMA expr"""


def p_error(tok):
    raise GoSyntaxError(tok.value if tok is not None else None)


_PARSER = yacc(start="file", debug=False, write_tables=False, tabmodule="argumenter_output_parsetab")


def check_syntax(tokens: List[Token]) -> LayoutHints:
    """Parse a token stream from go_lexer.tokenize. Syntax errors raise GoSyntaxError."""
    parser = copy.copy(_PARSER)
    parser.hints = LayoutHints()
    parser.parse(lexer=TokenStream(tokens))
    return parser.hints
