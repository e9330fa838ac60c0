"""
Balanced token runs.

ply.yacc rules shared by the declaration grammar and the output checker for
the stretches of Go neither of them interprets: function bodies, parameter
lists, interface bodies, array lengths. A run is any sequence of tokens with
(), [] and {} balanced. Every rule yields the flat list of Tokens it covered.

Grammar modules pull these in with a plain import; ply collects p_ functions
from the importing module's namespace.
"""
from __future__ import annotations

from argumenter.core.source.go_lexer import GO_TERMINALS

_BRACKETS = frozenset({"LPAREN", "RPAREN", "LBRACKET", "RBRACKET", "LBRACE", "RBRACE"})

ATOM_TERMINALS = tuple(t for t in GO_TERMINALS if t not in _BRACKETS and t != "SEMI")


def p_empty(p):
    """empty :"""
    p[0] = []


def p_soup_opt(p):
    """soup_opt : soup
                | empty"""
    p[0] = p[1]


def p_soup(p):
    """soup : soup_item
            | soup soup_item"""
    p[0] = p[1] if len(p) == 2 else p[1] + p[2]


def p_soup_item(p):
    """soup_item : atom
                 | group"""
    p[0] = p[1]


def p_soup_item_semi(p):
    """soup_item : SEMI"""
    p[0] = [p[1]]


def p_group(p):
    """group : LPAREN soup_opt RPAREN
             | LBRACKET soup_opt RBRACKET
             | LBRACE soup_opt RBRACE"""
    p[0] = [p[1]] + p[2] + [p[3]]


def p_atom(p):
    p[0] = [p[1]]


p_atom.__doc__ = "atom : " + "\n     | ".join(ATOM_TERMINALS)
