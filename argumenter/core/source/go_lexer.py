"""
Minimal Go lexer.

Produces the token stream needed to read type declarations and to check
generated output: identifiers, keywords, literals, operators and
delimiters. Comments are dropped. Semicolons are inserted automatically
following the Go language rules.

Scanning is done by a ply lexer; the rules below only classify lexemes,
semicolon insertion runs over the ply token stream afterwards. The same
tokens feed the ply.yacc grammars through TokenStream, which names each
operator and keyword as its own terminal.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from ply.lex import TOKEN, lex

from argumenter.core.errors import SourceError

IDENT = "IDENT"
KEYWORD = "KEYWORD"
NUMBER = "NUMBER"
STRING = "STRING"
RUNE = "RUNE"
OP = "OP"
SEMI = "SEMI"
EOF = "EOF"

KEYWORDS = frozenset(
    {
        "break", "case", "chan", "const", "continue", "default", "defer", "else",
        "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
        "map", "package", "range", "return", "select", "struct", "switch", "type",
        "var",
    }
)

_SEMI_AFTER_KEYWORDS = frozenset({"break", "continue", "fallthrough", "return"})
_SEMI_AFTER_OPS = frozenset({"++", "--", ")", "]", "}"})

_OPERATORS = sorted(
    [
        "<<=", ">>=", "&^=", "...",
        "&&", "||", "<-", "++", "--", "==", "!=", "<=", ">=", ":=",
        "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "<<", ">>", "&^",
        "+", "-", "*", "/", "%", "&", "|", "^", "<", ">", "=", "!", "~",
        "(", ")", "[", "]", "{", "}", ",", ";", ".", ":",
    ],
    key=len,
    reverse=True,
)

# ply compiles rules with re.VERBOSE
_NUMBER_PATTERN = r"""
    (?:0[xX][0-9a-fA-F_]*(?:\.[0-9a-fA-F_]*)?(?:[pP][+-]?[0-9_]+)?
     |0[bB][01_]+
     |0[oO][0-7_]+
     |(?:[0-9][0-9_]*(?:\.[0-9_]*)?|\.[0-9][0-9_]*)(?:[eE][+-]?[0-9_]+)?
    )i?
"""
_OPERATOR_PATTERN = "|".join(re.escape(op) for op in _OPERATORS)


# ============================================================
# ply rules
# ============================================================

tokens = ("IDENT", "KEYWORD", "NUMBER", "STRING", "RUNE", "OP", "SEMI", "NEWLINE")

t_ignore = " \t\r\ufeff"


def _fail(t, message: str) -> None:
    raise SourceError(message, filename=t.lexer.filename, line=t.lexer.lineno)


def t_NEWLINE(t):
    r"\n"
    t.lexer.lineno += 1
    return t


def t_line_comment(t):
    r"//[^\n]*"
    pass


def t_block_comment(t):
    r"/\*(?:.|\n)*?\*/"
    newlines = t.value.count("\n")
    if not newlines:
        return None
    # a comment spanning lines acts like a newline
    t.lexer.lineno += newlines
    t.type = "NEWLINE"
    return t


def t_open_comment(t):
    r"/\*"
    _fail(t, "unterminated block comment")


def t_raw_string(t):
    r"`[^`]*`"
    t.lexer.lineno += t.value.count("\n")
    t.type = "STRING"
    return t


def t_STRING(t):
    r'"(?:[^"\\\n]|\\.)*"'
    return t


def t_RUNE(t):
    r"'(?:[^'\\\n]|\\.)*'"
    return t


def t_IDENT(t):
    r"[^\W\d]\w*"
    if t.value in KEYWORDS:
        t.type = "KEYWORD"
    return t


@TOKEN(_NUMBER_PATTERN)
def t_NUMBER(t):
    return t


@TOKEN(_OPERATOR_PATTERN)
def t_OP(t):
    if t.value == ";":
        t.type = "SEMI"
    return t


def t_error(t):
    ch = t.value[0]
    if ch == "`":
        _fail(t, "unterminated raw string literal")
    if ch == '"':
        _fail(t, "unterminated string literal")
    if ch == "'":
        _fail(t, "unterminated rune literal")
    _fail(t, f"illegal character {ch!r}")


_LEXER = lex()


# ============================================================
# Token stream
# ============================================================

@dataclass(frozen=True)
class Token:
    kind: str
    value: str
    line: int
    col: int

    def is_op(self, value: str) -> bool:
        return self.kind == OP and self.value == value

    def is_keyword(self, value: str) -> bool:
        return self.kind == KEYWORD and self.value == value


def _needs_semicolon(out: List[Token]) -> bool:
    if not out:
        return False
    last = out[-1]
    if last.kind in (IDENT, NUMBER, STRING, RUNE):
        return True
    if last.kind == KEYWORD and last.value in _SEMI_AFTER_KEYWORDS:
        return True
    return last.kind == OP and last.value in _SEMI_AFTER_OPS


def tokenize(text: str, filename: str = "<source>") -> List[Token]:
    """Tokenize Go source. Lexical errors raise SourceError."""
    lexer = _LEXER.clone()
    lexer.filename = filename
    lexer.lineno = 1
    lexer.input(text)

    out: List[Token] = []
    for tok in lexer:
        col = tok.lexpos - text.rfind("\n", 0, tok.lexpos)
        if tok.type == "NEWLINE":
            if _needs_semicolon(out):
                out.append(Token(SEMI, "\n", tok.lineno, col))
            continue
        out.append(Token(tok.type, tok.value, tok.lineno, col))

    end = len(text)
    col = end - text.rfind("\n", 0, end)
    if _needs_semicolon(out):
        out.append(Token(SEMI, "\n", lexer.lineno, col))
    out.append(Token(EOF, "", lexer.lineno, col))
    return out


def describe(tok: Optional[Token]) -> str:
    if tok is None or tok.kind == EOF:
        return "end of file"
    if tok.kind == SEMI:
        return "newline" if tok.value == "\n" else "';'"
    return repr(tok.value)


# ============================================================
# ply.yacc adapter
# ============================================================

OP_TERMINALS: Dict[str, str] = {
    "(": "LPAREN", ")": "RPAREN", "[": "LBRACKET", "]": "RBRACKET", "{": "LBRACE", "}": "RBRACE",
    ",": "COMMA", ".": "DOT", ":": "COLON", "...": "ELLIPSIS",
    "=": "ASSIGN", ":=": "DEFINE", "<-": "ARROW", "++": "INC", "--": "DEC",
    "+": "PLUS", "-": "MINUS", "*": "STAR", "/": "SLASH", "%": "PERCENT",
    "&": "AMP", "|": "PIPE", "^": "CARET", "<<": "SHL", ">>": "SHR", "&^": "ANDNOT",
    "&&": "ANDAND", "||": "OROR", "!": "BANG", "~": "TILDE",
    "==": "EQ", "!=": "NE", "<": "LT", "<=": "LE", ">": "GT", ">=": "GE",
}

# "+=", "<<=" and the other compound assignments
OP_ASSIGN = "OP_ASSIGN"

GO_TERMINALS = (
    ("IDENT", "NUMBER", "STRING", "RUNE", "SEMI")
    + tuple(sorted(k.upper() for k in KEYWORDS))
    + tuple(sorted(set(OP_TERMINALS.values())))
    + (OP_ASSIGN,)
)


def terminal(tok: Token) -> str:
    if tok.kind == OP:
        return OP_TERMINALS.get(tok.value, OP_ASSIGN)
    if tok.kind == KEYWORD:
        return tok.value.upper()
    return tok.kind


class YaccToken:
    """A Token as ply.yacc sees it; `value` is the Token itself."""

    __slots__ = ("type", "value", "lineno", "lexpos", "lexer")

    def __init__(self, type_: str, token: Token):
        self.type = type_
        self.value = token
        self.lineno = token.line
        self.lexpos = token.col

    def __repr__(self) -> str:
        return f"YaccToken({self.type}, {self.value.value!r}, {self.lineno})"


class TokenStream:
    """The `token()` interface ply.yacc pulls from, over an already tokenized text."""

    def __init__(self, tokens: List[Token], overrides: Optional[Dict[int, str]] = None):
        overrides = overrides or {}
        self._items = [
            YaccToken(overrides.get(i) or terminal(tok), tok)
            for i, tok in enumerate(tokens)
            if tok.kind != EOF
        ]
        self._pos = 0

    def token(self) -> Optional[YaccToken]:
        if self._pos >= len(self._items):
            return None
        tok = self._items[self._pos]
        self._pos += 1
        return tok


class GoSyntaxError(Exception):
    """Raised from p_error on the first token a grammar cannot accept (None at end of input)."""

    def __init__(self, token: Optional[Token]):
        self.token = token
        super().__init__(f"syntax error: unexpected {describe(token)}")

    def line_in(self, tokens: List[Token]) -> Optional[int]:
        if self.token is not None:
            return self.token.line
        return tokens[-1].line if tokens else None
