from __future__ import annotations

from typing import Dict

_QUOTE_ESCAPES: Dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}

_SIMPLE_UNESCAPES: Dict[str, str] = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


def go_quote(s: str) -> str:
    """Render `s` as an interpreted Go string literal (strconv.Quote)."""
    out = ['"']
    for ch in s:
        esc = _QUOTE_ESCAPES.get(ch)
        if esc is not None:
            out.append(esc)
        elif ch.isprintable():
            out.append(ch)
        elif ord(ch) < 0x100:
            out.append(f"\\x{ord(ch):02x}")
        elif ord(ch) < 0x10000:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(f"\\U{ord(ch):08x}")
    out.append('"')
    return "".join(out)


def _unescape(body: str) -> str:
    out = []
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        if i + 1 >= n:
            raise ValueError("trailing backslash in string literal")
        nxt = body[i + 1]
        if nxt in _SIMPLE_UNESCAPES:
            out.append(_SIMPLE_UNESCAPES[nxt])
            i += 2
        elif nxt in "xuU":
            width = {"x": 2, "u": 4, "U": 8}[nxt]
            digits = body[i + 2 : i + 2 + width]
            if len(digits) != width:
                raise ValueError(f"short \\{nxt} escape")
            out.append(chr(int(digits, 16)))
            i += 2 + width
        elif nxt in "01234567":
            digits = body[i + 1 : i + 4]
            if len(digits) != 3 or any(d not in "01234567" for d in digits):
                raise ValueError("bad octal escape")
            out.append(chr(int(digits, 8)))
            i += 4
        else:
            raise ValueError(f"unknown escape sequence \\{nxt}")
    return "".join(out)


def go_unquote(literal: str) -> str:
    """Decode a raw (`...`) or interpreted ("...") Go string literal."""
    if len(literal) < 2:
        raise ValueError(f"invalid string literal {literal!r}")
    quote = literal[0]
    if quote != literal[-1] or quote not in "`\"":
        raise ValueError(f"invalid string literal {literal!r}")
    body = literal[1:-1]
    if quote == "`":
        if "`" in body:
            raise ValueError(f"invalid raw string literal {literal!r}")
        return body.replace("\r", "")
    if "\n" in body:
        raise ValueError("newline in string literal")
    return _unescape(body)
