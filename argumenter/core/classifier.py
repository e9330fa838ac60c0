"""
Type classifier.

Maps a Go type expression to a TypeCategory and its zero literal. Only the
leading token of the expression is inspected, so every expression lands in
exactly one category:

    *T            pointer
    []T, [N]T     slice (array)
    chan T, <-chan T, chan<- T
                  channel
    map[K]V       map
    func(...)     function
    interface{..}, any, error
                  interface
    int..., byte  integer
    uint..., rune unsigned
    float...      float
    complex...    complex
    bool          boolean
    string        string
    anything else other  -> zero is *new(T)
"""
from __future__ import annotations

import re
from typing import Optional, Tuple

from argumenter.core.models import NILABLE_CATEGORIES, NUMBER_CATEGORIES, TypeCategory, TypeDescriptor

_INTEGER = frozenset({"int", "int8", "int16", "int32", "int64", "byte"})
_UNSIGNED = frozenset({"uint", "uint8", "uint16", "uint32", "uint64", "uintptr", "rune"})
_FLOAT = frozenset({"float32", "float64"})
_COMPLEX = frozenset({"complex64", "complex128"})
_INTERFACE_NAMES = frozenset({"interface", "any", "error"})

_WORD_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _leading_word(s: str) -> str:
    m = _WORD_RE.match(s)
    return m.group(0) if m else ""


def _split_bracket(s: str) -> Tuple[str, str]:
    """Split "[inner]rest" at the matching bracket. Unbalanced -> (s[1:], "")."""
    depth = 0
    for i, ch in enumerate(s):
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return s[1:i], s[i + 1 :]
    return s[1:], ""


def _channel_elem(s: str) -> Optional[str]:
    if s.startswith("<-"):
        s = s[2:].lstrip()
    if not s.startswith("chan"):
        return None
    rest = s[len("chan") :]
    if rest.startswith("<-"):
        rest = rest[2:]
    elif rest and not rest[0].isspace() and rest[0] != "(":
        # e.g. "channel" is an identifier, not a channel type
        return None
    return rest.strip()


def zero_value(category: TypeCategory, expr: str) -> str:
    if category in NUMBER_CATEGORIES:
        return "0"
    if category == TypeCategory.BOOLEAN:
        return "false"
    if category == TypeCategory.STRING:
        return '""'
    if category in NILABLE_CATEGORIES:
        return "nil"
    return f"*new({expr})"


def _descriptor(expr: str, category: TypeCategory, **payload) -> TypeDescriptor:
    return TypeDescriptor(expr=expr, category=category, zero=zero_value(category, expr), **payload)


def classify(expr: str) -> TypeDescriptor:
    s = (expr or "").strip()

    if s.startswith("*"):
        return _descriptor(s, TypeCategory.POINTER, elem=s[1:].strip())

    if s.startswith("["):
        length, elem = _split_bracket(s)
        return _descriptor(s, TypeCategory.SLICE, length=length.strip(), elem=elem.strip())

    chan_elem = _channel_elem(s)
    if chan_elem is not None:
        return _descriptor(s, TypeCategory.CHANNEL, elem=chan_elem)

    word = _leading_word(s)
    rest = s[len(word) :]

    if word == "map" and rest.startswith("["):
        key, elem = _split_bracket(rest)
        return _descriptor(s, TypeCategory.MAP, key=key.strip(), elem=elem.strip())

    if word == "func" and (rest == "" or rest.startswith("(")):
        return _descriptor(s, TypeCategory.FUNCTION)

    if word in _INTERFACE_NAMES and (rest == "" or rest.lstrip().startswith("{")):
        return _descriptor(s, TypeCategory.INTERFACE)

    # Builtin scalar names only match as a whole expression: "integer" or
    # "int64s" are named types and fall through to OTHER.
    if rest == "":
        if word in _INTEGER:
            return _descriptor(s, TypeCategory.INTEGER)
        if word in _UNSIGNED:
            return _descriptor(s, TypeCategory.UNSIGNED)
        if word in _FLOAT:
            return _descriptor(s, TypeCategory.FLOAT)
        if word in _COMPLEX:
            return _descriptor(s, TypeCategory.COMPLEX)
        if word == "bool":
            return _descriptor(s, TypeCategory.BOOLEAN)
        if word == "string":
            return _descriptor(s, TypeCategory.STRING)

    return _descriptor(s, TypeCategory.OTHER)
