"""
Tag mini-language.

A field tag is a comma separated list of constraints:

    arg:"required,min=1,max=100,default=1"

Each segment is either `name=value` (split on the first "=") or a bare
`name`. Names are not checked against the known vocabulary here.
"""
from __future__ import annotations

from typing import List, Tuple

from argumenter.core.golit import go_unquote
from argumenter.core.models import Constraint


def parse_tag(tag: str) -> List[Constraint]:
    constraints: List[Constraint] = []
    for segment in (tag or "").split(","):
        if segment == "":
            continue
        name, sep, value = segment.partition("=")
        constraints.append(Constraint(name=name, value=value if sep else ""))
    return constraints


def _scan_struct_tag(tag: str, key: str) -> Tuple[str, bool]:
    while tag:
        tag = tag.lstrip(" ")
        if not tag:
            break

        i = 0
        while i < len(tag) and tag[i] > " " and tag[i] not in ':"' and tag[i] != "\x7f":
            i += 1
        if i == 0 or i + 1 >= len(tag) or tag[i] != ":" or tag[i + 1] != '"':
            break
        name = tag[:i]
        tag = tag[i + 1 :]

        i = 1
        while i < len(tag) and tag[i] != '"':
            if tag[i] == "\\":
                i += 1
            i += 1
        if i >= len(tag):
            break
        quoted = tag[: i + 1]
        tag = tag[i + 1 :]

        if name == key:
            try:
                return go_unquote(quoted), True
            except ValueError:
                break
    return "", False


def lookup_struct_tag(literal: str, key: str) -> Tuple[str, bool]:
    """
    Find `key` in a Go struct tag literal, as reflect.StructTag.Lookup does.

    `literal` is the tag exactly as written in source, backticks or double
    quotes included. Returns (value, found).
    """
    if not literal:
        return "", False
    try:
        tag = go_unquote(literal)
    except ValueError:
        return "", False
    return _scan_struct_tag(tag, key)
