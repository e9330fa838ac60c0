"""
Constraint compiler.

Every guard encodes the *violation* of its constraint: `min=0` becomes
"fail when < 0". Constraints that do not apply to the field's category, and
names outside the vocabulary, compile to nothing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from argumenter.core.golit import go_quote
from argumenter.core.models import Constraint, FieldDecl, Statement, TypeCategory, TypeDescriptor

_log = logging.getLogger("argumenter.compiler")


def _any(_t: TypeDescriptor) -> bool:
    return True


def _number(t: TypeDescriptor) -> bool:
    return t.is_number


def _sequence(t: TypeDescriptor) -> bool:
    return t.is_sequence


@dataclass(frozen=True)
class GuardRule:
    applies: Callable[[TypeDescriptor], bool]
    op: str
    message: str
    # compare against the field's zero value instead of the argument
    against_zero: bool = False
    # test len(field) instead of the field itself
    on_length: bool = False


GUARD_RULES: Dict[str, GuardRule] = {
    "required": GuardRule(_any, "==", "{field} must not {operand}", against_zero=True),
    "notzero": GuardRule(_any, "==", "{field} must not {operand}", against_zero=True),
    "zero": GuardRule(_any, "!=", "{field} must {operand}", against_zero=True),
    "min": GuardRule(_number, "<", "{field} must greater than or equal {operand}"),
    "gte": GuardRule(_number, "<", "{field} must greater than or equal {operand}"),
    "max": GuardRule(_number, ">", "{field} must less than or equal {operand}"),
    "lte": GuardRule(_number, ">", "{field} must less than or equal {operand}"),
    "gt": GuardRule(_number, "<=", "{field} must greater than {operand}"),
    "lt": GuardRule(_number, ">=", "{field} must less than {operand}"),
    "len": GuardRule(_sequence, "!=", "{field} length must {operand}", on_length=True),
    "lenmin": GuardRule(_sequence, "<", "{field} length must greater than or equal {operand}", on_length=True),
    "lenmax": GuardRule(_sequence, ">", "{field} length must less than or equal {operand}", on_length=True),
}

KNOWN_CONSTRAINTS = frozenset({"default", *GUARD_RULES})


def field_expr(receiver: str, field: FieldDecl) -> str:
    return f"{receiver}.{field.name}"


def _compile_default(field: FieldDecl, constraint: Constraint, subject: str) -> Statement:
    value = constraint.value
    if field.type.category == TypeCategory.STRING:
        value = go_quote(value)
    return Statement(
        kind="default",
        field=field.name,
        constraint=constraint.name,
        subject=subject,
        op="==",
        operand=field.type.zero,
        value=value,
    )


def _compile_guard(field: FieldDecl, constraint: Constraint, rule: GuardRule, subject: str) -> Statement:
    operand = field.type.zero if rule.against_zero else constraint.value
    if rule.on_length:
        subject = f"len({subject})"
    message = rule.message.format(field=field.name, operand=operand)
    return Statement(
        kind="guard",
        field=field.name,
        constraint=constraint.name,
        subject=subject,
        op=rule.op,
        operand=operand,
        message=go_quote(message),
    )


def compile_constraint(field: FieldDecl, constraint: Constraint, receiver: str) -> Optional[Statement]:
    subject = field_expr(receiver, field)

    if constraint.name == "default":
        return _compile_default(field, constraint, subject)

    rule = GUARD_RULES.get(constraint.name)
    if rule is None:
        _log.debug("ignoring unknown constraint %r on field %s", constraint.name, field.name)
        return None
    if not rule.applies(field.type):
        _log.debug(
            "constraint %r does not apply to %s field %s",
            constraint.name,
            field.type.category.value,
            field.name,
        )
        return None
    return _compile_guard(field, constraint, rule, subject)


def compile_field(field: FieldDecl, receiver: str) -> List[Statement]:
    out: List[Statement] = []
    for c in field.constraints:
        stmt = compile_constraint(field, c, receiver)
        if stmt is not None:
            out.append(stmt)
    return out
