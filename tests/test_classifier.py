from __future__ import annotations

import pytest

from argumenter.core.classifier import classify
from argumenter.core.models import TypeCategory


@pytest.mark.parametrize(
    "expr,category,zero",
    [
        ("int", TypeCategory.INTEGER, "0"),
        ("int64", TypeCategory.INTEGER, "0"),
        ("byte", TypeCategory.INTEGER, "0"),
        ("uint8", TypeCategory.UNSIGNED, "0"),
        ("uintptr", TypeCategory.UNSIGNED, "0"),
        ("rune", TypeCategory.UNSIGNED, "0"),
        ("float32", TypeCategory.FLOAT, "0"),
        ("complex128", TypeCategory.COMPLEX, "0"),
        ("bool", TypeCategory.BOOLEAN, "false"),
        ("string", TypeCategory.STRING, '""'),
        ("[]int", TypeCategory.SLICE, "nil"),
        ("[4]string", TypeCategory.SLICE, "nil"),
        ("map[int]bool", TypeCategory.MAP, "nil"),
        ("chan int", TypeCategory.CHANNEL, "nil"),
        ("<-chan int", TypeCategory.CHANNEL, "nil"),
        ("chan<- string", TypeCategory.CHANNEL, "nil"),
        ("func()", TypeCategory.FUNCTION, "nil"),
        ("func(a, b int) error", TypeCategory.FUNCTION, "nil"),
        ("interface{}", TypeCategory.INTERFACE, "nil"),
        ("any", TypeCategory.INTERFACE, "nil"),
        ("error", TypeCategory.INTERFACE, "nil"),
        ("*int", TypeCategory.POINTER, "nil"),
    ],
)
def test_builtin_categories_and_zero_values(expr, category, zero):
    d = classify(expr)
    assert d.category == category
    assert d.zero == zero
    assert d.expr == expr


def test_interface_is_never_an_integer():
    d = classify("interface{}")
    assert d.category == TypeCategory.INTERFACE
    assert not d.is_number


@pytest.mark.parametrize("expr", ["integer", "time.Duration", "Item", "struct{}", "int64s", "channel", "mapping"])
def test_named_and_other_types_fall_back_to_new_expression(expr):
    d = classify(expr)
    assert d.category == TypeCategory.OTHER
    assert d.zero == f"*new({expr})"


def test_zero_value_is_total():
    for expr in ["", "   ", "???", "[", "map[", "<-"]:
        d = classify(expr)
        assert d.zero != ""


def test_number_union():
    for expr in ["int", "uint16", "float64", "complex64"]:
        assert classify(expr).is_number
    for expr in ["string", "bool", "[]int", "*int"]:
        assert not classify(expr).is_number


def test_payloads():
    arr = classify("[3]int")
    assert arr.length == "3"
    assert arr.elem == "int"
    assert arr.is_sequence

    sl = classify("[]*Item")
    assert sl.length == ""
    assert sl.elem == "*Item"

    m = classify("map[string][]int")
    assert m.key == "string"
    assert m.elem == "[]int"

    p = classify("*time.Time")
    assert p.elem == "time.Time"

    ch = classify("chan<- string")
    assert ch.elem == "string"
