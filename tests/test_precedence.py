"""Precedence table and parenthesization tests."""

import pytest

from blockgen.haxe.core import (
    HAXE_LEVELS,
    HAXE_PRECEDENCE,
    ORDER_ADDITION,
    ORDER_ATOMIC,
    ORDER_FUNCTION_CALL,
    ORDER_LOGICAL_NOT,
    ORDER_MEMBER,
    ORDER_MULTIPLICATION,
    ORDER_NONE,
    ORDER_SUBTRACTION,
)
from blockgen.precedence import CodeFragment, Level, PrecedenceTable

from builders import haxe, mk, num


@pytest.mark.parametrize(
    "inner,outer,expected",
    [
        (ORDER_ADDITION, ORDER_MULTIPLICATION, True),
        (ORDER_MULTIPLICATION, ORDER_ADDITION, False),
        (ORDER_SUBTRACTION, ORDER_SUBTRACTION, True),
        (ORDER_ADDITION, ORDER_ADDITION, False),
        (ORDER_FUNCTION_CALL, ORDER_MEMBER, False),
        (ORDER_LOGICAL_NOT, ORDER_LOGICAL_NOT, False),
        (ORDER_ATOMIC, ORDER_ATOMIC, False),
        (ORDER_NONE, ORDER_NONE, False),
        (ORDER_NONE, ORDER_ADDITION, True),
        (ORDER_ADDITION, ORDER_NONE, False),
    ],
)
def test_needs_parens(inner: Level, outer: Level, expected: bool) -> None:
    assert HAXE_PRECEDENCE.needs_parens(inner, outer) is expected


def test_function_call_embeds_anywhere() -> None:
    for level in HAXE_LEVELS:
        if level.rank > ORDER_FUNCTION_CALL.rank:
            assert not HAXE_PRECEDENCE.needs_parens(ORDER_FUNCTION_CALL, level)


def test_unknown_level_is_key_error() -> None:
    with pytest.raises(KeyError):
        HAXE_PRECEDENCE.level("Bogus")


def test_table_bounds() -> None:
    assert HAXE_PRECEDENCE.atomic is ORDER_ATOMIC
    assert HAXE_PRECEDENCE.tightest == 0
    assert HAXE_PRECEDENCE.loosest == 99


def test_wrap() -> None:
    frag = CodeFragment("a + b", ORDER_ADDITION)
    assert HAXE_PRECEDENCE.wrap(frag, ORDER_MULTIPLICATION) == CodeFragment("(a + b)", ORDER_ATOMIC)
    assert HAXE_PRECEDENCE.wrap(frag, ORDER_NONE) is frag


def test_empty_table_rejected() -> None:
    with pytest.raises(ValueError):
        PrecedenceTable([])


def _arith(op, a, b):
    return mk("math_arithmetic", OP=op, A=a, B=b)


def test_looser_child_parenthesized() -> None:
    tree = _arith("MULTIPLY", _arith("ADD", num(1), num(2)), num(3))
    assert haxe(tree) == "(1 + 2) * 3;\n"


def test_tighter_child_not_parenthesized() -> None:
    tree = _arith("ADD", _arith("MULTIPLY", num(1), num(2)), num(3))
    assert haxe(tree) == "1 * 2 + 3;\n"


def test_associative_chain_not_parenthesized() -> None:
    tree = _arith("ADD", num(1), _arith("ADD", num(2), num(3)))
    assert haxe(tree) == "1 + 2 + 3;\n"


def test_subtraction_tie_parenthesized() -> None:
    tree = _arith("MINUS", num(1), _arith("MINUS", num(2), num(3)))
    assert haxe(tree) == "1 - (2 - 3);\n"


def test_power_uses_function_call() -> None:
    tree = _arith("MULTIPLY", _arith("POWER", _arith("ADD", num(1), num(2)), num(3)), num(4))
    assert haxe(tree) == "Math.pow(1 + 2, 3) * 4;\n"


def test_double_negation_keeps_operand_apart() -> None:
    tree = mk("math_single", OP="NEG", NUM=num(-3))
    assert haxe(tree) == "-(-3);\n"
