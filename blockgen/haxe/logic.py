"""Haxe code for logic blocks."""

from __future__ import annotations

from ..blocks import Block
from ..generator import Context, Rule
from ..precedence import CodeFragment
from ..util import prefix_lines
from .core import (
    ORDER_ATOMIC,
    ORDER_CONDITIONAL,
    ORDER_EQUALITY,
    ORDER_LOGICAL_AND,
    ORDER_LOGICAL_NOT,
    ORDER_LOGICAL_OR,
    ORDER_NONE,
    ORDER_RELATIONAL,
    unknown_mode,
)

COMPARISONS: dict[str, str] = {
    "EQ": "==",
    "NEQ": "!=",
    "LT": "<",
    "LTE": "<=",
    "GT": ">",
    "GTE": ">=",
}


def controls_if(block: Block, ctx: Context) -> str:
    """If/elseif/else chain. Injects its own prefix, and its suffix into every branch."""
    code = ctx.statement_prefix(block)
    suffix = ctx.statement_suffix(block)
    elseif_count = block.state_int("elseIfCount")
    has_else = block.type == "controls_ifelse" or block.state_bool("hasElse") or block.has_input("ELSE")
    n = 0
    while True:
        condition = ctx.value_to_code(block, "IF" + str(n), ORDER_NONE, "false")
        branch = ctx.statement_to_code(block, "DO" + str(n))
        if suffix:
            branch = prefix_lines(suffix, ctx.indent) + branch
        code += (" else " if n > 0 else "") + "if (" + condition + ") {\n" + branch + "}"
        n += 1
        if n > elseif_count and not block.has_input("IF" + str(n)):
            break
    if has_else or suffix:
        branch = ctx.statement_to_code(block, "ELSE")
        if suffix:
            branch = prefix_lines(suffix, ctx.indent) + branch
        code += " else {\n" + branch + "}"
    return code + "\n"


def logic_compare(block: Block, ctx: Context) -> CodeFragment:
    op = block.field_value("OP")
    operator = COMPARISONS.get(op or "")
    if operator is None:
        raise unknown_mode(block, op)
    order = ORDER_EQUALITY if operator in ("==", "!=") else ORDER_RELATIONAL
    a = ctx.value_to_code(block, "A", order, "0")
    b = ctx.value_to_code(block, "B", order, "0")
    return CodeFragment(a + " " + operator + " " + b, order)


def logic_operation(block: Block, ctx: Context) -> CodeFragment:
    operator = "&&" if block.field_value("OP") == "AND" else "||"
    order = ORDER_LOGICAL_AND if operator == "&&" else ORDER_LOGICAL_OR
    a = ctx.value_to_code(block, "A", order)
    b = ctx.value_to_code(block, "B", order)
    if not a and not b:
        a = "false"
        b = "false"
    else:
        # A single missing operand must not change the result
        default = "true" if operator == "&&" else "false"
        a = a or default
        b = b or default
    return CodeFragment(a + " " + operator + " " + b, order)


def logic_negate(block: Block, ctx: Context) -> CodeFragment:
    arg = ctx.value_to_code(block, "BOOL", ORDER_LOGICAL_NOT, "true")
    return CodeFragment("!" + arg, ORDER_LOGICAL_NOT)


def logic_boolean(block: Block, ctx: Context) -> CodeFragment:
    code = "true" if block.field_value("BOOL") == "TRUE" else "false"
    return CodeFragment(code, ORDER_ATOMIC)


def logic_null(block: Block, ctx: Context) -> CodeFragment:
    return CodeFragment("null", ORDER_ATOMIC)


def logic_ternary(block: Block, ctx: Context) -> CodeFragment:
    cond = ctx.value_to_code(block, "IF", ORDER_CONDITIONAL, "false")
    then = ctx.value_to_code(block, "THEN", ORDER_CONDITIONAL, "null")
    other = ctx.value_to_code(block, "ELSE", ORDER_CONDITIONAL, "null")
    return CodeFragment(cond + " ? " + then + " : " + other, ORDER_CONDITIONAL)


RULES: dict[str, Rule] = {
    "controls_if": Rule(controls_if, self_injecting=True),
    "controls_ifelse": Rule(controls_if, self_injecting=True),
    "logic_compare": Rule(logic_compare, value=True),
    "logic_operation": Rule(logic_operation, value=True),
    "logic_negate": Rule(logic_negate, value=True),
    "logic_boolean": Rule(logic_boolean, value=True),
    "logic_null": Rule(logic_null, value=True),
    "logic_ternary": Rule(logic_ternary, value=True),
}
