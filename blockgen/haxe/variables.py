"""Haxe code for variable blocks. Dynamic variants share the same rules."""

from __future__ import annotations

from ..blocks import Block
from ..generator import Context, Rule
from ..precedence import CodeFragment
from .core import ORDER_ASSIGNMENT, ORDER_ATOMIC


def variables_get(block: Block, ctx: Context) -> CodeFragment:
    return CodeFragment(ctx.variable_name(block.field_value("VAR")), ORDER_ATOMIC)


def variables_set(block: Block, ctx: Context) -> str:
    value = ctx.value_to_code(block, "VALUE", ORDER_ASSIGNMENT, "0")
    return ctx.variable_name(block.field_value("VAR")) + " = " + value + ";\n"


RULES: dict[str, Rule] = {
    "variables_get": Rule(variables_get, value=True),
    "variables_set": Rule(variables_set),
    "variables_get_dynamic": Rule(variables_get, value=True),
    "variables_set_dynamic": Rule(variables_set),
}
