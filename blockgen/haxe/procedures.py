"""Haxe code for procedure blocks.

Definitions produce no inline code. Each is stored in the helper registry
under a `%`-prefixed key and emitted ahead of the main program.
"""

from __future__ import annotations

from ..blocks import Block
from ..generator import Context, Rule
from ..injection import Exit
from ..names import PROCEDURE
from ..precedence import CodeFragment
from ..util import prefix_lines
from .core import ORDER_COMMA, ORDER_FUNCTION_CALL, ORDER_NONE


def _procedure_name(block: Block, ctx: Context) -> str:
    name = block.field_value("NAME")
    if name is None:
        name = str(block.extra_state.get("name", ""))
    return ctx.names.get_name(name, PROCEDURE)


def _arg_count(block: Block) -> int:
    n = len(block.state_names("params"))
    while block.has_input("ARG" + str(n)):
        n += 1
    return n


def procedures_defreturn(block: Block, ctx: Context) -> None:
    """Store a function definition; the body sees no enclosing loops."""
    name = _procedure_name(block, ctx)
    xfix1 = ctx.statement_prefix(block) + ctx.statement_suffix(block)
    if xfix1:
        xfix1 = prefix_lines(xfix1, ctx.indent)
    trap = ctx.loop_trap(block)
    if trap:
        trap = prefix_lines(trap, ctx.indent)
    with ctx.procedure():
        args = [ctx.parameter_name(p) for p in block.state_names("params")]
        branch = ctx.statement_to_code(block, "STACK")
        returns = ctx.value_to_code(block, "RETURN", ORDER_NONE)
    xfix2 = ""
    if branch and returns:
        # The return runs after the body, so the block is visited again
        xfix2 = xfix1
    if returns:
        returns = ctx.indent + "return " + returns + ";\n"
    code = (
        "function " + name + "(" + ", ".join(args) + ") {\n"
        + xfix1 + trap + branch + xfix2 + returns + "}"
    )
    ctx.define_procedure(name, ctx.comment_code(block) + code)
    return None


def procedures_callreturn(block: Block, ctx: Context) -> CodeFragment:
    name = _procedure_name(block, ctx)
    args = [ctx.value_to_code(block, "ARG" + str(i), ORDER_COMMA, "null") for i in range(_arg_count(block))]
    return CodeFragment(name + "(" + ", ".join(args) + ")", ORDER_FUNCTION_CALL)


def procedures_callnoreturn(block: Block, ctx: Context) -> str:
    return procedures_callreturn(block, ctx).text + ";\n"


def procedures_ifreturn(block: Block, ctx: Context) -> str:
    """Conditional early return; re-emits the suffix the skipped tail would run."""
    condition = ctx.value_to_code(block, "CONDITION", ORDER_NONE, "false")
    code = "if (" + condition + ") {\n"
    xfix = ctx.exit_xfix(block, Exit.RETURN)
    if xfix:
        code += prefix_lines(xfix, ctx.indent)
    if block.state_bool("hasReturnValue") or block.has_input("VALUE"):
        value = ctx.value_to_code(block, "VALUE", ORDER_NONE, "null")
        code += ctx.indent + "return " + value + ";\n"
    else:
        code += ctx.indent + "return;\n"
    return code + "}\n"


RULES: dict[str, Rule] = {
    "procedures_defreturn": Rule(procedures_defreturn),
    "procedures_defnoreturn": Rule(procedures_defreturn),
    "procedures_callreturn": Rule(procedures_callreturn, value=True),
    "procedures_callnoreturn": Rule(procedures_callnoreturn),
    "procedures_ifreturn": Rule(procedures_ifreturn),
}
