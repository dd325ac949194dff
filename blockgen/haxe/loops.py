"""Haxe code for loop blocks.

Loop bodies are translated inside `ctx.loop(block)` so that break and
continue statements can find the loop whose prefix they must re-emit.
"""

from __future__ import annotations

from ..blocks import Block
from ..generator import Context, Rule
from ..injection import Exit
from ..names import VARIABLE
from ..util import format_number, is_number, is_word
from .core import ORDER_ASSIGNMENT, ORDER_LOGICAL_NOT, ORDER_NONE, unknown_mode


def _body(block: Block, ctx: Context) -> str:
    with ctx.loop(block):
        branch = ctx.statement_to_code(block, "DO")
    return ctx.add_loop_trap(branch, block)


def controls_repeat_ext(block: Block, ctx: Context) -> str:
    """Repeat n times."""
    if block.has_field("TIMES"):
        repeats = format_number(float(block.field_value("TIMES") or 0))
    else:
        repeats = ctx.value_to_code(block, "TIMES", ORDER_ASSIGNMENT, "0")
    branch = _body(block, ctx)
    code = ""
    loop_var = ctx.names.get_distinct_name("count", VARIABLE)
    end_var = repeats
    if not is_word(repeats) and not is_number(repeats):
        end_var = ctx.names.get_distinct_name("repeat_end", VARIABLE)
        code += "var " + end_var + " = " + repeats + ";\n"
    code += (
        "for (var " + loop_var + " = 0; "
        + loop_var + " < " + end_var + "; "
        + loop_var + "++) {\n"
        + branch + "}\n"
    )
    return code


def controls_while_until(block: Block, ctx: Context) -> str:
    until = block.field_value("MODE") == "UNTIL"
    cond = ctx.value_to_code(block, "BOOL", ORDER_LOGICAL_NOT if until else ORDER_NONE, "false")
    branch = _body(block, ctx)
    if until:
        cond = "!" + cond
    return "while (" + cond + ") {\n" + branch + "}\n"


def controls_for(block: Block, ctx: Context) -> str:
    """Counted loop; direction is fixed at entry when bounds are not literals."""
    var = ctx.variable_name(block.field_value("VAR"))
    start = ctx.value_to_code(block, "FROM", ORDER_ASSIGNMENT, "0")
    end = ctx.value_to_code(block, "TO", ORDER_ASSIGNMENT, "0")
    increment = ctx.value_to_code(block, "BY", ORDER_ASSIGNMENT, "1")
    branch = _body(block, ctx)
    if is_number(start) and is_number(end) and is_number(increment):
        up = float(start) <= float(end)
        code = "for (" + var + " = " + start + "; " + var + (" <= " if up else " >= ") + end + "; " + var
        step = abs(float(increment))
        if step == 1:
            code += "++" if up else "--"
        else:
            code += (" += " if up else " -= ") + format_number(step)
        return code + ") {\n" + branch + "}\n"
    code = ""
    # Cache non-trivial bounds so they are evaluated once
    start_var = start
    if not is_word(start) and not is_number(start):
        start_var = ctx.names.get_distinct_name(var + "_start", VARIABLE)
        code += "var " + start_var + " = " + start + ";\n"
    end_var = end
    if not is_word(end) and not is_number(end):
        end_var = ctx.names.get_distinct_name(var + "_end", VARIABLE)
        code += "var " + end_var + " = " + end + ";\n"
    inc_var = ctx.names.get_distinct_name(var + "_inc", VARIABLE)
    code += "var " + inc_var + " = "
    if is_number(increment):
        code += format_number(abs(float(increment))) + ";\n"
    else:
        code += "Math.abs(" + increment + ");\n"
    code += "if (" + start_var + " > " + end_var + ") {\n"
    code += ctx.indent + inc_var + " = -" + inc_var + ";\n"
    code += "}\n"
    code += (
        "for (" + var + " = " + start_var + "; "
        + inc_var + " >= 0 ? "
        + var + " <= " + end_var + " : "
        + var + " >= " + end_var + "; "
        + var + " += " + inc_var + ") {\n"
        + branch + "}\n"
    )
    return code


def controls_for_each(block: Block, ctx: Context) -> str:
    var = ctx.variable_name(block.field_value("VAR"))
    items = ctx.value_to_code(block, "LIST", ORDER_ASSIGNMENT, "[]")
    branch = _body(block, ctx)
    code = ""
    list_var = items
    if not is_word(items):
        list_var = ctx.names.get_distinct_name(var + "_list", VARIABLE)
        code += "var " + list_var + " = " + items + ";\n"
    index_var = ctx.names.get_distinct_name(var + "_index", VARIABLE)
    branch = ctx.indent + var + " = " + list_var + "[" + index_var + "];\n" + branch
    code += "for (var " + index_var + " in " + list_var + ") {\n" + branch + "}\n"
    return code


FLOW_STATEMENTS: dict[str, tuple[str, Exit]] = {
    "BREAK": ("break;\n", Exit.BREAK),
    "CONTINUE": ("continue;\n", Exit.CONTINUE),
}


def controls_flow_statements(block: Block, ctx: Context) -> str:
    """break/continue, preceded by the snippets the skipped loop tail would emit."""
    mode = block.field_value("FLOW")
    if mode not in FLOW_STATEMENTS:
        raise unknown_mode(block, mode)
    code, exit = FLOW_STATEMENTS[mode]
    return ctx.exit_xfix(block, exit) + code


RULES: dict[str, Rule] = {
    "controls_repeat_ext": Rule(controls_repeat_ext),
    "controls_repeat": Rule(controls_repeat_ext),
    "controls_whileUntil": Rule(controls_while_until),
    "controls_for": Rule(controls_for),
    "controls_forEach": Rule(controls_for_each),
    "controls_flow_statements": Rule(controls_flow_statements, self_injecting=True),
}
