"""Haxe target: precedence table, reserved words and the block rule set."""

from __future__ import annotations

from ..blocks import Workspace
from ..generator import Generator, Rule, Target
from ..injection import Injection
from . import colour, logic, loops, math, procedures, text, variables
from .core import HAXE_PRECEDENCE, HAXE_RESERVED, declare_variables, naked_value


def _collect_rules() -> dict[str, Rule]:
    rules: dict[str, Rule] = {}
    for module in (colour, logic, loops, math, procedures, text, variables):
        for block_type, rule in module.RULES.items():
            if block_type in rules:
                raise ValueError("duplicate rule for block type " + block_type)
            rules[block_type] = rule
    return rules


HAXE = Target(
    name="haxe",
    precedence=HAXE_PRECEDENCE,
    reserved_words=HAXE_RESERVED,
    rules=_collect_rules(),
    indent="  ",
    comment_prefix="// ",
    declare_variables=declare_variables,
    naked_value=naked_value,
)


def emit_haxe(workspace: Workspace, injection: Injection | None = None) -> str:
    """Generate Haxe source for a workspace."""
    return Generator(HAXE, injection).workspace_to_code(workspace)
