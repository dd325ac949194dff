"""Block workspace -> target source code.

A Target bundles everything language specific: the precedence table,
reserved words, indentation and the rule table mapping block types to
translation functions. A Generator pairs a Target with injection snippets
and compiles workspaces. Each compile() call builds a fresh Context, so
names and helpers from one run never leak into the next.

Rules receive the block and the Context and return:
- CodeFragment for value blocks (text plus the level it was produced at)
- str for statement blocks, each line terminated by a newline
- None when the block contributes no inline code (e.g. it stores a
  definition in the helper registry instead)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator

from .blocks import Block, Workspace
from .errors import GenerationError, UnknownBlockError
from .helpers import PROCEDURE_KEY_PREFIX, HelperRegistry
from .injection import Exit, Injection, inject_id
from .names import VARIABLE, NameDB
from .precedence import CodeFragment, Level, PrecedenceTable
from .util import format_number, is_number, prefix_lines, tidy_output, wrap_comment

logger = logging.getLogger(__name__)

COMMENT_WRAP = 60


@dataclass(frozen=True)
class Rule:
    """Translation function for one block type."""

    fn: Callable[[Block, Context], str | CodeFragment | None]
    value: bool = False  # produces an expression rather than statements
    self_injecting: bool = False  # places statement prefix/suffix itself


@dataclass
class Target:
    """Language-specific configuration."""

    name: str
    precedence: PrecedenceTable
    reserved_words: frozenset[str]
    rules: dict[str, Rule]
    indent: str = "  "
    comment_prefix: str = "// "
    declare_variables: Callable[[list[str]], str] | None = None
    naked_value: Callable[[str], str] = lambda code: code + ";\n"
    atomic_level: str = "Atomic"
    none_level: str = "None"
    addition_level: str = "Addition"
    subtraction_level: str = "Subtraction"
    negation_level: str = "UnaryNegation"


@dataclass(frozen=True)
class Document:
    """Result of one compilation run."""

    definitions: list[str] = field(default_factory=list)
    entries: list[str] = field(default_factory=list)
    text: str = ""


class Context:
    """Mutable state of one compilation run, passed to every rule."""

    def __init__(self, target: Target, injection: Injection, workspace: Workspace) -> None:
        self.target: Target = target
        self.injection: Injection = injection
        self.workspace: Workspace = workspace
        self.precedence: PrecedenceTable = target.precedence
        self.indent: str = target.indent
        self.names: NameDB = NameDB(target.reserved_words)
        self.helpers: HelperRegistry = HelperRegistry(self.names, target.indent)
        self._loops: list[Block] = []
        self.atomic: Level = self.precedence.level(target.atomic_level)
        self.none: Level = self.precedence.level(target.none_level)

    # ── Names ───────────────────────────────────────────────

    def variable_name(self, name: str | None) -> str:
        return self.names.get_name(name or "", VARIABLE)

    def parameter_name(self, name: str) -> str:
        """Bind a procedure parameter in the current scope.

        A parameter naming a workspace variable keeps its identifier; any
        other parameter becomes a local of the procedure body.
        """
        found = self.names.lookup(name, VARIABLE)
        if found is not None:
            return found
        return self.names.shadow(name, VARIABLE)

    # ── Expressions ─────────────────────────────────────────

    def translate_expression(self, block: Block | None, outer: Level, default: str = "") -> CodeFragment:
        """Translate a value block for a context requesting outer.

        Missing or unusable children yield the default literal at atomic level.
        """
        if block is None:
            return CodeFragment(default, self.atomic)
        rule = self.target.rules.get(block.type)
        if rule is None or not rule.value or block.disabled:
            if rule is None:
                logger.warning("no value rule for block type %s (%s), using %r", block.type, block.id, default)
            elif not rule.value:
                logger.warning("statement block %s (%s) used as a value, using %r", block.type, block.id, default)
            return CodeFragment(default, self.atomic)
        result = self.block_to_code(block, this_only=True)
        if not isinstance(result, CodeFragment):
            raise GenerationError("expected a value from block " + block.type + " (" + block.id + ")")
        if result.text == "":
            return CodeFragment(default, self.atomic)
        return self.precedence.wrap(result, outer)

    def value_to_code(self, block: Block, name: str, outer: Level, default: str = "") -> str:
        """Code for the value input name, or default when it is empty."""
        return self.translate_expression(block.input_block(name), outer, default).text

    def get_adjusted(
        self,
        block: Block,
        name: str,
        delta: int = 0,
        negate: bool = False,
        order: Level | None = None,
    ) -> str:
        """Index expression for input name, shifted for the workspace's index base."""
        level = order if order is not None else self.none
        addition = self.precedence.level(self.target.addition_level)
        subtraction = self.precedence.level(self.target.subtraction_level)
        negation = self.precedence.level(self.target.negation_level)
        if self.workspace.one_based_index:
            delta -= 1
        default_at = "1" if self.workspace.one_based_index else "0"
        if delta > 0:
            at = self.value_to_code(block, name, addition, default_at)
        elif delta < 0:
            at = self.value_to_code(block, name, subtraction, default_at)
        elif negate:
            at = self.value_to_code(block, name, negation, default_at)
        else:
            at = self.value_to_code(block, name, level, default_at)
        if is_number(at):
            value = float(at) + delta
            if negate:
                value = -value
            return format_number(value)
        inner: Level | None = None
        if delta > 0:
            at = at + " + " + str(delta)
            inner = addition
        elif delta < 0:
            at = at + " - " + str(-delta)
            inner = subtraction
        if negate:
            at = "-(" + at + ")" if delta else "-" + at
            inner = negation
        if inner is not None and self.precedence.needs_parens(inner, level):
            at = "(" + at + ")"
        return at

    # ── Statements ──────────────────────────────────────────

    def block_to_code(self, block: Block | None, this_only: bool = False) -> str | CodeFragment:
        """Translate block (and, unless this_only, the blocks after it).

        The `next` chain is walked in a loop, so sequence length is not
        bounded by the recursion limit.
        """
        if this_only:
            return "" if block is None else self._translate_block(block)
        parts: list[str] = []
        while block is not None:
            code = self._translate_block(block)
            if isinstance(code, CodeFragment):
                if parts:
                    raise GenerationError(
                        "value block " + block.type + " (" + block.id + ") in a statement sequence"
                    )
                return code
            if code:
                parts.append(code)
            block = block.next
        return "".join(parts)

    def _translate_block(self, block: Block) -> str | CodeFragment:
        if block.disabled:
            return ""
        rule = self.target.rules.get(block.type)
        if rule is None:
            raise UnknownBlockError(block.type, block.id)
        code = rule.fn(block, self)
        if isinstance(code, CodeFragment):
            return code
        if isinstance(code, str):
            if not rule.self_injecting:
                code = self.statement_prefix(block) + code + self.statement_suffix(block)
            return self.comment_code(block) + code
        if code is None:
            return ""
        raise GenerationError("invalid code generated for block " + block.type + " (" + block.id + ")")

    def translate_statement(self, block: Block | None) -> str:
        """Translate a single statement block, ignoring its successors."""
        code = self.block_to_code(block, this_only=True)
        if isinstance(code, CodeFragment):
            raise GenerationError("expected statements from block " + (block.type if block else "?"))
        return code

    def statement_to_code(self, block: Block, name: str) -> str:
        """Indented code for the statement sequence plugged into input name."""
        target = block.statement_block(name)
        code = self.block_to_code(target)
        if not isinstance(code, str):
            raise GenerationError(
                "expected statements in input " + name + " of block " + block.type + " (" + block.id + ")"
            )
        if code:
            code = prefix_lines(code, self.indent)
        return code

    def comment_code(self, block: Block) -> str:
        """Comment lines for block and the value blocks plugged into it."""
        comments: list[str] = []
        if block.comment:
            comments.append(block.comment)
        for child in block.inputs.values():
            rule = self.target.rules.get(child.type)
            if rule is not None and rule.value:
                comments.extend(_nested_comments(child))
        if not comments:
            return ""
        text = "\n".join(wrap_comment(c, COMMENT_WRAP - len(self.target.comment_prefix)) for c in comments)
        return prefix_lines(text + "\n", self.target.comment_prefix)

    # ── Injection ───────────────────────────────────────────

    def statement_prefix(self, block: Block) -> str:
        if not self.injection.statement_prefix or block.suppress_prefix_suffix:
            return ""
        return inject_id(self.injection.statement_prefix, block.id)

    def statement_suffix(self, block: Block) -> str:
        if not self.injection.statement_suffix or block.suppress_prefix_suffix:
            return ""
        return inject_id(self.injection.statement_suffix, block.id)

    def loop_trap(self, block: Block) -> str:
        if not self.injection.loop_trap:
            return ""
        return inject_id(self.injection.loop_trap, block.id)

    def add_loop_trap(self, branch: str, block: Block) -> str:
        """Instrument a loop body so traps and suffix fire once per iteration."""
        trap = self.loop_trap(block)
        if trap:
            branch = prefix_lines(trap, self.indent) + branch
        suffix = self.statement_suffix(block)
        if suffix:
            branch = prefix_lines(suffix, self.indent) + branch
        prefix = self.statement_prefix(block)
        if prefix:
            branch = branch + prefix_lines(prefix, self.indent)
        return branch

    def exit_xfix(self, block: Block, exit: Exit) -> str:
        """Snippets an early exit must emit itself because it skips the normal ones."""
        if exit is Exit.NORMAL:
            return ""
        if exit is Exit.RETURN:
            return self.statement_suffix(block)
        xfix = self.statement_prefix(block) + self.statement_suffix(block)
        loop = self.enclosing_loop()
        if loop is not None:
            xfix += self.statement_prefix(loop)
        return xfix

    def enclosing_loop(self) -> Block | None:
        return self._loops[-1] if self._loops else None

    @contextmanager
    def loop(self, block: Block) -> Iterator[None]:
        """Mark block as the innermost loop while its body is translated."""
        self._loops.append(block)
        try:
            yield
        finally:
            self._loops.pop()

    @contextmanager
    def procedure(self) -> Iterator[None]:
        """Translate a procedure body: no enclosing loops, nested naming scope."""
        saved = self._loops
        self._loops = []
        try:
            with self.names.scope():
                yield
        finally:
            self._loops = saved

    # ── Definitions ─────────────────────────────────────────

    def provide_function(self, key: str, lines: list[str]) -> str:
        return self.helpers.provide(key, lines)

    def define_procedure(self, name: str, code: str) -> None:
        self.helpers.define(PROCEDURE_KEY_PREFIX + name, code, name)

    def init(self) -> None:
        """Declare every workspace variable up front."""
        if self.target.declare_variables is None or not self.workspace.variables:
            return
        names = [self.variable_name(v) for v in self.workspace.variables]
        self.helpers.define("variables", self.target.declare_variables(names))


def _nested_comments(block: Block) -> list[str]:
    found: list[str] = []
    node: Block | None = block
    while node is not None:
        if node.comment:
            found.append(node.comment)
        for child in node.inputs.values():
            found.extend(_nested_comments(child))
        node = node.next
    return found


class Generator:
    """Compiles workspaces for one target with fixed injection settings."""

    def __init__(self, target: Target, injection: Injection | None = None) -> None:
        self.target: Target = target
        self.injection: Injection = injection if injection is not None else Injection()

    def compile(self, workspace: Workspace) -> Document:
        """Generate the full document for workspace in a fresh run."""
        ctx = Context(self.target, self.injection, workspace)
        ctx.init()
        blocks = workspace.ordered_top_blocks()
        logger.debug("generating %s for %d top blocks", self.target.name, len(blocks))
        entries: list[str] = []
        for block in blocks:
            line = ctx.block_to_code(block)
            if isinstance(line, CodeFragment):
                text = line.text
                if text:
                    text = ctx.comment_code(block) + self.target.naked_value(text)
                line = text
            if line:
                entries.append(line)
        definitions = [d.code for d in ctx.helpers.definitions()]
        logger.debug("generated %d entries and %d definitions", len(entries), len(definitions))
        code = "\n\n".join(definitions) + "\n\n\n" + "\n".join(entries)
        return Document(definitions=definitions, entries=entries, text=tidy_output(code))

    def workspace_to_code(self, workspace: Workspace) -> str:
        return self.compile(workspace).text
