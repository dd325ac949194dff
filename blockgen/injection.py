"""Instrumentation snippets injected around generated statements.

Snippets are plain target-language text. A `%1` inside a snippet is
replaced by the quoted id of the block it is injected for, so a debugger
or stepper can tell which block is executing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

BLOCK_ID_PLACEHOLDER = "%1"


class Exit(Enum):
    """How control leaves a statement."""

    NORMAL = "normal"
    BREAK = "break"
    CONTINUE = "continue"
    RETURN = "return"


@dataclass(frozen=True)
class Injection:
    """Configured snippets. Any of them may be absent."""

    statement_prefix: str | None = None
    statement_suffix: str | None = None
    loop_trap: str | None = None

    def __bool__(self) -> bool:
        return bool(self.statement_prefix or self.statement_suffix or self.loop_trap)


def inject_id(template: str, block_id: str) -> str:
    """Substitute the quoted block id into a snippet."""
    return template.replace(BLOCK_ID_PLACEHOLDER, "'" + block_id + "'")
