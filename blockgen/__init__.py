"""Blockgen - generates source code from visual block workspaces."""

from __future__ import annotations

import json

from .blocks import Block, Workspace, load_workspace
from .errors import (
    GenerationError,
    HelperConflictError,
    UnknownBlockError,
    UnknownModeError,
    WorkspaceError,
)
from .generator import Context, Document, Generator, Rule, Target
from .injection import Exit, Injection
from .names import DEVELOPER_VARIABLE, PROCEDURE, VARIABLE, NameDB
from .precedence import CodeFragment, Level, PrecedenceTable


def compile_json(source: str, target: Target, injection: Injection | None = None) -> str:
    """Serialized workspace JSON -> target source."""
    try:
        data = json.loads(source)
    except ValueError as e:
        raise WorkspaceError("invalid JSON: " + str(e)) from None
    return Generator(target, injection).workspace_to_code(load_workspace(data))


__all__ = [
    "Block",
    "CodeFragment",
    "Context",
    "DEVELOPER_VARIABLE",
    "Document",
    "Exit",
    "GenerationError",
    "Generator",
    "HelperConflictError",
    "Injection",
    "Level",
    "NameDB",
    "PROCEDURE",
    "PrecedenceTable",
    "Rule",
    "Target",
    "UnknownBlockError",
    "UnknownModeError",
    "VARIABLE",
    "Workspace",
    "WorkspaceError",
    "compile_json",
    "load_workspace",
]
