"""Errors raised while generating code from a block workspace."""

from __future__ import annotations


class GenerationError(Exception):
    """Fatal code generation error. Aborts the whole run."""

    def __init__(self, msg: str):
        self.msg: str = msg
        super().__init__(msg)


class UnknownModeError(GenerationError):
    """A rule received a dropdown value it does not handle."""

    def __init__(self, block_type: str, block_id: str, mode: str | None):
        self.block_type: str = block_type
        self.block_id: str = block_id
        self.mode: str | None = mode
        super().__init__(
            "unknown mode " + repr(mode) + " for block " + block_type + " (" + block_id + ")"
        )


class UnknownBlockError(GenerationError):
    """No rule is registered for a statement block type."""

    def __init__(self, block_type: str, block_id: str):
        self.block_type: str = block_type
        self.block_id: str = block_id
        super().__init__(
            "no rule to generate code for block type " + block_type + " (" + block_id + ")"
        )


class HelperConflictError(GenerationError):
    """Two different bodies were provided under the same helper key."""

    def __init__(self, key: str):
        self.key: str = key
        super().__init__("conflicting definitions for helper " + repr(key))


class WorkspaceError(Exception):
    """Malformed serialized workspace."""

    def __init__(self, msg: str, path: str = ""):
        self.msg: str = msg
        self.path: str = path
        if path:
            super().__init__(path + ": " + msg)
        else:
            super().__init__(msg)
