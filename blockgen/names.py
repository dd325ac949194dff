"""Collision-free identifier allocation within nested naming scopes.

Abstract names (user variable names, procedure names, purpose hints such as
"count") map to concrete identifiers. Every concrete identifier is unique
among all scopes visible at the point of allocation and never equals a
reserved word. Allocation is deterministic: the first free candidate of
`hint`, `hint2`, `hint3`, ... wins.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from .util import safe_identifier

VARIABLE = "VARIABLE"
PROCEDURE = "PROCEDURE"
DEVELOPER_VARIABLE = "DEVELOPER_VARIABLE"

NAME_KINDS: frozenset[str] = frozenset({VARIABLE, PROCEDURE, DEVELOPER_VARIABLE})


class _Scope:
    """One level of the scope chain."""

    def __init__(self, parent: _Scope | None) -> None:
        self.parent: _Scope | None = parent
        self.bindings: dict[tuple[str, str], str] = {}  # (kind, lowered name) -> concrete
        self.taken: set[str] = set()

    def chain(self) -> Iterator[_Scope]:
        scope: _Scope | None = self
        while scope is not None:
            yield scope
            scope = scope.parent


class NameDB:
    """Identifier allocator for one compilation run."""

    def __init__(self, reserved: frozenset[str] | set[str] = frozenset()) -> None:
        self.reserved: frozenset[str] = frozenset(reserved)
        self._root: _Scope = _Scope(None)
        self._current: _Scope = self._root

    def _is_taken(self, candidate: str) -> bool:
        if candidate in self.reserved:
            return True
        for scope in self._current.chain():
            if candidate in scope.taken:
                return True
        return False

    def _allocate(self, hint: str, scope: _Scope) -> str:
        base = safe_identifier(hint)
        candidate = base
        suffix = 1
        while self._is_taken(candidate):
            suffix += 1
            candidate = base + str(suffix)
        scope.taken.add(candidate)
        return candidate

    def lookup(self, name: str, kind: str) -> str | None:
        """Return the concrete name bound to name, or None."""
        key = (kind, name.lower())
        for scope in self._current.chain():
            if key in scope.bindings:
                return scope.bindings[key]
        return None

    def get_name(self, name: str, kind: str) -> str:
        """Bind an abstract name. Idempotent: the same name yields the same identifier."""
        if kind not in NAME_KINDS:
            raise ValueError("unknown name kind: " + kind)
        found = self.lookup(name, kind)
        if found is not None:
            return found
        concrete = self._allocate(name, self._root)
        self._root.bindings[(kind, name.lower())] = concrete
        return concrete

    def get_distinct_name(self, hint: str, kind: str, root: bool = False) -> str:
        """Allocate a new identifier derived from hint.

        The identifier lives in the current scope, or in the root scope when
        root is set (names that must outlive a procedure body, e.g. helpers).
        """
        if kind not in NAME_KINDS:
            raise ValueError("unknown name kind: " + kind)
        scope = self._root if root else self._current
        return self._allocate(hint, scope)

    def shadow(self, name: str, kind: str) -> str:
        """Bind name in the current scope to a fresh identifier, hiding outer bindings."""
        if self._current is self._root:
            return self.get_name(name, kind)
        key = (kind, name.lower())
        if key in self._current.bindings:
            return self._current.bindings[key]
        concrete = self._allocate(name, self._current)
        self._current.bindings[key] = concrete
        return concrete

    @contextmanager
    def scope(self) -> Iterator[NameDB]:
        """Enter a nested scope; its bindings are dropped on exit."""
        outer = self._current
        self._current = _Scope(outer)
        try:
            yield self
        finally:
            self._current = outer
