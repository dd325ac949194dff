"""Operator precedence levels and precedence-tagged code fragments.

A rule that translates a value block returns a CodeFragment: the emitted
text plus the Level at which that text is valid without extra parentheses.
A parent requests each child at the Level of the operator it is about to
place the child under. The child is wrapped when it does not bind strictly
tighter than that request.

| Situation                         | Parenthesized |
|-----------------------------------|---------------|
| inner.rank <  outer.rank          | no            |
| inner.rank >= outer.rank          | yes           |
| both Atomic, or both None         | no            |
| (outer, inner) is an override     | no            |
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Level:
    """One precedence level. Lower rank binds tighter; ranks may tie."""

    name: str
    rank: int


@dataclass(frozen=True)
class CodeFragment:
    """Expression text tagged with the level it was produced at."""

    text: str
    level: Level


class PrecedenceTable:
    """Totally ordered set of precedence levels for one target language.

    The tightest level (lowest rank) is the atomic level, the loosest
    (highest rank) is the "none" level that accepts anything.
    """

    def __init__(
        self,
        levels: list[Level],
        overrides: list[tuple[str, str]] | None = None,
    ) -> None:
        if not levels:
            raise ValueError("precedence table needs at least one level")
        self._levels: dict[str, Level] = {}
        for lvl in levels:
            self._levels[lvl.name] = lvl
        self.atomic: Level = min(levels, key=lambda lvl: lvl.rank)
        self.tightest: int = self.atomic.rank
        self.loosest: int = max(lvl.rank for lvl in levels)
        self._overrides: frozenset[tuple[str, str]] = frozenset(overrides or [])

    def level(self, name: str) -> Level:
        """Look up a level by name. Unknown names are a caller bug."""
        return self._levels[name]

    def needs_parens(self, inner: Level, outer: Level) -> bool:
        """Check if a fragment at inner must be wrapped inside a context requesting outer."""
        if outer.rank > inner.rank:
            return False
        if outer.rank == inner.rank and outer.rank in (self.tightest, self.loosest):
            return False
        return (outer.name, inner.name) not in self._overrides

    def wrap(self, fragment: CodeFragment, outer: Level) -> CodeFragment:
        """Fragment as it may be embedded under outer.

        A parenthesized fragment is atomic.
        """
        if self.needs_parens(fragment.level, outer):
            return CodeFragment("(" + fragment.text + ")", self.atomic)
        return fragment
