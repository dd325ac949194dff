"""Registry of generated definitions shared by many call sites.

A helper is requested by semantic key. The first request allocates its
function name, substitutes the name into the body and stores it; every
later request with the same key returns the stored name. User procedure
definitions live in the same registry under `%`-prefixed keys so they
never collide with helper keys.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import HelperConflictError
from .names import PROCEDURE, NameDB
from .util import normalize_indent

logger = logging.getLogger(__name__)

FUNCTION_NAME_PLACEHOLDER = "{leCUI8hutHZI4480Dc}"
PROCEDURE_KEY_PREFIX = "%"


@dataclass
class Definition:
    """A materialized definition: key, resolved name and final source text."""

    key: str
    name: str
    code: str
    template: str


class HelperRegistry:
    """Deduplicating store of definitions for one compilation run."""

    def __init__(self, names: NameDB, indent: str = "  ") -> None:
        self._names: NameDB = names
        self._indent: str = indent
        self._defs: dict[str, Definition] = {}

    def provide(self, key: str, lines: list[str]) -> str:
        """Return the function name for key, materializing the body on first use."""
        template = "\n".join(lines)
        existing = self._defs.get(key)
        if existing is not None:
            if existing.template != template:
                raise HelperConflictError(key)
            return existing.name
        name = self._names.get_distinct_name(key, PROCEDURE, root=True)
        code = normalize_indent(template.replace(FUNCTION_NAME_PLACEHOLDER, name), self._indent)
        self._defs[key] = Definition(key=key, name=name, code=code, template=template)
        logger.debug("materialized helper %s as %s", key, name)
        return name

    def define(self, key: str, code: str, name: str = "") -> None:
        """Store a complete definition under key. Redefining with other code is an error."""
        existing = self._defs.get(key)
        if existing is not None:
            if existing.code != code:
                raise HelperConflictError(key)
            return
        self._defs[key] = Definition(key=key, name=name, code=code, template=code)

    def definitions(self) -> list[Definition]:
        """All definitions in first-registration order."""
        return list(self._defs.values())
