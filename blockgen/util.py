"""Shared text utilities for the generator and target rule sets."""

from __future__ import annotations

import re
import textwrap
from urllib.parse import quote as url_quote

_NUMBER_RE = re.compile(r"^\s*-?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?\s*$", re.ASCII)
_WORD_RE = re.compile(r"^\w+$", re.ASCII)
_NON_WORD_RE = re.compile(r"[^\w]", re.ASCII)

# Characters encodeURI leaves alone besides letters and digits
_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"


def is_number(text: str) -> bool:
    """Check if text is a plain numeric literal."""
    return _NUMBER_RE.match(text) is not None


def is_word(text: str) -> bool:
    """Check if text is a single identifier-like token (no lookups, no calls)."""
    return _WORD_RE.match(text) is not None


def format_number(value: float) -> str:
    """Render a number the way a dynamic language prints it (3.0 -> 3)."""
    if value != value:
        return "NaN"
    if value in (float("inf"), float("-inf")):
        return "Infinity" if value > 0 else "-Infinity"
    if value == int(value) and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def prefix_lines(text: str, prefix: str) -> str:
    """Prepend prefix to every line of text. A trailing newline stays bare."""
    if text == "":
        return ""
    trailing = text.endswith("\n")
    body = text[:-1] if trailing else text
    lines = body.split("\n")
    result = "\n".join(prefix + line for line in lines)
    if trailing:
        result += "\n"
    return result


def safe_identifier(name: str) -> str:
    """Turn an arbitrary user-facing name into a legal ASCII identifier.

    Non-ASCII characters are percent-encoded as UTF-8 first, so "café"
    becomes "caf_C3_A9" rather than collapsing onto another name.
    """
    if not name:
        return "unnamed"
    name = url_quote(name.replace(" ", "_"), safe=_URI_SAFE)
    name = _NON_WORD_RE.sub("_", name)
    if name[0].isdigit():
        name = "my_" + name
    return name


def normalize_indent(code: str, indent: str) -> str:
    """Replace each leading two-space indentation unit with indent."""
    if indent == "  ":
        return code

    def _replace(match: re.Match[str]) -> str:
        units = len(match.group(0)) // 2
        return indent * units

    return re.sub(r"^(?:  )+", _replace, code, flags=re.MULTILINE)


def to_pascal(name: str) -> str:
    """Convert SCREAMING_SNAKE or snake_case to PascalCase."""
    parts = name.lower().split("_")
    return "".join(p.capitalize() for p in parts)


def wrap_comment(text: str, width: int) -> str:
    """Wrap comment text to width, keeping explicit line breaks."""
    wrapped: list[str] = []
    for para in text.split("\n"):
        if para.strip() == "":
            wrapped.append("")
            continue
        wrapped.extend(textwrap.wrap(para, width) or [""])
    return "\n".join(wrapped)


def tidy_output(code: str) -> str:
    """Drop leading blank lines, trailing blank lines and trailing spaces."""
    code = re.sub(r"\A\s+\n", "", code)
    code = re.sub(r"\n\s+\Z", "\n", code)
    return re.sub(r"[ \t]+\n", "\n", code)
