"""Haxe code for text blocks."""

from __future__ import annotations

import re

from ..blocks import Block
from ..generator import Context, Rule
from ..helpers import FUNCTION_NAME_PLACEHOLDER as FN
from ..precedence import CodeFragment
from ..util import to_pascal
from .core import (
    ORDER_ADDITION,
    ORDER_ATOMIC,
    ORDER_COMMA,
    ORDER_FUNCTION_CALL,
    ORDER_LOGICAL_NOT,
    ORDER_MEMBER,
    ORDER_NONE,
    ORDER_SUBTRACTION,
    force_string,
    multiline_quote,
    quote,
    unknown_mode,
)

_SIMPLE_TEXT_RE = re.compile(r"^'?\w+'?$")

WHERES = ("FIRST", "LAST", "FROM_START", "FROM_END")

CASES: dict[str, str | None] = {
    "UPPERCASE": ".toUpperCase()",
    "LOWERCASE": ".toLowerCase()",
    "TITLECASE": None,  # needs a helper
}

TRIMS: dict[str, str] = {
    "LEFT": ".replace(/^[\\s\\xa0]+/, '')",
    "RIGHT": ".replace(/[\\s\\xa0]+$/, '')",
    "BOTH": ".trim()",
}


def text(block: Block, ctx: Context) -> CodeFragment:
    return CodeFragment(quote(block.field_value("TEXT") or ""), ORDER_ATOMIC)


def text_multiline(block: Block, ctx: Context) -> CodeFragment:
    code = multiline_quote(block.field_value("TEXT") or "")
    if "\n" in code:
        code = "(" + code + ")"
    return CodeFragment(code, ORDER_ATOMIC)


def _item_count(block: Block) -> int:
    if "itemCount" in block.extra_state:
        return block.state_int("itemCount")
    n = 0
    while block.has_input("ADD" + str(n)):
        n += 1
    return n


def text_join(block: Block, ctx: Context) -> CodeFragment:
    """Concatenate any number of values, coercing each to a string."""
    count = _item_count(block)
    if count == 0:
        return CodeFragment("''", ORDER_ATOMIC)
    if count == 1:
        element = ctx.value_to_code(block, "ADD0", ORDER_NONE, "''")
        return CodeFragment(force_string(element), ORDER_FUNCTION_CALL)
    if count == 2:
        first = ctx.value_to_code(block, "ADD0", ORDER_NONE, "''")
        second = ctx.value_to_code(block, "ADD1", ORDER_NONE, "''")
        return CodeFragment(force_string(first) + " + " + force_string(second), ORDER_ADDITION)
    elements = [ctx.value_to_code(block, "ADD" + str(i), ORDER_COMMA, "''") for i in range(count)]
    return CodeFragment("[" + ",".join(elements) + "].join('')", ORDER_FUNCTION_CALL)


def text_append(block: Block, ctx: Context) -> str:
    var = ctx.variable_name(block.field_value("VAR"))
    value = ctx.value_to_code(block, "TEXT", ORDER_NONE, "''")
    return var + " += " + force_string(value) + ";\n"


def text_length(block: Block, ctx: Context) -> CodeFragment:
    value = ctx.value_to_code(block, "VALUE", ORDER_FUNCTION_CALL, "''")
    return CodeFragment(value + ".length", ORDER_MEMBER)


def text_is_empty(block: Block, ctx: Context) -> CodeFragment:
    value = ctx.value_to_code(block, "VALUE", ORDER_MEMBER, "''")
    return CodeFragment("!" + value + ".length", ORDER_LOGICAL_NOT)


def text_index_of(block: Block, ctx: Context) -> CodeFragment:
    method = "indexOf" if block.field_value("END") == "FIRST" else "lastIndexOf"
    find = ctx.value_to_code(block, "FIND", ORDER_NONE, "''")
    value = ctx.value_to_code(block, "VALUE", ORDER_MEMBER, "''")
    code = value + "." + method + "(" + find + ")"
    if ctx.workspace.one_based_index:
        return CodeFragment(code + " + 1", ORDER_ADDITION)
    return CodeFragment(code, ORDER_FUNCTION_CALL)


def text_char_at(block: Block, ctx: Context) -> CodeFragment:
    where = block.field_value("WHERE") or "FROM_START"
    value = ctx.value_to_code(block, "VALUE", ORDER_NONE if where == "RANDOM" else ORDER_MEMBER, "''")
    if where == "FIRST":
        code = value + ".charAt(0)"
    elif where == "LAST":
        code = value + ".slice(-1)"
    elif where == "FROM_START":
        code = value + ".charAt(" + ctx.get_adjusted(block, "AT") + ")"
    elif where == "FROM_END":
        code = value + ".slice(" + ctx.get_adjusted(block, "AT", 1, True) + ").charAt(0)"
    elif where == "RANDOM":
        name = ctx.provide_function(
            "textRandomLetter",
            [
                "function " + FN + "(text: String) {",
                "  var x = Math.ceil(Math.random() * (text.length-1));",
                "  return text.charAt(x);",
                "}",
            ],
        )
        code = name + "(" + value + ")"
    else:
        raise unknown_mode(block, where)
    return CodeFragment(code, ORDER_FUNCTION_CALL)


def _index_expr(sequence: str, where: str, at: str) -> str:
    """Index into sequence for one end of a substring."""
    if where == "FIRST":
        return "0"
    if where == "FROM_END":
        return sequence + ".length - 1 - " + at
    if where == "LAST":
        return sequence + ".length - 1"
    return at


def text_get_substring(block: Block, ctx: Context) -> CodeFragment:
    """Substring between two ends, each given from the start, the end, or fixed."""
    value = ctx.value_to_code(block, "STRING", ORDER_FUNCTION_CALL, "''")
    where1 = block.field_value("WHERE1")
    where2 = block.field_value("WHERE2")
    if where1 == "FIRST" and where2 == "LAST":
        return CodeFragment(value, ORDER_FUNCTION_CALL)
    needs_length = where1 in ("FROM_END", "LAST") or where2 in ("FROM_END", "LAST")
    if _SIMPLE_TEXT_RE.match(value) or not needs_length:
        # Cheap to repeat, or no length lookup needed: slice inline
        if where1 == "FROM_START":
            at1 = ctx.get_adjusted(block, "AT1")
        elif where1 == "FROM_END":
            at1 = value + ".length - " + ctx.get_adjusted(block, "AT1", 1, False, ORDER_SUBTRACTION)
        elif where1 == "FIRST":
            at1 = "0"
        else:
            raise unknown_mode(block, where1)
        if where2 == "FROM_START":
            at2 = ctx.get_adjusted(block, "AT2", 1)
        elif where2 == "FROM_END":
            at2 = value + ".length - " + ctx.get_adjusted(block, "AT2", 0, False, ORDER_SUBTRACTION)
        elif where2 == "LAST":
            at2 = value + ".length"
        else:
            raise unknown_mode(block, where2)
        return CodeFragment(value + ".slice(" + at1 + ", " + at2 + ")", ORDER_FUNCTION_CALL)
    if where1 not in WHERES:
        raise unknown_mode(block, where1)
    if where2 not in WHERES:
        raise unknown_mode(block, where2)
    at1 = ctx.get_adjusted(block, "AT1")
    at2 = ctx.get_adjusted(block, "AT2")
    uses_at1 = where1 in ("FROM_END", "FROM_START")
    uses_at2 = where2 in ("FROM_END", "FROM_START")
    name = ctx.provide_function(
        "subsequence" + to_pascal(where1) + to_pascal(where2),
        [
            "function " + FN + "(sequence"
            + (", at1" if uses_at1 else "")
            + (", at2" if uses_at2 else "")
            + ") {",
            "  var start = " + _index_expr("sequence", where1, "at1") + ";",
            "  var end = " + _index_expr("sequence", where2, "at2") + " + 1;",
            "  return sequence.slice(start, end);",
            "}",
        ],
    )
    code = name + "(" + value + (", " + at1 if uses_at1 else "") + (", " + at2 if uses_at2 else "") + ")"
    return CodeFragment(code, ORDER_FUNCTION_CALL)


def text_change_case(block: Block, ctx: Context) -> CodeFragment:
    case = block.field_value("CASE")
    if case not in CASES:
        raise unknown_mode(block, case)
    method = CASES[case]
    value = ctx.value_to_code(block, "TEXT", ORDER_MEMBER if method else ORDER_NONE, "''")
    if method:
        return CodeFragment(value + method, ORDER_FUNCTION_CALL)
    name = ctx.provide_function(
        "textToTitleCase",
        [
            "function " + FN + "(str) {",
            "  return str.replace(/\\S+/g,",
            "      function(txt) {return txt[0].toUpperCase() + txt.substring(1).toLowerCase();});",
            "}",
        ],
    )
    return CodeFragment(name + "(" + value + ")", ORDER_FUNCTION_CALL)


def text_trim(block: Block, ctx: Context) -> CodeFragment:
    mode = block.field_value("MODE")
    if mode not in TRIMS:
        raise unknown_mode(block, mode)
    value = ctx.value_to_code(block, "TEXT", ORDER_MEMBER, "''")
    return CodeFragment(value + TRIMS[mode], ORDER_FUNCTION_CALL)


def text_print(block: Block, ctx: Context) -> str:
    msg = ctx.value_to_code(block, "TEXT", ORDER_NONE, "''")
    return "window.alert(" + msg + ");\n"


def text_prompt_ext(block: Block, ctx: Context) -> CodeFragment:
    if block.has_field("TEXT"):
        msg = quote(block.field_value("TEXT") or "")
    else:
        msg = ctx.value_to_code(block, "TEXT", ORDER_NONE, "''")
    code = "window.prompt(" + msg + ")"
    if block.field_value("TYPE") == "NUMBER":
        code = "Number(" + code + ")"
    return CodeFragment(code, ORDER_FUNCTION_CALL)


def text_count(block: Block, ctx: Context) -> CodeFragment:
    haystack = ctx.value_to_code(block, "TEXT", ORDER_MEMBER, "''")
    needle = ctx.value_to_code(block, "SUB", ORDER_NONE, "''")
    name = ctx.provide_function(
        "textCount",
        [
            "function " + FN + "(haystack, needle) {",
            "  if (needle.length === 0) {",
            "    return haystack.length + 1;",
            "  } else {",
            "    return haystack.split(needle).length - 1;",
            "  }",
            "}",
        ],
    )
    return CodeFragment(name + "(" + haystack + ", " + needle + ")", ORDER_SUBTRACTION)


def text_replace(block: Block, ctx: Context) -> CodeFragment:
    haystack = ctx.value_to_code(block, "TEXT", ORDER_MEMBER, "''")
    needle = ctx.value_to_code(block, "FROM", ORDER_NONE, "''")
    replacement = ctx.value_to_code(block, "TO", ORDER_NONE, "''")
    name = ctx.provide_function(
        "textReplace",
        [
            "function " + FN + "(haystack, needle, replacement) {",
            '  needle = needle.replace(/([-()\\[\\]{}+?*.$\\^|,:#<!\\\\])/g,"\\\\$1")',
            '                 .replace(/\\x08/g,"\\\\x08");',
            "  return haystack.replace(new RegExp(needle, 'g'), replacement);",
            "}",
        ],
    )
    return CodeFragment(name + "(" + haystack + ", " + needle + ", " + replacement + ")", ORDER_MEMBER)


def text_reverse(block: Block, ctx: Context) -> CodeFragment:
    value = ctx.value_to_code(block, "TEXT", ORDER_MEMBER, "''")
    code = "[for (i in 0..." + value + ".length) " + value + "[" + value + ".length - i - 1]].join('')"
    return CodeFragment(code, ORDER_MEMBER)


RULES: dict[str, Rule] = {
    "text": Rule(text, value=True),
    "text_multiline": Rule(text_multiline, value=True),
    "text_join": Rule(text_join, value=True),
    "text_append": Rule(text_append),
    "text_length": Rule(text_length, value=True),
    "text_isEmpty": Rule(text_is_empty, value=True),
    "text_indexOf": Rule(text_index_of, value=True),
    "text_charAt": Rule(text_char_at, value=True),
    "text_getSubstring": Rule(text_get_substring, value=True),
    "text_changeCase": Rule(text_change_case, value=True),
    "text_trim": Rule(text_trim, value=True),
    "text_print": Rule(text_print),
    "text_prompt_ext": Rule(text_prompt_ext, value=True),
    "text_prompt": Rule(text_prompt_ext, value=True),
    "text_count": Rule(text_count, value=True),
    "text_replace": Rule(text_replace, value=True),
    "text_reverse": Rule(text_reverse, value=True),
}
