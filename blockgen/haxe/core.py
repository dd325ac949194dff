"""Haxe precedence levels, reserved words and literal quoting."""

from __future__ import annotations

import re

from ..errors import UnknownModeError
from ..blocks import Block
from ..precedence import Level, PrecedenceTable

ORDER_ATOMIC = Level("Atomic", 0)  # 0 "" ...
ORDER_NEW = Level("New", 1)  # new
ORDER_MEMBER = Level("Member", 1)  # . []
ORDER_FUNCTION_CALL = Level("FunctionCall", 2)  # ()
ORDER_INCREMENT = Level("Increment", 3)  # ++
ORDER_DECREMENT = Level("Decrement", 3)  # --
ORDER_BITWISE_NOT = Level("BitwiseNot", 4)  # ~
ORDER_UNARY_PLUS = Level("UnaryPlus", 4)  # +
ORDER_UNARY_NEGATION = Level("UnaryNegation", 4)  # -
ORDER_LOGICAL_NOT = Level("LogicalNot", 4)  # !
ORDER_TYPEOF = Level("Typeof", 4)
ORDER_VOID = Level("Void", 4)
ORDER_DELETE = Level("Delete", 4)
ORDER_EXPONENTIATION = Level("Exponentiation", 5)
ORDER_MULTIPLICATION = Level("Multiplication", 5)  # *
ORDER_DIVISION = Level("Division", 5)  # /
ORDER_MODULUS = Level("Modulus", 5)  # %
ORDER_SUBTRACTION = Level("Subtraction", 6)  # -
ORDER_ADDITION = Level("Addition", 6)  # +
ORDER_BITWISE_SHIFT = Level("BitwiseShift", 7)  # << >> >>>
ORDER_RELATIONAL = Level("Relational", 8)  # < <= > >=
ORDER_IN = Level("In", 8)
ORDER_INSTANCEOF = Level("Instanceof", 8)
ORDER_EQUALITY = Level("Equality", 9)  # == !=
ORDER_BITWISE_AND = Level("BitwiseAnd", 10)  # &
ORDER_BITWISE_XOR = Level("BitwiseXor", 11)  # ^
ORDER_BITWISE_OR = Level("BitwiseOr", 12)  # |
ORDER_LOGICAL_AND = Level("LogicalAnd", 13)  # &&
ORDER_LOGICAL_OR = Level("LogicalOr", 14)  # ||
ORDER_CONDITIONAL = Level("Conditional", 15)  # ?:
ORDER_ASSIGNMENT = Level("Assignment", 16)  # = += -= ...
ORDER_COMMA = Level("Comma", 17)  # ,
ORDER_NONE = Level("None", 99)  # (...)

HAXE_LEVELS: list[Level] = [
    ORDER_ATOMIC,
    ORDER_NEW,
    ORDER_MEMBER,
    ORDER_FUNCTION_CALL,
    ORDER_INCREMENT,
    ORDER_DECREMENT,
    ORDER_BITWISE_NOT,
    ORDER_UNARY_PLUS,
    ORDER_UNARY_NEGATION,
    ORDER_LOGICAL_NOT,
    ORDER_TYPEOF,
    ORDER_VOID,
    ORDER_DELETE,
    ORDER_EXPONENTIATION,
    ORDER_MULTIPLICATION,
    ORDER_DIVISION,
    ORDER_MODULUS,
    ORDER_SUBTRACTION,
    ORDER_ADDITION,
    ORDER_BITWISE_SHIFT,
    ORDER_RELATIONAL,
    ORDER_IN,
    ORDER_INSTANCEOF,
    ORDER_EQUALITY,
    ORDER_BITWISE_AND,
    ORDER_BITWISE_XOR,
    ORDER_BITWISE_OR,
    ORDER_LOGICAL_AND,
    ORDER_LOGICAL_OR,
    ORDER_CONDITIONAL,
    ORDER_ASSIGNMENT,
    ORDER_COMMA,
    ORDER_NONE,
]

HAXE_PRECEDENCE = PrecedenceTable(
    HAXE_LEVELS,
    overrides=[
        # (outer, inner) pairs that never need parentheses
        ("FunctionCall", "Member"),  # a.b()
        ("FunctionCall", "FunctionCall"),  # a()()
        ("Member", "Member"),  # a.b.c
        ("Member", "FunctionCall"),  # a().b
        ("LogicalNot", "LogicalNot"),  # !!a
        ("Multiplication", "Multiplication"),  # a * b * c
        ("Addition", "Addition"),  # a + b + c
        ("LogicalAnd", "LogicalAnd"),  # a && b && c
        ("LogicalOr", "LogicalOr"),  # a || b || c
    ],
)

HAXE_RESERVED = frozenset(
    {
        "abstract",
        "break",
        "case",
        "cast",
        "catch",
        "class",
        "continue",
        "default",
        "do",
        "dynamic",
        "else",
        "enum",
        "extends",
        "extern",
        "false",
        "final",
        "for",
        "function",
        "if",
        "implements",
        "import",
        "in",
        "inline",
        "interface",
        "macro",
        "new",
        "null",
        "operator",
        "overload",
        "override",
        "package",
        "private",
        "public",
        "return",
        "static",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typedef",
        "untyped",
        "using",
        "var",
        "while",
        # Standard library names the generated code relies on
        "Array",
        "Date",
        "Dynamic",
        "EReg",
        "Float",
        "Int",
        "Lambda",
        "Math",
        "Reflect",
        "Std",
        "String",
        "StringTools",
        "Sys",
        "Type",
        "trace",
        "window",
        "Infinity",
        "NaN",
        "isNaN",
    }
)

_STRING_LITERAL_RE = re.compile(r"^\s*'([^']|\\')*'\s*$")


def quote(text: str) -> str:
    """Single-quoted Haxe string literal."""
    text = text.replace("\\", "\\\\").replace("\n", "\\\n").replace("'", "\\'")
    return "'" + text + "'"


def multiline_quote(text: str) -> str:
    """String literal spanning lines, joined with explicit newlines."""
    lines = text.split("\n")
    return " + '\\n' +\n".join(quote(line) for line in lines)


def force_string(value: str) -> str:
    """Wrap value in Std.string(...) unless it is already a string literal."""
    if _STRING_LITERAL_RE.match(value):
        return value
    return "Std.string(" + value + ")"


def declare_variables(names: list[str]) -> str:
    return "var " + ", ".join(names) + ";"


def naked_value(code: str) -> str:
    return code + ";\n"


def unknown_mode(block: Block, mode: str | None) -> UnknownModeError:
    return UnknownModeError(block.type, block.id, mode)
