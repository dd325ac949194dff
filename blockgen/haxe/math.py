"""Haxe code for math blocks."""

from __future__ import annotations

from ..blocks import Block
from ..generator import Context, Rule
from ..helpers import FUNCTION_NAME_PLACEHOLDER as FN
from ..precedence import CodeFragment, Level
from ..util import format_number
from .core import (
    ORDER_ADDITION,
    ORDER_ATOMIC,
    ORDER_COMMA,
    ORDER_DIVISION,
    ORDER_EQUALITY,
    ORDER_FUNCTION_CALL,
    ORDER_MEMBER,
    ORDER_MODULUS,
    ORDER_MULTIPLICATION,
    ORDER_NONE,
    ORDER_SUBTRACTION,
    ORDER_UNARY_NEGATION,
    unknown_mode,
)

ARITHMETIC: dict[str, tuple[str | None, Level]] = {
    "ADD": (" + ", ORDER_ADDITION),
    "MINUS": (" - ", ORDER_SUBTRACTION),
    "MULTIPLY": (" * ", ORDER_MULTIPLICATION),
    "DIVIDE": (" / ", ORDER_DIVISION),
    "POWER": (None, ORDER_COMMA),  # no operator, Math.pow
}

# Single-operand functions whose result is a plain call
SINGLE_CALLS: dict[str, str] = {
    "ABS": "Math.abs(%s)",
    "ROOT": "Math.sqrt(%s)",
    "LN": "Math.log(%s)",
    "EXP": "Math.exp(%s)",
    "POW10": "Math.pow(10,%s)",
    "ROUND": "Math.round(%s)",
    "ROUNDUP": "Math.ceil(%s)",
    "ROUNDDOWN": "Math.floor(%s)",
    "SIN": "Math.sin(%s / 180 * Math.PI)",
    "COS": "Math.cos(%s / 180 * Math.PI)",
    "TAN": "Math.tan(%s / 180 * Math.PI)",
}

# Single-operand functions whose result is a division
SINGLE_QUOTIENTS: dict[str, str] = {
    "LOG10": "Math.log(%s) / Math.log(10)",
    "ASIN": "Math.asin(%s) / Math.PI * 180",
    "ACOS": "Math.acos(%s) / Math.PI * 180",
    "ATAN": "Math.atan(%s) / Math.PI * 180",
}

CONSTANTS: dict[str, tuple[str, Level]] = {
    "PI": ("Math.PI", ORDER_MEMBER),
    "E": ("Math.E", ORDER_MEMBER),
    "GOLDEN_RATIO": ("(1 + Math.sqrt(5)) / 2", ORDER_DIVISION),
    "SQRT2": ("Math.SQRT2", ORDER_MEMBER),
    "SQRT1_2": ("Math.SQRT1_2", ORDER_MEMBER),
    "INFINITY": ("Infinity", ORDER_ATOMIC),
}

PROPERTY_TESTS: dict[str, str] = {
    "EVEN": "%s % 2 == 0",
    "ODD": "%s % 2 == 1",
    "WHOLE": "%s % 1 == 0",
    "POSITIVE": "%s > 0",
    "NEGATIVE": "%s < 0",
}


def math_number(block: Block, ctx: Context) -> CodeFragment:
    try:
        value = float(block.field_value("NUM") or 0)
    except ValueError:
        value = float("nan")
    order = ORDER_ATOMIC if value >= 0 else ORDER_UNARY_NEGATION
    return CodeFragment(format_number(value), order)


def math_arithmetic(block: Block, ctx: Context) -> CodeFragment:
    op = block.field_value("OP")
    if op not in ARITHMETIC:
        raise unknown_mode(block, op)
    operator, order = ARITHMETIC[op]
    a = ctx.value_to_code(block, "A", order, "0")
    b = ctx.value_to_code(block, "B", order, "0")
    if operator is None:
        return CodeFragment("Math.pow(" + a + ", " + b + ")", ORDER_FUNCTION_CALL)
    return CodeFragment(a + operator + b, order)


def math_single(block: Block, ctx: Context) -> CodeFragment:
    """Single-operand math: negation, roots, logs, rounding and trigonometry."""
    op = block.field_value("OP")
    if op == "NEG":
        arg = ctx.value_to_code(block, "NUM", ORDER_UNARY_NEGATION, "0")
        if arg.startswith("-"):
            # --3 is a decrement
            arg = " " + arg
        return CodeFragment("-" + arg, ORDER_UNARY_NEGATION)
    if op in ("SIN", "COS", "TAN"):
        arg = ctx.value_to_code(block, "NUM", ORDER_DIVISION, "0")
    else:
        arg = ctx.value_to_code(block, "NUM", ORDER_NONE, "0")
    if op in SINGLE_CALLS:
        return CodeFragment(SINGLE_CALLS[op] % arg, ORDER_FUNCTION_CALL)
    if op in SINGLE_QUOTIENTS:
        return CodeFragment(SINGLE_QUOTIENTS[op] % arg, ORDER_DIVISION)
    raise unknown_mode(block, op)


def math_constant(block: Block, ctx: Context) -> CodeFragment:
    name = block.field_value("CONSTANT")
    if name not in CONSTANTS:
        raise unknown_mode(block, name)
    code, order = CONSTANTS[name]
    return CodeFragment(code, order)


def _is_prime_helper(ctx: Context) -> str:
    return ctx.provide_function(
        "mathIsPrime",
        [
            "function " + FN + "(n) {",
            "  // https://en.wikipedia.org/wiki/Primality_test#Naive_methods",
            "  if (n == 2 || n == 3) {",
            "    return true;",
            "  }",
            "  // False if n is NaN, negative, is 1, or not whole.",
            "  // And false if n is divisible by 2 or 3.",
            "  if (isNaN(n) || n <= 1 || n % 1 != 0 || n % 2 == 0 || n % 3 == 0) {",
            "    return false;",
            "  }",
            "  // Check all the numbers of form 6k +/- 1, up to sqrt(n).",
            "  for (var x = 6; x <= Math.sqrt(n) + 1; x += 6) {",
            "    if (n % (x - 1) == 0 || n % (x + 1) == 0) {",
            "      return false;",
            "    }",
            "  }",
            "  return true;",
            "}",
        ],
    )


def math_number_property(block: Block, ctx: Context) -> CodeFragment:
    number = ctx.value_to_code(block, "NUMBER_TO_CHECK", ORDER_MODULUS, "0")
    prop = block.field_value("PROPERTY")
    if prop == "PRIME":
        return CodeFragment(_is_prime_helper(ctx) + "(" + number + ")", ORDER_FUNCTION_CALL)
    if prop == "DIVISIBLE_BY":
        divisor = ctx.value_to_code(block, "DIVISOR", ORDER_MODULUS, "0")
        return CodeFragment(number + " % " + divisor + " == 0", ORDER_EQUALITY)
    if prop in PROPERTY_TESTS:
        return CodeFragment(PROPERTY_TESTS[prop].replace("%s", number, 1), ORDER_EQUALITY)
    raise unknown_mode(block, prop)


def math_change(block: Block, ctx: Context) -> str:
    delta = ctx.value_to_code(block, "DELTA", ORDER_ADDITION, "0")
    var = ctx.variable_name(block.field_value("VAR"))
    return var + " = (typeof " + var + " == 'number' ? " + var + " : 0) + " + delta + ";\n"


# List aggregate helpers: op -> (helper key, template lines)
LIST_HELPERS: dict[str, tuple[str, list[str]]] = {
    "AVERAGE": (
        "mathMean",
        [
            "function " + FN + "(myList) {",
            "  return myList.reduce(function(x, y) {return x + y;}) / myList.length;",
            "}",
        ],
    ),
    "MEDIAN": (
        "mathMedian",
        [
            "function " + FN + "(myList) {",
            "  var localList = myList.filter(function (x) {return typeof x == 'number';});",
            "  if (!localList.length) return null;",
            "  localList.sort(function(a, b) {return b - a;});",
            "  if (localList.length % 2 == 0) {",
            "    return (localList[localList.length / 2 - 1] + localList[localList.length / 2]) / 2;",
            "  } else {",
            "    return localList[(localList.length - 1) / 2];",
            "  }",
            "}",
        ],
    ),
    "MODE": (
        "mathModes",
        [
            "function " + FN + "(values) {",
            "  var modes = [];",
            "  var counts = [];",
            "  var maxCount = 0;",
            "  for (var i = 0; i < values.length; i++) {",
            "    var value = values[i];",
            "    var found = false;",
            "    var thisCount;",
            "    for (var j = 0; j < counts.length; j++) {",
            "      if (counts[j][0] === value) {",
            "        thisCount = ++counts[j][1];",
            "        found = true;",
            "        break;",
            "      }",
            "    }",
            "    if (!found) {",
            "      counts.push([value, 1]);",
            "      thisCount = 1;",
            "    }",
            "    maxCount = Math.max(thisCount, maxCount);",
            "  }",
            "  for (var j = 0; j < counts.length; j++) {",
            "    if (counts[j][1] == maxCount) {",
            "        modes.push(counts[j][0]);",
            "    }",
            "  }",
            "  return modes;",
            "}",
        ],
    ),
    "STD_DEV": (
        "mathStandardDeviation",
        [
            "function " + FN + "(numbers) {",
            "  var n = numbers.length;",
            "  if (!n) return null;",
            "  var mean = numbers.reduce(function(x, y) {return x + y;}) / n;",
            "  var variance = 0;",
            "  for (var j = 0; j < n; j++) {",
            "    variance += Math.pow(numbers[j] - mean, 2);",
            "  }",
            "  variance = variance / n;",
            "  return Math.sqrt(variance);",
            "}",
        ],
    ),
    "RANDOM": (
        "mathRandomList",
        [
            "function " + FN + "(list) {",
            "  var x = Math.floor(Math.random() * list.length);",
            "  return list[x];",
            "}",
        ],
    ),
}


def math_on_list(block: Block, ctx: Context) -> CodeFragment:
    op = block.field_value("OP")
    if op == "SUM":
        items = ctx.value_to_code(block, "LIST", ORDER_MEMBER, "[]")
        code = items + ".reduce(function(x, y) {return x + y;})"
    elif op == "MIN":
        items = ctx.value_to_code(block, "LIST", ORDER_COMMA, "[]")
        code = "Math.min.apply(null, " + items + ")"
    elif op == "MAX":
        items = ctx.value_to_code(block, "LIST", ORDER_COMMA, "[]")
        code = "Math.max.apply(null, " + items + ")"
    elif op in LIST_HELPERS:
        key, lines = LIST_HELPERS[op]
        name = ctx.provide_function(key, lines)
        items = ctx.value_to_code(block, "LIST", ORDER_NONE, "[]")
        code = name + "(" + items + ")"
    else:
        raise unknown_mode(block, op)
    return CodeFragment(code, ORDER_FUNCTION_CALL)


def math_modulo(block: Block, ctx: Context) -> CodeFragment:
    dividend = ctx.value_to_code(block, "DIVIDEND", ORDER_MODULUS, "0")
    divisor = ctx.value_to_code(block, "DIVISOR", ORDER_MODULUS, "0")
    return CodeFragment(dividend + " % " + divisor, ORDER_MODULUS)


def math_constrain(block: Block, ctx: Context) -> CodeFragment:
    value = ctx.value_to_code(block, "VALUE", ORDER_COMMA, "0")
    low = ctx.value_to_code(block, "LOW", ORDER_COMMA, "0")
    high = ctx.value_to_code(block, "HIGH", ORDER_COMMA, "Infinity")
    return CodeFragment("Math.min(Math.max(" + value + ", " + low + "), " + high + ")", ORDER_FUNCTION_CALL)


def math_random_int(block: Block, ctx: Context) -> CodeFragment:
    low = ctx.value_to_code(block, "FROM", ORDER_COMMA, "0")
    high = ctx.value_to_code(block, "TO", ORDER_COMMA, "0")
    name = ctx.provide_function(
        "mathRandomInt",
        [
            "function " + FN + "(a, b) {",
            "  if (a > b) {",
            "    // Swap a and b to ensure a is smaller.",
            "    var c = a;",
            "    a = b;",
            "    b = c;",
            "  }",
            "  return Math.floor(Math.random() * (b - a + 1) + a);",
            "}",
        ],
    )
    return CodeFragment(name + "(" + low + ", " + high + ")", ORDER_FUNCTION_CALL)


def math_random_float(block: Block, ctx: Context) -> CodeFragment:
    return CodeFragment("Math.random()", ORDER_FUNCTION_CALL)


def math_atan2(block: Block, ctx: Context) -> CodeFragment:
    x = ctx.value_to_code(block, "X", ORDER_COMMA, "0")
    y = ctx.value_to_code(block, "Y", ORDER_COMMA, "0")
    return CodeFragment("Math.atan2(" + y + ", " + x + ") / Math.PI * 180", ORDER_DIVISION)


RULES: dict[str, Rule] = {
    "math_number": Rule(math_number, value=True),
    "math_arithmetic": Rule(math_arithmetic, value=True),
    "math_single": Rule(math_single, value=True),
    "math_round": Rule(math_single, value=True),
    "math_trig": Rule(math_single, value=True),
    "math_constant": Rule(math_constant, value=True),
    "math_number_property": Rule(math_number_property, value=True),
    "math_change": Rule(math_change),
    "math_on_list": Rule(math_on_list, value=True),
    "math_modulo": Rule(math_modulo, value=True),
    "math_constrain": Rule(math_constrain, value=True),
    "math_random_int": Rule(math_random_int, value=True),
    "math_random_float": Rule(math_random_float, value=True),
    "math_atan2": Rule(math_atan2, value=True),
}
