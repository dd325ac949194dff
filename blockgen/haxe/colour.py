"""Haxe code for colour blocks."""

from __future__ import annotations

from ..blocks import Block
from ..generator import Context, Rule
from ..helpers import FUNCTION_NAME_PLACEHOLDER as FN
from ..precedence import CodeFragment
from .core import ORDER_ATOMIC, ORDER_COMMA, ORDER_FUNCTION_CALL, quote


def colour_picker(block: Block, ctx: Context) -> CodeFragment:
    return CodeFragment(quote(block.field_value("COLOUR") or "#000000"), ORDER_ATOMIC)


def colour_random(block: Block, ctx: Context) -> CodeFragment:
    name = ctx.provide_function(
        "colourRandom",
        [
            "function " + FN + "() {",
            "  var num = Math.floor(Math.random() * Math.pow(2, 24));",
            "  return '#' + ('00000' + StringTools.hex(num)).substr(-6);",
            "}",
        ],
    )
    return CodeFragment(name + "()", ORDER_FUNCTION_CALL)


def colour_rgb(block: Block, ctx: Context) -> CodeFragment:
    red = ctx.value_to_code(block, "RED", ORDER_COMMA, "0")
    green = ctx.value_to_code(block, "GREEN", ORDER_COMMA, "0")
    blue = ctx.value_to_code(block, "BLUE", ORDER_COMMA, "0")
    name = ctx.provide_function(
        "colourRgb",
        [
            "function " + FN + "(r: Float, g: Float, b: Float) {",
            "  return '#' + [for (col in [r, g, b]) StringTools.lpad(",
            "    StringTools.hex(Std.int(Math.min(Math.max(col, 0), 255))), '0', 2",
            "  )].join('');",
            "}",
        ],
    )
    return CodeFragment(name + "(" + red + ", " + green + ", " + blue + ")", ORDER_FUNCTION_CALL)


def colour_blend(block: Block, ctx: Context) -> CodeFragment:
    c1 = ctx.value_to_code(block, "COLOUR1", ORDER_COMMA, "'#000000'")
    c2 = ctx.value_to_code(block, "COLOUR2", ORDER_COMMA, "'#000000'")
    ratio = ctx.value_to_code(block, "RATIO", ORDER_COMMA, "0.5")
    name = ctx.provide_function(
        "colourBlend",
        [
            "function " + FN + "(c1: String, c2: String, ratio: Float) {",
            "  ratio = Math.max(Math.min(ratio, 1), 0);",
            "  var c1_rgb = [for (i in [1, 3, 5]) Std.parseInt('0x'+c1.substring(i, i+2))];",
            "  var c2_rgb = [for (i in [1, 3, 5]) Std.parseInt('0x'+c2.substring(i, i+2))];",
            "  var rgb = [for (i in 0...3) Math.round(c1_rgb[i] * (1 - ratio) + c2_rgb[i] * ratio)];",
            "  return '#' + [for (col in rgb) ('0' + StringTools.hex(Math.isNaN(col) ? 0 : col)).substr(-2)].join('');",
            "}",
        ],
    )
    return CodeFragment(name + "(" + c1 + ", " + c2 + ", " + ratio + ")", ORDER_FUNCTION_CALL)


RULES: dict[str, Rule] = {
    "colour_picker": Rule(colour_picker, value=True),
    "colour_random": Rule(colour_random, value=True),
    "colour_rgb": Rule(colour_rgb, value=True),
    "colour_blend": Rule(colour_blend, value=True),
}
