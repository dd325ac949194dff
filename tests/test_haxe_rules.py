"""Haxe rule set tests, one group per block family."""

import pytest

from blockgen.errors import UnknownModeError
from blockgen.haxe import HAXE
from blockgen.haxe.core import force_string, multiline_quote, quote

from builders import haxe, mk, num, txt, var


def arith(op, a, b):
    return mk("math_arithmetic", OP=op, A=a, B=b)


def assign(name, value):
    return mk("variables_set", VAR=name, VALUE=value)


def test_every_block_family_registered() -> None:
    for block_type in [
        "colour_blend",
        "controls_if",
        "controls_forEach",
        "math_atan2",
        "procedures_ifreturn",
        "text_reverse",
        "variables_set_dynamic",
    ]:
        assert block_type in HAXE.rules


# --- Literals and quoting ---


def test_quote() -> None:
    assert quote("it's") == "'it\\'s'"
    assert quote("a\\b") == "'a\\\\b'"


def test_multiline_quote() -> None:
    assert multiline_quote("a\nb") == "'a' + '\\n' +\n'b'"
    assert haxe(mk("text_multiline", TEXT="a\nb")) == "('a' + '\\n' +\n'b');\n"
    assert haxe(mk("text_multiline", TEXT="one")) == "'one';\n"


def test_force_string() -> None:
    assert force_string("'x'") == "'x'"
    assert force_string("n") == "Std.string(n)"


# --- Colour ---


def test_colour_picker() -> None:
    assert haxe(mk("colour_picker", COLOUR="#ff0000")) == "'#ff0000';\n"


def test_colour_rgb_helper_shared() -> None:
    a = assign("c", mk("colour_rgb", RED=num(255), GREEN=num(0), BLUE=num(0)))
    a.next = assign("d", mk("colour_rgb", RED=num(0), GREEN=num(0), BLUE=num(255)))
    out = haxe(a)
    assert out.count("function colourRgb(r: Float, g: Float, b: Float) {") == 1
    assert "c = colourRgb(255, 0, 0);\nd = colourRgb(0, 0, 255);\n" in out


def test_colour_blend_defaults() -> None:
    out = haxe(mk("colour_blend"))
    assert out.endswith("colourBlend('#000000', '#000000', 0.5);\n")


def test_colour_random() -> None:
    out = haxe(mk("colour_random"))
    assert out.startswith("function colourRandom() {\n")
    assert out.endswith("\n\n\ncolourRandom();\n")


# --- Logic ---


def test_if_elseif_else() -> None:
    stmt = mk(
        "controls_if",
        state={"elseIfCount": 1, "hasElse": True},
        IF0=var("a"),
        DO0=assign("x", num(1)),
        IF1=var("b"),
        DO1=assign("x", num(2)),
        ELSE=assign("x", num(3)),
    )
    assert haxe(stmt) == "if (a) {\n  x = 1;\n} else if (b) {\n  x = 2;\n} else {\n  x = 3;\n}\n"


def test_if_missing_condition() -> None:
    assert haxe(mk("controls_if", IF0=None, DO0=None)) == "if (false) {\n}\n"


def test_logic_operation_defaults() -> None:
    assert haxe(mk("logic_operation", OP="AND", A=var("a"))) == "a && true;\n"
    assert haxe(mk("logic_operation", OP="OR", B=var("b"))) == "false || b;\n"
    assert haxe(mk("logic_operation", OP="OR")) == "false || false;\n"


def test_logic_compare_inside_negate() -> None:
    cmp = mk("logic_compare", OP="GTE", A=var("a"), B=num(1))
    assert haxe(mk("logic_negate", BOOL=cmp)) == "!(a >= 1);\n"


def test_logic_ternary() -> None:
    out = haxe(mk("logic_ternary", IF=var("c"), THEN=num(1), ELSE=mk("logic_null")))
    assert out == "c ? 1 : null;\n"


# --- Loops ---


def test_for_literal_bounds() -> None:
    up = mk("controls_for", VAR="i", FROM=num(1), TO=num(10), BY=num(1), DO=mk("text_print", TEXT=var("i")))
    assert haxe(up) == "for (i = 1; i <= 10; i++) {\n  window.alert(i);\n}\n"
    down = mk("controls_for", VAR="i", FROM=num(10), TO=num(1), BY=num(2), DO=None)
    assert haxe(down) == "for (i = 10; i >= 1; i -= 2) {\n}\n"


def test_for_computed_bounds_cached() -> None:
    loop = mk("controls_for", VAR="i", FROM=var("a"), TO=arith("ADD", var("b"), num(1)), BY=num(1), DO=None)
    assert haxe(loop) == (
        "var i_end = b + 1;\n"
        "var i_inc = 1;\n"
        "if (a > i_end) {\n"
        "  i_inc = -i_inc;\n"
        "}\n"
        "for (i = a; i_inc >= 0 ? i <= i_end : i >= i_end; i += i_inc) {\n"
        "}\n"
    )


def test_for_each() -> None:
    loop = mk("controls_forEach", VAR="item", LIST=var("things"), DO=None)
    assert haxe(loop) == "for (var item_index in things) {\n  item = things[item_index];\n}\n"


def test_repeat_computed_count() -> None:
    loop = mk("controls_repeat_ext", TIMES=arith("ADD", var("n"), num(1)), DO=None)
    assert haxe(loop) == "var repeat_end = n + 1;\nfor (var count = 0; count < repeat_end; count++) {\n}\n"


def test_nested_repeat_counters_distinct() -> None:
    inner = mk("controls_repeat_ext", TIMES=num(2), DO=None)
    outer = mk("controls_repeat_ext", TIMES=num(3), DO=inner)
    out = haxe(outer)
    assert "for (var count2 = 0; count2 < 3; count2++) {\n" in out
    assert "  for (var count = 0; count < 2; count++) {\n" in out


def test_until_negates_condition() -> None:
    loop = mk("controls_whileUntil", MODE="UNTIL", BOOL=mk("logic_compare", OP="EQ", A=var("a"), B=num(1)), DO=None)
    assert haxe(loop) == "while (!(a == 1)) {\n}\n"


def test_unknown_flow_statement() -> None:
    with pytest.raises(UnknownModeError):
        haxe(mk("controls_flow_statements", FLOW="GOTO"))


# --- Math ---


def test_math_single() -> None:
    assert haxe(mk("math_single", OP="ROOT", NUM=num(9))) == "Math.sqrt(9);\n"
    assert haxe(mk("math_trig", OP="SIN", NUM=arith("ADD", var("a"), num(1)))) == "Math.sin((a + 1) / 180 * Math.PI);\n"
    log10 = mk("math_single", OP="LOG10", NUM=var("x"))
    assert haxe(arith("MULTIPLY", log10, num(2))) == "(Math.log(x) / Math.log(10)) * 2;\n"
    with pytest.raises(UnknownModeError):
        haxe(mk("math_single", OP="CUBE", NUM=num(2)))


def test_math_constant() -> None:
    assert haxe(mk("math_constant", CONSTANT="PI")) == "Math.PI;\n"
    assert haxe(mk("math_constant", CONSTANT="INFINITY")) == "Infinity;\n"
    with pytest.raises(UnknownModeError):
        haxe(mk("math_constant", CONSTANT="TAU"))


def test_math_number_property() -> None:
    assert haxe(mk("math_number_property", PROPERTY="EVEN", NUMBER_TO_CHECK=var("n"))) == "n % 2 == 0;\n"
    divisible = mk("math_number_property", PROPERTY="DIVISIBLE_BY", NUMBER_TO_CHECK=var("n"), DIVISOR=num(3))
    assert haxe(divisible) == "n % 3 == 0;\n"
    prime = haxe(mk("math_number_property", PROPERTY="PRIME", NUMBER_TO_CHECK=var("n")))
    assert prime.startswith("function mathIsPrime(n) {\n")
    assert prime.endswith("\n\n\nmathIsPrime(n);\n")


def test_math_number_formats() -> None:
    assert haxe(num("3.0")) == "3;\n"
    assert haxe(num("0.25")) == "0.25;\n"


def test_math_change() -> None:
    out = haxe(mk("math_change", VAR="x", DELTA=num(1)))
    assert out == "x = (typeof x == 'number' ? x : 0) + 1;\n"


def test_math_on_list() -> None:
    assert haxe(mk("math_on_list", OP="SUM", LIST=var("l"))) == "l.reduce(function(x, y) {return x + y;});\n"
    assert haxe(mk("math_on_list", OP="MAX", LIST=var("l"))) == "Math.max.apply(null, l);\n"
    mean = haxe(mk("math_on_list", OP="AVERAGE", LIST=var("l")))
    assert mean.startswith("function mathMean(myList) {\n")
    assert mean.endswith("mathMean(l);\n")
    with pytest.raises(UnknownModeError):
        haxe(mk("math_on_list", OP="PRODUCT", LIST=var("l")))


def test_math_misc() -> None:
    assert haxe(mk("math_modulo", DIVIDEND=var("a"), DIVISOR=var("b"))) == "a % b;\n"
    assert haxe(mk("math_constrain", VALUE=var("v"), LOW=num(0))) == "Math.min(Math.max(v, 0), Infinity);\n"
    assert haxe(mk("math_atan2", X=var("x"), Y=var("y"))) == "Math.atan2(y, x) / Math.PI * 180;\n"
    assert haxe(mk("math_random_float")) == "Math.random();\n"


# --- Text ---


def test_text_join() -> None:
    assert haxe(mk("text_join", state={"itemCount": 0})) == "'';\n"
    assert haxe(mk("text_join", state={"itemCount": 1}, ADD0=var("a"))) == "Std.string(a);\n"
    two = mk("text_join", state={"itemCount": 2}, ADD0=txt("a"), ADD1=var("b"))
    assert haxe(two) == "'a' + Std.string(b);\n"
    three = mk("text_join", state={"itemCount": 3}, ADD0=txt("a"), ADD1=var("b"), ADD2=var("c"))
    assert haxe(three) == "['a',b,c].join('');\n"


def test_text_append() -> None:
    assert haxe(mk("text_append", VAR="s", TEXT=txt("!"))) == "s += '!';\n"
    assert haxe(mk("text_append", VAR="s", TEXT=var("n"))) == "s += Std.string(n);\n"


def test_text_length_and_empty() -> None:
    assert haxe(mk("text_length", VALUE=var("s"))) == "s.length;\n"
    assert haxe(mk("text_isEmpty", VALUE=var("s"))) == "!s.length;\n"


def test_text_index_of_respects_index_base() -> None:
    block = mk("text_indexOf", END="FIRST", VALUE=var("s"), FIND=txt("a"))
    assert haxe(block) == "s.indexOf('a') + 1;\n"
    block = mk("text_indexOf", END="LAST", VALUE=var("s"), FIND=txt("a"))
    assert haxe(block, one_based=False) == "s.lastIndexOf('a');\n"


def test_text_char_at() -> None:
    def char_at(where, at=None):
        return mk("text_charAt", WHERE=where, VALUE=txt("abc"), AT=at)

    assert haxe(char_at("FROM_START", num(3))) == "'abc'.charAt(2);\n"
    assert haxe(char_at("FROM_START", num(3)), one_based=False) == "'abc'.charAt(3);\n"
    assert haxe(char_at("FROM_START", var("i"))) == "'abc'.charAt(i - 1);\n"
    assert haxe(char_at("FROM_END", var("i"))) == "'abc'.slice(-i).charAt(0);\n"
    assert haxe(char_at("FROM_END", var("i")), one_based=False) == "'abc'.slice(-(i + 1)).charAt(0);\n"
    assert haxe(char_at("FIRST")) == "'abc'.charAt(0);\n"
    assert haxe(char_at("LAST")) == "'abc'.slice(-1);\n"
    assert haxe(char_at("RANDOM")).endswith("textRandomLetter('abc');\n")
    with pytest.raises(UnknownModeError):
        haxe(char_at("MIDDLE"))


def test_text_get_substring_inline() -> None:
    block = mk("text_getSubstring", WHERE1="FROM_START", WHERE2="FROM_START", STRING=var("s"), AT1=num(2), AT2=num(4))
    assert haxe(block) == "s.slice(1, 4);\n"
    whole = mk("text_getSubstring", WHERE1="FIRST", WHERE2="LAST", STRING=var("s"))
    assert haxe(whole) == "s;\n"
    tail = mk("text_getSubstring", WHERE1="FROM_END", WHERE2="LAST", STRING=var("s"), AT1=var("n"))
    assert haxe(tail) == "s.slice(s.length - n, s.length);\n"


def test_text_get_substring_helper() -> None:
    trimmed = mk("text_trim", MODE="BOTH", TEXT=var("s"))
    block = mk("text_getSubstring", WHERE1="FROM_START", WHERE2="FROM_END", STRING=trimmed, AT1=num(2), AT2=num(1))
    assert haxe(block) == (
        "function subsequenceFromStartFromEnd(sequence, at1, at2) {\n"
        "  var start = at1;\n"
        "  var end = sequence.length - 1 - at2 + 1;\n"
        "  return sequence.slice(start, end);\n"
        "}\n\n\n"
        "subsequenceFromStartFromEnd(s.trim(), 1, 0);\n"
    )


def test_text_change_case() -> None:
    assert haxe(mk("text_changeCase", CASE="UPPERCASE", TEXT=var("s"))) == "s.toUpperCase();\n"
    assert haxe(mk("text_changeCase", CASE="TITLECASE", TEXT=var("s"))).endswith("textToTitleCase(s);\n")
    with pytest.raises(UnknownModeError):
        haxe(mk("text_changeCase", CASE="SPONGECASE", TEXT=var("s")))


def test_text_trim() -> None:
    assert haxe(mk("text_trim", MODE="LEFT", TEXT=var("s"))) == "s.replace(/^[\\s\\xa0]+/, '');\n"
    with pytest.raises(UnknownModeError):
        haxe(mk("text_trim", MODE="MIDDLE", TEXT=var("s")))


def test_text_print_and_prompt() -> None:
    assert haxe(mk("text_print", TEXT=txt("hi"))) == "window.alert('hi');\n"
    ask = mk("text_prompt_ext", TYPE="NUMBER", TEXT=txt("Age?"))
    assert haxe(ask) == "Number(window.prompt('Age?'));\n"
    legacy = mk("text_prompt", TYPE="TEXT", TEXT="Name?")
    assert haxe(legacy) == "window.prompt('Name?');\n"


def test_text_count_replace_reverse() -> None:
    assert haxe(mk("text_count", TEXT=var("s"), SUB=txt("a"))).endswith("textCount(s, 'a');\n")
    assert haxe(mk("text_replace", TEXT=var("s"), FROM=txt("a"), TO=txt("b"))).endswith("textReplace(s, 'a', 'b');\n")
    assert haxe(mk("text_reverse", TEXT=var("s"))) == "[for (i in 0...s.length) s[s.length - i - 1]].join('');\n"


# --- Variables and procedures ---


def test_dynamic_variables() -> None:
    stmt = mk("variables_set_dynamic", VAR="v", VALUE=mk("variables_get_dynamic", VAR="w"))
    assert haxe(stmt) == "v = w;\n"


def test_procedure_call_statement() -> None:
    define = mk("procedures_defnoreturn", NAME="greet", STACK=mk("text_print", TEXT=txt("hello")))
    call = mk("procedures_callnoreturn", NAME="greet")
    assert haxe(define, call) == "function greet() {\n  window.alert('hello');\n}\n\n\ngreet();\n"


def test_procedure_name_collides_with_variable() -> None:
    define = mk("procedures_defnoreturn", NAME="total", STACK=None)
    call = mk("procedures_callnoreturn", NAME="total")
    out = haxe(define, call, variables=["total"])
    assert out == "var total;\n\nfunction total2() {\n}\n\n\ntotal2();\n"


def test_missing_call_argument_is_null() -> None:
    call = mk("procedures_callnoreturn", state={"params": ["a", "b"]}, NAME="f", ARG0=num(1))
    assert haxe(call) == "f(1, null);\n"


def test_parameter_names_reserved_before_body() -> None:
    body = mk("controls_repeat_ext", TIMES=num(2), DO=None)
    define = mk("procedures_defnoreturn", state={"params": ["count"]}, NAME="f", STACK=body)
    assert haxe(define) == "function f(count) {\n  for (var count2 = 0; count2 < 2; count2++) {\n  }\n}\n"


def test_parameter_is_local_to_procedure() -> None:
    define = mk("procedures_defnoreturn", state={"params": ["n"]}, NAME="f", STACK=assign("n", num(1)))
    after = mk("controls_repeat_ext", TIMES=num(3), DO=None)
    out = haxe(define, after)
    assert out.startswith("function f(n) {\n  n = 1;\n}\n\n\n")
    assert "for (var count = 0; count < 3; count++) {\n" in out


def test_non_ascii_variable_names_encoded() -> None:
    out = haxe(assign("café", num(1)), variables=["café"])
    assert out == "var caf_C3_A9;\n\n\ncaf_C3_A9 = 1;\n"
