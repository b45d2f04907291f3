"""
Tests for evaluating Go constant expressions.
"""
import pytest

from genum.core.constant_eval import ConstantEvaluator, render_value, unescape_go
from genum.core.scope import PackageScope
from genum.core.type_resolver import TypeRef

CONSTANTS = """
package flags

type Flag uint8
type Name string

const (
    FlagNone Flag = 0
    FlagA Flag = 1 << iota
    FlagB
    FlagC
)

const (
    _ = iota * 10
    Ten
    Twenty
)

const (
    KB = 1 << (10 * (iota + 1))
    MB
)

const (
    Hello = "hello"
    World = Hello + ", world"
    Quoted = "say \\"hi\\"\\n"
    Raw = `a\\b`
    Letter = 'A'
    ByteHigh = '\\x80'
    ByteMax = '\\377'
    Accent = '\\u00e9'
    Char = string(Letter)
    Size = len(World)
    Neg = -7 / 2
    Mod = -7 % 2
    Masked = ^Flag(1)
    Ratio = 1.5 * 2
    Third = 1.0 / 3
    Hex = 0x1F
    Octal = 017
    Binary = 0b101
    Under = 1_000
    Yes = 3 > 2 && true
    Imag = 2i
    Named = Name("n")
    Chained = FlagC
    Unknown = other.Thing
    CycleA = CycleB
    CycleB = CycleA
    Huge = 1 << 1000
)
"""


@pytest.fixture
def evaluator(make_package):
    package = make_package({"flags.go": CONSTANTS}, name="flags")
    return ConstantEvaluator(PackageScope(package))


def render(evaluator, name):
    symbol = evaluator.scope.lookup(name)
    return evaluator.render(symbol.spec, symbol.index)


def type_of(evaluator, name):
    symbol = evaluator.scope.lookup(name)
    return evaluator.type_of(symbol.spec, symbol.index)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("FlagNone", "0"),
        ("FlagA", "2"),
        ("FlagB", "4"),
        ("FlagC", "8"),
        ("Ten", "10"),
        ("Twenty", "20"),
        ("KB", "1024"),
        ("MB", "1048576"),
        ("Hello", "hello"),
        ("World", "hello, world"),
        ("Quoted", 'say "hi"\n'),
        ("Raw", "a\\b"),
        ("Letter", "65"),
        ("ByteHigh", "128"),
        ("ByteMax", "255"),
        ("Accent", "233"),
        ("Char", "A"),
        ("Size", "12"),
        ("Neg", "-3"),
        ("Mod", "-1"),
        ("Masked", "254"),
        ("Ratio", "3"),
        ("Third", "0.333333"),
        ("Hex", "31"),
        ("Octal", "15"),
        ("Binary", "5"),
        ("Under", "1000"),
        ("Yes", "true"),
        ("Imag", "(0 + 2i)"),
        ("Named", "n"),
        ("Chained", "8"),
    ],
)
def test_values(evaluator, name, expected):
    assert render(evaluator, name) == expected


@pytest.mark.parametrize("name", ["Unknown", "CycleA", "CycleB", "Huge"])
def test_unknown_values(evaluator, name):
    assert render(evaluator, name) is None


def test_types(evaluator):
    assert type_of(evaluator, "FlagC") == TypeRef("named", "Flag")
    assert type_of(evaluator, "Masked") == TypeRef("named", "Flag")
    assert type_of(evaluator, "Named") == TypeRef("named", "Name")
    assert type_of(evaluator, "Chained") == TypeRef("named", "Flag")
    assert type_of(evaluator, "Size") == TypeRef("basic", "int")
    assert type_of(evaluator, "Hello") is None
    assert type_of(evaluator, "Yes") is None
    assert type_of(evaluator, "CycleA") is None


def test_render_value():
    assert render_value(True) == "true"
    assert render_value(42) == "42"
    assert render_value(2.0) == "2"
    assert render_value(0.25) == "0.25"
    assert render_value("x") == "x"


def test_unescape_go():
    assert unescape_go(r"\x41\101é\t") == "AAé\t"
    with pytest.raises(ValueError):
        unescape_go(r"\q")
