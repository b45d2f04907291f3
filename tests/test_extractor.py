"""
Tests for resolving the constants of an enum.
"""
import pytest

from genum.core.config import config
from genum.core.error_handling import NoValuesFoundError, TypeNotFoundError
from genum.core.extractor import (
    ConstantExtractor,
    DeclaredNameStrategy,
    ExtractionContext,
    ResolvedValueStrategy,
    SyntaxValueStrategy,
    ValueExtractionChain,
    is_exported,
    strip_quotes,
)
from genum.core.generator import Generator, distinct_values
from genum.models.enums import CaseHandling
from genum.models.generation import Directive, GenerationUnit

COLORS = """
package colors

//go:generate genum -type=Color
type Color string

type Shade = Color

type Other string

const (
    ColorRed   Color = "red"
    ColorGreen Color = "green"
    colorHidden Color = "hidden"
    ColorGhost Other = "ghost"
    ColorAlias Shade = "alias"
)
"""

MORE_COLORS = """
package colors

const ColorBlue = Color("blue")

const (
    Untyped = "untyped"
    ColorCopy = ColorRed
)
"""

PRIORITIES = """
package colors

type Priority int

const (
    PriorityLow Priority = iota
    PriorityMedium
    PriorityHigh
)

var PriorityVar Priority = 9
"""


def directive(type_name, **kwargs):
    kwargs.setdefault("output_file", "out_genum.go")
    kwargs.setdefault("trim_prefix", type_name)
    return Directive(type_name=type_name, **kwargs)


@pytest.fixture
def extractor(make_package):
    package = make_package({"colors.go": COLORS, "more.go": MORE_COLORS, "priority.go": PRIORITIES})
    return ConstantExtractor(package)


def test_extract_string_enum_across_files(extractor):
    enum = extractor.extract_enum(directive("Color", case=CaseHandling.IGNORE))

    assert enum.type_name == "Color"
    assert enum.base_type == "string"
    assert enum.case == CaseHandling.IGNORE
    assert [(v.name, v.value) for v in enum.values] == [
        ("ColorRed", "red"),
        ("ColorGreen", "green"),
        ("ColorBlue", "blue"),
        ("ColorCopy", "red"),
    ]


def test_unexported_constants_are_skipped(extractor):
    names = [v.name for v in extractor.parse_constants("Color")]
    assert "colorHidden" not in names
    assert "ColorRed" in names


def test_other_types_and_aliases_do_not_match(extractor):
    names = [v.name for v in extractor.parse_constants("Color")]
    assert "ColorGhost" not in names
    assert "ColorAlias" not in names
    assert "Untyped" not in names


def test_alias_as_target_matches_its_own_constants(extractor):
    assert [v.name for v in extractor.parse_constants("Shade")] == ["ColorAlias"]


def test_iota_enum(extractor):
    enum = extractor.extract_enum(directive("Priority"))

    assert enum.base_type == "int"
    assert [(v.name, v.value) for v in enum.values] == [
        ("PriorityLow", "0"),
        ("PriorityMedium", "1"),
        ("PriorityHigh", "2"),
    ]


def test_variables_are_not_enum_values(extractor):
    assert "PriorityVar" not in [v.name for v in extractor.parse_constants("Priority")]


def test_type_not_found(extractor):
    with pytest.raises(TypeNotFoundError) as excinfo:
        extractor.extract_enum(directive("Missing"))
    assert str(excinfo.value) == "type Missing not found"


def test_non_type_symbol_is_not_a_type(extractor):
    with pytest.raises(TypeNotFoundError):
        extractor.extract_enum(directive("ColorRed"))


def test_no_values_found(make_package):
    package = make_package({"empty.go": """
        package colors

        type Empty int

        const (
            emptyHidden Empty = 1
        )
    """})

    with pytest.raises(NoValuesFoundError) as excinfo:
        ConstantExtractor(package).extract_enum(directive("Empty"))
    assert str(excinfo.value) == "no values found for enum Empty"


def test_syntax_tier_without_resolution(make_package):
    config.set("extraction", "resolve_values", False)
    package = make_package({"p.go": PRIORITIES + """
const (
    PriorityTop Priority = Priority(PriorityHigh)
    PriorityRaw Priority = `raw`
)
"""})

    values = ConstantExtractor(package).parse_constants("Priority")

    assert [(v.name, v.value) for v in values] == [
        ("PriorityLow", "iota"),
        ("PriorityMedium", "PriorityMedium"),
        ("PriorityHigh", "PriorityHigh"),
        ("PriorityTop", "PriorityHigh"),
        ("PriorityRaw", "raw"),
    ]


def test_declared_name_only(make_package):
    config.set("extraction", "resolve_values", False)
    config.set("extraction", "fallback_to_syntax", False)
    package = make_package({"p.go": PRIORITIES})

    values = ConstantExtractor(package).parse_constants("Priority")

    assert [v.value for v in values] == ["PriorityLow", "PriorityMedium", "PriorityHigh"]


def test_chain_falls_through_to_next_strategy(extractor):
    symbol = extractor.scope.lookup("PriorityMedium")
    context = ExtractionContext(
        name="PriorityMedium", spec=symbol.spec, index=symbol.index, evaluator=extractor.evaluator
    )

    assert ResolvedValueStrategy().extract(context) == "1"
    assert SyntaxValueStrategy().extract(context) is None
    assert DeclaredNameStrategy().extract(context) == "PriorityMedium"
    assert ValueExtractionChain([SyntaxValueStrategy(), DeclaredNameStrategy()]).extract(context) == "PriorityMedium"
    assert ValueExtractionChain([]).extract(context) == "PriorityMedium"


def test_helpers():
    assert is_exported("Red")
    assert not is_exported("red")
    assert not is_exported("_Red")
    assert not is_exported("")
    assert strip_quotes('"x"') == "x"
    assert strip_quotes("`x`") == "x"
    assert strip_quotes('"x') == '"x'


def test_string_values_keep_inner_quotes(make_package):
    package = make_package({"quote.go": """
        package colors

        type Quote string

        const (
            QuoteDouble Quote = "\\"q\\""
            QuoteTick Quote = "`t`"
            QuoteRaw Quote = `"r"`
        )
    """})
    enum = ConstantExtractor(package).extract_enum(directive("Quote"))

    assert [v.value for v in enum.values] == ['"q"', "`t`", '"r"']


def test_close_floats_stay_distinct(make_package):
    package = make_package({"ratio.go": """
        package colors

        type Ratio float64

        const (
            RatioA Ratio = 0.1
            RatioB Ratio = 0.1000001
            RatioC Ratio = 1.0 / 10
        )
    """})
    enum = ConstantExtractor(package).extract_enum(directive("Ratio"))

    assert [v.value for v in enum.values] == ["0.1", "0.1", "0.1"]
    assert [v.name for v in distinct_values(enum)] == ["RatioA", "RatioB"]
    code = Generator("/tmp").generate_file(GenerationUnit(package="colors", source="ratio.go",
                                                          output="ratio_genum.go", enums=[enum]))
    assert "case RatioA, RatioB:" in code
