"""
Tests for rendering and writing generated Go code.
"""
import os
import stat
import unittest

import pytest

from genum.core.config import config
from genum.core.error_handling import GenerationError, WriteError
from genum.core.generator import Generator, TemplateRenderer, distinct_values, fold
from genum.core.templates import go_quote
from genum.models.enums import CaseHandling
from genum.models.generation import Enum, EnumValue, GenerationUnit


def make_enum(type_name="Color", base_type="string", case=CaseHandling.SENSITIVE, values=None, trim_prefix=None):
    if values is None:
        values = [("ColorRed", "red"), ("ColorGreen", "green")]
    return Enum(
        type_name=type_name,
        base_type=base_type,
        trim_prefix=type_name if trim_prefix is None else trim_prefix,
        case=case,
        values=[EnumValue(name=n, value=v) for n, v in values],
    )


def make_unit(*enums, output="color_genum.go"):
    unit = GenerationUnit(package="colors", source="color.go", output=output)
    for enum in enums:
        unit.add_enum(enum)
    return unit


class TemplateRendererTests(unittest.TestCase):
    """Tests for the Go code produced per enum."""

    def setUp(self):
        config.reset()
        self.generator = Generator("/tmp")

    def render(self, *enums):
        return self.generator.generate_file(make_unit(*enums))

    def test_header(self):
        code = self.render(make_enum())
        self.assertTrue(code.startswith("// Code generated by genum from color.go; DO NOT EDIT.\n\npackage colors\n"))
        self.assertIn('import "fmt"', code)
        self.assertNotIn('"strings"', code)
        self.assertEqual(code, code.strip())

    def test_strings_import_when_folding(self):
        code = self.render(make_enum(case=CaseHandling.LOWER))
        self.assertIn('import (\n\t"fmt"\n\t"strings"\n)', code)

    def test_values_and_string(self):
        code = self.render(make_enum())
        self.assertIn("var _ColorValues = []Color{\n\tColorRed,\n\tColorGreen,\n}", code)
        self.assertIn("func ColorValues() []Color {", code)
        self.assertIn('\tcase ColorRed:\n\t\treturn "red"', code)
        self.assertIn("\treturn string(e)\n", code)
        self.assertIn("\tcase ColorRed, ColorGreen:\n\t\treturn true", code)

    def test_parse_sensitive(self):
        code = self.render(make_enum())
        self.assertIn("func ParseColor(s string) (Color, error) {\n\tswitch s {", code)
        self.assertIn('\tcase "green":\n\t\treturn ColorGreen, nil', code)
        self.assertIn('return zero, fmt.Errorf("invalid Color: %q", s)', code)

    def test_parse_ignore_case(self):
        code = self.render(make_enum(case=CaseHandling.IGNORE))
        self.assertIn("for _, v := range _ColorValues {", code)
        self.assertIn("if strings.EqualFold(v.String(), s) {", code)

    def test_parse_lower_and_upper(self):
        values = [("ColorRed", "Red")]
        lower = self.render(make_enum(case=CaseHandling.LOWER, values=values))
        upper = self.render(make_enum(case=CaseHandling.UPPER, values=values))
        self.assertIn('switch strings.ToLower(s) {\n\tcase "red":', lower)
        self.assertIn('switch strings.ToUpper(s) {\n\tcase "RED":', upper)
        self.assertIn('return "Red"', lower)

    def test_integer_enum_uses_trimmed_names(self):
        enum = make_enum(
            type_name="Priority",
            base_type="int",
            case=CaseHandling.LOWER,
            values=[("PriorityLow", "0"), ("PriorityHigh", "1"), ("Priority", "2")],
        )
        code = self.render(enum)
        self.assertIn('\tcase PriorityLow:\n\t\treturn "Low"', code)
        self.assertIn('\tcase Priority:\n\t\treturn "Priority"', code)
        self.assertIn('return fmt.Sprintf("Priority(%v)", int(e))', code)
        # case folding only applies to string based enums
        self.assertIn("\tswitch s {", code)
        self.assertNotIn("strings.", code)

    def test_unsupported_base_type(self):
        code = self.render(make_enum(type_name="Span", base_type="unsupported", values=[("SpanDay", "1")]))
        self.assertIn('return "Span(unknown)"', code)

    def test_duplicate_values_are_collapsed(self):
        enum = make_enum(values=[("ColorRed", "red"), ("ColorDefault", "red"), ("ColorBlue", "blue")])
        code = self.render(enum)
        self.assertIn("\tColorDefault,\n", code)
        self.assertNotIn("case ColorDefault", code)
        self.assertIn("case ColorRed, ColorBlue:", code)
        self.assertEqual(1, code.count('case "red":'))

    def test_multiple_enums_in_one_file(self):
        code = self.render(make_enum(), make_enum(type_name="Shape", values=[("ShapeCircle", "circle")]))
        self.assertEqual(1, code.count("package colors"))
        self.assertIn("func ParseColor(", code)
        self.assertIn("func ParseShape(", code)

    def test_text_marshalling(self):
        code = self.render(make_enum())
        self.assertIn("func (e Color) MarshalText() ([]byte, error) {", code)
        self.assertIn("func (e *Color) UnmarshalText(text []byte) error {\n\tv, err := ParseColor(string(text))", code)


def test_values_are_quoted_for_go():
    assert go_quote('say "hi"\n') == '"say \\"hi\\"\\n"'
    assert go_quote("café") == '"café"'


def test_fold():
    assert fold("MiXed", CaseHandling.LOWER) == "mixed"
    assert fold("MiXed", CaseHandling.UPPER) == "MIXED"
    assert fold("MiXed", CaseHandling.IGNORE) == "MiXed"


def test_distinct_values():
    enum = make_enum(values=[("A", "1"), ("B", "1"), ("C", "2")])
    assert [v.name for v in distinct_values(enum)] == ["A", "C"]


def test_distinct_values_use_exact_key():
    enum = make_enum(type_name="Ratio", base_type="float64")
    enum.values = [
        EnumValue(name="RatioA", value="0.1", key="float:0.1"),
        EnumValue(name="RatioB", value="0.1", key="float:0.1000001"),
        EnumValue(name="RatioC", value="0.1", key="float:0.1"),
    ]
    assert [v.name for v in distinct_values(enum)] == ["RatioA", "RatioB"]

    code = Generator("/tmp").generate_file(make_unit(enum, output="ratio_genum.go"))
    assert "case RatioA, RatioB:" in code
    assert "case RatioC" not in code


def test_broken_template_is_a_generation_error():
    renderer = TemplateRenderer({"ENUM_TEMPLATE": "func {missing}() {{}}"})
    generator = Generator("/tmp", renderer)

    with pytest.raises(GenerationError) as excinfo:
        generator.generate_file(make_unit(make_enum()))
    assert str(excinfo.value).startswith("generate color_genum.go: ")


def test_generate_writes_file(tmp_path):
    generator = Generator(str(tmp_path))
    unit = make_unit(make_enum())

    path = generator.generate(unit)

    assert path == os.path.join(str(tmp_path), "color_genum.go")
    content = (tmp_path / "color_genum.go").read_text(encoding="utf-8")
    assert content == generator.generate_file(unit)
    assert not content.endswith("\n")


def test_written_file_mode(tmp_path):
    old_umask = os.umask(0o022)
    try:
        Generator(str(tmp_path)).generate(make_unit(make_enum()))
    finally:
        os.umask(old_umask)

    assert stat.S_IMODE(os.stat(tmp_path / "color_genum.go").st_mode) == 0o644


def test_write_failure_is_tagged_with_output(tmp_path):
    generator = Generator(str(tmp_path / "missing"))

    with pytest.raises(WriteError) as excinfo:
        generator.generate(make_unit(make_enum(), output="color_genum.go"))
    assert str(excinfo.value).startswith("write color_genum.go: ")
