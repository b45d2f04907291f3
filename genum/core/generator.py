"""
Rendering of generation units into Go source and writing them to disk.
"""
import logging
import os
from typing import Dict, List, Optional

from genum.core import templates
from genum.core.config import config
from genum.core.error_handling import GenerationError, WriteError
from genum.core.type_resolver import BASIC_TYPES
from genum.models.enums import CaseHandling
from genum.models.generation import Enum, EnumValue, GenerationUnit

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """
    Expands the Go templates for a generation unit.

    Args:
        template_set: Overrides for attributes of ``genum.core.templates``,
            keyed by attribute name
    """

    def __init__(self, template_set: Optional[Dict[str, str]] = None):
        self.template_set = template_set or {}

    def template(self, name: str) -> str:
        if name in self.template_set:
            return self.template_set[name]
        return getattr(templates, name)

    def render(self, unit: GenerationUnit) -> str:
        parts = [self.render_header(unit)]
        for enum in unit.enums:
            parts.append(self.render_enum(enum))
        return '\n'.join(parts)

    def render_header(self, unit: GenerationUnit) -> str:
        imports = ['fmt']
        if unit.needs_strings:
            imports.append('strings')
        if len(imports) == 1:
            import_block = self.template('SINGLE_IMPORT_TEMPLATE').format(path=imports[0])
        else:
            import_block = self.template('MULTI_IMPORT_TEMPLATE').format(
                paths='\n'.join(f'\t"{path}"' for path in imports)
            )
        return self.template('HEADER_TEMPLATE').format(
            source=unit.source, package=unit.package, imports=import_block
        )

    def render_enum(self, enum: Enum) -> str:
        distinct = distinct_values(enum)
        value_items = '\n'.join(
            self.template('VALUE_ITEM_TEMPLATE').format(name=v.name) for v in enum.values
        )
        string_cases = '\n'.join(
            self.template('STRING_CASE_TEMPLATE').format(name=v.name, text=templates.go_quote(enum.display_text(v)))
            for v in distinct
        )
        return self.template('ENUM_TEMPLATE').format(
            type=enum.type_name,
            value_items=value_items,
            string_cases=string_cases,
            string_fallback=self.string_fallback(enum),
            valid_names=', '.join(v.name for v in distinct),
            parse_body=self.render_parse(enum),
        )

    def string_fallback(self, enum: Enum) -> str:
        """Expression returned by ``String`` for undeclared values."""
        if enum.is_string_based:
            return self.template('STRING_FALLBACK_STRING')
        if enum.base_type in BASIC_TYPES:
            return self.template('STRING_FALLBACK_BASIC').format(
                prefix=templates.go_quote(f"{enum.type_name}(%v)"), base=enum.base_type
            )
        return self.template('STRING_FALLBACK_OTHER').format(
            unknown=templates.go_quote(f"{enum.type_name}(unknown)")
        )

    def render_parse(self, enum: Enum) -> str:
        """
        Body of ``Parse<T>``.

        Case folding only applies to string based enums; every other enum
        is parsed back by exact comparison of its display text.
        """
        case = enum.case if enum.is_string_based else CaseHandling.SENSITIVE
        if case == CaseHandling.IGNORE:
            return self.template('PARSE_FOLD_TEMPLATE').format(type=enum.type_name)

        cases: List[str] = []
        seen = set()
        for value in enum.values:
            # keyed on the case label itself; equal labels do not compile
            key = fold(enum.display_text(value), case)
            if key in seen:
                continue
            seen.add(key)
            cases.append(self.template('PARSE_CASE_TEMPLATE').format(
                text=templates.go_quote(key), name=value.name
            ))
        return self.template('PARSE_SWITCH_TEMPLATE').format(
            subject=templates.PARSE_SUBJECTS[case.value], cases='\n'.join(cases)
        )


def fold(text: str, case: CaseHandling) -> str:
    """Apply the comparison form of ``case`` to ``text``."""
    if case == CaseHandling.LOWER:
        return text.lower()
    if case == CaseHandling.UPPER:
        return text.upper()
    return text


def distinct_values(enum: Enum) -> List[EnumValue]:
    """First constant of each distinct value; Go rejects duplicate switch cases."""
    seen = set()
    result = []
    for value in enum.values:
        if value.identity in seen:
            logger.debug(f"{value.name} duplicates the value {value.value!r} of {enum.type_name}")
            continue
        seen.add(value.identity)
        result.append(value)
    return result


class Generator:
    """
    Renders generation units and writes the resulting Go files.

    Args:
        directory: Base directory for relative output paths
        renderer: Template renderer to use
    """

    def __init__(self, directory: str = '.', renderer: Optional[TemplateRenderer] = None):
        self.directory = directory
        self.renderer = renderer or TemplateRenderer()

    def generate(self, unit: GenerationUnit) -> str:
        """
        Render ``unit`` and write it to its output file.

        Returns:
            Path of the written file
        """
        code = self.generate_file(unit)
        path = self.output_path(unit)
        self.write_file(path, code, unit.output)
        logger.info(f"Wrote {path}")
        return path

    def generate_file(self, unit: GenerationUnit) -> str:
        """Render ``unit`` into Go source, trimmed of surrounding whitespace."""
        try:
            code = self.renderer.render(unit)
        except (KeyError, IndexError, ValueError, AttributeError) as e:
            raise GenerationError(unit.output, e) from e
        return code.strip()

    def output_path(self, unit: GenerationUnit) -> str:
        if os.path.isabs(unit.output):
            return unit.output
        return os.path.join(self.directory, unit.output)

    @staticmethod
    def write_file(path: str, content: str, output: Optional[str] = None) -> None:
        """
        Write ``content`` to ``path`` with the configured file mode.

        Raises:
            WriteError: If the file cannot be written
        """
        mode = config.get('generation', 'file_mode', 0o644)
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            raise WriteError(output or path, e) from e
