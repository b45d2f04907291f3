"""
Models for directives and the enums produced from them.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import CaseHandling

STRING_BASE_TYPE = 'string'


class Directive(BaseModel):
    """Parsed form of a ``//go:generate genum`` comment"""
    model_config = ConfigDict(frozen=True)

    type_name: str
    output_file: str
    trim_prefix: str
    case: CaseHandling = CaseHandling.SENSITIVE


class EnumValue(BaseModel):
    """
    An exported constant of an enum type and its literal value.

    ``key`` identifies the exact evaluated value when there is one; two
    constants with equal keys are the same Go value. ``value`` is only the
    display form and may round.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    key: Optional[str] = None

    @property
    def identity(self) -> str:
        return self.key if self.key is not None else self.value


class Enum(BaseModel):
    """A named type together with its ordered constants"""
    type_name: str
    base_type: str
    trim_prefix: str
    case: CaseHandling = CaseHandling.SENSITIVE
    values: List[EnumValue] = Field(default_factory=list)

    @property
    def is_string_based(self) -> bool:
        return self.base_type == STRING_BASE_TYPE

    @property
    def requires_case_folding(self) -> bool:
        """True when parse-back needs the ``strings`` package."""
        return self.is_string_based and self.case != CaseHandling.SENSITIVE

    def display_name(self, value: EnumValue) -> str:
        """Name of ``value`` with the trim prefix removed."""
        if self.trim_prefix and value.name.startswith(self.trim_prefix):
            trimmed = value.name[len(self.trim_prefix):]
            if trimmed:
                return trimmed
        return value.name

    def display_text(self, value: EnumValue) -> str:
        """Textual form used by the generated ``String`` method."""
        if self.is_string_based:
            return value.value
        return self.display_name(value)


class GenerationUnit(BaseModel):
    """All enums destined for one output file"""
    package: str
    source: str
    output: str
    needs_strings: bool = False
    enums: List[Enum] = Field(default_factory=list)

    def add_enum(self, enum: Enum) -> None:
        self.enums.append(enum)
        self.needs_strings = self.needs_strings or enum.requires_case_folding
