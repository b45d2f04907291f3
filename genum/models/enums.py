"""
Core enumerations for the genum code generator.
"""
from enum import Enum


class CaseHandling(str, Enum):
    """How parse-back compares input text against enum values"""
    SENSITIVE = 'sensitive'
    IGNORE = 'ignore'
    LOWER = 'lower'
    UPPER = 'upper'

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return value in cls._value2member_map_


class DeclarationKind(str, Enum):
    """Kinds of top-level Go declarations"""
    IMPORT = 'import'
    CONST = 'const'
    VAR = 'var'
    TYPE = 'type'
    FUNCTION = 'function'
    METHOD = 'method'
    UNKNOWN = 'unknown'

    @property
    def is_general(self) -> bool:
        """True for the kinds that form a Go ``GenDecl``."""
        return self in (DeclarationKind.IMPORT, DeclarationKind.CONST,
                        DeclarationKind.VAR, DeclarationKind.TYPE)


class TypeExprKind(str, Enum):
    """Shapes of Go type expressions"""
    NAME = 'name'
    QUALIFIED = 'qualified'
    POINTER = 'pointer'
    STRUCT = 'struct'
    OTHER = 'other'


class ExprKind(str, Enum):
    """Shapes of Go expressions that can appear in constant initializers"""
    INT = 'int'
    FLOAT = 'float'
    IMAGINARY = 'imaginary'
    RUNE = 'rune'
    STRING = 'string'
    RAW_STRING = 'raw_string'
    BOOL = 'bool'
    IOTA = 'iota'
    NIL = 'nil'
    IDENTIFIER = 'identifier'
    SELECTOR = 'selector'
    CALL = 'call'
    CONVERSION = 'conversion'
    UNARY = 'unary'
    BINARY = 'binary'
    PAREN = 'paren'
    OTHER = 'other'

    @property
    def is_literal(self) -> bool:
        return self in (ExprKind.INT, ExprKind.FLOAT, ExprKind.IMAGINARY,
                        ExprKind.RUNE, ExprKind.STRING, ExprKind.RAW_STRING)

    @property
    def is_string(self) -> bool:
        return self in (ExprKind.STRING, ExprKind.RAW_STRING)
