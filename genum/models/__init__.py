from .enums import CaseHandling, DeclarationKind, ExprKind, TypeExprKind
from .generation import Directive, Enum, EnumValue, GenerationUnit
from .syntax import Declaration, Expr, Package, SourceFile, TypeExpr, TypeSpec, ValueSpec

__all__ = [
    "CaseHandling",
    "Declaration",
    "DeclarationKind",
    "Directive",
    "Enum",
    "EnumValue",
    "Expr",
    "ExprKind",
    "GenerationUnit",
    "Package",
    "SourceFile",
    "TypeExpr",
    "TypeExprKind",
    "TypeSpec",
    "ValueSpec",
]
