"""
Resolution of Go type names to type identities and base types.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Set

from genum.core.scope import PackageScope
from genum.models.enums import TypeExprKind
from genum.models.syntax import TypeExpr, TypeSpec

logger = logging.getLogger(__name__)

UNSUPPORTED = 'unsupported'
EMPTY_STRUCT = 'struct{}'

BASIC_TYPES = frozenset({
    'bool', 'string',
    'int', 'int8', 'int16', 'int32', 'int64',
    'uint', 'uint8', 'uint16', 'uint32', 'uint64', 'uintptr',
    'byte', 'rune',
    'float32', 'float64',
    'complex64', 'complex128',
})
INTEGER_TYPES = frozenset({
    'int', 'int8', 'int16', 'int32', 'int64',
    'uint', 'uint8', 'uint16', 'uint32', 'uint64', 'uintptr',
    'byte', 'rune',
})
FLOAT_TYPES = frozenset({'float32', 'float64'})
COMPLEX_TYPES = frozenset({'complex64', 'complex128'})


@dataclass(frozen=True)
class TypeRef:
    """
    Identity of a resolved type.

    Two constants have the same type exactly when their ``TypeRef`` values
    are equal. ``kind`` is one of ``named`` (declared in this package),
    ``basic`` (predeclared), ``external`` (qualified with another package)
    or ``composite`` (any other type literal).
    """
    kind: str
    name: str

    @property
    def is_named(self) -> bool:
        return self.kind == 'named'


class TypeResolver:
    """Resolves type expressions against a package scope."""

    def __init__(self, scope: PackageScope):
        self.scope = scope

    def lookup_type(self, name: str) -> Optional[TypeSpec]:
        """
        Find the type declared at package level under ``name``.

        Returns:
            The type spec, or None when the name is missing or is not a type
        """
        symbol = self.scope.lookup(name)
        if symbol is None:
            logger.debug(f"{name} is not declared in package {self.scope.package.name}")
            return None
        if not symbol.is_type:
            logger.debug(f"{name} is a {symbol.kind.value}, not a type")
            return None
        return symbol.spec

    def resolve(self, type_expr: Optional[TypeExpr]) -> Optional[TypeRef]:
        """Return the identity of ``type_expr``, or None if it cannot be resolved."""
        if type_expr is None:
            return None
        if type_expr.kind == TypeExprKind.NAME:
            symbol = self.scope.lookup(type_expr.name)
            if symbol is not None:
                return TypeRef('named', type_expr.name) if symbol.is_type else None
            if type_expr.name in BASIC_TYPES:
                return TypeRef('basic', type_expr.name)
            return None
        if type_expr.kind == TypeExprKind.QUALIFIED:
            return TypeRef('external', type_expr.text)
        return TypeRef('composite', type_expr.text)

    def resolve_name(self, name: str) -> Optional[TypeRef]:
        """Identity of a bare type name used as a conversion, if it is a type."""
        return self.resolve(TypeExpr(kind=TypeExprKind.NAME, text=name, name=name))

    def base_type(self, spec: TypeSpec) -> str:
        """
        Classify the underlying representation of a declared type.

        Named types are followed to their underlying type, pointers render as
        ``*`` followed by their element, structs as ``struct{}`` and any other
        shape as ``unsupported``.
        """
        return self._describe(spec.type, {spec.name})

    def basic_of(self, ref: Optional[TypeRef]) -> Optional[str]:
        """Name of the predeclared type underlying ``ref``, if there is one."""
        if ref is None:
            return None
        if ref.kind == 'basic':
            return ref.name
        if ref.kind == 'named':
            spec = self.lookup_type(ref.name)
            if spec is not None:
                described = self._describe(spec.type, {spec.name})
                if described in BASIC_TYPES:
                    return described
        return None

    def _describe(self, type_expr: Optional[TypeExpr], seen: Set[str]) -> str:
        if type_expr is None:
            return UNSUPPORTED
        if type_expr.kind == TypeExprKind.NAME:
            symbol = self.scope.lookup(type_expr.name)
            if symbol is not None:
                if not symbol.is_type or type_expr.name in seen:
                    return UNSUPPORTED
                return self._describe(symbol.spec.type, seen | {type_expr.name})
            if type_expr.name in BASIC_TYPES:
                return type_expr.name
            return UNSUPPORTED
        if type_expr.kind == TypeExprKind.POINTER:
            return '*' + self._describe(type_expr.elem, seen)
        if type_expr.kind == TypeExprKind.STRUCT:
            return EMPTY_STRUCT
        return UNSUPPORTED
