"""
Extraction of enums from the constants of a Go package.

A constant belongs to an enum when its type, declared or inferred from its
initializer, is exactly the named type of the directive. The value of each
matching constant is produced by an ordered chain of strategies: the
evaluated constant value first, then a purely syntactic reading of the
initializer, and finally the constant's own name.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from genum.core.config import config
from genum.core.constant_eval import ConstantEvaluator, value_key
from genum.core.error_handling import NoValuesFoundError, TypeNotFoundError
from genum.core.scope import PackageScope
from genum.core.type_resolver import TypeRef, TypeResolver
from genum.core.visitor import DeclarationVisitor
from genum.models.enums import ExprKind
from genum.models.generation import Directive, Enum, EnumValue
from genum.models.syntax import Declaration, Expr, Package, ValueSpec

logger = logging.getLogger(__name__)

QUOTE_CHARS = ('"', '`')


def is_exported(name: str) -> bool:
    """Go visibility rule: exported names start with an upper case letter."""
    return bool(name) and name[0].isupper()


@dataclass
class ExtractionContext:
    """A single constant whose value is being extracted"""
    name: str
    spec: ValueSpec
    index: int
    evaluator: ConstantEvaluator


class ValueExtractionStrategy(ABC):
    """One tier of value extraction. Returns None when it has no answer."""

    name = 'base'

    @abstractmethod
    def extract(self, context: ExtractionContext) -> Optional[str]:
        pass


class ResolvedValueStrategy(ValueExtractionStrategy):
    """Renders the constant value computed by the evaluator; strings come back unquoted."""

    name = 'resolved'

    def extract(self, context: ExtractionContext) -> Optional[str]:
        return context.evaluator.render(context.spec, context.index)


class SyntaxValueStrategy(ValueExtractionStrategy):
    """
    Reads the value from the constant's own initializer.

    Literals render as their trimmed text, identifiers as their name and
    calls or conversions through their first argument. Constants without an
    initializer of their own get no value here.
    """

    name = 'syntax'

    def extract(self, context: ExtractionContext) -> Optional[str]:
        return self.from_expr(context.spec.value_at(context.index))

    def from_expr(self, expr: Optional[Expr]) -> Optional[str]:
        if expr is None:
            return None
        if expr.kind.is_literal:
            text = expr.text.strip()
            return strip_quotes(text) if expr.kind.is_string else text
        if expr.kind in (ExprKind.IDENTIFIER, ExprKind.IOTA, ExprKind.BOOL, ExprKind.NIL):
            return expr.name or expr.text
        if expr.kind == ExprKind.CALL:
            return self.from_expr(expr.first_operand)
        if expr.kind == ExprKind.CONVERSION:
            return self.from_expr(expr.first_operand)
        return None


class DeclaredNameStrategy(ValueExtractionStrategy):
    """Last resort: the constant's declared name."""

    name = 'declared_name'

    def extract(self, context: ExtractionContext) -> Optional[str]:
        return context.name


def strip_quotes(text: str) -> str:
    """Remove one pair of enclosing string quotes."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in QUOTE_CHARS:
        return text[1:-1]
    return text


class ValueExtractionChain:
    """Ordered strategies; the first one producing a value wins."""

    def __init__(self, strategies: Optional[List[ValueExtractionStrategy]] = None):
        self.strategies = strategies if strategies is not None else self.default_strategies()

    @staticmethod
    def default_strategies() -> List[ValueExtractionStrategy]:
        strategies: List[ValueExtractionStrategy] = []
        if config.get('extraction', 'resolve_values', True):
            strategies.append(ResolvedValueStrategy())
        if config.get('extraction', 'fallback_to_syntax', True):
            strategies.append(SyntaxValueStrategy())
        strategies.append(DeclaredNameStrategy())
        return strategies

    def extract(self, context: ExtractionContext) -> str:
        for strategy in self.strategies:
            value = strategy.extract(context)
            if value is not None:
                logger.debug(f"{context.name} = {value!r} ({strategy.name})")
                return value
        return context.name


class ConstantExtractor(DeclarationVisitor):
    """
    Builds enums from the constant declarations of a package.

    Args:
        package: The loaded package; every file of it is searched
        scope: Package scope, built from ``package`` when omitted
        chain: Value extraction chain, built from the configuration when omitted
    """

    def __init__(self, package: Package, scope: Optional[PackageScope] = None,
                 chain: Optional[ValueExtractionChain] = None):
        super().__init__()
        self.package = package
        self.scope = scope or PackageScope(package)
        self.resolver = TypeResolver(self.scope)
        self.evaluator = ConstantEvaluator(self.scope, self.resolver)
        self.chain = chain or ValueExtractionChain()
        self._target: Optional[TypeRef] = None
        self._values: List[EnumValue] = []

    def extract_enum(self, directive: Directive) -> Enum:
        """
        Resolve the enum named by ``directive``.

        Raises:
            TypeNotFoundError: If the name is not a type of the package
            NoValuesFoundError: If no exported constant has the type
        """
        base_type = self.parse_base_type(directive.type_name)
        if not base_type:
            raise TypeNotFoundError(directive.type_name)

        values = self.parse_constants(directive.type_name)
        if not values:
            raise NoValuesFoundError(directive.type_name)

        logger.info(f"Enum {directive.type_name} ({base_type}): {len(values)} values")
        return Enum(
            type_name=directive.type_name,
            base_type=base_type,
            trim_prefix=directive.trim_prefix,
            case=directive.case,
            values=values,
        )

    def parse_base_type(self, type_name: str) -> Optional[str]:
        """Base type of ``type_name``, or None if it is not a package type."""
        spec = self.resolver.lookup_type(type_name)
        if spec is None:
            return None
        return self.resolver.base_type(spec)

    def parse_constants(self, type_name: str) -> List[EnumValue]:
        """Exported constants of ``type_name`` in declaration order."""
        self._target = TypeRef('named', type_name)
        self._values = []
        try:
            self.visit_package(self.package)
            return self._values
        finally:
            self._target = None

    def visit_const(self, declaration: Declaration) -> None:
        for spec in declaration.value_specs:
            for index, name in enumerate(spec.names):
                if self.evaluator.type_of(spec, index) != self._target:
                    continue
                if not is_exported(name):
                    logger.debug(f"Skipping unexported constant {name}")
                    continue
                context = ExtractionContext(name=name, spec=spec, index=index, evaluator=self.evaluator)
                resolved = self.evaluator.evaluate(spec, index)
                self._values.append(EnumValue(
                    name=name,
                    value=self.chain.extract(context),
                    key=value_key(resolved) if resolved is not None else None,
                ))
