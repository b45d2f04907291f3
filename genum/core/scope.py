"""
Package-level scope of a Go package.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Union

from genum.core.visitor import DeclarationVisitor
from genum.models.enums import DeclarationKind
from genum.models.syntax import Declaration, Package, SourceFile, TypeSpec, ValueSpec

logger = logging.getLogger(__name__)


@dataclass
class Symbol:
    """A name declared at package level"""
    name: str
    kind: DeclarationKind
    file: Optional[SourceFile] = None
    spec: Optional[Union[ValueSpec, TypeSpec]] = None
    index: int = 0

    @property
    def is_type(self) -> bool:
        return self.kind == DeclarationKind.TYPE

    @property
    def is_const(self) -> bool:
        return self.kind == DeclarationKind.CONST


class PackageScope(DeclarationVisitor):
    """
    Maps every package-level name of all files in a package to its symbol.

    Methods are not part of the package scope and the blank identifier is
    never declared.
    """

    def __init__(self, package: Package):
        super().__init__()
        self.package = package
        self.symbols: Dict[str, Symbol] = {}
        self.visit_package(package)
        logger.debug(f"Package {package.name} scope holds {len(self.symbols)} symbols")

    def lookup(self, name: str) -> Optional[Symbol]:
        return self.symbols.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.symbols

    def _declare(self, symbol: Symbol) -> None:
        if symbol.name == '_':
            return
        existing = self.symbols.get(symbol.name)
        if existing is not None:
            logger.warning(
                f"{symbol.name} redeclared in package {self.package.name}; keeping the {existing.kind.value} declaration"
            )
            return
        self.symbols[symbol.name] = symbol

    def _declare_values(self, declaration: Declaration) -> None:
        for spec in declaration.value_specs:
            for index, name in enumerate(spec.names):
                self._declare(Symbol(name, declaration.kind, self.current_file, spec, index))

    def visit_const(self, declaration: Declaration) -> None:
        self._declare_values(declaration)

    def visit_var(self, declaration: Declaration) -> None:
        self._declare_values(declaration)

    def visit_type(self, declaration: Declaration) -> None:
        for spec in declaration.type_specs:
            self._declare(Symbol(spec.name, DeclarationKind.TYPE, self.current_file, spec))

    def visit_function(self, declaration: Declaration) -> None:
        # init functions are never declared in the package scope
        if declaration.name and declaration.name != 'init':
            self._declare(Symbol(declaration.name, DeclarationKind.FUNCTION, self.current_file))
