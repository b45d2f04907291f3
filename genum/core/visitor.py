"""
Visitor over the declaration model of a Go package.
"""
import logging
from typing import Any, Callable, Dict, Optional

from genum.models.enums import DeclarationKind
from genum.models.syntax import Declaration, Package, SourceFile

logger = logging.getLogger(__name__)


class DeclarationVisitor:
    """
    Base visitor dispatching on ``Declaration.kind``.

    Subclasses implement ``visit_<kind>`` methods (``visit_const``,
    ``visit_type``, ...). Declarations without a handler go to
    ``generic_visit``. ``current_file`` holds the file being traversed.
    """

    def __init__(self):
        self.current_file: Optional[SourceFile] = None
        self._dispatch: Dict[DeclarationKind, Callable[[Declaration], Any]] = {
            kind: getattr(self, f'visit_{kind.value}', self.generic_visit)
            for kind in DeclarationKind
        }

    def visit_package(self, package: Package) -> None:
        for source_file in package.files:
            self.visit_file(source_file)

    def visit_file(self, source_file: SourceFile) -> None:
        previous, self.current_file = self.current_file, source_file
        try:
            for declaration in source_file.declarations:
                self.visit(declaration)
        finally:
            self.current_file = previous

    def visit(self, declaration: Declaration) -> Any:
        return self._dispatch[declaration.kind](declaration)

    def generic_visit(self, declaration: Declaration) -> Any:
        return None
