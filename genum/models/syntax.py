"""
Models for the declarations of a Go package.

Each node carries an explicit kind tag (see ``genum.models.enums``) so that
traversal code dispatches on the tag instead of on Python types.
"""
import logging
from typing import Iterator, List, Optional

from pydantic import BaseModel, Field

from .enums import DeclarationKind, ExprKind, TypeExprKind

logger = logging.getLogger(__name__)


class TypeExpr(BaseModel):
    """A Go type expression as written in the source"""
    kind: TypeExprKind
    text: str
    name: Optional[str] = None
    package: Optional[str] = None
    elem: Optional['TypeExpr'] = None


class Expr(BaseModel):
    """A Go expression as written in the source"""
    kind: ExprKind
    text: str
    name: Optional[str] = None
    operator: Optional[str] = None
    operands: List['Expr'] = Field(default_factory=list)
    function: Optional['Expr'] = None
    type: Optional[TypeExpr] = None

    @property
    def first_operand(self) -> Optional['Expr']:
        return self.operands[0] if self.operands else None


class ValueSpec(BaseModel):
    """
    One ``const`` or ``var`` spec line.

    ``type`` and ``values`` are what the line itself declares. The
    ``effective_*`` fields apply Go's implicit repetition: a const spec
    without an initializer reuses the type and expression list of the last
    spec in the group that had one, evaluated with its own ``iota``.
    """
    names: List[str]
    type: Optional[TypeExpr] = None
    values: List[Expr] = Field(default_factory=list)
    iota: int = 0
    effective_type: Optional[TypeExpr] = None
    effective_values: List[Expr] = Field(default_factory=list)
    line: int = 0

    @property
    def is_implicit(self) -> bool:
        return not self.values

    def value_at(self, index: int) -> Optional[Expr]:
        """Own initializer of the ``index``-th name, if written."""
        if index < len(self.values):
            return self.values[index]
        return None

    def effective_value_at(self, index: int) -> Optional[Expr]:
        if index < len(self.effective_values):
            return self.effective_values[index]
        return None


class TypeSpec(BaseModel):
    """One ``type`` spec line, either a definition or an alias"""
    name: str
    type: TypeExpr
    alias: bool = False
    line: int = 0


class Declaration(BaseModel):
    """A top-level declaration with the comment group directly above it"""
    kind: DeclarationKind
    line: int
    doc: List[str] = Field(default_factory=list)
    value_specs: List[ValueSpec] = Field(default_factory=list)
    type_specs: List[TypeSpec] = Field(default_factory=list)
    name: Optional[str] = None


class SourceFile(BaseModel):
    """One parsed Go file"""
    path: str
    name: str
    package: str
    declarations: List[Declaration] = Field(default_factory=list)
    has_errors: bool = False

    def declarations_of(self, kind: DeclarationKind) -> List[Declaration]:
        return [d for d in self.declarations if d.kind == kind]


class Package(BaseModel):
    """All files of a single Go package, in load order"""
    name: str
    directory: str
    files: List[SourceFile] = Field(default_factory=list)

    def file_named(self, name: str) -> Optional[SourceFile]:
        for source_file in self.files:
            if source_file.name == name:
                return source_file
        return None

    def iter_declarations(self) -> Iterator[Declaration]:
        for source_file in self.files:
            yield from source_file.declarations


TypeExpr.model_rebuild()
Expr.model_rebuild()
