"""
Conversion of tree-sitter Go syntax trees into genum declaration models.
"""
import logging
import os
from typing import List, Optional, Tuple

from tree_sitter import Node

from genum.core.engine.ast_handler import ASTHandler
from genum.models.enums import DeclarationKind, ExprKind, TypeExprKind
from genum.models.syntax import Declaration, Expr, SourceFile, TypeExpr, TypeSpec, ValueSpec

logger = logging.getLogger(__name__)

DECLARATION_KINDS = {
    'import_declaration': DeclarationKind.IMPORT,
    'const_declaration': DeclarationKind.CONST,
    'var_declaration': DeclarationKind.VAR,
    'type_declaration': DeclarationKind.TYPE,
    'function_declaration': DeclarationKind.FUNCTION,
    'method_declaration': DeclarationKind.METHOD,
}

LITERAL_KINDS = {
    'int_literal': ExprKind.INT,
    'float_literal': ExprKind.FLOAT,
    'imaginary_literal': ExprKind.IMAGINARY,
    'rune_literal': ExprKind.RUNE,
    'interpreted_string_literal': ExprKind.STRING,
    'raw_string_literal': ExprKind.RAW_STRING,
}

# Older grammars parse these as plain identifiers
KEYWORD_KINDS = {
    'true': ExprKind.BOOL,
    'false': ExprKind.BOOL,
    'iota': ExprKind.IOTA,
    'nil': ExprKind.NIL,
}


class GoSyntaxBuilder:
    """
    Builds a ``SourceFile`` model from Go source code.

    Only top-level declarations are modelled. For each one the builder keeps
    the comment group that ends on the line directly above it, mirroring how
    the Go parser attaches doc comments.
    """

    def __init__(self, ast_handler: Optional[ASTHandler] = None):
        self.ast_handler = ast_handler or ASTHandler('go')

    def build(self, path: str, code: str) -> SourceFile:
        """
        Parse ``code`` and convert it into a ``SourceFile``.

        Args:
            path: Path of the file, used for naming and diagnostics
            code: Go source code

        Returns:
            The declaration model of the file
        """
        root, code_bytes = self.ast_handler.parse(code)
        package = ''
        declarations: List[Declaration] = []
        pending: List[Node] = []
        previous_end_row = -1

        for child in root.children:
            if not child.is_named:
                continue
            if child.type == 'comment':
                if child.start_point[0] == previous_end_row:
                    # trailing comment of the previous declaration
                    continue
                if pending and pending[-1].end_point[0] + 1 < child.start_point[0]:
                    pending = []
                pending.append(child)
                continue

            doc: List[str] = []
            if pending and pending[-1].end_point[0] + 1 == child.start_point[0]:
                doc = [self.ast_handler.get_node_text(c, code_bytes) for c in pending]
            pending = []
            previous_end_row = child.end_point[0]

            if child.type == 'package_clause':
                package = self._package_name(child, code_bytes)
                continue
            if child.type == 'ERROR':
                logger.warning(f"{path}:{child.start_point[0] + 1}: skipping unparsable source")
                continue
            declaration = self._build_declaration(child, doc, code_bytes)
            if declaration is not None:
                declarations.append(declaration)

        if root.has_error:
            logger.warning(f"{path}: syntax errors found, continuing with the recoverable declarations")
        logger.debug(f"Built {len(declarations)} declarations for {path} (package {package!r})")
        return SourceFile(
            path=path,
            name=os.path.basename(path),
            package=package,
            declarations=declarations,
            has_errors=root.has_error,
        )

    def _package_name(self, node: Node, code_bytes: bytes) -> str:
        for child in self.ast_handler.named_children(node):
            if child.type in ('package_identifier', 'identifier'):
                return self.ast_handler.get_node_text(child, code_bytes)
        return ''

    def _build_declaration(self, node: Node, doc: List[str], code_bytes: bytes) -> Optional[Declaration]:
        kind = DECLARATION_KINDS.get(node.type)
        if kind is None:
            logger.debug(f"Ignoring top-level node of type {node.type}")
            return None
        line = self.ast_handler.get_node_range(node)[0]
        declaration = Declaration(kind=kind, line=line, doc=doc)

        if kind == DeclarationKind.CONST:
            declaration.value_specs = self._build_const_specs(node, code_bytes)
        elif kind == DeclarationKind.VAR:
            declaration.value_specs = [
                self._build_value_spec(spec, code_bytes)
                for spec in self.ast_handler.collect_descendants(node, ('var_spec',))
            ]
        elif kind == DeclarationKind.TYPE:
            declaration.type_specs = self._build_type_specs(node, code_bytes)
        elif kind in (DeclarationKind.FUNCTION, DeclarationKind.METHOD):
            name_node = self.ast_handler.find_child_by_field_name(node, 'name')
            if name_node is not None:
                declaration.name = self.ast_handler.get_node_text(name_node, code_bytes)
        return declaration

    def _build_const_specs(self, node: Node, code_bytes: bytes) -> List[ValueSpec]:
        specs = []
        last_type: Optional[TypeExpr] = None
        last_values: List[Expr] = []
        for iota, spec_node in enumerate(self.ast_handler.collect_descendants(node, ('const_spec',))):
            spec = self._build_value_spec(spec_node, code_bytes)
            spec.iota = iota
            if spec.values:
                last_type, last_values = spec.type, spec.values
            spec.effective_type = spec.type if spec.values else last_type
            spec.effective_values = spec.values if spec.values else last_values
            specs.append(spec)
        return specs

    def _build_value_spec(self, node: Node, code_bytes: bytes) -> ValueSpec:
        names = [
            self.ast_handler.get_node_text(n, code_bytes)
            for n in self.ast_handler.find_children_by_field_name(node, 'name', 'identifier')
        ]
        type_node = self.ast_handler.find_child_by_field_name(node, 'type')
        value_node = self.ast_handler.find_child_by_field_name(node, 'value')
        values: List[Expr] = []
        if value_node is not None:
            if value_node.type == 'expression_list':
                values = [self.build_expr(v, code_bytes) for v in self.ast_handler.named_children(value_node)]
            else:
                values = [self.build_expr(value_node, code_bytes)]
        spec = ValueSpec(
            names=names,
            type=self.build_type(type_node, code_bytes) if type_node is not None else None,
            values=values,
            line=self.ast_handler.get_node_range(node)[0],
        )
        spec.effective_type = spec.type
        spec.effective_values = spec.values
        return spec

    def _build_type_specs(self, node: Node, code_bytes: bytes) -> List[TypeSpec]:
        specs = []
        for spec_node in self.ast_handler.collect_descendants(node, ('type_spec', 'type_alias')):
            name_node = self.ast_handler.find_child_by_field_name(spec_node, 'name')
            type_node = self.ast_handler.find_child_by_field_name(spec_node, 'type')
            if name_node is None or type_node is None:
                logger.warning(f"Incomplete type spec at line {spec_node.start_point[0] + 1}")
                continue
            specs.append(TypeSpec(
                name=self.ast_handler.get_node_text(name_node, code_bytes),
                type=self.build_type(type_node, code_bytes),
                alias=spec_node.type == 'type_alias',
                line=self.ast_handler.get_node_range(spec_node)[0],
            ))
        return specs

    def build_type(self, node: Node, code_bytes: bytes) -> TypeExpr:
        """Convert a type node into a ``TypeExpr``."""
        text = self.ast_handler.get_node_text(node, code_bytes)
        if node.type == 'type_identifier':
            return TypeExpr(kind=TypeExprKind.NAME, text=text, name=text)
        if node.type == 'qualified_type':
            package_node = self.ast_handler.find_child_by_field_name(node, 'package')
            name_node = self.ast_handler.find_child_by_field_name(node, 'name')
            return TypeExpr(
                kind=TypeExprKind.QUALIFIED,
                text=text,
                package=self.ast_handler.get_node_text(package_node, code_bytes) if package_node else None,
                name=self.ast_handler.get_node_text(name_node, code_bytes) if name_node else None,
            )
        if node.type == 'pointer_type':
            inner = self.ast_handler.named_children(node)
            elem = self.build_type(inner[0], code_bytes) if inner else None
            return TypeExpr(kind=TypeExprKind.POINTER, text=text, elem=elem)
        if node.type == 'struct_type':
            return TypeExpr(kind=TypeExprKind.STRUCT, text=text)
        if node.type == 'parenthesized_type':
            inner = self.ast_handler.named_children(node)
            if inner:
                return self.build_type(inner[0], code_bytes)
        return TypeExpr(kind=TypeExprKind.OTHER, text=text)

    def build_expr(self, node: Node, code_bytes: bytes) -> Expr:
        """Convert an expression node into an ``Expr``."""
        text = self.ast_handler.get_node_text(node, code_bytes)
        node_type = node.type

        if node_type in LITERAL_KINDS:
            return Expr(kind=LITERAL_KINDS[node_type], text=text)
        if node_type in KEYWORD_KINDS:
            return Expr(kind=KEYWORD_KINDS[node_type], text=text, name=text)
        if node_type == 'identifier':
            return Expr(kind=ExprKind.IDENTIFIER, text=text, name=text)
        if node_type == 'selector_expression':
            operand, field = self._fields(node, 'operand', 'field')
            return Expr(
                kind=ExprKind.SELECTOR,
                text=text,
                name=self.ast_handler.get_node_text(field, code_bytes) if field else None,
                operands=[self.build_expr(operand, code_bytes)] if operand else [],
            )
        if node_type == 'parenthesized_expression':
            inner = self.ast_handler.named_children(node)
            return Expr(kind=ExprKind.PAREN, text=text,
                        operands=[self.build_expr(inner[0], code_bytes)] if inner else [])
        if node_type == 'unary_expression':
            operator, operand = self._fields(node, 'operator', 'operand')
            return Expr(
                kind=ExprKind.UNARY,
                text=text,
                operator=self.ast_handler.get_node_text(operator, code_bytes) if operator else None,
                operands=[self.build_expr(operand, code_bytes)] if operand else [],
            )
        if node_type == 'binary_expression':
            left, right = self._fields(node, 'left', 'right')
            operator = self.ast_handler.find_child_by_field_name(node, 'operator')
            if left is None or right is None:
                return Expr(kind=ExprKind.OTHER, text=text)
            return Expr(
                kind=ExprKind.BINARY,
                text=text,
                operator=self.ast_handler.get_node_text(operator, code_bytes) if operator else None,
                operands=[self.build_expr(left, code_bytes), self.build_expr(right, code_bytes)],
            )
        if node_type == 'call_expression':
            function, arguments = self._fields(node, 'function', 'arguments')
            args = self.ast_handler.named_children(arguments) if arguments is not None else []
            return Expr(
                kind=ExprKind.CALL,
                text=text,
                function=self.build_expr(function, code_bytes) if function else None,
                operands=[self.build_expr(a, code_bytes) for a in args],
            )
        if node_type == 'type_conversion_expression':
            type_node, operand = self._fields(node, 'type', 'operand')
            return Expr(
                kind=ExprKind.CONVERSION,
                text=text,
                type=self.build_type(type_node, code_bytes) if type_node else None,
                operands=[self.build_expr(operand, code_bytes)] if operand else [],
            )
        return Expr(kind=ExprKind.OTHER, text=text)

    def _fields(self, node: Node, *names: str) -> Tuple[Optional[Node], ...]:
        return tuple(self.ast_handler.find_child_by_field_name(node, name) for name in names)
