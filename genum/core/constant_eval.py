"""
Evaluation of Go constant declarations.

This is the precise tier of value extraction: it computes the value and the
type of a constant the way the Go type checker would for the expressions
that commonly appear in enum declarations. Whenever an expression falls
outside that subset the result is ``None`` and callers fall back to purely
syntactic extraction.
"""
import logging
import math
from typing import Dict, Optional, Set, Tuple, Union

from genum.core.scope import PackageScope
from genum.core.type_resolver import (
    COMPLEX_TYPES,
    FLOAT_TYPES,
    INTEGER_TYPES,
    TypeRef,
    TypeResolver,
)
from genum.models.enums import ExprKind
from genum.models.syntax import Expr, ValueSpec

logger = logging.getLogger(__name__)

ConstValue = Union[bool, int, float, complex, str]

COMPARISON_OPERATORS = frozenset({'==', '!=', '<', '<=', '>', '>='})
SHIFT_OPERATORS = frozenset({'<<', '>>'})
# largest left shift evaluated; Go rejects wider constants anyway
MAX_SHIFT = 512
UNSIGNED_BITS = {
    'uint8': 8, 'byte': 8, 'uint16': 16, 'uint32': 32,
    'uint64': 64, 'uint': 64, 'uintptr': 64,
}

SIMPLE_ESCAPES = {
    'a': '\a', 'b': '\b', 'f': '\f', 'n': '\n', 'r': '\r',
    't': '\t', 'v': '\v', '\\': '\\', "'": "'", '"': '"',
}


def unescape_go(body: str) -> str:
    """
    Decode the escape sequences of an interpreted Go string or rune literal.

    ``\\x`` and octal escapes denote single bytes, so the result is assembled
    as UTF-8 and decoded at the end.
    """
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != '\\' or i + 1 >= len(body):
            out += ch.encode('utf8')
            i += 1
            continue
        esc = body[i + 1]
        if esc in SIMPLE_ESCAPES:
            out += SIMPLE_ESCAPES[esc].encode('utf8')
            i += 2
        elif esc == 'x':
            out.append(int(body[i + 2:i + 4], 16))
            i += 4
        elif esc == 'u':
            out += chr(int(body[i + 2:i + 6], 16)).encode('utf8', 'surrogatepass')
            i += 6
        elif esc == 'U':
            out += chr(int(body[i + 2:i + 10], 16)).encode('utf8', 'surrogatepass')
            i += 10
        elif esc in '01234567':
            out.append(int(body[i + 1:i + 4], 8) & 0xFF)
            i += 4
        else:
            raise ValueError(f"unknown escape sequence \\{esc}")
    return out.decode('utf8', 'replace')


def parse_int_literal(text: str) -> int:
    digits = text.replace('_', '')
    if len(digits) > 1 and digits[0] == '0' and digits[1].isdigit():
        return int(digits, 8)
    return int(digits, 0)


def parse_float_literal(text: str) -> float:
    digits = text.replace('_', '')
    if digits[:2].lower() == '0x':
        return float.fromhex(digits)
    return float(digits)


def parse_literal(expr: Expr) -> Optional[ConstValue]:
    """Value of a literal expression, or None if it cannot be decoded."""
    text = expr.text
    try:
        if expr.kind == ExprKind.INT:
            return parse_int_literal(text)
        if expr.kind == ExprKind.FLOAT:
            return parse_float_literal(text)
        if expr.kind == ExprKind.IMAGINARY:
            body = text[:-1]
            try:
                return complex(0, parse_int_literal(body))
            except ValueError:
                return complex(0, parse_float_literal(body))
        if expr.kind == ExprKind.RUNE:
            body = text[1:-1]
            byte_value = _byte_escape(body)
            if byte_value is not None:
                return byte_value
            decoded = unescape_go(body)
            return ord(decoded) if len(decoded) == 1 else None
        if expr.kind == ExprKind.STRING:
            return unescape_go(text[1:-1])
        if expr.kind == ExprKind.RAW_STRING:
            return text[1:-1].replace('\r', '')
    except ValueError as e:
        logger.debug(f"Cannot decode literal {text!r}: {e}")
    return None


def _byte_escape(body: str) -> Optional[int]:
    """Value of a rune body made of one ``\\x`` or octal escape; those denote a byte, not UTF-8."""
    if len(body) != 4 or body[0] != '\\':
        return None
    if body[1] == 'x':
        return int(body[2:], 16)
    if body[1] in '01234567':
        return int(body[1:], 8) & 0xFF
    return None


def render_value(value: ConstValue) -> str:
    """Textual form of a constant value, strings unquoted."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, complex):
        return f"({_format_float(value.real)} + {_format_float(value.imag)}i)"
    return value


def value_key(value: ConstValue) -> str:
    """Exact identity of a constant value, unlike its rounded rendering."""
    return f"{type(value).__name__}:{value!r}"


def _format_float(value: float) -> str:
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    text = format(value, '.6g')
    if '.' not in text:
        text = repr(value)
    return text


class ConstantEvaluator:
    """
    Computes values and types of package-level constants.

    Results are memoised per spec and name index; reference cycles are
    detected and evaluate to ``None``.
    """

    def __init__(self, scope: PackageScope, resolver: Optional[TypeResolver] = None):
        self.scope = scope
        self.resolver = resolver or TypeResolver(scope)
        self._values: Dict[Tuple[int, int], Optional[ConstValue]] = {}
        self._types: Dict[Tuple[int, int], Optional[TypeRef]] = {}
        self._in_progress: Set[Tuple[str, int, int]] = set()

    # ----- types -----

    def type_of(self, spec: ValueSpec, index: int) -> Optional[TypeRef]:
        """
        Type identity of the ``index``-th constant of ``spec``.

        Returns None for untyped constants and for types that cannot be
        resolved.
        """
        key = (id(spec), index)
        if key in self._types:
            return self._types[key]
        if spec.effective_type is not None:
            result = self.resolver.resolve(spec.effective_type)
        else:
            expr = spec.effective_value_at(index)
            guard = ('type', id(spec), index)
            if expr is None or guard in self._in_progress:
                return None
            self._in_progress.add(guard)
            try:
                result = self._expr_type(expr)
            finally:
                self._in_progress.discard(guard)
        self._types[key] = result
        return result

    def _expr_type(self, expr: Expr) -> Optional[TypeRef]:
        if expr.kind == ExprKind.IDENTIFIER:
            symbol = self.scope.lookup(expr.name)
            if symbol is not None and symbol.is_const:
                return self.type_of(symbol.spec, symbol.index)
            return None
        if expr.kind == ExprKind.CALL:
            callee = self._unwrap(expr.function)
            if callee is None or callee.kind != ExprKind.IDENTIFIER:
                return None
            if callee.name == 'len' and 'len' not in self.scope:
                return TypeRef('basic', 'int')
            return self.resolver.resolve_name(callee.name)
        if expr.kind == ExprKind.CONVERSION:
            return self.resolver.resolve(expr.type)
        if expr.kind in (ExprKind.PAREN, ExprKind.UNARY):
            operand = expr.first_operand
            return self._expr_type(operand) if operand is not None else None
        if expr.kind == ExprKind.BINARY:
            if expr.operator in COMPARISON_OPERATORS:
                return None
            left, right = expr.operands
            left_type = self._expr_type(left)
            if expr.operator in SHIFT_OPERATORS:
                return left_type
            return left_type if left_type is not None else self._expr_type(right)
        return None

    # ----- values -----

    def evaluate(self, spec: ValueSpec, index: int) -> Optional[ConstValue]:
        """Value of the ``index``-th constant of ``spec``, or None if unknown."""
        key = (id(spec), index)
        if key in self._values:
            return self._values[key]
        expr = spec.effective_value_at(index)
        guard = ('value', id(spec), index)
        if expr is None or guard in self._in_progress:
            return None
        self._in_progress.add(guard)
        try:
            value = self._eval(expr, spec.iota)
            if value is not None and spec.effective_type is not None:
                value = self._convert(value, self.resolver.resolve(spec.effective_type))
        finally:
            self._in_progress.discard(guard)
        self._values[key] = value
        return value

    def render(self, spec: ValueSpec, index: int) -> Optional[str]:
        value = self.evaluate(spec, index)
        return render_value(value) if value is not None else None

    def _eval(self, expr: Expr, iota: int) -> Optional[ConstValue]:
        if expr.kind.is_literal:
            return parse_literal(expr)
        if expr.kind == ExprKind.BOOL:
            return expr.name == 'true'
        if expr.kind == ExprKind.IOTA:
            return iota if 'iota' not in self.scope else self._eval_identifier('iota', iota)
        if expr.kind == ExprKind.IDENTIFIER:
            return self._eval_identifier(expr.name, iota)
        if expr.kind == ExprKind.PAREN:
            operand = expr.first_operand
            return self._eval(operand, iota) if operand is not None else None
        if expr.kind == ExprKind.UNARY:
            return self._eval_unary(expr, iota)
        if expr.kind == ExprKind.BINARY:
            return self._eval_binary(expr, iota)
        if expr.kind == ExprKind.CALL:
            return self._eval_call(expr, iota)
        if expr.kind == ExprKind.CONVERSION:
            operand = expr.first_operand
            if operand is None:
                return None
            return self._convert(self._eval(operand, iota), self.resolver.resolve(expr.type))
        return None

    def _eval_identifier(self, name: str, iota: int) -> Optional[ConstValue]:
        symbol = self.scope.lookup(name)
        if symbol is not None:
            if symbol.is_const:
                return self.evaluate(symbol.spec, symbol.index)
            return None
        if name in ('true', 'false'):
            return name == 'true'
        if name == 'iota':
            return iota
        return None

    def _eval_unary(self, expr: Expr, iota: int) -> Optional[ConstValue]:
        operand = expr.first_operand
        value = self._eval(operand, iota) if operand is not None else None
        if value is None:
            return None
        op = expr.operator
        if op == '!':
            return (not value) if isinstance(value, bool) else None
        if isinstance(value, (bool, str)):
            return None
        if op == '-':
            return -value
        if op == '+':
            return value
        if op == '^' and isinstance(value, int):
            basic = self.resolver.basic_of(self._expr_type(expr))
            bits = UNSIGNED_BITS.get(basic)
            return (~value) & ((1 << bits) - 1) if bits else ~value
        return None

    def _eval_binary(self, expr: Expr, iota: int) -> Optional[ConstValue]:
        left = self._eval(expr.operands[0], iota)
        right = self._eval(expr.operands[1], iota)
        if left is None or right is None:
            return None
        op = expr.operator
        try:
            if op in ('&&', '||'):
                if isinstance(left, bool) and isinstance(right, bool):
                    return (left and right) if op == '&&' else (left or right)
                return None
            if op in COMPARISON_OPERATORS:
                return _compare(op, left, right)
            if isinstance(left, bool) or isinstance(right, bool):
                return None
            if isinstance(left, str) or isinstance(right, str):
                if op == '+' and isinstance(left, str) and isinstance(right, str):
                    return left + right
                return None
            if op in SHIFT_OPERATORS or op in ('&', '|', '^', '&^', '%'):
                if not (isinstance(left, int) and isinstance(right, int)):
                    return None
                if op == '<<':
                    return left << right if 0 <= right <= MAX_SHIFT else None
                if op == '>>':
                    return left >> right if right >= 0 else None
                if op == '&':
                    return left & right
                if op == '|':
                    return left | right
                if op == '^':
                    return left ^ right
                if op == '&^':
                    return left & ~right
                return _truncated_mod(left, right)
            if op == '+':
                return left + right
            if op == '-':
                return left - right
            if op == '*':
                return left * right
            if op == '/':
                if isinstance(left, int) and isinstance(right, int):
                    return _truncated_div(left, right)
                return left / right
        except (ZeroDivisionError, OverflowError) as e:
            logger.debug(f"Cannot evaluate {expr.text!r}: {e}")
        return None

    def _eval_call(self, expr: Expr, iota: int) -> Optional[ConstValue]:
        callee = self._unwrap(expr.function)
        if callee is None or callee.kind != ExprKind.IDENTIFIER or len(expr.operands) != 1:
            return None
        argument = self._eval(expr.operands[0], iota)
        if callee.name == 'len' and 'len' not in self.scope:
            return len(argument.encode('utf8')) if isinstance(argument, str) else None
        target = self.resolver.resolve_name(callee.name)
        if target is None:
            return None
        return self._convert(argument, target)

    def _convert(self, value: Optional[ConstValue], target: Optional[TypeRef]) -> Optional[ConstValue]:
        """Apply a constant conversion to the predeclared type underlying ``target``."""
        if value is None or target is None:
            return None
        basic = self.resolver.basic_of(target)
        if basic is None:
            return None
        if basic == 'bool':
            return value if isinstance(value, bool) else None
        if isinstance(value, bool):
            return None
        if basic == 'string':
            if isinstance(value, str):
                return value
            if isinstance(value, int):
                if 0 <= value <= 0x10FFFF and not 0xD800 <= value <= 0xDFFF:
                    return chr(value)
                return '\ufffd'
            return None
        if isinstance(value, str):
            return None
        if basic in INTEGER_TYPES:
            if isinstance(value, complex):
                if value.imag != 0:
                    return None
                value = value.real
            if isinstance(value, float):
                return int(value) if math.isfinite(value) and value == int(value) else None
            return value
        if basic in FLOAT_TYPES:
            if isinstance(value, complex):
                return value.real if value.imag == 0 else None
            return float(value)
        if basic in COMPLEX_TYPES:
            return complex(value)
        return None

    @staticmethod
    def _unwrap(expr: Optional[Expr]) -> Optional[Expr]:
        while expr is not None and expr.kind == ExprKind.PAREN:
            expr = expr.first_operand
        return expr


def _compare(op: str, left: ConstValue, right: ConstValue) -> Optional[bool]:
    if isinstance(left, str) != isinstance(right, str):
        return None
    if isinstance(left, complex) or isinstance(right, complex):
        if op not in ('==', '!='):
            return None
    if op == '==':
        return left == right
    if op == '!=':
        return left != right
    if op == '<':
        return left < right
    if op == '<=':
        return left <= right
    if op == '>':
        return left > right
    return left >= right


def _truncated_div(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return quotient if (left >= 0) == (right >= 0) else -quotient


def _truncated_mod(left: int, right: int) -> int:
    return left - right * _truncated_div(left, right)
