"""
Tree-walking evaluator for unitcalc.

Walks the expression tree depth-first and produces a ``Number``. Unit
rules live in one place per operator: addition and subtraction need
matching dimensions, multiplication and division go through the
dimension table, and conversions round-trip through the base unit of a
dimension.

All arithmetic runs under the configured decimal context with guard
digits; the final value is rounded to the configured precision.

Author: xwest
"""

import decimal
import logging
from decimal import Decimal, localcontext
from typing import Callable, Dict

from ..config import CalcConfig, DEFAULT_CONFIG, decimal_context
from ..lexer.tokens import OpKind, PostfixKind, FunctionKind
from ..parser.ast_nodes import (
    ASTNode, ASTNodeType, ASTVisitor, Expression, Literal, Constant, BinaryOp, UnaryOp,
    Postfix, FunctionCall, Conversion, FootInch
)
from ..units import (
    Dimension, Unit, base_unit, combine, convert, finer_unit,
    plural_name, singular_name, to_base
)
from . import functions
from .number import Number
from .errors import (
    EvalError, IncompatibleUnitsError, DivisionByZeroError, InvalidExponentError,
    InvalidFactorialError, DomainError, ConversionError
)

logger = logging.getLogger(__name__)

INCHES_PER_FOOT = Decimal(12)

_POWER_DIMENSIONS = {2: Dimension.AREA, 3: Dimension.VOLUME}

# functions that keep their argument's unit
_UNIT_PRESERVING = {
    FunctionKind.ROUND: functions.round_half_up,
    FunctionKind.CEIL: functions.ceil,
    FunctionKind.FLOOR: functions.floor,
    FunctionKind.ABS: abs,
}

# functions defined on plain numbers only
_UNITLESS = {
    FunctionKind.SQRT: functions.sqrt,
    FunctionKind.CBRT: functions.cbrt,
    FunctionKind.LOG: functions.log10,
    FunctionKind.LN: functions.ln,
    FunctionKind.EXP: functions.exp,
    FunctionKind.SIN: functions.sin,
    FunctionKind.COS: functions.cos,
    FunctionKind.TAN: functions.tan,
}


def describe(number: Number) -> str:
    """Human-readable kind of a number for error messages."""
    if number.is_dimensionless:
        return "a plain number"
    return f"{plural_name(number.unit)} ({number.dimension})"


class Evaluator(ASTVisitor):
    """
    Evaluates expression trees.

    The evaluator holds no state between calls besides its configuration,
    so one instance can evaluate any number of trees.
    """

    def __init__(self, config: CalcConfig = DEFAULT_CONFIG):
        self.config = config
        self._handlers: Dict[ASTNodeType, Callable[[ASTNode], Number]] = {
            ASTNodeType.LITERAL: self._visit_literal,
            ASTNodeType.CONSTANT: self._visit_constant,
            ASTNodeType.BINARY_OP: self._visit_binary_op,
            ASTNodeType.UNARY_OP: self._visit_unary_op,
            ASTNodeType.POSTFIX: self._visit_postfix,
            ASTNodeType.FUNCTION_CALL: self._visit_function_call,
            ASTNodeType.CONVERSION: self._visit_conversion,
            ASTNodeType.FOOT_INCH: self._visit_foot_inch,
        }
        self._binary_handlers: Dict[OpKind, Callable[[BinaryOp, Number, Number], Number]] = {
            OpKind.ADD: self._add_subtract,
            OpKind.SUBTRACT: self._add_subtract,
            OpKind.MULTIPLY: self._multiply,
            OpKind.DIVIDE: self._divide,
            OpKind.MODULO: self._modulo,
            OpKind.POWER: self._power,
            OpKind.OF: self._of,
        }

    def evaluate(self, ast: Expression) -> Number:
        """
        Evaluate an expression tree.

        Args:
            ast: Root of the tree produced by the parser

        Returns:
            The result, rounded to the configured precision

        Raises:
            EvalError: If the expression has no value
        """
        with localcontext(decimal_context(self.config, working=True)):
            result = ast.accept(self)

        with localcontext(decimal_context(self.config)):
            value = +result.value

        return Number(value, result.unit)

    def visit(self, node: ASTNode) -> Number:
        handler = self._handlers.get(node.node_type)
        if handler is None:
            raise TypeError(f"Cannot evaluate node type {type(node).__name__}")

        try:
            return handler(node)
        except decimal.Overflow as e:
            raise DomainError("Result is too large to represent", node) from e
        except (decimal.InvalidOperation, decimal.DivisionByZero) as e:
            raise DomainError("Result is undefined", node) from e

    # ========================================================================
    # Leaves
    # ========================================================================

    def _visit_literal(self, node: Literal) -> Number:
        return Number(node.value, node.unit)

    def _visit_constant(self, node: Constant) -> Number:
        if node.name == "pi":
            return Number(functions.pi())
        return Number(functions.e())

    def _visit_foot_inch(self, node: FootInch) -> Number:
        feet = node.feet.accept(self).value
        inches = node.inches.accept(self).value
        return Number(feet * INCHES_PER_FOOT + inches, Unit.INCH)

    # ========================================================================
    # Unary, postfix and functions
    # ========================================================================

    def _visit_unary_op(self, node: UnaryOp) -> Number:
        operand = node.operand.accept(self)
        if node.operator == OpKind.SUBTRACT:
            return operand.with_value(-operand.value)
        return operand

    def _visit_postfix(self, node: Postfix) -> Number:
        operand = node.operand.accept(self)

        if node.kind == PostfixKind.PERCENT:
            return operand.with_value(operand.value / 100)

        if not operand.is_dimensionless:
            raise InvalidFactorialError(f"Factorial needs a plain number, got {describe(operand)}", node)
        if not functions.is_integral(operand.value):
            raise InvalidFactorialError(f"Factorial needs a whole number, got {operand.value}", node)
        if operand.value < 0:
            raise InvalidFactorialError(f"Factorial of a negative number ({operand.value}) is undefined", node)
        if operand.value > self.config.factorial_limit:
            raise InvalidFactorialError(
                f"Factorial argument {operand.value} exceeds the limit of {self.config.factorial_limit}",
                node
            )

        return Number(functions.factorial(int(operand.value)))

    def _visit_function_call(self, node: FunctionCall) -> Number:
        argument = node.argument.accept(self)

        if node.function in _UNIT_PRESERVING:
            return argument.with_value(_UNIT_PRESERVING[node.function](argument.value))

        if not argument.is_dimensionless:
            raise IncompatibleUnitsError(
                f"{node.function.value}() needs a plain number, got {describe(argument)}",
                node,
                help_text=f"Convert to a plain number first, e.g. divide by 1 {singular_name(argument.unit)}."
            )

        try:
            return Number(_UNITLESS[node.function](argument.value))
        except ValueError as e:
            raise DomainError(str(e), node) from e

    # ========================================================================
    # Conversion
    # ========================================================================

    def _visit_conversion(self, node: Conversion) -> Number:
        value = node.expression.accept(self)
        target = node.target

        if value.is_dimensionless:
            return Number(value.value, target)

        try:
            return Number(convert(value.value, value.unit, target), target)
        except ValueError as e:
            raise ConversionError(str(e), node) from e

    # ========================================================================
    # Binary operators
    # ========================================================================

    def _visit_binary_op(self, node: BinaryOp) -> Number:
        left = node.left.accept(self)
        right = node.right.accept(self)
        result = self._binary_handlers[node.operator](node, left, right)
        logger.debug("%s %s %s = %s", left, node.operator.value, right, result)
        return result

    def _align(self, left: Number, right: Number):
        """Express both operands in one unit; they must share a dimension."""
        if left.unit is right.unit:
            return left.value, right.value, left.unit
        unit = finer_unit(left.unit, right.unit)
        return convert(left.value, left.unit, unit), convert(right.value, right.unit, unit), unit

    def _add_subtract(self, node: BinaryOp, left: Number, right: Number) -> Number:
        adding = node.operator == OpKind.ADD
        if combine(left.dimension, node.operator, right.dimension) is None:
            if adding:
                message = f"Cannot add {describe(right)} to {describe(left)}"
            else:
                message = f"Cannot subtract {describe(right)} from {describe(left)}"
            raise IncompatibleUnitsError(message, node)

        a, b, unit = self._align(left, right)
        return Number(a + b if adding else a - b, unit)

    def _multiply(self, node: BinaryOp, left: Number, right: Number) -> Number:
        if right.is_dimensionless:
            return Number(left.value * right.value, left.unit)
        if left.is_dimensionless:
            return Number(left.value * right.value, right.unit)

        dimension = combine(left.dimension, node.operator, right.dimension)
        if dimension is None:
            raise IncompatibleUnitsError(f"Cannot multiply {describe(left)} by {describe(right)}", node)

        value = to_base(left.unit, left.value) * to_base(right.unit, right.value)
        return Number(value, base_unit(dimension))

    def _divide(self, node: BinaryOp, left: Number, right: Number) -> Number:
        if right.value == 0:
            raise DivisionByZeroError("Division by zero", node)

        if right.is_dimensionless:
            return Number(left.value / right.value, left.unit)

        dimension = combine(left.dimension, node.operator, right.dimension)
        if dimension is None:
            raise IncompatibleUnitsError(f"Cannot divide {describe(left)} by {describe(right)}", node)

        if dimension is Dimension.NO_UNIT:
            a, b, _ = self._align(left, right)
            if b == 0:
                raise DivisionByZeroError("Division by zero", node)
            return Number(a / b)

        value = to_base(left.unit, left.value) / to_base(right.unit, right.value)
        return Number(value, base_unit(dimension))

    def _modulo(self, node: BinaryOp, left: Number, right: Number) -> Number:
        if right.is_dimensionless:
            dividend, divisor, unit = left.value, right.value, left.unit
        elif combine(left.dimension, node.operator, right.dimension) is not None:
            dividend, divisor, unit = self._align(left, right)
        else:
            raise IncompatibleUnitsError(f"Cannot take {describe(left)} modulo {describe(right)}", node)

        if divisor == 0:
            raise DivisionByZeroError("Modulo by zero", node)

        # Decimal % truncates; floor it so the result takes the divisor's sign
        remainder = dividend % divisor
        if remainder != 0 and (remainder < 0) != (divisor < 0):
            remainder += divisor
        return Number(remainder, unit)

    def _power(self, node: BinaryOp, left: Number, right: Number) -> Number:
        if not right.is_dimensionless:
            raise InvalidExponentError(f"Exponent must be a plain number, got {describe(right)}", node)

        exponent = right.value
        if not functions.is_integral(exponent):
            raise InvalidExponentError(f"Exponent must be a whole number, got {exponent}", node)

        if left.is_dimensionless:
            if left.value == 0 and exponent < 0:
                raise DivisionByZeroError(f"Zero raised to a negative power ({exponent})", node)
            if left.value == 0 and exponent == 0:
                return Number(Decimal(1))
            return Number(left.value ** exponent)

        if exponent == 1:
            return left

        dimension = _POWER_DIMENSIONS.get(int(exponent)) if left.dimension is Dimension.LENGTH else None
        if dimension is None:
            raise InvalidExponentError(f"Cannot raise {describe(left)} to the power of {exponent}", node)

        return Number(to_base(left.unit, left.value) ** exponent, base_unit(dimension))

    def _of(self, node: BinaryOp, left: Number, right: Number) -> Number:
        if left.is_dimensionless:
            return Number(left.value * right.value, right.unit)

        if left.dimension is not right.dimension:
            raise IncompatibleUnitsError(f"Cannot take {describe(left)} of {describe(right)}", node)

        return Number(left.value * convert(right.value, right.unit, left.unit), left.unit)


def evaluate_ast(ast: Expression, config: CalcConfig = DEFAULT_CONFIG) -> Number:
    """
    Evaluate an expression tree with a fresh evaluator.

    Raises:
        EvalError: If the expression has no value
    """
    return Evaluator(config).evaluate(ast)


__all__ = ["Evaluator", "evaluate_ast", "describe", "EvalError"]
