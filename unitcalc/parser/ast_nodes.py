"""
Abstract Syntax Tree node definitions for unitcalc.

Each node owns its children outright; there are no parent pointers and no
shared subtrees. ``str(node)`` renders a compact prefix form such as
``(+ 1 (* 2 [3 Meter]))`` that the calculator logs and the tests compare.

Author: xwest
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional, Any
from dataclasses import dataclass
from enum import Enum

from ..diagnostics import SourceLocation
from ..lexer.tokens import OpKind, PostfixKind, FunctionKind
from ..units import Unit


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""
    LITERAL = "Literal"
    CONSTANT = "Constant"
    BINARY_OP = "BinaryOp"
    UNARY_OP = "UnaryOp"
    POSTFIX = "Postfix"
    FUNCTION_CALL = "FunctionCall"
    CONVERSION = "Conversion"
    FOOT_INCH = "FootInch"


@dataclass(frozen=True)
class SourceSpan:
    """Represents a span of the input (start and end locations)."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        return f"{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"


class ASTVisitor(ABC):
    """Abstract visitor interface for traversing AST nodes."""

    @abstractmethod
    def visit(self, node: 'ASTNode') -> Any:
        pass


class ASTNode(ABC):
    """Base class for all AST nodes."""

    def __init__(self, node_type: ASTNodeType, span: SourceSpan):
        self.node_type = node_type
        self.span = span

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self}, span={self.span})"


class Expression(ASTNode):
    """Base class for expressions; every node in a calculator tree is one."""
    pass


# ============================================================================
# Leaves
# ============================================================================

class Literal(Expression):
    """A number, optionally carrying a unit ("3", "3 km", or a bare "km")."""
    value: Decimal
    unit: Optional[Unit]

    def __init__(self, value: Decimal, unit: Optional[Unit], span: SourceSpan):
        super().__init__(ASTNodeType.LITERAL, span)
        self.value = value
        self.unit = unit

    def children(self) -> List[ASTNode]:
        return []

    def __str__(self) -> str:
        if self.unit is None:
            return str(self.value)
        return f"[{self.value} {self.unit}]"


class Constant(Expression):
    """A named mathematical constant, computed at the evaluation precision."""
    name: str  # "pi" or "e"

    def __init__(self, name: str, span: SourceSpan):
        super().__init__(ASTNodeType.CONSTANT, span)
        self.name = name

    def children(self) -> List[ASTNode]:
        return []

    def __str__(self) -> str:
        return self.name


# ============================================================================
# Operators
# ============================================================================

class BinaryOp(Expression):
    """Binary operation expression."""
    left: Expression
    operator: OpKind
    right: Expression

    def __init__(self, left: Expression, operator: OpKind, right: Expression, span: SourceSpan):
        super().__init__(ASTNodeType.BINARY_OP, span)
        self.left = left
        self.operator = operator
        self.right = right

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]

    def __str__(self) -> str:
        return f"({self.operator.value} {self.left} {self.right})"


class UnaryOp(Expression):
    """Prefix + or -."""
    operator: OpKind
    operand: Expression

    def __init__(self, operator: OpKind, operand: Expression, span: SourceSpan):
        super().__init__(ASTNodeType.UNARY_OP, span)
        self.operator = operator
        self.operand = operand

    def children(self) -> List[ASTNode]:
        return [self.operand]

    def __str__(self) -> str:
        return f"({self.operator.value} {self.operand})"


class Postfix(Expression):
    """Factorial or percent applied to the preceding operand."""
    kind: PostfixKind
    operand: Expression

    def __init__(self, kind: PostfixKind, operand: Expression, span: SourceSpan):
        super().__init__(ASTNodeType.POSTFIX, span)
        self.kind = kind
        self.operand = operand

    def children(self) -> List[ASTNode]:
        return [self.operand]

    def __str__(self) -> str:
        return f"({self.kind.value} {self.operand})"


class FunctionCall(Expression):
    """Built-in function applied to a single argument."""
    function: FunctionKind
    argument: Expression

    def __init__(self, function: FunctionKind, argument: Expression, span: SourceSpan):
        super().__init__(ASTNodeType.FUNCTION_CALL, span)
        self.function = function
        self.argument = argument

    def children(self) -> List[ASTNode]:
        return [self.argument]

    def __str__(self) -> str:
        return f"({self.function.value} {self.argument})"


class Conversion(Expression):
    """``expression to unit``."""
    expression: Expression
    target: Unit

    def __init__(self, expression: Expression, target: Unit, span: SourceSpan):
        super().__init__(ASTNodeType.CONVERSION, span)
        self.expression = expression
        self.target = target

    def children(self) -> List[ASTNode]:
        return [self.expression]

    def __str__(self) -> str:
        return f"(to {self.expression} {self.target})"


class FootInch(Expression):
    """The 6'4" form; evaluates to a length in inches."""
    feet: Literal
    inches: Literal

    def __init__(self, feet: Literal, inches: Literal, span: SourceSpan):
        super().__init__(ASTNodeType.FOOT_INCH, span)
        self.feet = feet
        self.inches = inches

    def children(self) -> List[ASTNode]:
        return [self.feet, self.inches]

    def __str__(self) -> str:
        return f"(ft-in {self.feet} {self.inches})"
