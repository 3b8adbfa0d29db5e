from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..keywords import COMMAND_ARITY

if TYPE_CHECKING:
    from ..position import Position


# --- AST nodes classes. ---

@dataclass
class ASTNode(object):
    """Base class for all AST nodes.

    All AST nodes in the Logo parser inherit from this class. It provides
    a common interface for source position tracking and string representation.
    The string form of every node is valid Logo source that parses back to an
    equivalent node.

    Attributes:
        position: The source position of this node in the original Logo code.
    """
    position: "Position"

    def __str__(self) -> str:
        """Return a string representation of the AST node."""
        raise NotImplementedError


@dataclass
class Expression(ASTNode):
    """Base class for all Logo expressions.

    Expressions are constructs that evaluate to a value, either a number or
    a boolean. They never change the turtle or the variables.
    """
    pass


@dataclass
class Identifier(ASTNode):
    """Represents a variable name as written after MAKE or ADDASSIGN.

    Example:
        MAKE "SIZE 10     // 'SIZE' is an Identifier

    Attributes:
        name: The variable name without its leading quote.
    """
    name: str

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"Identifier('{self.name}')"


@dataclass
class NumberLiteral(Expression):
    """Represents a numeric literal.

    Examples:
        42
        3.14
        1e3
        "42         // quoted word spelling a number

    Attributes:
        val: The numeric value as a float.
    """
    val: float

    def __post_init__(self):
        if isinstance(self.val, bool) or not math.isfinite(self.val):
            raise ValueError(f"Number literal must be a finite number, got {self.val!r}")

    def __str__(self):
        text = repr(float(self.val))
        # Literals never carry a sign in source, so print negatives as negation.
        if self.val < 0:
            return f"(-{text[1:]})"
        return text


@dataclass
class BooleanLiteral(Expression):
    """Represents "TRUE or "FALSE.

    Attributes:
        val: The boolean value (True or False).
    """
    val: bool

    def __str__(self):
        return '"TRUE' if self.val else '"FALSE'


@dataclass
class VariableRef(Expression):
    """Represents a read of a variable, written with a leading colon.

    Example:
        FORWARD :SIZE

    Attributes:
        name: The variable name without the colon.
    """
    name: str

    def __str__(self):
        return f":{self.name}"


@dataclass
class QueryOp(Expression):
    """Represents a query of the turtle state: XCOR, YCOR, HEADING or COLOR.

    Attributes:
        name: The query keyword.
    """
    name: str

    def __str__(self):
        return self.name


@dataclass
class UnaryMinusOp(Expression):
    """Represents arithmetic negation, e.g. -:X

    Attributes:
        expr: The negated expression.
    """
    expr: Expression

    def __str__(self):
        return f"(-{self.expr})"


@dataclass
class BinaryOp(Expression):
    """Base class for operators with a left and a right operand.

    Attributes:
        left: The left operand.
        right: The right operand.
    """
    left: Expression
    right: Expression

    operator = "?"

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class AdditionOp(BinaryOp):
    operator = "+"


@dataclass
class SubtractionOp(BinaryOp):
    operator = "-"


@dataclass
class MultiplicationOp(BinaryOp):
    operator = "*"


@dataclass
class DivisionOp(BinaryOp):
    operator = "/"


@dataclass
class LessThanOp(BinaryOp):
    operator = "<"


@dataclass
class GreaterThanOp(BinaryOp):
    operator = ">"


@dataclass
class EqualityOp(BinaryOp):
    """Equality of two numbers or of two booleans."""
    operator = "="


@dataclass
class InequalityOp(BinaryOp):
    """Inequality of two numbers or of two booleans."""
    operator = "<>"


@dataclass
class LogicalAndOp(BinaryOp):
    operator = "AND"


@dataclass
class LogicalOrOp(BinaryOp):
    operator = "OR"


@dataclass
class Statement(ASTNode):
    """Base class for everything that can appear in a program or block body."""
    pass


@dataclass
class Block(ASTNode):
    """Represents a bracketed sequence of statements.

    Example:
        [ FORWARD 10 RIGHT 90 ]

    Attributes:
        statements: The statements in source order.
    """
    statements: list[Statement]

    def __str__(self):
        if not self.statements:
            return "[ ]"
        return "[ " + " ".join(str(stmt) for stmt in self.statements) + " ]"


@dataclass
class Program(ASTNode):
    """The root of a parsed Logo program.

    Attributes:
        statements: The top level statements in source order.
    """
    statements: list[Statement]

    def __str__(self):
        return "\n".join(str(stmt) for stmt in self.statements)


@dataclass
class Command(Statement):
    """Represents a turtle command such as FORWARD 10 or SETPOS 0 :Y.

    The set of commands is closed, and every command takes a fixed number of
    arguments (see COMMAND_ARITY). A Command with an unknown name or the
    wrong number of arguments cannot be constructed.

    Attributes:
        name: The command keyword.
        arguments: One expression per parameter of the command.
    """
    name: str
    arguments: list[Expression]

    def __post_init__(self):
        if self.name not in COMMAND_ARITY:
            raise ValueError(f"Unknown command: {self.name}")
        arity = COMMAND_ARITY[self.name]
        if len(self.arguments) != arity:
            raise ValueError(
                f"{self.name} takes {arity} argument(s), got {len(self.arguments)}"
            )

    @property
    def arity(self) -> int:
        return COMMAND_ARITY[self.name]

    def __str__(self):
        return " ".join([self.name] + [str(arg) for arg in self.arguments])


@dataclass
class Assignment(Statement):
    """Represents MAKE "name expr, which creates or overwrites a variable.

    Attributes:
        name: The variable being assigned.
        expr: The value expression.
    """
    name: Identifier
    expr: Expression

    def __str__(self):
        return f'MAKE "{self.name} {self.expr}'


@dataclass
class AddAssignment(Statement):
    """Represents ADDASSIGN "name expr, which adds to an existing variable.

    Attributes:
        name: The variable being incremented.
        expr: The amount to add.
    """
    name: Identifier
    expr: Expression

    def __str__(self):
        return f'ADDASSIGN "{self.name} {self.expr}'


@dataclass
class IfStatement(Statement):
    """Represents IF condition [ body ]. There is no else branch.

    Attributes:
        condition: A boolean expression.
        body: Executed once when the condition is true.
    """
    condition: Expression
    body: Block

    def __str__(self):
        return f"IF {self.condition} {self.body}"


@dataclass
class WhileStatement(Statement):
    """Represents WHILE condition [ body ].

    Attributes:
        condition: A boolean expression, evaluated before each iteration.
        body: Executed while the condition is true.
    """
    condition: Expression
    body: Block

    def __str__(self):
        return f"WHILE {self.condition} {self.body}"


@dataclass
class RepeatStatement(Statement):
    """Represents REPEAT count [ body ].

    Attributes:
        count: A numeric expression, evaluated once before the first iteration.
        body: Executed count times.
    """
    count: Expression
    body: Block

    def __str__(self):
        return f"REPEAT {self.count} {self.body}"


# vim: set ts=4 sw=4 expandtab:
