"""Execution engine for Logo programs.

The Executor walks a Program depth-first in document order. Statements
change the Environment or drive the turtle; expressions evaluate to a float
or a bool. Line segments the turtle draws are forwarded to the drawing sink
as soon as they are produced, so a run that fails part way leaves the
segments drawn before the failure in the sink.

The first runtime error aborts the walk. Errors raised without a position
get the position of the innermost node being executed when they surface.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Union

from .ast.nodes import (
    ASTNode,
    Block,
    Program,
    Command,
    Assignment,
    AddAssignment,
    IfStatement,
    WhileStatement,
    RepeatStatement,
    Expression,
    Statement,
    NumberLiteral,
    BooleanLiteral,
    VariableRef,
    QueryOp,
    UnaryMinusOp,
    BinaryOp,
    AdditionOp,
    SubtractionOp,
    MultiplicationOp,
    DivisionOp,
    LessThanOp,
    GreaterThanOp,
    EqualityOp,
    InequalityOp,
    LogicalAndOp,
    LogicalOrOp,
)
from .drawing import DrawingSink
from .environment import Environment
from .errors import Diagnostic, LogoRuntimeError
from .turtle_state import (
    LineSegment,
    Turtle,
    TurtleError,
    TurtleOperations,
    palette_color,
    rgb_color,
)
from .utils import logger


Value = Union[float, bool]


@dataclass
class ExecutionConfig:
    """Settings supplied when a run starts.

    Attributes:
        width: Canvas width in pixels. Handed through to the caller; the
            turtle itself is not confined to the canvas.
        height: Canvas height in pixels.
        max_iterations: If set, the most iterations any single WHILE or
            REPEAT loop may run before the run fails.
    """
    width: int = 500
    height: int = 500
    max_iterations: Optional[int] = None

    def __post_init__(self):
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if self.max_iterations is not None:
            if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int) \
                    or self.max_iterations < 0:
                raise ValueError(
                    f"max_iterations must be a non-negative integer or None, got {self.max_iterations!r}"
                )


@dataclass
class RunResult:
    """The outcome of one program run.

    Attributes:
        turtle: The turtle in its final state (or its state when the run failed).
        environment: The variables in their final state.
        segments: The segments forwarded to the sink, in order.
        diagnostic: The first error, or None if the run succeeded.
    """
    turtle: TurtleOperations
    environment: Environment
    segments: list[LineSegment] = field(default_factory=list)
    diagnostic: Optional[Diagnostic] = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None


def _type_name(value: Value) -> str:
    return "boolean" if isinstance(value, bool) else "number"


class Executor:
    """Runs the statements of a Program against a turtle and an environment."""

    def __init__(
        self,
        turtle: TurtleOperations,
        environment: Environment,
        sink: DrawingSink,
        config: Optional[ExecutionConfig] = None,
    ):
        self.turtle = turtle
        self.environment = environment
        self.sink = sink
        self.config = config if config is not None else ExecutionConfig()
        self.segments: list[LineSegment] = []

    # --- Dispatch ---

    def run(self, program: Program) -> None:
        """Execute every top level statement of program.

        Raises:
            LogoRuntimeError: On the first runtime error.
        """
        self.execute_statements(program.statements)

    def execute_statements(self, statements: list[Statement]) -> None:
        for stmt in statements:
            self.execute(stmt)

    def execute(self, node: Statement) -> None:
        self._dispatch("exec", node)

    def evaluate(self, node: Expression) -> Value:
        return self._dispatch("eval", node)

    def _dispatch(self, prefix: str, node: ASTNode):
        method = getattr(self, f"{prefix}_{node.__class__.__name__}", None)
        if method is None:
            raise LogoRuntimeError(
                f"cannot {prefix} a {node.__class__.__name__} node",
                getattr(node, "position", None),
            )
        try:
            return method(node)
        except LogoRuntimeError as e:
            if e.position is None:
                e.position = node.position
            raise

    # --- Value checks ---

    def _number(self, value: Value, node: ASTNode, context: str) -> float:
        if isinstance(value, bool):
            raise LogoRuntimeError(f"{context} needs a number, got a boolean", node.position)
        if not math.isfinite(value):
            raise LogoRuntimeError(f"{context} needs a finite number, got {value}", node.position)
        return value

    def _boolean(self, value: Value, node: ASTNode, context: str) -> bool:
        if not isinstance(value, bool):
            raise LogoRuntimeError(f"{context} needs a boolean, got a number", node.position)
        return value

    def _check_iterations(self, count: int, node: ASTNode) -> None:
        limit = self.config.max_iterations
        if limit is not None and count > limit:
            raise LogoRuntimeError(f"loop exceeded {limit} iterations", node.position)

    # --- Statements ---

    def exec_Block(self, node: Block) -> None:
        self.execute_statements(node.statements)

    def exec_Assignment(self, node: Assignment) -> None:
        value = self._number(self.evaluate(node.expr), node.expr, "MAKE")
        self.environment.set(node.name.name, value)

    def exec_AddAssignment(self, node: AddAssignment) -> None:
        current = self.environment.get(node.name.name)
        amount = self._number(self.evaluate(node.expr), node.expr, "ADDASSIGN")
        self.environment.set(node.name.name, self._number(current + amount, node, "ADDASSIGN"))

    def exec_IfStatement(self, node: IfStatement) -> None:
        if self._boolean(self.evaluate(node.condition), node.condition, "IF"):
            self.execute(node.body)

    def exec_WhileStatement(self, node: WhileStatement) -> None:
        iterations = 0
        while self._boolean(self.evaluate(node.condition), node.condition, "WHILE"):
            iterations += 1
            self._check_iterations(iterations, node)
            self.execute(node.body)

    def exec_RepeatStatement(self, node: RepeatStatement) -> None:
        count = self._number(self.evaluate(node.count), node.count, "REPEAT")
        if count < 0 or not float(count).is_integer():
            raise LogoRuntimeError(
                f"REPEAT count must be a non-negative whole number, got {count}",
                node.count.position,
            )
        for i in range(int(count)):
            self._check_iterations(i + 1, node)
            self.execute(node.body)

    def exec_Command(self, node: Command) -> None:
        args = [
            self._number(self.evaluate(arg), arg, node.name)
            for arg in node.arguments
        ]
        handler = getattr(self, f"command_{node.name.lower()}")
        logger.debug("%s %s", node.name, " ".join(str(a) for a in args))
        try:
            segment = handler(*args)
        except TurtleError as e:
            raise LogoRuntimeError(str(e), node.position) from None
        if segment is not None:
            self._draw(segment, node)

    def _draw(self, segment: LineSegment, node: Command) -> None:
        try:
            self.sink.emit_segment(segment.start, segment.end, segment.color)
        except Exception as exc:
            raise LogoRuntimeError(f"drawing sink failed: {exc}", node.position) from exc
        self.segments.append(segment)

    # --- Commands ---
    # Each returns the LineSegment drawn, if any.

    def command_forward(self, distance):
        return self.turtle.move_forward(distance)

    def command_back(self, distance):
        return self.turtle.move_backward(distance)

    def command_right(self, degrees):
        self.turtle.turn(degrees)

    def command_left(self, degrees):
        self.turtle.turn(-degrees)

    # TURN is RIGHT under another name.
    command_turn = command_right

    def command_setheading(self, degrees):
        self.turtle.set_heading(degrees)

    def command_setx(self, x):
        return self.turtle.set_position(x, self.turtle.y)

    def command_sety(self, y):
        return self.turtle.set_position(self.turtle.x, y)

    def command_setpos(self, x, y):
        return self.turtle.set_position(x, y)

    def command_home(self):
        segment = self.turtle.set_position(0.0, 0.0)
        self.turtle.set_heading(0.0)
        return segment

    def command_penup(self):
        self.turtle.pen_up()

    def command_pendown(self):
        self.turtle.pen_down()

    def command_setpencolor(self, index):
        self.turtle.set_pen_color(palette_color(index))

    def command_setpenrgb(self, red, green, blue):
        self.turtle.set_pen_color(rgb_color(red, green, blue))

    # --- Expressions ---

    def eval_NumberLiteral(self, node: NumberLiteral) -> float:
        return node.val

    def eval_BooleanLiteral(self, node: BooleanLiteral) -> bool:
        return node.val

    def eval_VariableRef(self, node: VariableRef) -> float:
        return self.environment.get(node.name)

    def eval_QueryOp(self, node: QueryOp) -> float:
        if node.name == "XCOR":
            return self.turtle.x
        if node.name == "YCOR":
            return self.turtle.y
        if node.name == "HEADING":
            return self.turtle.heading
        # COLOR
        index = self.turtle.pen_color.index
        if index is None:
            raise LogoRuntimeError("COLOR has no palette index for a pen colour set with SETPENRGB",
                                   node.position)
        return float(index)

    def eval_UnaryMinusOp(self, node: UnaryMinusOp) -> float:
        return -self._number(self.evaluate(node.expr), node.expr, "'-'")

    def _numeric_operands(self, node: BinaryOp) -> tuple[float, float]:
        context = f"'{node.operator}'"
        left = self._number(self.evaluate(node.left), node.left, context)
        right = self._number(self.evaluate(node.right), node.right, context)
        return left, right

    def _boolean_operands(self, node: BinaryOp) -> tuple[bool, bool]:
        context = node.operator
        left = self._boolean(self.evaluate(node.left), node.left, context)
        right = self._boolean(self.evaluate(node.right), node.right, context)
        return left, right

    def eval_AdditionOp(self, node: AdditionOp) -> float:
        left, right = self._numeric_operands(node)
        return left + right

    def eval_SubtractionOp(self, node: SubtractionOp) -> float:
        left, right = self._numeric_operands(node)
        return left - right

    def eval_MultiplicationOp(self, node: MultiplicationOp) -> float:
        left, right = self._numeric_operands(node)
        return left * right

    def eval_DivisionOp(self, node: DivisionOp) -> float:
        left, right = self._numeric_operands(node)
        if right == 0:
            raise LogoRuntimeError("division by zero", node.position)
        return left / right

    def eval_LessThanOp(self, node: LessThanOp) -> bool:
        left, right = self._numeric_operands(node)
        return left < right

    def eval_GreaterThanOp(self, node: GreaterThanOp) -> bool:
        left, right = self._numeric_operands(node)
        return left > right

    def _comparable_operands(self, node: BinaryOp) -> tuple[Value, Value]:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        if isinstance(left, bool) != isinstance(right, bool):
            raise LogoRuntimeError(
                f"cannot compare a {_type_name(left)} with a {_type_name(right)}",
                node.position,
            )
        if not isinstance(left, bool):
            context = f"'{node.operator}'"
            left = self._number(left, node.left, context)
            right = self._number(right, node.right, context)
        return left, right

    def eval_EqualityOp(self, node: EqualityOp) -> bool:
        left, right = self._comparable_operands(node)
        return left == right

    def eval_InequalityOp(self, node: InequalityOp) -> bool:
        left, right = self._comparable_operands(node)
        return left != right

    def eval_LogicalAndOp(self, node: LogicalAndOp) -> bool:
        left, right = self._boolean_operands(node)
        return left and right

    def eval_LogicalOrOp(self, node: LogicalOrOp) -> bool:
        left, right = self._boolean_operands(node)
        return left or right


def execute(
    program: Program,
    turtle: Optional[TurtleOperations],
    environment: Optional[Environment],
    sink: DrawingSink,
    config: Optional[ExecutionConfig] = None,
) -> RunResult:
    """Run a parsed program to completion or to its first runtime error.

    Args:
        program: The Program to run.
        turtle: The turtle to drive, or None for a fresh Turtle.
        environment: The variable table to use, or None for an empty one.
        sink: Receives every segment drawn, in order.
        config: Execution settings (default: ExecutionConfig()).

    Returns:
        A RunResult. On failure its diagnostic describes the runtime error;
        no source excerpt is attached because the program text is not known
        here.
    """
    if turtle is None:
        turtle = Turtle()
    if environment is None:
        environment = Environment()
    executor = Executor(turtle, environment, sink, config)
    logger.debug("executing %d top level statements", len(program.statements))
    try:
        executor.run(program)
    except LogoRuntimeError as e:
        return RunResult(turtle=turtle, environment=environment,
                         segments=executor.segments, diagnostic=e.to_diagnostic())
    logger.debug("run finished, %d segments drawn", len(executor.segments))
    return RunResult(turtle=turtle, environment=environment, segments=executor.segments)


# vim: set ts=4 sw=4 expandtab:
