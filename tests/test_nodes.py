"""Tests for AST node string representations."""

import pytest

from logo_interpreter.ast import getASTfromString
from logo_interpreter.ast.nodes import (
    Identifier,
    NumberLiteral,
    BooleanLiteral,
    VariableRef,
    QueryOp,
    UnaryMinusOp,
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
    Block,
    Program,
    Command,
    Assignment,
    AddAssignment,
    IfStatement,
    WhileStatement,
    RepeatStatement,
)
from logo_interpreter.position import Position


def _pos(line=1, column=1):
    """Helper to create a Position for testing."""
    return Position(origin="<test>", line=line, column=column)


def _num(val):
    return NumberLiteral(val=val, position=_pos())


class TestExpressionStr:
    """Test the source form of expressions."""

    def test_number(self):
        assert str(_num(42.0)) == "42.0"

    @pytest.mark.parametrize("val", [float("inf"), float("-inf"), float("nan"), True])
    def test_number_must_be_finite(self, val):
        with pytest.raises(ValueError, match="finite number"):
            _num(val)

    def test_extreme_numbers_print_as_literals(self):
        assert str(_num(1.5e308)) == "1.5e+308"
        assert str(_num(-2.5e-7)) == "(-2.5e-07)"

    def test_booleans(self):
        assert str(BooleanLiteral(val=True, position=_pos())) == '"TRUE'
        assert str(BooleanLiteral(val=False, position=_pos())) == '"FALSE'

    def test_variable(self):
        assert str(VariableRef(name="SIZE", position=_pos())) == ":SIZE"

    def test_query(self):
        assert str(QueryOp(name="XCOR", position=_pos())) == "XCOR"

    def test_unary_minus(self):
        assert str(UnaryMinusOp(expr=_num(5.0), position=_pos())) == "(-5.0)"

    def test_identifier(self):
        ident = Identifier(name="X", position=_pos())
        assert str(ident) == "X"
        assert repr(ident) == "Identifier('X')"

    @pytest.mark.parametrize("op_class, symbol", [
        (AdditionOp, "+"),
        (SubtractionOp, "-"),
        (MultiplicationOp, "*"),
        (DivisionOp, "/"),
        (LessThanOp, "<"),
        (GreaterThanOp, ">"),
        (EqualityOp, "="),
        (InequalityOp, "<>"),
    ])
    def test_binary_operators(self, op_class, symbol):
        node = op_class(left=_num(1.0), right=_num(2.0), position=_pos())
        assert str(node) == f"(1.0 {symbol} 2.0)"

    def test_logical_operators(self):
        t = BooleanLiteral(val=True, position=_pos())
        f = BooleanLiteral(val=False, position=_pos())
        assert str(LogicalAndOp(left=t, right=f, position=_pos())) == '("TRUE AND "FALSE)'
        assert str(LogicalOrOp(left=t, right=f, position=_pos())) == '("TRUE OR "FALSE)'

    def test_nested_expression(self):
        inner = AdditionOp(left=_num(1.0), right=_num(2.0), position=_pos())
        outer = MultiplicationOp(left=inner, right=_num(3.0), position=_pos())
        assert str(outer) == "((1.0 + 2.0) * 3.0)"


class TestStatementStr:
    """Test the source form of statements."""

    def test_command(self):
        cmd = Command(name="SETPOS", arguments=[_num(1.0), _num(2.0)], position=_pos())
        assert str(cmd) == "SETPOS 1.0 2.0"

    def test_zero_argument_command(self):
        assert str(Command(name="PENUP", arguments=[], position=_pos())) == "PENUP"

    def test_assignment(self):
        stmt = Assignment(name=Identifier(name="X", position=_pos()), expr=_num(3.0), position=_pos())
        assert str(stmt) == 'MAKE "X 3.0'

    def test_addassign(self):
        stmt = AddAssignment(name=Identifier(name="X", position=_pos()), expr=_num(1.0), position=_pos())
        assert str(stmt) == 'ADDASSIGN "X 1.0'

    def test_empty_block(self):
        assert str(Block(statements=[], position=_pos())) == "[ ]"

    def test_control_statements(self):
        body = Block(statements=[Command(name="HOME", arguments=[], position=_pos())], position=_pos())
        cond = BooleanLiteral(val=True, position=_pos())
        assert str(IfStatement(condition=cond, body=body, position=_pos())) == 'IF "TRUE [ HOME ]'
        assert str(WhileStatement(condition=cond, body=body, position=_pos())) == 'WHILE "TRUE [ HOME ]'
        assert str(RepeatStatement(count=_num(2.0), body=body, position=_pos())) == "REPEAT 2.0 [ HOME ]"

    def test_program(self):
        program = Program(statements=[
            Command(name="PENUP", arguments=[], position=_pos()),
            Command(name="PENDOWN", arguments=[], position=_pos()),
        ], position=_pos())
        assert str(program) == "PENUP\nPENDOWN"


class TestCommandValidation:
    """Test that invalid commands cannot be constructed."""

    def test_unknown_command(self):
        with pytest.raises(ValueError, match="Unknown command"):
            Command(name="JUMP", arguments=[], position=_pos())

    def test_wrong_arity(self):
        with pytest.raises(ValueError, match="FORWARD takes 1"):
            Command(name="FORWARD", arguments=[], position=_pos())

    def test_arity_property(self):
        cmd = Command(name="SETPENRGB", arguments=[_num(0.0)] * 3, position=_pos())
        assert cmd.arity == 3


class TestPrintReparse:
    """Printing a parsed program and parsing it again gives the same program."""

    @pytest.mark.parametrize("code", [
        "REPEAT 4 [ FORWARD 50 RIGHT 90 ]",
        'MAKE "X 1 + 2 * 3 FORWARD :X',
        'MAKE "N 3 WHILE :N > 0 [ ADDASSIGN "N -1 IF :N = 1 AND "TRUE [ PENUP ] ]',
        "SETPOS 10 (-5) SETPENRGB 255 (128 / 2) 0",
        'IF XCOR < 1 OR HEADING = 0 [ SETHEADING -(45 - 90) ]',
        'IF :X <> 1.5e308 [ FORWARD 2.5e-7 SETHEADING "1e3 ]',
    ])
    def test_round_trip(self, code):
        first = getASTfromString(code)
        second = getASTfromString(str(first))
        assert str(second) == str(first)
        assert len(second.statements) == len(first.statements)
