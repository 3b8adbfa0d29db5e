from __future__ import annotations

import math
import re
from bisect import bisect_right
from typing import Sequence

from arpeggio import PTNodeVisitor, Terminal

from ..errors import ParseError
from ..grammar import NUMBER_PATTERN
from ..keywords import COMMAND_ARITY
from ..lexer import Token
from ..position import Position
from .nodes import (
    ASTNode,
    Expression,
    Statement,
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


_IDENTIFIER_RE = re.compile(r'[A-Za-z_][A-Za-z0-9_]*\Z')
_NUMBER_RE = re.compile(NUMBER_PATTERN + r"\Z")


def end_position(tokens: Sequence[Token], origin: str = "<string>") -> Position:
    """Return the position just past the last token."""
    if not tokens:
        return Position(origin=origin, line=1, column=1, offset=0)
    last = tokens[-1].position
    width = len(tokens[-1].lexeme)
    return Position(origin=last.origin, line=last.line, column=last.column + width,
                    offset=last.offset + width)


class TokenPositions:
    """Maps character offsets of the token text back to token positions."""

    def __init__(self, tokens: Sequence[Token], origin: str = "<string>"):
        self.tokens = list(tokens)
        self._offsets = [tok.position.offset for tok in self.tokens]
        self.end = end_position(self.tokens, origin)

    def token_at(self, offset: int) -> Token | None:
        """Return the token covering offset, or None past the last token."""
        idx = bisect_right(self._offsets, offset) - 1
        if idx < 0:
            return self.tokens[0] if self.tokens else None
        tok = self.tokens[idx]
        if offset < tok.end_offset:
            return tok
        if idx + 1 < len(self.tokens):
            return self.tokens[idx + 1]
        return None

    def position_at(self, offset: int) -> Position:
        tok = self.token_at(offset)
        return tok.position if tok is not None else self.end


class ASTBuilderVisitor(PTNodeVisitor):
    """
    Visits the parse tree generated by the PEG grammar in grammar.py and builds the AST defined in nodes.py.
    """

    def __init__(self, tokens: Sequence[Token], origin: str = "<string>"):
        """Initialize the visitor with the tokens the parse tree was built from.

        Args:
            tokens: The token sequence that was parsed (used for node positions)
            origin: Source name used when there are no tokens to take positions from
        """
        super().__init__()
        self.positions = TokenPositions(tokens, origin)

    def visit_parse_tree(self, parse_tree) -> Program:
        """Visit a parse tree and return the Program node.

        Args:
            parse_tree: The root node of an Arpeggio parse tree

        Returns:
            The Program AST node
        """
        return self._visit_node(parse_tree)

    def _visit_node(self, node):
        """Recursively visit a parse tree node and return AST.

        Children are visited first. Terminal nodes without a visit method are
        passed through as their matched text, so operator and keyword values
        show up in the parent's children list. NonTerminal nodes without a
        visit method are dissolved into their children, which are then
        spliced into the parent.
        """
        rule_name = node.rule_name
        visit_method = getattr(self, f"visit_{rule_name}", None) if rule_name else None

        if isinstance(node, Terminal):
            if visit_method:
                return visit_method(node, [])
            return node.value

        children = []
        for child in node:
            child_ast = self._visit_node(child)
            if child_ast is None:
                continue
            if isinstance(child_ast, list):
                children.extend(child_ast)
            else:
                children.append(child_ast)

        if visit_method:
            return visit_method(node, children)
        return children

    def _get_node_position(self, node) -> Position:
        """Return the position of the token an Arpeggio parse tree node starts at."""
        return self.positions.position_at(node.position)

    # --- Program structure ---

    def visit_logo_language(self, node, children):
        statements = [child for child in children if isinstance(child, Statement)]
        return Program(statements=statements, position=self._get_node_position(node))

    def visit_block(self, node, children):
        statements = [child for child in children if isinstance(child, Statement)]
        return Block(statements=statements, position=self._get_node_position(node))

    def visit_command(self, node, children):
        # command rule: (command_name, ZeroOrMore(expr))
        name = children[0]
        args = [child for child in children[1:] if isinstance(child, Expression)]
        arity = COMMAND_ARITY[name]
        if len(args) != arity:
            raise ParseError(
                expected=f"{arity} argument(s) for {name}",
                found=f"{len(args)}",
                position=self._get_node_position(node),
                message=f"{name} takes {arity} argument(s) but {len(args)} were given",
            )
        return Command(name=name, arguments=args, position=self._get_node_position(node))

    def visit_make_statement(self, node, children):
        name, expr = self._assignment_parts(children)
        return Assignment(name=name, expr=expr, position=self._get_node_position(node))

    def visit_addassign_statement(self, node, children):
        name, expr = self._assignment_parts(children)
        return AddAssignment(name=name, expr=expr, position=self._get_node_position(node))

    def _assignment_parts(self, children):
        name = next(child for child in children if isinstance(child, Identifier))
        expr = next(child for child in children if isinstance(child, Expression))
        return name, expr

    def visit_if_statement(self, node, children):
        condition, body = self._control_parts(children)
        return IfStatement(condition=condition, body=body, position=self._get_node_position(node))

    def visit_while_statement(self, node, children):
        condition, body = self._control_parts(children)
        return WhileStatement(condition=condition, body=body, position=self._get_node_position(node))

    def visit_repeat_statement(self, node, children):
        count, body = self._control_parts(children)
        return RepeatStatement(count=count, body=body, position=self._get_node_position(node))

    def _control_parts(self, children):
        expr = next(child for child in children if isinstance(child, Expression))
        body = next(child for child in children if isinstance(child, Block))
        return expr, body

    def visit_variable_name(self, node, children):
        # variable_name rule: (TOK_WORD,)
        name = children[-1].strip('"')
        if not _IDENTIFIER_RE.match(name):
            raise ParseError(
                expected="variable name",
                found=children[-1],
                position=self._get_node_position(node),
            )
        return Identifier(name=name, position=self._get_node_position(node))

    # --- Expressions ---

    def visit_expr(self, node, children):
        return children[0]

    def visit_paren_expr(self, node, children):
        # paren_expr rule: ('(', expr, ')')
        return next(child for child in children if isinstance(child, Expression))

    def _number_literal(self, text, lexeme, position) -> NumberLiteral:
        value = float(text)
        if not math.isfinite(value):
            raise ParseError(
                expected="finite number",
                found=lexeme,
                position=position,
                message=f"number {lexeme} is too large",
            )
        return NumberLiteral(val=value, position=position)

    def visit_TOK_NUMBER(self, node, children):
        return self._number_literal(node.value, node.value, self._get_node_position(node))

    def visit_TOK_VARIABLE(self, node, children):
        return VariableRef(name=node.value[1:], position=self._get_node_position(node))

    def visit_query(self, node, children):
        return QueryOp(name=node.value, position=self._get_node_position(node))

    def visit_word_literal(self, node, children):
        # word_literal rule: (TOK_WORD,)
        text = children[-1].strip('"')
        position = self._get_node_position(node)
        if text == "TRUE":
            return BooleanLiteral(val=True, position=position)
        if text == "FALSE":
            return BooleanLiteral(val=False, position=position)
        if not _NUMBER_RE.match(text):
            raise ParseError(
                expected='number or boolean word ("TRUE or "FALSE)',
                found=children[-1],
                position=position,
            )
        return self._number_literal(text, children[-1], position)

    def visit_prec_unary(self, node, children):
        # prec_unary rule: [('-', prec_unary), primary]
        if len(children) == 2:
            return UnaryMinusOp(expr=children[1], position=self._get_node_position(node))
        return children[0]

    def _left_associative(self, node, children, operators) -> ASTNode:
        # children alternate: operand, operator, operand, operator, ...
        result = children[0]
        for i in range(1, len(children) - 1, 2):
            op_class = operators[children[i]]
            result = op_class(left=result, right=children[i + 1], position=self._get_node_position(node))
        return result

    def visit_prec_logical_or(self, node, children):
        return self._left_associative(node, children, {'OR': LogicalOrOp})

    def visit_prec_logical_and(self, node, children):
        return self._left_associative(node, children, {'AND': LogicalAndOp})

    def visit_prec_comparison(self, node, children):
        return self._left_associative(node, children, {
            '<': LessThanOp,
            '>': GreaterThanOp,
            '=': EqualityOp,
            '<>': InequalityOp,
        })

    def visit_prec_addition(self, node, children):
        return self._left_associative(node, children, {
            '+': AdditionOp,
            '-': SubtractionOp,
        })

    def visit_prec_multiplication(self, node, children):
        return self._left_associative(node, children, {
            '*': MultiplicationOp,
            '/': DivisionOp,
        })


# vim: set ts=4 sw=4 expandtab:
