from typing import Sequence

from arpeggio import NoMatch

from logo_interpreter import getLogoParser
from ..errors import ParseError
from ..lexer import Token, tokenize
from ..utils import logger

# Import all AST nodes from nodes
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
    Block,
    Program,
    Command,
    Assignment,
    AddAssignment,
    IfStatement,
    WhileStatement,
    RepeatStatement,
)

# Import ASTBuilderVisitor
from .builder import ASTBuilderVisitor, TokenPositions

# Import serialization functions
from .serialization import (
    ast_to_dict,
    ast_to_json,
    ast_from_dict,
    ast_from_json,
    ast_to_yaml,
    ast_from_yaml,
)


# Readable names for the grammar rules Arpeggio reports in NoMatch.
_EXPECTED_NAMES = {
    'EOF': 'end of input',
    'TOK_NUMBER': 'number',
    'TOK_WORD': 'quoted word',
    'TOK_VARIABLE': 'variable',
    'TOK_PAREN': "'('",
    'TOK_ENDPAREN': "')'",
    'TOK_BRACKET': "'['",
    'TOK_ENDBRACKET': "']'",
    'TOK_ADD': "'+'",
    'TOK_SUBTRACT': "'-'",
    'TOK_MULTIPLY': "'*'",
    'TOK_DIVIDE': "'/'",
    'TOK_LT': "'<'",
    'TOK_GT': "'>'",
    'TOK_EQUAL': "'='",
    'TOK_NOTEQUAL': "'<>'",
    'KWD_MAKE': 'MAKE',
    'KWD_ADDASSIGN': 'ADDASSIGN',
    'KWD_IF': 'IF',
    'KWD_WHILE': 'WHILE',
    'KWD_REPEAT': 'REPEAT',
    'KWD_AND': 'AND',
    'KWD_OR': 'OR',
    'command_name': 'command',
    'query': 'query',
}


def _describe_expected(e: NoMatch) -> str:
    rules = getattr(e, 'rules', None) or []
    names = set()
    for rule in rules:
        rule_name = getattr(rule, 'rule_name', '')
        names.add(_EXPECTED_NAMES.get(rule_name) or rule_name or str(rule))
    if not names:
        return "statement"
    return " or ".join(sorted(names))


def detokenize(tokens: Sequence[Token]) -> str:
    """Lay the token lexemes out at their original character offsets.

    Everything that is not a token (whitespace and comments) becomes a
    space, so offsets in the result match offsets in the original source.
    """
    if not tokens:
        return ""
    buf = [' '] * tokens[-1].end_offset
    for tok in tokens:
        start = tok.position.offset
        buf[start:start + len(tok.lexeme)] = tok.lexeme
    return "".join(buf)


def parse_ast(parser, tokens: Sequence[Token], origin: str = "<string>") -> Program:
    """Parse a token sequence and return the Program AST using ASTBuilderVisitor.

    Args:
        parser: An Arpeggio parser instance (from getLogoParser())
        tokens: The tokens of the program, as returned by tokenize()
        origin: Source name used for positions when there are no tokens

    Returns:
        The root Program node

    Raises:
        ParseError: If the tokens do not form a valid program
    """
    tokens = list(tokens)
    positions = TokenPositions(tokens, origin)
    text = detokenize(tokens)
    try:
        parse_tree = parser.parse(text)
    except NoMatch as e:
        # Arpeggio's NoMatch.position is a character offset into the text
        char_pos = e.position if isinstance(e.position, int) else 0
        found_token = positions.token_at(char_pos)
        found = repr(found_token.lexeme) if found_token is not None else "end of input"
        position = found_token.position if found_token is not None else positions.end
        raise ParseError(expected=_describe_expected(e), found=found, position=position) from None

    visitor = ASTBuilderVisitor(tokens, origin=origin)
    program = visitor.visit_parse_tree(parse_tree)
    logger.debug("parsed %d top level statements", len(program.statements))
    return program


def parse(tokens: Sequence[Token], origin: str = "<string>") -> Program:
    """Parse a token sequence into a Program.

    Args:
        tokens: The tokens of the program, as returned by tokenize()
        origin: Source name used for positions when there are no tokens

    Returns:
        The root Program node. An empty token sequence gives an empty Program.

    Raises:
        ParseError: If the tokens do not form a valid program
    """
    parser = getLogoParser(reduce_tree=False)
    return parse_ast(parser, tokens, origin=origin)


def getASTfromString(code: str, origin: str = "<string>") -> Program:
    """
    Tokenize and parse Logo source code from a string and return its AST.

    Args:
        code (str): The Logo source code to be parsed.
        origin (str): Origin identifier for source location tracking (default: "<string>").

    Returns:
        Program: The AST of the program.

    Raises:
        LexError: If the code contains a character that starts no token.
        ParseError: If the code is not a valid program.

    Example:
        ast = getASTfromString("REPEAT 4 [ FORWARD 50 RIGHT 90 ]")
    """
    return parse(tokenize(code, origin=origin), origin=origin)


# vim: set ts=4 sw=4 expandtab:
