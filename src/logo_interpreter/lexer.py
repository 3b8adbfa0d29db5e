"""Tokenizer for Logo source text.

The token grammar lives in grammar.py next to the language grammar; this
module runs it and turns the leaves of the resulting parse tree into Token
values. Whitespace and `//` comments never become tokens.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass

from arpeggio import NoMatch, Terminal

from logo_interpreter import getLogoLexer
from .errors import LexError
from .keywords import is_keyword
from .position import LineIndex, Position
from .utils import logger


class TokenKind(enum.Enum):
    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    NUMBER = "number"
    WORD = "word"
    VARIABLE = "variable"
    OPERATOR = "operator"
    DELIMITER = "delimiter"


@dataclass(frozen=True)
class Token:
    """A single lexeme of a Logo program.

    Attributes:
        kind: The category of the token.
        lexeme: The exact source text of the token.
        position: Where the token starts.
    """
    kind: TokenKind
    lexeme: str
    position: Position

    @property
    def end_offset(self) -> int:
        return self.position.offset + len(self.lexeme)

    def __str__(self):
        return self.lexeme


_RULE_KINDS = {
    'TOK_NUMBER': TokenKind.NUMBER,
    'TOK_WORD': TokenKind.WORD,
    'TOK_VARIABLE': TokenKind.VARIABLE,
    'TOK_NAME': TokenKind.IDENTIFIER,
    'TOK_OPERATOR': TokenKind.OPERATOR,
    'TOK_DELIMITER': TokenKind.DELIMITER,
}


def _terminals(node):
    if isinstance(node, Terminal):
        yield node
        return
    for child in node:
        yield from _terminals(child)


def tokenize(source: str, origin: str = "<string>") -> list[Token]:
    """Split Logo source text into tokens.

    Args:
        source: The complete program text.
        origin: Name used in token positions (a file name or "<string>").

    Returns:
        The tokens of the program in source order.

    Raises:
        LexError: If a character cannot start any token.
    """
    index = LineIndex(source, origin)
    lexer = getLogoLexer()
    try:
        parse_tree = lexer.parse(source)
    except NoMatch as e:
        char_pos = e.position if isinstance(e.position, int) else 0
        character = source[char_pos] if char_pos < len(source) else "end of input"
        raise LexError(character, index.position(char_pos)) from None

    tokens = []
    for terminal in _terminals(parse_tree):
        kind = _RULE_KINDS.get(terminal.rule_name)
        if kind is None:
            continue  # EOF
        lexeme = terminal.value
        if kind is TokenKind.IDENTIFIER and is_keyword(lexeme):
            kind = TokenKind.KEYWORD
        tokens.append(Token(kind=kind, lexeme=lexeme, position=index.position(terminal.position)))
    logger.debug("tokenized %s into %d tokens", origin, len(tokens))
    return tokens


# vim: set ts=4 sw=4 expandtab:
