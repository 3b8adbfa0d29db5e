"""Tests for the tokenizer."""

import pytest

from logo_interpreter.errors import LexError
from logo_interpreter.lexer import Token, TokenKind, tokenize


def _kinds(tokens):
    return [tok.kind for tok in tokens]


def _lexemes(tokens):
    return [tok.lexeme for tok in tokens]


class TestTokenKinds:
    """Test the category assigned to each lexeme."""

    def test_empty_source(self):
        assert tokenize("") == []

    def test_whitespace_only(self):
        assert tokenize("  \n\t \n") == []

    def test_command_and_number(self):
        tokens = tokenize("FORWARD 100")
        assert _kinds(tokens) == [TokenKind.KEYWORD, TokenKind.NUMBER]
        assert _lexemes(tokens) == ["FORWARD", "100"]

    def test_numbers(self):
        tokens = tokenize("1 2.5 .5 3. 1e3 2.5E-2")
        assert all(tok.kind is TokenKind.NUMBER for tok in tokens)
        assert _lexemes(tokens) == ["1", "2.5", ".5", "3.", "1e3", "2.5E-2"]

    def test_quoted_words(self):
        tokens = tokenize('MAKE "SIZE 10 MAKE "X" 5 "TRUE')
        words = [tok for tok in tokens if tok.kind is TokenKind.WORD]
        assert _lexemes(words) == ['"SIZE', '"X"', '"TRUE']

    def test_variable_reference(self):
        tokens = tokenize("FORWARD :SIZE")
        assert tokens[1].kind is TokenKind.VARIABLE
        assert tokens[1].lexeme == ":SIZE"

    def test_operators(self):
        tokens = tokenize("1 + 2 - 3 * 4 / 5 < 6 > 7 = 8")
        ops = [tok.lexeme for tok in tokens if tok.kind is TokenKind.OPERATOR]
        assert ops == ["+", "-", "*", "/", "<", ">", "="]

    def test_not_equals_is_one_token(self):
        tokens = tokenize(":X <> 2 < >3")
        ops = [tok.lexeme for tok in tokens if tok.kind is TokenKind.OPERATOR]
        assert ops == ["<>", "<", ">"]
        assert tokens[1].position.column == 4

    def test_delimiters(self):
        tokens = tokenize("REPEAT 2 [ FORWARD (1) ]")
        delims = [tok.lexeme for tok in tokens if tok.kind is TokenKind.DELIMITER]
        assert delims == ["[", "(", ")", "]"]

    def test_all_keyword_groups(self):
        tokens = tokenize("IF WHILE REPEAT MAKE ADDASSIGN AND OR XCOR HEADING PENUP")
        assert all(tok.kind is TokenKind.KEYWORD for tok in tokens)

    def test_lower_case_is_not_a_keyword(self):
        tokens = tokenize("forward")
        assert tokens[0].kind is TokenKind.IDENTIFIER

    def test_keyword_prefix_is_identifier(self):
        tokens = tokenize("FORWARDS")
        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.IDENTIFIER

    def test_adjacent_tokens_without_spaces(self):
        tokens = tokenize("(:X+1)*2")
        assert _lexemes(tokens) == ["(", ":X", "+", "1", ")", "*", "2"]

    def test_minus_is_never_part_of_a_number(self):
        tokens = tokenize("-5")
        assert _kinds(tokens) == [TokenKind.OPERATOR, TokenKind.NUMBER]


class TestComments:
    """Test that // comments are dropped."""

    def test_line_comment(self):
        tokens = tokenize("FORWARD 10 // go up\nRIGHT 90")
        assert _lexemes(tokens) == ["FORWARD", "10", "RIGHT", "90"]

    def test_comment_only(self):
        assert tokenize("// nothing here") == []

    def test_division_is_not_a_comment(self):
        tokens = tokenize("10 / 2")
        assert _lexemes(tokens) == ["10", "/", "2"]


class TestTokenPositions:
    """Test line, column and offset tracking."""

    def test_first_token(self):
        tok = tokenize("FORWARD 10")[0]
        assert tok.position.line == 1
        assert tok.position.column == 1
        assert tok.position.offset == 0

    def test_second_line(self):
        tokens = tokenize("PENUP\n  FORWARD 10", origin="square.logo")
        fwd = tokens[1]
        assert fwd.position.origin == "square.logo"
        assert fwd.position.line == 2
        assert fwd.position.column == 3
        assert fwd.position.offset == 8

    def test_end_offset(self):
        tok = tokenize("  FORWARD")[0]
        assert tok.end_offset == 9

    def test_str_is_lexeme(self):
        tok = tokenize(":X")[0]
        assert isinstance(tok, Token)
        assert str(tok) == ":X"


class TestLexErrors:
    """Test rejection of characters that start no token."""

    def test_unrecognized_character(self):
        with pytest.raises(LexError) as excinfo:
            tokenize("FORWARD 10 @")
        err = excinfo.value
        assert err.character == "@"
        assert err.position.line == 1
        assert err.position.column == 12

    def test_error_on_later_line(self):
        with pytest.raises(LexError) as excinfo:
            tokenize("FORWARD 10\nRIGHT 90 $")
        assert excinfo.value.position.line == 2
        assert excinfo.value.position.column == 10

    def test_message_names_character(self):
        with pytest.raises(LexError, match="unrecognized character '#'"):
            tokenize("#")


class TestTokenGrammar:
    """Test the token stream grammar directly."""

    def test_accepts_any_token_sequence(self, lexer):
        # Token order is not checked here; that is the parser's job.
        assert lexer.parse("] ] FORWARD [ 1 :X") is not None

    def test_rejects_unknown_character(self, lexer):
        from arpeggio import NoMatch

        with pytest.raises(NoMatch):
            lexer.parse("FORWARD ~")
