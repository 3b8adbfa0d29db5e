"""Tests for syntax errors reported by the parser."""

import pytest

from logo_interpreter.ast import getASTfromString
from logo_interpreter.errors import ParseError, Phase


def _parse_error(code):
    with pytest.raises(ParseError) as excinfo:
        getASTfromString(code)
    return excinfo.value


class TestArity:
    """Wrong argument counts are caught before anything runs."""

    def test_forward_with_two_arguments(self):
        err = _parse_error("FORWARD 10 20")
        assert "FORWARD takes 1 argument(s) but 2 were given" in err.message

    def test_forward_with_no_arguments(self):
        err = _parse_error("FORWARD")
        assert "but 0 were given" in err.message

    def test_penup_with_argument(self):
        err = _parse_error("PENUP 5")
        assert "PENUP takes 0 argument(s)" in err.message

    def test_setpos_with_one_argument(self):
        err = _parse_error("SETPOS 10")
        assert "SETPOS takes 2 argument(s)" in err.message

    def test_negative_second_argument_is_subtraction(self):
        # Without parentheses "10 -5" is one expression.
        err = _parse_error("SETPOS 10 -5")
        assert "but 1 were given" in err.message

    def test_arity_error_position(self):
        err = _parse_error("PENUP\nRIGHT 90 90")
        assert err.position.line == 2
        assert err.position.column == 1

    def test_arity_error_inside_block(self):
        err = _parse_error("REPEAT 4 [ FORWARD ]")
        assert err.position.column == 12


class TestGrammarViolations:
    """Test rejection of token sequences that match no statement."""

    def test_unterminated_block(self):
        err = _parse_error("REPEAT 4 [ FORWARD 10")
        assert err.found == "end of input"

    def test_unterminated_paren(self):
        err = _parse_error("FORWARD (10 + 2")
        assert err.found == "end of input"

    def test_unknown_command(self):
        err = _parse_error("JUMP 10")
        assert err.found == "'JUMP'"
        assert err.position.column == 1

    def test_lower_case_command_rejected(self):
        err = _parse_error("forward 10")
        assert err.found == "'forward'"

    def test_trailing_input(self):
        err = _parse_error("FORWARD 10 ]")
        assert err.found == "']'"
        assert err.position.column == 12

    def test_bare_number_is_not_a_statement(self):
        _parse_error("10")

    def test_if_without_block(self):
        _parse_error("IF :X < 1 FORWARD 10")

    def test_make_without_value(self):
        _parse_error('MAKE "X')

    def test_make_without_quoted_name(self):
        _parse_error("MAKE X 10")

    def test_quoted_word_that_is_not_a_number(self):
        err = _parse_error('FORWARD "ABC')
        assert err.found == '"ABC'

    @pytest.mark.parametrize("word", ['"1_0', '"nan', '"inf', '"Infinity', '"1.2.3'])
    def test_quoted_word_must_spell_a_number(self, word):
        err = _parse_error(f"FORWARD {word}")
        assert err.found == word
        assert err.position.column == 9

    def test_number_too_large(self):
        err = _parse_error("FORWARD 10\nRIGHT 1e400")
        assert err.message == "number 1e400 is too large"
        assert err.position.line == 2
        assert err.position.column == 7

    def test_quoted_number_too_large(self):
        err = _parse_error('SETHEADING "1e999')
        assert "too large" in err.message

    def test_overflowing_literals_in_expression(self):
        err = _parse_error('MAKE "X 1e400 - 1e400 RIGHT :X')
        assert err.found == "1e400"
        assert err.position.column == 9

    def test_not_equals_cannot_be_split(self):
        _parse_error("IF 1 < > 2 [ ]")

    def test_variable_name_must_be_identifier(self):
        err = _parse_error('MAKE "1X 10')
        assert err.expected == "variable name"

    def test_message_format(self):
        err = _parse_error("JUMP")
        assert err.message.startswith("expected ")
        assert err.message.endswith("found 'JUMP'")


class TestDiagnostic:
    """Test conversion of parse errors into diagnostics."""

    def test_phase(self):
        err = _parse_error("FORWARD 1 2")
        diagnostic = err.to_diagnostic()
        assert diagnostic.phase is Phase.PARSE
        assert diagnostic.position == err.position

    def test_source_excerpt(self):
        code = "FORWARD 10\n  JUMP 5\n"
        err = _parse_error(code)
        text = err.to_diagnostic(code).format()
        lines = text.splitlines()
        assert lines[0].startswith("Syntax error in <string> at line 2, column 3:")
        assert lines[1] == "  JUMP 5"
        assert lines[2] == "  ^"
