"""Error types and diagnostics for the Logo interpreter.

Every failure of the pipeline is one of three exceptions, one per phase:

- LexError: an unrecognised character in the source.
- ParseError: a token sequence that does not match the grammar, a command
  with the wrong number of arguments, an unterminated block or trailing input.
- LogoRuntimeError: an undefined variable, a type mismatch, a division by zero
  or an out of range pen colour found while executing.

Each exception converts to a Diagnostic, which is what callers of
run_program() receive.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Optional

from .position import LineIndex, Position


class Phase(str, enum.Enum):
    LEX = "lex"
    PARSE = "parse"
    RUN = "run"


_PHASE_TITLES = {
    Phase.LEX: "Lexical error",
    Phase.PARSE: "Syntax error",
    Phase.RUN: "Runtime error",
}


@dataclass(frozen=True)
class Diagnostic:
    """A single error report with its location.

    Attributes:
        phase: The pipeline phase that failed.
        message: Human readable description of the failure.
        position: Where in the source the failure was detected, if known.
        source_line: The text of the offending source line, if available.
    """
    phase: Phase
    message: str
    position: Optional[Position] = None
    source_line: Optional[str] = None

    def with_source(self, code: str) -> "Diagnostic":
        """Return a copy with source_line filled in from the program text."""
        if self.position is None:
            return self
        line = LineIndex(code, self.position.origin).line_text(self.position.line)
        return replace(self, source_line=line)

    def format(self) -> str:
        """Render the diagnostic, with a caret under the error column when possible."""
        title = _PHASE_TITLES[self.phase]
        if self.position is None:
            return f"{title}: {self.message}"
        header = (
            f"{title} in {self.position.origin} at line {self.position.line}, "
            f"column {self.position.column}: {self.message}"
        )
        if self.source_line is None:
            return header
        caret_pos = max(0, min(self.position.column - 1, len(self.source_line)))
        # Expand tabs so the caret lines up with what the user sees.
        expanded_caret_pos = len(self.source_line[:caret_pos].expandtabs())
        return "\n".join([header, self.source_line, ' ' * expanded_caret_pos + '^'])

    def __str__(self) -> str:
        return self.format()


class LogoError(Exception):
    """Base class for all errors raised by the interpreter."""
    phase: Phase = Phase.RUN

    def __init__(self, message: str, position: Optional[Position] = None):
        super().__init__(message)
        self.message = message
        self.position = position

    def to_diagnostic(self, code: Optional[str] = None) -> Diagnostic:
        diagnostic = Diagnostic(phase=self.phase, message=self.message, position=self.position)
        if code is not None:
            diagnostic = diagnostic.with_source(code)
        return diagnostic

    def __str__(self) -> str:
        return self.to_diagnostic().format()


class LexError(LogoError):
    """Raised by tokenize() on a character that starts no token."""
    phase = Phase.LEX

    def __init__(self, character: str, position: Optional[Position] = None):
        super().__init__(f"unrecognized character {character!r}", position)
        self.character = character


class ParseError(LogoError):
    """Raised by the parser when the tokens do not form a valid program."""
    phase = Phase.PARSE

    def __init__(self, expected: str, found: str, position: Optional[Position] = None,
                 message: Optional[str] = None):
        super().__init__(message or f"expected {expected}, found {found}", position)
        self.expected = expected
        self.found = found


class LogoRuntimeError(LogoError):
    """Raised while executing a program."""
    phase = Phase.RUN


class UndefinedVariableError(LogoRuntimeError):
    """Raised when a variable is read before it has been assigned."""

    def __init__(self, name: str, position: Optional[Position] = None):
        super().__init__(f"undefined variable '{name}'", position)
        self.name = name


# vim: set ts=4 sw=4 expandtab:
