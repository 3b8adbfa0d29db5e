"""Keyword and command tables for the Logo language.

Keywords are case-sensitive: only the upper case spelling is recognised.
The lexer, the grammar and the AST model all read from these tables so the
three stay in agreement.
"""

# Command name -> number of argument expressions it takes.
COMMAND_ARITY: dict[str, int] = {
    "FORWARD": 1,
    "BACK": 1,
    "LEFT": 1,
    "RIGHT": 1,
    "TURN": 1,
    "SETHEADING": 1,
    "SETX": 1,
    "SETY": 1,
    "SETPOS": 2,
    "HOME": 0,
    "PENUP": 0,
    "PENDOWN": 0,
    "SETPENCOLOR": 1,
    "SETPENRGB": 3,
}

CONTROL_KEYWORDS = ("MAKE", "ADDASSIGN", "IF", "WHILE", "REPEAT")

OPERATOR_KEYWORDS = ("AND", "OR")

QUERY_KEYWORDS = ("XCOR", "YCOR", "HEADING", "COLOR")

KEYWORDS = frozenset(COMMAND_ARITY) | frozenset(CONTROL_KEYWORDS) \
    | frozenset(OPERATOR_KEYWORDS) | frozenset(QUERY_KEYWORDS)


def is_keyword(word: str) -> bool:
    return word in KEYWORDS


# vim: set ts=4 sw=4 expandtab:
