#######################################################################
# Arpeggio PEG Grammar for Logo
#######################################################################

from arpeggio import ZeroOrMore, OneOrMore, EOF, RegExMatch as _

from .keywords import COMMAND_ARITY, QUERY_KEYWORDS


# Also used to check that a quoted word spells a number.
NUMBER_PATTERN = (
    r'(\d+([.]\d*)?([eE][+-]?\d+)?'
    r'|[.]\d+([eE][+-]?\d+)?)'
)


def _keyword_alternation(words):
    # Longest first, and \b so that PENUPX is never read as PENUP.
    ordered = sorted(words, key=len, reverse=True)
    return r'(%s)\b' % '|'.join(ordered)


# --- Logo language parsing root ---

def logo_language():
    return (ZeroOrMore(statement), EOF)


# --- Token stream parsing root (used by the lexer) ---

def logo_token_stream():
    return (ZeroOrMore(lexical_token), EOF)


def lexical_token():
    return [
            TOK_NUMBER,
            TOK_WORD,
            TOK_VARIABLE,
            TOK_NAME,
            TOK_OPERATOR,
            TOK_DELIMITER
        ]


# --- Lexical and basic rules ---

def comment():
    return _(r'//.*?$', str_repr='comment')


# --- Tokens ---

def TOK_NUMBER():
    return _(NUMBER_PATTERN, str_repr='number')


def TOK_WORD():
    return _(r'"[A-Za-z0-9_.]+"?', str_repr='quoted word')


def TOK_VARIABLE():
    return _(r':[A-Za-z_][A-Za-z0-9_]*', str_repr='variable')


def TOK_NAME():
    return _(r'[A-Za-z_][A-Za-z0-9_]*', str_repr='name')


def TOK_OPERATOR():
    return _(r'<>|[-+*/<>=]', str_repr='operator')


def TOK_DELIMITER():
    return _(r'[\[\]()]', str_repr='delimiter')


def TOK_LT():
    return '<'


def TOK_GT():
    return '>'


def TOK_EQUAL():
    return '='


def TOK_NOTEQUAL():
    return '<>'


def TOK_PAREN():
    return '('


def TOK_ENDPAREN():
    return ')'


def TOK_BRACKET():
    return '['


def TOK_ENDBRACKET():
    return ']'


def TOK_ADD():
    return '+'


def TOK_SUBTRACT():
    return '-'


def TOK_MULTIPLY():
    return '*'


def TOK_DIVIDE():
    return '/'


# --- Keywords ---

def KWD_MAKE():
    return _(r'MAKE\b', str_repr='MAKE')


def KWD_ADDASSIGN():
    return _(r'ADDASSIGN\b', str_repr='ADDASSIGN')


def KWD_IF():
    return _(r'IF\b', str_repr='IF')


def KWD_WHILE():
    return _(r'WHILE\b', str_repr='WHILE')


def KWD_REPEAT():
    return _(r'REPEAT\b', str_repr='REPEAT')


def KWD_AND():
    return _(r'AND\b', str_repr='AND')


def KWD_OR():
    return _(r'OR\b', str_repr='OR')


def command_name():
    return _(_keyword_alternation(COMMAND_ARITY), str_repr='command')


def query():
    return _(_keyword_alternation(QUERY_KEYWORDS), str_repr='query')


# --- Grammar rules ---

def statement():
    return [
            if_statement,
            while_statement,
            repeat_statement,
            make_statement,
            addassign_statement,
            command
        ]


def block():
    return (TOK_BRACKET, ZeroOrMore(statement), TOK_ENDBRACKET)


def if_statement():
    return (KWD_IF, expr, block)


def while_statement():
    return (KWD_WHILE, expr, block)


def repeat_statement():
    return (KWD_REPEAT, expr, block)


def make_statement():
    return (KWD_MAKE, variable_name, expr)


def addassign_statement():
    return (KWD_ADDASSIGN, variable_name, expr)


def command():
    return (command_name, ZeroOrMore(expr))


def variable_name():
    return (TOK_WORD,)  # Tuple to prevent eliding the word


# --- Expressions ---

def expr():
    return (prec_logical_or,)


def prec_logical_or():
    return OneOrMore(prec_logical_and, sep=KWD_OR)


def prec_logical_and():
    return OneOrMore(prec_comparison, sep=KWD_AND)


def prec_comparison():
    return OneOrMore(prec_addition, sep=[TOK_NOTEQUAL, TOK_LT, TOK_GT, TOK_EQUAL])


def prec_addition():
    return OneOrMore(prec_multiplication, sep=[TOK_ADD, TOK_SUBTRACT])


def prec_multiplication():
    return OneOrMore(prec_unary, sep=[TOK_MULTIPLY, TOK_DIVIDE])


def prec_unary():
    return [
        (TOK_SUBTRACT, prec_unary),
        primary
    ]


def primary():
    return [
            paren_expr,
            TOK_NUMBER,
            word_literal,
            TOK_VARIABLE,
            query
        ]


def paren_expr():
    return (TOK_PAREN, expr, TOK_ENDPAREN)


def word_literal():
    return (TOK_WORD,)  # Tuple to prevent eliding the word


# vim: set ts=4 sw=4 expandtab:
