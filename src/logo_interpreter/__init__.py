#######################################################################
# Arpeggio PEG Grammar for Logo
#######################################################################

from arpeggio import ParserPython
from .grammar import logo_language, logo_token_stream, comment


# --- The parsers ---

def getLogoParser(reduce_tree=False, debug=False):
    """Create a Logo language parser instance.

    The parser works on program text whose comments have already been
    dropped by the lexer, but it still skips `//` comments so it can be
    used directly on raw source as well.

    Args:
        reduce_tree: If True, reduce the parse tree (default: False)
        debug: If True, enable debug output (default: False)

    Returns:
        ParserPython instance configured for Logo parsing
    """
    return ParserPython(
        logo_language, comment, reduce_tree=reduce_tree,
        memoization=True, autokwd=True, debug=debug
    )


def getLogoLexer(debug=False):
    """Create a parser that recognises a flat stream of Logo tokens.

    Returns:
        ParserPython instance whose parse tree leaves are the program's tokens
    """
    return ParserPython(logo_token_stream, comment, reduce_tree=False, debug=debug)


# vim: set ts=4 sw=4 expandtab:
