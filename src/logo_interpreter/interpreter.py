"""The whole pipeline: source text in, drawing and diagnostics out."""
from __future__ import annotations

from dataclasses import replace
from typing import Optional

from .ast import parse
from .drawing import DrawingSink
from .environment import Environment
from .errors import LogoError
from .executor import ExecutionConfig, RunResult, execute
from .lexer import tokenize
from .turtle_state import Turtle, TurtleOperations
from .utils import logger


def run_program(
    code: str,
    sink: DrawingSink,
    config: Optional[ExecutionConfig] = None,
    origin: str = "<string>",
    turtle: Optional[TurtleOperations] = None,
    environment: Optional[Environment] = None,
) -> RunResult:
    """Tokenize, parse and execute a Logo program.

    Lex, parse and runtime failures are not raised. They are reported in the
    diagnostic of the returned RunResult, with the offending source line
    attached. Nothing is executed unless the whole program parses.

    Args:
        code: The program text.
        sink: Receives every segment drawn, in order.
        config: Execution settings (default: ExecutionConfig()).
        origin: Source name used in diagnostics (a file name or "<string>").
        turtle: The turtle to drive (default: a fresh Turtle).
        environment: The variable table to start from (default: empty).

    Returns:
        The RunResult of the run.

    Example:
        sink = RecordingSink()
        result = run_program("REPEAT 4 [ FORWARD 50 RIGHT 90 ]", sink)
        assert result.ok and len(sink) == 4
    """
    if turtle is None:
        turtle = Turtle()
    if environment is None:
        environment = Environment()

    try:
        program = parse(tokenize(code, origin=origin), origin=origin)
    except LogoError as e:
        diagnostic = e.to_diagnostic(code)
        logger.error("%s", diagnostic)
        return RunResult(turtle=turtle, environment=environment, diagnostic=diagnostic)

    result = execute(program, turtle, environment, sink, config=config)
    if result.diagnostic is not None:
        result = replace(result, diagnostic=result.diagnostic.with_source(code))
        logger.error("%s", result.diagnostic)
    return result


# vim: set ts=4 sw=4 expandtab:
