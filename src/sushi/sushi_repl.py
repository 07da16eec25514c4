"""
Read-parse loop for sushi source.

Drives a ``Parser`` over a whole input, one top-level unit at a time:

    top ::= definition | external | expression | ';'

Each unit is dispatched on the current token (`def`, `extern`, anything
else). Successful units are reported on the diagnostic stream and collected;
failures are reported as ``Error: <message>`` and the loop skips one token
before carrying on. End of input ends the loop normally.
"""

import json
import logging
import sys
from dataclasses import dataclass, field
from typing import TextIO

from sushi.sushi_ast import Function, TopLevel
from sushi.sushi_constants import DEF, EOF, EXTERN
from sushi.sushi_errors import SushiSyntaxError
from sushi.sushi_parser import Parser
from sushi.sushi_precedence import PrecedenceTable

logger = logging.getLogger(__name__)

PROMPT = "ready> "


@dataclass
class ReplResult:
    forms: list[TopLevel] = field(default_factory=list)
    errors: int = 0


def report_error(err: SushiSyntaxError, stream: TextIO) -> None:
    print(f"Error: {err}", file=stream)


def skip_token(parser: Parser, result: ReplResult, err: TextIO) -> None:
    """Advances one token, reporting (and stepping over) malformed literals."""
    while True:
        try:
            parser.next_token()
            return
        except SushiSyntaxError as e:
            report_error(e, err)
            result.errors += 1


def handle_top_level(
    parser: Parser,
    result: ReplResult,
    out: TextIO,
    err: TextIO,
    dump: bool = False,
) -> None:
    kind = parser.current.type
    logger.debug("dispatching on %r", parser.current)
    try:
        if kind == DEF:
            form: TopLevel = parser.parse_definition()
            message = "Parsed a function definition."
        elif kind == EXTERN:
            form = parser.parse_extern()
            message = "Parsed an extern"
        else:
            form = parser.parse_top_level_expr()
            message = "Parsed a top-level expr"
    except SushiSyntaxError as e:
        report_error(e, err)
        result.errors += 1
        logger.debug("recovering: skipping %r", parser.current)
        skip_token(parser, result, err)
        return

    print(message, file=err)
    result.forms.append(form)
    if dump:
        print(json.dumps(form.to_dict()), file=out)


def run(
    source: str | TextIO,
    precedence: PrecedenceTable | None = None,
    lenient_numbers: bool = False,
    prompt: bool = False,
    dump: bool = False,
    out: TextIO | None = None,
    err: TextIO | None = None,
    result: ReplResult | None = None,
) -> ReplResult:
    """
    Parses every top-level unit in ``source``.

    Args:
        source (str | TextIO): Program text or a readable text stream.
        precedence (PrecedenceTable | None): Operator table; baseline if None.
        lenient_numbers (bool): Accept malformed numeric literals.
        prompt (bool): Write ``ready> `` to ``out`` before each unit.
        dump (bool): Write each parsed form to ``out`` as a JSON line.
        out (TextIO | None): Output stream. Defaults to stdout.
        err (TextIO | None): Diagnostic stream. Defaults to stderr.
        result (ReplResult | None): Collects forms and errors as they happen,
            so a caller keeps the progress made before an interrupt.

    Returns:
        ReplResult: The parsed forms and the number of reported errors.
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    parser = Parser.from_source(source, precedence, lenient_numbers=lenient_numbers)
    result = result if result is not None else ReplResult()

    def show_prompt() -> None:
        if prompt:
            print(PROMPT, end="", file=out, flush=True)

    show_prompt()
    skip_token(parser, result, err)

    while True:
        show_prompt()
        if parser.current.type == EOF:
            break
        if parser.current.is_char(";"):
            skip_token(parser, result, err)
            continue
        handle_top_level(parser, result, out, err, dump=dump)

    logger.debug(
        "finished: %d forms, %d errors (%d anonymous)",
        len(result.forms),
        result.errors,
        sum(1 for f in result.forms if isinstance(f, Function) and f.is_anonymous),
    )
    return result


def start_repl(
    precedence: PrecedenceTable | None = None,
    lenient_numbers: bool = False,
    dump: bool = False,
) -> ReplResult:
    """Interactive loop over standard input."""
    result = ReplResult()
    try:
        run(
            sys.stdin,
            precedence=precedence,
            lenient_numbers=lenient_numbers,
            prompt=True,
            dump=dump,
            result=result,
        )
    except KeyboardInterrupt:
        logger.debug("interrupted after %d forms", len(result.forms))
    print()
    return result


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
