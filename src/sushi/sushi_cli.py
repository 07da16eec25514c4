"""
sushi CLI Entrypoint.

This module provides the command-line interface for parsing sushi source.

Features:
    - Read source from `.sushi` files, inline strings, or standard input.
    - Lex and parse every top-level unit, reporting `Error: ...` per failure.
    - Optionally print each parsed form as a JSON line.
    - Extend or override the operator precedence table.

Example usage:
    sushi hello.sushi
    sushi -s "def avg(a b) (a+b)*0.5" --dump
    sushi prog.sushi --prec "/=40" --prec "^=50"
    sushi                       # interactive, reads stdin

Functions:
    run_sushi(source: str, is_string: bool = False, ...) -> int:
        Parses a file or string and returns the process exit status.

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments and invokes the appropriate action.
"""

import argparse
import logging
import sys

from sushi.sushi_precedence import PrecedenceTable, parse_precedence_spec
from sushi.sushi_repl import run, start_repl


def run_sushi(
    source: str,
    is_string: bool = False,
    precedence: PrecedenceTable | None = None,
    lenient_numbers: bool = False,
    dump: bool = False,
    prompt: bool = False,
) -> int:
    """
    Parse sushi source and report every top-level unit.

    Args:
        source (str): The sushi source code or path to a `.sushi` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        precedence (PrecedenceTable | None): Operator table; baseline if None.
        lenient_numbers (bool): Accept malformed numeric literals such as `1.2.3`.
        dump (bool): Print each parsed form as JSON on stdout.
        prompt (bool): Write the `ready> ` prompt before each unit.

    Returns:
        int: 0 if every unit parsed, 1 if any error was reported.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.sushi'.
    """
    if not is_string and not source.endswith(".sushi"):
        raise ValueError("Only .sushi files are supported.")

    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lex and parse
    result = run(
        source,
        precedence=precedence,
        lenient_numbers=lenient_numbers,
        dump=dump,
        prompt=prompt,
    )
    return 1 if result.errors else 0


def build_precedence(specs: list[str]) -> PrecedenceTable:
    """Baseline table extended with ``OP=N`` overrides."""
    overrides = dict(parse_precedence_spec(s) for s in specs)
    return PrecedenceTable().with_overrides(overrides)


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the sushi CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-d`, `--dump`: Print each parsed form as JSON.
        - `--prec OP=N`: Add or override a binary operator (repeatable).
        - `--lenient-numbers`: Accept malformed numeric literals.
        - `--prompt`: Show the `ready> ` prompt for file or `-s` input.
        - `--verbose`: Enable debug logging.

    With no source argument, reads standard input interactively.
    """
    parser = argparse.ArgumentParser(prog="sushi")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-d", "--dump", action="store_true", help="Print parsed forms as JSON"
    )
    parser.add_argument(
        "--prec",
        action="append",
        default=[],
        metavar="OP=N",
        help="Binary operator precedence override (repeatable)",
    )
    parser.add_argument(
        "--lenient-numbers",
        action="store_true",
        help="Accept malformed numeric literals such as 1.2.3",
    )
    parser.add_argument(
        "--prompt", action="store_true", help="Show the ready> prompt for file or -s input"
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        precedence = build_precedence(args.prec)
    except ValueError as e:
        parser.error(str(e))

    if args.source is None:
        result = start_repl(
            precedence=precedence,
            lenient_numbers=args.lenient_numbers,
            dump=args.dump,
        )
        return 1 if result.errors else 0

    try:
        return run_sushi(
            source=args.source,
            is_string=args.string,
            precedence=precedence,
            lenient_numbers=args.lenient_numbers,
            dump=args.dump,
            prompt=args.prompt,
        )
    except ValueError as e:
        parser.error(str(e))


if __name__ == "__main__":
    sys.exit(main())
