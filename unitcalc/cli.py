"""
Command line interface for unitcalc.

Evaluates the expression given as arguments, or starts an interactive
prompt when there is none.

Author: xwest
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import CalcConfig
from .diagnostics import CalcError
from .calculator import evaluate_to_string

logger = logging.getLogger(__name__)

PROMPT = "> "
EXIT_COMMANDS = {"exit", "quit"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unitcalc",
        description="Calculator with units and unit conversion",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    unitcalc "3 km + 200 m to miles"
    unitcalc "10% of 50 m"
    unitcalc "6'4\\" to cm"
    unitcalc                              # interactive prompt
        """
    )

    parser.add_argument('expression', nargs='*',
                        help='Expression to evaluate; words are joined with spaces')
    parser.add_argument('--strict', action='store_true',
                        help='Fail on operators left at the end of the input')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log tokens, syntax tree and timings')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    return parser


def run_expression(text: str, config: CalcConfig) -> int:
    """Print the result of one expression; returns the exit status."""
    try:
        print(evaluate_to_string(text, config=config))
    except CalcError as e:
        print(e, file=sys.stderr)
        return 1
    return 0


def run_repl(config: CalcConfig) -> int:
    """Read expressions until EOF or an exit command."""
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            print()
            return 0
        except KeyboardInterrupt:
            print()
            return 130

        line = line.strip()
        if not line:
            continue
        if line.lower() in EXIT_COMMANDS:
            return 0

        run_expression(line, config)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the unitcalc command."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = CalcConfig(allow_trailing_operators=not args.strict)
    logger.debug("config: %s", config)

    if args.expression:
        return run_expression(" ".join(args.expression), config)
    return run_repl(config)


if __name__ == "__main__":
    sys.exit(main())
