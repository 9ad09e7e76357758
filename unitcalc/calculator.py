"""
Calculator entry points.

Runs one input line through lexer, parser and evaluator. Intermediate
results (tokens, tree, per-stage timings) are logged at DEBUG.

Author: xwest
"""

import logging
import time
from typing import Optional

from .config import CalcConfig, DEFAULT_CONFIG
from .lexer import lex
from .parser import parse, Conversion
from .evaluator import Evaluator, Number
from .formatter import format_number

logger = logging.getLogger(__name__)


def _evaluate_with_tree(text: str, allow_trailing_operators: Optional[bool], config: CalcConfig):
    if allow_trailing_operators is None:
        allow_trailing_operators = config.allow_trailing_operators

    start_time = time.perf_counter()
    tokens = lex(text)
    lex_time = time.perf_counter()
    logger.debug("tokens: %s", " ".join(repr(token) for token in tokens))

    ast = parse(tokens, allow_trailing_operators)
    parse_time = time.perf_counter()
    logger.debug("ast: %s", ast)

    result = Evaluator(config).evaluate(ast)
    eval_time = time.perf_counter()

    logger.debug(
        "lexed in %.3fms, parsed in %.3fms, evaluated in %.3fms",
        (lex_time - start_time) * 1000,
        (parse_time - lex_time) * 1000,
        (eval_time - parse_time) * 1000,
    )
    return ast, result


def evaluate(text: str, allow_trailing_operators: Optional[bool] = None,
             config: CalcConfig = DEFAULT_CONFIG) -> Number:
    """
    Evaluate an expression such as ``"3 km + 200 m to miles"``.

    Args:
        text: Expression text
        allow_trailing_operators: Drop operators dangling at the end of the
            input instead of failing; defaults to the config setting
        config: Precision and limits

    Returns:
        The value with its unit (``None`` for plain numbers)

    Raises:
        LexerError: If the input contains something that is not a token
        ParseError: If the tokens do not form an expression
        EvalError: If the expression has no value
    """
    _, result = _evaluate_with_tree(text, allow_trailing_operators, config)
    return result


def evaluate_to_string(text: str, allow_trailing_operators: Optional[bool] = None,
                       config: CalcConfig = DEFAULT_CONFIG) -> str:
    """
    Evaluate an expression and format the result for display.

    Lengths are only re-expressed in larger units when the input did not
    end in an explicit conversion.

    Raises:
        CalcError: If lexing, parsing or evaluation fails
    """
    ast, result = _evaluate_with_tree(text, allow_trailing_operators, config)
    return format_number(result, auto_scale_units=not isinstance(ast, Conversion), config=config)
