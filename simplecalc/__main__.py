#!/usr/bin/env python3
import logging
import os
import sys

from .evaluator import Evaluator
from .formatting import DEFAULT_PRECISION, format_result

logger = logging.getLogger("simplecalc")


def _configure_logging():
    name = os.environ.get("SIMPLECALC_LOG_LEVEL", "WARNING")
    level = getattr(logging, name.upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _precision_from_env():
    val = os.environ.get("SIMPLECALC_PRECISION")
    if val is None:
        return DEFAULT_PRECISION
    try:
        precision = int(val)
    except ValueError:
        precision = -1
    if precision < 0:
        logger.warning("Ignoring SIMPLECALC_PRECISION=%r, using %d", val, DEFAULT_PRECISION)
        return DEFAULT_PRECISION
    return precision


def main(argv=None):
    """Evaluate the first argument and print the answer. Always returns 0."""
    args = sys.argv[1:] if argv is None else argv
    _configure_logging()

    if not args or not args[0]:
        print("No expression to calculate!")
        return 0

    evaluator = Evaluator(precision=_precision_from_env())
    expr = args[0][:evaluator.max_length]
    print(f"The arithmetic expression to be calculated: {expr}")

    value, ok = evaluator.evaluate(expr)
    if ok:
        print(f"The answer is: {format_result(value, evaluator.precision)}")
    else:
        print("Invalid expression!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
