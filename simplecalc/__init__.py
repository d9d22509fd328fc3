from .classifier import CONSTANTS, FUNCTIONS, Token, TokenKind, classify, scan_number
from .evaluator import MAX_EXPRESSION_LENGTH, OPERATORS, BinaryOp, Cursor, Evaluator, Precedence
from .formatting import DEFAULT_PRECISION, format_result

__version__ = "1.0.0"


def evaluate(expr):
    """Shortcut for ``Evaluator().evaluate(expr)``."""
    return Evaluator().evaluate(expr)
