import enum
import logging
import math
import sys
from types import MappingProxyType

import numpy as np

from .classifier import CONSTANTS, FUNCTIONS, TokenKind, classify, scan_number
from .formatting import DEFAULT_PRECISION, format_result

logger = logging.getLogger(__name__)

# Longer input is cut off before parsing
MAX_EXPRESSION_LENGTH = 2047

# Shell-friendly spellings: [ ] for ( ), $ for ^
_ALIASES = str.maketrans("[]$", "()^")


class Precedence(enum.IntEnum):
    ADD = 0
    MUL = 1
    POW = 2


class BinaryOp(enum.Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "^"


def _mod(a, b):
    # Integer remainder: both sides truncated toward zero, sign follows the dividend
    return np.fmod(np.trunc(a), np.trunc(b))


OPERATORS = MappingProxyType({
    BinaryOp.ADD: (Precedence.ADD, np.add),
    BinaryOp.SUB: (Precedence.ADD, np.subtract),
    BinaryOp.MUL: (Precedence.MUL, np.multiply),
    BinaryOp.DIV: (Precedence.MUL, np.true_divide),
    BinaryOp.MOD: (Precedence.MUL, _mod),
    BinaryOp.POW: (Precedence.POW, np.power),
})

_OPERAND_KINDS = (TokenKind.DIGIT, TokenKind.CONSTANT)


class Cursor:
    """Read position shared by all frames of one evaluation. Only moves forward."""

    __slots__ = ("text", "pos")

    def __init__(self, text, pos=0):
        self.text = text
        self.pos = pos

    def peek(self, offset=0):
        return classify(self.text, self.pos + offset)


class Evaluator:
    def __init__(self, max_length=MAX_EXPRESSION_LENGTH, precision=DEFAULT_PRECISION):
        if max_length < 1:
            raise ValueError(f"max_length must be positive (got {max_length})")
        if precision < 0:
            raise ValueError(f"precision must not be negative (got {precision})")
        self.max_length = max_length
        self.precision = precision

    def normalize(self, expr):
        """Truncates, lowercases and maps bracket/caret aliases."""
        return expr[:self.max_length].lower().translate(_ALIASES)

    def _fail(self, cursor, reason):
        logger.debug("Invalid expression %r at %d: %s", cursor.text, cursor.pos, reason)
        return math.nan, False

    @staticmethod
    def _reduce(pending, left, right):
        if pending is None:
            return left
        return OPERATORS[pending][1](left, right)

    def _eval(self, cursor, left, precedence, boundary=None, inside_paren=False, need_operator=False):
        """Evaluate from the cursor on, returning ``(value, ok)``.

        ``precedence`` is the level this frame reduces at. A frame opened for a
        tighter-binding operator gets the caller's operator level as
        ``boundary`` and returns, cursor left on the operator, as soon as it
        meets an operator that binds no tighter than that.
        """
        right = 0.0
        pending = None
        awaiting_right = False
        negate = False
        function = None

        while True:
            token = cursor.peek()
            kind = token.kind

            if kind in _OPERAND_KINDS:
                if need_operator:
                    return self._fail(cursor, "operand follows operand")
                if kind is TokenKind.DIGIT:
                    value, length = scan_number(cursor.text, cursor.pos, self.max_length - cursor.pos)
                else:
                    value, length = CONSTANTS[token.text], token.length
                cursor.pos += length
                if negate:
                    value = -value
                    negate = False
                if awaiting_right:
                    right = value
                else:
                    left = value
                need_operator = True

            elif kind is TokenKind.FUNCTION:
                if need_operator:
                    return self._fail(cursor, "function follows operand")
                function = FUNCTIONS[token.text]
                cursor.pos += token.length
                if cursor.peek().kind is not TokenKind.OPEN_PAREN:
                    return self._fail(cursor, f"'{token.text}' is not followed by '('")

            elif kind is TokenKind.OPEN_PAREN:
                # After an operand the group replaces the operand slot it lands in
                cursor.pos += 1
                value, ok = self._eval(cursor, 0.0, Precedence.ADD, inside_paren=True)
                if not ok:
                    return value, False
                if cursor.peek().kind is not TokenKind.CLOSE_PAREN:
                    return self._fail(cursor, "missing ')'")
                cursor.pos += 1
                if function is not None:
                    value = function(value)
                    function = None
                if awaiting_right:
                    right = value
                else:
                    left = value
                need_operator = True

            elif kind is TokenKind.CLOSE_PAREN:
                if not inside_paren:
                    return self._fail(cursor, "unmatched ')'")
                if not need_operator:
                    return self._fail(cursor, "operand expected before ')'")
                return self._reduce(pending, left, right), True

            elif kind is TokenKind.OPERATOR:
                op = BinaryOp(token.text)

                if not need_operator:
                    # Only a sign directly in front of a number or constant is allowed here
                    if op is not BinaryOp.SUB or cursor.peek(1).kind not in _OPERAND_KINDS:
                        return self._fail(cursor, f"operand expected, got '{token.text}'")
                    negate = True
                    cursor.pos += 1
                    continue

                op_precedence = OPERATORS[op][0]
                if boundary is not None and op_precedence <= boundary:
                    return self._reduce(pending, left, right), True

                if not awaiting_right:
                    pending = op
                    awaiting_right = True
                elif precedence >= op_precedence:
                    left = self._reduce(pending, left, right)
                    right = 0.0
                    pending = op
                else:
                    pending_precedence, pending_func = OPERATORS[pending]
                    value, ok = self._eval(cursor, right, op_precedence, boundary=pending_precedence,
                                           inside_paren=inside_paren, need_operator=True)
                    if not ok:
                        return value, False
                    left = pending_func(left, value)
                    right = 0.0
                    pending = None
                    awaiting_right = False
                    # The cursor now sits on the next operator, ')' or the end
                    continue

                precedence = op_precedence
                need_operator = False
                cursor.pos += 1

            elif kind is TokenKind.END:
                if not need_operator:
                    return self._fail(cursor, "unexpected end of expression")
                return self._reduce(pending, left, right), True

            else:
                return self._fail(cursor, f"unexpected character '{token.text}'")

    def evaluate(self, expr):
        """Evaluate ``expr`` and return ``(value, ok)``.

        ``value`` is a float and only meaningful when ``ok`` is True. Division by
        zero, logarithms of non-positive numbers and the like yield inf or NaN
        rather than failing.
        """
        if not isinstance(expr, str):
            raise TypeError(f"Expression must be a string, not {type(expr).__name__}")

        text = self.normalize(expr)
        cursor = Cursor(text)
        if not text:
            return self._fail(cursor, "empty expression")

        # One frame per nesting level or precedence escalation, each at least a character
        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(limit + 2 * len(text))
        try:
            with np.errstate(all="ignore"):
                value, ok = self._eval(cursor, 0.0, Precedence.ADD)
        finally:
            sys.setrecursionlimit(limit)
        return float(value), ok

    def run(self, expr):
        if not isinstance(expr, str):
            raise TypeError(f"Expression must be a string, not {type(expr).__name__}")
        if not expr: return "Error: Empty expression"
        value, ok = self.evaluate(expr)
        if not ok:
            return "Error: Invalid expression"
        return format_result(value, self.precision)
