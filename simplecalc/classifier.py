"""Token classification for the single-pass evaluator.

Nothing here keeps state: every call looks at the input from a given offset
and reports what kind of token starts there.
"""
import enum
import math
import re
from collections import namedtuple
from types import MappingProxyType

import numpy as np


class TokenKind(enum.Enum):
    DIGIT = "digit"
    CONSTANT = "constant"
    FUNCTION = "function"
    OPERATOR = "operator"
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    END = "end"
    INVALID = "invalid"


# For DIGIT the length is always 1, the literal itself is read by scan_number().
Token = namedtuple("Token", "kind text length")

OPERATOR_CHARS = "%*+-/^"

CONSTANTS = MappingProxyType({
    "pi": math.pi,
    "e": math.e,
})


def _cot(x):
    return np.reciprocal(np.tan(x))


FUNCTIONS = MappingProxyType({
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "cot": _cot,
    "sinh": np.sinh,
    "cosh": np.cosh,
    "tanh": np.tanh,
    "asin": np.arcsin,
    "acos": np.arccos,
    "atan": np.arctan,
    "asinh": np.arcsinh,
    "acosh": np.arccosh,
    "atanh": np.arctanh,
    "ln": np.log,
    "log": np.log,
    "log2": np.log2,
    "log10": np.log10,
    "lg": np.log10,
    "sqrt": np.sqrt,
    "cbrt": np.cbrt,
    "recp": np.reciprocal,
    "rad": np.deg2rad,
    "deg": np.rad2deg,
    "exp": np.exp,
})

# Letters with an optional digit suffix, e.g. "log2", "log10".
_NAME_RE = re.compile(r"[a-z]+[0-9]*")


def _is_digit(ch):
    return "0" <= ch <= "9"


def classify(text, pos):
    """Return the Token starting at ``text[pos]``."""
    if pos >= len(text):
        return Token(TokenKind.END, "", 0)

    ch = text[pos]
    if _is_digit(ch):
        return Token(TokenKind.DIGIT, ch, 1)
    if ch in OPERATOR_CHARS:
        return Token(TokenKind.OPERATOR, ch, 1)
    if ch == "(":
        return Token(TokenKind.OPEN_PAREN, ch, 1)
    if ch == ")":
        return Token(TokenKind.CLOSE_PAREN, ch, 1)

    if text.startswith("pi", pos):
        return Token(TokenKind.CONSTANT, "pi", 2)
    # A lone "e" is Euler's number, "ex..." belongs to exp()
    if ch == "e" and not text.startswith("x", pos + 1):
        return Token(TokenKind.CONSTANT, "e", 1)

    match = _NAME_RE.match(text, pos)
    if match and match.group() in FUNCTIONS:
        name = match.group()
        return Token(TokenKind.FUNCTION, name, len(name))

    return Token(TokenKind.INVALID, ch, 1)


def scan_number(text, pos, max_length=None):
    """Read a decimal literal starting at ``pos``.

    Consumes digits and at most one decimal point; a second point ends the
    literal. Never looks at more than ``max_length`` characters.

    Returns ``(value, length)``. ``value`` is None when no digit was read.
    """
    end = len(text)
    if max_length is not None:
        end = min(end, pos + max_length)

    index = pos
    has_dot = False
    digits = 0
    while index < end:
        ch = text[index]
        if ch == ".":
            if has_dot:
                break
            has_dot = True
        elif _is_digit(ch):
            digits += 1
        else:
            break
        index += 1

    if not digits:
        return None, index - pos
    return float(text[pos:index]), index - pos
