"""Rendering of evaluation results."""

DEFAULT_PRECISION = 6


def format_result(value, precision=DEFAULT_PRECISION):
    """Fixed-point text for ``value`` without trailing fractional zeros.

    ``14.0`` becomes ``"14"`` and ``0.5`` stays ``"0.5"``. Scientific notation,
    ``inf`` and ``nan`` are returned as rendered.
    """
    text = "%.*f" % (precision, value)
    if "e" in text or "." not in text:
        return text
    return text.rstrip("0").rstrip(".")
