import math

import pytest

from simplecalc.formatting import format_result


@pytest.mark.parametrize("value,precision,expected", [
    (14.0, 6, "14"),
    (0.5, 6, "0.5"),
    (-6.0, 6, "-6"),
    (0.0, 6, "0"),
    (100.0, 6, "100"),
    (math.pi, 6, "3.141593"),
    (2.0 / 3.0, 2, "0.67"),
    (1e20, 6, "100000000000000000000"),
    (1e-9, 6, "0"),
    (2.5, 0, "2"),
    (math.inf, 6, "inf"),
    (-math.inf, 6, "-inf"),
    (math.nan, 6, "nan"),
])
def test_format_result(value, precision, expected):
    assert format_result(value, precision) == expected


def test_default_precision():
    assert format_result(1.0 / 3.0) == "0.333333"
