"""
Numeric rules.

Bounds are compared as ``decimal.Decimal`` so that "0.1" + "0.2" style float
noise and scientific notation never change the outcome of a comparison.
"""

import re
from decimal import Decimal
from typing import Any

from valicomb.core.values import is_number, is_numeric, strict_equals, to_decimal
from valicomb.rules.base import builtin_rule, flag, param

LOOSE_INTEGER_PATTERN = re.compile(r"^\s*[+-]?(?:0|[1-9]\d*)\s*$")
STRICT_INTEGER_PATTERN = re.compile(r"^(?:0|-?[1-9]\d*)$")

BOOLEAN_VALUES = (True, False, 1, 0, "1", "0")


@builtin_rule("numeric")
def numeric(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    return is_numeric(value)


@builtin_rule("integer")
def integer(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """
    Require an integer.

    Strict mode accepts ints and canonical integer strings only ("0", "-12"
    but not "012" or "+1"). Loose mode also accepts integral floats and
    integer strings with a sign or surrounding whitespace.
    """
    if flag(params, 0):
        if isinstance(value, int) and not isinstance(value, bool):
            return True
        return isinstance(value, str) and STRICT_INTEGER_PATTERN.match(value) is not None

    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return value.is_integer()
    return isinstance(value, str) and LOOSE_INTEGER_PATTERN.match(value) is not None


def _compare(value: Any, bound: Any) -> int | None:
    """Return -1, 0 or 1 comparing value to bound, or None if either is not numeric."""
    left = to_decimal(value)
    right = to_decimal(bound)
    if left is None or right is None:
        return None
    if left < right:
        return -1
    return 1 if left > right else 0


@builtin_rule("min")
def minimum(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    order = _compare(value, param(params, 0))
    return order is not None and order >= 0


@builtin_rule("max")
def maximum(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    order = _compare(value, param(params, 0))
    return order is not None and order <= 0


@builtin_rule("between")
def between(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """Inclusive range given as a single ``[min, max]`` parameter."""
    bounds = param(params, 0)
    if not is_numeric(value) or not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
        return False
    low, high = _compare(value, bounds[0]), _compare(value, bounds[1])
    return low is not None and high is not None and low >= 0 and high <= 0


@builtin_rule("boolean")
def boolean(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """Accept True/False, 1/0 and "1"/"0" only."""
    return any(strict_equals(value, candidate) for candidate in BOOLEAN_VALUES)


@builtin_rule("positive")
def positive(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    number = to_decimal(value)
    return number is not None and number > 0


@builtin_rule("decimal_places")
def decimal_places(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """
    Limit the number of digits after the decimal point.

    Trailing zeros in text count ("10.00" has two places); a negative or
    non-integer limit fails.
    """
    if not is_numeric(value):
        return False
    places = param(params, 0)
    if not isinstance(places, int) or isinstance(places, bool) or places < 0:
        return False

    if is_number(value):
        text = str(Decimal(repr(value))) if isinstance(value, float) else str(value)
    else:
        text = value.strip()
    if "." not in text:
        return True
    fraction = text.split(".", 1)[1]
    fraction = re.split(r"[eE]", fraction, maxsplit=1)[0]
    return len(fraction) <= places
