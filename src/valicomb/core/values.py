"""
Value inspection helpers shared by the engine and the built-in rules.

Input trees arrive untyped, so rules need a consistent notion of "container",
"blank", "numeric" and loose versus strict equality. Keeping these in one
place means the skip policy and the rule predicates agree with each other.
"""

import re
from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

NUMERIC_PATTERN = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")

INDEX_PATTERN = re.compile(r"^(?:0|-?[1-9]\d*)$")

_SCALAR_TEXT = (str, bytes, bytearray)


def is_mapping(value: Any) -> bool:
    """Check if a value is a string-keyed map node of a data tree."""
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    """Check if a value is an ordered sequence node (text is never a sequence)."""
    return isinstance(value, Sequence) and not isinstance(value, _SCALAR_TEXT)


def is_container(value: Any) -> bool:
    """Check if a value can be walked by a field path."""
    return is_mapping(value) or is_sequence(value)


def is_blank(value: Any) -> bool:
    """
    Check if a scalar value counts as "not provided".

    Params:
        value: Resolved field value

    Returns:
        True for None and for strings that are empty after trimming
    """
    if value is None:
        return True
    return isinstance(value, str) and value.strip() == ""


def is_empty_element(value: Any) -> bool:
    """
    Check if a wildcard match should be dropped before rule evaluation.

    Wildcard matches legitimately contain gaps; None, False, zero, empty text,
    the string "0" and empty containers are all treated as gaps.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == "" or value == "0"
    if isinstance(value, (int, float)):
        return value == 0
    if is_container(value):
        return len(value) == 0
    return False


def is_number(value: Any) -> bool:
    """Check if a value is a real int or float (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_numeric(value: Any) -> bool:
    """
    Check if a value is a number or a numeric string.

    Numeric strings may carry surrounding whitespace, a sign, a fraction and
    an exponent. Hex, octal and binary literals are rejected.
    """
    if is_number(value):
        return value == value and value not in (float("inf"), float("-inf"))
    if isinstance(value, str):
        return NUMERIC_PATTERN.match(value) is not None
    return False


def to_decimal(value: Any) -> Decimal | None:
    """
    Convert a numeric value to Decimal for exact comparison.

    Returns:
        Decimal representation, or None when the value is not numeric
    """
    if not is_numeric(value):
        return None
    try:
        if isinstance(value, float):
            return Decimal(repr(value))
        return Decimal(str(value).strip())
    except InvalidOperation:
        return None


def strict_equals(left: Any, right: Any) -> bool:
    """Compare two values requiring identical types (1 and 1.0 differ, True and 1 differ)."""
    return type(left) is type(right) and left == right


def loose_equals(left: Any, right: Any) -> bool:
    """
    Compare two values allowing numeric strings to match numbers.

    "5" equals 5 and 5.0; "abc" never equals a number. Everything else falls
    back to ordinary equality.
    """
    if left == right:
        return True
    if isinstance(left, str) and is_number(right):
        left, right = right, left
    if is_number(left) and isinstance(right, str) and is_numeric(right):
        return to_decimal(left) == to_decimal(right)
    return False


def contains_value(haystack: Any, needle: Any, strict: bool = False) -> bool:
    """
    Check membership using strict or loose comparison.

    Params:
        haystack: Iterable of candidate values
        needle: Value to look for
        strict: Require identical types when True

    Returns:
        True if any element of the haystack matches the needle
    """
    compare = strict_equals if strict else loose_equals
    return any(compare(candidate, needle) for candidate in haystack)


def container_keys(value: Any) -> list[Any]:
    """Return mapping keys, or the index list of a sequence."""
    if is_mapping(value):
        return list(value.keys())
    return list(range(len(value)))


def container_values(value: Any) -> list[Any]:
    """Return mapping values, or the elements of a sequence."""
    if is_mapping(value):
        return list(value.values())
    return list(value)


def numeric_text(value: Any) -> str:
    """Render a numeric value as text, dropping a zero fraction from integral floats."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value).strip()
