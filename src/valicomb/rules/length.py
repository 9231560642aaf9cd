"""String length rules. Only text values have a length; anything else fails."""

from typing import Any

from valicomb.rules.base import builtin_rule, int_param, param


def _length(value: Any) -> int | None:
    if not isinstance(value, str):
        return None
    return len(value)


@builtin_rule("length")
def length(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """Exact length, or an inclusive range when a second parameter is given."""
    expected = int_param("length", params, 0, "Length")
    size = _length(value)
    if param(params, 1) is not None:
        maximum = int_param("length", params, 1, "Maximum length")
        return size is not None and expected <= size <= maximum
    return size == expected


@builtin_rule("length_between")
def length_between(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    minimum = int_param("length_between", params, 0, "Minimum length")
    maximum = int_param("length_between", params, 1, "Maximum length")
    size = _length(value)
    return size is not None and minimum <= size <= maximum


@builtin_rule("length_min")
def length_min(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    minimum = int_param("length_min", params, 0, "Minimum length")
    size = _length(value)
    return size is not None and size >= minimum


@builtin_rule("length_max")
def length_max(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    maximum = int_param("length_max", params, 0, "Maximum length")
    size = _length(value)
    return size is not None and size <= maximum
