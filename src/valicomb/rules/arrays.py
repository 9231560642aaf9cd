"""
Membership and array-shape rules.

Haystacks may be sequences or mappings. Associative mappings (any
non-numeric key) are searched by key; index-keyed ones by value unless the
``force_keys`` switch says otherwise.
"""

from typing import Any

from valicomb.core.values import (
    container_keys,
    container_values,
    contains_value,
    is_container,
    loose_equals,
)
from valicomb.rules.base import ACCESSOR, builtin_rule, flag, param


def _candidates(haystack: Any, force_keys: bool) -> list[Any]:
    if force_keys or ACCESSOR.is_associative(haystack):
        return container_keys(haystack)
    return container_values(haystack)


@builtin_rule("array")
def array(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    return is_container(value)


@builtin_rule("in")
def in_(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """
    Require the value to be one of the allowed values.

    Params (rule):
        haystack: Allowed values (sequence or mapping)
        strict: Compare with identical types
        force_keys: Search the haystack's keys instead of its values
    """
    haystack = param(params, 0)
    if not is_container(haystack):
        return False
    candidates = _candidates(haystack, flag(params, 2))
    return contains_value(candidates, value, strict=flag(params, 1))


@builtin_rule("not_in")
def not_in(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    return not in_(field, value, params, fields)


@builtin_rule("list_contains")
def list_contains(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """Require the value (a list or mapping) to contain the needle parameter."""
    if not is_container(value):
        return False
    candidates = _candidates(value, flag(params, 2))
    return contains_value(candidates, param(params, 0), strict=flag(params, 1))


@builtin_rule("subset")
def subset(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """
    Require every element of the value to be in the allowed list.

    A scalar value is checked as a single element. Elements are compared as
    text so that 1 and "1" are the same item.
    """
    allowed = param(params, 0)
    if allowed is None:
        return False
    allowed_values = container_values(allowed) if is_container(allowed) else list(params)

    if not is_container(value):
        return any(loose_equals(candidate, value) for candidate in allowed_values)

    allowed_text = {_as_text(candidate) for candidate in allowed_values}
    return all(_as_text(item) in allowed_text for item in container_values(value))


def _as_text(value: Any) -> str:
    if value is True:
        return "1"
    if value is False or value is None:
        return ""
    return str(value)


@builtin_rule("contains_unique")
def contains_unique(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """Require a list whose elements are all distinct."""
    if not is_container(value):
        return False
    items = container_values(value)
    seen: list[Any] = []
    for item in items:
        if any(item == previous for previous in seen):
            return False
        seen.append(item)
    return True


@builtin_rule("array_has_keys")
def array_has_keys(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """Require a mapping that has every key listed in the first parameter."""
    keys = param(params, 0)
    if not is_container(value) or not isinstance(keys, (list, tuple)) or not keys:
        return False
    present = set(container_keys(value))
    for key in keys:
        if isinstance(key, bool) or not isinstance(key, (str, int)):
            return False
        if key not in present:
            return False
    return True
