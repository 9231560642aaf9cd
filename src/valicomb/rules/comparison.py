"""Presence and field comparison rules."""

from typing import Any

from valicomb.core.values import is_blank, strict_equals
from valicomb.exceptions import RuleParameterError
from valicomb.rules.base import ACCESSOR, builtin_rule, flag, param, sibling_value

ACCEPTED_VALUES = ("yes", "on", 1, "1", True)


@builtin_rule("required")
def required(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """
    Require a non-blank value.

    With a truthy first parameter the key only has to be present; an empty
    string or None stored under it is accepted.
    """
    if flag(params, 0):
        _, present = ACCESSOR.resolve_field(fields, field, check_presence=True)
        return present
    return not is_blank(value)


def _other_field(rule_name: str, params: tuple[Any, ...]) -> str:
    other = param(params, 0)
    if not isinstance(other, str):
        raise RuleParameterError(rule_name, "field name required")
    return other


@builtin_rule("equals")
def equals(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """Require the value to be identical (same type) to another field's value."""
    other = sibling_value(fields, _other_field("equals", params))
    return other is not None and strict_equals(value, other)


@builtin_rule("different")
def different(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """Require another field to be present and not identical to this value."""
    other = sibling_value(fields, _other_field("different", params))
    return other is not None and not strict_equals(value, other)


@builtin_rule("accepted")
def accepted(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """Accept "yes", "on", 1, "1" and True, compared with strict types."""
    if is_blank(value):
        return False
    return any(strict_equals(value, candidate) for candidate in ACCEPTED_VALUES)
