"""
Conditional presence rules.

``optional`` and ``nullable`` always pass; their effect lives in the
validator's skip policy. ``required_with`` and ``required_without`` make a
field mandatory depending on whether other fields are filled in.
"""

from typing import Any

from valicomb.core.values import is_blank
from valicomb.rules.base import builtin_rule, flag, param, sibling_value


@builtin_rule("optional")
def optional(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    return True


@builtin_rule("nullable")
def nullable(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    return True


def _related_fields(params: tuple[Any, ...]) -> list[Any] | None:
    related = param(params, 0)
    if related is None:
        return None
    if isinstance(related, (list, tuple)):
        return list(related)
    return [related]


@builtin_rule("required_with")
def required_with(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """
    Require the value when any (or, with the second parameter, all) of the
    listed fields are filled in.

    With the all flag an empty list counts as fully filled.
    """
    related = _related_fields(params)
    if related is None:
        return True
    filled = [not is_blank(sibling_value(fields, other)) for other in related]
    conditionally_required = all(filled) if flag(params, 1) else any(filled)
    return not (conditionally_required and is_blank(value))


@builtin_rule("required_without")
def required_without(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """
    Require the value when any (or, with the second parameter, all) of the
    listed fields are missing or blank.

    With the all flag an empty list counts as fully missing.
    """
    related = _related_fields(params)
    if related is None:
        return True
    empty = [is_blank(sibling_value(fields, other)) for other in related]
    conditionally_required = all(empty) if flag(params, 1) else any(empty)
    return not (conditionally_required and is_blank(value))
