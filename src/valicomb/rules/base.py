"""
Built-in rule table and helpers shared by the rule modules.

Every built-in rule is a plain function with the signature
``(field, value, params, fields) -> bool`` registered under its snake_case
name with the ``builtin_rule`` decorator.
"""

from collections.abc import Callable
from typing import Any

from valicomb.core.field_access import FieldAccessor
from valicomb.core.types import RuleCallable
from valicomb.exceptions import RuleParameterError

BUILTIN_RULES: dict[str, RuleCallable] = {}

ACCESSOR = FieldAccessor()


def builtin_rule(name: str) -> Callable[[RuleCallable], RuleCallable]:
    """
    Register a function as a built-in rule.

    Params:
        name: Canonical snake_case rule name

    Returns:
        Decorator that stores the function and returns it unchanged
    """

    def decorator(func: RuleCallable) -> RuleCallable:
        BUILTIN_RULES[name] = func
        return func

    return decorator


def param(params: tuple[Any, ...], index: int, default: Any = None) -> Any:
    """Get a positional rule parameter, or the default when absent or None."""
    if index < len(params) and params[index] is not None:
        return params[index]
    return default


def int_param(rule_name: str, params: tuple[Any, ...], index: int, label: str) -> int:
    """
    Get a required integer rule parameter.

    Raises:
        RuleParameterError: If the parameter is missing or not an int
    """
    value = param(params, index)
    if not isinstance(value, int) or isinstance(value, bool):
        raise RuleParameterError(rule_name, f"{label} parameter must be an integer")
    return value


def flag(params: tuple[Any, ...], index: int, default: bool = False) -> bool:
    """Read an optional boolean switch parameter."""
    return bool(param(params, index, default))


def sibling_value(fields: Any, path: Any) -> Any:
    """Resolve another field of the input tree by its dotted path."""
    value, _ = ACCESSOR.resolve_field(fields, str(path))
    return value
