"""
Rule registry with instance, global and built-in scopes.

Rule names are looked up in the validator's own instance scope first, then in
the process-wide global table, then in the built-in rule library. Messages
follow the same precedence and fall back to the active language catalog.
"""

import inspect
import logging
import random
import threading
from enum import Enum
from typing import Any

from attrs import Factory, field, frozen
from inflection import underscore

from valicomb.core.language import catalog_key
from valicomb.core.types import RuleCallable, RuleOutcome
from valicomb.exceptions import UnknownRuleError
from valicomb.rules import BUILTIN_RULES

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Invalid"

# Maximum number of arguments passed to a rule: (field, value, params, fields)
RULE_ARITY = 4


class RuleScope(Enum):
    """Where a resolved rule was found."""

    INSTANCE = "instance"
    GLOBAL = "global"
    BUILTIN = "builtin"


@frozen
class RegisteredRule:
    """A named rule callable with an optional default message.

    The number of standard arguments the callable accepts is worked out once,
    when the rule is registered.
    """

    name: str
    func: RuleCallable
    message: str | None = None
    arity: int = field(init=False, default=Factory(lambda self: positional_arity(self.func), takes_self=True))


@frozen
class ResolvedRule:
    """Result of a registry lookup, tagged with the scope it came from."""

    name: str
    func: RuleCallable
    scope: RuleScope
    arity: int = RULE_ARITY

    def __call__(self, field: str, value: Any, params: tuple[Any, ...], fields: Any) -> RuleOutcome:
        return invoke_rule(self.func, field, value, params, fields, arity=self.arity)


class GlobalRuleTable:
    """Process-wide rule table shared by every validator.

    Entries are only added or overridden, never removed, except through
    clear() which exists so test suites can start from a clean table.
    """

    def __init__(self):
        self._rules: dict[str, RegisteredRule] = {}
        self._lock = threading.Lock()

    def register(self, name: str, func: RuleCallable, message: str | None = None) -> None:
        with self._lock:
            self._rules[name] = RegisteredRule(name=name, func=func, message=message)
        logger.debug("Registered global rule '%s'", name)

    def get(self, name: str) -> RegisteredRule | None:
        return self._rules.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._rules

    def clear(self) -> None:
        with self._lock:
            self._rules.clear()


GLOBAL_RULES = GlobalRuleTable()


def positional_arity(func: RuleCallable) -> int:
    """Count how many of the standard rule arguments a callable accepts."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return RULE_ARITY

    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return RULE_ARITY
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return min(count, RULE_ARITY)


def invoke_rule(
    func: RuleCallable,
    field: str,
    value: Any,
    params: tuple[Any, ...],
    fields: Any,
    arity: int | None = None,
) -> RuleOutcome:
    """
    Call a rule with as many of the standard arguments as it accepts.

    Params:
        func: Rule callable
        field: Field name being validated
        value: Single value to check
        params: Rule parameters
        fields: The whole input data tree
        arity: Precomputed argument count; worked out from the signature if omitted

    Returns:
        Whatever the rule returned
    """
    arguments = (field, value, params, fields)
    if arity is None:
        arity = positional_arity(func)
    return func(*arguments[: max(arity, 2)])


class RuleRegistry:
    """
    Per-validator view over the three rule scopes.

    The instance scope belongs to this registry; the global table is shared.
    A message catalog may be attached so message_for() can fall back to
    translated templates.
    """

    def __init__(self, catalog: dict[str, str] | None = None, global_rules: GlobalRuleTable | None = None):
        self._instance: dict[str, RegisteredRule] = {}
        self._global = global_rules if global_rules is not None else GLOBAL_RULES
        self.catalog = catalog or {}

    def register_global(self, name: str, func: RuleCallable, message: str | None = None) -> None:
        """Register a rule visible to every validator in the process."""
        self._global.register(name, func, message)

    def register_instance(self, name: str, func: RuleCallable, message: str | None = None) -> None:
        """Register a rule visible only through this registry."""
        self._instance[name] = RegisteredRule(name=name, func=func, message=message)
        logger.debug("Registered instance rule '%s'", name)

    def resolve(self, name: str) -> ResolvedRule | None:
        """
        Look up a rule by name.

        Params:
            name: Rule name; built-in names may be camelCase or snake_case

        Returns:
            ResolvedRule for the first scope that knows the name, or None
        """
        registered = self._instance.get(name)
        if registered is not None:
            return ResolvedRule(
                name=name, func=registered.func, scope=RuleScope.INSTANCE, arity=registered.arity
            )

        registered = self._global.get(name)
        if registered is not None:
            return ResolvedRule(
                name=name, func=registered.func, scope=RuleScope.GLOBAL, arity=registered.arity
            )

        builtin = BUILTIN_RULES.get(underscore(name))
        if builtin is not None:
            return ResolvedRule(name=underscore(name), func=builtin, scope=RuleScope.BUILTIN)

        return None

    def require(self, name: str) -> ResolvedRule:
        """
        Look up a rule that must exist.

        Raises:
            UnknownRuleError: If no scope knows the name
        """
        resolved = self.resolve(name)
        if resolved is None:
            raise UnknownRuleError(name)
        return resolved

    def exists(self, name: str) -> bool:
        return self.resolve(name) is not None

    def unique_name(self, seed: str | list[str] | tuple[str, ...]) -> str:
        """
        Synthesize a rule name that collides with no instance or global rule.

        Params:
            seed: Field name or list of field names the rule is for

        Returns:
            "<seed parts joined by _>_rule", with a random numeric suffix
            appended until the name is free
        """
        if isinstance(seed, (list, tuple)):
            seed = "_".join(str(part) for part in seed)
        name = f"{seed}_rule"
        while name in self._instance or name in self._global:
            name = f"{seed}_rule_{random.randint(0, 99999)}"
        return name

    def message_for(self, name: str) -> str:
        """
        Get the default message template for a rule.

        Precedence is instance message, global message, catalog entry, then
        the generic "Invalid".
        """
        registered = self._instance.get(name)
        if registered is not None and registered.message is not None:
            return registered.message

        registered = self._global.get(name)
        if registered is not None and registered.message is not None:
            return registered.message

        return self.catalog.get(catalog_key(name), DEFAULT_MESSAGE)

    def clone(self) -> "RuleRegistry":
        """Create a registry with a copy of the instance scope and the same global table."""
        clone = RuleRegistry(catalog=self.catalog, global_rules=self._global)
        clone._instance = dict(self._instance)
        return clone
