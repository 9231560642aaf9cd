"""
Validator: rule registration and the validation run.

A Validator holds one input data tree, an ordered list of rule entries and
the collected errors. Rules are attached to field paths with ``rule()`` (or
the mapping helpers) and evaluated in registration order by ``validate()``.

Example:
    v = Validator({"name": "", "email": "someone@example.com"})
    v.rule("required", "name")
    v.rule("email", "email").label("E-mail")
    v.validate()          # False
    v.errors("name")      # ["Name is required"]
"""

import copy
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Literal

from valicomb.config import ValidatorSettings
from valicomb.core import language
from valicomb.core.errors import FIELD_TOKEN, ErrorManager
from valicomb.core.field_access import FieldAccessor, root_segment, split_path
from valicomb.core.registry import GLOBAL_RULES, RuleRegistry
from valicomb.core.types import DataTree, ErrorMap, RuleCallable
from valicomb.core.values import is_empty_element, is_mapping
from valicomb.exceptions import RuleDefinitionError, UnknownRuleError

logger = logging.getLogger(__name__)

NOT_ALLOWED_FIELD_MESSAGE = "{field} is not an allowed field"

# Rules evaluated even when the field is empty or absent
ALWAYS_RUN_RULES = ("required_with", "required_without")
NULL_EXEMPT_RULES = ("nullable", "required", "accepted")
EMPTY_EXEMPT_RULES = ("required", "accepted")


@dataclass
class RuleEntry:
    """One registered rule application: a rule name over a list of fields."""

    rule: str
    fields: list[str]
    params: tuple[Any, ...] = ()
    message: str = ""


@dataclass
class RuleHandle:
    """
    Reference to the entry created by ``Validator.rule()``.

    The handle is how a caller customizes that one entry's message or label,
    and ``rule()`` chains back to the validator to add the next entry.
    """

    validator: "Validator"
    entry: RuleEntry = field(repr=False)

    def message(self, text: str) -> "RuleHandle":
        """Replace the entry's message template."""
        self.entry.message = text
        return self

    def label(self, text: str) -> "RuleHandle":
        """Set the display label of the entry's first field."""
        self.validator.labels({self.entry.fields[0]: text})
        return self

    def rule(self, rule: str | RuleCallable, fields: str | list[str], *params: Any) -> "RuleHandle":
        """Add another rule to the same validator."""
        return self.validator.rule(rule, fields, *params)


class Validator:
    """
    Validate an input data tree against registered field rules.

    Params:
        data: Input tree to validate (mapping of field name -> value)
        fields: Optional whitelist of top-level keys to keep from data
        lang: Message catalog language; overrides settings and the process default
        lang_dir: Message catalog directory; overrides settings and the process default
        settings: Validator switches (label prefixing, early abort, strict mode)

    Raises:
        LanguageError: If the message catalog cannot be loaded
    """

    def __init__(
        self,
        data: DataTree | None = None,
        fields: list[str] | None = None,
        lang: str | None = None,
        lang_dir: str | Path | None = None,
        settings: ValidatorSettings | None = None,
    ):
        self.settings = settings.model_copy() if settings is not None else ValidatorSettings()
        if lang is not None:
            self.settings.lang = lang
        if lang_dir is not None:
            self.settings.lang_dir = str(lang_dir)

        self._data = _whitelist(data or {}, fields)
        self._entries: list[RuleEntry] = []
        self._accessor = FieldAccessor()
        self._error_manager = ErrorManager(prepend_labels=self.settings.prepend_labels)
        catalog = language.load_language(self.settings.lang, self.settings.lang_dir)
        self._registry = RuleRegistry(catalog=catalog)

    @staticmethod
    def lang(code: str | None = None) -> str:
        """Get or set the process-wide default message language."""
        return language.lang(code)

    @staticmethod
    def lang_dir(path: str | Path | None = None) -> str:
        """Get or set the process-wide default message catalog directory."""
        return language.lang_dir(path)

    @classmethod
    def add_rule(cls, name: str, func: RuleCallable, message: str | None = None) -> None:
        """
        Register a rule for every validator in the process.

        Params:
            name: Rule name; overrides a built-in rule of the same name
            func: Callable taking (field, value[, params[, fields]])
            message: Default message template for the rule
        """
        GLOBAL_RULES.register(name, func, message)

    def add_instance_rule(self, name: str, func: RuleCallable, message: str | None = None) -> None:
        """Register a rule visible only to this validator (and its copies)."""
        self._registry.register_instance(name, func, message)

    def unique_rule_name(self, fields: str | list[str]) -> str:
        return self._registry.unique_name(fields)

    def has_validator(self, name: str) -> bool:
        """Check whether a rule name resolves in any scope."""
        return self._registry.exists(name)

    def data(self) -> DataTree:
        return self._data

    def errors(self, field: str | None = None) -> ErrorMap | list[str] | Literal[False]:
        """
        Get validation errors.

        Params:
            field: Optional field name

        Returns:
            The full error map, or the field's messages, or False when the
            field has no errors
        """
        return self._error_manager.get_errors(field)

    def error(self, field: str, message: str, params: tuple[Any, ...] | list[Any] = (), value: Any = None) -> None:
        """Record an error manually, with the same templating as rule failures."""
        self._error_manager.add_error(field, message, params, value)

    def labels(self, labels: dict[str, str]) -> "Validator":
        self._error_manager.set_labels(labels)
        return self

    def set_prepend_labels(self, prepend: bool = True) -> None:
        self.settings.prepend_labels = prepend
        self._error_manager.prepend_labels = prepend

    def strict(self, enable: bool = True) -> "Validator":
        """Report input keys that no rule refers to as errors."""
        self.settings.strict = enable
        return self

    def stop_on_first_fail(self, stop: bool = True) -> None:
        self.settings.stop_on_first_fail = stop

    def reset(self) -> None:
        """Drop data, errors, rule entries and labels."""
        self._data = {}
        self._error_manager.clear_errors()
        self._entries = []
        self._error_manager.clear_labels()

    def rule(self, rule: str | RuleCallable, fields: str | list[str], *params: Any) -> RuleHandle:
        """
        Attach a rule to one or more fields.

        Params:
            rule: Rule name, or a callable to register as a one-off instance rule
            fields: Field path or list of field paths (dots and "*" allowed)
            *params: Rule parameters; for a callable, a leading string is
                also used as its message

        Returns:
            RuleHandle for customizing the new entry

        Raises:
            UnknownRuleError: If the rule name is not registered in any scope
            RuleDefinitionError: If no field is given
        """
        field_list = [fields] if isinstance(fields, str) else list(fields)

        if callable(rule):
            name = self._registry.unique_name(field_list)
            message = params[0] if params and isinstance(params[0], str) else None
            self._registry.register_instance(name, rule, message)
            rule = name

        resolved = self._registry.resolve(rule)
        if resolved is None:
            raise UnknownRuleError(rule, type(self).__name__)
        if not field_list:
            raise RuleDefinitionError(resolved.name, "at least one field is required")

        message = self._registry.message_for(resolved.name)
        if FIELD_TOKEN not in message:
            message = f"{FIELD_TOKEN} {message}"

        entry = RuleEntry(rule=resolved.name, fields=field_list, params=tuple(params), message=message)
        self._entries.append(entry)
        return RuleHandle(self, entry)

    def rules(self, rules: dict[str, Any]) -> None:
        """
        Add rules from a mapping of rule name -> applications.

        Each application is a field name, or a list ``[fields, *params]``
        optionally ending with ``{"message": "..."}``.

        Example:
            v.rules({
                "required": ["name", "email"],
                "length_min": [["name", 2]],
                "in": [["role", ["admin", "user"], {"message": "{field} is unknown"}]],
            })
        """
        for rule_name, applications in rules.items():
            if not isinstance(applications, (list, tuple)):
                self.rule(rule_name, applications)
                continue
            for application in applications:
                if not isinstance(application, (list, tuple)):
                    application = [application]
                arguments, message = _split_message(list(application))
                handle = self.rule(rule_name, *arguments)
                if message is not None:
                    handle.message(message)

    def map_one_field_to_rules(self, field: str, rules: list[Any]) -> None:
        """
        Add several rules to one field.

        Params:
            field: Field path
            rules: Items that are a rule name, or ``[rule, *params]`` optionally
                ending with ``{"message": "..."}``
        """
        for rule in rules:
            if not isinstance(rule, (list, tuple)):
                rule = [rule]
            arguments, message = _split_message(list(rule))
            rule_name, params = arguments[0], arguments[1:]
            handle = self.rule(rule_name, field, *params)
            if message is not None:
                handle.message(message)

    def for_fields(self, rules: dict[str, list[Any]]) -> "Validator":
        """Add rules from a mapping of field -> rule list; see map_one_field_to_rules()."""
        for field_name, field_rules in rules.items():
            self.map_one_field_to_rules(field_name, field_rules)
        return self

    def map_many_fields_to_rules(self, rules: dict[str, list[Any]]) -> None:
        self.for_fields(rules)

    def defined_fields(self) -> list[str]:
        """Top-level keys referred to by at least one rule, in first-use order."""
        defined: dict[str, None] = {}
        for entry in self._entries:
            for field_name in entry.fields:
                defined[root_segment(field_name)] = None
        return list(defined)

    def extra_fields(self) -> list[Any]:
        """Top-level input keys that no rule refers to, in input order."""
        defined = set(self.defined_fields())
        return [key for key in self._data if str(key) not in defined]

    def has_extra_fields(self) -> bool:
        return bool(self.extra_fields())

    def with_data(self, data: DataTree, fields: list[str] | None = None) -> "Validator":
        """
        Create an independent validator with the same rules for new data.

        Rule entries, labels, settings and instance rules are copied; errors
        start empty. Changes to the copy never affect this validator.
        """
        clone = copy.copy(self)
        clone.settings = self.settings.model_copy()
        clone._data = _whitelist(data, fields)
        clone._entries = [replace(entry, fields=list(entry.fields)) for entry in self._entries]
        clone._accessor = FieldAccessor()
        clone._error_manager = self._error_manager.copy()
        clone._registry = self._registry.clone()
        return clone

    def validate(self) -> bool:
        """
        Run every rule entry against the data.

        Returns:
            True when no errors were recorded

        Raises:
            RuleDefinitionError: If a rule is misconfigured (bad parameters,
                malformed pattern); exceptions raised by custom rules
                propagate unchanged
        """
        self._error_manager.clear_errors()
        logger.debug("Validating %d rule entries", len(self._entries))

        stopped = False
        for entry in self._entries:
            for field_name in entry.fields:
                if self._apply(entry, field_name) or not self.settings.stop_on_first_fail:
                    continue
                stopped = True
                break
            if stopped:
                logger.debug("Stopped after first failure on rule '%s'", entry.rule)
                break

        if self.settings.strict and not stopped:
            self._report_extra_fields()

        errors = self._error_manager.get_errors()
        logger.debug("Validation finished with %d failing fields", len(errors))
        return self._error_manager.has_no_errors()

    def _apply(self, entry: RuleEntry, field_name: str) -> bool:
        """Evaluate one entry for one field; return False if an error was recorded."""
        values, aggregate = self._accessor.resolve(self._data, split_path(field_name))
        if not self._must_run(entry, field_name, values, aggregate):
            return True

        resolved = self._registry.require(entry.rule)
        if not aggregate:
            values = [values]
        elif not self._has_rule("required", field_name):
            values = [value for value in values if not is_empty_element(value)]

        result = True
        failed = False
        failed_value = None
        custom_message = None
        for value in values:
            outcome = resolved(field_name, value, entry.params, self._data)
            if isinstance(outcome, (list, tuple)):
                valid = bool(outcome[0]) if outcome else False
                if not valid and custom_message is None and len(outcome) > 1 and isinstance(outcome[1], str):
                    custom_message = outcome[1]
            else:
                valid = bool(outcome)
            if not valid and not failed:
                failed = True
                failed_value = value
            result = result and valid

        if result:
            return True
        self.error(field_name, custom_message or entry.message, entry.params, failed_value)
        return False

    def _must_run(self, entry: RuleEntry, field_name: str, values: Any, aggregate: bool) -> bool:
        """Decide whether a rule applies to a field's current value."""
        if entry.rule in ALWAYS_RUN_RULES:
            return True

        if (
            entry.rule not in NULL_EXEMPT_RULES
            and self._has_rule("nullable", field_name)
            and values is None
        ):
            return False

        if self._has_rule("optional", field_name) and values is None:
            return False

        if not self._has_rule("required", field_name) and entry.rule not in EMPTY_EXEMPT_RULES:
            if aggregate:
                return len(values) != 0
            return values is not None and not (isinstance(values, str) and values == "")

        return True

    def _has_rule(self, name: str, field_name: str) -> bool:
        return any(entry.rule == name and field_name in entry.fields for entry in self._entries)

    def _report_extra_fields(self) -> None:
        extra = self.extra_fields()
        if extra:
            logger.debug("Strict mode found extra fields: %s", extra)
        message = self._registry.catalog.get(language.catalog_key("notAllowedField"))
        if message is None:
            message = NOT_ALLOWED_FIELD_MESSAGE
        elif FIELD_TOKEN not in message:
            message = f"{FIELD_TOKEN} {message}"
        for key in extra:
            self.error(str(key), message)
            if self.settings.stop_on_first_fail:
                break


def _whitelist(data: DataTree, fields: list[str] | None) -> DataTree:
    if not fields or not is_mapping(data):
        return data
    allowed = set(fields)
    return {key: value for key, value in data.items() if key in allowed}


def _split_message(arguments: list[Any]) -> tuple[list[Any], str | None]:
    """Remove a trailing {"message": ...} element from rule arguments."""
    if arguments and isinstance(arguments[-1], dict) and set(arguments[-1]) == {"message"}:
        return arguments[:-1], arguments[-1]["message"]
    return arguments, None
