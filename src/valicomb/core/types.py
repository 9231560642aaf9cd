"""
Core type definitions for valicomb.

This module contains the type aliases shared by the field accessor, the rule
registry and the validator.
"""

from collections.abc import Callable
from typing import Any

DataTree = dict[str, Any]

RuleParams = tuple[Any, ...]

RuleOutcome = bool | tuple[bool, str | None] | list[Any]

# (field, value, params, fields) -> outcome; shorter signatures are adapted
RuleCallable = Callable[..., RuleOutcome]

ResolvedValue = tuple[Any, bool]

ErrorMap = dict[str, list[str]]
