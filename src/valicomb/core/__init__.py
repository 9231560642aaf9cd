"""
Core valicomb engine components.

This package provides field path resolution, value helpers, message
formatting, error collection, message catalogs and the rule registry.
"""

from valicomb.core.errors import ErrorManager, auto_label
from valicomb.core.field_access import WILDCARD, FieldAccessor, PathComponents, split_path
from valicomb.core.formatting import ParamKind, render_param, render_value, sprintf
from valicomb.core.registry import (
    GLOBAL_RULES,
    GlobalRuleTable,
    RegisteredRule,
    ResolvedRule,
    RuleRegistry,
    RuleScope,
)
from valicomb.core.types import DataTree, ErrorMap, RuleCallable, RuleOutcome, RuleParams

__all__ = [
    "WILDCARD",
    "FieldAccessor",
    "PathComponents",
    "split_path",
    "ErrorManager",
    "auto_label",
    "ParamKind",
    "render_param",
    "render_value",
    "sprintf",
    "GLOBAL_RULES",
    "GlobalRuleTable",
    "RegisteredRule",
    "ResolvedRule",
    "RuleRegistry",
    "RuleScope",
    "DataTree",
    "ErrorMap",
    "RuleCallable",
    "RuleOutcome",
    "RuleParams",
]
