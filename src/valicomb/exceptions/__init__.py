"""
valicomb exception classes.

This package provides all exception types raised by the validation engine
for consistent error handling and reporting.
"""

from valicomb.exceptions.core import (
    InvalidPatternError,
    LanguageError,
    PatternExhaustionError,
    RuleDefinitionError,
    RuleParameterError,
    UnknownRuleError,
    ValicombError,
)

__all__ = [
    "ValicombError",
    "RuleDefinitionError",
    "UnknownRuleError",
    "RuleParameterError",
    "InvalidPatternError",
    "PatternExhaustionError",
    "LanguageError",
]
