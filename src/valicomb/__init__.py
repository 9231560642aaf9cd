"""
Valicomb - declarative validation for untyped input data

Valicomb validates nested data trees (form posts, JSON bodies, argument maps)
against per-field rules and reports localized, labelled error messages.
"""

import logging
from importlib.metadata import version

from valicomb.config import ValidatorSettings
from valicomb.exceptions import (
    InvalidPatternError,
    LanguageError,
    PatternExhaustionError,
    RuleDefinitionError,
    RuleParameterError,
    UnknownRuleError,
    ValicombError,
)
from valicomb.validator import RuleEntry, RuleHandle, Validator

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = version("valicomb")

__all__ = [
    "__version__",
    "Validator",
    "RuleHandle",
    "RuleEntry",
    "ValidatorSettings",
    "ValicombError",
    "RuleDefinitionError",
    "UnknownRuleError",
    "RuleParameterError",
    "InvalidPatternError",
    "PatternExhaustionError",
    "LanguageError",
]
