"""
Built-in validation rules.

Importing this package registers every rule module in BUILTIN_RULES, keyed
by snake_case rule name.
"""

from valicomb.rules import (  # noqa: F401
    arrays,
    comparison,
    conditional,
    dates,
    length,
    network,
    numeric,
    strings,
    types,
)
from valicomb.rules.base import BUILTIN_RULES, builtin_rule

__all__ = [
    "BUILTIN_RULES",
    "builtin_rule",
]
