"""
Character-class and pattern rules for text values.

Letter and digit classes are Unicode-aware: "café" is alphabetic and "٣"
is a digit. Non-string values always fail.
"""

import re
from functools import lru_cache
from typing import Any

import regex

from valicomb.exceptions import InvalidPatternError, PatternExhaustionError, RuleParameterError
from valicomb.rules.base import builtin_rule, flag, param

ALPHA_PATTERN = re.compile(r"[^\W\d_]+")
ALPHA_NUM_PATTERN = re.compile(r"[^\W_]+")
SLUG_PATTERN = re.compile(r"^[a-z0-9_-]+$", re.IGNORECASE)


@builtin_rule("alpha")
def alpha(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    return isinstance(value, str) and ALPHA_PATTERN.fullmatch(value) is not None


@builtin_rule("alpha_num")
def alpha_num(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    return isinstance(value, str) and ALPHA_NUM_PATTERN.fullmatch(value) is not None


@builtin_rule("ascii")
def ascii_(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    return isinstance(value, str) and value.isascii()


@builtin_rule("slug")
def slug(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """Letters a-z (any case), digits, dashes and underscores."""
    return isinstance(value, str) and SLUG_PATTERN.match(value) is not None


@builtin_rule("contains")
def contains(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """
    Require the value to contain a substring.

    The second parameter switches to case-insensitive matching when False;
    matching is case-sensitive by default.
    """
    needle = param(params, 0)
    if not isinstance(needle, str) or not isinstance(value, str):
        return False
    if flag(params, 1, default=True):
        return needle in value
    return needle.casefold() in value.casefold()


# Seconds a single match may run before the pattern counts as exhausted
MATCH_TIMEOUT = 1.0


@lru_cache(maxsize=128)
def compile_pattern(pattern: str) -> regex.Pattern:
    """
    Compile a user-supplied pattern.

    Patterns may be written bare ("^[a-z]+$") or with delimiters and trailing
    flags ("/^[a-z]+$/i"); delimited patterns honor the i, m, s and x flags.

    Raises:
        InvalidPatternError: If the pattern does not compile
        PatternExhaustionError: If compiling exceeds the engine's limits
    """
    source, flags = _strip_delimiters(pattern)
    try:
        return regex.compile(source, flags)
    except regex.error as e:
        raise InvalidPatternError(pattern, str(e)) from e
    except (RecursionError, OverflowError) as e:
        raise PatternExhaustionError(pattern, str(e) or type(e).__name__) from e


_DELIMITED = re.compile(r"^([/#~!@%|])(.*)\1([imsxu]*)$", re.DOTALL)

_FLAG_BITS = {"i": regex.IGNORECASE, "m": regex.MULTILINE, "s": regex.DOTALL, "x": regex.VERBOSE, "u": 0}


def _strip_delimiters(pattern: str) -> tuple[str, int]:
    match = _DELIMITED.match(pattern)
    if match is None:
        return pattern, 0
    flags = 0
    for letter in match.group(3):
        flags |= _FLAG_BITS[letter]
    return match.group(2), flags


@builtin_rule("regex")
def regex_(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """
    Require the value to match a regular expression anywhere in the text.

    Each match is bounded by MATCH_TIMEOUT so catastrophic backtracking
    surfaces as an error instead of stalling the run.

    Raises:
        RuleParameterError: If no pattern string is given
        InvalidPatternError: If the pattern is malformed
        PatternExhaustionError: If matching exceeds the engine's limits
    """
    pattern = param(params, 0)
    if not isinstance(pattern, str):
        raise RuleParameterError("regex", "pattern must be provided as a string")
    compiled = compile_pattern(pattern)
    if not isinstance(value, str):
        return False
    try:
        return compiled.search(value, timeout=MATCH_TIMEOUT) is not None
    except TimeoutError as e:
        raise PatternExhaustionError(pattern, f"no result within {MATCH_TIMEOUT}s") from e
    except (RecursionError, OverflowError) as e:
        raise PatternExhaustionError(pattern, str(e) or type(e).__name__) from e
