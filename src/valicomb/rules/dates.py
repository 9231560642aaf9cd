"""
Date rules.

Free-form date text is parsed with ``python-dateutil``. Relative phrases
("next monday", "2 days ago") are rejected, as are dates before the Unix
epoch, so that only absolute calendar dates pass ``date``.
"""

import re
from datetime import date, datetime, time, timezone
from typing import Any

from dateutil import parser as date_parser

from valicomb.exceptions import RuleParameterError
from valicomb.rules.base import builtin_rule, param

KNOWN_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%Y-%m-%dT%H:%M:%S%z",
)

RELATIVE_WORDS = re.compile(r"\b(next|last|ago|tomorrow|yesterday|today|now)\b", re.IGNORECASE)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _matches_format(text: str, fmt: str) -> bool:
    try:
        datetime.strptime(text, fmt)
    except ValueError:
        return False
    return True


def _as_aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def to_datetime(value: Any) -> datetime | None:
    """
    Convert a date-like value to a timezone-aware datetime.

    Params:
        value: datetime, date, or date text

    Returns:
        The parsed moment (naive values are taken as UTC), or None when the
        value cannot be parsed
    """
    if isinstance(value, datetime):
        return _as_aware(value)
    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return _as_aware(datetime.fromisoformat(value))
    except ValueError:
        pass
    try:
        return _as_aware(date_parser.parse(value))
    except (ValueError, OverflowError):
        return None


@builtin_rule("date")
def date_(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """Accept date objects and absolute date text on or after 1970-01-01."""
    if isinstance(value, date):
        return True
    if not isinstance(value, str):
        return False
    if any(_matches_format(value, fmt) for fmt in KNOWN_FORMATS):
        return True
    if RELATIVE_WORDS.search(value):
        return False
    moment = to_datetime(value)
    return moment is not None and moment > EPOCH


@builtin_rule("date_format")
def date_format(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """
    Require text in an exact strptime format such as "%Y-%m-%d".

    Raises:
        RuleParameterError: If the format is not a string
    """
    fmt = param(params, 0)
    if not isinstance(fmt, str):
        raise RuleParameterError("date_format", "date format parameter must be a string")
    return isinstance(value, str) and _matches_format(value, fmt)


def _comparison_pair(rule_name: str, value: Any, params: tuple[Any, ...]) -> tuple[datetime, datetime] | None:
    when = param(params, 0)
    if when is None:
        raise RuleParameterError(rule_name, "comparison date required")
    moment, reference = to_datetime(value), to_datetime(when)
    if moment is None or reference is None:
        return None
    return moment, reference


@builtin_rule("date_before")
def date_before(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    pair = _comparison_pair("date_before", value, params)
    return pair is not None and pair[0] < pair[1]


@builtin_rule("date_after")
def date_after(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    pair = _comparison_pair("date_after", value, params)
    return pair is not None and pair[0] > pair[1]
