"""
Message parameter rendering and printf-style formatting.

Rule parameters are arbitrary Python values. Before they are interpolated
into a message template they are classified into a closed set of kinds and
rendered through a formatter table. Templates use printf conversions
(``%s``, ``%d``, ``%1$s``, ``%05.2f``) because that is what the message
catalogs are written in.
"""

import json
import re
from collections.abc import Callable
from datetime import date, datetime
from enum import Enum
from typing import Any

from valicomb.core.values import container_values, is_container, is_number, numeric_text

# Matches %s, %d, %1$s, %-10s, %+d, %05.2f, %% ...
SPECIFIER_PATTERN = re.compile(
    r"%(?:(?P<position>\d+)\$)?(?P<flags>[-+]?)(?P<width>\d+)?(?:\.(?P<precision>\d+))?(?P<conversion>[sdfFeEgGoxXbcuU%])"
)

_INTEGER_CONVERSIONS = frozenset("dubcoxXU")
_FLOAT_CONVERSIONS = frozenset("fFeEgG")


class ParamKind(Enum):
    """Kinds of values that can appear as message parameters."""

    NULL = "null"
    BOOLEAN = "boolean"
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    DATE = "date"
    OBJECT = "object"


class FormattingError(ValueError):
    """Raised internally when a value cannot satisfy a printf conversion."""

    pass


def classify(value: Any) -> ParamKind:
    """
    Classify a parameter value for rendering.

    Params:
        value: Raw rule parameter

    Returns:
        The ParamKind used to pick a renderer
    """
    if value is None:
        return ParamKind.NULL
    if isinstance(value, bool):
        return ParamKind.BOOLEAN
    if isinstance(value, (str, int, float)):
        return ParamKind.SCALAR
    if isinstance(value, date):
        return ParamKind.DATE
    if is_container(value) or isinstance(value, (set, frozenset)):
        return ParamKind.SEQUENCE
    return ParamKind.OBJECT


def _render_item(value: Any) -> str:
    kind = classify(value)
    if kind is ParamKind.SCALAR:
        return numeric_text(value) if is_number(value) else str(value)
    return str(PARAM_RENDERERS[kind](value))


def _render_sequence(value: Any) -> str:
    items = container_values(value) if is_container(value) else list(value)
    return "['" + "', '".join(_render_item(item) for item in items) + "']"


def _render_object(value: Any) -> str:
    if isinstance(value, type):
        return value.__qualname__
    return type(value).__qualname__


PARAM_RENDERERS: dict[ParamKind, Callable[[Any], Any]] = {
    ParamKind.NULL: lambda value: "null",
    ParamKind.BOOLEAN: lambda value: "true" if value else "false",
    ParamKind.SCALAR: lambda value: value,
    ParamKind.SEQUENCE: _render_sequence,
    ParamKind.DATE: lambda value: value.strftime("%Y-%m-%d"),
    ParamKind.OBJECT: _render_object,
}


def render_param(value: Any) -> Any:
    """
    Render a rule parameter for interpolation.

    Strings and numbers are returned unchanged so numeric conversions such as
    ``%d`` keep working; everything else becomes display text.
    """
    return PARAM_RENDERERS[classify(value)](value)


def render_value(value: Any) -> str:
    """
    Render the value that failed validation for the ``{value}`` placeholder.

    Params:
        value: The offending input value

    Returns:
        "null" for None, "true"/"false" for booleans, compact JSON for
        containers, "YYYY-MM-DD HH:MM:SS" for datetimes, "YYYY-MM-DD" for
        dates, and str() otherwise
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if is_container(value):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    if is_number(value):
        return numeric_text(value)
    return str(value)


def count_specifiers(template: str) -> int:
    """Count printf conversion specifiers (``%%`` included) in a template."""
    return len(SPECIFIER_PATTERN.findall(template))


def _as_int(value: Any) -> int:
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(value)
    if value is None or value == "":
        return 0
    if isinstance(value, str):
        try:
            return int(float(value.strip()))
        except ValueError as e:
            raise FormattingError(f"{value!r} is not numeric") from e
    raise FormattingError(f"{type(value).__name__} is not numeric")


def _as_float(value: Any) -> float:
    if isinstance(value, (bool, int, float)):
        return float(value)
    if value is None or value == "":
        return 0.0
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as e:
            raise FormattingError(f"{value!r} is not numeric") from e
    raise FormattingError(f"{type(value).__name__} is not numeric")


def _as_text(value: Any) -> str:
    if is_number(value):
        return numeric_text(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def _convert(match: re.Match, value: Any) -> str:
    flags = match.group("flags") or ""
    width = match.group("width") or ""
    precision = match.group("precision")
    conversion = match.group("conversion")

    align = "<" if "-" in flags else ">"
    sign = "+" if "+" in flags else ""
    fill = "0" if width.startswith("0") and align == ">" else " "
    padding = f"{fill}{align}" if width else ""
    width = width.lstrip("0") or ("0" if width else "")

    if conversion in _INTEGER_CONVERSIONS:
        number = _as_int(value)
        if conversion == "c":
            return format(chr(number), f"{padding}{width}")
        code = {"x": "x", "X": "X", "o": "o", "b": "b"}.get(conversion, "d")
        return format(number, f"{padding}{sign}{width}{code}")

    if conversion in _FLOAT_CONVERSIONS:
        number = _as_float(value)
        digits = precision if precision is not None else "6"
        return format(number, f"{padding}{sign}{width}.{digits}{conversion}")

    text = _as_text(value)
    if precision is not None:
        text = text[: int(precision)]
    return format(text, f"{padding}{width}")


def sprintf(template: str, values: list[Any]) -> str:
    """
    Format a printf-style template with a list of values.

    Templates without specifiers, or calls without values, are returned
    verbatim so literal ``%`` characters survive. Missing values are padded
    with empty strings. Any conversion failure returns the template unchanged.

    Params:
        template: Message template
        values: Rendered parameter values

    Returns:
        The formatted message
    """
    specifier_count = count_specifiers(template)
    if not values or specifier_count == 0:
        return template

    padded = list(values)
    while len(padded) < specifier_count:
        padded.append("")

    cursor = 0

    def substitute(match: re.Match) -> str:
        nonlocal cursor
        if match.group("conversion") == "%":
            return "%"
        position = match.group("position")
        if position is not None:
            index = int(position) - 1
        else:
            index = cursor
            cursor += 1
        if index < 0 or index >= len(padded):
            raise FormattingError(f"no value for argument {index + 1}")
        return _convert(match, padded[index])

    try:
        return SPECIFIER_PATTERN.sub(substitute, template)
    except (FormattingError, ValueError, OverflowError):
        return template
