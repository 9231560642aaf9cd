"""Object type and credit card number rules."""

import re
from typing import Any

from valicomb.exceptions import RuleParameterError
from valicomb.rules.base import builtin_rule, param

CARD_PATTERNS = {
    "visa": re.compile(r"^4\d{12}(?:\d{3})?$"),
    "mastercard": re.compile(r"^(5[1-5]|2[2-7])\d{14}$"),
    "amex": re.compile(r"^3[47]\d{13}$"),
    "dinersclub": re.compile(r"^3(?:0[0-5]|[68]\d)\d{11}$"),
    "discover": re.compile(r"^6(?:011|5\d{2})\d{12}$"),
}

NON_DIGITS = re.compile(r"[^0-9]+")


def _expected_type(expected: Any) -> type | str:
    if isinstance(expected, type) or isinstance(expected, str):
        return expected
    return type(expected)


def _class_names(cls: type) -> set[str]:
    names = set()
    for base in cls.__mro__:
        names.add(base.__name__)
        names.add(base.__qualname__)
        names.add(f"{base.__module__}.{base.__qualname__}")
    return names


@builtin_rule("instance_of")
def instance_of(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """
    Require the value to be an instance of a class.

    The class may be given as a type, as an example object whose type is
    used, or as a class name (plain, qualified or dotted with its module).

    Raises:
        RuleParameterError: If no class is given
    """
    expected = param(params, 0)
    if expected is None:
        raise RuleParameterError("instance_of", "class name or object required")
    expected = _expected_type(expected)
    if isinstance(expected, str):
        return expected in _class_names(type(value))
    return isinstance(value, expected)


def luhn_valid(number: str) -> bool:
    """Check a digit string with the Luhn checksum (13 to 19 digits)."""
    if not 13 <= len(number) <= 19:
        return False
    total = 0
    for position, char in enumerate(reversed(number)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total > 0 and total % 10 == 0


@builtin_rule("credit_card")
def credit_card(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """
    Validate a credit card number, optionally restricted to card brands.

    Params (rule):
        A list of allowed brands; or a single brand name, optionally followed
        by a list of allowed brands that must include it
    """
    if value is None or isinstance(value, (bool, list, tuple, dict)):
        return False
    number = NON_DIGITS.sub("", str(value))
    if not number:
        return False

    cards = None
    card_type = None
    first = param(params, 0)
    if isinstance(first, (list, tuple)):
        cards = list(first)
    elif isinstance(first, str):
        card_type = first
        allowed = param(params, 1)
        if isinstance(allowed, (list, tuple)):
            cards = list(allowed)
            if card_type not in cards:
                return False

    if not luhn_valid(number):
        return False

    if cards is None and card_type is None:
        return True

    if card_type is not None:
        pattern = CARD_PATTERNS.get(card_type)
        return pattern is not None and pattern.match(number) is not None

    return any(
        card in CARD_PATTERNS and CARD_PATTERNS[card].match(number) is not None
        for card in cards
    )
