"""
Tests for instance_of and credit_card rules.
"""

from datetime import date, datetime

import pytest

from valicomb.exceptions import RuleParameterError
from valicomb.rules.types import credit_card, instance_of, luhn_valid

VISA = "4111111111111111"
MASTERCARD = "5555555555554444"
AMEX = "378282246310005"
DINERS = "30569309025904"
DISCOVER = "6011111111111117"


class Animal:
    pass


class Dog(Animal):
    pass


class TestInstanceOf:
    """Tests for the instance_of rule."""

    def test_type_param(self):
        """Test a class parameter including inheritance."""
        assert instance_of("f", Dog(), (Animal,), {}) is True
        assert instance_of("f", Animal(), (Dog,), {}) is False

    def test_object_param(self):
        """Test an example object stands for its class."""
        assert instance_of("f", datetime(2020, 1, 1), (date(2020, 1, 1),), {}) is True

    def test_class_name_param(self):
        """Test plain and dotted class names."""
        assert instance_of("f", Dog(), ("Animal",), {}) is True
        assert instance_of("f", datetime.now(), ("datetime.datetime",), {}) is True
        assert instance_of("f", Dog(), ("Cat",), {}) is False

    def test_missing_param(self):
        """Test a missing class raises."""
        with pytest.raises(RuleParameterError):
            instance_of("f", Dog(), (), {})


class TestCreditCard:
    """Tests for the credit_card rule."""

    def test_luhn(self):
        """Test the checksum and length bounds."""
        assert luhn_valid(VISA) is True
        assert luhn_valid("4111111111111112") is False
        assert luhn_valid("0000000000000") is False
        assert luhn_valid("4111") is False

    def test_any_card(self):
        """Test valid numbers with separators."""
        assert credit_card("f", "4111 1111 1111 1111", (), {}) is True
        assert credit_card("f", "4111-1111-1111-1112", (), {}) is False
        assert credit_card("f", "", (), {}) is False

    @pytest.mark.parametrize(
        "number,brand",
        [(VISA, "visa"), (MASTERCARD, "mastercard"), (AMEX, "amex"), (DINERS, "dinersclub"), (DISCOVER, "discover")],
    )
    def test_brand(self, number, brand):
        """Test each brand pattern."""
        assert credit_card("f", number, (brand,), {}) is True

    def test_wrong_brand(self):
        """Test a valid number of another brand fails."""
        assert credit_card("f", VISA, ("amex",), {}) is False
        assert credit_card("f", VISA, ("unknown",), {}) is False

    def test_brand_list(self):
        """Test a list of accepted brands."""
        assert credit_card("f", AMEX, (["visa", "amex"],), {}) is True
        assert credit_card("f", MASTERCARD, (["visa", "amex"],), {}) is False

    def test_brand_must_be_in_list(self):
        """Test a brand outside its own allowed list fails."""
        assert credit_card("f", VISA, ("visa", ["amex"]), {}) is False
        assert credit_card("f", VISA, ("visa", ["visa", "amex"]), {}) is True
