"""
Tests for adding rules from mappings.
"""

import pytest

from valicomb import Validator
from valicomb.exceptions import UnknownRuleError


class TestRules:
    """Tests for Validator.rules."""

    def test_single_field_string(self):
        """Test a rule applied to one field given as a string."""
        v = Validator({})
        v.rules({"required": "name"})
        assert v.validate() is False
        assert list(v.errors()) == ["name"]

    def test_each_item_is_an_application(self):
        """Test a list of field names adds one entry per field."""
        v = Validator({})
        v.rules({"required": ["name", "email"]})
        v.validate()
        assert list(v.errors()) == ["name", "email"]

    def test_params(self):
        """Test lists carry fields then parameters."""
        v = Validator({"name": "a", "role": "guest"})
        v.rules({
            "lengthMin": [["name", 2]],
            "in": [["role", ["admin", "user"]]],
        })
        v.validate()
        assert v.errors() == {
            "name": ["Name must be at least 2 characters long"],
            "role": ["Role contains invalid value"],
        }

    def test_message(self):
        """Test a trailing message mapping customizes the entry."""
        v = Validator({"role": "guest"})
        v.rules({"in": [["role", ["admin"], {"message": "{field} is unknown"}]]})
        v.validate()
        assert v.errors("role") == ["Role is unknown"]


class TestMapFieldRules:
    """Tests for map_one_field_to_rules and for_fields."""

    def test_one_field(self):
        """Test several rules on one field."""
        v = Validator({"age": "abc"})
        v.map_one_field_to_rules("age", ["required", "integer", ["min", 18]])
        v.validate()
        assert v.errors("age") == ["Age must be an integer", "Age must be at least 18"]

    def test_one_field_message(self):
        """Test a trailing message mapping on one rule."""
        v = Validator({"age": 5})
        v.map_one_field_to_rules("age", [["min", 18, {"message": "{field} too young"}]])
        v.validate()
        assert v.errors("age") == ["Age too young"]

    def test_many_fields(self):
        """Test for_fields maps several fields and chains."""
        v = Validator({"name": "", "email": "bad"})
        result = v.for_fields({
            "name": ["required"],
            "email": ["required", "email"],
        })
        assert result is v
        v.validate()
        assert v.errors() == {
            "name": ["Name is required"],
            "email": ["Email is not a valid email address"],
        }

    def test_map_many_fields_alias(self):
        """Test map_many_fields_to_rules behaves like for_fields."""
        v = Validator({})
        v.map_many_fields_to_rules({"a": ["required"], "b": ["required"]})
        assert v.defined_fields() == ["a", "b"]

    def test_unknown_rule(self):
        """Test unknown rule names raise while mapping."""
        with pytest.raises(UnknownRuleError):
            Validator({}).map_one_field_to_rules("a", ["nope"])
