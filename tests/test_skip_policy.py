"""
Tests for the decision whether a rule runs on a field's current value.

Precedence: required_with/required_without always run; nullable skips None
values; optional skips absent values; fields without required skip empty
values for every rule except required and accepted.
"""

from valicomb import Validator


class TestEmptyValues:
    """Tests for skipping empty values on non-required fields."""

    def test_missing_field_skips_rule(self):
        """Test rules on an absent, non-required field do not run."""
        v = Validator({})
        v.rule("email", "contact")
        assert v.validate() is True

    def test_empty_string_skips_rule(self):
        """Test an empty string counts as not provided."""
        v = Validator({"contact": ""})
        v.rule("email", "contact")
        assert v.validate() is True

    def test_zero_is_not_empty(self):
        """Test zero is a provided value."""
        v = Validator({"n": 0})
        v.rule("min", "n", 1)
        assert v.validate() is False

    def test_required_field_runs_every_rule(self):
        """Test a required field runs its other rules on empty input too."""
        v = Validator({"contact": ""})
        v.rule("required", "contact")
        v.rule("email", "contact")
        assert v.validate() is False
        assert v.errors("contact") == [
            "Contact is required",
            "Contact is not a valid email address",
        ]

    def test_accepted_runs_on_missing_value(self):
        """Test accepted fails a missing checkbox without required."""
        v = Validator({})
        v.rule("accepted", "terms")
        assert v.validate() is False
        assert v.errors("terms") == ["Terms must be accepted"]

    def test_empty_wildcard_match_skips(self):
        """Test a wildcard matching nothing skips the rule."""
        v = Validator({"items": []})
        v.rule("integer", "items.*.qty")
        assert v.validate() is True


class TestNullable:
    """Tests for the nullable marker."""

    def test_null_skips_other_rules(self):
        """Test None on a nullable field skips other rules."""
        v = Validator({"middle": None})
        v.rule("nullable", "middle")
        v.rule("required", "middle")
        v.rule("alpha", "middle")
        assert v.validate() is False
        assert v.errors("middle") == ["Middle is required"]

    def test_non_null_still_checked(self):
        """Test non-None values on a nullable field are checked."""
        v = Validator({"middle": "J2"})
        v.rule("nullable", "middle")
        v.rule("alpha", "middle")
        assert v.validate() is False


class TestOptional:
    """Tests for the optional marker."""

    def test_absent_value_skipped(self):
        """Test an absent optional field skips even required."""
        v = Validator({})
        v.rule("optional", "nickname")
        v.rule("required", "nickname")
        v.rule("lengthMin", "nickname", 3)
        assert v.validate() is True

    def test_present_value_checked(self):
        """Test a present optional field is validated."""
        v = Validator({"nickname": "ab"})
        v.rule("optional", "nickname")
        v.rule("lengthMin", "nickname", 3)
        assert v.validate() is False


class TestOptionalAndNullable:
    """Tests for a field carrying both the optional and nullable markers."""

    def _validator(self, data, *rules):
        v = Validator(data)
        v.rule("optional", "middle")
        v.rule("nullable", "middle")
        for rule in rules:
            v.rule(rule, "middle")
        v.rule("alpha", "middle")
        return v

    def test_missing_key_skips_required(self):
        """Test a missing key skips required although nullable exempts it."""
        v = self._validator({}, "required")
        assert v.validate() is True

    def test_missing_key_skips_accepted(self):
        """Test a missing key skips accepted as well."""
        v = self._validator({}, "accepted")
        assert v.validate() is True

    def test_null_value_skips_required_and_accepted(self):
        """Test a None value is treated like a missing key."""
        assert self._validator({"middle": None}, "required").validate() is True
        assert self._validator({"middle": None}, "accepted").validate() is True

    def test_empty_string_runs_required(self):
        """Test an empty string is not None, so required runs and fails alone."""
        v = self._validator({"middle": ""}, "required")
        assert v.validate() is False
        assert v.errors("middle") == ["Middle is required", "Middle must contain only letters a-z"]

    def test_empty_string_runs_accepted(self):
        """Test accepted runs on an empty string while other rules are skipped."""
        v = self._validator({"middle": ""}, "accepted")
        assert v.validate() is False
        assert v.errors("middle") == ["Middle must be accepted"]

    def test_bad_value_checked(self):
        """Test a present value goes through every rule."""
        v = self._validator({"middle": "J2"}, "required")
        assert v.validate() is False
        assert v.errors("middle") == ["Middle must contain only letters a-z"]


class TestConditionalRequirements:
    """Tests for required_with and required_without in a validation run."""

    def test_required_with_runs_on_missing_field(self):
        """Test required_with runs although the field itself is missing."""
        v = Validator({"phone": "555-1234"})
        v.rule("requiredWith", "phone_type", "phone")
        assert v.validate() is False
        assert v.errors("phone_type") == ["Phone Type is required"]

    def test_required_without_satisfied(self):
        """Test required_without passes when the other field is given."""
        v = Validator({"email": "a@example.com"})
        v.rule("requiredWithout", "phone", "email")
        assert v.validate() is True

    def test_required_without_triggered(self):
        """Test required_without fails when neither field is given."""
        v = Validator({})
        v.rule("requiredWithout", "phone", ["email"])
        assert v.validate() is False
