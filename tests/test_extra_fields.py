"""
Tests for extra field introspection and strict mode.
"""

from valicomb import Validator


class TestExtraFields:
    """Tests for defined_fields and extra_fields."""

    def test_defined_fields_use_root_segment(self):
        """Test nested and wildcard paths count as their top-level key."""
        v = Validator({})
        v.rule("required", ["name", "user.email", "items.*.qty", "user.name"])
        assert v.defined_fields() == ["name", "user", "items"]

    def test_extra_fields_in_input_order(self):
        """Test uncovered keys are listed in input order."""
        v = Validator({"z": 1, "name": "a", "a": 2})
        v.rule("required", "name")
        assert v.extra_fields() == ["z", "a"]
        assert v.has_extra_fields() is True

    def test_no_extra_fields(self):
        """Test fully covered input has no extra fields."""
        v = Validator({"name": "a"})
        v.rule("required", "name")
        assert v.extra_fields() == []
        assert v.has_extra_fields() is False


class TestStrictMode:
    """Tests for strict mode errors."""

    def test_extra_fields_reported(self):
        """Test each extra field gets an error."""
        v = Validator({"name": "Ada", "admin": True, "debug": 1})
        v.rule("required", "name")
        v.strict()
        assert v.validate() is False
        assert v.errors() == {
            "admin": ["Admin is not an allowed field"],
            "debug": ["Debug is not an allowed field"],
        }

    def test_covered_input_passes(self):
        """Test strict mode adds nothing when every key is covered."""
        v = Validator({"name": "Ada"})
        v.rule("required", "name")
        assert v.strict().validate() is True

    def test_strict_can_be_disabled(self):
        """Test strict(False) turns the check off again."""
        v = Validator({"name": "Ada", "extra": 1})
        v.rule("required", "name")
        v.strict()
        v.strict(False)
        assert v.validate() is True

    def test_catalog_message(self, lang_dir):
        """Test the not-allowed message comes from the catalog."""
        v = Validator({"extra": 1}, lang_dir=lang_dir)
        v.strict()
        v.validate()
        assert v.errors("extra") == ["Extra is unexpected"]

    def test_translated_message(self):
        """Test the not-allowed message is translated."""
        v = Validator({"extra": 1}, lang="de")
        v.strict()
        v.validate()
        assert v.errors("extra") == ["Extra ist kein erlaubtes Feld"]
