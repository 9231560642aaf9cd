"""
Tests for message catalog selection and loading.
"""

import pytest

from valicomb.core import language
from valicomb.exceptions import LanguageError


class TestDefaults:
    """Tests for process-wide language defaults."""

    def test_default_language(self):
        """Test English is the default."""
        assert language.lang() == "en"

    def test_set_language(self):
        """Test setting the default language."""
        assert language.lang("de") == "de"
        assert language.lang() == "de"

    def test_default_directory_is_packaged(self):
        """Test the packaged catalog directory is the default."""
        assert language.lang_dir() == str(language.PACKAGE_LANG_DIR)

    def test_reset(self):
        """Test reset_defaults restores both defaults."""
        language.lang("fr")
        language.lang_dir("/tmp")
        language.reset_defaults()
        assert language.lang() == "en"
        assert language.lang_dir() == str(language.PACKAGE_LANG_DIR)


class TestLoadLanguage:
    """Tests for load_language."""

    def test_english_catalog(self):
        """Test the packaged English catalog with normalized keys."""
        catalog = language.load_language("en")
        assert catalog["required"] == "is required"
        assert catalog["length_min"] == "must be at least %d characters long"
        assert catalog["email_dns"] == "is not a valid email address with an active DNS record"
        assert catalog["not_allowed_field"] == "is not an allowed field"

    @pytest.mark.parametrize("code", ["de", "fr"])
    def test_shipped_catalogs_cover_english_keys(self, code):
        """Test every shipped catalog translates every English message."""
        english = language.load_language("en")
        other = language.load_language(code)
        assert set(other) == set(english)

    def test_catalog_is_cached(self):
        """Test repeated loads return the cached catalog."""
        assert language.load_language("en") is language.load_language("en")

    def test_invalid_code(self):
        """Test codes outside the whitelist are rejected."""
        with pytest.raises(LanguageError, match="Invalid language 'xx'"):
            language.load_language("xx")

    def test_path_traversal_code(self):
        """Test directory parts in a code are stripped before the whitelist check."""
        with pytest.raises(LanguageError):
            language.load_language("../../etc/passwd")

    def test_missing_file(self, tmp_path):
        """Test an allowed code without a file fails to load."""
        with pytest.raises(LanguageError, match="Fail to load language file"):
            language.load_language("es", tmp_path)

    def test_missing_directory(self, tmp_path):
        """Test a missing directory fails to load."""
        with pytest.raises(LanguageError, match="Fail to load language file"):
            language.load_language("en", tmp_path / "nowhere")

    def test_custom_directory(self, lang_dir):
        """Test loading a catalog from a custom directory."""
        catalog = language.load_language("en", lang_dir)
        assert catalog == {"required": "must be filled in", "not_allowed_field": "is unexpected"}

    def test_document_must_be_mapping(self, tmp_path):
        """Test a YAML list is rejected."""
        (tmp_path / "en.yaml").write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(LanguageError, match="must contain a mapping"):
            language.load_language("en", tmp_path)

    def test_default_language_used(self):
        """Test the process default is used when no code is given."""
        language.lang("de")
        assert language.load_language()["required"] == "ist erforderlich"
