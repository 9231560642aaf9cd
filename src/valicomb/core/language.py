"""
Message catalog selection and loading.

Catalogs are YAML documents named ``<code>.yaml`` that map rule names to
message templates. The process keeps a default language code and catalog
directory; validators may override both per instance. Loaded catalogs are
cached by file path because they are read-only once parsed.
"""

import logging
import threading
from pathlib import Path

import yaml
from inflection import underscore

from valicomb.exceptions import LanguageError

logger = logging.getLogger(__name__)

ALLOWED_LANGUAGES = (
    "ar", "cs", "da", "de", "en", "es", "fa", "fi", "fr", "hu", "id",
    "it", "ja", "nl", "no", "pl", "pt", "ru", "sv", "tr", "uk", "zh",
)

DEFAULT_LANGUAGE = "en"

PACKAGE_LANG_DIR = Path(__file__).resolve().parent.parent / "lang"

_default_lang: str | None = None
_default_lang_dir: str | None = None

_catalog_cache: dict[Path, dict[str, str]] = {}
_cache_lock = threading.Lock()


def lang(code: str | None = None) -> str:
    """
    Get or set the process-wide default language code.

    Params:
        code: Language code to make the default, or None to only read it

    Returns:
        The current default language code ("en" unless changed)
    """
    global _default_lang
    if code is not None:
        _default_lang = code
    return _default_lang or DEFAULT_LANGUAGE


def lang_dir(path: str | Path | None = None) -> str:
    """
    Get or set the process-wide default catalog directory.

    Params:
        path: Directory holding ``<code>.yaml`` files, or None to only read it

    Returns:
        The current catalog directory (the packaged ``lang`` directory by default)
    """
    global _default_lang_dir
    if path is not None:
        _default_lang_dir = str(path)
    return _default_lang_dir or str(PACKAGE_LANG_DIR)


def reset_defaults() -> None:
    """Restore the default language and directory and drop cached catalogs."""
    global _default_lang, _default_lang_dir
    _default_lang = None
    _default_lang_dir = None
    with _cache_lock:
        _catalog_cache.clear()


def catalog_key(rule_name: str) -> str:
    """Normalize a rule name for catalog lookup ("lengthMin" -> "length_min")."""
    return underscore(rule_name)


def load_language(code: str | None = None, directory: str | Path | None = None) -> dict[str, str]:
    """
    Load a message catalog.

    Params:
        code: Two-letter language code; the process default when None
        directory: Catalog directory; the process default when None

    Returns:
        Mapping of normalized rule name -> message template

    Raises:
        LanguageError: If the code is not allowed, the file is missing or
            unreadable, or the document is not a mapping
    """
    code = Path(code or lang()).name
    if code not in ALLOWED_LANGUAGES:
        raise LanguageError(
            f"Invalid language '{code}'. Allowed: {', '.join(ALLOWED_LANGUAGES)}"
        )

    original_dir = str(directory or lang_dir())
    base = Path(original_dir)
    lang_file = base / f"{code}.yaml"
    if not base.is_dir() or not lang_file.is_file():
        raise LanguageError(f"Fail to load language file '{original_dir}/{code}.yaml'")

    lang_file = lang_file.resolve()
    with _cache_lock:
        cached = _catalog_cache.get(lang_file)
    if cached is not None:
        return cached

    try:
        with lang_file.open(encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise LanguageError(f"Fail to load language file '{lang_file}': {e}") from e

    if not isinstance(document, dict):
        raise LanguageError(f"Language file '{lang_file}' must contain a mapping")

    catalog = {catalog_key(str(name)): str(message) for name, message in document.items()}
    with _cache_lock:
        _catalog_cache[lang_file] = catalog
    logger.debug("Loaded %d messages for language '%s' from %s", len(catalog), code, lang_file)
    return catalog
