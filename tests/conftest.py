"""
Shared test fixtures for the valicomb test suite.
"""

import pytest

from valicomb.core import language
from valicomb.core.registry import GLOBAL_RULES


@pytest.fixture(autouse=True)
def isolated_process_state():
    """Reset process-wide state around every test.

    Global rules and the default language are shared by every validator in
    the process, so a test that changes them must not leak into the next.
    """
    GLOBAL_RULES.clear()
    language.reset_defaults()
    yield
    GLOBAL_RULES.clear()
    language.reset_defaults()


@pytest.fixture
def lang_dir(tmp_path):
    """Directory with a small custom English catalog.

    Usage:
        def test_something(lang_dir):
            v = Validator({}, lang_dir=lang_dir)
    """
    (tmp_path / "en.yaml").write_text(
        'required: "must be filled in"\n'
        'notAllowedField: "is unexpected"\n',
        encoding="utf-8",
    )
    return tmp_path
