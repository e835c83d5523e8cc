"""
Tests for locale flag lookup
"""

import pytest

from locale_flags import locale_to_flag


@pytest.mark.parametrize("locale, flag", [
    ("en", "\U0001F1EC\U0001F1E7"),  # GB
    ("de", "\U0001F1E9\U0001F1EA"),  # DE
    ("pt_BR", "\U0001F1E7\U0001F1F7"),  # BR
    ("ja", "\U0001F1EF\U0001F1F5"),  # JP
    ("zh_Hant", "\U0001F1FF\U0001F1ED"),  # ZH, region part too long
    ("DE_de", "\U0001F1E9\U0001F1EA"),
])
def test_locale_to_flag(locale, flag):
    assert locale_to_flag(locale) == flag


@pytest.mark.parametrize("locale", ["messages", "fil", "", "e1"])
def test_no_flag(locale):
    assert locale_to_flag(locale) is None
