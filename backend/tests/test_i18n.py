import pytest

from backend.modules.i18n import (
    LANGUAGES,
    LocaleContext,
    detect_language,
    get_translations,
    resolve_locale,
)


@pytest.mark.parametrize("header,expected", [
    ("zh-CN,zh;q=0.9", "zh"),
    ("fr-CA,fr;q=0.9,en;q=0.8", "fr"),
    ("xx,de;q=0.5", "de"),
    ("en;q=0.2,ja;q=0.9", "ja"),
    ("ko;q=0,es", "es"),
    ("*", "en"),
    ("", "en"),
    (None, "en"),
])
def test_detect_language(header, expected):
    assert detect_language(header) == expected


def test_ten_languages():
    assert set(LANGUAGES) == {"en", "zh", "ja", "ko", "es", "fr", "de", "pt", "ru", "ar"}


def test_missing_keys_fall_back_to_english():
    english = get_translations("en")
    for lang in LANGUAGES:
        assert set(get_translations(lang)) == set(english)


def test_unknown_language_is_english():
    assert get_translations("xx") == get_translations("en")


def test_explicit_language_wins():
    assert resolve_locale("ja", "zh-CN").language == "ja"
    assert resolve_locale("klingon", "zh-CN").language == "zh"
    assert resolve_locale(None, None).language == "en"


def test_locale_text_unknown_key():
    assert LocaleContext.for_language("de").text("no_such_key") == "no_such_key"
