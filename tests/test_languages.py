"""Tests for the language catalog and selection resolution."""

import pytest

from tagloc.errors import InputValidationError
from tagloc.models.languages import (
    TARGET_LANGUAGES,
    SelectionMode,
    get_language,
    resolve_languages,
)


def test_catalog_codes_are_unique():
    codes = [option.code for option in TARGET_LANGUAGES]
    assert len(codes) == len(set(codes)) == 18


def test_get_language():
    assert get_language("ar-SA").code == "ar-SA"
    assert get_language("xx-XX") is None


def test_single():
    assert [o.code for o in resolve_languages(SelectionMode.SINGLE, "de-DE")] == ["de-DE"]


def test_all_keeps_catalog_order():
    assert resolve_languages("all") == TARGET_LANGUAGES


def test_custom_uses_catalog_order_and_dedupes():
    resolved = resolve_languages(SelectionMode.CUSTOM, languages=["ja-JP", " de-DE ", "ja-JP", ""])
    assert [o.code for o in resolved] == ["de-DE", "ja-JP"]


@pytest.mark.parametrize("mode, language, languages", [
    (SelectionMode.SINGLE, None, None),
    (SelectionMode.SINGLE, "", None),
    (SelectionMode.CUSTOM, None, []),
    (SelectionMode.CUSTOM, None, ["  "]),
])
def test_nothing_selected(mode, language, languages):
    with pytest.raises(InputValidationError) as exc_info:
        resolve_languages(mode, language, languages)
    assert exc_info.value.code == "no_language"


def test_unknown_code():
    with pytest.raises(InputValidationError) as exc_info:
        resolve_languages(SelectionMode.CUSTOM, languages=["de-DE", "kl-GL"])
    assert exc_info.value.code == "unknown_language"
    assert exc_info.value.details == {"unknown": ["kl-GL"]}


def test_invalid_mode():
    with pytest.raises(ValueError):
        resolve_languages("some")
