"""Supported target locales and language selection."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from ..errors import InputValidationError


@dataclass(frozen=True)
class LanguageOption:
    """A selectable target locale."""

    label: str
    code: str

    def to_dict(self) -> dict:
        return {"label": self.label, "code": self.code}


TARGET_LANGUAGES: List[LanguageOption] = [
    LanguageOption("English (US)", "en-US"),
    LanguageOption("English (UK)", "en-GB"),
    LanguageOption("Deutsch", "de-DE"),
    LanguageOption("Français", "fr-FR"),
    LanguageOption("Español (España)", "es-ES"),
    LanguageOption("Español (LatAm)", "es-419"),
    LanguageOption("Português (Brasil)", "pt-BR"),
    LanguageOption("Português (Portugal)", "pt-PT"),
    LanguageOption("Русский", "ru-RU"),
    LanguageOption("Polski", "pl-PL"),
    LanguageOption("Türkçe", "tr-TR"),
    LanguageOption("Italiano", "it-IT"),
    LanguageOption("Tiếng Việt", "vi-VN"),
    LanguageOption("中文 (简体)", "zh-CN"),
    LanguageOption("中文 (繁体)", "zh-TW"),
    LanguageOption("日本語", "ja-JP"),
    LanguageOption("한국어", "ko-KR"),
    LanguageOption("العربية", "ar-SA"),
]

LANGUAGES_BY_CODE = {option.code: option for option in TARGET_LANGUAGES}


class SelectionMode(str, Enum):
    """How the caller picks target languages."""
    SINGLE = "single"
    CUSTOM = "custom"
    ALL = "all"


def get_language(code: str) -> Optional[LanguageOption]:
    """Look up a catalog entry by locale code."""
    return LANGUAGES_BY_CODE.get(code)


def resolve_languages(
    mode: SelectionMode,
    language: Optional[str] = None,
    languages: Optional[Iterable[str]] = None,
) -> List[LanguageOption]:
    """
    Resolve a selection into catalog entries before orchestration starts.

    Args:
        mode: single, custom or all
        language: Locale code for single mode
        languages: Locale codes for custom mode

    Returns:
        Catalog entries to process, never empty

    Raises:
        InputValidationError: Unknown codes or nothing selected
    """
    mode = SelectionMode(mode)

    if mode == SelectionMode.ALL:
        return list(TARGET_LANGUAGES)

    if mode == SelectionMode.SINGLE:
        requested = [language] if language else []
    else:
        requested = [code.strip() for code in (languages or []) if code and code.strip()]

    unknown = [code for code in requested if code not in LANGUAGES_BY_CODE]
    if unknown:
        raise InputValidationError(
            f"Unsupported target language(s): {', '.join(unknown)}",
            code="unknown_language",
            details={"unknown": unknown},
        )

    wanted = set(requested)
    resolved = [option for option in TARGET_LANGUAGES if option.code in wanted]
    if not resolved:
        raise InputValidationError(
            "Please select at least one target language.",
            code="no_language",
        )
    return resolved
