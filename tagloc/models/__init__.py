"""Data models for the localization pipeline."""

from .entry import LocalizationEntry, ParseMetadata, ParseResult, ProcessedEntry
from .risk import RiskKind, RiskWarning
from .languages import (
    LanguageOption,
    SelectionMode,
    TARGET_LANGUAGES,
    get_language,
    resolve_languages,
)

__all__ = [
    "LocalizationEntry",
    "ParseMetadata",
    "ParseResult",
    "ProcessedEntry",
    "RiskKind",
    "RiskWarning",
    "LanguageOption",
    "SelectionMode",
    "TARGET_LANGUAGES",
    "get_language",
    "resolve_languages",
]
