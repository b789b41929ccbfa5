"""Per-locale rule profiles consulted by the risk scanner."""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Pattern, Tuple


@dataclass(frozen=True)
class FormattingCheck:
    """A locale-specific pattern and the warning raised when it matches."""

    pattern: Pattern[str]
    message: str

    @classmethod
    def compile(cls, pattern: str, message: str, flags: int = 0) -> "FormattingCheck":
        return cls(pattern=re.compile(pattern, flags), message=message)


@dataclass(frozen=True)
class RiskProfile:
    """Thresholds and rules for one target locale."""

    max_expansion_ratio: Optional[float] = None
    sensitive_terms: Tuple[str, ...] = ()  # lowercase substrings
    formatting_checks: Tuple[FormattingCheck, ...] = ()


# Numbers written with a dot as decimal separator, e.g. "3.5" or "1,299.99"
DOT_DECIMAL = FormattingCheck.compile(
    r"[0-9]\.[0-9]",
    "Decimal numbers use a comma separator in this locale; format numbers with locale-aware APIs.",
)
CURRENCY_PREFIX = FormattingCheck.compile(
    r"[$€£]\s?[0-9]",
    "Currency symbol placement differs in this locale; use locale-aware currency formatting.",
)
SLASH_DATE = FormattingCheck.compile(
    r"\b[0-9]{1,2}/[0-9]{1,2}/[0-9]{2,4}\b",
    "Slash-separated dates are ambiguous here; use the year-month-day order of the locale.",
)
TWELVE_HOUR_CLOCK = FormattingCheck.compile(
    r"\b[0-9]{1,2}:[0-9]{2}\s?(?:am|pm)\b",
    "12-hour clock notation detected; use the locale's time format.",
    re.IGNORECASE,
)
WESTERN_DIGITS = FormattingCheck.compile(
    r"[0-9]",
    "Contains Western digits; verify whether Arabic-Indic numerals are expected.",
)
FULLWIDTH_PUNCTUATION = FormattingCheck.compile(
    r"[!?,.:;]\S",
    "Half-width punctuation detected; CJK text normally uses full-width punctuation.",
)

# Gore and symbol restrictions common in game ratings
VIOLENCE_TERMS = ("blood", "gore", "skull", "skeleton", "corpse")

EUROPEAN_EXPANSION = 1.3

DEFAULT_PROFILES: Dict[str, RiskProfile] = {
    "de-DE": RiskProfile(
        max_expansion_ratio=EUROPEAN_EXPANSION,
        sensitive_terms=("nazi", "swastika", "hitler", "gestapo"),
        formatting_checks=(DOT_DECIMAL, CURRENCY_PREFIX),
    ),
    "fr-FR": RiskProfile(
        max_expansion_ratio=EUROPEAN_EXPANSION,
        formatting_checks=(DOT_DECIMAL, CURRENCY_PREFIX, TWELVE_HOUR_CLOCK),
    ),
    "es-ES": RiskProfile(max_expansion_ratio=EUROPEAN_EXPANSION, formatting_checks=(DOT_DECIMAL,)),
    "es-419": RiskProfile(max_expansion_ratio=EUROPEAN_EXPANSION),
    "pt-BR": RiskProfile(max_expansion_ratio=EUROPEAN_EXPANSION, formatting_checks=(DOT_DECIMAL,)),
    "pt-PT": RiskProfile(max_expansion_ratio=EUROPEAN_EXPANSION, formatting_checks=(DOT_DECIMAL,)),
    "it-IT": RiskProfile(max_expansion_ratio=EUROPEAN_EXPANSION, formatting_checks=(DOT_DECIMAL,)),
    "ru-RU": RiskProfile(
        max_expansion_ratio=EUROPEAN_EXPANSION,
        formatting_checks=(DOT_DECIMAL, TWELVE_HOUR_CLOCK),
    ),
    "pl-PL": RiskProfile(max_expansion_ratio=EUROPEAN_EXPANSION, formatting_checks=(DOT_DECIMAL,)),
    "tr-TR": RiskProfile(max_expansion_ratio=EUROPEAN_EXPANSION, formatting_checks=(DOT_DECIMAL,)),
    "ar-SA": RiskProfile(
        max_expansion_ratio=1.25,
        sensitive_terms=("alcohol", "wine", "beer", "pork", "gambling", "casino", "bikini"),
        formatting_checks=(WESTERN_DIGITS,),
    ),
    "zh-CN": RiskProfile(
        sensitive_terms=VIOLENCE_TERMS + ("taiwan", "tibet", "gambling"),
        formatting_checks=(SLASH_DATE,),
    ),
    "zh-TW": RiskProfile(
        sensitive_terms=("gambling",),
        formatting_checks=(SLASH_DATE,),
    ),
    "ja-JP": RiskProfile(
        sensitive_terms=("rising sun",),
        formatting_checks=(SLASH_DATE, FULLWIDTH_PUNCTUATION),
    ),
    "ko-KR": RiskProfile(
        sensitive_terms=("rising sun", "sea of japan"),
        formatting_checks=(SLASH_DATE,),
    ),
}
