"""Heuristic localization-risk scanner for translated strings."""

import re
from typing import Dict, List, Optional

from ..models.risk import RiskKind, RiskWarning
from .risk_profiles import DEFAULT_PROFILES, RiskProfile


class RiskScanner:
    """
    Flags translations that are likely to cause localization problems.

    Checks run in a fixed order and every match is reported:
    1. UI expansion against the locale's maximum ratio
    2. Culturally sensitive terms of the locale
    3. Locale-specific formatting patterns
    4. String concatenation in the source (all locales)
    5. Right-to-left layout (Arabic locales)
    6. CJK font fallback (Chinese, Japanese, Korean locales)

    Checks 1-3 need a profile for the locale; 4-6 always run.
    """

    # Strings shorter than this are too noisy for the expansion ratio
    MIN_EXPANSION_LENGTH = 5

    # "text" + name  or  name + "text"
    CONCATENATION_PATTERN = re.compile(
        r"""(?:(["'])[^"']*\1\s*\+\s*[A-Za-z_]\w*)"""
        r"""|(?:[A-Za-z_]\w*\s*\+\s*["'])"""
    )

    RTL_PREFIXES = ("ar",)
    CJK_PREFIXES = ("zh", "ja", "ko")

    def __init__(self, profiles: Optional[Dict[str, RiskProfile]] = None):
        """
        Initialize the scanner.

        Args:
            profiles: Locale code -> profile. Defaults to the built-in profiles.
        """
        self.profiles = DEFAULT_PROFILES if profiles is None else profiles

    def scan(self, original: str, translated: str, language_code: str) -> List[RiskWarning]:
        """
        Scan one original/translated pair.

        Args:
            original: Source text
            translated: Translated text
            language_code: Target locale code (e.g. "de-DE")

        Returns:
            Warnings in check order, empty if either text is empty
        """
        if not original or not translated:
            return []

        risks: List[RiskWarning] = []
        profile = self.profiles.get(language_code)

        if profile is not None:
            risks.extend(self._check_expansion(original, translated, profile))
            risks.extend(self._check_sensitive_terms(original, translated, profile))
            risks.extend(self._check_formatting(original, translated, profile))

        risks.extend(self._check_concatenation(original))
        risks.extend(self._check_script(language_code))

        return risks

    def _check_expansion(
        self, original: str, translated: str, profile: RiskProfile
    ) -> List[RiskWarning]:
        limit = profile.max_expansion_ratio
        if limit is None or len(original) <= self.MIN_EXPANSION_LENGTH:
            return []

        ratio = len(translated) / len(original)
        if ratio <= limit:
            return []

        actual_pct = round((ratio - 1) * 100)
        limit_pct = round((limit - 1) * 100)
        return [
            RiskWarning(
                kind=RiskKind.UI_EXPANSION,
                message=(
                    f"Text is {actual_pct}% longer than the original "
                    f"({len(translated)} vs {len(original)} chars, limit {limit_pct}%), "
                    "check UI clipping."
                ),
            )
        ]

    def _check_sensitive_terms(
        self, original: str, translated: str, profile: RiskProfile
    ) -> List[RiskWarning]:
        if not profile.sensitive_terms:
            return []

        haystack = (original + translated).lower()
        found = [term for term in profile.sensitive_terms if term.lower() in haystack]
        if not found:
            return []

        return [
            RiskWarning(
                kind=RiskKind.CULTURAL,
                message=f"Culturally sensitive terms found: {', '.join(found)}. Review for this market.",
            )
        ]

    def _check_formatting(
        self, original: str, translated: str, profile: RiskProfile
    ) -> List[RiskWarning]:
        return [
            RiskWarning(kind=RiskKind.FORMATTING, message=check.message)
            for check in profile.formatting_checks
            if check.pattern.search(original) or check.pattern.search(translated)
        ]

    def _check_concatenation(self, original: str) -> List[RiskWarning]:
        if not self.CONCATENATION_PATTERN.search(original):
            return []
        return [
            RiskWarning(
                kind=RiskKind.FORMATTING,
                message=(
                    "String concatenation detected; word order differs between languages. "
                    "Use ICU MessageFormat placeholders instead."
                ),
            )
        ]

    def _check_script(self, language_code: str) -> List[RiskWarning]:
        risks = []
        if language_code.startswith(self.RTL_PREFIXES):
            risks.append(
                RiskWarning(
                    kind=RiskKind.RTL,
                    message="UI needs Right-to-Left mirroring for this locale.",
                )
            )
        if language_code.startswith(self.CJK_PREFIXES):
            risks.append(
                RiskWarning(
                    kind=RiskKind.CJK_FONT,
                    message="Requires a separate CJK fallback font with full glyph coverage.",
                )
            )
        return risks


_default_scanner = RiskScanner()


def scan_for_risks(original: str, translated: str, language_code: str) -> List[RiskWarning]:
    """Scan with the default locale profiles."""
    return _default_scanner.scan(original, translated, language_code)
