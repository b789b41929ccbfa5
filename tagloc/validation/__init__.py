"""Risk scanning for translated strings."""

from .risk_profiles import DEFAULT_PROFILES, FormattingCheck, RiskProfile
from .risk_scanner import RiskScanner, scan_for_risks

__all__ = ["DEFAULT_PROFILES", "FormattingCheck", "RiskProfile", "RiskScanner", "scan_for_risks"]
