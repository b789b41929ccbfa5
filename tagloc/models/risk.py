"""Data models for localization risk warnings."""

from dataclasses import dataclass
from enum import Enum


class RiskKind(str, Enum):
    """Kinds of warnings the risk scanner can raise."""
    RTL = "RTL_ALERT"
    CJK_FONT = "CJK_FONT_ALERT"
    UI_EXPANSION = "UI_EXPANSION_RISK"
    CULTURAL = "CULTURAL_ERROR"
    FORMATTING = "FORMATTING_ERROR"


@dataclass(frozen=True)
class RiskWarning:
    """A single heuristic warning attached to a translated entry."""

    kind: RiskKind
    message: str

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "message": self.message}
