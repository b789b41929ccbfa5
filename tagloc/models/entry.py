"""Data models for the tagged localization text format."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .risk import RiskWarning


@dataclass(frozen=True)
class LocalizationEntry:
    """Represents a single localizable string read from a tagged file."""

    id: str
    string_key: str
    original_value: str
    table_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "stringKey": self.string_key,
            "originalValue": self.original_value,
            "tableId": self.table_id,
        }


@dataclass(frozen=True)
class ParseMetadata:
    """Header information needed to rebuild a tagged file."""

    language_id: Optional[str] = None
    table_id: Optional[str] = None
    raw_header: Tuple[str, ...] = ()  # Unrecognized tag lines, verbatim and in order

    def to_dict(self) -> dict:
        return {
            "languageId": self.language_id,
            "tableId": self.table_id,
            "rawHeader": list(self.raw_header),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ParseMetadata":
        return cls(
            language_id=data.get("languageId"),
            table_id=data.get("tableId"),
            raw_header=tuple(data.get("rawHeader") or ()),
        )


@dataclass(frozen=True)
class ParseResult:
    """Entries and metadata produced by one parse call."""

    entries: Tuple[LocalizationEntry, ...]
    metadata: ParseMetadata


@dataclass(frozen=True)
class ProcessedEntry(LocalizationEntry):
    """A translated and risk-scanned entry for one target language."""

    translated_value: str = ""
    language_code: str = ""
    risks: Tuple[RiskWarning, ...] = ()
    source_id: str = ""

    @classmethod
    def from_entry(
        cls,
        entry: LocalizationEntry,
        translated_value: str,
        language_code: str,
        risks: Tuple[RiskWarning, ...] = (),
    ) -> "ProcessedEntry":
        """Build the (entry, language) pair; the id is never shared across languages."""
        return cls(
            id=f"{entry.id}-{language_code}",
            string_key=entry.string_key,
            original_value=entry.original_value,
            table_id=entry.table_id,
            translated_value=translated_value,
            language_code=language_code,
            risks=tuple(risks),
            source_id=entry.id,
        )

    @property
    def passed(self) -> bool:
        """True when the scanner raised no warnings."""
        return not self.risks

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            "translatedValue": self.translated_value,
            "languageCode": self.language_code,
            "risks": [risk.to_dict() for risk in self.risks],
            "sourceId": self.source_id,
        })
        return data
