"""End-to-end localization run: parse, translate, scan."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..diagnostics import Diagnostics
from ..errors import InputValidationError
from ..extraction.txt_parser import TxtParser
from ..models.entry import ParseResult, ProcessedEntry
from .clients.base import TranslationClient
from .orchestrator import BatchOrchestrator, BatchResult, LanguageLike


@dataclass
class LocalizationRun:
    """Result of one processing run; nothing is persisted."""

    parse: ParseResult
    batch: BatchResult

    @property
    def entries(self) -> List[ProcessedEntry]:
        return self.batch.entries

    def to_dict(self) -> dict:
        return {
            "metadata": self.parse.metadata.to_dict(),
            "entries": [entry.to_dict() for entry in self.batch.entries],
            "succeeded": self.batch.succeeded,
            "failures": self.batch.failures,
            "stats": [s.to_dict() for s in self.batch.stats],
        }


async def localize(
    text: str,
    languages: Sequence[LanguageLike],
    provider: TranslationClient,
    chunk_size: int = 0,
    context: Optional[str] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> LocalizationRun:
    """
    Parse tagged text and translate it into every requested language.

    Args:
        text: Raw tagged file content
        languages: Resolved target languages
        provider: Translation backend
        chunk_size: Maximum texts per provider call, 0 for unbounded
        context: Optional guidance for the translator
        diagnostics: Observer for progress and failures

    Raises:
        InputValidationError: Blank text or no target language
    """
    if not text or not text.strip():
        raise InputValidationError("No source text provided.", code="no_text")
    if not languages:
        raise InputValidationError("Please select at least one target language.", code="no_language")

    diagnostics = diagnostics or Diagnostics("pipeline")

    parsed = TxtParser().parse(text)
    diagnostics.info(
        f"Parsed {len(parsed.entries)} entries "
        f"(language {parsed.metadata.language_id or 'unknown'}, "
        f"table {parsed.metadata.table_id or 'none'})"
    )

    orchestrator = BatchOrchestrator(provider, chunk_size=chunk_size, diagnostics=diagnostics)
    batch = await orchestrator.process(parsed.entries, languages, context)

    return LocalizationRun(parse=parsed, batch=batch)
