"""Chunked batch translation across target languages."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

from ..diagnostics import Diagnostics
from ..models.entry import LocalizationEntry, ProcessedEntry
from ..models.languages import LanguageOption
from ..validation.risk_scanner import RiskScanner
from .clients.base import TranslationClient


@dataclass
class LanguageStats:
    """Statistics for one language of a batch."""

    language: str
    total: int = 0
    chunks: int = 0
    missing: int = 0
    risky: int = 0
    succeeded: bool = False
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "language": self.language,
            "total": self.total,
            "chunks": self.chunks,
            "missing": self.missing,
            "risky": self.risky,
            "succeeded": self.succeeded,
            "error": self.error,
        }


@dataclass
class BatchResult:
    """Merged output of a batch run."""

    entries: List[ProcessedEntry] = field(default_factory=list)
    stats: List[LanguageStats] = field(default_factory=list)

    @property
    def succeeded(self) -> List[str]:
        return [s.language for s in self.stats if s.succeeded]

    @property
    def failures(self) -> Dict[str, str]:
        return {s.language: s.error or "" for s in self.stats if not s.succeeded}


def chunk_texts(texts: Sequence[str], chunk_size: int) -> List[List[str]]:
    """
    Split texts into consecutive chunks of at most ``chunk_size`` items.

    A chunk size of 0 means a single chunk holding everything.
    """
    if chunk_size < 0:
        raise ValueError(f"chunk_size must be >= 0, got {chunk_size}")

    texts = list(texts)
    if not texts:
        return []
    if chunk_size == 0:
        return [texts]
    return [texts[i:i + chunk_size] for i in range(0, len(texts), chunk_size)]


LanguageLike = Union[LanguageOption, str]


class BatchOrchestrator:
    """
    Translates entries into each requested language in turn.

    Strategy per language:
    1. Split the source values into chunks
    2. Send the chunks to the provider one after another
    3. Pad short responses with empty strings
    4. Scan every (original, translation) pair for risks

    A failing chunk drops that language only; the remaining languages still run.
    """

    def __init__(
        self,
        provider: TranslationClient,
        chunk_size: int = 0,
        scanner: Optional[RiskScanner] = None,
        diagnostics: Optional[Diagnostics] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            provider: Translation backend
            chunk_size: Maximum texts per provider call, 0 for unbounded
            scanner: Risk scanner, defaults to the built-in locale profiles
            diagnostics: Observer receiving progress and failure records
        """
        if chunk_size < 0:
            raise ValueError(f"chunk_size must be >= 0, got {chunk_size}")
        self.provider = provider
        self.chunk_size = chunk_size
        self.scanner = scanner or RiskScanner()
        self.diagnostics = diagnostics or Diagnostics("orchestrator")

    async def run(
        self,
        entries: Sequence[LocalizationEntry],
        languages: Sequence[LanguageLike],
        context: Optional[str] = None,
    ) -> List[ProcessedEntry]:
        """Translate and scan; returns the merged entries of every successful language."""
        result = await self.process(entries, languages, context)
        return result.entries

    async def process(
        self,
        entries: Sequence[LocalizationEntry],
        languages: Sequence[LanguageLike],
        context: Optional[str] = None,
    ) -> BatchResult:
        """
        Translate and scan, keeping per-language statistics.

        Args:
            entries: Parsed entries, in file order
            languages: Target languages, processed strictly in this order
            context: Optional free-text guidance passed to the provider

        Returns:
            BatchResult with entries of successful languages in request order
        """
        result = BatchResult()
        entries = list(entries)

        for language in languages:
            code = language.code if isinstance(language, LanguageOption) else language
            stats = LanguageStats(language=code, total=len(entries))
            result.stats.append(stats)

            try:
                processed = await self._process_language(entries, code, context, stats)
            except Exception as e:
                stats.error = str(e) or type(e).__name__
                self.diagnostics.error(
                    f"Skipping {code}: {stats.error}",
                    language=code,
                    provider=self.provider.name,
                )
                continue

            stats.succeeded = True
            result.entries.extend(processed)
            self.diagnostics.info(
                f"Completed {code}: {len(processed)} entries, {stats.risky} with risks",
                language=code,
            )

        return result

    async def _process_language(
        self,
        entries: List[LocalizationEntry],
        code: str,
        context: Optional[str],
        stats: LanguageStats,
    ) -> List[ProcessedEntry]:
        texts = [entry.original_value for entry in entries]
        chunks = chunk_texts(texts, self.chunk_size)
        stats.chunks = len(chunks)

        self.diagnostics.info(
            f"Translating {len(texts)} strings in {len(chunks)} chunk(s) via {self.provider.name}",
            language=code,
        )

        translated: List[str] = []
        for index, chunk in enumerate(chunks, start=1):
            chunk_result = await self.provider.translate(chunk, code, context)

            if len(chunk_result) > len(chunk):
                self.diagnostics.warning(
                    f"Chunk {index}/{len(chunks)} returned {len(chunk_result)} translations "
                    f"for {len(chunk)} texts; extra items ignored",
                    language=code,
                )
                chunk_result = chunk_result[:len(chunk)]

            offset = len(translated)
            translated.extend(chunk_result)
            for position in range(len(chunk_result), len(chunk)):
                index_in_file = offset + position
                stats.missing += 1
                self.diagnostics.warning(
                    f"Missing translation for {entries[index_in_file].string_key!r} "
                    f"(index {index_in_file}); using empty string",
                    language=code,
                )
                translated.append("")

            self.diagnostics.debug(
                f"Chunk {index}/{len(chunks)} done ({len(translated)}/{len(texts)})",
                language=code,
                current=len(translated),
                total=len(texts),
            )

        processed = []
        for entry, translation in zip(entries, translated):
            risks = self.scanner.scan(entry.original_value, translation, code)
            if risks:
                stats.risky += 1
            processed.append(ProcessedEntry.from_entry(entry, translation, code, risks))

        return processed
