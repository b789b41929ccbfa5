"""Localization service that adapts the pipeline for web use."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ...diagnostics import Diagnostics
from ...extraction.txt_writer import TxtWriter, group_by_language, localized_filename
from ...models.entry import ParseMetadata, ProcessedEntry
from ...models.languages import SelectionMode, resolve_languages
from ...reporting.csv_report import CsvReportGenerator
from ...translation.clients import ProviderKind, create_provider, settings_for
from ...translation.pipeline import LocalizationRun, localize


@dataclass
class ProcessOptions:
    """Options of a full processing run."""
    text: str
    mode: SelectionMode = SelectionMode.SINGLE
    language: Optional[str] = None
    languages: Optional[List[str]] = None
    provider: ProviderKind = ProviderKind.ECHO
    custom_endpoint: Optional[str] = None
    context: Optional[str] = None
    chunk_size: int = 0
    api_key: Optional[str] = None


class LocalizationService:
    """
    Adapts the CLI pipeline for web use.

    Providers are built per request so that endpoint and key overrides from
    the request apply to that request only.
    """

    def __init__(self):
        self.writer = TxtWriter()
        self.report = CsvReportGenerator()

    async def translate_texts(
        self,
        texts: List[str],
        target_lang: str,
        provider: ProviderKind,
        custom_endpoint: Optional[str] = None,
        context: Optional[str] = None,
        api_key: Optional[str] = None,
        diagnostics: Optional[Diagnostics] = None,
    ) -> List[str]:
        """Translate one chunk with the requested provider (the wire contract)."""
        client = create_provider(
            settings_for(provider, endpoint=custom_endpoint, api_key=api_key),
            diagnostics=diagnostics,
        )
        return await client.translate(texts, target_lang, context)

    async def process(
        self,
        options: ProcessOptions,
        diagnostics: Optional[Diagnostics] = None,
    ) -> LocalizationRun:
        """
        Parse, translate and scan a tagged text.

        Raises:
            InputValidationError: No text or no resolvable language
            ProviderError: Provider could not be configured
        """
        languages = resolve_languages(options.mode, options.language, options.languages)
        client = create_provider(
            settings_for(options.provider, endpoint=options.custom_endpoint, api_key=options.api_key),
            diagnostics=diagnostics,
        )
        return await localize(
            options.text,
            languages,
            client,
            chunk_size=options.chunk_size,
            context=options.context,
            diagnostics=diagnostics,
        )

    def export_csv(self, entries: List[ProcessedEntry]) -> str:
        """Render the CSV risk report."""
        return self.report.to_csv(entries)

    def export_txt(
        self,
        entries: List[ProcessedEntry],
        metadata: ParseMetadata,
        include_raw_header: bool = False,
    ) -> Tuple[str, bytes, str]:
        """
        Render the localized file(s) for download.

        Returns:
            Tuple of (filename, content, media_type); a ZIP when several
            languages are present, a single text file otherwise.

        Raises:
            ExportError: Nothing to export or archive generation failed
        """
        grouped = group_by_language(entries)
        if len(grouped) == 1:
            code, group = next(iter(grouped.items()))
            content = self.writer.serialize(group, code, metadata, include_raw_header)
            return localized_filename(code), content.encode("utf-8"), "text/plain"

        archive = self.writer.to_archive(entries, metadata, include_raw_header)
        return "localized_batch.zip", archive, "application/zip"
