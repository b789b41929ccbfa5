"""Writer for the tagged-line localization text format."""

import io
import zipfile
from pathlib import Path
from typing import Dict, Iterable, List

from ..errors import ExportError
from ..models.entry import ParseMetadata, ProcessedEntry


def group_by_language(entries: Iterable[ProcessedEntry]) -> Dict[str, List[ProcessedEntry]]:
    """Group a merged multi-language result per language, first-seen order."""
    grouped: Dict[str, List[ProcessedEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.language_code, []).append(entry)
    return grouped


def localized_filename(language_code: str) -> str:
    return f"localized_{language_code}.txt"


class TxtWriter:
    """Writer for tagged localization text files, one language per file."""

    def serialize(
        self,
        entries: Iterable[ProcessedEntry],
        language_code: str,
        metadata: ParseMetadata,
        include_raw_header: bool = False,
    ) -> str:
        """
        Render translated entries for a single language.

        Only the TableID of the source header is written, so entries that came
        from other TableID blocks (or before the first one) re-parse under it.

        Args:
            entries: Processed entries of ``language_code``
            language_code: Target locale, written as the LanguageID
            metadata: Metadata of the source parse
            include_raw_header: Also write the preserved unrecognized header lines

        Returns:
            Tagged text content
        """
        lines = [f"[LanguageID] {language_code}"]
        if metadata.table_id:
            lines.append(f"[TableID] {metadata.table_id}")
        if include_raw_header:
            lines.extend(metadata.raw_header)

        echo_prefix = f"[{language_code}] "
        for entry in entries:
            if entry.language_code and entry.language_code != language_code:
                raise ValueError(
                    f"Entry {entry.string_key!r} belongs to {entry.language_code}, "
                    f"not {language_code}"
                )

            value = entry.translated_value
            # Echo providers prefix the target code; keep the file clean
            if value.startswith(echo_prefix):
                value = value[len(echo_prefix):]

            lines.append("")
            lines.append(f"[StringKey] {entry.string_key}")
            lines.append(f"[Value] {value}")

        return "\n".join(lines) + "\n"

    def write(
        self,
        entries: Iterable[ProcessedEntry],
        language_code: str,
        metadata: ParseMetadata,
        output_path: str,
        include_raw_header: bool = False,
    ) -> Path:
        """
        Write a single-language file to disk.

        Returns:
            The path written
        """
        content = self.serialize(entries, language_code, metadata, include_raw_header)

        path = Path(output_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ExportError(f"Failed to write {path}: {e}") from e
        return path

    def write_all(
        self,
        entries: Iterable[ProcessedEntry],
        metadata: ParseMetadata,
        output_dir: str,
        include_raw_header: bool = False,
    ) -> List[Path]:
        """Write one ``localized_<code>.txt`` per language into a directory."""
        return [
            self.write(
                group,
                code,
                metadata,
                str(Path(output_dir) / localized_filename(code)),
                include_raw_header,
            )
            for code, group in group_by_language(entries).items()
        ]

    def to_archive(
        self,
        entries: Iterable[ProcessedEntry],
        metadata: ParseMetadata,
        include_raw_header: bool = False,
    ) -> bytes:
        """
        Build a ZIP archive with one localized file per language.

        Raises:
            ExportError: If the archive cannot be generated
        """
        grouped = group_by_language(entries)
        if not grouped:
            raise ExportError("Nothing to export: no translated entries")

        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
                for code, group in grouped.items():
                    archive.writestr(
                        localized_filename(code),
                        self.serialize(group, code, metadata, include_raw_header),
                    )
        except (zipfile.BadZipFile, ValueError, OSError) as e:
            raise ExportError(f"ZIP generation failed: {e}") from e

        return buffer.getvalue()
