"""CSV audit report for translated and risk-scanned entries."""

import csv
import io
from pathlib import Path
from typing import Iterable

from ..errors import ExportError
from ..models.entry import ProcessedEntry

CSV_HEADER = [
    "Language",
    "StringKey",
    "Original Text",
    "Translated Text",
    "Risk Type",
    "Risk Message",
]

PASS = "PASS"


class CsvReportGenerator:
    """Renders one row per risk, or a single PASS row for clean entries."""

    def to_csv(self, entries: Iterable[ProcessedEntry]) -> str:
        """
        Render the report.

        Every data field is quoted with embedded quotes doubled; newlines
        inside fields are kept as-is.
        """
        buffer = io.StringIO()
        buffer.write(",".join(CSV_HEADER) + "\n")

        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for entry in entries:
            base = [
                entry.language_code,
                entry.string_key,
                entry.original_value,
                entry.translated_value,
            ]
            if not entry.risks:
                writer.writerow(base + [PASS, ""])
                continue
            for risk in entry.risks:
                writer.writerow(base + [risk.kind.value, risk.message])

        return buffer.getvalue()

    def write(self, entries: Iterable[ProcessedEntry], output_path: str) -> Path:
        """Write the report to disk."""
        path = Path(output_path)
        content = self.to_csv(entries)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8", newline="")
        except OSError as e:
            raise ExportError(f"Failed to write report {path}: {e}") from e
        return path
