"""Report generation for processed entries."""

from .csv_report import CsvReportGenerator, CSV_HEADER

__all__ = ["CsvReportGenerator", "CSV_HEADER"]
