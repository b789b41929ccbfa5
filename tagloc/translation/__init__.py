"""Batch translation orchestration."""

from .orchestrator import BatchOrchestrator, BatchResult, LanguageStats, chunk_texts
from .pipeline import LocalizationRun, localize

__all__ = [
    "BatchOrchestrator",
    "BatchResult",
    "LanguageStats",
    "chunk_texts",
    "LocalizationRun",
    "localize",
]
