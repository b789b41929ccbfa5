"""Shared fixtures and fake providers."""

from typing import Dict, List, Optional

import pytest

from tagloc.diagnostics import DiagnosticRecord, Diagnostics
from tagloc.errors import ProviderError
from tagloc.translation.clients.base import ProviderKind, TranslationClient

SAMPLE_TEXT = """[LanguageID] en-US
[TableID] HUD_Main

* Common Actions
[StringKey] BTN_ACCEPT
[Value] Accept
[StringKey] BTN_CANCEL
[Value] Cancel

* Inventory Strings
[StringKey] ITEM_SWORD_DESC
[Value] A sharp blade forged in the depths of the mountain.
[StringKey] ITEM_POTION_HEAL
[Value] Restores 50 HP.
"""


class RecordCollector:
    """Subscriber that keeps every record it receives."""

    def __init__(self):
        self.records: List[DiagnosticRecord] = []

    def __call__(self, record: DiagnosticRecord) -> None:
        self.records.append(record)

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [r.message for r in self.records if level is None or r.level == level]


class FakeProvider(TranslationClient):
    """Scriptable provider recording every call."""

    kind = ProviderKind.ECHO

    def __init__(
        self,
        fail_languages: Optional[List[str]] = None,
        fail_on_call: Optional[int] = None,
        short_by: int = 0,
        extra: int = 0,
        overrides: Optional[Dict[str, str]] = None,
    ):
        super().__init__()
        self.fail_languages = set(fail_languages or [])
        self.fail_on_call = fail_on_call
        self.short_by = short_by
        self.extra = extra
        self.overrides = overrides or {}
        self.calls: List[tuple] = []

    async def translate(self, texts, target_lang, context=None):
        self.calls.append((list(texts), target_lang, context))
        if target_lang in self.fail_languages:
            raise ProviderError(f"backend down for {target_lang}", provider="fake")
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise ProviderError("chunk failed", provider="fake")

        result = [self.overrides.get(text, f"{text}-{target_lang}") for text in texts]
        if self.short_by:
            result = result[:len(result) - self.short_by]
        return result + ["surplus"] * self.extra


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_TEXT


@pytest.fixture
def collector() -> RecordCollector:
    return RecordCollector()


@pytest.fixture
def diagnostics(collector) -> Diagnostics:
    diag = Diagnostics("tests")
    diag.subscribe(collector)
    return diag
