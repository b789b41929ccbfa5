"""DeepL API client for translation."""

import asyncio
from typing import Any, List, Optional

import deepl

from ...config import config
from ...diagnostics import Diagnostics
from ...errors import ProviderError
from .base import ProviderKind, TranslationClient


class DeepLClient(TranslationClient):
    """Client for DeepL translation API."""

    kind = ProviderKind.DEEPL

    # Catalog locales whose DeepL target code is not just the upper-cased language
    LANGUAGE_MAP = {
        "en-US": "EN-US",
        "en-GB": "EN-GB",
        "pt-BR": "PT-BR",
        "pt-PT": "PT-PT",
        "zh-CN": "ZH-HANS",
        "zh-TW": "ZH-HANT",
        "es-419": "ES-419",
    }

    def __init__(
        self,
        api_key: Optional[str] = None,
        translator: Optional[Any] = None,
        diagnostics: Optional[Diagnostics] = None,
    ):
        """
        Initialize the DeepL client.

        Args:
            api_key: DeepL API key. If not provided, uses DEEPL_API_KEY from environment.
            translator: Pre-built deepl.Translator-compatible object (tests)
        """
        super().__init__(diagnostics)
        self.api_key = api_key or config.deepl_api_key
        if translator is None and not self.api_key:
            raise ProviderError(
                "Provider 'deepl' is not configured (Missing DEEPL_API_KEY).",
                provider=self.name,
                code="missing_api_key",
            )
        self.translator = translator or deepl.Translator(self.api_key)

    @classmethod
    def target_code(cls, language_code: str) -> str:
        """Map a locale code (e.g. "de-DE") to a DeepL target code (e.g. "DE")."""
        if language_code in cls.LANGUAGE_MAP:
            return cls.LANGUAGE_MAP[language_code]
        return language_code.split("-")[0].upper()

    async def translate(
        self,
        texts: List[str],
        target_lang: str,
        context: Optional[str] = None,
    ) -> List[str]:
        """
        Translate multiple texts in one DeepL request.

        The SDK is blocking, so the call runs in a worker thread.
        """
        if not texts:
            return []

        kwargs = {
            "target_lang": self.target_code(target_lang),
            "preserve_formatting": True,
        }
        if context and context.strip():
            kwargs["context"] = context.strip()

        try:
            results = await asyncio.to_thread(self.translator.translate_text, texts, **kwargs)
        except deepl.DeepLException as e:
            raise ProviderError(f"DeepL error: {e}", provider=self.name) from e

        # Handle single result case
        if not isinstance(results, list):
            results = [results]

        return [r.text for r in results]
