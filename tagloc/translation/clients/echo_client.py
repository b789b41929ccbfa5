"""Deterministic echo provider for demos and tests."""

import asyncio
from typing import List, Optional

from ...diagnostics import Diagnostics
from .base import ProviderKind, TranslationClient


class EchoClient(TranslationClient):
    """Returns every text prefixed with ``[<target_lang>] ``."""

    kind = ProviderKind.ECHO

    def __init__(self, delay: float = 0.0, diagnostics: Optional[Diagnostics] = None):
        """
        Initialize the echo client.

        Args:
            delay: Simulated network latency per call, in seconds
        """
        super().__init__(diagnostics)
        self.delay = delay

    async def translate(
        self,
        texts: List[str],
        target_lang: str,
        context: Optional[str] = None,
    ) -> List[str]:
        if not texts:
            return []

        if self.delay > 0:
            await asyncio.sleep(self.delay)

        return [f"[{target_lang}] {text}" for text in texts]
