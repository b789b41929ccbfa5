"""Shared contract and response handling for translation providers."""

import json
import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from ...diagnostics import Diagnostics
from ...errors import ProviderError


class ProviderKind(str, Enum):
    """The closed set of supported translation backends."""
    ECHO = "echo"
    OPENAI = "openai"
    LOCAL = "local"
    DEEPL = "deepl"
    REMOTE = "remote"


class TranslationClient(ABC):
    """
    A translation backend.

    ``translate`` returns one string per input text, in input order, or
    raises ProviderError.
    """

    kind: ProviderKind

    def __init__(self, diagnostics: Optional[Diagnostics] = None):
        self.diagnostics = diagnostics or Diagnostics(f"providers.{self.kind.value}")

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    async def translate(
        self,
        texts: List[str],
        target_lang: str,
        context: Optional[str] = None,
    ) -> List[str]:
        """Translate texts into ``target_lang``, same order and count."""


# A JSON array of strings, or an object wrapping exactly one such array
_ARRAY_ADAPTER = TypeAdapter(List[str])
_PAYLOAD_ADAPTER = TypeAdapter(Union[List[str], Dict[str, List[str]]])

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def parse_translation_payload(content: Optional[str], expected: int, provider: str) -> List[str]:
    """
    Validate a model response against the translation schema.

    Args:
        content: Raw message content returned by the model
        expected: Number of texts that were sent
        provider: Provider name for error messages

    Returns:
        The translated strings

    Raises:
        ProviderError: Empty, non-JSON or wrongly shaped responses
    """
    if not content or not content.strip():
        raise ProviderError(f"No content received from {provider}", provider=provider)

    cleaned = _CODE_FENCE.sub("", content).strip()

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ProviderError(
            f"Model failed to return valid JSON: {e}",
            provider=provider,
            details={"content": cleaned[:500]},
        ) from e

    try:
        payload = _PAYLOAD_ADAPTER.validate_python(data, strict=True)
    except ValidationError as e:
        raise ProviderError(
            "Model returned JSON that is not an array of strings",
            provider=provider,
            details={"errors": str(e)},
        ) from e

    if isinstance(payload, dict):
        if len(payload) != 1:
            raise ProviderError(
                f"Expected a single array in the response object, got keys: {sorted(payload)}",
                provider=provider,
            )
        payload = next(iter(payload.values()))

    translations = _ARRAY_ADAPTER.validate_python(payload)

    if expected and not translations:
        raise ProviderError(
            f"Model returned no translations for {expected} texts",
            provider=provider,
        )

    return translations
