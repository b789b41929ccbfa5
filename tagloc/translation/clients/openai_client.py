"""Chat-completion clients: hosted OpenAI and local OpenAI-compatible servers."""

import json
from typing import Any, List, Optional

import openai
from openai import AsyncOpenAI

from ...config import config
from ...diagnostics import Diagnostics
from ...errors import ProviderError
from .base import ProviderKind, TranslationClient, parse_translation_payload


class OpenAIClient(TranslationClient):
    """Client for hosted OpenAI chat-completion translation."""

    kind = ProviderKind.OPENAI

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        client: Optional[Any] = None,
        diagnostics: Optional[Diagnostics] = None,
    ):
        """
        Initialize the OpenAI client.

        Args:
            api_key: OpenAI API key. If not provided, uses OPENAI_API_KEY from environment.
            model: Chat model name
            temperature: Sampling temperature
            client: Pre-built AsyncOpenAI-compatible client (tests)
        """
        super().__init__(diagnostics)
        self.api_key = api_key or config.openai_api_key
        if client is None and not self.api_key:
            raise ProviderError(
                "Provider 'openai' is not configured (Missing OPENAI_API_KEY).",
                provider=self.name,
                code="missing_api_key",
            )
        self.client = client or AsyncOpenAI(api_key=self.api_key, timeout=config.request_timeout)
        self.model = model or config.openai_model
        self.temperature = config.openai_temperature if temperature is None else temperature

    async def translate(
        self,
        texts: List[str],
        target_lang: str,
        context: Optional[str] = None,
    ) -> List[str]:
        """
        Translate texts in a single chat completion using JSON output.

        Args:
            texts: Texts to translate
            target_lang: Target locale code
            context: Optional free-text guidance for the translator

        Returns:
            Translated texts in the same order as input
        """
        if not texts:
            return []

        self.diagnostics.debug(
            f"Requesting {len(texts)} translations from {self.model}", language=target_lang
        )

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": self._build_system_prompt()},
                    {"role": "user", "content": self._build_user_prompt(texts, target_lang, context)},
                ],
                temperature=self.temperature,
                **self._request_options(),
            )
        except openai.APIConnectionError as e:
            raise ProviderError(
                self._connection_error_message(), provider=self.name, code="unreachable"
            ) from e
        except openai.APIError as e:
            raise ProviderError(f"{self.name} API error: {e}", provider=self.name) from e

        if not response.choices:
            raise ProviderError(f"No choices received from {self.name}", provider=self.name)

        content = response.choices[0].message.content
        return parse_translation_payload(content, len(texts), self.name)

    def _request_options(self) -> dict:
        return {"response_format": {"type": "json_object"}}

    def _connection_error_message(self) -> str:
        return "Cannot connect to the OpenAI API."

    def _build_system_prompt(self) -> str:
        return (
            "You are a professional game and software localizer. "
            "You must return valid JSON."
        )

    def _build_user_prompt(self, texts: List[str], target_lang: str, context: Optional[str]) -> str:
        prompt = (
            f"Translate the following texts to {target_lang}. "
            'Return a JSON object of the form {"translations": [...]} holding an array of strings. '
            f"The array MUST contain exactly {len(texts)} items in the original order. "
            "Preserve placeholders, markup and leading/trailing whitespace."
        )
        if context and context.strip():
            prompt += f"\n\nContext: {context.strip()}"

        prompt += f"\n\n{json.dumps(texts, ensure_ascii=False)}"
        return prompt


class LocalLLMClient(OpenAIClient):
    """Client for a local OpenAI-compatible endpoint such as LM Studio."""

    kind = ProviderKind.LOCAL

    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        client: Optional[Any] = None,
        diagnostics: Optional[Diagnostics] = None,
    ):
        """
        Initialize the local client.

        Args:
            base_url: Endpoint override; falls back to LOCAL_LLM_URL
            model: Model name, most local servers use the loaded model anyway
        """
        self.base_url = (base_url or "").strip() or config.local_llm_url
        # Local servers accept any key
        super().__init__(
            api_key="lm-studio",
            model=model or config.local_llm_model,
            temperature=config.local_llm_temperature if temperature is None else temperature,
            client=client or AsyncOpenAI(
                base_url=self.base_url,
                api_key="lm-studio",
                timeout=config.request_timeout,
            ),
            diagnostics=diagnostics,
        )
        self.diagnostics.debug(f"Using local endpoint at {self.base_url}")

    def _request_options(self) -> dict:
        # JSON mode support varies between local models
        return {}

    def _connection_error_message(self) -> str:
        return (
            f'Cannot connect to local endpoint at "{self.base_url}". '
            "Make sure the server is running and the model is loaded."
        )

    def _build_system_prompt(self) -> str:
        return (
            "You are a helpful translator. RESTRICTION: output strictly valid JSON array. "
            "Length MUST match input."
        )

    def _build_user_prompt(self, texts: List[str], target_lang: str, context: Optional[str]) -> str:
        prompt = (
            f"You are a professional translator. Translate the following array of texts into {target_lang}.\n"
            "Return ONLY a raw JSON array of strings.\n"
            "IMPORTANT: The output array MUST have exactly the same number of items as the input array.\n"
            "Translate every single item, even if it looks like a symbol or code. Do not skip any items.\n"
            'Do not include markdown formatting or keys like "translations".'
        )
        if context and context.strip():
            prompt += f"\n\nContext for translation: {context.strip()}"

        prompt += f"\n\nSource Texts ({len(texts)} items):\n{json.dumps(texts, ensure_ascii=False)}"
        return prompt
