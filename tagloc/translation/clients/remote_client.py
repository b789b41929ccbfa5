"""Client that forwards translation requests to a running tagloc server."""

from typing import List, Optional

import httpx
from pydantic import BaseModel, ValidationError

from ...config import config
from ...diagnostics import Diagnostics
from ...errors import ProviderError
from .base import ProviderKind, TranslationClient


class TranslateResponse(BaseModel):
    translations: List[str]


class RemoteClient(TranslationClient):
    """
    Posts the translate wire contract to ``<server_url>/api/translate``.

    Request body: ``{texts, targetLang, provider, customEndpoint?, context?, apiKey?}``.
    Success body: ``{translations}``; failures carry ``{error, details}``.
    """

    kind = ProviderKind.REMOTE

    def __init__(
        self,
        server_url: Optional[str] = None,
        upstream: str = ProviderKind.ECHO.value,
        custom_endpoint: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        diagnostics: Optional[Diagnostics] = None,
    ):
        """
        Initialize the remote client.

        Args:
            server_url: Base URL of the tagloc server
            upstream: Provider the server should use
            custom_endpoint: Endpoint override forwarded to the server
            api_key: Key forwarded to the server's provider
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests)
        """
        super().__init__(diagnostics)
        self.server_url = (server_url or config.server_url).rstrip("/")
        self.upstream = upstream
        self.custom_endpoint = custom_endpoint
        self.api_key = api_key
        self.timeout = timeout or config.request_timeout
        self.transport = transport

    async def translate(
        self,
        texts: List[str],
        target_lang: str,
        context: Optional[str] = None,
    ) -> List[str]:
        if not texts:
            return []

        body = {"texts": texts, "targetLang": target_lang, "provider": self.upstream}
        if self.custom_endpoint:
            body["customEndpoint"] = self.custom_endpoint
        if context:
            body["context"] = context
        if self.api_key:
            body["apiKey"] = self.api_key

        url = f"{self.server_url}/api/translate"
        self.diagnostics.debug(f"POST {url} ({len(texts)} texts)", language=target_lang)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, json=body)
        except httpx.HTTPError as e:
            raise ProviderError(
                f"Cannot connect to translation server at {self.server_url}: {e}",
                provider=self.name,
                code="unreachable",
            ) from e

        if response.status_code >= 400:
            raise ProviderError(self._error_message(response), provider=self.name)

        try:
            return TranslateResponse.model_validate_json(response.content).translations
        except ValidationError as e:
            raise ProviderError(
                "Translation server returned an invalid response",
                provider=self.name,
                details={"errors": str(e)},
            ) from e

    def _error_message(self, response: httpx.Response) -> str:
        """Prefer the server's ``details`` then ``error`` fields."""
        try:
            data = response.json()
        except ValueError:
            return f"Translation request failed ({response.status_code})"

        if isinstance(data, dict):
            message = data.get("details") or data.get("error")
            if message:
                return str(message)
        return f"Translation request failed ({response.status_code})"
