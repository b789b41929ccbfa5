"""Provider settings variants and client construction."""

from dataclasses import dataclass
from typing import Optional, Union

from ...config import config
from ...diagnostics import Diagnostics
from .base import ProviderKind, TranslationClient
from .deepl_client import DeepLClient
from .echo_client import EchoClient
from .openai_client import LocalLLMClient, OpenAIClient
from .remote_client import RemoteClient


@dataclass(frozen=True)
class EchoSettings:
    delay: float = 0.0
    kind: ProviderKind = ProviderKind.ECHO


@dataclass(frozen=True)
class OpenAISettings:
    api_key: Optional[str] = None
    model: Optional[str] = None
    kind: ProviderKind = ProviderKind.OPENAI


@dataclass(frozen=True)
class LocalSettings:
    base_url: Optional[str] = None
    model: Optional[str] = None
    kind: ProviderKind = ProviderKind.LOCAL


@dataclass(frozen=True)
class DeepLSettings:
    api_key: Optional[str] = None
    kind: ProviderKind = ProviderKind.DEEPL


@dataclass(frozen=True)
class RemoteSettings:
    server_url: Optional[str] = None
    upstream: ProviderKind = ProviderKind.ECHO
    custom_endpoint: Optional[str] = None
    api_key: Optional[str] = None
    kind: ProviderKind = ProviderKind.REMOTE


ProviderSettings = Union[EchoSettings, OpenAISettings, LocalSettings, DeepLSettings, RemoteSettings]


def settings_for(
    kind: Union[ProviderKind, str],
    endpoint: Optional[str] = None,
    api_key: Optional[str] = None,
    server_url: Optional[str] = None,
    upstream: Union[ProviderKind, str] = ProviderKind.ECHO,
) -> ProviderSettings:
    """
    Build settings for a provider kind from request options and configuration.

    Args:
        kind: Provider kind or its name
        endpoint: Endpoint override (local endpoint, or forwarded by remote)
        api_key: Key override for hosted providers
        server_url: Server for the remote provider
        upstream: Provider the remote server should use

    Raises:
        ValueError: Unknown provider name
    """
    kind = ProviderKind(kind)

    if kind == ProviderKind.ECHO:
        return EchoSettings(delay=config.echo_delay)
    if kind == ProviderKind.OPENAI:
        return OpenAISettings(api_key=api_key)
    if kind == ProviderKind.LOCAL:
        return LocalSettings(base_url=endpoint)
    if kind == ProviderKind.DEEPL:
        return DeepLSettings(api_key=api_key)
    return RemoteSettings(
        server_url=server_url,
        upstream=ProviderKind(upstream),
        custom_endpoint=endpoint,
        api_key=api_key,
    )


def create_provider(
    settings: ProviderSettings,
    diagnostics: Optional[Diagnostics] = None,
) -> TranslationClient:
    """
    Instantiate the client for a settings variant.

    Raises:
        ProviderError: Missing credentials for hosted providers
        TypeError: Settings outside the supported variants
    """
    if isinstance(settings, EchoSettings):
        return EchoClient(delay=settings.delay, diagnostics=diagnostics)
    if isinstance(settings, OpenAISettings):
        return OpenAIClient(api_key=settings.api_key, model=settings.model, diagnostics=diagnostics)
    if isinstance(settings, LocalSettings):
        return LocalLLMClient(base_url=settings.base_url, model=settings.model, diagnostics=diagnostics)
    if isinstance(settings, DeepLSettings):
        return DeepLClient(api_key=settings.api_key, diagnostics=diagnostics)
    if isinstance(settings, RemoteSettings):
        return RemoteClient(
            server_url=settings.server_url,
            upstream=settings.upstream.value,
            custom_endpoint=settings.custom_endpoint,
            api_key=settings.api_key,
            diagnostics=diagnostics,
        )
    raise TypeError(f"Unsupported provider settings: {type(settings).__name__}")
