"""Translation API clients."""

from .base import ProviderKind, TranslationClient, parse_translation_payload
from .echo_client import EchoClient
from .openai_client import OpenAIClient, LocalLLMClient
from .deepl_client import DeepLClient
from .remote_client import RemoteClient
from .factory import (
    DeepLSettings,
    EchoSettings,
    LocalSettings,
    OpenAISettings,
    ProviderSettings,
    RemoteSettings,
    create_provider,
    settings_for,
)

__all__ = [
    "ProviderKind",
    "TranslationClient",
    "parse_translation_payload",
    "EchoClient",
    "OpenAIClient",
    "LocalLLMClient",
    "DeepLClient",
    "RemoteClient",
    "DeepLSettings",
    "EchoSettings",
    "LocalSettings",
    "OpenAISettings",
    "ProviderSettings",
    "RemoteSettings",
    "create_provider",
    "settings_for",
]
