"""Configuration management for the localization pipeline."""

import os
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    """Application configuration."""

    # API Keys
    openai_api_key: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    deepl_api_key: str = field(default_factory=lambda: os.getenv("DEEPL_API_KEY", ""))

    # Hosted chat-completion settings
    openai_model: str = field(default_factory=lambda: os.getenv("OPENAI_MODEL", "gpt-4o-mini"))
    openai_temperature: float = field(
        default_factory=lambda: float(os.getenv("OPENAI_TEMPERATURE", "0.3"))
    )

    # Local chat-completion endpoint (LM Studio and compatible servers)
    local_llm_url: str = field(
        default_factory=lambda: os.getenv("LOCAL_LLM_URL", "http://localhost:1234/v1")
    )
    local_llm_model: str = field(default_factory=lambda: os.getenv("LOCAL_LLM_MODEL", "local-model"))
    local_llm_temperature: float = 0.1

    # Remote tagloc server used by the "remote" provider
    server_url: str = field(
        default_factory=lambda: os.getenv("TAGLOC_SERVER_URL", "http://127.0.0.1:8000")
    )

    # Batch settings (0 = send every string of a language in one request)
    chunk_size: int = field(default_factory=lambda: int(os.getenv("CHUNK_SIZE", "50")))

    # Simulated latency of the echo provider, in seconds
    echo_delay: float = field(default_factory=lambda: float(os.getenv("ECHO_DELAY", "0")))

    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "120"))
    )

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    def validate(self, provider: str) -> List[str]:
        """Validate configuration for the given provider name and return list of errors."""
        errors = []
        if provider == "openai" and not self.openai_api_key:
            errors.append("OPENAI_API_KEY is not set")
        if provider == "deepl" and not self.deepl_api_key:
            errors.append("DEEPL_API_KEY is not set")
        if self.chunk_size < 0:
            errors.append("CHUNK_SIZE must be 0 or a positive integer")
        return errors


# Global config instance
config = Config()
