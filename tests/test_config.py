"""Tests for environment-driven configuration."""

from tagloc.config import Config


def test_defaults(monkeypatch):
    for name in ("CHUNK_SIZE", "OPENAI_MODEL", "LOCAL_LLM_URL", "ECHO_DELAY"):
        monkeypatch.delenv(name, raising=False)

    cfg = Config()

    assert cfg.chunk_size == 50
    assert cfg.openai_model == "gpt-4o-mini"
    assert cfg.local_llm_url == "http://localhost:1234/v1"
    assert cfg.echo_delay == 0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CHUNK_SIZE", "0")
    monkeypatch.setenv("TAGLOC_SERVER_URL", "http://translate.internal:9000")

    cfg = Config()

    assert cfg.chunk_size == 0
    assert cfg.server_url == "http://translate.internal:9000"


def test_validate_reports_missing_keys():
    cfg = Config(openai_api_key="", deepl_api_key="")

    assert cfg.validate("openai") == ["OPENAI_API_KEY is not set"]
    assert cfg.validate("deepl") == ["DEEPL_API_KEY is not set"]
    assert cfg.validate("echo") == []
    assert cfg.validate("local") == []


def test_validate_chunk_size():
    assert Config(chunk_size=-1).validate("echo") == ["CHUNK_SIZE must be 0 or a positive integer"]
