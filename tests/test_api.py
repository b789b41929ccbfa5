"""Tests for the HTTP API."""

import io
import zipfile

import pytest
from fastapi.testclient import TestClient

from tagloc.config import config
from tagloc.translation.clients.base import ProviderKind, TranslationClient
from tagloc.web.app import create_app
from tagloc.web.services import localization_service


class BrokenProvider(TranslationClient):
    kind = ProviderKind.ECHO

    async def translate(self, texts, target_lang, context=None):
        raise IndexError("list index out of range")


@pytest.fixture
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_languages(client):
    languages = client.get("/api/languages").json()["languages"]
    assert {"label": "Deutsch", "code": "de-DE"} in languages
    assert len(languages) == 18


class TestTranslateEndpoint:

    def test_echo(self, client):
        response = client.post(
            "/api/translate",
            json={"texts": ["Hello", "Bye"], "targetLang": "fr-FR", "provider": "echo"},
        )

        assert response.status_code == 200
        assert response.json() == {"translations": ["[fr-FR] Hello", "[fr-FR] Bye"]}

    def test_empty_texts(self, client):
        response = client.post("/api/translate", json={"texts": [], "targetLang": "fr-FR"})

        assert response.status_code == 200
        assert response.json() == {"translations": []}

    @pytest.mark.parametrize("body", [
        {"texts": ["Hello"]},
        {"texts": "Hello", "targetLang": "fr-FR"},
        {"texts": ["Hello"], "targetLang": ""},
        {"texts": ["Hello"], "targetLang": "fr-FR", "provider": "google"},
    ])
    def test_invalid_input(self, client, body):
        response = client.post("/api/translate", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input"
        assert response.json()["details"]

    def test_provider_failure(self, client, monkeypatch):
        monkeypatch.setattr(config, "openai_api_key", "")

        response = client.post(
            "/api/translate",
            json={"texts": ["Hello"], "targetLang": "fr-FR", "provider": "openai"},
        )

        assert response.status_code == 500
        assert response.json()["error"] == "Translation failed"
        assert "OPENAI_API_KEY" in response.json()["details"]

    def test_unexpected_provider_failure(self, client, monkeypatch):
        monkeypatch.setattr(localization_service, "create_provider", lambda *args, **kwargs: BrokenProvider())

        response = client.post("/api/translate", json={"texts": ["Hello"], "targetLang": "fr-FR"})

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"error": "Translation failed", "details": "list index out of range"}


class TestProcessEndpoint:

    def test_single_language(self, client, sample_text):
        response = client.post(
            "/api/process",
            json={"text": sample_text, "mode": "single", "language": "ar-SA", "chunkSize": 3},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["succeeded"] == ["ar-SA"]
        assert data["metadata"] == {"languageId": "en-US", "tableId": "HUD_Main", "rawHeader": []}
        assert [e["stringKey"] for e in data["entries"]] == [
            "BTN_ACCEPT", "BTN_CANCEL", "ITEM_SWORD_DESC", "ITEM_POTION_HEAL",
        ]
        assert all(e["languageCode"] == "ar-SA" for e in data["entries"])
        assert "RTL_ALERT" in [risk["type"] for risk in data["entries"][0]["risks"]]
        assert data["stats"][0]["chunks"] == 2

    def test_custom_languages(self, client, sample_text):
        response = client.post(
            "/api/process",
            json={"text": sample_text, "mode": "custom", "languages": ["ja-JP", "de-DE"]},
        )

        assert response.json()["succeeded"] == ["de-DE", "ja-JP"]
        assert len(response.json()["entries"]) == 8

    def test_unknown_language(self, client, sample_text):
        response = client.post(
            "/api/process",
            json={"text": sample_text, "mode": "single", "language": "xx-XX"},
        )

        assert response.status_code == 400
        assert "xx-XX" in response.json()["details"]

    def test_blank_text(self, client):
        response = client.post("/api/process", json={"text": "  ", "language": "de-DE"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input"

    def test_unexpected_failure_keeps_error_shape(self, client, sample_text, monkeypatch):
        def broken_factory(*args, **kwargs):
            raise RuntimeError("settings exploded")

        monkeypatch.setattr(localization_service, "create_provider", broken_factory)

        response = client.post("/api/process", json={"text": sample_text, "language": "de-DE"})

        assert response.status_code == 500
        assert response.json() == {"error": "Translation failed", "details": "settings exploded"}

    def test_negative_chunk_size(self, client, sample_text):
        response = client.post(
            "/api/process",
            json={"text": sample_text, "language": "de-DE", "chunkSize": -1},
        )

        assert response.status_code == 400


class TestJobs:

    def start(self, client, body):
        response = client.post("/api/jobs", json=body)
        assert response.status_code == 200
        return response.json()["job_id"]

    def test_completed_job(self, client, sample_text):
        job_id = self.start(client, {"text": sample_text, "language": "de-DE"})

        job = client.get(f"/api/jobs/{job_id}").json()
        assert job["status"] == "completed"
        assert job["result"]["succeeded"] == ["de-DE"]

    def test_download_single_language(self, client, sample_text):
        job_id = self.start(client, {"text": sample_text, "language": "de-DE"})

        response = client.get(f"/api/jobs/{job_id}/download")

        assert response.status_code == 200
        assert 'filename="localized_de-DE.txt"' in response.headers["content-disposition"]
        assert response.text.startswith("[LanguageID] de-DE\n[TableID] HUD_Main\n")
        assert "[StringKey] BTN_ACCEPT\n[Value] Accept\n" in response.text

    def test_download_keeps_header_on_request(self, client):
        text = "[LanguageID] en-US\n[Version] 3\n[StringKey] K1\n[Value] Hello\n"
        job_id = self.start(client, {"text": text, "language": "de-DE"})

        plain = client.get(f"/api/jobs/{job_id}/download").text
        kept = client.get(f"/api/jobs/{job_id}/download", params={"keepHeader": "true"}).text

        assert "[Version] 3" not in plain
        assert kept.startswith("[LanguageID] de-DE\n[Version] 3\n")

    def test_download_archive(self, client, sample_text):
        job_id = self.start(
            client,
            {"text": sample_text, "mode": "custom", "languages": ["fr-FR", "ko-KR"]},
        )

        response = client.get(f"/api/jobs/{job_id}/download")

        assert response.headers["content-type"] == "application/zip"
        with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
            assert sorted(archive.namelist()) == ["localized_fr-FR.txt", "localized_ko-KR.txt"]

    def test_report(self, client, sample_text):
        job_id = self.start(client, {"text": sample_text, "language": "ja-JP"})

        response = client.get(f"/api/jobs/{job_id}/report.csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        lines = response.text.splitlines()
        assert lines[0] == "Language,StringKey,Original Text,Translated Text,Risk Type,Risk Message"
        assert all(line.startswith('"ja-JP",') for line in lines[1:])

    def test_failed_job(self, client):
        job_id = self.start(client, {"text": "", "language": "de-DE"})

        job = client.get(f"/api/jobs/{job_id}").json()
        assert job["status"] == "failed"
        assert job["error"] == "No source text provided."

        assert client.get(f"/api/jobs/{job_id}/download").status_code == 409

    def test_event_stream(self, client, sample_text):
        job_id = self.start(client, {"text": sample_text, "language": "de-DE"})

        response = client.get(f"/api/jobs/{job_id}/stream")

        assert response.headers["content-type"].startswith("text/event-stream")
        assert "event: log" in response.text
        assert response.text.rstrip().split("\n\n")[-1].startswith("event: complete")

    def test_event_stream_level_filter(self, client, sample_text):
        job_id = self.start(client, {"text": sample_text, "language": "de-DE"})

        response = client.get(f"/api/jobs/{job_id}/stream", params={"level": "warning"})

        assert "event: log" not in response.text
        assert "event: complete" in response.text
        assert client.get(f"/api/jobs/{job_id}/stream", params={"level": "loud"}).status_code == 400

    def test_unknown_job(self, client):
        assert client.get("/api/jobs/nope").status_code == 404
        assert client.get("/api/jobs/nope/report.csv").status_code == 404
        assert client.get("/api/jobs/nope/stream").status_code == 404
