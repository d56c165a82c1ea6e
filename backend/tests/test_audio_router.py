from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from soundscape.config import settings
from soundscape.core.freesound import FreesoundError
from soundscape.main import app
from soundscape.services.audio import GeneratedAudio, audio_service


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "environments": 8}


def test_list_environments(client: TestClient) -> None:
    resp = client.get("/audio/environments")
    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 8
    assert {"id", "name", "description", "type", "icon", "gradient"} <= set(body[0])
    assert "frequency" in {env["id"] for env in body}


def test_generate_returns_wav(client: TestClient) -> None:
    resp = client.get("/audio/generate/frequency", params={"duration": 1, "volume": 0.5})
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "audio/wav"
    assert resp.headers["content-length"] == str(44 + 2 * 44100)
    assert resp.headers["cache-control"] == "public, max-age=3600"
    assert resp.content[:4] == b"RIFF"


def test_generate_zero_duration(client: TestClient) -> None:
    resp = client.get("/audio/generate/rain", params={"duration": 0})
    assert resp.status_code == 200
    assert len(resp.content) == 44


def test_generate_floors_fractional_seconds(client: TestClient) -> None:
    resp = client.get("/audio/generate/frequency", params={"duration": 1.5, "volume": 0.5})
    assert resp.status_code == 200
    assert len(resp.content) == 44 + 2 * 44100


def test_generate_uses_defaults(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[tuple[str, float, float]] = []

    async def fake_generate(environment_id: str, duration_ms: float, volume: float) -> GeneratedAudio:
        seen.append((environment_id, duration_ms, volume))
        return GeneratedAudio(data=b"RIFF", media_type="audio/wav", source="synthesizer")

    monkeypatch.setattr(audio_service, "generate_environment_audio", fake_generate)
    resp = client.get("/audio/generate/ocean")
    assert resp.status_code == 200
    assert seen == [("ocean", 30000, 0.7)]


def test_generate_text_fallback_is_plain_text(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_generate(environment_id: str, duration_ms: float, volume: float) -> GeneratedAudio:
        return GeneratedAudio(data=b"Audio generation failed", media_type="text/plain", source="message")

    monkeypatch.setattr(audio_service, "generate_environment_audio", fake_generate)
    resp = client.get("/audio/generate/ocean")
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text == "Audio generation failed"


def test_generate_unknown_environment(client: TestClient) -> None:
    resp = client.get("/audio/generate/volcano")
    assert resp.status_code == 404


def test_generate_validates_query(client: TestClient) -> None:
    assert client.get("/audio/generate/rain", params={"volume": 2}).status_code == 422
    assert client.get("/audio/generate/rain", params={"duration": -5}).status_code == 422


def test_generate_rejects_long_duration(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "max_duration_seconds", 1)
    resp = client.get("/audio/generate/rain", params={"duration": 2})
    assert resp.status_code == 400


def test_stream_concatenates_chunks(client: TestClient, fast_stream) -> None:
    resp = client.post("/audio/stream/rain", json={"duration": 100, "volume": 0.5})
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "audio/wav"
    assert resp.headers["cache-control"] == "no-cache"
    assert len(resp.content) == 2 * (44 + 2 * 2205)
    assert resp.content.count(b"RIFF") >= 2


def test_stream_without_body_uses_defaults(client: TestClient, fast_stream) -> None:
    resp = client.post("/audio/stream/ocean")
    assert resp.status_code == 200
    assert len(resp.content) == 4 * (44 + 2 * 2205)


def test_stream_unknown_environment(client: TestClient) -> None:
    assert client.post("/audio/stream/volcano").status_code == 404


def test_search_proxies_freesound(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_search(query: str) -> dict:
        return {"count": 1, "results": [{"id": 1, "name": query}]}

    monkeypatch.setattr(audio_service, "search_samples", fake_search)
    resp = client.get("/audio/search", params={"query": "rain"})
    assert resp.status_code == 200
    assert resp.json()["results"][0]["name"] == "rain"


def test_search_upstream_failure(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    async def failing_search(query: str) -> dict:
        raise FreesoundError("no key")

    monkeypatch.setattr(audio_service, "search_samples", failing_search)
    resp = client.get("/audio/search", params={"query": "rain"})
    assert resp.status_code == 502


def test_search_timeout_is_bad_gateway(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    async def slow_search(query: str) -> dict:
        raise asyncio.TimeoutError()

    monkeypatch.setattr(audio_service, "search_samples", slow_search)
    resp = client.get("/audio/search", params={"query": "rain"})
    assert resp.status_code == 502
