from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from guitargpt.config import Settings
from guitargpt.exceptions import ConfigError, DownloadError, FetchError
from guitargpt.models import ChartResult, Completion, Transcription, VideoResult
from guitargpt.web import create_app

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _result() -> ChartResult:
    return ChartResult(
        chord_chart="Chorus\nEm G\nHello darling",
        transcription=Transcription(text="Hello darling", language="english", duration=30.0),
        completion=Completion(content="", model="gpt-4", prompt_tokens=10, completion_tokens=5, total_tokens=15),
        video_title="Hello (Em)",
        detected_key="E minor",
        timings={"total_ms": 1234},
        estimated_cost=0.0006,
    )


def _client(settings=None, pipeline=None) -> TestClient:
    settings = settings or Settings(youtube_api_key="yt", openai_api_key="sk")
    return TestClient(create_app(settings, pipeline=pipeline or MagicMock()))


# ---------------------------------------------------------------------------
# GET /
# ---------------------------------------------------------------------------


def test_home_page():
    resp = _client().get("/")
    assert resp.status_code == 200
    assert "GuitarGPT" in resp.text
    assert "/api/youtube/search" in resp.text


# ---------------------------------------------------------------------------
# POST /api/youtube/search
# ---------------------------------------------------------------------------


def test_search_returns_results():
    videos = [VideoResult(id="abc", title="Song", thumbnail="t.jpg", channel_title="Chan")]
    with patch("guitargpt.web.YouTubeClient") as client_cls:
        client_cls.return_value.search.return_value = videos
        resp = _client().post("/api/youtube/search", json={"query": "song"})
    assert resp.status_code == 200
    assert resp.json() == {
        "results": [{"id": "abc", "title": "Song", "thumbnail": "t.jpg", "channelTitle": "Chan"}]
    }
    client_cls.assert_called_once_with("yt")
    client_cls.return_value.search.assert_called_once_with("song", max_results=10)


def test_search_without_api_key():
    resp = _client(settings=Settings(openai_api_key="sk")).post("/api/youtube/search", json={"query": "x"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "YouTube API key not configured"}


def test_search_upstream_failure():
    with patch("guitargpt.web.YouTubeClient") as client_cls:
        client_cls.return_value.search.side_effect = FetchError("https://www.googleapis.com", 500)
        resp = _client().post("/api/youtube/search", json={"query": "x"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to search YouTube"}


def test_search_requires_query():
    resp = _client().post("/api/youtube/search", json={})
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# POST /api/youtube/process
# ---------------------------------------------------------------------------


def test_process_returns_chart_and_html():
    pipeline = MagicMock()
    pipeline.process.return_value = _result()
    resp = _client(pipeline=pipeline).post("/api/youtube/process", json={"videoId": "abc"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["chordChart"] == "Chorus\nEm G\nHello darling"
    assert '<div class="section"><strong>Chorus</strong></div>' in body["html"]
    assert '<span class="chord">Em</span>' in body["html"]
    assert body["dev"]["timings"] == {"total_ms": 1234}
    assert body["dev"]["detectedKey"] == "E minor"
    pipeline.process.assert_called_once_with("abc")


def test_process_without_openai_key():
    pipeline = MagicMock()
    pipeline.process.side_effect = ConfigError("OpenAI API key")
    resp = _client(pipeline=pipeline).post("/api/youtube/process", json={"videoId": "abc"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "OpenAI API key not configured"}


def test_process_failure():
    pipeline = MagicMock()
    pipeline.process.side_effect = DownloadError("abc", "Video unavailable")
    resp = _client(pipeline=pipeline).post("/api/youtube/process", json={"videoId": "abc"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to process video"}
