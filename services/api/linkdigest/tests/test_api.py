import logging
from types import SimpleNamespace

import httpx
from fastapi.testclient import TestClient

from linkdigest import article, normalizer, youtube
from linkdigest.errors import FailureKind, SummarizationFailure
from linkdigest.main import create_app
from linkdigest.settings import Settings


class FakeSummarizer:
    name = "fake"

    def __init__(self, result="A short summary.", error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def summarize(self, text):
        self.calls.append(text)
        if self.error:
            raise self.error
        return self.result


def make_client(summarizer=None, **overrides):
    params = {"summary_backend": "none", "hf_token": None, "openai_api_key": None}
    params.update(overrides)
    app = create_app(Settings(**params))
    if summarizer is not None:
        app.state.summarizer = summarizer
    return TestClient(app), app


def stub_segments(monkeypatch, texts):
    def fake(video_id, languages=("en",)):
        return [SimpleNamespace(text=t, start=i, duration=1.0) for i, t in enumerate(texts)]

    monkeypatch.setattr(youtube, "fetch_transcript_segments", fake)


def stub_article(monkeypatch, handler):
    real = article.fetch_article_text

    async def fake(url, timeout=15):
        return await real(url, timeout=timeout, transport=httpx.MockTransport(handler))

    monkeypatch.setattr(normalizer, "fetch_article_text", fake)


def test_health():
    client, _ = make_client()
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["backend"] == "none"
    assert data["summarizer_ready"] is False


def test_landing_page_served():
    client, _ = make_client()
    r = client.get("/")
    assert r.status_code == 200
    assert "LinkDigest" in r.text


def test_text_mode_echoes_transcript():
    client, _ = make_client()
    r = client.post("/api/summarize", json={"mode": "text", "text": "  hello  "})
    assert r.status_code == 200
    assert r.json() == {"transcript": "hello"}


def test_whitespace_text_is_rejected():
    client, _ = make_client()
    r = client.post("/api/summarize", json={"mode": "text", "text": "   "})
    assert r.status_code == 400
    assert r.json()["error"] == "no text provided"


def test_unknown_mode_is_rejected_even_with_inputs():
    client, _ = make_client()
    r = client.post("/api/summarize", json={"mode": "bogus", "url": "https://example.com", "text": "hi"})
    assert r.status_code == 400
    assert r.json() == {"error": "unknown mode"}


def test_missing_mode_is_bad_request():
    client, _ = make_client()
    r = client.post("/api/summarize", json={"text": "hi"})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid request"


def test_non_json_body_is_bad_request():
    client, _ = make_client()
    r = client.post("/api/summarize", content=b"not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400


def test_youtube_mode_requires_url():
    client, _ = make_client()
    r = client.post("/api/summarize", json={"mode": "youtube"})
    assert r.status_code == 400
    assert r.json()["error"] == "url is required"


def test_invalid_youtube_url():
    client, _ = make_client()
    r = client.post("/api/summarize", json={"mode": "youtube", "url": "https://vimeo.com/123"})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid youtube url"


def test_youtube_transcript_joined(monkeypatch):
    stub_segments(monkeypatch, ["a", "b", "c"])
    client, _ = make_client()
    r = client.post("/api/summarize", json={"mode": "youtube", "url": "https://youtu.be/abc123"})
    assert r.status_code == 200
    assert r.json() == {"transcript": "a b c"}


def test_youtube_without_subtitles(monkeypatch):
    stub_segments(monkeypatch, [])
    client, _ = make_client()
    r = client.post("/api/summarize", json={"mode": "youtube", "url": "https://www.youtube.com/watch?v=abc123"})
    assert r.status_code == 400
    assert r.json()["error"] == "no subtitles available"


def test_article_404_is_client_error(monkeypatch):
    stub_article(monkeypatch, lambda request: httpx.Response(404, text="gone"))
    client, _ = make_client()
    r = client.post("/api/summarize", json={"mode": "article", "url": "https://example.com/missing"})
    assert r.status_code == 400
    assert r.json() == {"error": "failed to fetch article", "details": 404}


def test_passthrough_truncation_is_configurable():
    client, _ = make_client(max_chars=5, truncation_marker="...")
    r = client.post("/api/summarize", json={"mode": "text", "text": "abcdefghij"})
    assert r.status_code == 200
    assert r.json() == {"transcript": "abcde..."}


def test_summary_profile_returns_summary():
    fake = FakeSummarizer()
    client, _ = make_client(summarizer=fake, summary_backend="huggingface", hf_token="hf_test")
    r = client.post("/api/summarize", json={"mode": "text", "text": "Some long text."})
    assert r.status_code == 200
    assert r.json() == {"summary": "A short summary."}
    assert fake.calls == ["Some long text."]


def test_summary_input_truncated_with_marker():
    fake = FakeSummarizer()
    client, _ = make_client(summarizer=fake, summary_backend="huggingface", hf_token="hf_test")
    r = client.post("/api/summarize", json={"mode": "text", "text": "x" * 5000})
    assert r.status_code == 200
    assert fake.calls == ["x" * 3000 + " [truncated]"]


def test_missing_credential_fails_without_calling_backend():
    client, app = make_client(summary_backend="openai")
    assert app.state.summarizer is None
    r = client.post("/api/summarize", json={"mode": "text", "text": "hello"})
    assert r.status_code == 500
    assert r.json() == {"error": "summarization is not configured", "details": "OPENAI_API_KEY is not set"}


def test_summarization_failure_is_server_error():
    failure = SummarizationFailure(FailureKind.UPSTREAM_ERROR, "summarization backend error", details="rate limited")
    client, _ = make_client(
        summarizer=FakeSummarizer(error=failure), summary_backend="huggingface", hf_token="hf_test"
    )
    r = client.post("/api/summarize", json={"mode": "text", "text": "hello"})
    assert r.status_code == 500
    assert r.json() == {"error": "summarization backend error", "details": "rate limited"}


def test_unexpected_error_reports_message():
    client, _ = make_client(
        summarizer=FakeSummarizer(error=RuntimeError("boom")), summary_backend="huggingface", hf_token="hf_test"
    )
    r = client.post("/api/summarize", json={"mode": "text", "text": "hello"})
    assert r.status_code == 500
    assert r.json() == {"error": "Server error", "details": "boom"}


def test_startup_logs_summarizer_name(caplog):
    caplog.set_level(logging.INFO, logger="linkdigest.main")
    create_app(Settings(summary_backend="huggingface", hf_token="hf_test"))
    assert "summarizer=huggingface" in caplog.text


def test_startup_logs_missing_summarizer(caplog):
    caplog.set_level(logging.INFO, logger="linkdigest")
    create_app(Settings(summary_backend="openai", openai_api_key=None))
    assert "OPENAI_API_KEY is not set" in caplog.text
    assert "summarizer=None" in caplog.text
