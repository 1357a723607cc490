"""Shared fixtures for the TranslatePlus client test suite."""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from translateplus.config.settings import get_settings

TEST_API_KEY = "tp-test-key-12345678"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host TRANSLATEPLUS_* variables out of the tests."""
    for name in (
        "API_KEY", "BASE_URL", "TIMEOUT", "MAX_RETRIES",
        "MAX_CONCURRENT", "LOG_LEVEL", "LOG_FILE",
    ):
        monkeypatch.delenv(f"TRANSLATEPLUS_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set env vars and clear settings cache.

    Usage:
        override_settings(TRANSLATEPLUS_API_KEY="key", TRANSLATEPLUS_MAX_RETRIES=1)
    """
    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        # Clear lru_cache so Settings re-reads env
        get_settings.cache_clear()

    yield _override

    get_settings.cache_clear()


@pytest.fixture
def no_backoff():
    """Replace the retry backoff sleep with an AsyncMock recording delays."""
    with patch("translateplus.transport.executor.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        yield mock_sleep


@pytest.fixture
def i18n_file(tmp_path):
    """A small JSON i18n file on disk."""
    path = tmp_path / "messages.json"
    path.write_text(json.dumps({"greeting": "Hello", "farewell": "Goodbye"}), encoding="utf-8")
    return str(path)


class CallRecorder:
    """httpx.MockTransport handler that records requests and replays responses.

    Each queued item is either an ``httpx.Response`` or an exception instance
    to raise; the last item repeats once the queue is drained.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes) or [httpx.Response(200, json={})]
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        # Fresh copy so a repeated outcome is never a reused, already-closed response
        return httpx.Response(outcome.status_code, headers=outcome.headers, content=outcome.content)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def recorder():
    """Factory for CallRecorder instances."""
    return CallRecorder


def build_fake_api() -> FastAPI:
    """In-process stand-in for the TranslatePlus v2 API."""
    app = FastAPI()
    jobs: dict[str, dict] = {}

    @app.middleware("http")
    async def require_api_key(request: Request, call_next):
        if request.headers.get("x-api-key") != TEST_API_KEY:
            return JSONResponse(status_code=401, content={"detail": "Invalid API key"})
        return await call_next(request)

    @app.post("/v2/translate")
    async def translate(request: Request):
        body = await request.json()
        return {
            "translations": {
                "text": body["text"],
                "translation": f"[{body['target']}] {body['text']}",
                "source": body["source"],
                "target": body["target"],
            },
        }

    @app.post("/v2/translate/batch")
    async def translate_batch(request: Request):
        body = await request.json()
        return {
            "translations": [
                {"text": t, "translation": f"[{body['target']}] {t}", "success": True}
                for t in body["texts"]
            ],
            "source": body["source"],
            "target": body["target"],
        }

    @app.post("/v2/translate/html")
    async def translate_html(request: Request):
        body = await request.json()
        return {"html": body["html"].replace("Hello", "Bonjour"), "source": body["source"]}

    @app.post("/v2/translate/email")
    async def translate_email(request: Request):
        body = await request.json()
        return {"subject": f"[{body['target']}] {body['subject']}", "html_body": body["email_body"]}

    @app.post("/v2/translate/subtitles")
    async def translate_subtitles(request: Request):
        body = await request.json()
        return {"content": body["content"], "format": body["format"]}

    @app.post("/v2/language_detect")
    async def language_detect(request: Request):
        return {"language_detection": {"language": "fr", "confidence": 0.99}}

    @app.get("/v2/supported_languages")
    async def supported_languages():
        return {"supported_languages": [{"code": "en", "name": "English"}, {"code": "fr", "name": "French"}]}

    @app.get("/v2/account/summary")
    async def account_summary():
        return {"credits_remaining": 1200, "plan": "pro"}

    @app.post("/v2/i18n/create_job")
    async def create_job(request: Request):
        form = await request.form()
        upload = form["file"]
        content = await upload.read()
        job_id = f"job-{len(jobs) + 1}"
        jobs[job_id] = {
            "job_id": job_id,
            "status": "pending",
            "filename": upload.filename,
            "size": len(content),
            "source_language": form["source_language"],
            "target_languages": form["target_languages"].split(","),
            "webhook_url": form.get("webhook_url"),
        }
        return jobs[job_id]

    @app.get("/v2/i18n/job/{job_id}")
    async def job_status(job_id: str):
        if job_id not in jobs:
            return JSONResponse(status_code=404, content={"detail": "Job not found"})
        return jobs[job_id]

    @app.get("/v2/i18n/jobs")
    async def list_jobs(page: int, page_size: int):
        return {"results": list(jobs.values()), "page": page, "page_size": page_size}

    return app


@pytest.fixture
def fake_api_transport():
    """httpx ASGI transport serving the fake TranslatePlus API."""
    return httpx.ASGITransport(app=build_fake_api())
