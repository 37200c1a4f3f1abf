"""Shared test fixtures for the content idea analyst."""

import time

import jwt
import mongomock
import pytest

from content_analyst import config, workflow
from content_analyst.db import mongo

JWT_SECRET = "test-secret-key-do-not-use-in-production"

SCORED_HTML = (
    "<!DOCTYPE html><html><body><h2>Blockchain for B2B marketing</h2>"
    '<p><strong>Overall Score:</strong> <strong style="font-size: 1.2em; color: #FF7A59;">82/100</strong></p>'
    "</body></html>"
)

SEARCH_RESULTS = [
    {"title": "Blockchain in B2B", "url": "https://example.com/a", "snippet": "How ledgers help marketers."},
    {"title": "B2B trends 2025", "url": "https://example.com/b", "snippet": "Trust and transparency."},
    {"title": "Web3 marketing", "url": "https://example.com/c", "snippet": "Token-gated content."},
]


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, json_data=None, text=None):
        self.status_code = status_code
        self._json = json_data
        self.text = text if text is not None else ("" if json_data is None else str(json_data))

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json


class Upstreams:
    """Records calls to the fake search and completion services."""

    def __init__(self):
        self.calls = []
        self.search_results = list(SEARCH_RESULTS)
        self.search_error = None
        self.completion = SCORED_HTML
        self.completion_error = None

    def search(self, query, count=5):
        self.calls.append(("search", query, count))
        if self.search_error:
            raise self.search_error
        return self.search_results[:count]

    def complete(self, prompt, temperature, model=None):
        self.calls.append(("complete", prompt, temperature))
        if self.completion_error:
            raise self.completion_error
        return self.completion

    def names(self):
        return [c[0] for c in self.calls]


@pytest.fixture(autouse=True)
def db(monkeypatch):
    client = mongomock.MongoClient()
    monkeypatch.setattr(mongo, "client", client)
    yield client[config.MONGO_DB]
    client.close()


@pytest.fixture
def upstreams(monkeypatch) -> Upstreams:
    fake = Upstreams()
    monkeypatch.setattr(workflow, "search_web", fake.search)
    monkeypatch.setattr(workflow, "chat_completion", fake.complete)
    return fake


@pytest.fixture
def jwt_secret(monkeypatch) -> str:
    monkeypatch.setattr(config, "AUTH_JWT_SECRET", JWT_SECRET)
    monkeypatch.setattr(config, "AUTH_JWT_AUDIENCE", "")
    return JWT_SECRET


@pytest.fixture
def make_token(jwt_secret):
    def _make(sub="user-1", exp_minutes=60, secret=None):
        payload = {"sub": sub, "exp": int(time.time()) + exp_minutes * 60}
        return jwt.encode(payload, secret or jwt_secret, algorithm="HS256")
    return _make


class RecordingDispatcher:
    def __init__(self, accept=True):
        self.accept = accept
        self.submitted = []

    def submit(self, idea_id):
        self.submitted.append(idea_id)
        return self.accept

    def shutdown(self, wait=True):
        pass


@pytest.fixture
def recording_dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def fake_response():
    return FakeResponse
