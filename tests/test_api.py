from collections import deque

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from content_analyst import config, main, orchestrator
from content_analyst.db import repository
from content_analyst.errors import UpstreamUnavailable
from content_analyst.workflow import DIGEST_QUERY


@pytest.fixture
def dispatcher(monkeypatch, recording_dispatcher):
    monkeypatch.setattr(main, "dispatcher", recording_dispatcher)
    return recording_dispatcher


@pytest.fixture
def client(monkeypatch, dispatcher):
    monkeypatch.setattr(config, "REAPER_ENABLED", False)
    with TestClient(main.app) as c:
        yield c


def auth(token):
    return {"Authorization": f"Bearer {token}"}


class SyncDispatcher:
    """Runs the analysis inline so the whole flow is observable in one request."""

    def submit(self, idea_id):
        try:
            orchestrator.analyze_idea(idea_id)
        except Exception:
            pass
        return True

    def shutdown(self, wait=True):
        pass


# ---------------------------------------------------------
# CORS
# ---------------------------------------------------------
def test_preflight_returns_empty_200(client):
    response = client.options("/ideas")
    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert "content-type" in response.headers["access-control-allow-headers"]


def test_cors_headers_on_regular_responses(client):
    response = client.get("/ideas")
    assert response.headers["access-control-allow-origin"] == "*"


# ---------------------------------------------------------
# POST /ideas
# ---------------------------------------------------------
def test_submit_idea_creates_row_and_dispatches(client, dispatcher, make_token):
    response = client.post(
        "/ideas",
        json={"title": "Blockchain for B2B marketing", "description": "Ledgers for trust"},
        headers=auth(make_token(sub="user-42")),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Blockchain for B2B marketing"
    assert body["analysis_status"] == "analyzing"
    assert body["project_status"] == "new"
    assert body["user_id"] == "user-42"
    assert body["score"] is None
    assert dispatcher.submitted == [body["id"]]


def test_submit_idea_succeeds_when_dispatch_rejected(client, dispatcher, make_token):
    dispatcher.accept = False
    response = client.post("/ideas", json={"title": "Podcast series"}, headers=auth(make_token()))
    assert response.status_code == 201
    assert repository.get_idea(response.json()["id"])["analysis_status"] == "analyzing"


def test_submit_idea_rejects_missing_title(client, dispatcher, make_token):
    response = client.post("/ideas", json={"title": ""}, headers=auth(make_token()))
    assert response.status_code == 400
    assert "title" in response.json()["error"]
    assert repository.list_ideas() == []
    assert dispatcher.submitted == []


def test_submit_idea_without_auth_is_400(client, dispatcher, jwt_secret):
    response = client.post("/ideas", json={"title": "No token"})
    assert response.status_code == 400
    assert "error" in response.json()
    assert repository.list_ideas() == []


def test_submit_idea_with_expired_token_is_400(client, make_token):
    response = client.post("/ideas", json={"title": "Late"}, headers=auth(make_token(exp_minutes=-5)))
    assert response.status_code == 400
    assert "expired" in response.json()["error"]


def test_submit_then_background_analysis_completes(client, monkeypatch, upstreams, make_token):
    monkeypatch.setattr(main, "dispatcher", SyncDispatcher())
    response = client.post(
        "/ideas", json={"title": "Blockchain for B2B marketing"}, headers=auth(make_token())
    )
    assert response.status_code == 201

    idea = client.get(f"/ideas/{response.json()['id']}").json()
    assert idea["analysis_status"] == "completed"
    assert idea["score"] == 82
    assert "82/100" in idea["analysis"]


# ---------------------------------------------------------
# POST /analyze
# ---------------------------------------------------------
def test_analyze_completes_pending_idea(client, upstreams):
    idea = repository.create_idea(title="Blockchain for B2B marketing", user_id="user-1")

    response = client.post("/analyze", json={"idea_id": idea["id"]})

    assert response.status_code == 200
    assert response.json() == {"success": True, "idea_id": idea["id"]}
    row = repository.get_idea(idea["id"])
    assert row["analysis_status"] == "completed"
    assert row["score"] == 82
    assert upstreams.names() == ["search", "complete"]
    assert "Blockchain for B2B marketing" in upstreams.calls[0][1]


def test_analyze_marks_failed_on_search_timeout(client, upstreams):
    upstreams.search_error = UpstreamUnavailable("Search request failed: timed out")
    idea = repository.create_idea(title="Short-form video", user_id="user-1")

    response = client.post("/analyze", json={"idea_id": idea["id"]})

    assert response.status_code == 500
    assert "timed out" in response.json()["error"]
    row = repository.get_idea(idea["id"])
    assert row["analysis_status"] == "failed"
    assert row["score"] is None
    assert row["analysis"] is None
    assert "complete" not in upstreams.names()


def test_analyze_missing_idea_id_is_500(client, upstreams):
    response = client.post("/analyze", json={})
    assert response.status_code == 500
    assert "idea_id" in response.json()["error"]
    assert upstreams.calls == []


def test_analyze_unknown_idea_is_500(client, upstreams):
    response = client.post("/analyze", json={"idea_id": 999})
    assert response.status_code == 500
    assert "not found" in response.json()["error"]
    assert upstreams.calls == []


def test_analyze_completed_idea_is_rejected_and_unchanged(client, upstreams):
    idea = repository.create_idea(title="Newsletter", user_id="user-1")
    client.post("/analyze", json={"idea_id": idea["id"]})
    before = repository.get_idea(idea["id"])
    upstreams.calls.clear()

    response = client.post("/analyze", json={"idea_id": idea["id"]})

    assert response.status_code == 500
    assert repository.get_idea(idea["id"]) == before
    assert upstreams.calls == []


# ---------------------------------------------------------
# Team views
# ---------------------------------------------------------
def test_list_ideas_newest_first(client):
    first = repository.create_idea(title="First", user_id="user-1")
    second = repository.create_idea(title="Second", user_id="user-2")

    response = client.get("/ideas")

    assert response.status_code == 200
    assert [row["id"] for row in response.json()] == [second["id"], first["id"]]
    assert all("_id" not in row for row in response.json())


def test_get_unknown_idea_is_404(client):
    response = client.get("/ideas/12345")
    assert response.status_code == 404
    assert "error" in response.json()


def test_update_project_status(client, make_token):
    idea = repository.create_idea(title="Case study", user_id="user-1")

    response = client.patch(
        f"/ideas/{idea['id']}/project_status",
        json={"project_status": "in-progress"},
        headers=auth(make_token()),
    )

    assert response.status_code == 200
    assert response.json()["project_status"] == "in-progress"
    assert repository.get_idea(idea["id"])["analysis_status"] == "pending"


def test_update_project_status_rejects_unknown_value(client, make_token):
    idea = repository.create_idea(title="Case study", user_id="user-1")
    response = client.patch(
        f"/ideas/{idea['id']}/project_status",
        json={"project_status": "shipped"},
        headers=auth(make_token()),
    )
    assert response.status_code == 400
    assert repository.get_idea(idea["id"])["project_status"] == "new"


def test_update_project_status_requires_auth(client, jwt_secret):
    idea = repository.create_idea(title="Case study", user_id="user-1")
    response = client.patch(f"/ideas/{idea['id']}/project_status", json={"project_status": "on-hold"})
    assert response.status_code == 401


def test_update_project_status_unknown_idea(client, make_token):
    response = client.patch(
        "/ideas/777/project_status", json={"project_status": "complete"}, headers=auth(make_token())
    )
    assert response.status_code == 404


# ---------------------------------------------------------
# Daily insights
# ---------------------------------------------------------
def test_daily_insights_generated_and_stored(client, upstreams):
    upstreams.completion = "  <ul><li>Short video keeps growing</li></ul>\n"

    response = client.post("/daily-insights")

    assert response.status_code == 200
    assert response.json() == {"success": True, "insights": "<ul><li>Short video keeps growing</li></ul>"}
    assert upstreams.calls[0][1] == DIGEST_QUERY
    assert upstreams.calls[1][2] == config.DIGEST_TEMPERATURE

    latest = client.get("/daily-insights/latest")
    assert latest.status_code == 200
    assert latest.json()["content"] == "<ul><li>Short video keeps growing</li></ul>"


def test_daily_insights_upstream_failure_is_500(client, upstreams):
    upstreams.completion_error = UpstreamUnavailable("Model request failed with status 503")
    response = client.post("/daily-insights")
    assert response.status_code == 500
    assert client.get("/daily-insights/latest").status_code == 404


def test_latest_daily_insight_missing_is_404(client):
    assert client.get("/daily-insights/latest").status_code == 404


# ---------------------------------------------------------
# Logs
# ---------------------------------------------------------
def test_logs_capture_pipeline_progress(client, upstreams):
    idea = repository.create_idea(title="Logged idea", user_id="user-1")
    client.post("/analyze", json={"idea_id": idea["id"]})

    logs = client.get("/logs").json()["logs"]
    assert f"Starting analysis for idea ID: {idea['id']}" in logs


def test_logs_keep_only_recent_lines(client, monkeypatch):
    monkeypatch.setattr(main.log_buffer, "lines", deque(maxlen=3))
    for i in range(5):
        main.logger.info(f"line {i}")

    logs = client.get("/logs").json()["logs"]
    assert logs == "line 2\nline 3\nline 4\n"


# ---------------------------------------------------------
# Storage failures
# ---------------------------------------------------------
class BrokenCollection:
    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise PyMongoError("connection reset")
        return fail


@pytest.fixture
def broken_storage(monkeypatch):
    monkeypatch.setattr(repository, "get_collection", lambda name: BrokenCollection())


@pytest.mark.parametrize("path", ["/ideas", "/ideas/1", "/daily-insights/latest"])
def test_storage_failure_is_json_500(client, broken_storage, path):
    response = client.get(path)
    assert response.status_code == 500
    assert "connection reset" in response.json()["error"]


def test_project_status_storage_failure_is_json_500(client, broken_storage, make_token):
    response = client.patch(
        "/ideas/1/project_status", json={"project_status": "on-hold"}, headers=auth(make_token())
    )
    assert response.status_code == 500
    assert "connection reset" in response.json()["error"]


# ---------------------------------------------------------
# Malformed analysis triggers
# ---------------------------------------------------------
@pytest.mark.parametrize("body", [[1], "x", 42])
def test_analyze_non_object_body_is_500(client, upstreams, body):
    response = client.post("/analyze", json=body)
    assert response.status_code == 500
    assert "error" in response.json()
    assert upstreams.calls == []


def test_analyze_unparseable_body_is_500(client, upstreams):
    response = client.post("/analyze", content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 500
    assert "error" in response.json()


def test_ideas_unparseable_body_is_400(client, make_token):
    response = client.post(
        "/ideas",
        content=b"{not json",
        headers={"Content-Type": "application/json", **auth(make_token())},
    )
    assert response.status_code == 400
