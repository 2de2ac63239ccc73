"""
Tests for the formatting API.

Uses FastAPI's TestClient (synchronous); no server process is started.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from jsonmend.pipeline.orchestrator import ANNOTATION_MARKER


@pytest.fixture(autouse=True)
def _patch_env(monkeypatch):
    """Ensure tests don't pick up a custom default style from the environment."""
    monkeypatch.delenv("DEFAULT_INDENT", raising=False)
    monkeypatch.delenv("REPAIR_MAX_CHARS", raising=False)


@pytest.fixture()
def client():
    """TestClient with lifespan."""
    from apps.api.main import app

    with TestClient(app) as c:
        yield c


# ── Health ───────────────────────────────────────────────────


class TestHealth:
    def test_health_ok(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert "version" in data


# ── Format ───────────────────────────────────────────────────


class TestFormat:
    def test_formatted(self, client):
        resp = client.post("/format", json={"text": '{"b":1,"a":2}', "indent": "compact"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["kind"] == "formatted"
        assert data["text"] == '{"b":1,"a":2}'
        assert data["annotated"] is False
        assert data["primary"] is None

    def test_default_indent(self, client):
        resp = client.post("/format", json={"text": '{"a":1}'})
        assert resp.json()["text"] == '{\n  "a": 1\n}'

    def test_empty_text(self, client):
        resp = client.post("/format", json={"text": "   ", "indent": "tab"})
        assert resp.json() == {
            "kind": "formatted",
            "text": "",
            "annotated": False,
            "primary": None,
            "secondary": None,
        }

    def test_repaired(self, client, repairable_document):
        resp = client.post("/format", json={"text": repairable_document, "indent": "four-space"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["kind"] == "repaired"
        assert data["annotated"] is True
        assert data["text"].startswith(ANNOTATION_MARKER + "\n")

    def test_diagnostic_is_not_a_server_error(self, client, mismatched_document):
        resp = client.post("/format", json={"text": mismatched_document})
        assert resp.status_code == 200
        data = resp.json()
        assert data["kind"] == "diagnostic"
        assert data["primary"]["stage"] == "lenient_parse"
        assert data["secondary"]["stage"] == "repair"
        assert data["secondary"]["position"] == 18
        assert "Automatic repair failed" in data["text"]

    def test_unknown_indent(self, client):
        resp = client.post("/format", json={"text": "{}", "indent": "three-space"})
        assert resp.status_code == 422


# ── Strip annotation ─────────────────────────────────────────


class TestStripAnnotation:
    def test_strips_marker(self, client):
        resp = client.post("/strip-annotation", json={"text": f"{ANNOTATION_MARKER}\n[1]"})
        assert resp.status_code == 200
        assert resp.json() == {"text": "[1]"}

    def test_passthrough(self, client):
        resp = client.post("/strip-annotation", json={"text": "[1]"})
        assert resp.json() == {"text": "[1]"}
