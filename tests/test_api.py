"""Tests for the FastAPI keyboard API.

WHY: Validates every endpoint: conversion, pattern listing, the session
lifecycle, key handling, toggling, and the error responses clients rely
on (404 for unknown sessions, 429 when full, 422 for bad keys).

RULES:
- All tests use the FastAPI TestClient (synchronous)
- The session store is cleared before and after each test
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from bengali_keyboard import __version__
from bengali_keyboard.config import DEFAULT_ENABLED
from bengali_keyboard.server.app import app, session_store


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_session_store():
    """Clear all sessions before each test to ensure isolation."""
    session_store._sessions.clear()
    yield
    session_store._sessions.clear()


@pytest.fixture
def client():
    return TestClient(app)


def _new_session(client, enabled=True) -> str:
    resp = client.post("/sessions", json={"enabled": enabled})
    assert resp.status_code == 201
    return resp.json()["id"]


def _send(client, session_id, chars):
    return [
        client.post("/sessions/{}/keys".format(session_id), json={"char": ch})
        for ch in chars
    ]


# ---------------------------------------------------------------------------
# POST /convert, GET /patterns
# ---------------------------------------------------------------------------


class TestConvert:
    """Tests for POST /convert."""

    def test_converts_text(self, client):
        resp = client.post("/convert", json={"text": "ami bangla"})
        assert resp.status_code == 200
        assert resp.json() == {"text": "ami bangla", "output": "আমি বাংলা"}

    def test_missing_text(self, client):
        resp = client.post("/convert", json={})
        assert resp.status_code == 422


class TestPatterns:
    """Tests for GET /patterns."""

    def test_lists_table(self, client):
        resp = client.get("/patterns")
        assert resp.status_code == 200
        body = resp.json()
        assert len(body) == 142
        assert body[0] == {"pattern": "o", "script": "অ", "is_vowel": True, "diacritic": ""}

    def test_consonant_has_no_diacritic(self, client):
        body = client.get("/patterns").json()
        kh = next(item for item in body if item["pattern"] == "kh")
        assert kh["diacritic"] is None
        assert kh["is_vowel"] is False


# ---------------------------------------------------------------------------
# Session lifecycle
# ---------------------------------------------------------------------------


class TestSessions:
    """Tests for POST/GET/DELETE /sessions."""

    def test_create_returns_201(self, client):
        resp = client.post("/sessions", json={"enabled": True})
        assert resp.status_code == 201
        body = resp.json()
        assert body["enabled"] is True
        assert body["pending"] == ""
        assert "id" in body

    def test_create_without_body_uses_default(self, client):
        resp = client.post("/sessions")
        assert resp.status_code == 201
        assert resp.json()["enabled"] is DEFAULT_ENABLED

    def test_get_session(self, client):
        session_id = _new_session(client)
        _send(client, session_id, "ka")
        resp = client.get("/sessions/{}".format(session_id))
        assert resp.status_code == 200
        assert resp.json()["pending"] == "ka"

    def test_list_sessions(self, client):
        first = _new_session(client)
        second = _new_session(client, enabled=False)
        resp = client.get("/sessions")
        assert resp.status_code == 200
        body = resp.json()
        assert [s["id"] for s in body] == [first, second]
        assert [s["enabled"] for s in body] == [True, False]

    def test_list_sessions_empty(self, client):
        assert client.get("/sessions").json() == []

    def test_get_unknown_session(self, client):
        resp = client.get("/sessions/nope")
        assert resp.status_code == 404
        assert "Session not found" in resp.json()["detail"]

    def test_delete_session(self, client):
        session_id = _new_session(client)
        resp = client.delete("/sessions/{}".format(session_id))
        assert resp.status_code == 204
        assert client.get("/sessions/{}".format(session_id)).status_code == 404

    def test_delete_unknown_session(self, client):
        assert client.delete("/sessions/nope").status_code == 404

    def test_store_full_returns_429(self, client, monkeypatch):
        monkeypatch.setattr(session_store, "max_sessions", 1)
        _new_session(client)
        resp = client.post("/sessions", json={"enabled": True})
        assert resp.status_code == 429


# ---------------------------------------------------------------------------
# Keys and toggle
# ---------------------------------------------------------------------------


class TestKeys:
    """Tests for POST /sessions/{id}/keys."""

    def test_word_then_space(self, client):
        session_id = _new_session(client)
        responses = _send(client, session_id, "ka ")
        assert [r.json()["kind"] for r in responses] == ["pass_through", "pass_through", "replace"]
        assert responses[-1].json() == {
            "kind": "replace",
            "delete_count": 2,
            "insert_text": "কা",
            "terminal_char": " ",
            "suppress_key": True,
        }

    def test_backspace_name(self, client):
        session_id = _new_session(client)
        _send(client, session_id, "kat")
        resp = client.post(
            "/sessions/{}/keys".format(session_id), json={"char": "backspace"}
        )
        assert resp.json()["kind"] == "pass_through"
        assert client.get("/sessions/{}".format(session_id)).json()["pending"] == "ka"

    def test_key_up_changes_nothing(self, client):
        session_id = _new_session(client)
        resp = client.post(
            "/sessions/{}/keys".format(session_id),
            json={"char": "k", "is_key_down": False},
        )
        assert resp.json()["suppress_key"] is False
        assert client.get("/sessions/{}".format(session_id)).json()["pending"] == ""

    def test_disabled_session_passes_through(self, client):
        session_id = _new_session(client, enabled=False)
        responses = _send(client, session_id, "ka ")
        assert all(r.json()["kind"] == "pass_through" for r in responses)

    def test_multi_character_key_rejected(self, client):
        session_id = _new_session(client)
        resp = client.post("/sessions/{}/keys".format(session_id), json={"char": "ab"})
        assert resp.status_code == 422

    def test_empty_key_rejected(self, client):
        session_id = _new_session(client)
        resp = client.post("/sessions/{}/keys".format(session_id), json={"char": ""})
        assert resp.status_code == 422

    def test_unknown_session(self, client):
        resp = client.post("/sessions/nope/keys", json={"char": "k"})
        assert resp.status_code == 404


class TestToggle:
    """Tests for POST /sessions/{id}/toggle."""

    def test_toggle_flips_and_clears(self, client):
        session_id = _new_session(client)
        _send(client, session_id, "ka")
        resp = client.post("/sessions/{}/toggle".format(session_id))
        assert resp.status_code == 200
        assert resp.json()["enabled"] is False
        assert resp.json()["pending"] == ""

    def test_toggle_unknown_session(self, client):
        assert client.post("/sessions/nope/toggle").status_code == 404


# ---------------------------------------------------------------------------
# GET /health
# ---------------------------------------------------------------------------


class TestHealth:
    def test_health(self, client):
        _new_session(client)
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "version": __version__, "sessions": 1}
