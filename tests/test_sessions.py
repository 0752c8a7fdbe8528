"""Unit tests for the in-memory session store.

HOW: Tests are organized by class, one per SessionStore concern.
Time-dependent tests use monkeypatch to control time.time().
"""

from __future__ import annotations

import threading
import time

import pytest

from bengali_keyboard.core.session import KeyEvent
from bengali_keyboard.server.sessions import SessionStore


class TestCreation:
    """SessionStore.create_session()."""

    def test_unique_ids(self):
        store = SessionStore()
        assert store.create_session().id != store.create_session().id

    def test_enabled_flag(self):
        store = SessionStore()
        assert store.create_session(enabled=True).session.is_enabled() is True
        assert store.create_session().session.is_enabled() is False

    def test_max_sessions(self):
        store = SessionStore(max_sessions=2)
        store.create_session()
        store.create_session()
        with pytest.raises(ValueError, match="Maximum number of sessions"):
            store.create_session()
        assert len(store) == 2


class TestRetrieval:
    """get_session() and list_sessions()."""

    def test_get_returns_live_session(self):
        store = SessionStore()
        record = store.create_session(enabled=True)
        store.get_session(record.id).session.handle(KeyEvent("k"))
        assert record.session.pending == "k"

    def test_get_unknown(self):
        assert SessionStore().get_session("missing") is None

    def test_get_bumps_last_used(self, monkeypatch):
        store = SessionStore()
        monkeypatch.setattr(time, "time", lambda: 100.0)
        record = store.create_session()
        monkeypatch.setattr(time, "time", lambda: 150.0)
        store.get_session(record.id)
        assert record.last_used_at == 150.0
        assert record.created_at == 100.0

    def test_list_oldest_first(self, monkeypatch):
        store = SessionStore()
        monkeypatch.setattr(time, "time", lambda: 200.0)
        newer = store.create_session()
        monkeypatch.setattr(time, "time", lambda: 100.0)
        older = store.create_session()
        assert [r.id for r in store.list_sessions()] == [older.id, newer.id]


class TestDeletion:
    def test_delete(self):
        store = SessionStore()
        record = store.create_session()
        assert store.delete_session(record.id) is True
        assert store.get_session(record.id) is None

    def test_delete_unknown(self):
        assert SessionStore().delete_session("missing") is False


class TestTTLCleanup:
    """cleanup_expired() removes idle sessions."""

    def test_removes_idle_session(self, monkeypatch):
        store = SessionStore(ttl_seconds=60)
        monkeypatch.setattr(time, "time", lambda: 100.0)
        record = store.create_session()
        monkeypatch.setattr(time, "time", lambda: 161.0)
        assert store.cleanup_expired() == 1
        assert store.get_session(record.id) is None

    def test_keeps_recent_session(self, monkeypatch):
        store = SessionStore(ttl_seconds=60)
        monkeypatch.setattr(time, "time", lambda: 100.0)
        record = store.create_session()
        monkeypatch.setattr(time, "time", lambda: 159.0)
        assert store.cleanup_expired() == 0
        assert store.get_session(record.id) is not None

    def test_use_extends_lifetime(self, monkeypatch):
        store = SessionStore(ttl_seconds=60)
        monkeypatch.setattr(time, "time", lambda: 100.0)
        record = store.create_session()
        monkeypatch.setattr(time, "time", lambda: 150.0)
        store.get_session(record.id)
        monkeypatch.setattr(time, "time", lambda: 200.0)
        assert store.cleanup_expired() == 0


class TestThreadSafety:
    def test_concurrent_create_and_delete(self):
        store = SessionStore(max_sessions=1000)
        ids = [store.create_session().id for _ in range(20)]

        threads = [threading.Thread(target=store.delete_session, args=(sid,)) for sid in ids]
        threads += [threading.Thread(target=store.create_session) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store) == 20
