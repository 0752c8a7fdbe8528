"""Tests for KeyboardController: key routing, toggling, and sink ordering.

WHY: The controller is where the session lock and host I/O meet. The
sink must run after the session has released its lock, the toggle key
must never reach the application, and Ctrl shortcuts must never disturb
the word being typed.

HOW: A RecordingSink (conftest.py) stands in for the host. A sink that
reads session state from inside apply() proves the lock is released: if
it were still held, the non-reentrant lock would deadlock, so that test
runs in a thread with a timeout.
"""

from __future__ import annotations

import threading

import pytest

from bengali_keyboard.config import TOGGLE_KEY
from bengali_keyboard.core.session import (
    PASS_THROUGH,
    SUPPRESS,
    EditAction,
    EditActionKind,
    InputSession,
    KeyEvent,
)
from bengali_keyboard.host.base import EditActionSink
from bengali_keyboard.host.controller import KeyboardController
from bengali_keyboard.host.keymap import VK_A, VK_SPACE


def _type_keys(controller: KeyboardController, letters: str) -> None:
    for letter in letters:
        controller.handle_key(VK_A + ord(letter) - ord("a"))


# ---------------------------------------------------------------------------
# TestToggleKey
# ---------------------------------------------------------------------------


class TestToggleKey:
    """F10 toggles the session and is swallowed."""

    def test_toggle_key_down_suppresses(self, controller):
        assert controller.handle_key(TOGGLE_KEY) == SUPPRESS
        assert controller.enabled is False

    def test_toggle_key_up_passes_through(self, controller):
        assert controller.handle_key(TOGGLE_KEY, is_key_down=False) == PASS_THROUGH
        assert controller.enabled is True

    def test_toggle_key_not_sent_to_sink(self, controller, sink):
        controller.handle_key(TOGGLE_KEY)
        assert sink.applied == []

    def test_toggle_clears_word(self, controller, sink):
        _type_keys(controller, "ka")
        controller.handle_key(TOGGLE_KEY)
        controller.handle_key(TOGGLE_KEY)
        assert controller.handle_key(VK_SPACE) == PASS_THROUGH

    def test_custom_toggle_key(self, sink):
        controller = KeyboardController(sink=sink, toggle_key=0x7B)
        assert controller.handle_key(0x7B) == SUPPRESS
        assert controller.enabled is True

    def test_listeners_get_new_state(self, controller):
        seen = []
        controller.add_toggle_listener(seen.append)
        controller.toggle()
        controller.handle_key(TOGGLE_KEY)
        assert seen == [False, True]

    def test_listener_can_read_session(self, controller):
        seen = []
        controller.add_toggle_listener(lambda _: seen.append(controller.session.is_enabled()))
        controller.toggle()
        assert seen == [False]


# ---------------------------------------------------------------------------
# TestKeys
# ---------------------------------------------------------------------------


class TestKeys:
    """Raw key codes flow through the resolver and session."""

    def test_word_and_space(self, controller, sink):
        _type_keys(controller, "ka")
        action = controller.handle_key(VK_SPACE)
        assert action == EditAction.replace(2, "কা", " ")
        assert sink.actions == [PASS_THROUGH, PASS_THROUGH, action]

    def test_sink_receives_events_in_order(self, controller, sink):
        _type_keys(controller, "ka")
        controller.handle_key(VK_SPACE)
        assert [event.char for event, _ in sink.applied] == ["k", "a", " "]

    def test_shift_letter(self, controller):
        controller.handle_key(VK_A, shift=True)
        assert controller.session.pending == "A"

    def test_ctrl_shortcut_leaves_buffer(self, controller, sink):
        _type_keys(controller, "ka")
        assert controller.handle_key(ord("C"), ctrl=True) == PASS_THROUGH
        assert controller.session.pending == "ka"
        assert len(sink.applied) == 2

    def test_ctrl_with_other_letter_is_typed(self, controller):
        controller.handle_key(ord("K"), ctrl=True)
        assert controller.session.pending == "k"

    def test_unmapped_key_passes_through(self, controller, sink):
        _type_keys(controller, "k")
        assert controller.handle_key(0x25) == PASS_THROUGH
        assert controller.session.pending == "k"
        assert len(sink.applied) == 1

    def test_key_up_not_sent_to_sink(self, controller, sink):
        controller.handle_key(VK_A, is_key_down=False)
        assert sink.applied == []

    def test_handle_char(self, controller):
        controller.handle_char("k")
        controller.handle_char("a")
        assert controller.handle_char("\n").kind is EditActionKind.REPLACE

    def test_without_sink(self):
        controller = KeyboardController(session=InputSession(enabled=True))
        controller.handle_char("k")
        assert controller.handle_char(" ") == EditAction.replace(1, "ক", " ")

    def test_default_session_is_disabled(self):
        assert KeyboardController().enabled is False


# ---------------------------------------------------------------------------
# TestSinkOutsideLock
# ---------------------------------------------------------------------------


class _ReadingSink(EditActionSink):
    """Reads session state from inside apply()."""

    def __init__(self) -> None:
        self.session = None
        self.seen = []

    def apply(self, event: KeyEvent, action: EditAction) -> None:
        self.seen.append((self.session.is_enabled(), self.session.pending))


class _FailingSink(EditActionSink):
    def apply(self, event: KeyEvent, action: EditAction) -> None:
        raise RuntimeError("host rejected the edit")


class TestSinkOutsideLock:
    """The sink runs after the session lock is released."""

    def test_sink_can_reenter_session(self):
        sink = _ReadingSink()
        controller = KeyboardController(session=InputSession(enabled=True), sink=sink)
        sink.session = controller.session

        def run():
            controller.handle_char("k")
            controller.handle_char(" ")

        worker = threading.Thread(target=run, daemon=True)
        worker.start()
        worker.join(timeout=5)

        assert not worker.is_alive()
        assert sink.seen == [(True, "k"), (True, "")]

    def test_sink_error_is_raised_after_state_update(self):
        controller = KeyboardController(
            session=InputSession(enabled=True), sink=_FailingSink()
        )
        with pytest.raises(RuntimeError):
            controller.handle_char("k")
        assert controller.session.pending == "k"

    def test_sink_error_is_logged(self, caplog):
        controller = KeyboardController(
            session=InputSession(enabled=True), sink=_FailingSink()
        )
        with pytest.raises(RuntimeError):
            controller.handle_char("k")
        assert "Edit action sink failed" in caplog.text
