"""The keyboard controller: composition root for one running keyboard.

WHY: Something has to own the InputSession, turn raw key codes into
logical characters, intercept the toggle key, and hand each resulting
edit to the host. That is one explicit object per keyboard, and the
session lock is never held while the sink runs.

HOW: handle_key() resolves a raw code and delegates to handle_event().
handle_event() asks the session for an action (the session takes and
releases its own lock) and only then calls sink.apply(). Toggle listeners
are notified the same way, after the session has released its lock.

RULES:
- The toggle key on key-down toggles the session and returns SUPPRESS
- Ctrl + CTRL_SHORTCUT_KEYS pass through without touching the session
- Key codes that resolve to no character pass through untouched
- Key-up events pass through and are not forwarded to the sink
- A sink exception is logged and re-raised; session state is already final
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from bengali_keyboard.config import TOGGLE_KEY
from bengali_keyboard.core.session import (
    PASS_THROUGH,
    SUPPRESS,
    EditAction,
    InputSession,
    KeyEvent,
)
from bengali_keyboard.host.base import EditActionSink, KeyCodeResolver
from bengali_keyboard.host.keymap import CTRL_SHORTCUT_KEYS, VirtualKeyResolver

logger = logging.getLogger(__name__)

ToggleListener = Callable[[bool], None]


class KeyboardController:
    """Routes host key events through an InputSession into a sink.

    Args:
        session: The session to drive; a new disabled one by default.
        sink: Where edit actions are applied. None means the caller
              applies the returned actions itself.
        resolver: Raw code → character mapping for handle_key().
        toggle_key: Raw code of the toggle key.
    """

    def __init__(
        self,
        session: Optional[InputSession] = None,
        sink: Optional[EditActionSink] = None,
        resolver: Optional[KeyCodeResolver] = None,
        toggle_key: int = TOGGLE_KEY,
    ) -> None:
        self.session = session if session is not None else InputSession()
        self.sink = sink
        self.resolver = resolver if resolver is not None else VirtualKeyResolver()
        self.toggle_key = toggle_key
        self._toggle_listeners: List[ToggleListener] = []

    # ------------------------------------------------------------------
    # Toggle
    # ------------------------------------------------------------------

    def add_toggle_listener(self, listener: ToggleListener) -> None:
        """Register a callback receiving the new enabled state on each toggle."""
        self._toggle_listeners.append(listener)

    def toggle(self) -> bool:
        """Toggle the session and notify listeners. Returns the new state."""
        enabled = self.session.toggle()
        for listener in list(self._toggle_listeners):
            listener(enabled)
        return enabled

    @property
    def enabled(self) -> bool:
        return self.session.is_enabled()

    # ------------------------------------------------------------------
    # Key events
    # ------------------------------------------------------------------

    def handle_key(
        self,
        code: int,
        is_key_down: bool = True,
        shift: bool = False,
        ctrl: bool = False,
    ) -> EditAction:
        """Process one raw key event from the host.

        Returns:
            The action taken. ``action.suppresses_key`` tells the host
            whether to swallow the original key event.
        """
        if code == self.toggle_key:
            if not is_key_down:
                return PASS_THROUGH
            self.toggle()
            return SUPPRESS

        if ctrl and code in CTRL_SHORTCUT_KEYS:
            return PASS_THROUGH

        char = self.resolver.resolve(code, shift)
        if char is None:
            return PASS_THROUGH

        return self.handle_event(KeyEvent(char=char, is_key_down=is_key_down))

    def handle_char(self, char: str, is_key_down: bool = True) -> EditAction:
        """Process a key the host has already resolved to a character."""
        return self.handle_event(KeyEvent(char=char, is_key_down=is_key_down))

    def handle_event(self, event: KeyEvent) -> EditAction:
        """Run the session, then apply the action with the lock released."""
        action = self.session.handle(event)
        if event.is_key_down and self.sink is not None:
            try:
                self.sink.apply(event, action)
            except Exception:
                logger.exception("Edit action sink failed for %r", event)
                raise
        return action
