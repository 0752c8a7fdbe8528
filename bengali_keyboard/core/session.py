"""Per-word input buffering and the edit actions it produces.

WHY: The keyboard must not convert on every keystroke. Letters are echoed
as typed while the session silently collects them, and only when a word
boundary arrives does it decide whether the word on screen should be
swapped for its Bengali form. That decision, and the exact edit the host
must perform, is what this module produces.

HOW: InputSession is a small state machine (Idle / Accumulating, plus an
orthogonal enabled flag) guarded by one threading.Lock. handle() applies a
KeyEvent and returns an EditAction. It never performs I/O: the caller
applies the returned action to the text after handle() has returned and
the lock is released.

RULES:
- Disabled session: every event is PASS_THROUGH and changes nothing
- Key-up events are ignored
- Backspace drops the last buffered character, host handles the key
- Boundary (space, newline, tab) converts the buffer and always clears it;
  Replace only when the result is non-empty and differs from the buffer
- Valid input (ASCII letters, ASCII digits, ". : $ _") is buffered
- Anything else clears the buffer
- toggle() flips enabled and always clears the buffer
- All reads and writes of enabled/buffer happen under self._lock
"""

from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

from bengali_keyboard.core.table import PatternTable
from bengali_keyboard.core.transliterator import convert

logger = logging.getLogger(__name__)

BACKSPACE = "\b"
"""Logical character hosts send for the backspace key."""

BOUNDARY_CHARS = frozenset({" ", "\n", "\t"})

_VALID_PUNCTUATION = frozenset({".", ":", "$", "_"})


def is_valid_input_char(ch: str) -> bool:
    """Return True if ``ch`` may be part of a phonetic word."""
    if len(ch) != 1:
        return False
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ("0" <= ch <= "9") or ch in _VALID_PUNCTUATION


@dataclass(frozen=True)
class KeyEvent:
    """A logical keystroke delivered by the host.

    RULES:
    - char: the resolved character, BACKSPACE for the backspace key
    - is_key_down: False for key releases, which the session ignores
    """

    char: str
    is_key_down: bool = True


class EditActionKind(str, enum.Enum):
    """What the host must do with the key that produced an action.

    HOW: Inherits from str so values serialize cleanly to JSON.
    """

    PASS_THROUGH = "pass_through"
    SUPPRESS = "suppress"
    REPLACE = "replace"


@dataclass(frozen=True)
class EditAction:
    """The edit the host must perform for one key-down event.

    WHY: Returning a description instead of performing the edit keeps the
    session free of I/O, so it can run under its lock and be tested
    without any real input stream.

    RULES:
    - PASS_THROUGH: host handles the key normally
    - SUPPRESS: host swallows the key (used for the toggle key)
    - REPLACE: host swallows the key, deletes delete_count characters
      before the cursor, inserts insert_text, then types terminal_char
    """

    kind: EditActionKind
    delete_count: int = 0
    insert_text: str = ""
    terminal_char: str = ""

    @classmethod
    def replace(cls, delete_count: int, insert_text: str, terminal_char: str) -> "EditAction":
        return cls(
            kind=EditActionKind.REPLACE,
            delete_count=delete_count,
            insert_text=insert_text,
            terminal_char=terminal_char,
        )

    @property
    def suppresses_key(self) -> bool:
        """True if the original key event must not reach the application."""
        return self.kind is not EditActionKind.PASS_THROUGH


PASS_THROUGH = EditAction(EditActionKind.PASS_THROUGH)
SUPPRESS = EditAction(EditActionKind.SUPPRESS)


class InputSession:
    """Tracks the word being typed and decides when to replace it.

    WHY: Keystrokes arrive on a latency-critical input path while the
    toggle may come from a GUI thread or an HTTP request. Both must see a
    consistent buffer.

    HOW: State is a list of buffered characters plus the enabled flag,
    both only touched while holding self._lock. Conversion runs inside the
    lock because it is pure and bounded by the table size.

    RULES:
    - Starts Idle; enabled defaults to False
    - No terminal state; a session lives as long as its owner
    - Every method is total and never raises for any character
    """

    def __init__(self, enabled: bool = False, table: Optional[PatternTable] = None) -> None:
        self._lock = threading.Lock()
        self._enabled = enabled
        self._buffer: List[str] = []
        self._table = table

    def is_enabled(self) -> bool:
        with self._lock:
            return self._enabled

    @property
    def pending(self) -> str:
        """Snapshot of the characters buffered since the last boundary."""
        with self._lock:
            return "".join(self._buffer)

    def toggle(self) -> bool:
        """Flip the enabled flag, clear the buffer, and return the new state."""
        with self._lock:
            self._enabled = not self._enabled
            self._buffer.clear()
            enabled = self._enabled
        logger.info("Keyboard %s", "enabled" if enabled else "disabled")
        return enabled

    def reset(self) -> None:
        """Forget the buffered word without changing the enabled flag."""
        with self._lock:
            self._buffer.clear()

    def handle(self, event: KeyEvent) -> EditAction:
        """Apply one key event and return the edit the host must perform.

        HOW: Dispatches on the character under the lock. Only a boundary
        with a non-empty buffer can produce anything but PASS_THROUGH.

        Args:
            event: The logical keystroke.

        Returns:
            PASS_THROUGH, or a REPLACE action for a converted word.
        """
        if not event.is_key_down:
            return PASS_THROUGH

        ch = event.char
        with self._lock:
            if not self._enabled:
                return PASS_THROUGH

            if ch == BACKSPACE:
                if self._buffer:
                    self._buffer.pop()
                return PASS_THROUGH

            if ch in BOUNDARY_CHARS:
                return self._finish_word(ch)

            if is_valid_input_char(ch):
                self._buffer.append(ch)
            else:
                self._buffer.clear()
            return PASS_THROUGH

    def _finish_word(self, boundary: str) -> EditAction:
        """Convert and clear the buffer. Caller holds the lock."""
        if not self._buffer:
            return PASS_THROUGH

        word = "".join(self._buffer)
        self._buffer.clear()
        converted = convert(word, self._table)

        if not converted or converted == word:
            return PASS_THROUGH
        return EditAction.replace(len(word), converted, boundary)
