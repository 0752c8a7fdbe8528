"""In-memory text document that stands in for a focused application.

WHY: The CLI, the HTTP API, and the tests all need to see what a user
would end up with after typing some text with the keyboard enabled,
without any real window or OS hook. TextDocument is the sink that plays
the application's part: it types passed-through keys itself and applies
Replace actions exactly as a host must.

HOW: The document is a list of code points with the cursor always at the
end. type_text() replays a string key by key through a KeyboardController
wired to a TextDocument. transliterate_text() does the same and then also
converts a trailing word that was never followed by a boundary.

RULES:
- PASS_THROUGH: a character is appended, BACKSPACE deletes one character
- SUPPRESS: nothing changes
- REPLACE: delete delete_count characters, insert insert_text, then
  append terminal_char
- Deleting more characters than exist empties the document (no error)
"""

from __future__ import annotations

from typing import List, Optional

from bengali_keyboard.core.session import (
    BACKSPACE,
    EditAction,
    EditActionKind,
    InputSession,
    KeyEvent,
)
from bengali_keyboard.core.table import PatternTable
from bengali_keyboard.core.transliterator import convert
from bengali_keyboard.host.base import EditActionSink
from bengali_keyboard.host.controller import KeyboardController


class TextDocument(EditActionSink):
    """A text buffer with the cursor at its end."""

    def __init__(self, text: str = "") -> None:
        self._chars: List[str] = list(text)

    @property
    def text(self) -> str:
        return "".join(self._chars)

    def __len__(self) -> int:
        return len(self._chars)

    def insert(self, text: str) -> None:
        self._chars.extend(text)

    def delete(self, count: int) -> None:
        """Delete up to ``count`` characters before the cursor."""
        if count > 0:
            del self._chars[-count:]

    def apply(self, event: KeyEvent, action: EditAction) -> None:
        if action.kind is EditActionKind.PASS_THROUGH:
            if event.char == BACKSPACE:
                self.delete(1)
            else:
                self.insert(event.char)
        elif action.kind is EditActionKind.REPLACE:
            self.delete(action.delete_count)
            self.insert(action.insert_text)
            self.insert(action.terminal_char)


def type_text(text: str, controller: Optional[KeyboardController] = None) -> str:
    """Replay ``text`` as keystrokes and return the resulting document text.

    Args:
        text: Characters to type; BACKSPACE characters act as backspace.
        controller: Controller to type through. Defaults to one with an
                    enabled session. Its sink is replaced by a fresh
                    TextDocument.

    Returns:
        The document after the last keystroke.
    """
    if controller is None:
        controller = KeyboardController(session=InputSession(enabled=True))
    document = TextDocument()
    controller.sink = document
    for ch in text:
        controller.handle_char(ch)
    return document.text


def transliterate_text(text: str, table: Optional[PatternTable] = None) -> str:
    """Convert free text the way typing it with the keyboard on would.

    WHY: Batch conversion (CLI, HTTP) should give exactly what a user
    typing the same text sees, so it reuses the session rules instead of
    splitting words itself. The one difference is that a final word with
    no boundary after it is converted too.

    Example: "ami banglay" → "আমি বাংলায়".
    """
    session = InputSession(enabled=True, table=table)
    document = TextDocument()
    controller = KeyboardController(session=session, sink=document)
    for ch in text:
        controller.handle_char(ch)

    tail = session.pending
    if tail:
        converted = convert(tail, table)
        if converted and converted != tail:
            document.delete(len(tail))
            document.insert(converted)
    return document.text
