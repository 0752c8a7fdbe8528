"""Capability interfaces at the boundary between the core and a host.

WHY: The core never sees hardware key codes and never touches a real text
field. Hosts differ (a Tkinter widget, an in-memory document, an OS-level
hook), so the two capabilities they provide are expressed as abstract base
classes the KeyboardController can work with generically.

HOW: KeyCodeResolver turns a raw key code plus shift state into a logical
character. EditActionSink applies an EditAction to the host's text.

RULES:
- resolve() returns None for keys that produce no character (modifiers,
  arrows, function keys); such keys never reach the session
- apply() is called outside the session lock, once per key-down event,
  in the order the actions were produced
- To add a new host: subclass both, then wire them into a KeyboardController
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from bengali_keyboard.core.session import EditAction, KeyEvent


class KeyCodeResolver(ABC):
    """Maps a host's raw key codes to logical characters."""

    @abstractmethod
    def resolve(self, code: int, shift: bool = False) -> Optional[str]:
        """Return the logical character for ``code``, or None.

        Args:
            code: Host-specific raw key code.
            shift: True while a shift key is held.

        Returns:
            A single character, BACKSPACE for the backspace key, or None.
        """


class EditActionSink(ABC):
    """Applies edit actions to the host's text."""

    @abstractmethod
    def apply(self, event: KeyEvent, action: EditAction) -> None:
        """Perform ``action`` for the key ``event`` that produced it.

        RULES:
        - PASS_THROUGH: the key's own effect is the host's business; sinks
          that stand in for the application (e.g. TextDocument) perform it
        - SUPPRESS: nothing happens
        - REPLACE: delete delete_count characters before the cursor,
          insert insert_text, then type terminal_char
        """
