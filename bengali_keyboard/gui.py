"""Tkinter desktop GUI for the Bengali phonetic keyboard.

WHY: The keyboard is meant to be used while typing, so it needs a place to
type. This window gives a single text area wired to the keyboard, with
the enabled state shown in a status line.

HOW: A single KeyboardApp class builds a text area, a toggle button, and
a status label. Every <KeyPress> in the text area is turned into a
logical character and handed to a KeyboardController whose sink is a
TkTextSink bound to the same widget. When the controller reports that the
key is suppressed the handler returns "break" so Tk does not insert it.
Toggle notifications flow through a queue polled by tkinter's .after()
mechanism, the same way for a button click, the F10 key, or any other
thread that toggles the shared controller.

RULES:
- Python 3.9 compatible — no match/case, no X | Y unions at runtime
- tkinter widgets are ONLY touched from the main thread
- The status queue is the only channel from toggle listeners to the UI
- Ctrl shortcuts and keys with no character go to Tk untouched
"""

from __future__ import annotations

import queue
import tkinter as tk
from tkinter import ttk
from typing import Optional

from bengali_keyboard.config import DEFAULT_ENABLED, configure_logging
from bengali_keyboard.core.session import (
    BACKSPACE,
    EditAction,
    EditActionKind,
    InputSession,
    KeyEvent,
)
from bengali_keyboard.host.base import EditActionSink
from bengali_keyboard.host.controller import KeyboardController

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_WINDOW_TITLE = "Bengali Keyboard"
_WINDOW_MIN_WIDTH = 560
_WINDOW_MIN_HEIGHT = 360
_PAD = 8

_STATUS_ENABLED = "Bengali Keyboard - Enabled (F10 to toggle)"
_STATUS_DISABLED = "Bengali Keyboard - Disabled (F10 to toggle)"

# Tk keysyms that map to logical characters other than event.char
_KEYSYM_CHARS = {
    "BackSpace": BACKSPACE,
    "Return": "\n",
    "KP_Enter": "\n",
    "Tab": "\t",
}

_TOGGLE_KEYSYM = "F10"
_CONTROL_MASK = 0x0004


def status_text(enabled: bool) -> str:
    """Status line shown for the given enabled state."""
    return _STATUS_ENABLED if enabled else _STATUS_DISABLED


def keysym_to_char(keysym: str, char: str) -> Optional[str]:
    """Resolve a Tk key event to a logical character, or None.

    Args:
        keysym: Tk's keysym, e.g. "a", "BackSpace", "Shift_L".
        char: Tk's event.char, empty for keys that type nothing.

    Returns:
        The logical character, or None for keys that type nothing.
    """
    if keysym in _KEYSYM_CHARS:
        return _KEYSYM_CHARS[keysym]
    if len(char) == 1 and char.isprintable():
        return char
    return None


class TkTextSink(EditActionSink):
    """Applies Replace actions to a tk.Text widget at its insert cursor.

    PASS_THROUGH keys are typed by Tk itself, so only REPLACE needs work.
    """

    def __init__(self, widget: tk.Text) -> None:
        self._widget = widget

    def apply(self, event: KeyEvent, action: EditAction) -> None:
        if action.kind is not EditActionKind.REPLACE:
            return
        self._widget.delete(
            "{}-{}c".format(tk.INSERT, action.delete_count), tk.INSERT
        )
        self._widget.insert(tk.INSERT, action.insert_text + action.terminal_char)
        self._widget.see(tk.INSERT)


class KeyboardApp:
    """Main tkinter application for the Bengali keyboard.

    RULES:
    - The controller's sink is a TkTextSink on self._text
    - Toggle listeners only enqueue; _poll_status updates the label
    - .after() polls the queue every 100ms
    """

    def __init__(self, root: tk.Tk, controller: Optional[KeyboardController] = None) -> None:
        self._root = root
        self._root.title(_WINDOW_TITLE)
        self._root.minsize(_WINDOW_MIN_WIDTH, _WINDOW_MIN_HEIGHT)

        self._status_queue: queue.Queue = queue.Queue()

        self._build_ui()

        if controller is None:
            controller = KeyboardController(session=InputSession(enabled=DEFAULT_ENABLED))
        controller.sink = TkTextSink(self._text)
        controller.add_toggle_listener(self._status_queue.put)
        self._controller = controller

        self._status_var.set(status_text(controller.enabled))
        self._root.after(100, self._poll_status)

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        main = ttk.Frame(self._root, padding=_PAD)
        main.pack(fill=tk.BOTH, expand=True)

        # --- Toolbar ---
        bar = ttk.Frame(main)
        bar.pack(fill=tk.X, pady=(0, _PAD))

        self._toggle_btn = ttk.Button(bar, text="Toggle (F10)", command=self._on_toggle)
        self._toggle_btn.pack(side=tk.LEFT)

        self._clear_btn = ttk.Button(bar, text="Clear", command=self._clear_text)
        self._clear_btn.pack(side=tk.RIGHT)

        # --- Text Area ---
        text_frame = ttk.Frame(main)
        text_frame.pack(fill=tk.BOTH, expand=True)

        self._text = tk.Text(
            text_frame,
            wrap=tk.WORD,
            undo=False,
            font=("TkDefaultFont", 14),
        )
        scrollbar = ttk.Scrollbar(text_frame, orient=tk.VERTICAL, command=self._text.yview)
        self._text.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        self._text.pack(fill=tk.BOTH, expand=True)
        self._text.bind("<KeyPress>", self._on_key)
        self._text.focus_set()

        # --- Status Line ---
        self._status_var = tk.StringVar()
        ttk.Label(main, textvariable=self._status_var, anchor=tk.W).pack(
            fill=tk.X, pady=(_PAD, 0)
        )

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_key(self, event: tk.Event) -> Optional[str]:
        if event.keysym == _TOGGLE_KEYSYM:
            self._controller.toggle()
            return "break"

        if event.state & _CONTROL_MASK:
            return None

        char = keysym_to_char(event.keysym, event.char)
        if char is None:
            return None

        action = self._controller.handle_char(char)
        return "break" if action.suppresses_key else None

    def _on_toggle(self) -> None:
        self._controller.toggle()
        self._text.focus_set()

    def _clear_text(self) -> None:
        self._text.delete("1.0", tk.END)
        self._controller.session.reset()
        self._text.focus_set()

    def _poll_status(self) -> None:
        """Drain toggle notifications and update the status line."""
        try:
            while True:
                enabled = self._status_queue.get_nowait()
                self._status_var.set(status_text(enabled))
        except queue.Empty:
            pass

        self._root.after(100, self._poll_status)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main() -> None:
    """Launch the Tkinter GUI application.

    RULES:
    - This function blocks until the window is closed
    - Must be called from the main thread
    """
    configure_logging()
    root = tk.Tk()
    KeyboardApp(root)
    root.mainloop()


if __name__ == "__main__":
    main()
