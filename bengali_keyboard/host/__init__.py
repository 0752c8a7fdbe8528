"""Hosts around the core: key-code mapping, the controller, and sinks.

WHY: The core only understands logical characters and returns edit
descriptions. A host has to supply the characters and carry out the
edits; this package holds the pieces every host shares.

HOW: base.py defines the KeyCodeResolver and EditActionSink interfaces,
keymap.py resolves Windows virtual-key codes, controller.py wires a
session to a sink, and document.py provides an in-memory sink plus the
batch helpers built on it.
"""

from bengali_keyboard.host.base import EditActionSink, KeyCodeResolver
from bengali_keyboard.host.controller import KeyboardController
from bengali_keyboard.host.document import TextDocument, transliterate_text, type_text
from bengali_keyboard.host.keymap import VirtualKeyResolver

__all__ = [
    "EditActionSink",
    "KeyCodeResolver",
    "KeyboardController",
    "TextDocument",
    "VirtualKeyResolver",
    "transliterate_text",
    "type_text",
]
