"""Core transliteration engine and input session.

WHY: The core package holds the only parts of the keyboard with real
design content: the pattern table, the longest-match transliterator, and
the per-word buffering state machine. Everything else (GUI, CLI, HTTP,
key-code mapping) is a host around these.

HOW: table.py defines the data, transliterator.py converts one word,
session.py decides when to convert and which edit the host must perform.

RULES:
- No I/O anywhere in this package
- The shipped table is immutable and shared process-wide
- InputSession is the only stateful object and guards itself with a lock
"""

from bengali_keyboard.core.session import (
    BACKSPACE,
    PASS_THROUGH,
    SUPPRESS,
    EditAction,
    EditActionKind,
    InputSession,
    KeyEvent,
)
from bengali_keyboard.core.table import Match, PatternEntry, PatternTable, default_table
from bengali_keyboard.core.transliterator import convert

__all__ = [
    "BACKSPACE",
    "PASS_THROUGH",
    "SUPPRESS",
    "EditAction",
    "EditActionKind",
    "InputSession",
    "KeyEvent",
    "Match",
    "PatternEntry",
    "PatternTable",
    "convert",
    "default_table",
]
