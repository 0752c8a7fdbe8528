"""Shared test fixtures for the bengali_keyboard test suite.

WHY: Most test modules need an enabled session, a controller wired to a
recording sink, or a small hand-built pattern table. Centralizing them
here keeps each test focused on the behaviour it checks.

RULES:
- Every fixture returns a fresh object (no shared mutable state)
- RecordingSink keeps (event, action) pairs in the order applied
- Bengali letters with a nukta are written as escapes (decomposed form)
"""

from typing import List, Tuple

import pytest

from bengali_keyboard.core.session import EditAction, InputSession, KeyEvent
from bengali_keyboard.core.table import PatternEntry, PatternTable
from bengali_keyboard.host.base import EditActionSink
from bengali_keyboard.host.controller import KeyboardController


class RecordingSink(EditActionSink):
    """EditActionSink fake that records every applied action."""

    def __init__(self) -> None:
        self.applied: List[Tuple[KeyEvent, EditAction]] = []

    def apply(self, event: KeyEvent, action: EditAction) -> None:
        self.applied.append((event, action))

    @property
    def actions(self) -> List[EditAction]:
        return [action for _, action in self.applied]


@pytest.fixture
def session():
    """An enabled InputSession on the shipped table."""
    return InputSession(enabled=True)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def controller(sink):
    """A controller with an enabled session and a RecordingSink."""
    return KeyboardController(session=InputSession(enabled=True), sink=sink)


@pytest.fixture
def small_table():
    """A minimal table with one consonant, one digraph, and two vowels."""
    return PatternTable(
        [
            PatternEntry("o", "অ", is_vowel=True),
            PatternEntry("a", "আ", is_vowel=True),
            PatternEntry("k", "ক"),
            PatternEntry("kh", "খ"),
        ],
        diacritics={"o": "", "a": "া"},
    )
