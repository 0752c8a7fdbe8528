"""Greedy longest-match conversion of one phonetic word into Bengali.

WHY: This is the algorithmic heart of the keyboard. A typed word such as
"bangla" has to become "বাংলা": multi-key patterns must win over their
prefixes ("kh" is খ, not ক + হ), and a vowel must take its dependent form
(া) after a consonant but its independent form (আ) anywhere else.

HOW: A single left-to-right pass. At each position the PatternTable
returns the longest matching pattern. Consonants and symbols are emitted
as-is. For vowels the last glyph already emitted decides between the
independent vowel, the dependent diacritic, or nothing at all (the
inherent vowel after a consonant). Characters no pattern covers are
copied through unchanged.

RULES:
- convert() is pure and total: no shared mutable state, no exceptions
- No backtracking: a match is never revisited
- Consonant test: U+0995..U+09B9, ৎ (U+09CE), ড় ঢ় য় (U+09DC, U+09DD,
  U+09DF), and any consonant followed by the nukta sign U+09BC
- A trailing nukta is skipped, so decomposed letters such as ড + ◌় take
  the dependent vowel sign. A last-code-point-only test would see the
  nukta and emit the independent vowel instead (baRi would become বাড়ই
  rather than বাড়ি)
- Unmatched characters advance by exactly one position
"""

from __future__ import annotations

import logging
from typing import List, Optional

from bengali_keyboard.core.table import PatternTable, default_table

logger = logging.getLogger(__name__)

_NUKTA = "\u09bc"

# Consonant letters that live outside the contiguous ক..হ block.
_EXTRA_CONSONANTS = frozenset({"\u09ce", "\u09dc", "\u09dd", "\u09df"})


def is_bengali_consonant(ch: str) -> bool:
    """Return True if ``ch`` is a single Bengali consonant letter."""
    return "ক" <= ch <= "হ" or ch in _EXTRA_CONSONANTS


def ends_with_consonant(glyphs: List[str]) -> bool:
    """Return True if the text built so far ends in a consonant glyph.

    HOW: ``glyphs`` is the output accumulated by convert(), as a list of
    emitted strings. The last code point decides, except that a trailing
    nukta is skipped so that decomposed ড় (ড + ◌়) counts as a consonant.

    RULES:
    - Empty output → False (start of word)
    - Trailing vowel signs, hasanta, anusvara etc. → False
    """
    for piece in reversed(glyphs):
        if not piece:
            continue
        last = piece[-1]
        if last == _NUKTA and len(piece) > 1:
            last = piece[-2]
        return is_bengali_consonant(last)
    return False


def convert(word: str, table: Optional[PatternTable] = None) -> str:
    """Convert one buffered phonetic word into Bengali.

    WHY: Called at every word boundary by InputSession, and directly by the
    CLI and HTTP API.

    HOW: See the module docstring. Vowel handling per match:
      previous glyph not a consonant → independent vowel
      previous glyph a consonant     → nothing for the inherent vowel,
                                       else the diacritic if the table
                                       defines one, else independent vowel

    Args:
        word: The typed characters, e.g. "ami".
        table: Pattern table to use; defaults to the shipped table.

    Returns:
        The Bengali text, e.g. "আমি". Empty input gives empty output.
    """
    if table is None:
        table = default_table()

    output: List[str] = []
    i = 0
    while i < len(word):
        match = table.longest_match_at(word, i)

        if match is None:
            output.append(word[i])
            i += 1
            continue

        if not match.is_vowel:
            output.append(match.script)
        elif not ends_with_consonant(output):
            output.append(match.script)
        elif match.pattern == table.inherent_vowel:
            # The consonant already carries this vowel.
            pass
        elif match.diacritic is not None:
            output.append(match.diacritic)
        else:
            output.append(match.script)

        i += match.length

    result = "".join(output)
    logger.debug("Converted %r -> %r", word, result)
    return result
