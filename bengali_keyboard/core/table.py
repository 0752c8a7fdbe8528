"""The phonetic pattern table: Latin key sequences → Bengali glyphs.

WHY: Every conversion the keyboard performs is driven by one fixed table
of phonetic patterns. Keeping the table as plain, ordered data (not logic)
makes it easy to audit, and keeping the lookup next to it guarantees that
every consumer resolves patterns the same way.

HOW: PatternEntry holds one mapping. PatternTable indexes the entries by
pattern length so that longest_match_at() only has to slice the input once
per candidate length, longest first. VOWEL_DIACRITICS holds the dependent
(kar) form of each vowel, used when a vowel follows a consonant.

RULES:
- Patterns are matched case-sensitively, code point by code point
- Pattern keys are unique; a duplicate key is a construction error
- Lookup order is: descending pattern length, then declaration order
  (two distinct keys of equal length can never match at the same position,
  so declaration order only documents the canonical order of the table)
- "o" is the inherent vowel and its diacritic is the empty string
- Nukta letters (ড়, ঢ়, য়) are stored in their canonical decomposed form
- The table is built once and never mutated
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

INHERENT_VOWEL = "o"
"""Pattern of the vowel a bare consonant already carries."""


@dataclass(frozen=True)
class PatternEntry:
    """One phonetic pattern and the Bengali text it produces.

    RULES:
    - pattern: non-empty Latin key sequence, unique within a table
    - script: Bengali output; several patterns may share one output
    - is_vowel: True for independent vowels, whose output depends on
      the glyph before them (see transliterator.convert)
    """

    pattern: str
    script: str
    is_vowel: bool = False


@dataclass(frozen=True)
class Match:
    """The longest table entry found at one input position.

    HOW: Produced by PatternTable.longest_match_at(). ``diacritic`` is the
    dependent vowel sign for vowel patterns that define one, else None.
    """

    pattern: str
    script: str
    is_vowel: bool
    diacritic: Optional[str] = None

    @property
    def length(self) -> int:
        """Number of input characters the match consumes."""
        return len(self.pattern)


# ---------------------------------------------------------------------------
# Shipped table, in canonical declaration order
# ---------------------------------------------------------------------------

# Independent vowels (স্বরবর্ণ)
_VOWELS: Tuple[PatternEntry, ...] = (
    PatternEntry("o", "অ", is_vowel=True),
    PatternEntry("a", "আ", is_vowel=True),
    PatternEntry("i", "ই", is_vowel=True),
    PatternEntry("I", "ঈ", is_vowel=True),
    PatternEntry("u", "উ", is_vowel=True),
    PatternEntry("U", "ঊ", is_vowel=True),
    PatternEntry("rri", "ঋ", is_vowel=True),
    PatternEntry("e", "এ", is_vowel=True),
    PatternEntry("oi", "ঐ", is_vowel=True),
    PatternEntry("O", "ও", is_vowel=True),
    PatternEntry("ou", "ঔ", is_vowel=True),
)

# Dependent vowel signs (কার), used after a consonant
VOWEL_DIACRITICS: Dict[str, str] = {
    "o": "",
    "a": "া",
    "i": "ি",
    "I": "ী",
    "u": "ু",
    "U": "ূ",
    "rri": "ৃ",
    "e": "ে",
    "oi": "ৈ",
    "O": "ো",
    "ou": "ৌ",
}

# র-ফলা: consonant + r
_R_PHOLA: Tuple[PatternEntry, ...] = (
    PatternEntry("phr", "ফ্র"),
    PatternEntry("bhr", "ভ্র"),
    PatternEntry("thr", "থ্র"),
    PatternEntry("dhr", "ধ্র"),
    PatternEntry("shr", "শ্র"),
    PatternEntry("chr", "ছ্র"),
    PatternEntry("pr", "প্র"),
    PatternEntry("br", "ব্র"),
    PatternEntry("tr", "ত্র"),
    PatternEntry("dr", "দ্র"),
    PatternEntry("kr", "ক্র"),
    PatternEntry("gr", "গ্র"),
    PatternEntry("jr", "জ্র"),
    PatternEntry("mr", "ম্র"),
    PatternEntry("nr", "ন্র"),
    PatternEntry("sr", "স্র"),
    PatternEntry("hr", "হ্র"),
    PatternEntry("fr", "ফ্র"),
    PatternEntry("vr", "ভ্র"),
    PatternEntry("lr", "ল্র"),
    PatternEntry("rr", "র্"),
    PatternEntry("Tr", "ট্র"),
    PatternEntry("Dr", "ড্র"),
    PatternEntry("Nr", "ণ্র"),
)

# Conjuncts (যুক্তবর্ণ)
_CONJUNCTS: Tuple[PatternEntry, ...] = (
    PatternEntry("shk", "ষ্ক"),
    PatternEntry("shkr", "ষ্ক্র"),
    PatternEntry("kSh", "ক্ষ"),
    PatternEntry("kkh", "ক্ষ"),
    PatternEntry("jY", "জ্ঞ"),
    PatternEntry("gg", "জ্ঞ"),
)

_DOUBLE_CONSONANTS: Tuple[PatternEntry, ...] = (
    PatternEntry("kk", "ক্ক"),
    PatternEntry("kT", "ক্ট"),
    PatternEntry("kt", "ক্ত"),
    PatternEntry("kw", "ক্ব"),
    PatternEntry("km", "ক্ম"),
    PatternEntry("kl", "ক্ল"),
    PatternEntry("ks", "ক্স"),
    PatternEntry("tt", "ত্ত"),
    PatternEntry("tn", "ত্ন"),
    PatternEntry("tw", "ত্ব"),
    PatternEntry("tm", "ত্ম"),
    PatternEntry("dd", "দ্দ"),
    PatternEntry("dw", "দ্ব"),
    PatternEntry("dm", "দ্ম"),
    PatternEntry("nn", "ন্ন"),
    PatternEntry("nt", "ন্ত"),
    PatternEntry("nd", "ন্দ"),
    PatternEntry("nw", "ন্ব"),
    PatternEntry("nm", "ন্ম"),
    PatternEntry("pp", "প্প"),
    PatternEntry("pt", "প্ত"),
    PatternEntry("pl", "প্ল"),
    PatternEntry("bb", "ব্ব"),
    PatternEntry("bd", "ব্দ"),
    PatternEntry("bl", "ব্ল"),
    PatternEntry("mm", "ম্ম"),
    PatternEntry("mp", "ম্প"),
    PatternEntry("mb", "ম্ব"),
    PatternEntry("ml", "ম্ল"),
    PatternEntry("ll", "ল্ল"),
    PatternEntry("lk", "ল্ক"),
    PatternEntry("lg", "ল্গ"),
    PatternEntry("lp", "ল্প"),
    PatternEntry("lw", "ল্ব"),
    PatternEntry("lm", "ল্ম"),
    PatternEntry("sk", "স্ক"),
    PatternEntry("st", "স্ত"),
    PatternEntry("sn", "স্ন"),
    PatternEntry("sp", "স্প"),
    PatternEntry("sw", "স্ব"),
    PatternEntry("sm", "স্ম"),
    PatternEntry("sl", "স্ল"),
)

# Aspirated consonants and two-key signs
_DIGRAPHS: Tuple[PatternEntry, ...] = (
    PatternEntry("kh", "খ"),
    PatternEntry("gh", "ঘ"),
    PatternEntry("ch", "ছ"),
    PatternEntry("jh", "ঝ"),
    PatternEntry("Th", "ঠ"),
    PatternEntry("Dh", "ঢ"),
    PatternEntry("th", "থ"),
    PatternEntry("dh", "ধ"),
    PatternEntry("ph", "ফ"),
    PatternEntry("bh", "ভ"),
    PatternEntry("Rh", "\u09a2\u09bc"),
    PatternEntry("ya", "\u09af\u09bc\u09be"),
    PatternEntry("Ng", "ঙ"),
    PatternEntry("ng", "ং"),
    PatternEntry(".t", "ৎ"),
    PatternEntry(".n", "ঁ"),
)

# Single-key consonants (ব্যঞ্জনবর্ণ) and visarga
_CONSONANTS: Tuple[PatternEntry, ...] = (
    PatternEntry("k", "ক"),
    PatternEntry("g", "গ"),
    PatternEntry("C", "ছ"),
    PatternEntry("c", "চ"),
    PatternEntry("j", "জ"),
    PatternEntry("Y", "ঞ"),
    PatternEntry("T", "ট"),
    PatternEntry("D", "ড"),
    PatternEntry("N", "ণ"),
    PatternEntry("t", "ত"),
    PatternEntry("d", "দ"),
    PatternEntry("n", "ন"),
    PatternEntry("f", "ফ"),
    PatternEntry("p", "প"),
    PatternEntry("v", "ভ"),
    PatternEntry("b", "ব"),
    PatternEntry("m", "ম"),
    PatternEntry("z", "য"),
    PatternEntry("r", "র"),
    PatternEntry("l", "ল"),
    PatternEntry("Sh", "ষ"),
    PatternEntry("sh", "ষ"),
    PatternEntry("S", "শ"),
    PatternEntry("s", "স"),
    PatternEntry("h", "হ"),
    PatternEntry("R", "\u09a1\u09bc"),
    PatternEntry("y", "\u09af\u09bc"),
    PatternEntry("yo", "\u09af\u09bc"),
    PatternEntry(":", "ঃ"),
    PatternEntry("H", "ঃ"),
)

_DIGITS_AND_SYMBOLS: Tuple[PatternEntry, ...] = (
    PatternEntry("0", "০"),
    PatternEntry("1", "১"),
    PatternEntry("2", "২"),
    PatternEntry("3", "৩"),
    PatternEntry("4", "৪"),
    PatternEntry("5", "৫"),
    PatternEntry("6", "৬"),
    PatternEntry("7", "৭"),
    PatternEntry("8", "৮"),
    PatternEntry("9", "৯"),
    PatternEntry(".", "।"),
    PatternEntry("$", "৳"),
    PatternEntry("aya", "অ্যা"),
)

DEFAULT_ENTRIES: Tuple[PatternEntry, ...] = (
    _VOWELS
    + _R_PHOLA
    + _CONJUNCTS
    + _DOUBLE_CONSONANTS
    + _DIGRAPHS
    + _CONSONANTS
    + _DIGITS_AND_SYMBOLS
)


class PatternTable:
    """Immutable lookup structure over an ordered set of PatternEntry.

    WHY: The transliterator needs "the longest pattern that is a prefix of
    the input at position i" for every position of every word, and the answer must not depend on
    dict or hash ordering.

    HOW: Entries are grouped into one dict per pattern length. Lengths are
    kept sorted longest first, and within a length the dict keeps
    declaration order. A lookup slices the input once per length and stops
    at the first hit.

    RULES:
    - Construction raises ValueError for empty or duplicate patterns
    - Construction raises ValueError for a diacritic whose pattern is not
      a vowel entry of the same table
    - longest_match_at() never raises for a position inside the input and
      returns None when nothing matches
    """

    def __init__(
        self,
        entries: Iterable[PatternEntry],
        diacritics: Optional[Mapping[str, str]] = None,
        inherent_vowel: str = INHERENT_VOWEL,
    ) -> None:
        self._entries: List[PatternEntry] = []
        self._by_pattern: Dict[str, PatternEntry] = {}
        by_length: Dict[int, Dict[str, PatternEntry]] = {}

        for entry in entries:
            if not entry.pattern:
                raise ValueError("Pattern table entries must have a non-empty pattern")
            if entry.pattern in self._by_pattern:
                raise ValueError("Duplicate pattern in table: {!r}".format(entry.pattern))
            self._entries.append(entry)
            self._by_pattern[entry.pattern] = entry
            by_length.setdefault(len(entry.pattern), {})[entry.pattern] = entry

        self._by_length: List[Tuple[int, Dict[str, PatternEntry]]] = sorted(
            by_length.items(), key=lambda item: item[0], reverse=True
        )

        self._diacritics: Dict[str, str] = {}
        for pattern, sign in (diacritics or {}).items():
            entry = self._by_pattern.get(pattern)
            if entry is None or not entry.is_vowel:
                raise ValueError(
                    "Diacritic defined for {!r}, which is not a vowel pattern".format(pattern)
                )
            self._diacritics[pattern] = sign

        self.inherent_vowel = inherent_vowel

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._by_pattern

    def __iter__(self) -> Iterator[PatternEntry]:
        return iter(self._entries)

    def get(self, pattern: str) -> Optional[PatternEntry]:
        """Return the entry for an exact pattern, or None."""
        return self._by_pattern.get(pattern)

    def diacritic_for(self, pattern: str) -> Optional[str]:
        """Return the dependent vowel sign for a vowel pattern, or None."""
        return self._diacritics.get(pattern)

    def longest_match_at(self, text: str, pos: int) -> Optional[Match]:
        """Find the longest pattern that starts at ``text[pos]``.

        HOW: Try each pattern length from longest to shortest; the first
        slice found in that length's dict is the unique longest match.

        RULES:
        - Comparison is exact and case-sensitive
        - A pattern longer than the remaining input never matches
        - Returns None when no pattern matches at pos
        """
        remaining = len(text) - pos
        for length, patterns in self._by_length:
            if length > remaining:
                continue
            entry = patterns.get(text[pos:pos + length])
            if entry is not None:
                return Match(
                    pattern=entry.pattern,
                    script=entry.script,
                    is_vowel=entry.is_vowel,
                    diacritic=self._diacritics.get(entry.pattern),
                )
        return None


_DEFAULT_TABLE = PatternTable(DEFAULT_ENTRIES, VOWEL_DIACRITICS)


def default_table() -> PatternTable:
    """Return the process-wide table built from DEFAULT_ENTRIES at import."""
    return _DEFAULT_TABLE
