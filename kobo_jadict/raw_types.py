"""
Lightweight data structures for source records and output entries.

The readers in jmdict.py and sources.py produce these; the index, conjugation
and rendering modules only ever see these types.
"""

from dataclasses import dataclass
from typing import FrozenSet, NamedTuple, Tuple

from kobo_jadict.constants import (
    ConjugationClass,
    PartOfSpeech,
    TRANSITIVE_TAG,
    INTRANSITIVE_TAG,
)


# ============================================================================
# Source Records
# ============================================================================

@dataclass(frozen=True, slots=True)
class WordEntry:
    """
    A word from the primary dictionary (JMdict).

    Attributes:
        writings: Kanji headwords, in dictionary order (may be empty)
        readings: Kana readings; the first one is canonical
        glosses: One definition string per sense
        pos: Coarse part of speech
        conj: Conjugation class used for key expansion
        usually_kana: True if the word is usually written in kana alone
        tags: JMdict pos and misc codes (e.g. "vt", "vi", "uk")
        priority: Rank value, lower = more common
        seq: JMdict sequence ID (0 if unknown)
    """
    writings: Tuple[str, ...]
    readings: Tuple[str, ...]
    glosses: Tuple[str, ...]
    pos: PartOfSpeech = PartOfSpeech.OTHER
    conj: ConjugationClass = ConjugationClass.NONE
    usually_kana: bool = False
    tags: FrozenSet[str] = frozenset()
    priority: int = 0
    seq: int = 0

    def __post_init__(self):
        if not self.readings:
            raise ValueError(f"word entry {self.seq} has no readings")

    @property
    def transitive(self) -> bool:
        return TRANSITIVE_TAG in self.tags

    @property
    def intransitive(self) -> bool:
        return INTRANSITIVE_TAG in self.tags


class PitchAccentEntry(NamedTuple):
    """Accent positions for one (writing, reading) pair."""
    writing: str
    reading: str
    accents: Tuple[int, ...]


class TermEntry(NamedTuple):
    """A definition from an auxiliary term dictionary."""
    writing: str
    reading: str
    glosses: Tuple[str, ...]
    dictionary: str
    tags: Tuple[str, ...] = ()


class NameEntry(NamedTuple):
    """A proper name from an auxiliary name dictionary."""
    writing: str
    reading: str
    glosses: Tuple[str, ...]
    dictionary: str
    tags: Tuple[str, ...] = ()


class KanjiEntry(NamedTuple):
    """A single kanji from an auxiliary kanji dictionary."""
    character: str
    meanings: Tuple[str, ...]
    onyomi: Tuple[str, ...] = ()
    kunyomi: Tuple[str, ...] = ()


class NativeEntry(NamedTuple):
    """
    An entry from a Japanese-Japanese dictionary.

    The definition is already rendered markup and is copied as-is.
    """
    key: str
    reading: str
    definition: str


# ============================================================================
# Output
# ============================================================================

class SortKey(NamedTuple):
    """Search rank of a key: priority, then length, then the string itself."""
    priority: int
    length: int
    surface: str


@dataclass(frozen=True, slots=True)
class LookupKey:
    """A surface form that should resolve to an entry."""
    surface: str
    priority: int

    @property
    def sort_key(self) -> SortKey:
        return SortKey(self.priority, len(self.surface), self.surface)


@dataclass(frozen=True, slots=True)
class OutputEntry:
    """
    A finished dictionary entry.

    Keys are deduplicated and ordered by rank; the first key decides where
    the entry lands in the final sort.
    """
    keys: Tuple[LookupKey, ...]
    definition: str

    @classmethod
    def from_keys(cls, keys, definition: str) -> "OutputEntry":
        ordered = tuple(sorted(set(keys), key=lambda k: k.sort_key))
        if not ordered:
            raise ValueError("output entry needs at least one key")
        return cls(keys=ordered, definition=definition)

    @property
    def sort_key(self) -> SortKey:
        return self.keys[0].sort_key

    @property
    def surfaces(self) -> Tuple[str, ...]:
        return tuple(k.surface for k in self.keys)
