"""
Multi-source index for kobo-jadict.

Every source is grouped under a (writing, reading) key so the merge step can
find all records describing the same word with a single dict lookup:

    (writing, reading) -> [record, record, ...]

The writing falls back to the reading when a record has no kanji form, and
the reading is always normalized (see characters.normalize_reading) so that
hiragana and katakana sources agree. Lists keep the order records arrived in.

The index is built once and is read-only afterwards.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple, TypeVar

from kobo_jadict.characters import normalize_reading
from kobo_jadict.raw_types import (
    KanjiEntry,
    NameEntry,
    NativeEntry,
    PitchAccentEntry,
    TermEntry,
    WordEntry,
)

logger = logging.getLogger(__name__)

IndexKey = Tuple[str, str]  # (writing, normalized reading)

T = TypeVar("T")


# ============================================================================
# Key Derivation
# ============================================================================

def word_key(entry: WordEntry) -> IndexKey:
    """Index key for a primary dictionary word."""
    reading = entry.readings[0].strip()
    writing = entry.writings[0] if entry.writings else reading
    return (writing, normalize_reading(reading))


def pitch_accent_key(entry: PitchAccentEntry) -> IndexKey:
    """Index key for a pitch accent record."""
    return (entry.writing, normalize_reading(entry.reading))


def auxiliary_key(writing: str, reading: str) -> IndexKey:
    """Index key for term, name and native records."""
    writing = writing.strip()
    reading = reading.strip()
    return (writing or reading, normalize_reading(reading))


# ============================================================================
# Index
# ============================================================================

@dataclass(frozen=True)
class SourceIndex:
    """
    Read-only lookup tables for every source.

    All lookups are exact matches. A miss returns an empty tuple, never
    None, so callers treat "no match" and "no data" the same way.
    """
    words: Mapping[IndexKey, Tuple[WordEntry, ...]]
    pitch_accents: Mapping[IndexKey, Tuple[int, ...]]
    terms: Mapping[IndexKey, Tuple[TermEntry, ...]]
    names: Mapping[IndexKey, Tuple[NameEntry, ...]]
    natives: Mapping[IndexKey, Tuple[NativeEntry, ...]]
    kanji: Mapping[str, Tuple[KanjiEntry, ...]]

    def words_for(self, key: IndexKey) -> Tuple[WordEntry, ...]:
        return self.words.get(key, ())

    def pitch_accents_for(self, key: IndexKey) -> Tuple[int, ...]:
        return self.pitch_accents.get(key, ())

    def terms_for(self, key: IndexKey) -> Tuple[TermEntry, ...]:
        return self.terms.get(key, ())

    def names_for(self, key: IndexKey) -> Tuple[NameEntry, ...]:
        return self.names.get(key, ())

    def natives_for(self, key: IndexKey) -> Tuple[NativeEntry, ...]:
        return self.natives.get(key, ())

    def kanji_for(self, character: str) -> Tuple[KanjiEntry, ...]:
        return self.kanji.get(character, ())

    def word_keys(self) -> Iterator[IndexKey]:
        """Word keys in sorted order, so output never depends on input order."""
        return iter(sorted(self.words))

    def name_keys(self) -> Iterator[IndexKey]:
        return iter(sorted(self.names))

    def kanji_characters(self) -> Iterator[str]:
        return iter(sorted(self.kanji))


def _group(records: Iterable[T], key_func) -> Dict:
    """Group records by key, keeping arrival order within each group."""
    groups: Dict = {}
    for record in records:
        groups.setdefault(key_func(record), []).append(record)
    return groups


def _freeze(groups: Dict) -> Mapping:
    return MappingProxyType({key: tuple(values) for key, values in groups.items()})


def _group_accents(records: Iterable[PitchAccentEntry]) -> Dict[IndexKey, List[int]]:
    groups: Dict[IndexKey, List[int]] = {}
    for record in records:
        accents = groups.setdefault(pitch_accent_key(record), [])
        for accent in record.accents:
            if accent not in accents:
                accents.append(accent)
    return groups


def build_index(
    words: Iterable[WordEntry],
    pitch_accents: Iterable[PitchAccentEntry] = (),
    terms: Iterable[TermEntry] = (),
    names: Iterable[NameEntry] = (),
    kanji: Iterable[KanjiEntry] = (),
    natives: Iterable[NativeEntry] = (),
) -> SourceIndex:
    """
    Build the index for all sources.

    Optional sources default to empty, which simply yields empty tables.

    Args:
        words: Primary dictionary words
        pitch_accents: Pitch accent records
        terms: Auxiliary term records, pooled across dictionaries
        names: Auxiliary name records, pooled across dictionaries
        kanji: Auxiliary kanji records, pooled across dictionaries
        natives: Japanese-Japanese dictionary records

    Returns:
        A SourceIndex
    """
    index = SourceIndex(
        words=_freeze(_group(words, word_key)),
        pitch_accents=_freeze(_group_accents(pitch_accents)),
        terms=_freeze(_group(terms, lambda t: auxiliary_key(t.writing, t.reading))),
        names=_freeze(_group(names, lambda n: auxiliary_key(n.writing, n.reading))),
        natives=_freeze(_group(natives, lambda n: auxiliary_key(n.key, n.reading))),
        kanji=_freeze(_group(kanji, lambda k: k.character)),
    )

    logger.info(f"JMdict keys: {len(index.words)}")
    logger.info(f"Pitch accent keys: {len(index.pitch_accents)}")
    logger.info(f"Auxiliary term keys: {len(index.terms)}")
    logger.info(f"Auxiliary name keys: {len(index.names)}")
    logger.info(f"Native dictionary keys: {len(index.natives)}")
    logger.info(f"Kanji: {len(index.kanji)}")

    return index
