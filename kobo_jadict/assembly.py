"""
Entry assembly and ranking.

Turns a SourceIndex into the final, sorted list of OutputEntry objects:
one entry per JMdict word, one per auxiliary name and one per kanji.
"""

import logging
from typing import List

from kobo_jadict.characters import is_kana
from kobo_jadict.conjugation import generate_lookup_keys
from kobo_jadict.constants import MAX_PRIORITY, TOP_PRIORITY
from kobo_jadict.index import IndexKey, SourceIndex
from kobo_jadict.raw_types import LookupKey, OutputEntry, WordEntry
from kobo_jadict.render import (
    ENTRY_START,
    generate_definition_text,
    generate_header_text,
    generate_kanji_text,
    generate_name_text,
)
from kobo_jadict.settings import BuildOptions

logger = logging.getLogger(__name__)


def matches_auxiliary_sources(writing: str) -> bool:
    """
    Check if a word should be matched against the other dictionaries.

    Only words with a kanji writing are matched: matching on kana alone
    would introduce too many false positives.
    """
    return bool(writing) and not is_kana(writing)


def build_word_entry(
    index: SourceIndex,
    key: IndexKey,
    entry: WordEntry,
    options: BuildOptions,
) -> OutputEntry:
    """Build the output entry for one JMdict word."""
    writing, reading = key

    if matches_auxiliary_sources(writing):
        accents = index.pitch_accents_for(key)
        terms = index.terms_for(key)
        natives = index.natives_for(key)
    else:
        accents, terms, natives = (), (), ()

    text = ENTRY_START
    text += generate_header_text(entry, reading or entry.readings[0], accents, options)
    text += generate_definition_text(entry, terms, natives)

    return OutputEntry.from_keys(generate_lookup_keys(entry), text)


def build_word_entries(index: SourceIndex, options: BuildOptions) -> List[OutputEntry]:
    entries = []
    for key in index.word_keys():
        for entry in index.words_for(key):
            entries.append(build_word_entry(index, key, entry, options))
    return entries


def build_name_entries(index: SourceIndex) -> List[OutputEntry]:
    """One entry per auxiliary name, ranked after every other entry."""
    entries = []
    for key in index.name_keys():
        for name in index.names_for(key):
            surface = name.writing or name.reading
            entries.append(OutputEntry.from_keys(
                [LookupKey(surface, MAX_PRIORITY)],
                generate_name_text(name),
            ))
    return entries


def build_kanji_entries(index: SourceIndex) -> List[OutputEntry]:
    """One entry per distinct kanji, ranked before everything else."""
    entries = []
    for character in index.kanji_characters():
        entries.append(OutputEntry.from_keys(
            [LookupKey(character, TOP_PRIORITY)],
            generate_kanji_text(index.kanji_for(character)),
        ))
    return entries


def sort_entries(entries: List[OutputEntry]) -> List[OutputEntry]:
    """
    Sort entries by their first key, then by definition text.

    The second criterion makes the order total, so identical input always
    produces an identical archive.
    """
    return sorted(entries, key=lambda e: (e.sort_key, e.definition))


def assemble_entries(index: SourceIndex, options: BuildOptions) -> List[OutputEntry]:
    """
    Generate and sort every output entry.

    Args:
        index: Indexed source records
        options: Display settings

    Returns:
        Sorted list of OutputEntry
    """
    logger.info("Generating dictionary entries...")

    word_entries = build_word_entries(index, options)
    name_entries = build_name_entries(index)
    kanji_entries = build_kanji_entries(index)

    logger.info(f"  Word entries: {len(word_entries)}")
    logger.info(f"  Name entries: {len(name_entries)}")
    logger.info(f"  Kanji entries: {len(kanji_entries)}")

    return sort_entries(word_entries + name_entries + kanji_entries)
