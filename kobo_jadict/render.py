"""
Entry text rendering.

Builds the HTML shown on the reader for each entry: a header line with the
reading, pitch accent, headwords and word type, followed by the numbered
English definitions and any auxiliary dictionary content.
"""

from html import escape
from typing import Iterable, List, Sequence

from kobo_jadict.characters import convert_kana
from kobo_jadict.constants import (
    ConjugationClass,
    PartOfSpeech,
    TRANSITIVITY_LABELS,
    verb_family,
)
from kobo_jadict.raw_types import KanjiEntry, NameEntry, NativeEntry, TermEntry, WordEntry
from kobo_jadict.settings import BuildOptions


# ============================================================================
# Markup Templates
# ============================================================================

ENTRY_START = "<hr/>"
HEADWORD_SEPARATOR = " &nbsp;&nbsp;&mdash; "
HEADWORD_OPEN = "【"
HEADWORD_CLOSE = "】"
HEADWORD_JOIN = "／"
LABEL_JOIN = ",&nbsp;"

WORD_TYPE_START = ' <span style="font-size: 0.8em; font-style: italic; margin-left: 0;">'
WORD_TYPE_END = "</span>"

DEFINITIONS_START = '<p style="margin-top: 0.7em; margin-bottom: 0.7em;">'
DEFINITIONS_END = "</p>"

AUX_BLOCK_CLASS = "aux-term"
AUX_BLOCK_START = f'<div class="{AUX_BLOCK_CLASS}">'
AUX_BLOCK_END = "</div>"

KANJI_START = '<span style="font-size: 2em;">'
KANJI_END = "</span>"


def _word_type(label: str) -> str:
    return f"{WORD_TYPE_START}{label}{WORD_TYPE_END}"


# ============================================================================
# Word Entries
# ============================================================================

def render_pitch_accents(accents: Sequence[int]) -> str:
    """Render accent positions as " [0][2]" (empty if there are none)."""
    if not accents:
        return ""
    return " " + "".join(f"[{a}]" for a in accents)


def display_headwords(entry: WordEntry) -> List[str]:
    """Headwords shown in brackets in the entry header."""
    if entry.usually_kana or not entry.writings:
        return [entry.readings[0]]
    return list(entry.writings)


def word_type_label(entry: WordEntry, options: BuildOptions) -> str:
    """
    Get the word type label, e.g. "verb,&nbsp;godan,&nbsp;transitive".

    Returns:
        The label text, or "" for word classes that get no label
    """
    if entry.pos is PartOfSpeech.VERB:
        parts = ["verb"]
        family = verb_family(entry.conj)
        if family:
            parts.append(family)

        transitive, intransitive = TRANSITIVITY_LABELS[options.label_style]
        if entry.transitive and not entry.intransitive:
            parts.append(transitive)
        elif entry.intransitive and not entry.transitive:
            parts.append(intransitive)
        return LABEL_JOIN.join(parts)

    if entry.pos is PartOfSpeech.ADJECTIVE:
        if entry.conj is ConjugationClass.I_ADJECTIVE:
            return "i-adjective"
        if entry.conj is ConjugationClass.IRREGULAR_I_ADJECTIVE:
            return LABEL_JOIN.join(["i-adjective", "irregular"])
        return "adjective"

    if entry.pos is PartOfSpeech.EXPRESSION:
        return "expression"

    return ""


def generate_header_text(
    entry: WordEntry,
    reading: str,
    accents: Sequence[int],
    options: BuildOptions,
) -> str:
    """
    Generate header text for a word.

    Args:
        entry: The word
        reading: Canonical reading (any kana script)
        accents: Matched pitch accent positions, possibly empty
        options: Display settings

    Returns:
        Header HTML
    """
    text = convert_kana(reading, options.display_script)
    text += render_pitch_accents(accents)
    text += HEADWORD_SEPARATOR
    headwords = HEADWORD_JOIN.join(escape(h, quote=False) for h in display_headwords(entry))
    text += HEADWORD_OPEN + headwords + HEADWORD_CLOSE

    label = word_type_label(entry, options)
    if label:
        text += _word_type(label)

    return text


def render_term_block(term: TermEntry) -> str:
    """Render one auxiliary dictionary definition, labeled with its source."""
    items = "".join(f"<li>{escape(g, quote=False)}</li>" for g in term.glosses)
    return (
        f"{AUX_BLOCK_START}<b>{escape(term.dictionary, quote=False)}</b>"
        f"<ol>{items}</ol>{AUX_BLOCK_END}"
    )


def generate_definition_text(
    entry: WordEntry,
    terms: Iterable[TermEntry] = (),
    natives: Sequence[NativeEntry] = (),
) -> str:
    """
    Generate the definition body for a word.

    Only the first native entry is used; further matches are dropped to
    keep entries short.
    """
    text = DEFINITIONS_START
    for i, gloss in enumerate(entry.glosses):
        text += f"<b>{i + 1}.</b> {escape(gloss, quote=False)}<br/>"
    text += DEFINITIONS_END

    for term in terms:
        text += render_term_block(term)

    for native in natives[:1]:
        text += native.definition

    return text


# ============================================================================
# Names and Kanji
# ============================================================================

def generate_name_text(name: NameEntry) -> str:
    """Render a proper name entry."""
    text = ENTRY_START
    if name.reading:
        text += escape(name.reading, quote=False) + HEADWORD_SEPARATOR
    text += HEADWORD_OPEN + escape(name.writing or name.reading, quote=False) + HEADWORD_CLOSE

    label = "name"
    if name.tags:
        label += LABEL_JOIN + LABEL_JOIN.join(escape(t, quote=False) for t in name.tags)
    text += _word_type(label)

    if name.glosses:
        items = "".join(f"<li>{escape(g, quote=False)}</li>" for g in name.glosses)
        text += f"<ul>{items}</ul>"

    return text


def generate_kanji_text(kanji_entries: Iterable[KanjiEntry]) -> str:
    """Render every record for one kanji character."""
    text = ""
    for kanji in kanji_entries:
        text += ENTRY_START
        text += f"{KANJI_START}{escape(kanji.character, quote=False)}{KANJI_END} "
        text += escape(", ".join(kanji.meanings), quote=False)
        if kanji.onyomi:
            text += "<br/>On: " + escape("/".join(kanji.onyomi), quote=False)
        if kanji.kunyomi:
            text += "<br/>Kun: " + escape("/".join(kanji.kunyomi), quote=False)
    return text
