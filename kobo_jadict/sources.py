"""
Readers for the optional dictionary sources.

- Pitch accent table: tab-separated text, one accent record per line
- Yomitan dictionaries: zip archives of term_bank_*.json / kanji_bank_*.json
- Kobo dicthtml archives: used as the Japanese-Japanese (native) dictionary

All readers fail fast: a malformed record raises MalformedRecordError and
aborts the build, since the output is only useful when complete.
"""

import gzip
import json
import logging
import re
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Tuple, Union

import lxml.html
from lxml import etree

from kobo_jadict import MalformedRecordError
from kobo_jadict.characters import strip_non_kana
from kobo_jadict.raw_types import (
    KanjiEntry,
    NameEntry,
    NativeEntry,
    PitchAccentEntry,
    TermEntry,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _require(path: PathLike) -> Path:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return path


# ============================================================================
# Pitch Accent
# ============================================================================
# Record lines start with a numeric ID and have exactly 7 tab-separated
# fields: id, writing, reading, (unused), (unused), accents, (unused).
# Accents are comma-separated when a word has several accepted patterns.
# Any line not starting with a digit is a comment or header.

PITCH_ACCENT_FIELDS = 7
PITCH_WRITING_FIELD = 1
PITCH_READING_FIELD = 2
PITCH_ACCENT_FIELD = 5


def parse_accents(text: str) -> Tuple[int, ...]:
    """
    Parse an accent field such as "0" or "0,2".

    Raises:
        ValueError: If any position is not an integer
    """
    return tuple(int(part) for part in text.split(',') if part.strip())


def read_pitch_accents(path: PathLike) -> List[PitchAccentEntry]:
    """
    Read a pitch accent table.

    Lines whose accent field is not numeric are skipped; lines with the
    wrong number of fields are fatal.

    Raises:
        FileNotFoundError: If the file doesn't exist
        MalformedRecordError: If a record line is malformed
    """
    path = _require(path)
    entries = []
    skipped = 0

    with open(path, 'r', encoding='utf-8') as f:
        for line_no, line in enumerate(f, 1):
            line = line.rstrip('\r\n')
            if not line or line[0] not in '0123456789':
                continue

            parts = line.split('\t')
            if len(parts) != PITCH_ACCENT_FIELDS:
                raise MalformedRecordError(
                    f"{path}:{line_no}: expected {PITCH_ACCENT_FIELDS} "
                    f"tab-separated fields, found {len(parts)}"
                )

            try:
                accents = parse_accents(parts[PITCH_ACCENT_FIELD])
            except ValueError:
                skipped += 1
                continue
            if not accents:
                skipped += 1
                continue

            entries.append(PitchAccentEntry(
                writing=parts[PITCH_WRITING_FIELD],
                reading=parts[PITCH_READING_FIELD],
                accents=accents,
            ))

    logger.info(f"Pitch accent entries: {len(entries)} ({skipped} without accent)")
    return entries


# ============================================================================
# Yomitan Dictionaries
# ============================================================================

TERM_BANK_PATTERN = re.compile(r'(?:^|/)term_bank_(\d+)\.json$')
KANJI_BANK_PATTERN = re.compile(r'(?:^|/)kanji_bank_(\d+)\.json$')

# Minimum row lengths (older format versions have fewer trailing columns)
TERM_ROW_MIN = 6
KANJI_ROW_MIN = 5


@dataclass
class AuxiliaryDictionary:
    """Records read from one auxiliary dictionary archive."""
    title: str
    terms: List[TermEntry] = field(default_factory=list)
    names: List[NameEntry] = field(default_factory=list)
    kanji: List[KanjiEntry] = field(default_factory=list)


BLOCK_TAGS = frozenset({'br', 'div', 'li', 'ol', 'p', 'ul', 'table', 'tr', 'td'})
GLOSS_SEPARATOR = '; '


def _flatten(item: Any) -> str:
    # Block boundaries become newlines, split again by flatten_gloss
    if isinstance(item, str):
        return item
    if isinstance(item, list):
        return ''.join(_flatten(i) for i in item)
    if isinstance(item, dict):
        if item.get('type') == 'text':
            return item.get('text', '')
        if item.get('type') == 'image' or item.get('tag') == 'img':
            return ''
        if item.get('tag') == 'br':
            return '\n'
        inner = _flatten(item.get('content', ''))
        if item.get('tag') in BLOCK_TAGS:
            return f'\n{inner}\n'
        return inner
    return ''


def flatten_gloss(item: Any) -> str:
    """
    Get the plain text of a Yomitan glossary item.

    Items are either plain strings or structured content: nested dicts and
    lists whose leaves are strings. Images contribute no text. Block-level
    children (list items, paragraphs, divs) are kept apart with "; ".
    """
    parts = (part.strip() for part in _flatten(item).split('\n'))
    return GLOSS_SEPARATOR.join(part for part in parts if part)


def _split_tags(*fields: Any) -> Tuple[str, ...]:
    tags: List[str] = []
    for value in fields:
        if not isinstance(value, str):
            continue
        for tag in value.split():
            if tag not in tags:
                tags.append(tag)
    return tuple(tags)


def _load_json(zf: zipfile.ZipFile, name: str, archive: Path) -> Any:
    try:
        return json.loads(zf.read(name).decode('utf-8'))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedRecordError(f"Invalid JSON in {archive}:{name}: {e}") from e


def _bank_names(zf: zipfile.ZipFile, pattern: re.Pattern) -> List[str]:
    """Bank member names, in numeric order."""
    banks = []
    for name in zf.namelist():
        match = pattern.search(name)
        if match:
            banks.append((int(match.group(1)), name))
    return [name for _, name in sorted(banks)]


def _load_rows(zf: zipfile.ZipFile, name: str, archive: Path, min_length: int):
    rows = _load_json(zf, name, archive)
    if not isinstance(rows, list):
        raise MalformedRecordError(f"{archive}:{name} does not contain a JSON array")
    for i, row in enumerate(rows):
        if not isinstance(row, list) or len(row) < min_length:
            raise MalformedRecordError(f"Invalid row {i} in {archive}:{name}: {row!r}")
        yield row


def parse_term_row(row: list, dictionary: str, as_name: bool = False):
    """
    Parse one term bank row.

    Row layout: [expression, reading, definition tags, rules, score,
    glossary, sequence, term tags].
    """
    expression, reading = row[0], row[1]
    if not isinstance(expression, str) or not isinstance(reading, str):
        raise MalformedRecordError(f"Invalid term in {dictionary}: {row!r}")
    if not isinstance(row[5], list):
        raise MalformedRecordError(f"Invalid glossary in {dictionary}: {row!r}")

    glosses = tuple(g for g in (flatten_gloss(item).strip() for item in row[5]) if g)
    tags = _split_tags(row[2], row[7] if len(row) > 7 else None)

    record = NameEntry if as_name else TermEntry
    return record(
        writing=expression,
        reading=reading,
        glosses=glosses,
        dictionary=dictionary,
        tags=tags,
    )


def parse_kanji_row(row: list) -> KanjiEntry:
    """
    Parse one kanji bank row.

    Row layout: [character, onyomi, kunyomi, tags, meanings, stats], where
    the readings are space-separated strings.
    """
    character, onyomi, kunyomi, _, meanings = row[:5]
    if not isinstance(character, str) or not isinstance(meanings, list):
        raise MalformedRecordError(f"Invalid kanji row: {row!r}")
    return KanjiEntry(
        character=character,
        meanings=tuple(str(m) for m in meanings),
        onyomi=tuple((onyomi or '').split()),
        kunyomi=tuple((kunyomi or '').split()),
    )


def read_yomitan(path: PathLike, names: bool = False) -> AuxiliaryDictionary:
    """
    Read a Yomitan dictionary archive.

    Args:
        path: Path to the .zip archive
        names: Treat the term banks as proper names (e.g. JMnedict)

    Returns:
        AuxiliaryDictionary with the archive title and its records

    Raises:
        FileNotFoundError: If the archive doesn't exist
        MalformedRecordError: If index.json or any bank is invalid
    """
    path = _require(path)

    try:
        zf = zipfile.ZipFile(path)
    except zipfile.BadZipFile as e:
        raise MalformedRecordError(f"Not a zip archive: {path}") from e

    with zf:
        if 'index.json' in zf.namelist():
            index = _load_json(zf, 'index.json', path)
            title = index.get('title') if isinstance(index, dict) else None
        else:
            title = None
        title = title or path.stem

        result = AuxiliaryDictionary(title=title)

        for name in _bank_names(zf, TERM_BANK_PATTERN):
            for row in _load_rows(zf, name, path, TERM_ROW_MIN):
                record = parse_term_row(row, title, as_name=names)
                if names:
                    result.names.append(record)
                else:
                    result.terms.append(record)

        for name in _bank_names(zf, KANJI_BANK_PATTERN):
            for row in _load_rows(zf, name, path, KANJI_ROW_MIN):
                result.kanji.append(parse_kanji_row(row))

    logger.info(
        f"{title}: {len(result.terms)} terms, {len(result.names)} names, "
        f"{len(result.kanji)} kanji"
    )
    return result


# ============================================================================
# Kobo dicthtml (native dictionary)
# ============================================================================
# Each .html member is gzip-compressed and holds a list of
#   <w><a name="key"/>definition...<var><variant name="..."/></var></w>

READING_END = '【'


def _word_names(w) -> List[str]:
    """The anchor name followed by every variant name of a <w> element."""
    anchor = next((a.get('name') for a in w.iter('a') if a.get('name')), None)
    if anchor is None:
        return []
    names = [anchor]
    for variant in w.iter('variant'):
        name = variant.get('name')
        if name and name not in names:
            names.append(name)
    return names


def parse_dicthtml_document(text: str) -> List[NativeEntry]:
    """
    Parse one decompressed dicthtml page.

    The anchor is only the first key of the word on this page; the
    dictionary form is often one of the variants. Every name yields its own
    NativeEntry sharing the reading and definition.
    """
    entries = []
    document = lxml.html.fromstring(text)

    for w in document.iter('w'):
        names = _word_names(w)
        if not names:
            continue

        for var in list(w.iter('var')):
            var.drop_tree()
        etree.strip_tags(w, 'a')

        head = w.text_content()
        reading = strip_non_kana(head.split(READING_END, 1)[0]) if READING_END in head else None

        definition = w.text or ''
        definition += ''.join(
            etree.tostring(child, encoding='unicode', method='html') for child in w
        )
        for name in names:
            entries.append(NativeEntry(key=name, reading=reading or name, definition=definition))

    return entries


def read_dicthtml(path: PathLike) -> List[NativeEntry]:
    """
    Read every entry from a Kobo dicthtml archive.

    Raises:
        FileNotFoundError: If the archive doesn't exist
        MalformedRecordError: If the archive or a page can't be decoded
    """
    path = _require(path)

    try:
        zf = zipfile.ZipFile(path)
    except zipfile.BadZipFile as e:
        raise MalformedRecordError(f"Not a zip archive: {path}") from e

    entries: List[NativeEntry] = []
    with zf:
        for name in sorted(zf.namelist()):
            if not name.endswith('.html'):
                continue
            try:
                text = gzip.decompress(zf.read(name)).decode('utf-8')
            except (OSError, UnicodeDecodeError) as e:
                raise MalformedRecordError(f"Cannot decode {path}:{name}: {e}") from e
            if text.strip():
                entries.extend(parse_dicthtml_document(text))

    logger.info(f"Kobo dictionary entries: {len(entries)}")
    return entries
