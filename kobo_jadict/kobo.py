"""
Kobo dicthtml archive writer.

A Kobo dictionary is a zip archive holding:
- words: a marisa trie with every lookup key, used to check whether a
  tapped word exists before its page is opened
- <prefix>.html: gzip-compressed pages, one per two-character key prefix

When a key is looked up, the reader opens the page for that key's prefix and
searches for a matching <a name="..."/> anchor or <variant name="..."/>.
An entry whose keys fall under several prefixes is therefore written once to
each of those pages.
"""

import gzip
import logging
import zipfile
from html import escape
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import marisa_trie

from kobo_jadict.raw_types import OutputEntry

logger = logging.getLogger(__name__)

WORDS_MEMBER = "words"
FALLBACK_PREFIX = "11"
# Fixed member timestamp
MEMBER_DATE_TIME = (1980, 1, 1, 0, 0, 0)
PREFIX_PAD = "a"


# ============================================================================
# Prefixes
# ============================================================================

def word_prefix(word: str) -> str:
    """
    Get the page prefix for a key.

    The first two characters, lower-cased, padded with "a" if the key is one
    character long. Keys that are empty or start with a non-letter all share
    the "11" page.
    """
    word = word.strip().lower()
    if not word:
        return FALLBACK_PREFIX

    prefix = word[:2]
    if len(prefix) == 1:
        prefix += PREFIX_PAD

    if not all(c.isalpha() for c in prefix):
        return FALLBACK_PREFIX
    return prefix


def group_by_prefix(entry: OutputEntry) -> Dict[str, List[str]]:
    """Group an entry's key surfaces by page prefix, keeping key order."""
    groups: Dict[str, List[str]] = {}
    for surface in entry.surfaces:
        groups.setdefault(word_prefix(surface), []).append(surface)
    return groups


# ============================================================================
# Markup
# ============================================================================

def render_word(surfaces: List[str], definition: str) -> str:
    """Render one <w> element anchored at the first surface."""
    anchor, variants = surfaces[0], surfaces[1:]
    text = f'<w><a name="{escape(anchor)}" />{definition}'
    if variants:
        text += "<var>"
        text += "".join(f'<variant name="{escape(v)}"/>' for v in variants)
        text += "</var>"
    text += "</w>"
    return text


def build_pages(entries: Iterable[OutputEntry]) -> Dict[str, List[str]]:
    """
    Distribute entries over prefix pages.

    Returns:
        Dict mapping prefix -> list of <w> elements, in entry order
    """
    pages: Dict[str, List[str]] = {}
    for entry in entries:
        for prefix, surfaces in group_by_prefix(entry).items():
            pages.setdefault(prefix, []).append(render_word(surfaces, entry.definition))
    return pages


def build_words_trie(entries: Iterable[OutputEntry]) -> marisa_trie.Trie:
    """Build the trie of every lookup key."""
    return marisa_trie.Trie(
        surface for entry in entries for surface in entry.surfaces
    )


# ============================================================================
# Archive
# ============================================================================

def _write_member(zf: zipfile.ZipFile, name: str, data: bytes):
    zf.writestr(zipfile.ZipInfo(name, date_time=MEMBER_DATE_TIME), data)


def write_dicthtml(entries: List[OutputEntry], output_path: Path) -> Path:
    """
    Write entries to a Kobo dicthtml zip archive.

    Args:
        entries: Output entries in their final order
        output_path: Destination path

    Returns:
        The path that was written
    """
    logger.info("Building words trie...")
    trie = build_words_trie(entries)
    logger.info(f"  Unique keys: {len(trie)}")

    pages = build_pages(entries)
    logger.info(f"  Pages: {len(pages)}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(output_path, "w", compression=zipfile.ZIP_STORED) as zf:
        _write_member(zf, WORDS_MEMBER, trie.tobytes())
        for prefix in sorted(pages):
            html = "<html>" + "".join(pages[prefix]) + "</html>"
            _write_member(zf, f"{prefix}.html", gzip.compress(html.encode("utf-8"), mtime=0))

    file_size = output_path.stat().st_size / (1024 * 1024)
    logger.info(f"Saved dictionary to {output_path} ({file_size:.1f} MB)")

    return output_path


def read_words(path: Path) -> Tuple[str, ...]:
    """Read back the sorted key list of a written archive."""
    with zipfile.ZipFile(path) as zf:
        trie = marisa_trie.Trie()
        trie.frombytes(zf.read(WORDS_MEMBER))
    return tuple(sorted(trie.keys()))
