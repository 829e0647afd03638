"""
kobo-jadict: Japanese dictionary builder for Kobo e-readers

Merges JMdict with optional pitch accent, auxiliary Yomitan dictionaries and
an existing Kobo Japanese dictionary into one dicthtml archive. Every entry
is searchable by its headwords, readings and basic conjugated forms.

Basic Usage:
    import kobo_jadict
    from kobo_jadict.jmdict import iter_jmdict

    entries = kobo_jadict.build_entries(iter_jmdict("JMdict_e.xml"))
    kobo_jadict.build_dictionary(entries, "dicthtml-ja-en.zip")
"""

from pathlib import Path
from typing import Iterable, List, Optional, Union

__version__ = "0.1.0"


# =============================================================================
# Exceptions
# =============================================================================

class KoboJadictError(Exception):
    """Base class for all errors raised by kobo-jadict."""
    pass


class MalformedRecordError(KoboJadictError, ValueError):
    """
    Raised when a source file contains a record that cannot be parsed.

    This is always fatal: the dictionary is installed as a whole, so a
    partially built archive is never written.
    """
    pass


# =============================================================================
# Main API
# =============================================================================

def build_entries(
    words: Iterable,
    pitch_accents: Iterable = (),
    terms: Iterable = (),
    names: Iterable = (),
    kanji: Iterable = (),
    natives: Iterable = (),
    options=None,
) -> List:
    """
    Merge parsed source records into sorted output entries.

    Args:
        words: WordEntry records from the primary dictionary
        pitch_accents: PitchAccentEntry records
        terms: TermEntry records from auxiliary dictionaries
        names: NameEntry records from auxiliary dictionaries
        kanji: KanjiEntry records from auxiliary dictionaries
        natives: NativeEntry records from a Japanese-Japanese dictionary
        options: BuildOptions; defaults to hiragana readings and
            transitive/intransitive labels

    Returns:
        List of OutputEntry objects in their final order

    Example:
        >>> entries = kobo_jadict.build_entries([entry])
        >>> entries[0].keys[0].surface
        'たべる'
    """
    from kobo_jadict.assembly import assemble_entries
    from kobo_jadict.index import build_index
    from kobo_jadict.settings import BuildOptions

    index = build_index(
        words,
        pitch_accents=pitch_accents,
        terms=terms,
        names=names,
        kanji=kanji,
        natives=natives,
    )
    return assemble_entries(index, options or BuildOptions())


def build_dictionary(entries: List, path: Union[str, Path]) -> Path:
    """
    Write output entries to a Kobo dicthtml archive.

    Args:
        entries: OutputEntry objects, usually from build_entries()
        path: Destination .zip path

    Returns:
        The path that was written
    """
    from kobo_jadict.kobo import write_dicthtml
    return write_dicthtml(entries, Path(path))


def get_version() -> str:
    """Get the library version."""
    return __version__


# =============================================================================
# Module-level exports
# =============================================================================

__all__ = [
    # API
    "build_entries",
    "build_dictionary",
    "get_version",
    # Exceptions
    "KoboJadictError",
    "MalformedRecordError",
    # Version
    "__version__",
]
