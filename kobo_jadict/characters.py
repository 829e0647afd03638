"""
Kana classification and conversion.

Hiragana and katakana occupy parallel codepoint blocks, so converting
between them is a fixed offset applied to every in-range character.
Everything else (kanji, latin, punctuation) passes through untouched.
"""

from enum import Enum


class Script(Enum):
    """The two interchangeable kana scripts."""
    HIRAGANA = "hiragana"
    KATAKANA = "katakana"


# Numerical difference between hiragana and katakana codepoints.
# Hiragana is lower than katakana.
KANA_DIFF = 0x30A1 - 0x3041


def is_kana_char(char: str) -> bool:
    """Check if a single character is kana or a kana mark."""
    code = ord(char)
    return (
        0x3041 <= code <= 0x3096      # Hiragana
        or 0x3099 <= code <= 0x309C   # Combining marks
        or 0x309D <= code <= 0x309E   # Iteration marks
        or 0x30A1 <= code <= 0x30F6   # Katakana
        or code == 0x30FC             # Prolonged sound mark
        or 0x30FD <= code <= 0x30FE   # Iteration marks
    )


def _is_convertible_hiragana(code: int) -> bool:
    return 0x3041 <= code <= 0x3096 or 0x309D <= code <= 0x309E


def _is_convertible_katakana(code: int) -> bool:
    return 0x30A1 <= code <= 0x30F6 or 0x30FD <= code <= 0x30FE


def hiragana_to_katakana(text: str) -> str:
    """Convert every hiragana character in text to katakana."""
    return ''.join(
        chr(ord(c) + KANA_DIFF) if _is_convertible_hiragana(ord(c)) else c
        for c in text
    )


def katakana_to_hiragana(text: str) -> str:
    """Convert every katakana character in text to hiragana."""
    return ''.join(
        chr(ord(c) - KANA_DIFF) if _is_convertible_katakana(ord(c)) else c
        for c in text
    )


def convert_kana(text: str, script: Script) -> str:
    """
    Convert text to the given kana script.

    Args:
        text: Text to convert
        script: Target script

    Returns:
        Converted text; non-kana characters are unchanged
    """
    if script is Script.KATAKANA:
        return hiragana_to_katakana(text)
    return katakana_to_hiragana(text)


def strip_non_kana(text: str) -> str:
    """Remove every character that is not kana."""
    return ''.join(c for c in text if is_kana_char(c))


def is_kana(text: str) -> bool:
    """Check if text is entirely kana. Empty text counts as kana."""
    return all(is_kana_char(c) for c in text)


def normalize_reading(text: str) -> str:
    """
    Normalize a reading for use in index keys.

    Readings from different sources disagree on script and sometimes carry
    stray punctuation, so keys always use bare katakana.
    """
    return strip_non_kana(hiragana_to_katakana(text.strip()))
