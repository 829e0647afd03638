"""
Lookup key generation, including basic conjugations.

A Kobo reader only finds an entry if the exact string the user tapped is one
of its keys, so each word is registered under its headwords, its readings
and a handful of conjugated stems. The stems cover the common auxiliaries:
e.g. 食べ covers 食べます/食べない, 食べさせ covers 食べさせる/食べさせた.

Conjugation is a table lookup: each class maps to one or more
(suffix, endings) rules. A form that ends with the suffix has it replaced by
every ending; any other form is kept as-is.
"""

from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

from kobo_jadict.characters import hiragana_to_katakana, is_kana, katakana_to_hiragana
from kobo_jadict.constants import ConjugationClass, USUALLY_KANA_DIVISOR
from kobo_jadict.raw_types import LookupKey, WordEntry


# ============================================================================
# Inflection Rules
# ============================================================================

@dataclass(frozen=True)
class InflectionRule:
    """Replace a trailing suffix with each of the given endings."""
    suffix: str
    endings: Tuple[str, ...]


PASSTHROUGH = InflectionRule("", ())


def _godan(suffix: str, row: str, te: str, ta: str) -> Tuple[InflectionRule, ...]:
    # row: the a/i/e/o stems of the consonant row, e.g. "かきけこ"
    return (InflectionRule(suffix, tuple(row) + (te, ta)),)


INFLECTION_RULES: Dict[ConjugationClass, Tuple[InflectionRule, ...]] = {
    ConjugationClass.ICHIDAN_VERB: (
        InflectionRule("る", ("", "られ", "させ", "ろ", "て", "た")),
    ),

    ConjugationClass.GODAN_VERB_U: _godan("う", "わいえお", "って", "った"),
    ConjugationClass.GODAN_VERB_TSU: _godan("つ", "たちてと", "って", "った"),
    ConjugationClass.GODAN_VERB_RU: _godan("る", "らりれろ", "って", "った"),
    ConjugationClass.GODAN_VERB_KU: _godan("く", "かきけこ", "いて", "いた"),
    ConjugationClass.GODAN_VERB_GU: _godan("ぐ", "がぎげご", "いで", "いだ"),
    ConjugationClass.GODAN_VERB_NU: _godan("ぬ", "なにねの", "んで", "んだ"),
    ConjugationClass.GODAN_VERB_BU: _godan("ぶ", "ばびべぼ", "んで", "んだ"),
    ConjugationClass.GODAN_VERB_MU: _godan("む", "まみめも", "んで", "んだ"),
    ConjugationClass.GODAN_VERB_SU: _godan("す", "さしせそ", "して", "した"),

    # 行く: regular く row, but って/った instead of いて/いた.
    ConjugationClass.IKU_VERB: _godan("く", "かきけこ", "って", "った"),

    # 来る is written both ways, and the stem vowel changes, so the kana and
    # kanji spellings each need their own rule.
    ConjugationClass.KURU_VERB: (
        InflectionRule("くる", (
            "こない", "こなかった", "こなくて", "きて", "きた", "こられ",
            "こさせ", "こい", "きます", "きません", "きました",
        )),
        InflectionRule("来る", (
            "来ない", "来なかった", "来なくて", "来て", "来た", "来られ",
            "来させ", "来い", "来ます", "来ません", "来ました",
        )),
    ),

    ConjugationClass.SURU_VERB: (
        InflectionRule("する", (
            "しな", "しろ", "させ", "され", "でき", "した", "して", "します",
            "しません",
        )),
    ),

    ConjugationClass.I_ADJECTIVE: (
        InflectionRule("い", ("", "く", "け", "かった", "かって")),
    ),
}


def rules_for(conj: ConjugationClass) -> Tuple[InflectionRule, ...]:
    """Get the inflection rules for a class; unlisted classes pass through."""
    return INFLECTION_RULES.get(conj, (PASSTHROUGH,))


# ============================================================================
# Key Generation
# ============================================================================

def base_forms(entry: WordEntry) -> List[str]:
    """
    Get the dictionary forms a word can be looked up by.

    Words usually written in kana are searchable by every reading; other
    words only by their canonical reading, since alternate readings of a
    kanji word are rarely what the user typed.

    Returns:
        Deduplicated forms in sorted order
    """
    forms = set(entry.writings)
    if entry.usually_kana:
        forms.update(entry.readings)
    else:
        forms.add(entry.readings[0])
    return sorted(f for f in forms if f)


def inflect(form: str, rule: InflectionRule) -> List[str]:
    """
    Apply a rule to one dictionary form.

    Returns:
        The form itself followed by its conjugated variants. If the rule
        does not apply, only the form itself.
    """
    results = [form]
    if rule.suffix and len(form) >= len(rule.suffix) and form.endswith(rule.suffix):
        stem = form[:-len(rule.suffix)]
        for ending in rule.endings:
            variant = stem + ending
            if variant:
                results.append(variant)
    return results


def key_priority(entry: WordEntry, surface: str) -> int:
    """
    Get the priority of one surface form of a word.

    Kana forms of words usually written in kana rank above the word's kanji
    spellings.
    """
    if entry.usually_kana and is_kana(surface):
        return entry.priority // USUALLY_KANA_DIVISOR
    return entry.priority


def generate_lookup_keys(entry: WordEntry) -> Set[LookupKey]:
    """
    Generate every lookup key for a word.

    All-kana forms are registered in both hiragana and katakana, because
    Kobo normalizes kana lookups to katakana.

    Args:
        entry: The word to expand

    Returns:
        Set of LookupKey; ordering is decided later, at assembly time
    """
    keys: Set[LookupKey] = set()

    for form in base_forms(entry):
        for rule in rules_for(entry.conj):
            for surface in inflect(form, rule):
                priority = key_priority(entry, surface)
                keys.add(LookupKey(surface, priority))
                if is_kana(surface):
                    keys.add(LookupKey(hiragana_to_katakana(surface), priority))
                    keys.add(LookupKey(katakana_to_hiragana(surface), priority))

    return keys
