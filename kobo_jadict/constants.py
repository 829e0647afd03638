"""
Shared enumerations and label tables for kobo-jadict.
"""

from enum import Enum
from typing import Dict, FrozenSet, Tuple


# ============================================================================
# Part of Speech
# ============================================================================

class PartOfSpeech(Enum):
    """Coarse word class, used only to pick the header word-type label."""
    VERB = "verb"
    ADJECTIVE = "adjective"
    EXPRESSION = "expression"
    OTHER = "other"


# ============================================================================
# Conjugation Classes
# ============================================================================
# Values are the JMdict part-of-speech codes, except for the catch-all
# irregular verb class which several codes collapse into.

class ConjugationClass(Enum):
    NONE = ""
    ICHIDAN_VERB = "v1"
    KURERU_VERB = "v1-s"
    GODAN_VERB_U = "v5u"
    GODAN_VERB_TSU = "v5t"
    GODAN_VERB_RU = "v5r"
    GODAN_VERB_KU = "v5k"
    GODAN_VERB_GU = "v5g"
    GODAN_VERB_NU = "v5n"
    GODAN_VERB_BU = "v5b"
    GODAN_VERB_MU = "v5m"
    GODAN_VERB_SU = "v5s"
    GODAN_VERB_HU = "v4h"
    IKU_VERB = "v5k-s"
    ARU_VERB = "v5aru"
    KURU_VERB = "vk"
    SURU_VERB = "vs-i"
    SURU_VERB_SPECIAL = "vs-s"
    SURU_VERB_CLASSICAL = "vs-c"
    IRREGULAR_VERB = "v-irr"
    I_ADJECTIVE = "adj-i"
    IRREGULAR_I_ADJECTIVE = "adj-ix"


# JMdict pos code -> conjugation class
JMDICT_CONJUGATION: Dict[str, ConjugationClass] = {
    cls.value: cls for cls in ConjugationClass if cls is not ConjugationClass.NONE
}
JMDICT_CONJUGATION.update({
    'v5r-i': ConjugationClass.IRREGULAR_VERB,
    'v5u-s': ConjugationClass.IRREGULAR_VERB,
    'vn': ConjugationClass.IRREGULAR_VERB,
    'vr': ConjugationClass.IRREGULAR_VERB,
    'vz': ConjugationClass.IRREGULAR_VERB,
})
del JMDICT_CONJUGATION['v-irr']

ADJECTIVE_CLASSES: FrozenSet[ConjugationClass] = frozenset({
    ConjugationClass.I_ADJECTIVE,
    ConjugationClass.IRREGULAR_I_ADJECTIVE,
})

VERB_CLASSES: FrozenSet[ConjugationClass] = frozenset(
    cls for cls in ConjugationClass
    if cls is not ConjugationClass.NONE and cls not in ADJECTIVE_CLASSES
)


# ============================================================================
# Verb Families
# ============================================================================

GODAN_CLASSES: FrozenSet[ConjugationClass] = frozenset({
    ConjugationClass.GODAN_VERB_U,
    ConjugationClass.GODAN_VERB_TSU,
    ConjugationClass.GODAN_VERB_RU,
    ConjugationClass.GODAN_VERB_KU,
    ConjugationClass.GODAN_VERB_GU,
    ConjugationClass.GODAN_VERB_NU,
    ConjugationClass.GODAN_VERB_BU,
    ConjugationClass.GODAN_VERB_MU,
    ConjugationClass.GODAN_VERB_SU,
})

# GODAN_VERB_HU doesn't exist in modern Japanese, so it is listed as irregular.
IRREGULAR_CLASSES: FrozenSet[ConjugationClass] = frozenset({
    ConjugationClass.SURU_VERB,
    ConjugationClass.SURU_VERB_SPECIAL,
    ConjugationClass.SURU_VERB_CLASSICAL,
    ConjugationClass.KURU_VERB,
    ConjugationClass.IKU_VERB,
    ConjugationClass.KURERU_VERB,
    ConjugationClass.ARU_VERB,
    ConjugationClass.GODAN_VERB_HU,
    ConjugationClass.IRREGULAR_VERB,
})


def verb_family(conj: ConjugationClass) -> str:
    """Get the ichidan/godan/irregular label for a verb class ('' if none)."""
    if conj is ConjugationClass.ICHIDAN_VERB:
        return "ichidan"
    if conj in GODAN_CLASSES:
        return "godan"
    if conj in IRREGULAR_CLASSES:
        return "irregular"
    return ""


# ============================================================================
# Labels
# ============================================================================

class LabelStyle(Enum):
    """
    Wording for verb transitivity.

    "other-move"/"self-move" is closer to how Japanese works, but
    "transitive"/"intransitive" is what most learners know.
    """
    GRAMMATICAL = "grammatical"
    MOVEMENT = "movement"


# style -> (transitive label, intransitive label)
TRANSITIVITY_LABELS: Dict[LabelStyle, Tuple[str, str]] = {
    LabelStyle.GRAMMATICAL: ("transitive", "intransitive"),
    LabelStyle.MOVEMENT: ("other-move", "self-move"),
}

TRANSITIVE_TAG = "vt"
INTRANSITIVE_TAG = "vi"
USUALLY_KANA_TAG = "uk"


# ============================================================================
# Priorities
# ============================================================================
# Lower values sort first.

TOP_PRIORITY = 0
MAX_PRIORITY = 0xFFFFFFFF

# Kana keys of words usually written in kana get their priority divided by
# this, so they outrank the kanji spellings.
USUALLY_KANA_DIVISOR = 8
