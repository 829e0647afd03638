import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from kobo_jadict.constants import ConjugationClass, PartOfSpeech
from kobo_jadict.raw_types import WordEntry


JMDICT_SAMPLE = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE JMdict [
<!ELEMENT JMdict (entry*)>
<!ENTITY v1 "Ichidan verb">
<!ENTITY v5r "Godan verb with 'ru' ending">
<!ENTITY vt "transitive verb">
<!ENTITY vi "intransitive verb">
<!ENTITY n "noun (common) (futsuumeishi)">
<!ENTITY exp "expressions (phrases, clauses, etc.)">
<!ENTITY uk "word usually written using kana alone">
<!ENTITY ok "out-dated or obsolete kana usage">
]>
<JMdict>
<entry>
<ent_seq>1358280</ent_seq>
<k_ele>
<keb>食べる</keb>
<ke_pri>ichi1</ke_pri>
<ke_pri>nf05</ke_pri>
</k_ele>
<k_ele>
<keb>喰べる</keb>
</k_ele>
<r_ele>
<reb>たべる</reb>
<re_pri>ichi1</re_pri>
</r_ele>
<sense>
<pos>&v1;</pos>
<pos>&vt;</pos>
<gloss>to eat</gloss>
<gloss xml:lang="ger">essen</gloss>
</sense>
<sense>
<gloss>to live on (e.g. a salary)</gloss>
<gloss>to live off</gloss>
</sense>
</entry>
<entry>
<ent_seq>1612810</ent_seq>
<k_ele>
<keb>帰る</keb>
<ke_pri>nf10</ke_pri>
</k_ele>
<r_ele>
<reb>かえる</reb>
</r_ele>
<sense>
<pos>&v5r;</pos>
<pos>&vi;</pos>
<gloss>to return</gloss>
</sense>
</entry>
<entry>
<ent_seq>1225170</ent_seq>
<r_ele>
<reb>ありがとう</reb>
</r_ele>
<sense>
<pos>&exp;</pos>
<misc>&uk;</misc>
<gloss>thank you</gloss>
</sense>
</entry>
<entry>
<ent_seq>9999999</ent_seq>
<r_ele>
<reb>ゐる</reb>
<re_inf>&ok;</re_inf>
</r_ele>
<sense>
<pos>&n;</pos>
<gloss>obsolete</gloss>
</sense>
</entry>
</JMdict>
"""


@pytest.fixture
def jmdict_path(tmp_path):
    """A tiny JMdict file with entity-encoded pos and misc codes."""
    path = tmp_path / "JMdict_e.xml"
    path.write_text(JMDICT_SAMPLE, encoding="utf-8")
    return path


@pytest.fixture
def make_word():
    """Factory for WordEntry records with sensible defaults."""

    def _make(
        writings=(),
        readings=("たべる",),
        glosses=("to eat",),
        pos=PartOfSpeech.OTHER,
        conj=ConjugationClass.NONE,
        usually_kana=False,
        tags=(),
        priority=10,
    ):
        return WordEntry(
            writings=tuple(writings),
            readings=tuple(readings),
            glosses=tuple(glosses),
            pos=pos,
            conj=conj,
            usually_kana=usually_kana,
            tags=frozenset(tags),
            priority=priority,
        )

    return _make


@pytest.fixture
def taberu(make_word):
    return make_word(
        writings=("食べる",),
        readings=("たべる",),
        glosses=("to eat", "to live on"),
        pos=PartOfSpeech.VERB,
        conj=ConjugationClass.ICHIDAN_VERB,
        tags=("v1", "vt"),
        priority=10,
    )
