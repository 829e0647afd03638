from kobo_jadict.characters import Script
from kobo_jadict.constants import ConjugationClass, LabelStyle, PartOfSpeech
from kobo_jadict.raw_types import KanjiEntry, NameEntry, NativeEntry, TermEntry
from kobo_jadict.render import (
    AUX_BLOCK_CLASS,
    WORD_TYPE_START,
    generate_definition_text,
    generate_header_text,
    generate_kanji_text,
    generate_name_text,
    render_pitch_accents,
    word_type_label,
)
from kobo_jadict.settings import BuildOptions


def test_header_for_transitive_ichidan_verb(taberu):
    header = generate_header_text(taberu, "タベル", (0, 2), BuildOptions())
    assert header.startswith("たべる [0][2] &nbsp;&nbsp;&mdash; 【食べる】")
    assert "verb,&nbsp;ichidan,&nbsp;transitive" in header


def test_header_without_accents_has_no_markers(taberu):
    header = generate_header_text(taberu, "タベル", (), BuildOptions())
    assert header.startswith("たべる &nbsp;&nbsp;&mdash; ")
    assert "[" not in header


def test_header_in_katakana_with_move_terms(taberu):
    options = BuildOptions.from_flags(use_katakana=True, use_move_terms=True)
    assert options.display_script is Script.KATAKANA
    assert options.label_style is LabelStyle.MOVEMENT

    header = generate_header_text(taberu, "たべる", (), options)
    assert header.startswith("タベル")
    assert "verb,&nbsp;ichidan,&nbsp;other-move" in header


def test_header_lists_every_writing(make_word):
    entry = make_word(writings=("食べる", "喰べる"), readings=("たべる",))
    header = generate_header_text(entry, "タベル", (), BuildOptions())
    assert "【食べる／喰べる】" in header


def test_usually_kana_header_shows_reading_only(make_word):
    entry = make_word(writings=("有難う",), readings=("ありがとう",), usually_kana=True)
    header = generate_header_text(entry, "アリガトウ", (), BuildOptions())
    assert "【ありがとう】" in header
    assert "有難う" not in header


def test_transitivity_needs_exactly_one_tag(make_word):
    options = BuildOptions()
    both = make_word(pos=PartOfSpeech.VERB, conj=ConjugationClass.GODAN_VERB_RU, tags=("vt", "vi"))
    neither = make_word(pos=PartOfSpeech.VERB, conj=ConjugationClass.GODAN_VERB_RU)
    intransitive = make_word(pos=PartOfSpeech.VERB, conj=ConjugationClass.GODAN_VERB_RU, tags=("vi",))

    assert word_type_label(both, options) == "verb,&nbsp;godan"
    assert word_type_label(neither, options) == "verb,&nbsp;godan"
    assert word_type_label(intransitive, options) == "verb,&nbsp;godan,&nbsp;intransitive"


def test_irregular_verb_family(make_word):
    entry = make_word(pos=PartOfSpeech.VERB, conj=ConjugationClass.KURU_VERB)
    assert word_type_label(entry, BuildOptions()) == "verb,&nbsp;irregular"


def test_adjective_and_expression_labels(make_word):
    options = BuildOptions()
    i_adj = make_word(pos=PartOfSpeech.ADJECTIVE, conj=ConjugationClass.I_ADJECTIVE)
    ii = make_word(pos=PartOfSpeech.ADJECTIVE, conj=ConjugationClass.IRREGULAR_I_ADJECTIVE)
    na_adj = make_word(pos=PartOfSpeech.ADJECTIVE)
    exp = make_word(pos=PartOfSpeech.EXPRESSION)

    assert word_type_label(i_adj, options) == "i-adjective"
    assert word_type_label(ii, options) == "i-adjective,&nbsp;irregular"
    assert word_type_label(na_adj, options) == "adjective"
    assert word_type_label(exp, options) == "expression"


def test_other_words_get_no_type_span(make_word):
    entry = make_word(writings=("本",), readings=("ほん",))
    header = generate_header_text(entry, "ホン", (), BuildOptions())
    assert WORD_TYPE_START not in header


def test_render_pitch_accents():
    assert render_pitch_accents(()) == ""
    assert render_pitch_accents((1,)) == " [1]"
    assert render_pitch_accents((0, 2)) == " [0][2]"


def test_definition_without_auxiliary_sources(taberu):
    text = generate_definition_text(taberu)
    assert "<b>1.</b> to eat<br/>" in text
    assert "<b>2.</b> to live on<br/>" in text
    assert text.index("to eat") < text.index("to live on")
    assert AUX_BLOCK_CLASS not in text


def test_definition_escapes_glosses(make_word):
    entry = make_word(glosses=("a < b & c",))
    assert "a &lt; b &amp; c" in generate_definition_text(entry)


def test_definition_appends_term_blocks_in_order(taberu):
    terms = [
        TermEntry("食べる", "たべる", ("to eat", "to consume"), "Dict A"),
        TermEntry("食べる", "たべる", ("essen",), "Dict B"),
    ]
    text = generate_definition_text(taberu, terms)
    assert text.count(AUX_BLOCK_CLASS) == 2
    assert "<b>Dict A</b><ol><li>to eat</li><li>to consume</li></ol>" in text
    assert text.index("Dict A") < text.index("Dict B")


def test_definition_uses_only_first_native_entry(taberu):
    natives = [
        NativeEntry("食べる", "たべる", "<p>first</p>"),
        NativeEntry("食べる", "たべる", "<p>second</p>"),
    ]
    text = generate_definition_text(taberu, (), natives)
    assert text.endswith("<p>first</p>")
    assert "second" not in text


def test_name_text():
    name = NameEntry("田中", "たなか", ("Tanaka",), "Names", ("surname", "person"))
    text = generate_name_text(name)
    assert "たなか &nbsp;&nbsp;&mdash; 【田中】" in text
    assert "name,&nbsp;surname,&nbsp;person" in text
    assert "<ul><li>Tanaka</li></ul>" in text


def test_name_text_without_reading_or_glosses():
    text = generate_name_text(NameEntry("田中", "", (), "Names"))
    assert "&mdash;" not in text
    assert "【田中】" in text
    assert "<ul>" not in text


def test_kanji_text():
    text = generate_kanji_text([KanjiEntry("食", ("eat", "food"), ("ショク", "ジキ"), ("く.う",))])
    assert '<span style="font-size: 2em;">食</span> eat, food' in text
    assert "On: ショク/ジキ" in text
    assert "Kun: く.う" in text


def test_kanji_text_skips_empty_reading_lines():
    text = generate_kanji_text([KanjiEntry("々", ("repetition",))])
    assert "On:" not in text
    assert "Kun:" not in text


def test_header_escapes_headwords(make_word):
    entry = make_word(writings=("A&B<1>",), readings=("えーびー",))
    header = generate_header_text(entry, "エービー", (), BuildOptions())
    assert "【A&amp;B&lt;1&gt;】" in header


def test_kanji_text_escapes_readings():
    text = generate_kanji_text([KanjiEntry("食", ("eat",), ("<ショク>",), ("く.う&",))])
    assert "On: &lt;ショク&gt;" in text
    assert "Kun: く.う&amp;" in text
