from kobo_jadict.characters import is_kana
from kobo_jadict.conjugation import (
    INFLECTION_RULES,
    PASSTHROUGH,
    InflectionRule,
    base_forms,
    generate_lookup_keys,
    inflect,
    rules_for,
)
from kobo_jadict.constants import ConjugationClass, PartOfSpeech
from kobo_jadict.raw_types import LookupKey


def surfaces(keys):
    return {k.surface for k in keys}


def test_ichidan_expansion(taberu):
    keys = surfaces(generate_lookup_keys(taberu))
    for form in ("食べる", "食べ", "食べられ", "食べさせ", "食べろ", "食べて", "食べた"):
        assert form in keys
    for form in ("たべる", "タベル", "たべ", "タベ", "たべられ", "タベラレ", "たべた"):
        assert form in keys


def test_uninflected_class_yields_only_base_forms(make_word):
    entry = make_word(writings=("本",), readings=("ほん", "もと"), priority=5)
    assert generate_lookup_keys(entry) == {
        LookupKey("本", 5),
        LookupKey("ほん", 5),
        LookupKey("ホン", 5),
    }


def test_katakana_words_are_indexed_in_hiragana_too(make_word):
    entry = make_word(readings=("テレビ",), priority=4)
    assert generate_lookup_keys(entry) == {LookupKey("テレビ", 4), LookupKey("てれび", 4)}


def test_usually_kana_words_rank_kana_keys_first(make_word):
    entry = make_word(
        writings=("為る",),
        readings=("する",),
        pos=PartOfSpeech.VERB,
        conj=ConjugationClass.SURU_VERB,
        usually_kana=True,
        priority=17,
    )
    keys = generate_lookup_keys(entry)

    kana = [k for k in keys if is_kana(k.surface)]
    other = [k for k in keys if not is_kana(k.surface)]
    assert kana and other
    assert all(k.priority == 17 // 8 for k in kana)
    assert all(k.priority == 17 for k in other)
    assert max(k.priority for k in kana) <= min(k.priority for k in other)
    assert {"しな", "させ", "でき", "します", "シマス"} <= surfaces(keys)


def test_kana_priority_not_divided_unless_usually_kana(taberu):
    keys = generate_lookup_keys(taberu)
    assert all(k.priority == taberu.priority for k in keys)


def test_base_forms_use_only_first_reading_for_kanji_words(make_word):
    entry = make_word(writings=("人",), readings=("ひと", "にん"))
    assert base_forms(entry) == ["ひと", "人"]


def test_base_forms_use_every_reading_for_usually_kana_words(make_word):
    entry = make_word(writings=("此れ",), readings=("これ", "こり"), usually_kana=True)
    assert base_forms(entry) == ["こり", "これ", "此れ"]


def test_expansion_is_independent_of_writing_order(make_word):
    a = make_word(writings=("食べる", "喰べる"), conj=ConjugationClass.ICHIDAN_VERB)
    b = make_word(writings=("喰べる", "食べる"), conj=ConjugationClass.ICHIDAN_VERB)
    assert generate_lookup_keys(a) == generate_lookup_keys(b)


def test_godan_rows(make_word):
    cases = [
        (ConjugationClass.GODAN_VERB_RU, "帰る", {"帰ら", "帰り", "帰れ", "帰ろ", "帰って", "帰った"}),
        (ConjugationClass.GODAN_VERB_KU, "書く", {"書か", "書き", "書け", "書こ", "書いて", "書いた"}),
        (ConjugationClass.GODAN_VERB_GU, "泳ぐ", {"泳が", "泳いで", "泳いだ"}),
        (ConjugationClass.GODAN_VERB_U, "買う", {"買わ", "買い", "買って", "買った"}),
        (ConjugationClass.GODAN_VERB_TSU, "待つ", {"待た", "待ち", "待って"}),
        (ConjugationClass.GODAN_VERB_NU, "死ぬ", {"死な", "死んで", "死んだ"}),
        (ConjugationClass.GODAN_VERB_BU, "遊ぶ", {"遊ば", "遊んで"}),
        (ConjugationClass.GODAN_VERB_MU, "読む", {"読ま", "読んで", "読んだ"}),
        (ConjugationClass.GODAN_VERB_SU, "話す", {"話さ", "話し", "話して", "話した"}),
        (ConjugationClass.IKU_VERB, "行く", {"行か", "行き", "行って", "行った"}),
    ]
    for conj, writing, expected in cases:
        entry = make_word(writings=(writing,), readings=("よみ",), conj=conj)
        assert expected <= surfaces(generate_lookup_keys(entry)), conj


def test_kuru_uses_both_spellings(make_word):
    entry = make_word(
        writings=("来る",),
        readings=("くる",),
        conj=ConjugationClass.KURU_VERB,
    )
    keys = surfaces(generate_lookup_keys(entry))
    assert {"来ない", "来ました", "こない", "きました", "コナイ"} <= keys
    assert len(INFLECTION_RULES[ConjugationClass.KURU_VERB]) == 2


def test_i_adjective(make_word):
    entry = make_word(writings=("高い",), readings=("たかい",), conj=ConjugationClass.I_ADJECTIVE)
    keys = surfaces(generate_lookup_keys(entry))
    assert {"高い", "高", "高く", "高け", "高かった", "高かって"} <= keys


def test_suffix_mismatch_keeps_only_base_form():
    rule = InflectionRule("う", ("わ", "い"))
    assert inflect("食べる", rule) == ["食べる"]
    assert inflect("う", InflectionRule("うう", ("a",))) == ["う"]


def test_empty_results_are_never_emitted():
    assert inflect("る", InflectionRule("る", ("", "た"))) == ["る", "た"]


def test_unlisted_classes_pass_through():
    assert rules_for(ConjugationClass.NONE) == (PASSTHROUGH,)
    assert rules_for(ConjugationClass.ARU_VERB) == (PASSTHROUGH,)
    assert inflect("ある", PASSTHROUGH) == ["ある"]
