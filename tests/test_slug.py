"""
Tests for transliteration and slug generation.
"""

import hashlib
import re

import pytest

from articlelingo.i18n.slug import MAX_SLUG_LENGTH, SlugService
from articlelingo.i18n.transliteration import (
    ArabicTransliterator,
    ChineseTransliterator,
    DevanagariTransliterator,
    TableTransliterator,
    CYRILLIC_TABLE,
    PINYIN_DICTIONARY,
    get_transliterator,
)

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@pytest.fixture
def slugs():
    return SlugService()


def sha1_prefix(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()[:8]


# =============================================================================
# Transliterators
# =============================================================================


class TestCyrillic:
    def test_lowercase(self):
        assert TableTransliterator("cyrillic", CYRILLIC_TABLE).transliterate("щука") == "schuka"

    def test_uppercase_derived(self):
        assert get_transliterator("cyrillic").transliterate("Жизнь") == "Zhizn"

    def test_ukrainian_letters(self):
        assert get_transliterator("cyrillic").transliterate("Київ") == "Kiyiv"


class TestArabic:
    def test_letters(self):
        assert ArabicTransliterator().transliterate("مرحبا") == "mrhba"

    def test_tatweel_stripped(self):
        assert ArabicTransliterator().transliterate("مـرحبا") == "mrhba"

    def test_digits(self):
        assert ArabicTransliterator().transliterate("٢٠٢٤") == "2024"


class TestDevanagari:
    def test_virama_and_matra(self):
        assert DevanagariTransliterator().transliterate("नमस्ते") == "namaste"

    def test_final_schwa_dropped(self):
        assert DevanagariTransliterator().transliterate("भारत") == "bhaarat"

    def test_single_consonant_word_keeps_vowel(self):
        assert DevanagariTransliterator().transliterate("क") == "ka"

    def test_independent_vowel_and_digits(self):
        assert DevanagariTransliterator().transliterate("आ २") == "aa 2"


class TestChinese:
    def test_longest_match_compound(self):
        assert ChineseTransliterator().transliterate("中国人") == "zhongguo ren"

    def test_compounds(self):
        assert ChineseTransliterator().transliterate("中国新闻") == "zhongguo xinwen"

    def test_unmapped_run_becomes_hash_token(self):
        assert ChineseTransliterator().transliterate("龘䶮") == "x" + sha1_prefix("龘䶮")

    def test_latin_passthrough(self):
        assert ChineseTransliterator().transliterate("iPhone 中国") == "iPhone zhongguo"

    def test_fallback_is_deterministic(self):
        translit = ChineseTransliterator()
        assert translit.fallback_token("龘") == translit.fallback_token("龘")
        assert translit.fallback_token("龘") != translit.fallback_token("䶮")

    def test_custom_dictionary_isolated(self):
        custom = ChineseTransliterator({"龘": "da"})
        default = ChineseTransliterator()
        default.dictionary["龘"] = "long"

        assert custom.transliterate("龘") == "da"
        assert "龘" not in PINYIN_DICTIONARY
        assert "龘" not in ChineseTransliterator().dictionary


# =============================================================================
# SlugService
# =============================================================================


class TestGenerateSlug:
    def test_russian(self, slugs):
        assert slugs.generate_slug("Новости компании", "ru") == "novosti-kompanii"

    def test_french_accents(self, slugs):
        assert slugs.generate_slug("Élection présidentielle à Paris", "fr") == "election-presidentielle-a-paris"

    def test_german_sharp_s(self, slugs):
        assert slugs.generate_slug("Große Straße", "de") == "grosse-strasse"

    def test_chinese(self, slugs):
        assert slugs.generate_slug("中国移民签证", "zh") == "zhongguo-yimin-qianzheng"

    def test_arabic(self, slugs):
        assert slugs.generate_slug("مرحبا بكم", "ar") == "mrhba-bkm"

    def test_hindi(self, slugs):
        assert slugs.generate_slug("नमस्ते भारत", "hi") == "namaste-bhaarat"

    def test_punctuation_collapsed(self, slugs):
        assert slugs.generate_slug("  Hello --- World!!  ", "en") == "hello-world"

    def test_empty_result_falls_back_to_hash(self, slugs):
        assert slugs.generate_slug("!!!", "en") == f"en-{sha1_prefix('!!!')}"
        assert slugs.generate_slug("", "de") == f"de-{sha1_prefix('')}"

    def test_deterministic(self, slugs):
        title = "Visa de travail : 10 conseils pour réussir"
        assert slugs.generate_slug(title, "fr") == slugs.generate_slug(title, "fr")
        assert SlugService().generate_slug(title, "fr") == slugs.generate_slug(title, "fr")

    @pytest.mark.parametrize(
        "title,language",
        [
            ("Новости компании", "ru"),
            ("中国 龘 工作", "zh"),
            ("مرحبا", "ar"),
            ("नमस्ते", "hi"),
            ("Ça va ? Très bien !", "fr"),
            ("***", "es"),
        ],
    )
    def test_shape(self, slugs, title, language):
        slug = slugs.generate_slug(title, language)
        assert SLUG_RE.match(slug)
        assert len(slug) <= MAX_SLUG_LENGTH

    def test_capped_at_word_boundary(self, slugs):
        slug = slugs.generate_slug(" ".join(["abcd"] * 41), "en")
        assert slug == "-".join(["abcd"] * 40)

    def test_cut_exactly_at_hyphen(self, slugs):
        # 200th character is the end of a word
        title = " ".join(["a" * 99, "b" * 100, "c" * 10])
        assert slugs.generate_slug(title, "en") == f"{'a' * 99}-{'b' * 100}"

    def test_single_long_word_hard_cut(self, slugs):
        assert slugs.generate_slug("x" * 250, "en") == "x" * 200


class TestSlugHelpers:
    def test_needs_transliteration(self, slugs):
        assert slugs.needs_transliteration("Привет")
        assert slugs.needs_transliteration("中文")
        assert not slugs.needs_transliteration("Hello café")

    def test_detect_script(self, slugs):
        assert slugs.detect_script("नमस्ते") == "devanagari"

    def test_transliterate_unknown_script_passthrough(self, slugs):
        assert slugs.transliterate("hello", "latin") == "hello"
