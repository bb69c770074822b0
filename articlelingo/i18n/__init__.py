"""
Internationalization - languages, encoding, slugs and prompt building.

Usage:
    from articlelingo.i18n import EncodingValidator, SlugService, split_into_chunks

    clean = EncodingValidator().sanitize_content(raw)
    slug = SlugService().generate_slug("Новости компании", "ru")  # novosti-kompanii
    chunks = split_into_chunks(body_html, max_words=1500)
"""

from articlelingo.i18n.languages import (
    Language,
    SUPPORTED_LANGUAGES,
    RTL_LANGUAGES,
    get_language_name,
    normalize_language_code,
    get_language_by_code,
    is_supported,
    require_language,
    is_rtl,
)
from articlelingo.i18n.encoding import EncodingValidator
from articlelingo.i18n.transliteration import (
    Transliterator,
    TableTransliterator,
    ArabicTransliterator,
    DevanagariTransliterator,
    ChineseTransliterator,
    get_transliterator,
)
from articlelingo.i18n.slug import SlugService
from articlelingo.i18n.chunking import split_into_chunks, count_words, strip_tags
from articlelingo.i18n.prompts import FieldContext, build_system_prompt, build_user_prompt

__all__ = [
    # Languages
    "Language",
    "SUPPORTED_LANGUAGES",
    "RTL_LANGUAGES",
    "get_language_name",
    "normalize_language_code",
    "get_language_by_code",
    "is_supported",
    "require_language",
    "is_rtl",
    # Encoding
    "EncodingValidator",
    # Transliteration / slugs
    "Transliterator",
    "TableTransliterator",
    "ArabicTransliterator",
    "DevanagariTransliterator",
    "ChineseTransliterator",
    "get_transliterator",
    "SlugService",
    # Chunking / prompts
    "split_into_chunks",
    "count_words",
    "strip_tags",
    "FieldContext",
    "build_system_prompt",
    "build_user_prompt",
]
