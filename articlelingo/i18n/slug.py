"""
URL slug generation with script-aware transliteration.

Titles in Cyrillic, Chinese, Arabic or Devanagari are first transliterated
to Latin characters, then reduced to a lowercase ASCII slug. Slug generation
is a pure function of (title, language).
"""

from __future__ import annotations

import logging
import re
import unicodedata

from articlelingo.core.utils import content_hash
from articlelingo.i18n.encoding import EncodingValidator
from articlelingo.i18n.languages import Language, normalize_language_code, transliteration_script
from articlelingo.i18n.transliteration import get_transliterator

logger = logging.getLogger(__name__)


MAX_SLUG_LENGTH = 200

# Latin letters NFKD leaves undecomposed
_LATIN_EXTRAS = str.maketrans({
    "ß": "ss", "ẞ": "SS",
    "æ": "ae", "Æ": "AE",
    "œ": "oe", "Œ": "OE",
    "ø": "o", "Ø": "O",
    "đ": "d", "Đ": "D",
    "ł": "l", "Ł": "L",
    "þ": "th", "Þ": "TH",
})

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_HYPHENS_RE = re.compile(r"-{2,}")


class SlugService:
    """Builds SEO-friendly slugs for translated titles."""

    def __init__(self, validator: EncodingValidator | None = None):
        self.validator = validator or EncodingValidator()

    def generate_slug(self, title: str, language: str | Language) -> str:
        """
        Slug for a title in the given language.

        Transliterates non-Latin scripts, slugifies and caps the result at
        200 characters. Falls back to ``{language}-{sha1(title)[:8]}`` when
        nothing survives.
        """
        lang = normalize_language_code(language)
        script = transliteration_script(lang)

        text = title
        if script is not None:
            text = self.transliterate(text, script)

        slug = self.clean(self.slugify(text))

        if not slug:
            fallback = f"{lang}-{content_hash(title, algorithm='sha1')[:8]}"
            logger.warning(f"Empty slug for {lang} title, using {fallback}")
            return fallback

        return slug

    def transliterate(self, text: str, script: str) -> str:
        """Transliterate text from the given script; unknown scripts pass through."""
        transliterator = get_transliterator(script)
        if transliterator is None:
            return text
        return transliterator.transliterate(text)

    def detect_script(self, text: str) -> str:
        return self.validator.detect_script(text)

    def needs_transliteration(self, text: str) -> bool:
        """Whether text contains a non-Latin script with a transliteration table."""
        return get_transliterator(self.detect_script(text)) is not None

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def slugify(text: str) -> str:
        """NFKD to ASCII, lowercase, non-alphanumeric runs to hyphens."""
        text = unicodedata.normalize("NFKD", text.translate(_LATIN_EXTRAS))
        text = text.encode("ascii", "ignore").decode("ascii").lower()
        return _NON_ALNUM_RE.sub("-", text)

    @staticmethod
    def clean(slug: str, max_length: int = MAX_SLUG_LENGTH) -> str:
        """Collapse and trim hyphens, then cap length at a hyphen boundary."""
        slug = _HYPHENS_RE.sub("-", slug).strip("-")
        if len(slug) <= max_length:
            return slug

        cut = slug[:max_length]
        if slug[max_length] != "-" and "-" in cut:
            # Drop the partial trailing word
            cut = cut.rsplit("-", 1)[0]
        return cut.strip("-")
