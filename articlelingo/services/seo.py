"""
SEO enrichment of translated artifacts.

Runs after an artifact is persisted and fills its SeoMetadata: meta title,
meta description, canonical URL and schema.org JSON-LD (Article,
BreadcrumbList and FAQPage).
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Any

from articlelingo.config import Settings, get_settings
from articlelingo.core.models import SeoMetadata, SourceContent, TranslatedArtifact
from articlelingo.i18n.chunking import count_words, strip_tags
from articlelingo.i18n.prompts import META_DESCRIPTION_MAX_CHARS, META_TITLE_MAX_CHARS

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

HOME_LABELS: dict[str, str] = {
    "fr": "Accueil",
    "en": "Home",
    "de": "Startseite",
    "es": "Inicio",
    "pt": "In\u00edcio",
    "ru": "\u0413\u043b\u0430\u0432\u043d\u0430\u044f",
    "zh": "\u9996\u9875",
    "ar": "\u0627\u0644\u0631\u0626\u064a\u0633\u064a\u0629",
    "hi": "\u0939\u094b\u092e",
}


def truncate_at_word(text: str, max_length: int) -> str:
    """Plain-text version of text, cut at a word boundary with '...' if too long."""
    text = _WHITESPACE_RE.sub(" ", strip_tags(text)).strip()
    if len(text) <= max_length:
        return text

    cut = text[:max_length - 3]
    if " " in cut:
        cut = cut[:cut.rindex(" ")]
    return cut.rstrip() + "..."


class SeoEnricher(ABC):
    """Derives SEO metadata for a freshly created artifact."""

    @abstractmethod
    async def enrich(self, artifact: TranslatedArtifact, content: SourceContent) -> SeoMetadata:
        pass


class MetaSeoEnricher(SeoEnricher):
    """Meta tags, canonical URL and Article/BreadcrumbList/FAQPage JSON-LD."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    async def enrich(self, artifact: TranslatedArtifact, content: SourceContent) -> SeoMetadata:
        url = self.canonical_url(artifact.slug, artifact.language.value)
        seo = SeoMetadata(
            meta_title=self.meta_title(artifact.title),
            meta_description=self.meta_description(artifact.excerpt or artifact.body_html),
            canonical_url=url,
            json_ld=self.json_ld(artifact, url),
        )
        logger.debug(f"SEO metadata built for {artifact.content_id}/{artifact.language.value}")
        return seo

    def meta_title(self, title: str) -> str:
        return truncate_at_word(title, META_TITLE_MAX_CHARS)

    def meta_description(self, text: str) -> str:
        return truncate_at_word(text, META_DESCRIPTION_MAX_CHARS)

    def home_url(self, language: str) -> str:
        base = self.settings.site_base_url.rstrip("/")
        if language == self.settings.default_language:
            return base
        return f"{base}/{language}"

    def canonical_url(self, slug: str, language: str) -> str:
        return f"{self.home_url(language)}/articles/{slug}"

    def breadcrumb(self, artifact: TranslatedArtifact, url: str) -> dict[str, Any]:
        language = artifact.language.value
        trail = [
            (HOME_LABELS.get(language, "Home"), self.home_url(language)),
            (artifact.title, url),
        ]
        return {
            "@type": "BreadcrumbList",
            "itemListElement": [
                {"@type": "ListItem", "position": position, "name": name, "item": item}
                for position, (name, item) in enumerate(trail, start=1)
            ],
        }

    def json_ld(self, artifact: TranslatedArtifact, url: str) -> dict[str, Any]:
        article: dict[str, Any] = {
            "@type": "Article",
            "headline": artifact.title,
            "description": self.meta_description(artifact.excerpt),
            "url": url,
            "mainEntityOfPage": {"@type": "WebPage", "@id": url},
            "inLanguage": artifact.language.value,
            "dateCreated": artifact.created_at.isoformat(),
        }
        words = count_words(artifact.body_html)
        if words:
            article["wordCount"] = words

        graph = [article, self.breadcrumb(artifact, url)]
        if artifact.faqs:
            graph.append({
                "@type": "FAQPage",
                "mainEntity": [
                    {
                        "@type": "Question",
                        "name": faq.question,
                        "acceptedAnswer": {"@type": "Answer", "text": faq.answer},
                    }
                    for faq in sorted(artifact.faqs, key=lambda f: f.order)
                ],
            })
        return {"@context": "https://schema.org", "@graph": graph}
