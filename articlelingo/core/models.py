"""
Core data models for the translation pipeline.

SourceContent is owned by the editorial workflow and only read here.
TranslatedArtifact is produced by the orchestrator, one per
(content, target language) pair.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from articlelingo.core.utils import generate_id, utc_now
from articlelingo.i18n.languages import Language


# =============================================================================
# Enums
# =============================================================================


class ArtifactStatus(str, Enum):
    """Lifecycle status of a translated artifact."""

    DRAFT = "draft"
    ACTIVE = "active"  # Content fields are immutable from here on
    FAILED = "failed"


# =============================================================================
# Source content
# =============================================================================


class FaqPair(BaseModel):
    """A question/answer pair attached to a content item."""

    question: str
    answer: str
    order: int = 0


class SourceContent(BaseModel):
    """
    An editorial content item in its source language.

    Immutable while it is being translated.
    """

    model_config = {"frozen": True}

    id: str = Field(default_factory=lambda: generate_id("content"))
    source_language: Language
    title: str
    excerpt: str = ""
    body_html: str = ""
    image_alt: str | None = None
    faqs: tuple[FaqPair, ...] = ()

    @property
    def ordered_faqs(self) -> list[FaqPair]:
        return sorted(self.faqs, key=lambda f: f.order)


# =============================================================================
# Translated artifact
# =============================================================================


class SeoMetadata(BaseModel):
    """Derived SEO fields, the only part of an active artifact that may change."""

    meta_title: str = ""
    meta_description: str = ""
    canonical_url: str = ""
    json_ld: dict[str, Any] = Field(default_factory=dict)


class TranslatedArtifact(BaseModel):
    """One language-specific translation of a SourceContent."""

    id: str = Field(default_factory=lambda: generate_id("tr"))
    content_id: str
    language: Language

    title: str
    slug: str
    excerpt: str = ""
    body_html: str = ""
    image_alt: str | None = None
    faqs: list[FaqPair] = Field(default_factory=list)

    status: ArtifactStatus = ArtifactStatus.DRAFT
    cost: float = 0.0
    seo: SeoMetadata | None = None

    created_at: datetime = Field(default_factory=utc_now)


# =============================================================================
# Cost accounting
# =============================================================================


class CostRecord(BaseModel):
    """A single cost entry appended for every external call. Never mutated."""

    model_config = {"frozen": True}

    operation: str
    amount: float
    metadata: dict[str, Any] = Field(default_factory=dict)
    recorded_at: datetime = Field(default_factory=utc_now)


# =============================================================================
# Batch results
# =============================================================================


class FailedLanguage(BaseModel):
    """A language that failed inside a batch."""

    language: str
    error: str
    code: str = "error"


class BatchResult(BaseModel):
    """Outcome of translating one content item into a set of languages."""

    content_id: str
    succeeded: list[str] = Field(default_factory=list)
    failed: list[FailedLanguage] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    total_cost: float = 0.0

    @property
    def failed_languages(self) -> list[str]:
        return [f.language for f in self.failed]

    @property
    def is_complete(self) -> bool:
        """No language failed."""
        return not self.failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "content_id": self.content_id,
            "succeeded": list(self.succeeded),
            "failed": [(f.language, f.error) for f in self.failed],
            "skipped": list(self.skipped),
            "total_cost": self.total_cost,
        }


class MultiBatchResult(BaseModel):
    """Outcome of translating several content items."""

    total_contents: int = 0
    completed: int = 0
    failed: int = 0
    total_translations: int = 0
    total_cost: float = 0.0
    results: dict[str, BatchResult] = Field(default_factory=dict)
