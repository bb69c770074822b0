"""
Storage abstraction layer.

All persistence used by the translation pipeline goes through these
interfaces, so the in-memory implementations can be swapped for a
database, Redis or a billing service without touching the services.

Integration points:
- ContentStore → relational database (content + translation tables)
- CacheStorage → Redis
- CostLedger → append-only cost table
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from articlelingo.core.models import CostRecord, SeoMetadata, SourceContent, TranslatedArtifact


# =============================================================================
# Storage Interfaces
# =============================================================================


class CacheStorage(ABC):
    """
    Fast key-value cache for translation results.

    Production Implementation: Redis
    Local Implementation: In-memory dict
    """

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Set a value with optional TTL in seconds."""
        pass

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Get a value."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key."""
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if key exists."""
        pass


class CostLedger(ABC):
    """
    Append-only record of money spent on external calls.

    Records are never mutated once written.
    """

    @abstractmethod
    async def record(
        self,
        operation: str,
        amount: float,
        metadata: dict[str, Any] | None = None,
    ) -> CostRecord:
        """Append a cost entry."""
        pass

    @abstractmethod
    async def records(self, operation: str | None = None) -> list[CostRecord]:
        """All entries, optionally filtered by operation."""
        pass

    @abstractmethod
    async def total(self, operation: str | None = None) -> float:
        """Sum of recorded amounts, optionally filtered by operation."""
        pass


class ContentStore(ABC):
    """
    Source contents and their translated artifacts.

    At most one artifact exists per (content_id, language). Artifact content
    fields are immutable; only SEO metadata may be updated after creation.
    """

    @abstractmethod
    async def get_content(self, content_id: str) -> SourceContent | None:
        pass

    @abstractmethod
    async def save_content(self, content: SourceContent) -> None:
        pass

    @abstractmethod
    async def list_contents(self) -> list[SourceContent]:
        pass

    @abstractmethod
    async def get_artifact(self, content_id: str, language: str) -> TranslatedArtifact | None:
        """The artifact for a (content, language) pair, if any."""
        pass

    @abstractmethod
    async def create_artifact(self, artifact: TranslatedArtifact) -> TranslatedArtifact:
        """
        Persist a new artifact.

        Raises:
            DuplicateTranslationError: An artifact already exists for the pair.
        """
        pass

    @abstractmethod
    async def delete_artifact(self, content_id: str, language: str) -> bool:
        """Delete the artifact for a pair. Returns False if none existed."""
        pass

    @abstractmethod
    async def list_artifacts(self, content_id: str) -> list[TranslatedArtifact]:
        """Artifacts of one content item."""
        pass

    @abstractmethod
    async def list_all_artifacts(self) -> list[TranslatedArtifact]:
        pass

    @abstractmethod
    async def update_artifact_seo(self, content_id: str, language: str, seo: SeoMetadata) -> bool:
        """Replace the SEO metadata of an artifact. Returns False if missing."""
        pass


# =============================================================================
# Storage Provider (dependency injection container)
# =============================================================================


class StorageProvider(BaseModel):
    """
    Container for all storage backends.

    Initialize once at startup with appropriate implementations.
    Services receive this and use the interfaces without knowing
    the underlying implementation.
    """

    model_config = {"arbitrary_types_allowed": True}

    content: ContentStore
    cache: CacheStorage
    costs: CostLedger
