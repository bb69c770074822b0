"""
Local storage implementations for development and tests.

In-memory implementations that work without any external services.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from articlelingo.core.errors import DuplicateTranslationError
from articlelingo.core.models import CostRecord, SeoMetadata, SourceContent, TranslatedArtifact
from articlelingo.i18n.languages import normalize_language_code
from articlelingo.storage.base import (
    CacheStorage,
    ContentStore,
    CostLedger,
    StorageProvider,
)


# =============================================================================
# In-Memory Cache Storage
# =============================================================================


class InMemoryCacheStorage(CacheStorage):
    """In-memory cache for development."""

    def __init__(self):
        self._cache: dict[str, tuple[Any, float | None]] = {}

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        expires_at = None
        if ttl:
            expires_at = datetime.now(timezone.utc).timestamp() + ttl
        self._cache[key] = (value, expires_at)

    async def get(self, key: str) -> Any | None:
        if key not in self._cache:
            return None

        value, expires_at = self._cache[key]
        if expires_at and datetime.now(timezone.utc).timestamp() > expires_at:
            del self._cache[key]
            return None

        return value

    async def delete(self, key: str) -> bool:
        if key in self._cache:
            del self._cache[key]
            return True
        return False

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    def __len__(self) -> int:
        return len(self._cache)


# =============================================================================
# In-Memory Cost Ledger
# =============================================================================


class InMemoryCostLedger(CostLedger):
    """Append-only list of cost records."""

    def __init__(self):
        self._records: list[CostRecord] = []

    async def record(
        self,
        operation: str,
        amount: float,
        metadata: dict[str, Any] | None = None,
    ) -> CostRecord:
        entry = CostRecord(operation=operation, amount=amount, metadata=metadata or {})
        self._records.append(entry)
        return entry

    async def records(self, operation: str | None = None) -> list[CostRecord]:
        if operation is None:
            return list(self._records)
        return [r for r in self._records if r.operation == operation]

    async def total(self, operation: str | None = None) -> float:
        return round(sum(r.amount for r in await self.records(operation)), 6)


# =============================================================================
# In-Memory Content Store
# =============================================================================


class InMemoryContentStore(ContentStore):
    """
    Contents and artifacts kept in dicts.

    Artifacts are copied on the way in and out so callers cannot mutate
    stored content fields.
    """

    def __init__(self):
        self._contents: dict[str, SourceContent] = {}
        self._artifacts: dict[tuple[str, str], TranslatedArtifact] = {}

    async def get_content(self, content_id: str) -> SourceContent | None:
        return self._contents.get(content_id)

    async def save_content(self, content: SourceContent) -> None:
        self._contents[content.id] = content

    async def list_contents(self) -> list[SourceContent]:
        return list(self._contents.values())

    async def get_artifact(self, content_id: str, language: str) -> TranslatedArtifact | None:
        artifact = self._artifacts.get((content_id, normalize_language_code(language)))
        return artifact.model_copy(deep=True) if artifact else None

    async def create_artifact(self, artifact: TranslatedArtifact) -> TranslatedArtifact:
        key = (artifact.content_id, artifact.language.value)
        if key in self._artifacts:
            raise DuplicateTranslationError(artifact.content_id, artifact.language.value)
        self._artifacts[key] = artifact.model_copy(deep=True)
        return artifact

    async def delete_artifact(self, content_id: str, language: str) -> bool:
        key = (content_id, normalize_language_code(language))
        if key in self._artifacts:
            del self._artifacts[key]
            return True
        return False

    async def list_artifacts(self, content_id: str) -> list[TranslatedArtifact]:
        return [
            a.model_copy(deep=True)
            for (cid, _), a in self._artifacts.items()
            if cid == content_id
        ]

    async def list_all_artifacts(self) -> list[TranslatedArtifact]:
        return [a.model_copy(deep=True) for a in self._artifacts.values()]

    async def update_artifact_seo(self, content_id: str, language: str, seo: SeoMetadata) -> bool:
        key = (content_id, normalize_language_code(language))
        if key not in self._artifacts:
            return False
        self._artifacts[key] = self._artifacts[key].model_copy(update={"seo": seo.model_copy(deep=True)})
        return True


# =============================================================================
# Factory
# =============================================================================


def create_local_storage() -> StorageProvider:
    """Create a StorageProvider with in-memory implementations."""
    return StorageProvider(
        content=InMemoryContentStore(),
        cache=InMemoryCacheStorage(),
        costs=InMemoryCostLedger(),
    )
