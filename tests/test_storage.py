"""
Tests for the in-memory storage implementations.
"""

import pytest

from articlelingo.core.errors import DuplicateTranslationError
from articlelingo.core.models import SeoMetadata, SourceContent, TranslatedArtifact
from articlelingo.i18n.languages import Language
from articlelingo.storage.local import (
    InMemoryCacheStorage,
    InMemoryContentStore,
    InMemoryCostLedger,
    create_local_storage,
)


def artifact(language: Language = Language.EN, content_id: str = "c1") -> TranslatedArtifact:
    return TranslatedArtifact(content_id=content_id, language=language, title="Title", slug="title")


class TestCacheStorage:
    @pytest.mark.asyncio
    async def test_set_get_delete(self):
        cache = InMemoryCacheStorage()
        await cache.set("k", "v", ttl=60)

        assert await cache.get("k") == "v"
        assert await cache.exists("k")
        assert await cache.delete("k") is True
        assert await cache.get("k") is None
        assert await cache.delete("k") is False

    @pytest.mark.asyncio
    async def test_expired_entry_dropped(self):
        cache = InMemoryCacheStorage()
        await cache.set("k", "v", ttl=60)
        cache._cache["k"] = ("v", 1.0)  # expired long ago

        assert await cache.get("k") is None
        assert not await cache.exists("k")


class TestCostLedger:
    @pytest.mark.asyncio
    async def test_totals_by_operation(self):
        ledger = InMemoryCostLedger()
        await ledger.record("translation", 0.001, {"to": "en"})
        await ledger.record("translation", 0.002)
        await ledger.record("image", 0.04)

        assert len(await ledger.records()) == 3
        assert len(await ledger.records("translation")) == 2
        assert await ledger.total("translation") == pytest.approx(0.003)
        assert await ledger.total() == pytest.approx(0.043)


class TestContentStore:
    @pytest.mark.asyncio
    async def test_one_artifact_per_language(self):
        store = InMemoryContentStore()
        await store.create_artifact(artifact(Language.EN))
        await store.create_artifact(artifact(Language.DE))

        with pytest.raises(DuplicateTranslationError):
            await store.create_artifact(artifact(Language.EN))

        assert len(await store.list_artifacts("c1")) == 2

    @pytest.mark.asyncio
    async def test_recreate_after_delete(self):
        store = InMemoryContentStore()
        await store.create_artifact(artifact())

        assert await store.delete_artifact("c1", "en") is True
        await store.create_artifact(artifact())
        assert await store.get_artifact("c1", Language.EN) is not None

    @pytest.mark.asyncio
    async def test_returned_artifacts_are_copies(self):
        store = InMemoryContentStore()
        await store.create_artifact(artifact())

        fetched = await store.get_artifact("c1", "en")
        fetched.title = "Changed"

        assert (await store.get_artifact("c1", "en")).title == "Title"

    @pytest.mark.asyncio
    async def test_update_seo(self):
        store = InMemoryContentStore()
        await store.create_artifact(artifact())
        seo = SeoMetadata(meta_title="Title", canonical_url="https://example.com/en/articles/title")

        assert await store.update_artifact_seo("c1", "en", seo) is True
        assert (await store.get_artifact("c1", "en")).seo.meta_title == "Title"
        assert await store.update_artifact_seo("c1", "zh", seo) is False

    @pytest.mark.asyncio
    async def test_contents(self):
        store = InMemoryContentStore()
        content = SourceContent(id="c1", source_language=Language.FR, title="Titre")
        await store.save_content(content)

        assert await store.get_content("c1") == content
        assert await store.list_contents() == [content]
        assert await store.get_content("missing") is None

    @pytest.mark.asyncio
    async def test_list_all_artifacts(self):
        store = InMemoryContentStore()
        await store.create_artifact(artifact(Language.EN, "c1"))
        await store.create_artifact(artifact(Language.EN, "c2"))

        assert len(await store.list_all_artifacts()) == 2
        assert len(await store.list_artifacts("c2")) == 1


def test_create_local_storage():
    storage = create_local_storage()
    assert isinstance(storage.content, InMemoryContentStore)
    assert isinstance(storage.cache, InMemoryCacheStorage)
    assert isinstance(storage.costs, InMemoryCostLedger)
