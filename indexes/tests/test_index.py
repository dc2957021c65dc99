"""
Tests for indexes/index.py — index build, caching and the single in-flight build.
"""

import asyncio

from tclogger import logger

import indexes.index as index_module

from indexes.index import SearchIndexHolder, build_documents
from sources.base import ContentSource, ContentSourceError, StaticContentSource
from sources.catalog import ContentCatalog, ContentPools
from documents.records import record_from_dict


class CountingSource(ContentSource):
    """Static source that counts fetches, tracks overlapping fetches and can
    fail the first N of them."""

    def __init__(
        self, kind: str, records: list[dict], fail_times: int = 0, delay: float = 0.01
    ):
        self.kind = kind
        self.records = [record_from_dict(kind, r) for r in records]
        self.fail_times = fail_times
        self.delay = delay
        self.fetch_count = 0
        self.active = 0
        self.max_active = 0

    async def fetch(self):
        self.fetch_count += 1
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.active -= 1
        if self.fetch_count <= self.fail_times:
            raise ContentSourceError(f"[{self.kind}] temporarily unavailable")
        return list(self.records)


def _make_catalog(source: ContentSource) -> ContentCatalog:
    return ContentCatalog(
        {
            "cars": StaticContentSource("cars", [{"slug": "gr86", "name": "GR86"}]),
            "guide": source,
        }
    )


def test_build_documents_groups_by_kind():
    logger.note("> Test: build_documents adapts pools in kind order")

    pools = ContentPools.from_records(
        {
            "news": [record_from_dict("news", {"id": "n1", "title": "N"})],
            "cars": [record_from_dict("cars", {"slug": "c1", "name": "C"})],
            "guide": [
                record_from_dict("guide", {"slug": "g1", "title": "G"}),
                record_from_dict("guide", {"slug": "g2", "status": "archived"}),
            ],
        }
    )
    docs = build_documents(pools)
    assert [(d.kind, d.slug) for d in docs] == [
        ("cars", "c1"),
        ("guide", "g1"),
        ("news", "n1"),
    ]

    logger.success("  PASSED")


def test_build_documents_caps_news(monkeypatch):
    logger.note("> Test: news contributes only the newest capped records")

    monkeypatch.setitem(index_module.KIND_INDEX_LIMITS, "news", 2)
    pools = ContentPools.from_records(
        {
            "news": [
                record_from_dict("news", {"id": f"n{i}", "publishedAt": f"2024-01-0{i}"})
                for i in range(1, 6)
            ]
        }
    )
    docs = build_documents(pools)
    assert [d.slug for d in docs] == ["n5", "n4"]

    logger.success("  PASSED")


def test_holder_caches_index():
    logger.note("> Test: holder builds once and caches")

    source = CountingSource("guide", [{"slug": "g1", "title": "Guide"}])
    holder = SearchIndexHolder(_make_catalog(source), verbose=True)
    assert holder.cached is None

    async def run():
        first = await holder.get()
        second = await holder.get()
        return first, second

    first, second = asyncio.run(run())
    assert first is second
    assert holder.cached is first
    assert len(first) == 2
    assert [d.slug for d in first.docs_of("guide")] == ["g1"]
    assert source.fetch_count == 1

    logger.success("  PASSED")


def test_holder_single_in_flight_build():
    logger.note("> Test: concurrent first calls share one build")

    source = CountingSource("guide", [{"slug": "g1"}])
    holder = SearchIndexHolder(_make_catalog(source))

    async def run():
        return await asyncio.gather(*(holder.get() for _ in range(8)))

    indexes = asyncio.run(run())
    assert source.fetch_count == 1
    assert all(index is indexes[0] for index in indexes)

    logger.success("  PASSED")


def test_holder_failure_not_cached():
    logger.note("> Test: failed build propagates and is retried next time")

    source = CountingSource("guide", [{"slug": "g1"}], fail_times=1)
    holder = SearchIndexHolder(_make_catalog(source))

    async def run():
        results = await asyncio.gather(
            holder.get(), holder.get(), return_exceptions=True
        )
        assert all(isinstance(r, ContentSourceError) for r in results), results
        assert holder.cached is None
        return await holder.get()

    index = asyncio.run(run())
    assert source.fetch_count == 2
    assert [d.slug for d in index.docs_of("guide")] == ["g1"]

    logger.success("  PASSED")


def test_holder_reset_rebuilds():
    logger.note("> Test: reset forgets the cached index")

    source = CountingSource("guide", [{"slug": "g1"}])
    holder = SearchIndexHolder(_make_catalog(source))

    async def run():
        first = await holder.get()
        holder.reset()
        assert holder.cached is None
        second = await holder.get()
        return first, second

    first, second = asyncio.run(run())
    assert first is not second
    assert source.fetch_count == 2

    logger.success("  PASSED")


def test_holder_reset_during_build_never_overlaps():
    logger.note("> Test: reset during a build waits for it before rebuilding")

    source = CountingSource("guide", [{"slug": "g1"}], delay=0.05)
    holder = SearchIndexHolder(_make_catalog(source))

    async def run():
        first_task = asyncio.ensure_future(holder.get())
        await asyncio.sleep(0.01)
        holder.reset()
        second_task = asyncio.ensure_future(holder.get())
        return await asyncio.gather(first_task, second_task)

    first, second = asyncio.run(run())
    assert source.max_active == 1
    assert source.fetch_count == 2
    assert first is not second
    assert holder.cached is second

    logger.success("  PASSED")


def test_holder_waiter_timeout_keeps_build():
    logger.note("> Test: a caller timing out does not cancel the shared build")

    source = CountingSource("guide", [{"slug": "g1"}], delay=0.05)
    holder = SearchIndexHolder(_make_catalog(source))

    async def run():
        try:
            await asyncio.wait_for(holder.get(), timeout=0.01)
        except asyncio.TimeoutError:
            logger.mesg("  * first caller timed out")
        else:
            raise AssertionError("Expected asyncio.TimeoutError")
        return await holder.get()

    index = asyncio.run(run())
    assert source.fetch_count == 1
    assert [d.slug for d in index.docs_of("guide")] == ["g1"]
    assert holder.cached is index

    logger.success("  PASSED")


def test_holder_build_does_not_cache():
    logger.note("> Test: build() returns a fresh index without caching")

    source = CountingSource("guide", [{"slug": "g1"}])
    holder = SearchIndexHolder(_make_catalog(source))
    index = asyncio.run(holder.build())
    assert len(index) == 2
    assert holder.cached is None

    logger.success("  PASSED")


if __name__ == "__main__":
    test_build_documents_groups_by_kind()
    test_holder_caches_index()
    test_holder_single_in_flight_build()
    test_holder_failure_not_cached()
    test_holder_reset_rebuilds()
    test_holder_reset_during_build_never_overlaps()
    test_holder_waiter_timeout_keeps_build()
    test_holder_build_does_not_cache()
    logger.success("\n✓ All indexes tests passed")
