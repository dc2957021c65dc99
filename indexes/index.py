"""
Search Index

In-memory snapshot of every adapted document, built once and shared.

Core Design:
    - SearchIndex is immutable: documents, the content pools they came from,
      and the build time. A rebuild replaces the whole snapshot.
    - SearchIndexHolder owns the cache. The first `get()` starts a single
      build task; concurrent callers await the same task, so at most one
      build is in flight and nobody observes a partial index.
    - A failed build is never cached: the error propagates to every waiter
      and the next `get()` tries again.
    - Waiters are shielded: one caller's timeout/cancellation stops its own
      wait, not the shared build.

Usage:
    >>> holder = SearchIndexHolder(ContentCatalog(sources))
    >>> index = await holder.get()
    >>> holder.reset()  # next get() rebuilds, after any build in flight
"""

import asyncio
import time

from dataclasses import dataclass
from typing import Optional
from tclogger import logger, logstr, brk

from documents.adapters import adapt_all
from documents.types import SEARCH_KINDS, SearchDocument
from ranks.constants import NEWS_INDEX_LIMIT
from sources.catalog import ContentCatalog, ContentPools

# per-kind caps applied when adapting pools (pools are newest first)
KIND_INDEX_LIMITS = {"news": NEWS_INDEX_LIMIT}


@dataclass(frozen=True)
class SearchIndex:
    """Immutable search snapshot.

    Attributes:
        docs: Adapted documents, grouped by kind in SEARCH_KINDS order.
        pools: Native per-kind records the docs were built from.
        built_at: Build timestamp (epoch seconds).
    """

    docs: tuple[SearchDocument, ...]
    pools: ContentPools
    built_at: float

    def __len__(self) -> int:
        return len(self.docs)

    def docs_of(self, kind: str) -> list[SearchDocument]:
        return [doc for doc in self.docs if doc.kind == kind]


def build_documents(pools: ContentPools) -> list[SearchDocument]:
    """Adapt every pool into documents, applying per-kind caps."""
    docs = []
    for kind in SEARCH_KINDS:
        records = pools.get(kind)
        limit = KIND_INDEX_LIMITS.get(kind)
        if limit is not None:
            records = records[:limit]
        docs.extend(adapt_all(records))
    return docs


class SearchIndexHolder:
    def __init__(self, catalog: ContentCatalog, verbose: bool = False):
        self.catalog = catalog
        self.verbose = verbose
        self._index: Optional[SearchIndex] = None
        self._building: Optional[asyncio.Future] = None
        self._building_generation = 0
        self._generation = 0

    @property
    def cached(self) -> Optional[SearchIndex]:
        return self._index

    async def build(self, verbose: bool = None) -> SearchIndex:
        """Build a fresh index from the catalog (not cached)."""
        verbose = self.verbose if verbose is None else verbose
        start = time.perf_counter()
        if verbose:
            logger.note(f"> Building search index ...")
        try:
            pools = await self.catalog.load(verbose=verbose)
        except Exception as e:
            logger.fail(f"× Search index build failed: {e}")
            raise
        docs = build_documents(pools)
        index = SearchIndex(docs=tuple(docs), pools=pools, built_at=time.time())
        if verbose:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.success(
                f"+ Indexed {logstr.mesg(str(len(docs)))} docs "
                f"from {len(pools)} records {brk(f'{elapsed_ms:.0f}ms')}"
            )
        return index

    async def _build_and_cache(self, generation: int) -> SearchIndex:
        try:
            index = await self.build()
            if generation == self._generation:
                self._index = index
            return index
        finally:
            if generation == self._building_generation:
                self._building = None

    async def get(self) -> SearchIndex:
        """Return the cached index, building it on first use."""
        while self._index is None:
            building = self._building
            if building is None:
                self._building_generation = self._generation
                self._building = asyncio.ensure_future(
                    self._build_and_cache(self._generation)
                )
                return await asyncio.shield(self._building)
            if self._building_generation == self._generation:
                return await asyncio.shield(building)
            # build started before reset(): let it finish, then rebuild
            await asyncio.wait({building})
        return self._index

    def reset(self):
        """Forget the cached index; the next `get()` rebuilds it.

        A build already in flight keeps running and its waiters still get its
        result, but it is not cached. The rebuild starts once it finishes, so
        two builds never overlap.
        """
        self._generation += 1
        self._index = None
