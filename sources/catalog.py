"""
Content Catalog

Gathers every content kind from its source and exposes them as per-kind
pools: published records only, ordered newest first.
"""

import asyncio

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional
from tclogger import logger, logstr, brk

from documents.records import ContentItem
from documents.types import SEARCH_KINDS
from sources.base import ContentSource


def recency_sort_key(record: ContentItem) -> tuple:
    """Newest first, then lower-cased title, then slug (stable ordering)."""
    return (-record.recency_ts, (record.title or "").lower(), record.slug)


def sort_by_recency(records: Iterable[ContentItem]) -> list[ContentItem]:
    return sorted(records, key=recency_sort_key)


@dataclass(frozen=True)
class ContentPools:
    """Per-kind, published, recency-sorted record tuples.

    Attributes:
        pools: kind -> records, newest first.
        slug_maps: kind -> {slug: record}; first record wins on duplicates.
    """

    pools: Mapping[str, tuple] = field(default_factory=dict)
    slug_maps: Mapping[str, dict] = field(default_factory=dict)

    @classmethod
    def from_records(cls, records_by_kind: Mapping[str, Iterable[ContentItem]]):
        pools = {}
        slug_maps = {}
        for kind, records in records_by_kind.items():
            published = [r for r in records if r.slug and r.is_published]
            pool = tuple(sort_by_recency(published))
            slug_map = {}
            for record in pool:
                slug_map.setdefault(record.slug, record)
            pools[kind] = pool
            slug_maps[kind] = slug_map
        return cls(pools=pools, slug_maps=slug_maps)

    def get(self, kind: str) -> tuple:
        return self.pools.get(kind, ())

    def find(self, kind: str, slug: str) -> Optional[ContentItem]:
        return self.slug_maps.get(kind, {}).get(slug)

    def __len__(self) -> int:
        return sum(len(pool) for pool in self.pools.values())


class ContentCatalog:
    """Loads all kinds concurrently into ContentPools.

    Example:
        >>> catalog = ContentCatalog(build_json_dir_sources("data/articles"))
        >>> pools = await catalog.load()
        >>> pools.get("guide")[:3]
    """

    def __init__(self, sources: Mapping[str, ContentSource]):
        unknown = set(sources) - set(SEARCH_KINDS)
        if unknown:
            raise ValueError(f"Unknown content kinds: {sorted(unknown)}")
        self.sources = dict(sources)

    async def load(self, verbose: bool = False) -> ContentPools:
        """Fetch every source; the first failing source fails the whole load."""
        kinds = list(self.sources)
        results = await asyncio.gather(*(self.sources[k].fetch() for k in kinds))
        pools = ContentPools.from_records(dict(zip(kinds, results)))
        if verbose:
            for kind, records in zip(kinds, results):
                logger.mesg(
                    f"  * {logstr.note(brk(kind))}: "
                    f"{len(pools.get(kind))} published / {len(records)} fetched"
                )
        return pools
