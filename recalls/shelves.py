"""
Relation Shelves

Page-level shelves over the per-kind content pools:
    - related: same-kind cascade (e.g. guide -> guides)
    - next_read: one cross-kind cascade per target kind (e.g. heritage ->
      columns / cars / guides)
    - find_by_slugs: resolve a hand-entered slug list
    - find_referencing: records whose link list points at a given slug
"""

from typing import Iterable, Optional

from converters.text import uniq_strings
from documents.records import ContentItem
from ranks.constants import (
    RELATED_LIMIT,
    NEXT_READ_LIMIT,
    NEXT_READ_MIN_LIMIT,
    NEXT_READ_MAX_LIMIT,
    NEXT_READ_KINDS,
    REFERENCING_LIMIT,
)
from recalls.cascade import RelatedCascade
from sources.catalog import ContentPools


def clamp_next_read_limit(limit: int = None) -> int:
    if limit is None:
        limit = NEXT_READ_LIMIT
    return max(NEXT_READ_MIN_LIMIT, min(NEXT_READ_MAX_LIMIT, int(limit)))


class RelatedShelves:
    """Relation shelves over a ContentPools snapshot.

    Example:
        >>> index = await holder.get()
        >>> shelves = RelatedShelves(index.pools)
        >>> guide = shelves.pools.find("guide", "loan-basics")
        >>> shelves.related(guide)
        >>> shelves.next_read(guide)  # {"column": [...], "cars": [...], "guide": [...]}
    """

    def __init__(self, pools: ContentPools):
        self.pools = pools

    def cascade(
        self,
        base: ContentItem,
        kind: str,
        limit: int,
        explicit_slugs: Iterable[str] = None,
    ) -> list[ContentItem]:
        if limit <= 0:
            return []
        if explicit_slugs is None:
            explicit_slugs = base.related_slugs_for(kind)
        # exclusion only matters inside the base's own kind
        exclude_slug = base.slug if kind == base.kind else ""
        cascade = RelatedCascade(self.pools.get(kind), exclude_slug=exclude_slug)
        picks = cascade.select(
            explicit_slugs=explicit_slugs,
            intent_tags=base.intent_tags,
            tags=base.tags,
            limit=limit,
        )
        return picks.items

    def related(self, base: ContentItem, limit: int = RELATED_LIMIT) -> list[ContentItem]:
        """Same-kind shelf, honoring the base's own link list first."""
        return self.cascade(base, base.kind, limit)

    def next_read(
        self,
        base: ContentItem,
        kinds: Iterable[str] = NEXT_READ_KINDS,
        limit: int = None,
    ) -> dict[str, list[ContentItem]]:
        """Cross-kind shelves, `limit` (clamped to 2..5) records per kind."""
        limit = clamp_next_read_limit(limit)
        return {kind: self.cascade(base, kind, limit) for kind in kinds}

    def find_by_slugs(
        self, kind: str, slugs: Iterable[str], limit: Optional[int] = None
    ) -> list[ContentItem]:
        """Records of `kind` in input order; unknown slugs are ignored."""
        res = []
        for slug in uniq_strings(slugs):
            record = self.pools.find(kind, slug)
            if record is None:
                continue
            res.append(record)
            if limit is not None and len(res) >= limit:
                break
        return res

    def find_referencing(
        self,
        kind: str,
        target_kind: str,
        slug: str,
        limit: int = REFERENCING_LIMIT,
    ) -> list[ContentItem]:
        """Records of `kind` whose link list for `target_kind` holds `slug`."""
        if not slug or limit <= 0:
            return []
        res = []
        for record in self.pools.get(kind):
            if kind == target_kind and record.slug == slug:
                continue
            if slug in record.related_slugs_for(target_kind):
                res.append(record)
                if len(res) >= limit:
                    break
        return res
