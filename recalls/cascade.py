"""
Relation Cascade

Selects a "related content" shelf from a pool of native records of one kind.
Each stage only fills the capacity left by the stages before it:

    1. explicit: hand-entered link list, in its given order
    2. intent: shared intent tags (count desc, then newest first)
    3. tags: shared tags (count desc, then newest first)
    4. fallback: the rest of the pool, newest first

The fallback makes the shelf complete: with a pool of n distinct slugs
other than the base, the result always holds min(limit, n) records.
"""

from typing import Iterable, Optional

from converters.text import normalize_text
from documents.records import ContentItem
from ranks.constants import RELATED_LIMIT
from recalls.base import (
    STAGE_EXPLICIT,
    STAGE_INTENT,
    STAGE_TAGS,
    STAGE_FALLBACK,
    StagePicks,
)
from sources.catalog import sort_by_recency


def normalize_labels(labels: Iterable[str]) -> set[str]:
    return {label for label in map(normalize_text, labels or []) if label}


def overlap_count(base_labels: set[str], labels: Iterable[str]) -> int:
    """Number of distinct normalized labels shared with `base_labels`."""
    if not base_labels:
        return 0
    return len(base_labels & normalize_labels(labels))


class RelatedCascade:
    """Four-stage relation selector over one recency-sorted pool.

    Example:
        >>> cascade = RelatedCascade(guides, exclude_slug="loan-basics")
        >>> picks = cascade.select(
        ...     explicit_slugs=["loan-review"], intent_tags=["loan"], tags=[], limit=4
        ... )
        >>> [r.slug for r in picks.items], picks.stage_tags
    """

    def __init__(self, pool: Iterable[ContentItem], exclude_slug: str = ""):
        self.exclude_slug = exclude_slug or ""
        # one record per slug: the newest version wins
        self.slug_map: dict[str, ContentItem] = {}
        for record in sort_by_recency(pool):
            if record.slug and record.slug != self.exclude_slug:
                self.slug_map.setdefault(record.slug, record)
        self.pool = list(self.slug_map.values())

    def pick_explicit(self, picks: StagePicks, explicit_slugs: Iterable[str]):
        records = (
            self.slug_map[slug]
            for slug in (s.strip() for s in explicit_slugs or [] if isinstance(s, str))
            if slug in self.slug_map
        )
        picks.extend(records, STAGE_EXPLICIT)

    def pick_overlap(
        self, picks: StagePicks, base_labels: Iterable[str], attr: str, stage: str
    ):
        base_set = normalize_labels(base_labels)
        if not base_set or picks.is_full:
            return
        scored = []
        for record in self.pool:
            if picks.has(record.slug):
                continue
            count = overlap_count(base_set, getattr(record, attr))
            if count > 0:
                scored.append((record, count))
        # stable sort keeps the pool's recency order within equal counts
        scored.sort(key=lambda pair: -pair[1])
        picks.extend((record for record, _ in scored), stage)

    def pick_fallback(self, picks: StagePicks):
        picks.extend(self.pool, STAGE_FALLBACK)

    def select(
        self,
        explicit_slugs: Iterable[str] = (),
        intent_tags: Iterable[str] = (),
        tags: Iterable[str] = (),
        limit: int = RELATED_LIMIT,
    ) -> StagePicks:
        picks = StagePicks(limit=max(0, limit), exclude_slug=self.exclude_slug)
        if picks.is_full or not self.pool:
            return picks
        self.pick_explicit(picks, explicit_slugs)
        self.pick_overlap(picks, intent_tags, "intent_tags", STAGE_INTENT)
        self.pick_overlap(picks, tags, "tags", STAGE_TAGS)
        self.pick_fallback(picks)
        return picks


def select_related(
    base: ContentItem,
    pool: Iterable[ContentItem],
    limit: int = RELATED_LIMIT,
    explicit_slugs: Optional[Iterable[str]] = None,
) -> list[ContentItem]:
    """Related shelf for `base` from `pool`; never contains `base` itself.

    Args:
        base: Record the shelf is built for.
        pool: Candidate records of a single kind.
        limit: Max shelf size; <= 0 gives [].
        explicit_slugs: Link list to honor first. Defaults to the base's own
            list for the pool's kind.
    """
    if limit is None or limit <= 0:
        return []
    pool = list(pool)
    if not pool:
        return []
    if explicit_slugs is None:
        explicit_slugs = base.related_slugs_for(pool[0].kind)
    cascade = RelatedCascade(pool, exclude_slug=base.slug)
    picks = cascade.select(
        explicit_slugs=explicit_slugs,
        intent_tags=base.intent_tags,
        tags=base.tags,
        limit=limit,
    )
    return picks.items
