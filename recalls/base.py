"""
Base Types for Relation Shelves

StagePicks is the accumulator shared by every cascade stage: it deduplicates
by slug, skips the base record, stops at `limit`, and remembers which stage
contributed each pick.
"""

from dataclasses import dataclass, field
from typing import Iterable

from documents.records import ContentItem

STAGE_EXPLICIT = "explicit"
STAGE_INTENT = "intent"
STAGE_TAGS = "tags"
STAGE_FALLBACK = "fallback"
CASCADE_STAGES = (STAGE_EXPLICIT, STAGE_INTENT, STAGE_TAGS, STAGE_FALLBACK)


@dataclass
class StagePicks:
    """Ordered, slug-deduplicated picks of a relation cascade.

    Attributes:
        limit: Max number of picks.
        exclude_slug: Slug never picked (the base record).
        items: Picked records, in pick order.
        stage_tags: slug -> name of the stage that picked it.
    """

    limit: int
    exclude_slug: str = ""
    items: list[ContentItem] = field(default_factory=list)
    stage_tags: dict[str, str] = field(default_factory=dict)

    @property
    def is_full(self) -> bool:
        return len(self.items) >= self.limit

    def has(self, slug: str) -> bool:
        return slug in self.stage_tags

    def push(self, record: ContentItem, stage: str) -> bool:
        """Pick `record` unless it is full, excluded, slug-less or seen."""
        slug = record.slug
        if self.is_full or not slug or slug == self.exclude_slug:
            return False
        if self.has(slug):
            return False
        self.stage_tags[slug] = stage
        self.items.append(record)
        return True

    def extend(self, records: Iterable[ContentItem], stage: str) -> int:
        """Push records in order until full; returns how many were picked."""
        count = 0
        for record in records:
            if self.is_full:
                break
            if self.push(record, stage):
                count += 1
        return count

    def stage_counts(self) -> dict[str, int]:
        counts = {stage: 0 for stage in CASCADE_STAGES}
        for stage in self.stage_tags.values():
            counts[stage] = counts.get(stage, 0) + 1
        return counts
