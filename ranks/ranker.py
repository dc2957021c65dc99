"""
Search Hits Ranker

Turns scored documents into the public result list.

Ranking:
    1. drop documents with a non-positive score
    2. sort by (score desc, date desc, title asc); undated sorts as oldest
    3. truncate to a clamped limit
    4. project to public fields + `score` (internal match fields never leak)

Usage:
    >>> from ranks.ranker import SearchHitsRanker
    >>> ranker = SearchHitsRanker()
    >>> hits = ranker.rank(scored_docs, limit=10)
"""

import math

from typing import Iterable

from converters.times import iso_to_ts
from documents.types import SearchDocument
from ranks.constants import SEARCH_LIMIT, SEARCH_MAX_LIMIT, SEARCH_MIN_LIMIT


def clamp_limit(limit=None) -> int:
    """Default for missing/invalid limits, else floor and clamp to [min, max].

    Examples:
        None -> 30, -5 -> 0, 7.9 -> 7, 500 -> 50
    """
    if isinstance(limit, bool) or not isinstance(limit, (int, float)):
        return SEARCH_LIMIT
    if isinstance(limit, float) and not math.isfinite(limit):
        return SEARCH_LIMIT
    return max(SEARCH_MIN_LIMIT, min(SEARCH_MAX_LIMIT, math.floor(limit)))


def hit_sort_key(scored: tuple[SearchDocument, int]) -> tuple:
    doc, score = scored
    return (-score, -iso_to_ts(doc.date), doc.title.lower(), doc.title)


class SearchHitsRanker:
    def sort(
        self, scored_docs: Iterable[tuple[SearchDocument, int]]
    ) -> list[tuple[SearchDocument, int]]:
        positives = [(doc, score) for doc, score in scored_docs if score > 0]
        return sorted(positives, key=hit_sort_key)

    def to_hit(self, doc: SearchDocument, score: int) -> dict:
        hit = doc.to_public_dict()
        hit["score"] = score
        return hit

    def rank(
        self, scored_docs: Iterable[tuple[SearchDocument, int]], limit=None
    ) -> list[dict]:
        """Rank (doc, score) pairs into at most `limit` public hits."""
        limit = clamp_limit(limit)
        ranked = self.sort(scored_docs)[:limit]
        return [self.to_hit(doc, score) for doc, score in ranked]
