"""
Scoring Classes for Site Search

Each scorer handles one aspect of a document's relevance to a query. All of
them are pure: the same (document, query, now) always gives the same score.

Scorers:
    - MatchScorer: phrase and token matches against title / haystack
    - KindScorer: fixed editorial bonus per content kind
    - RecencyScorer: banded bonus by document age
    - SearchDocScorer: combines the three, with the short-query gate

Functions:
    - score_document: module-level shortcut over a shared SearchDocScorer
"""

import time as _time

from typing import Optional

from converters.times import age_days, iso_to_ts
from documents.types import SearchDocument
from ranks.constants import (
    # Match weights
    TITLE_PHRASE_WEIGHT,
    BODY_PHRASE_WEIGHT,
    TITLE_TOKEN_WEIGHT,
    BODY_TOKEN_WEIGHT,
    # Short query gate
    SHORT_QUERY_MAX_LENGTH,
    # Kind priority
    KIND_PRIORITY_BONUS,
    # Recency
    RECENCY_BANDS,
)


class MatchScorer:
    """Substring matching of the normalized query and its tokens.

    The whole query scores as a phrase; every other token scores on its own.
    The token equal to the whole query is skipped, so a one-word query is not
    counted twice.

    Example:
        >>> scorer = MatchScorer()
        >>> scorer.calc("turbo engine guide", "turbo engine guide", "turbo engine",
        ...             ["turbo engine", "turbo", "engine"])
        140 + 70 + 2 * (60 + 24) = 378
    """

    def __init__(
        self,
        title_phrase_weight: int = TITLE_PHRASE_WEIGHT,
        body_phrase_weight: int = BODY_PHRASE_WEIGHT,
        title_token_weight: int = TITLE_TOKEN_WEIGHT,
        body_token_weight: int = BODY_TOKEN_WEIGHT,
    ):
        self.title_phrase_weight = title_phrase_weight
        self.body_phrase_weight = body_phrase_weight
        self.title_token_weight = title_token_weight
        self.body_token_weight = body_token_weight

    def calc(self, title: str, haystack: str, query_norm: str, tokens: list) -> int:
        if not query_norm:
            return 0
        score = 0
        if query_norm in title:
            score += self.title_phrase_weight
        if query_norm in haystack:
            score += self.body_phrase_weight
        for token in tokens:
            if not token or token == query_norm:
                continue
            if token in title:
                score += self.title_token_weight
            if token in haystack:
                score += self.body_token_weight
        return score


class KindScorer:
    def __init__(self, bonus: dict = None):
        self.bonus = dict(KIND_PRIORITY_BONUS if bonus is None else bonus)

    def calc(self, kind: str) -> int:
        return self.bonus.get(kind, 0)


class RecencyScorer:
    """Banded recency bonus.

    Bands are (max_age_days, bonus), checked in order; the first band whose
    max age is not exceeded wins. Undated or too old documents get 0.

    Example:
        >>> scorer = RecencyScorer()
        >>> scorer.calc("2024-01-10", now_ts=iso_to_ts("2024-01-20"))
        18
        >>> scorer.calc(None)
        0
    """

    def __init__(self, bands: tuple = RECENCY_BANDS):
        self.bands = tuple(bands)

    def calc(self, date: Optional[str], now_ts: float = None) -> int:
        date_ts = iso_to_ts(date)
        if date_ts <= 0:
            return 0
        if now_ts is None:
            now_ts = _time.time()
        days = age_days(date_ts, now_ts)
        for max_days, bonus in self.bands:
            if days <= max_days:
                return bonus
        return 0


class SearchDocScorer:
    """Final relevance score of a SearchDocument.

    score = match + kind bonus + recency bonus, with two gates:
        - no phrase/token match at all -> 0 (kind and recency never rank an
          unrelated document)
        - short query (len <= SHORT_QUERY_MAX_LENGTH) not found in the
          title -> 0

    Args:
        now_ts: Fixed "now" for recency. None reads the clock on each call.
    """

    def __init__(
        self,
        match_scorer: MatchScorer = None,
        kind_scorer: KindScorer = None,
        recency_scorer: RecencyScorer = None,
        short_query_max_length: int = SHORT_QUERY_MAX_LENGTH,
    ):
        self.match_scorer = match_scorer or MatchScorer()
        self.kind_scorer = kind_scorer or KindScorer()
        self.recency_scorer = recency_scorer or RecencyScorer()
        self.short_query_max_length = short_query_max_length

    def is_short_query(self, query_norm: str) -> bool:
        return len(query_norm) <= self.short_query_max_length

    def calc(
        self,
        doc: SearchDocument,
        query_norm: str,
        tokens: list,
        now_ts: float = None,
    ) -> int:
        if not query_norm:
            return 0
        title = doc.normalized_title
        if self.is_short_query(query_norm) and query_norm not in title:
            return 0
        match_score = self.match_scorer.calc(title, doc.haystack, query_norm, tokens)
        if match_score <= 0:
            return 0
        return (
            match_score
            + self.kind_scorer.calc(doc.kind)
            + self.recency_scorer.calc(doc.date, now_ts=now_ts)
        )


_DEFAULT_SCORER = SearchDocScorer()


def score_document(
    doc: SearchDocument, query_norm: str, tokens: list, now_ts: float = None
) -> int:
    return _DEFAULT_SCORER.calc(doc, query_norm, tokens, now_ts=now_ts)
