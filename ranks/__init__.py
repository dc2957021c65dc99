"""
Ranks Module - Site Search Scoring and Ranking

Turns a normalized query and the cached document index into an ordered,
bounded list of public hits.

Core Design:
    Scoring is additive and pure:
    1. Match: whole-query phrase in title (140) / haystack (70), plus each
       other query word in title (60) / haystack (24)
    2. Kind priority: small fixed editorial bonus (cars > guide > column >
       heritage > news), only for documents that matched
    3. Recency: banded bonus by age (<=14d, <=30d, <=90d, <=365d)

    Short queries (a single character) are gated: they only match documents
    whose title contains them.

    Ranking sorts by (score desc, date desc, title asc), truncates to a
    limit clamped to [1, 50] (default 30), and strips internal match fields.

Module Structure:
    - constants.py: All weights, bands, limits and shelf sizes
    - scorers.py: MatchScorer, KindScorer, RecencyScorer, SearchDocScorer
    - ranker.py: SearchHitsRanker and limit clamping

Usage:
    from ranks.scorers import SearchDocScorer
    from ranks.ranker import SearchHitsRanker, clamp_limit
    from ranks.constants import SEARCH_LIMIT, KIND_PRIORITY_BONUS
"""
