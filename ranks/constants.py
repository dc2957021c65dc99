"""
Ranking Constants and Configuration

All tunable numbers of the site search and relation shelves live here, so
that editorial policy can be adjusted without touching scoring logic.

Organization:
    1. Match Weights - phrase and token match scores
    2. Short Query Gate - minimum query length rule
    3. Kind Priority - editorial bias between content kinds
    4. Recency Scoring - age bands and their bonuses
    5. Search Limits - default / hard cap of returned hits
    6. Index Limits - per-kind caps applied at build time
    7. Descriptions - preview text sizes
    8. Relation Shelves - related / next-read shelf sizes
"""

# =============================================================================
# Match Weights
# =============================================================================

# Whole normalized query found inside the normalized title / haystack.
# Title phrase must stay at least 2x the body phrase weight so a title hit
# always outranks a body-only hit of the same query.
TITLE_PHRASE_WEIGHT = 140
BODY_PHRASE_WEIGHT = 70

# Each query word (the whole-query token excluded) found in title / haystack
TITLE_TOKEN_WEIGHT = 60
BODY_TOKEN_WEIGHT = 24

# =============================================================================
# Short Query Gate
# =============================================================================

# Queries whose normalized length is <= this only match docs whose title
# contains the query.
SHORT_QUERY_MAX_LENGTH = 1

# =============================================================================
# Kind Priority
# =============================================================================

# Fixed bonus per kind, biasing ties toward entry-point content:
# a query matching a car page and a news page equally surfaces the car first.
# Order is editorial policy: cars > guide > column > heritage > news.
KIND_PRIORITY_BONUS = {
    "cars": 10,
    "guide": 8,
    "column": 6,
    "heritage": 4,
    "news": 2,
}

# =============================================================================
# Recency Scoring
# =============================================================================

# (max age in days, bonus) bands, checked in order.
# Older than the last band, or no date at all: no bonus.
RECENCY_BANDS = (
    (14, 18),
    (30, 12),
    (90, 7),
    (365, 3),
)

# =============================================================================
# Search Limits
# =============================================================================

SEARCH_LIMIT = 30  # Default hits per query
SEARCH_MAX_LIMIT = 50  # Hard cap, whatever the caller asks for
SEARCH_MIN_LIMIT = 0  # Non-positive limits return no hits

# Per-kind suggestions shown for empty / too-short queries
SUGGEST_PER_KIND = 6

# =============================================================================
# Index Limits
# =============================================================================

# News grows fastest; only the newest ones are indexed
NEWS_INDEX_LIMIT = 1200

# =============================================================================
# Descriptions
# =============================================================================

DESCRIPTION_MIN_CHARS = 40  # Shorter candidates are skipped in the chain
DESCRIPTION_MAX_CHARS = 155  # SERP-sized description
DESCRIPTION_CARD_MAX_CHARS = 104  # Result card preview

# =============================================================================
# Relation Shelves
# =============================================================================

RELATED_LIMIT = 4  # Same-kind related shelf
NEXT_READ_LIMIT = 3  # Cross-kind next-read shelf, per kind
NEXT_READ_MIN_LIMIT = 2
NEXT_READ_MAX_LIMIT = 5
NEXT_READ_KINDS = ("column", "cars", "guide")
REFERENCING_LIMIT = 4  # Reverse lookups (records linking a given slug)
