"""
Tests for searches/searcher.py — end-to-end search over a static catalog.
"""

import asyncio

from tclogger import logger

from converters.times import iso_to_ts
from documents.types import INTERNAL_FIELDS
from indexes.index import SearchIndexHolder
from searches.searcher import SiteSearcher
from sources.base import StaticContentSource
from sources.tests.fakes import FailingContentSource
from sources.catalog import ContentCatalog

NOW_TS = iso_to_ts("2024-06-01")

CATALOG_RECORDS = {
    "cars": [
        {"slug": "gr86", "maker": "TOYOTA", "name": "GR86", "summary": "Turbo-less sports car"},
        {"slug": "wrx", "maker": "SUBARU", "name": "WRX", "tags": ["turbo"]},
    ],
    "guide": [
        {"slug": "turbo-engine-guide", "title": "Turbo Engine Guide", "updatedAt": "2024-05-30"},
        {"slug": "guide-to-turbochargers", "title": "Guide to Turbochargers"},
        {"slug": "loan-basics", "title": "Loan Basics", "intentTags": ["loan"]},
        {"slug": "draft-turbo", "title": "Turbo Draft", "status": "draft"},
    ],
    "column": [
        {"slug": "turbo-lag", "title": "Why turbo lag happens", "publishedAt": "2024-01-01"},
        {"slug": "turbo-whine", "title": "Why turbo whine happens", "publishedAt": "2023-01-01"},
    ],
    "heritage": [{"slug": "skyline", "title": "Skyline heritage"}],
    "news": [{"id": "n-1", "title": "New turbo model announced", "publishedAt": "2024-05-20"}],
}


def _make_searcher(records: dict = CATALOG_RECORDS) -> SiteSearcher:
    sources = {kind: StaticContentSource(kind, raws) for kind, raws in records.items()}
    return SiteSearcher(SearchIndexHolder(ContentCatalog(sources)))


def _search(searcher: SiteSearcher, query: str, **kwargs) -> list[dict]:
    kwargs.setdefault("now_ts", NOW_TS)
    return asyncio.run(searcher.search(query, **kwargs))


def test_search_phrase_beats_tokens():
    logger.note("> Test: 'turbo engine' ranks the title phrase match first")

    hits = _search(_make_searcher(), "turbo engine")
    slugs = [h["slug"] for h in hits]
    logger.mesg(f"  * {slugs}")
    assert slugs[0] == "turbo-engine-guide"
    assert slugs.index("turbo-engine-guide") < slugs.index("guide-to-turbochargers")
    assert "draft-turbo" not in slugs
    assert "loan-basics" not in slugs

    logger.success("  PASSED")


def test_search_kind_filter_and_aliases():
    logger.note("> Test: kind filter accepts aliases")

    searcher = _make_searcher()
    for kind in ("column", "columns", " Columns "):
        hits = _search(searcher, "turbo", kind=kind)
        assert {h["kind"] for h in hits} == {"column"}, kind
    all_hits = _search(searcher, "turbo", kind="everything")
    assert {h["kind"] for h in all_hits} == {"cars", "guide", "column", "news"}

    logger.success("  PASSED")


def test_search_recency_tie_break():
    logger.note("> Test: equal scores, newer date first")

    hits = _search(_make_searcher(), "why turbo", kind="column", now_ts=iso_to_ts("2030-01-01"))
    assert [h["slug"] for h in hits] == ["turbo-lag", "turbo-whine"]
    assert hits[0]["score"] == hits[1]["score"]

    logger.success("  PASSED")


def test_search_short_and_empty_queries():
    logger.note("> Test: short queries need a title match; empty gives []")

    searcher = _make_searcher()
    assert _search(searcher, "") == []
    assert _search(searcher, "   ") == []
    hits = _search(searcher, "w")
    assert hits
    for hit in hits:
        assert "w" in hit["title"].lower(), hit
    # "q" appears in no title
    assert _search(searcher, "q") == []

    logger.success("  PASSED")


def test_search_limit_and_public_fields():
    logger.note("> Test: limit is clamped, hits carry public fields only")

    searcher = _make_searcher()
    assert len(_search(searcher, "turbo", limit=2)) == 2
    assert _search(searcher, "turbo", limit=0) == []
    hits = _search(searcher, "turbo", limit=999)
    assert len(hits) == 6
    for hit in hits:
        for key in INTERNAL_FIELDS:
            assert key not in hit
        assert hit["score"] > 0
        assert hit["href"] == f"/{hit['kind']}/{hit['slug']}"

    logger.success("  PASSED")


def test_search_is_deterministic():
    logger.note("> Test: identical queries give identical results")

    searcher = _make_searcher()

    async def run():
        return await asyncio.gather(
            *(searcher.search("turbo", now_ts=NOW_TS) for _ in range(5))
        )

    results = asyncio.run(run())
    assert all(result == results[0] for result in results)

    logger.success("  PASSED")


def test_search_index_without_holder_cache():
    logger.note("> Test: search_index runs against an explicit index")

    searcher = _make_searcher()
    index = asyncio.run(searcher.holder.build())
    hits = searcher.search_index(index, "skyline", now_ts=NOW_TS, verbose=True)
    assert [h["slug"] for h in hits] == ["skyline"]
    assert searcher.holder.cached is None

    logger.success("  PASSED")


def test_suggest_per_kind():
    logger.note("> Test: suggest returns the first docs of every kind")

    suggestions = asyncio.run(_make_searcher().suggest(per_kind=1))
    assert list(suggestions) == ["cars", "guide", "column", "heritage", "news"]
    assert all(len(docs) == 1 for docs in suggestions.values())
    assert suggestions["column"][0]["slug"] == "turbo-lag"
    for docs in suggestions.values():
        for key in INTERNAL_FIELDS:
            assert key not in docs[0]

    logger.success("  PASSED")


def test_search_build_failure_propagates():
    logger.note("> Test: a failing source fails the search, not an empty result")

    sources = {
        "guide": StaticContentSource("guide", CATALOG_RECORDS["guide"]),
        "news": FailingContentSource("news"),
    }
    searcher = SiteSearcher(SearchIndexHolder(ContentCatalog(sources)))
    try:
        _search(searcher, "turbo")
    except RuntimeError as e:
        logger.mesg(f"  * {e}")
    else:
        raise AssertionError("Expected the build failure to propagate")
    assert searcher.holder.cached is None

    logger.success("  PASSED")


if __name__ == "__main__":
    test_search_phrase_beats_tokens()
    test_search_kind_filter_and_aliases()
    test_search_recency_tie_break()
    test_search_short_and_empty_queries()
    test_search_limit_and_public_fields()
    test_search_is_deterministic()
    test_search_index_without_holder_cache()
    test_suggest_per_kind()
    test_search_build_failure_propagates()
    logger.success("\n✓ All searcher tests passed")
