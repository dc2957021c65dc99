import time

from tclogger import logger, logstr, brk

from converters.query.tokenizer import tokenize_query
from converters.text import normalize_text
from documents.types import SEARCH_KINDS, normalize_kind
from indexes.index import SearchIndex, SearchIndexHolder
from ranks.constants import SUGGEST_PER_KIND
from ranks.ranker import SearchHitsRanker
from ranks.scorers import SearchDocScorer


class SiteSearcher:
    """Free-text search over the cached site index.

    Example:
        >>> searcher = SiteSearcher(SearchIndexHolder(catalog))
        >>> hits = await searcher.search("turbo engine", kind="guides", limit=10)
        >>> hits[0]["href"], hits[0]["score"]
    """

    def __init__(
        self,
        holder: SearchIndexHolder,
        scorer: SearchDocScorer = None,
        ranker: SearchHitsRanker = None,
    ):
        self.holder = holder
        self.scorer = scorer or SearchDocScorer()
        self.ranker = ranker or SearchHitsRanker()

    def search_index(
        self,
        index: SearchIndex,
        query: str,
        kind: str = "all",
        limit: int = None,
        now_ts: float = None,
        verbose: bool = False,
    ) -> list[dict]:
        """Score, rank and truncate every matching document of `index`.

        Args:
            query: Raw user query; normalized here.
            kind: Kind or alias to restrict to; anything unknown means "all".
            limit: Max hits; clamped to [0, 50], default 30.
            now_ts: Reference time of recency scoring; None means now.

        Returns:
            Public hit dicts with `score`, best first. Empty for an empty
            or degenerate query.
        """
        query_norm = normalize_text(query)
        if not query_norm:
            return []
        kind = normalize_kind(kind)
        if now_ts is None:
            now_ts = time.time()
        tokens = tokenize_query(query_norm)
        scored_docs = (
            (doc, self.scorer.calc(doc, query_norm, tokens, now_ts=now_ts))
            for doc in index.docs
            if kind == "all" or doc.kind == kind
        )
        hits = self.ranker.rank(scored_docs, limit=limit)
        logger.mesg(
            f"  * {logstr.note(brk(query_norm))} [{kind}]: {len(hits)} hits",
            verbose=verbose,
        )
        return hits

    async def search(
        self,
        query: str,
        kind: str = "all",
        limit: int = None,
        now_ts: float = None,
        verbose: bool = False,
    ) -> list[dict]:
        index = await self.holder.get()
        return self.search_index(
            index, query, kind=kind, limit=limit, now_ts=now_ts, verbose=verbose
        )

    async def suggest(self, per_kind: int = SUGGEST_PER_KIND) -> dict[str, list]:
        """First `per_kind` public docs of every kind, in index order.

        Shown in place of results when the query is empty or too short.
        """
        index = await self.holder.get()
        per_kind = max(0, per_kind)
        return {
            kind: [doc.to_public_dict() for doc in index.docs_of(kind)[:per_kind]]
            for kind in SEARCH_KINDS
        }
