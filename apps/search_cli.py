import asyncio

from tclogger import logger, logstr, brk, dict_to_str

from apps.arg_parser import ArgParser
from configs.envs import SEARCH_ENVS, resolve_data_root
from documents.types import normalize_kind
from indexes.index import SearchIndexHolder
from ranks.constants import SUGGEST_PER_KIND
from recalls.shelves import RelatedShelves
from searches.searcher import SiteSearcher
from sources.catalog import ContentCatalog
from sources.json_dir import build_json_dir_sources


class SearchCli:
    def __init__(self, search_envs: dict, verbose: bool = False):
        self.search_envs = search_envs
        self.verbose = verbose
        self.data_root = resolve_data_root(search_envs["data_root"])
        sources = build_json_dir_sources(
            self.data_root,
            allow_missing=bool(search_envs.get("allow_missing_dirs", False)),
        )
        self.holder = SearchIndexHolder(ContentCatalog(sources), verbose=verbose)
        self.searcher = SiteSearcher(self.holder)

    async def run_search(self, query: str, kind: str = "all", limit: int = None):
        query = (query or "").strip()
        if len(query) <= 1:
            logger.note(f"> Suggestions {brk(str(SUGGEST_PER_KIND))} per kind:")
            suggestions = await self.searcher.suggest()
            for doc_kind, docs in suggestions.items():
                logger.mesg(f"  * {logstr.note(doc_kind)}:")
                for doc in docs:
                    logger.line(f"    - {doc['title']} {logstr.file(doc['href'])}")
            return suggestions

        limit = self.search_envs.get("limit") if limit is None else limit
        hits = await self.searcher.search(query, kind=kind, limit=limit)
        logger.note(f"> Search {logstr.mesg(brk(query))} in [{normalize_kind(kind)}]:")
        for hit in hits:
            logger.line(
                f"  * {logstr.success(str(hit['score']).rjust(4))} "
                f"[{hit['kind']}] {hit['title']} {logstr.file(hit['href'])}"
            )
        logger.success(f"+ {len(hits)} hits")
        return hits

    async def run_related(self, kind: str, slug: str):
        kind = normalize_kind(kind)
        index = await self.holder.get()
        base = index.pools.find(kind, slug)
        if base is None:
            logger.warn(f"× Not found: [{kind}] {slug}")
            return {}
        shelves = RelatedShelves(index.pools)
        res = {
            "related": [r.slug for r in shelves.related(base)],
            "next_read": {
                k: [r.slug for r in records]
                for k, records in shelves.next_read(base).items()
            },
        }
        logger.note(f"> Shelves of [{kind}] {logstr.mesg(slug)}:")
        logger.mesg(dict_to_str(res), indent=4)
        return res


def main():
    arg_parser = ArgParser(description="Site content search")
    args = arg_parser.args
    search_envs = arg_parser.update_search_envs(SEARCH_ENVS, verbose=args.verbose)
    cli = SearchCli(search_envs, verbose=args.verbose)
    if args.related:
        asyncio.run(cli.run_related(args.kind, args.related))
    else:
        asyncio.run(cli.run_search(args.query, kind=args.kind, limit=args.limit))


if __name__ == "__main__":
    main()

    # python -m apps.search_cli -q "turbo engine"
    # python -m apps.search_cli -q "loan" -k guides -n 5
    # python -m apps.search_cli -k guide -r loan-basics
    # python -m apps.search_cli -m dev -d data/articles -v
