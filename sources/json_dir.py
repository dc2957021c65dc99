"""
JSON Directory Content Source

Reads `<root>/<dirname>/*.json`, one directory per content kind:

    data/articles/
        cars/*.json
        guides/*.json
        columns/*.json
        heritage/*.json
        news/*.json

A file holds one record object or a list of them. Files are read in
file-name order in a worker thread, so fetching several kinds at once does
not block the event loop.
"""

import asyncio
import json

from pathlib import Path
from typing import Union
from tclogger import logger, logstr

from documents.records import ContentItem, record_from_dict
from sources.base import ContentSource, ContentSourceError

KIND_DIRNAMES = {
    "cars": "cars",
    "guide": "guides",
    "column": "columns",
    "heritage": "heritage",
    "news": "news",
}


class JsonDirSource(ContentSource):
    def __init__(
        self,
        kind: str,
        root: Union[str, Path],
        dirname: str = None,
        allow_missing: bool = False,
    ):
        self.kind = kind
        self.root = Path(root)
        self.dirname = dirname or KIND_DIRNAMES.get(kind, kind)
        self.allow_missing = allow_missing

    @property
    def dir_path(self) -> Path:
        return self.root / self.dirname

    def read_file(self, path: Path) -> list[dict]:
        """Read raw record objects from one file; a broken file yields []."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warn(f"× Skip unreadable file: {logstr.file(path)} ({e})")
            return []
        if isinstance(data, dict):
            return [data]
        if isinstance(data, list):
            return [item for item in data if isinstance(item, dict)]
        logger.warn(f"× Skip non-record JSON: {logstr.file(path)}")
        return []

    def read_all(self) -> list[ContentItem]:
        dir_path = self.dir_path
        if not dir_path.is_dir():
            if self.allow_missing:
                return []
            raise ContentSourceError(f"[{self.kind}] missing directory: {dir_path}")
        paths = sorted(p for p in dir_path.iterdir() if p.is_file() and p.suffix == ".json")
        raws = [raw for path in paths for raw in self.read_file(path)]
        return [record_from_dict(self.kind, raw) for raw in raws]

    async def fetch(self) -> list[ContentItem]:
        return await asyncio.to_thread(self.read_all)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind!r}, dir={str(self.dir_path)!r})"


def build_json_dir_sources(
    root: Union[str, Path], allow_missing: bool = False
) -> dict[str, JsonDirSource]:
    """One JsonDirSource per kind under `root`."""
    return {
        kind: JsonDirSource(kind, root, allow_missing=allow_missing)
        for kind in KIND_DIRNAMES
    }
