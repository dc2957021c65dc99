"""
Content Source Interface

A content source delivers every native record of one kind. Sources may do
I/O (disk reads) and are therefore async; they are independent of each
other and can be fetched concurrently.
"""

from typing import Iterable, Union

from documents.records import ContentItem, record_from_dict


class ContentSourceError(RuntimeError):
    """A content source is unavailable; the index must not be built."""


class ContentSource:
    """Base class: subclasses set `kind` and implement `fetch()`."""

    kind: str = ""

    async def fetch(self) -> list[ContentItem]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind!r})"


class StaticContentSource(ContentSource):
    """In-memory source, for tests and embedding callers.

    Example:
        >>> source = StaticContentSource("guide", [{"slug": "loan", "title": "Loan"}])
        >>> records = asyncio.run(source.fetch())
    """

    def __init__(self, kind: str, records: Iterable[Union[ContentItem, dict]]):
        self.kind = kind
        self.records = [
            r if isinstance(r, ContentItem) else record_from_dict(kind, r)
            for r in records
        ]

    async def fetch(self) -> list[ContentItem]:
        return list(self.records)
