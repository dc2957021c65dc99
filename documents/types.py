"""
Search Document Types

Closed set of content kinds and the uniform SearchDocument record that the
adapters produce for the index.
"""

from dataclasses import dataclass, field
from typing import Literal, Optional

SEARCH_KIND_TYPE = Literal["cars", "guide", "column", "heritage", "news"]
SEARCH_KINDS = ("cars", "guide", "column", "heritage", "news")

KIND_ALIASES = {
    "car": "cars",
    "cars": "cars",
    "guide": "guide",
    "guides": "guide",
    "column": "column",
    "columns": "column",
    "heritage": "heritage",
    "news": "news",
}

PUBLIC_FIELDS = (
    "kind",
    "id",
    "slug",
    "href",
    "title",
    "description",
    "maker",
    "category",
    "tags",
    "date",
)
OPTIONAL_PUBLIC_FIELDS = ("maker", "category", "tags", "date")
INTERNAL_FIELDS = ("normalized_title", "haystack")


def normalize_kind(value) -> str:
    """Map user input (`car`, `Guides`, ...) to a kind, or "all"."""
    if not isinstance(value, str):
        return "all"
    return KIND_ALIASES.get(value.strip().lower(), "all")


@dataclass(frozen=True)
class SearchDocument:
    """Uniform, immutable search record.

    Attributes:
        kind: Content kind, one of SEARCH_KINDS.
        id: Stable identifier of the source record.
        slug: Public identifier used in `href`.
        href: Navigable path, e.g. "/guide/loan-basics".
        title: Display title (not lower-cased).
        description: Clamped plain-text preview.
        maker: Manufacturer facet (cars, heritage, news).
        category: Category facet (kind-specific vocabulary).
        tags: Free-form labels.
        date: Best available ISO-8601 recency signal.
        normalized_title: Matching form of `title`. Internal.
        haystack: Matching text over all searchable fields. Internal.
    """

    kind: SEARCH_KIND_TYPE
    id: str
    slug: str
    href: str
    title: str
    description: str
    maker: Optional[str] = None
    category: Optional[str] = None
    tags: tuple[str, ...] = ()
    date: Optional[str] = None
    normalized_title: str = field(default="", repr=False)
    haystack: str = field(default="", repr=False)

    def to_public_dict(self) -> dict:
        """Public fields only; absent optional facets are omitted."""
        res = {}
        for key in PUBLIC_FIELDS:
            value = getattr(self, key)
            if key in OPTIONAL_PUBLIC_FIELDS and not value:
                continue
            res[key] = list(value) if key == "tags" else value
        return res
