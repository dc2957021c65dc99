"""
Document Adapters

Convert native content records into uniform SearchDocuments.

One adapter per content kind, looked up in ADAPTER_MAP by the record KIND:
    - adapt_car, adapt_guide, adapt_column, adapt_heritage, adapt_news

Every adapter is pure and returns None when the record has no usable slug,
which keeps it out of the index. Each adapter also decides which extra
kind-specific text (known issues, intent tags, target keywords, ...) goes
into the haystack: searchable, but never part of the public schema.
"""

from typing import Iterable, Optional
from urllib.parse import quote

from converters.text import (
    coerce_string,
    first_non_empty,
    normalize_text,
    to_plain_text,
)
from documents.descriptions import (
    build_article_title,
    build_car_description,
    build_car_title,
    build_column_description,
    build_guide_description,
    build_heritage_description,
    build_news_description,
)
from documents.records import (
    CarItem,
    ColumnItem,
    ContentItem,
    GuideItem,
    HeritageItem,
    NewsItem,
)
from documents.types import SearchDocument

# characters left unescaped in slugs, same set as JS encodeURIComponent
HREF_SAFE_CHARS = "!~*'()"


def build_href(kind: str, slug: str) -> str:
    return f"/{kind}/{quote(slug, safe=HREF_SAFE_CHARS)}"


def build_haystack(parts: Iterable[Optional[str]]) -> str:
    return normalize_text(" ".join(p for p in parts if p))


def make_document(
    record: ContentItem,
    title: str,
    description: str,
    doc_id: Optional[str] = None,
    slug: Optional[str] = None,
    maker: Optional[str] = None,
    category: Optional[str] = None,
    extras: Iterable[Optional[str]] = (),
) -> Optional[SearchDocument]:
    """Assemble a SearchDocument and its derived matching fields."""
    slug = coerce_string(slug if slug is not None else record.slug)
    if not slug:
        return None
    maker = coerce_string(maker)
    category = coerce_string(category)
    tags = tuple(record.tags)
    haystack = build_haystack(
        [title, maker, category, *tags, description, *extras]
    )
    return SearchDocument(
        kind=record.KIND,
        id=first_non_empty([doc_id, record.id, slug]),
        slug=slug,
        href=build_href(record.KIND, slug),
        title=title,
        description=description,
        maker=maker,
        category=category,
        tags=tags,
        date=record.search_date,
        normalized_title=normalize_text(title),
        haystack=haystack,
    )


def adapt_car(record: CarItem) -> Optional[SearchDocument]:
    return make_document(
        record,
        title=build_car_title(record),
        description=build_car_description(record),
        maker=record.maker,
        category=first_non_empty([record.segment, record.body_type]),
        extras=[
            " ".join(record.trouble_trends),
            " ".join(record.maintenance_notes),
            to_plain_text(record.body),
        ],
    )


def adapt_guide(record: GuideItem) -> Optional[SearchDocument]:
    return make_document(
        record,
        title=build_article_title(record),
        description=build_guide_description(record),
        category=record.category,
        extras=[" ".join(record.intent_tags)],
    )


def adapt_column(record: ColumnItem) -> Optional[SearchDocument]:
    return make_document(
        record,
        title=build_article_title(record),
        description=build_column_description(record),
        category=record.category,
        extras=[record.target_keyword],
    )


def adapt_heritage(record: HeritageItem) -> Optional[SearchDocument]:
    return make_document(
        record,
        title=build_article_title(record),
        description=build_heritage_description(record),
        maker=record.maker,
        category=record.heritage_kind,
        extras=[record.brand_name, record.model_name],
    )


def adapt_news(record: NewsItem) -> Optional[SearchDocument]:
    # news pages are addressed by id
    id_or_slug = first_non_empty([record.id, record.slug])
    return make_document(
        record,
        title=build_article_title(record),
        description=build_news_description(record),
        doc_id=id_or_slug,
        slug=id_or_slug or "",
        maker=record.maker,
        category=record.category,
    )


ADAPTER_MAP = {
    "cars": adapt_car,
    "guide": adapt_guide,
    "column": adapt_column,
    "heritage": adapt_heritage,
    "news": adapt_news,
}


def adapt(record) -> Optional[SearchDocument]:
    """Adapt a native record to a SearchDocument; None excludes it."""
    adapter = ADAPTER_MAP.get(getattr(record, "KIND", None))
    if adapter is None:
        return None
    return adapter(record)


def adapt_all(records: Iterable[ContentItem]) -> list[SearchDocument]:
    """Adapt records in order, dropping the ones that cannot be indexed."""
    docs = (adapt(record) for record in records)
    return [doc for doc in docs if doc is not None]
