"""
Native Content Records

One dataclass per content kind (a closed tagged union over `KIND`):
    - CarItem (cars)
    - GuideItem (guide)
    - ColumnItem (column)
    - HeritageItem (heritage)
    - NewsItem (news)

Raw JSON from the content directories is irregular (camelCase keys, nulls,
a string where a list is expected, blank strings). `from_dict()` absorbs all
of that so downstream code only sees clean, typed values. Shape problems are
never raised: a record that cannot even provide a slug is filtered out later.
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Optional

from converters.text import (
    coerce_string,
    coerce_string_list,
    first_non_empty,
    uniq_strings,
)
from converters.times import iso_to_ts

CONTENT_STATUS_TYPES = ("draft", "published", "archived")
DEFAULT_STATUS = "published"

# record field name -> target kind of an explicit link list
RELATED_SLUG_FIELDS = {
    "cars": "related_car_slugs",
    "guide": "related_guide_slugs",
    "column": "related_column_slugs",
    "heritage": "related_heritage_slugs",
}


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def coerce_status(value: Any) -> str:
    status = (coerce_string(value) or DEFAULT_STATUS).lower()
    return status if status in CONTENT_STATUS_TYPES else DEFAULT_STATUS


def text_field(key: str = None, default: Optional[str] = None):
    return field(default=default, metadata={"key": key, "read": coerce_string})


def list_field(key: str = None):
    return field(
        default_factory=list, metadata={"key": key, "read": coerce_string_list}
    )


def read_fields(cls, raw: dict) -> dict:
    """Read every dataclass field declaring a `read` function from `raw`.

    JSON keys default to the camelCase form of the field name; the snake_case
    form is accepted too.
    """
    values = {}
    for f in fields(cls):
        read = f.metadata.get("read")
        if read is None:
            continue
        key = f.metadata.get("key") or snake_to_camel(f.name)
        raw_value = raw.get(key, raw.get(f.name))
        value = read(raw_value)
        if value is None and isinstance(f.default, str):
            continue
        values[f.name] = value
    return values


@dataclass
class ContentItem:
    """Metadata shared by every content kind."""

    KIND: ClassVar[str] = ""

    id: str = text_field(default="")
    slug: str = text_field(default="")
    status: str = field(
        default=DEFAULT_STATUS, metadata={"key": "status", "read": coerce_status}
    )
    title: str = text_field(default="")
    title_ja: Optional[str] = text_field()
    summary: Optional[str] = text_field()
    seo_title: Optional[str] = text_field()
    seo_description: Optional[str] = text_field()
    created_at: Optional[str] = text_field()
    published_at: Optional[str] = text_field()
    updated_at: Optional[str] = text_field()
    tags: list[str] = list_field()
    intent_tags: list[str] = list_field()
    related_car_slugs: list[str] = list_field()
    related_guide_slugs: list[str] = list_field()
    related_column_slugs: list[str] = list_field()
    related_heritage_slugs: list[str] = list_field()

    @classmethod
    def from_dict(cls, raw: dict) -> "ContentItem":
        if not isinstance(raw, dict):
            raw = {}
        return cls(**read_fields(cls, raw))

    @property
    def kind(self) -> str:
        return self.KIND

    @property
    def is_published(self) -> bool:
        return self.status == "published"

    @property
    def search_date(self) -> Optional[str]:
        """Best recency signal: update -> publish -> creation time."""
        return first_non_empty([self.updated_at, self.published_at, self.created_at])

    @property
    def recency_ts(self) -> float:
        """Epoch seconds used to order pools: publish -> update -> creation."""
        return iso_to_ts(
            first_non_empty([self.published_at, self.updated_at, self.created_at])
        )

    def related_slugs_for(self, kind: str) -> list[str]:
        """Explicit link list of this record pointing at `kind`."""
        field_name = RELATED_SLUG_FIELDS.get(kind)
        if not field_name:
            return []
        return uniq_strings(getattr(self, field_name))


@dataclass
class CarItem(ContentItem):
    KIND: ClassVar[str] = "cars"

    name: str = text_field(default="")
    maker: str = text_field(default="")
    grade: Optional[str] = text_field()
    segment: Optional[str] = text_field()
    body_type: Optional[str] = text_field()
    summary_long: Optional[str] = text_field()
    body: Optional[str] = text_field()
    trouble_trends: list[str] = list_field()
    maintenance_notes: list[str] = list_field()


@dataclass
class GuideItem(ContentItem):
    KIND: ClassVar[str] = "guide"

    category: Optional[str] = text_field()
    lead: Optional[str] = text_field()
    body: Optional[str] = text_field()


@dataclass
class ColumnItem(ContentItem):
    KIND: ClassVar[str] = "column"

    category: Optional[str] = text_field()
    body: Optional[str] = text_field()
    target_keyword: Optional[str] = text_field()


@dataclass
class HeritageSection:
    id: str = ""
    title: Optional[str] = None
    car_slugs: list[str] = field(default_factory=list)
    guide_slugs: list[str] = field(default_factory=list)
    column_slugs: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: dict) -> "HeritageSection":
        return cls(
            id=coerce_string(raw.get("id")) or "",
            title=coerce_string(raw.get("title")),
            car_slugs=coerce_string_list(raw.get("carSlugs")),
            guide_slugs=coerce_string_list(raw.get("guideSlugs")),
            column_slugs=coerce_string_list(raw.get("columnSlugs")),
        )


def coerce_sections(value: Any) -> list[HeritageSection]:
    if not isinstance(value, list):
        return []
    return [HeritageSection.from_dict(v) for v in value if isinstance(v, dict)]


# heritage target kind -> section attribute holding chapter-level links
SECTION_SLUG_FIELDS = {
    "cars": "car_slugs",
    "guide": "guide_slugs",
    "column": "column_slugs",
}


@dataclass
class HeritageItem(ContentItem):
    KIND: ClassVar[str] = "heritage"

    heritage_kind: Optional[str] = text_field(key="kind")
    subtitle: Optional[str] = text_field()
    lead: Optional[str] = text_field()
    body: Optional[str] = text_field()
    maker: Optional[str] = text_field()
    brand_name: Optional[str] = text_field()
    model_name: Optional[str] = text_field()
    sections: list[HeritageSection] = field(
        default_factory=list, metadata={"key": "sections", "read": coerce_sections}
    )

    def related_slugs_for(self, kind: str) -> list[str]:
        """Chapter links come first, then the hand-entered list."""
        section_field = SECTION_SLUG_FIELDS.get(kind)
        if not section_field:
            return super().related_slugs_for(kind)
        from_sections = [
            slug
            for section in self.sections
            for slug in getattr(section, section_field)
        ]
        return uniq_strings(from_sections + super().related_slugs_for(kind))


@dataclass
class NewsItem(ContentItem):
    KIND: ClassVar[str] = "news"

    excerpt: Optional[str] = text_field()
    comment_ja: Optional[str] = text_field()
    maker: Optional[str] = text_field()
    category: Optional[str] = text_field()

    @classmethod
    def from_dict(cls, raw: dict) -> "NewsItem":
        item = super().from_dict(raw)
        # news is addressed by id; slug is a legacy alias
        if not item.slug:
            item.slug = item.id
        return item


RECORD_TYPES = {
    cls.KIND: cls for cls in (CarItem, GuideItem, ColumnItem, HeritageItem, NewsItem)
}


def record_from_dict(kind: str, raw: dict) -> ContentItem:
    """Build the native record of `kind` from a raw JSON object."""
    record_cls = RECORD_TYPES.get(kind)
    if record_cls is None:
        raise ValueError(f"Unknown content kind: {kind!r}")
    return record_cls.from_dict(raw)
