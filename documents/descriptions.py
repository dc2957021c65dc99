"""
Titles and Descriptions per Content Kind

Each builder walks an explicit priority chain of candidate fields and
falls back to a kind-specific sentence, so no document reaches the index
with an empty title or preview.
"""

import re

from typing import Iterable, Optional

from converters.text import (
    clamp_text,
    first_non_empty,
    normalize_spaces,
    to_plain_text,
)
from documents.records import (
    CarItem,
    ColumnItem,
    GuideItem,
    HeritageItem,
    NewsItem,
)
from ranks.constants import (
    DESCRIPTION_CARD_MAX_CHARS,
    DESCRIPTION_MAX_CHARS,
    DESCRIPTION_MIN_CHARS,
)

SITE_BRAND = "CAR BOUTIQUE"
RE_BRAND_TAIL = re.compile(rf"(?:\s*[|｜]\s*{SITE_BRAND})+$", re.IGNORECASE)
RE_BRAND_HEAD = re.compile(rf"^{SITE_BRAND}(?:\s*[|｜]\s*)+", re.IGNORECASE)

TITLE_PLACEHOLDERS = {
    "cars": "車種",
    "guide": "ガイド",
    "column": "コラム",
    "heritage": "HERITAGE",
    "news": "ニュース",
}
NEWS_FALLBACK_DESCRIPTION = (
    "メーカー公式サイト等の一次情報リンクを要点整理したニュースです。"
)


def strip_brand(title: Optional[str]) -> str:
    """Remove "... | CAR BOUTIQUE" / "CAR BOUTIQUE | ..." decorations."""
    title = normalize_spaces(title)
    if not title:
        return ""
    title = RE_BRAND_TAIL.sub("", title)
    title = RE_BRAND_HEAD.sub("", title)
    return normalize_spaces(title)


def description_from_candidates(
    candidates: Iterable[Optional[str]],
    fallback: str,
    min_chars: int = DESCRIPTION_MIN_CHARS,
    max_chars: int = DESCRIPTION_MAX_CHARS,
) -> str:
    """First candidate with enough plain text wins, else `fallback`.

    The winner is clamped twice: to SERP size, then to card size.
    """
    plains = (to_plain_text(c) for c in candidates)
    chosen = first_non_empty(p for p in plains if len(p) >= min_chars)
    text = clamp_text(chosen or fallback, max_chars)
    return clamp_text(text, DESCRIPTION_CARD_MAX_CHARS)


def car_display_name(car: CarItem) -> str:
    return normalize_spaces(" ".join(p for p in (car.maker, car.name, car.grade) if p))


def build_car_title(car: CarItem) -> str:
    return first_non_empty(
        [
            car_display_name(car),
            strip_brand(car.title),
            strip_brand(car.title_ja),
            TITLE_PLACEHOLDERS["cars"],
        ]
    )


def build_car_description(car: CarItem) -> str:
    display = car_display_name(car)
    if display:
        fallback = f"{display}の特徴・維持費・中古相場・故障/弱点の要点を、購入前の判断材料として整理します。"
    else:
        fallback = "車種の特徴・維持費・中古相場・弱点の要点を、購入前の判断材料として整理します。"
    return description_from_candidates(
        [car.seo_description, car.summary_long, car.summary], fallback
    )


def build_article_title(item) -> str:
    """Japanese title first for guide / column / heritage / news."""
    return first_non_empty(
        [
            strip_brand(item.title_ja),
            strip_brand(item.title),
            TITLE_PLACEHOLDERS[item.KIND],
        ]
    )


def build_guide_description(guide: GuideItem) -> str:
    title = strip_brand(guide.title)
    if title:
        fallback = f"{title}の結論・手順・注意点を、迷わない順番で整理します。"
    else:
        fallback = "結論・手順・注意点を、迷わない順番で整理します。"
    return description_from_candidates(
        [guide.seo_description, guide.summary, guide.lead, guide.body], fallback
    )


def build_column_description(column: ColumnItem) -> str:
    keyword = strip_brand(first_non_empty([column.target_keyword, column.title]))
    if keyword:
        fallback = f"この記事では「{keyword}」の原因・対処・費用目安・放置リスクを整理します。"
    else:
        fallback = "原因・対処・費用目安・放置リスクを整理します。"
    return description_from_candidates(
        [column.seo_description, column.summary, column.body], fallback
    )


def build_heritage_description(heritage: HeritageItem) -> str:
    title = strip_brand(first_non_empty([heritage.title, heritage.title_ja]))
    if title:
        fallback = f"{title}の背景・時代・代表車を、一次情報と定番論点で整理します。"
    else:
        fallback = "ブランド/時代の背景と代表車を、一次情報と定番論点で整理します。"
    return description_from_candidates(
        [
            heritage.seo_description,
            heritage.summary,
            heritage.lead,
            heritage.subtitle,
            heritage.body,
        ],
        fallback,
    )


def build_news_description(news: NewsItem) -> str:
    return description_from_candidates(
        [news.seo_description, news.excerpt, news.comment_ja],
        NEWS_FALLBACK_DESCRIPTION,
    )
