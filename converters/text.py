"""
Text Normalization Utilities

Single source of truth for every string the search engine compares.

Functions:
    - normalize_text: NFKC + lower-case + whitespace collapse (matching text)
    - normalize_spaces: whitespace collapse only (display text)
    - to_plain_text: strip light Markdown / HTML from free text
    - clamp_text: bounded display text with ellipsis
    - first_non_empty: explicit "first non-empty wins" priority chains
    - uniq_strings: order-preserving dedup
    - coerce_string, coerce_string_list: tolerant readers for raw JSON values
"""

import re
import unicodedata

from typing import Any, Iterable, Optional

ELLIPSIS = "…"

RE_SPACES = re.compile(r"[　\s]+")
RE_CLAMP_TAIL = re.compile(r"[、。,. ]+$")

# Order matters: blocks before inline, images before links
PLAIN_TEXT_PATTERNS = [
    (re.compile(r"```[\s\S]*?```"), " "),  # code block
    (re.compile(r"`[^`]*`"), " "),  # inline code
    (re.compile(r"!\[[^\]]*\]\([^)]*\)"), " "),  # images
    (re.compile(r"\[([^\]]+)\]\([^)]*\)"), r"\1"),  # links -> label
    (re.compile(r"^\s{0,3}#{1,6}\s+", re.MULTILINE), ""),  # headings
    (re.compile(r"^\s{0,3}>\s?", re.MULTILINE), ""),  # blockquotes
    (re.compile(r"^\s{0,3}[-*+]\s+", re.MULTILINE), ""),  # bullet markers
    (re.compile(r"^\s{0,3}\d+\.\s+", re.MULTILINE), ""),  # numbered markers
    (re.compile(r"[*_]{1,3}"), ""),  # emphasis
    (re.compile(r"<[^>]+>"), " "),  # html tags
]


def normalize_spaces(text: Any) -> str:
    """Collapse whitespace runs (incl. full-width spaces) and trim.

    Case is preserved, so the result is fit for display.
    """
    if not isinstance(text, str):
        return ""
    return RE_SPACES.sub(" ", text).strip()


def normalize_text(text: Any) -> str:
    """Canonicalize text for matching.

    Steps: NFKC compatibility normalization, lower-case folding, collapse of
    whitespace / full-width space runs to one ASCII space, trim.

    Idempotent: ``normalize_text(normalize_text(x)) == normalize_text(x)``.
    Non-string input (including None) normalizes to "".

    Example:
        >>> normalize_text("  ＴＵＲＢＯ　Engine ")
        'turbo engine'
    """
    if not isinstance(text, str):
        return ""
    text = unicodedata.normalize("NFKC", text).lower()
    # lower() can leave decomposed sequences behind (e.g. "İ")
    text = unicodedata.normalize("NFKC", text)
    return RE_SPACES.sub(" ", text).strip()


def to_plain_text(text: Any) -> str:
    """Strip light Markdown and HTML markup, keeping readable text.

    Not a Markdown parser: good enough for descriptions and haystacks.
    """
    if not isinstance(text, str):
        return ""
    for pattern, repl in PLAIN_TEXT_PATTERNS:
        text = pattern.sub(repl, text)
    return normalize_spaces(text)


def clamp_text(text: Any, max_chars: int) -> str:
    """Clamp display text to at most `max_chars` characters.

    When truncation happens, the text is cut to leave room for the ellipsis,
    trailing punctuation/spaces are trimmed, then "…" is appended.

    Example:
        >>> clamp_text("abcdef, ghij", 8)
        'abcdef…'
    """
    text = normalize_spaces(text)
    if not text or max_chars <= 0:
        return ""
    if len(text) <= max_chars:
        return text
    sliced = RE_CLAMP_TAIL.sub("", text[: max_chars - 1])
    return f"{sliced}{ELLIPSIS}"


def coerce_string(value: Any) -> Optional[str]:
    """Return a stripped non-empty string, or None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def coerce_string_list(value: Any) -> list[str]:
    """Read a list of strings from a raw JSON value.

    A single string becomes a one-item list; non-string members and blanks
    are dropped; anything else yields [].
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    values = [coerce_string(v) for v in value]
    return [v for v in values if v]


def first_non_empty(candidates: Iterable[Any]) -> Optional[str]:
    """Resolve a priority chain: first candidate with non-blank text wins.

    Example:
        >>> first_non_empty([None, "  ", " Title "])
        'Title'
    """
    for candidate in candidates:
        value = coerce_string(candidate)
        if value:
            return value
    return None


def uniq_strings(values: Iterable[Any]) -> list[str]:
    """Dedup stripped non-blank strings, keeping first occurrences in order."""
    seen = set()
    res = []
    for value in values:
        value = coerce_string(value)
        if not value or value in seen:
            continue
        seen.add(value)
        res.append(value)
    return res
