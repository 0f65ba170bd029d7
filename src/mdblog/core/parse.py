"""Front matter extraction and normalisation of raw post text into Post models"""

import re
from datetime import date, datetime
from typing import Any

import yaml
from pydantic import ValidationError

from mdblog.core.derive import (
    EXCERPT_LENGTH, WORDS_PER_MINUTE,
    format_reading_time, make_excerpt, reading_minutes,
)
from mdblog.core.models import Post
from mdblog.errors import PostParseError


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*(?:\n|$)', re.DOTALL)
DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%B %d, %Y", "%b %d, %Y", "%d %B %Y", "%d %b %Y")

UNTITLED = "Untitled Post"
UNCATEGORIZED = "Uncategorized"


def strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def parse_date(value: Any) -> date:
    """Coerce a front matter date (YAML date, ISO string, or 'April 18, 2025') to a date.

    Missing dates map to date.min so undated posts sort last.
    """
    if value is None or value == "":
        return date.min
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValueError(f"Unrecognised date: {text!r}") from None


def parse_tags(value: Any) -> list[str]:
    """Normalise tags to a list of non-empty strings, dropping exact duplicates."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"tags must be a list, got {type(value).__name__}")
    tags = [str(t).strip() for t in value if t is not None]
    return list(dict.fromkeys(t for t in tags if t))


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def parse_post(
    slug: str,
    raw: str,
    default_author: str = "Anonymous",
    words_per_minute: int = WORDS_PER_MINUTE,
    excerpt_length: int = EXCERPT_LENGTH,
    ) -> Post:
    """Parse raw post text into a Post, deriving excerpt and reading time when absent.

    Raises PostParseError if the front matter or any field is malformed.
    """
    try:
        fm, body = strip_frontmatter(raw)
        reading_time = fm.get("readingTime")
        if isinstance(reading_time, int):
            reading_time = format_reading_time(reading_time)
        return Post(
            slug=slug,
            title=_text(fm.get("title"), UNTITLED),
            date=parse_date(fm.get("date")),
            author=_text(fm.get("author"), default_author),
            category=_text(fm.get("category"), UNCATEGORIZED),
            tags=parse_tags(fm.get("tags")),
            excerpt=_text(fm.get("excerpt"), "") or make_excerpt(body, excerpt_length),
            cover_image=fm.get("coverImage") or fm.get("image"),
            reading_time=_text(reading_time, "") or format_reading_time(reading_minutes(body, words_per_minute)),
            featured=fm.get("featured") or False,
            author_image=fm.get("authorImage"),
            content=body,
        )
    except (ValueError, ValidationError) as e:
        raise PostParseError(slug, e) from e
