"""Stateless search and filtering over post listings"""

from collections import Counter
from typing import Iterable

from mdblog.core.models import PostMeta


ALL_TAGS = "All"


def search_posts(posts: Iterable[PostMeta], query: str) -> list[PostMeta]:
    """Case-insensitive substring match over title, excerpt, and tags. Blank query returns everything."""
    posts = list(posts)
    q = (query or "").strip().casefold()
    if not q:
        return posts
    return [
        p for p in posts
        if q in p.title.casefold()
        or q in p.excerpt.casefold()
        or any(q in t.casefold() for t in p.tags)
    ]


def filter_by_tag(posts: Iterable[PostMeta], tag: str) -> list[PostMeta]:
    """Posts carrying tag (exact, case-insensitive). Blank or 'All' returns everything."""
    posts = list(posts)
    if not tag or not tag.strip() or tag == ALL_TAGS:
        return posts
    wanted = tag.strip().casefold()
    return [p for p in posts if any(t.casefold() == wanted for t in p.tags)]


def filter_by_category(posts: Iterable[PostMeta], category: str) -> list[PostMeta]:
    wanted = category.strip().casefold()
    return [p for p in posts if p.category.casefold() == wanted]


def all_tags(posts: Iterable[PostMeta]) -> list[str]:
    """Sorted unique tags across posts."""
    return sorted({t for p in posts for t in p.tags})


def all_categories(posts: Iterable[PostMeta]) -> list[tuple[str, int]]:
    """(category, post_count) pairs sorted by category name."""
    return sorted(Counter(p.category for p in posts).items())
