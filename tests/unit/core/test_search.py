"""Unit tests for core/search.py"""

from datetime import date

import pytest

from mdblog.core.models import PostMeta
from mdblog.core.search import all_categories, all_tags, filter_by_category, filter_by_tag, search_posts


@pytest.fixture(name="posts")
def posts_fixture():
    return [
        PostMeta(slug="a", title="Data Lakehouse", date=date(2025, 4, 18), author="Ada",
                 category="Architecture", tags=["Lakehouse", "Best Practices"], excerpt="Lakes."),
        PostMeta(slug="b", title="AI Agents", date=date(2025, 4, 15), author="Ada",
                 category="AI", tags=["AI"], excerpt="Agents orchestrate pipelines."),
        PostMeta(slug="c", title="dbt tricks", date=date(2025, 4, 5), author="Ada",
                 category="architecture", tags=["SQL"], excerpt="Transformations."),
    ]


def _slugs(posts):
    return [p.slug for p in posts]


def test_search_blank_query_returns_all(posts):
    assert search_posts(posts, "   ") == posts


@pytest.mark.parametrize("query,expected", [
    ("lakehouse", ["a"]),      # title
    ("PIPELINES", ["b"]),      # excerpt
    ("practices", ["a"]),      # tag substring
    ("nothing-here", []),
])
def test_search_matches_title_excerpt_tags(posts, query, expected):
    assert _slugs(search_posts(posts, query)) == expected


def test_filter_by_tag_exact_case_insensitive(posts):
    assert _slugs(filter_by_tag(posts, "sql")) == ["c"]
    assert filter_by_tag(posts, "Lake") == []


@pytest.mark.parametrize("tag", ["", "All"])
def test_filter_by_tag_all(posts, tag):
    assert filter_by_tag(posts, tag) == posts


def test_filter_by_category(posts):
    assert _slugs(filter_by_category(posts, "ARCHITECTURE")) == ["a", "c"]


def test_all_tags_sorted_unique(posts):
    assert all_tags(posts + posts) == ["AI", "Best Practices", "Lakehouse", "SQL"]


def test_all_categories_counts(posts):
    assert all_categories(posts) == [("AI", 1), ("Architecture", 1), ("architecture", 1)]
