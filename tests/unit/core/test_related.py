"""Unit tests for core/related.py"""

from datetime import date

import pytest

from mdblog.core.models import PostMeta
from mdblog.core.related import rank_related, score


def _meta(slug: str, category: str = "X", tags: list[str] = None, day: int = 1) -> PostMeta:
    return PostMeta(
        slug=slug, title=slug.title(), date=date(2025, 1, day),
        author="Ada", category=category, tags=tags or [],
    )


def test_score_category_and_tag():
    """Same category plus one shared tag scores 5 + 2."""
    ref = _meta("ref", "X", ["a", "b"])
    assert score(ref, _meta("c1", "X", ["a", "c"])) == 7


def test_score_tags_only():
    """Different category with two shared tags scores 2 * 2."""
    ref = _meta("ref", "X", ["a", "b"])
    assert score(ref, _meta("c2", "Y", ["a", "b"])) == 4


def test_score_is_case_insensitive():
    ref = _meta("ref", "Data Architecture", ["Architecture"])
    assert score(ref, _meta("c", "data architecture", ["ARCHITECTURE"])) == 7


def test_score_counts_each_shared_tag_once():
    ref = _meta("ref", "X", ["a", "A"])
    assert score(ref, _meta("c", "Y", ["a"])) == 2


def test_rank_orders_by_score():
    ref = _meta("ref", "X", ["a", "b"])
    first = _meta("c1", "X", ["a", "c"])
    second = _meta("c2", "Y", ["a", "b"])
    assert rank_related(ref, [second, first, ref]) == [first, second]


def test_rank_breaks_ties_by_date_desc():
    ref = _meta("ref", "X")
    old = _meta("old", "Y", day=1)
    new = _meta("new", "Y", day=20)
    assert [p.slug for p in rank_related(ref, [old, new])] == ["new", "old"]


def test_rank_excludes_reference():
    ref = _meta("ref")
    others = [_meta(f"p{i}", day=i + 1) for i in range(5)]
    result = rank_related(ref, [ref, *others], limit=10)
    assert all(p.slug != "ref" for p in result)


@pytest.mark.parametrize("n_others,limit,expected", [
    (5, 3, 3),
    (2, 3, 2),
    (0, 3, 0),
    (5, 0, 0),
])
def test_rank_length_is_min_of_limit_and_others(n_others, limit, expected):
    """Zero-score posts pad the result up to the limit."""
    ref = _meta("ref", "X", ["a"])
    others = [_meta(f"p{i}", "Z", ["z"], day=i + 1) for i in range(n_others)]
    assert len(rank_related(ref, [ref, *others], limit=limit)) == expected
