"""Related-post ranking by category and tag overlap"""

from typing import Iterable

from mdblog.core.models import PostMeta


CATEGORY_WEIGHT = 5
TAG_WEIGHT = 2


def _norm(value: str) -> str:
    return value.strip().casefold()


def score(reference: PostMeta, candidate: PostMeta) -> int:
    """+5 for a matching category, +2 for each distinct shared tag (both case-insensitive)."""
    total = 0
    if _norm(reference.category) == _norm(candidate.category):
        total += CATEGORY_WEIGHT
    shared = {_norm(t) for t in reference.tags} & {_norm(t) for t in candidate.tags}
    return total + TAG_WEIGHT * len(shared)


def rank_related(reference: PostMeta, candidates: Iterable[PostMeta], limit: int = 3) -> list[PostMeta]:
    """Top `limit` candidates by score, newest first among equal scores.

    The reference post is never included. Zero-score posts fill any remaining
    slots, so the result holds min(limit, len(others)) posts.
    """
    if limit <= 0:
        return []
    others = [c for c in candidates if c.slug != reference.slug]
    # two stable passes: date desc, then score desc
    others.sort(key=lambda p: p.date, reverse=True)
    others.sort(key=lambda p: score(reference, p), reverse=True)
    return others[:limit]
