"""Blog repository: cached, failure-tolerant access to posts behind a PostStore"""

import logging
import time
from typing import Callable

from mdblog.config import Settings
from mdblog.core.cache import TTLCache
from mdblog.core.derive import EXCERPT_LENGTH, WORDS_PER_MINUTE
from mdblog.core.models import Post, PostMeta
from mdblog.core.parse import parse_post
from mdblog.core.related import rank_related
from mdblog.core.search import filter_by_category, filter_by_tag
from mdblog.errors import PostNotFound, PostParseError
from mdblog.store.fs_store import FileSystemStore
from mdblog.store.repo import PostStore


logger = logging.getLogger("mdblog.repository")

DEFAULT_TTL = 300.0
_ALL = "__all__"


class BlogRepository:
    """Reads posts from a store and caches parsed results for `ttl` seconds.

    The listing snapshot and the per-slug entries share one expiry policy.
    Construct once per process and pass it to consumers; nothing here is global.
    Missing or malformed posts are logged and reported as absent, never raised.
    """

    def __init__(
        self,
        store: PostStore,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
        default_author: str = "Anonymous",
        words_per_minute: int = WORDS_PER_MINUTE,
        excerpt_length: int = EXCERPT_LENGTH,
        ):
        self.store = store
        self.default_author = default_author
        self.words_per_minute = words_per_minute
        self.excerpt_length = excerpt_length
        self._listing = TTLCache(ttl=ttl, clock=clock)
        self._posts = TTLCache(ttl=ttl, clock=clock)

    @classmethod
    def from_settings(cls, settings: Settings, store: PostStore | None = None) -> "BlogRepository":
        """Build a repository from Settings; defaults to a FileSystemStore over settings.content_dir."""
        return cls(
            store=store or FileSystemStore(settings.content_dir),
            ttl=settings.cache_ttl,
            default_author=settings.default_author,
            words_per_minute=settings.words_per_minute,
            excerpt_length=settings.excerpt_length,
        )

    # --- loading ---

    def _load(self, slug: str) -> Post | None:
        try:
            raw = self.store.read(slug)
        except PostNotFound:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("failed to read post %s: %s", slug, e)
            return None
        try:
            return parse_post(
                slug, raw,
                default_author=self.default_author,
                words_per_minute=self.words_per_minute,
                excerpt_length=self.excerpt_length,
            )
        except PostParseError as e:
            logger.warning("%s", e)
            return None

    def _load_all(self) -> list[PostMeta]:
        # re-read every post so the snapshot is no older than its own timestamp;
        # fresh parses also refresh the per-slug cache
        metas = []
        for slug in self.get_all_slugs():
            post = self._load(slug)
            self._posts.set(slug, post)
            if post is not None:
                metas.append(post.meta())
        # stable: equal dates keep store enumeration order
        return sorted(metas, key=lambda m: m.date, reverse=True)

    # --- public API ---

    def get_all_slugs(self) -> list[str]:
        try:
            return self.store.list_slugs()
        except OSError as e:
            logger.warning("failed to list posts: %s", e)
            return []

    def get_full_document(self, slug: str) -> Post | None:
        """Metadata plus body for slug, or None if it does not exist or cannot be parsed."""
        return self._posts.get_or_load(slug, lambda: self._load(slug))

    def get_metadata(self, slug: str) -> PostMeta | None:
        post = self.get_full_document(slug)
        return post.meta() if post is not None else None

    def get_all_metadata(self) -> list[PostMeta]:
        """All readable posts' metadata, newest first. Same list object until the TTL lapses."""
        return self._listing.get_or_load(_ALL, self._load_all)

    def get_related_posts(self, slug: str, limit: int = 3) -> list[PostMeta]:
        reference = self.get_metadata(slug)
        if reference is None:
            return []
        return rank_related(reference, self.get_all_metadata(), limit)

    def get_featured_posts(self) -> list[PostMeta]:
        return [p for p in self.get_all_metadata() if p.featured]

    def get_posts_by_category(self, category: str) -> list[PostMeta]:
        return filter_by_category(self.get_all_metadata(), category)

    def get_posts_by_tag(self, tag: str) -> list[PostMeta]:
        return filter_by_tag(self.get_all_metadata(), tag)

    def get_adjacent_posts(self, slug: str) -> tuple[PostMeta | None, PostMeta | None]:
        """(previous, next) around slug in the newest-first listing.

        previous is the next-older post, next the next-newer one; either may be None.
        """
        posts = self.get_all_metadata()
        index = next((i for i, p in enumerate(posts) if p.slug == slug), None)
        if index is None:
            return None, None
        previous = posts[index + 1] if index + 1 < len(posts) else None
        newer = posts[index - 1] if index > 0 else None
        return previous, newer

    def clear_cache(self) -> None:
        self._listing.clear()
        self._posts.clear()
