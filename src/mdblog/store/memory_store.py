from dataclasses import dataclass, field

from mdblog.errors import PostNotFound
from mdblog.store.repo import PostStore


@dataclass
class MemoryStore(PostStore):
    """Embedded posts held as {slug: raw_text}; listed in insertion order."""
    _posts: dict[str, str] = field(default_factory=dict)

    def put(self, slug: str, raw: str) -> None:
        self._posts[slug] = raw

    def remove(self, slug: str) -> None:
        self._posts.pop(slug, None)

    def list_slugs(self) -> list[str]:
        return list(self._posts)

    def read(self, slug: str) -> str:
        try:
            return self._posts[slug]
        except KeyError:
            raise PostNotFound(slug) from None
