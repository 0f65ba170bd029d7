"""Content store interface: enumerate slugs and read raw post text"""

from abc import ABC, abstractmethod
from pathlib import PurePosixPath


class PostStore(ABC):
    @abstractmethod
    def list_slugs(self) -> list[str]:
        """Return every available slug in a stable order."""
        raise NotImplementedError

    @abstractmethod
    def read(self, slug: str) -> str:
        """Return raw post text (front matter + body). Raises PostNotFound."""
        raise NotImplementedError


def is_safe_slug(slug: str) -> bool:
    """True if slug is a single path segment (no separators, no '.' / '..')."""
    if not slug or "\\" in slug:
        return False
    parts = PurePosixPath(slug).parts
    return len(parts) == 1 and parts[0] not in (".", "..") and parts[0] == slug
