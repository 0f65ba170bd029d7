"""Filesystem-backed post store: one .md/.mdx file per post, slug = file stem"""

import logging
from pathlib import Path

from mdblog.errors import PostNotFound
from mdblog.store.repo import PostStore, is_safe_slug


logger = logging.getLogger("mdblog.store.fs")

MD_EXTENSIONS = ('.mdx', '.md')


class FileSystemStore(PostStore):
    def __init__(self, content_dir: Path | str):
        self.content_dir = Path(content_dir)

    def discover_files(self) -> list[Path]:
        """Sorted .md/.mdx files directly under content_dir; [] if the directory is missing."""
        if not self.content_dir.is_dir():
            logger.warning("content directory not found: %s", self.content_dir)
            return []
        return sorted(p for p in self.content_dir.iterdir() if p.is_file() and p.suffix in MD_EXTENSIONS)

    def list_slugs(self) -> list[str]:
        # a.md and a.mdx collapse to one slug; read() prefers .mdx
        return list(dict.fromkeys(p.stem for p in self.discover_files()))

    def _path_for(self, slug: str) -> Path | None:
        if not is_safe_slug(slug):
            return None
        for ext in MD_EXTENSIONS:
            path = self.content_dir / f"{slug}{ext}"
            if path.is_file():
                return path
        return None

    def read(self, slug: str) -> str:
        path = self._path_for(slug)
        if path is None:
            raise PostNotFound(slug)
        return path.read_text(encoding='utf-8')
