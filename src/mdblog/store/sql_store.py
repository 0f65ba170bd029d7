"""SQLModel-backed post store and filesystem-to-database sync"""

import hashlib
import logging
from datetime import datetime

from sqlmodel import Session, select

from mdblog.errors import PostNotFound
from mdblog.store.repo import PostStore
from mdblog.store.tables import PostRow


logger = logging.getLogger("mdblog.store.sql")


class SQLStore(PostStore):
    """Posts stored as raw text rows. Each call opens its own short-lived Session."""

    def __init__(self, engine):
        self.engine = engine

    def list_slugs(self) -> list[str]:
        with Session(self.engine) as session:
            return list(session.exec(select(PostRow.slug).order_by(PostRow.slug)).all())

    def read(self, slug: str) -> str:
        with Session(self.engine) as session:
            row = session.get(PostRow, slug)
            if row is None:
                raise PostNotFound(slug)
            return row.raw

    def _upsert(self, session: Session, slug: str, raw: str) -> str:
        """Insert or update one row; flushes but does not commit. Returns the status."""
        digest = hashlib.sha256(raw.encode("utf-8")).hexdigest()
        row = session.get(PostRow, slug)
        if row is None:
            session.add(PostRow(slug=slug, raw=raw, hash=digest))
            session.flush()
            return 'created'
        if row.hash == digest:
            return 'unchanged'
        row.raw = raw
        row.hash = digest
        row.updated_at = datetime.now()
        session.add(row)
        session.flush()
        return 'updated'

    def upsert(self, slug: str, raw: str) -> str:
        """Store raw text under slug. Returns 'created', 'updated', or 'unchanged'."""
        with Session(self.engine) as session:
            status = self._upsert(session, slug, raw)
            session.commit()
        return status

    def delete(self, slug: str) -> bool:
        with Session(self.engine) as session:
            row = session.get(PostRow, slug)
            if row is None:
                return False
            session.delete(row)
            session.commit()
        return True

    def sync_from(self, source: PostStore, prune: bool = False) -> dict[str, int]:
        """Copy every post of source into this store in one transaction.

        Returns counts keyed by created/updated/unchanged/failed/deleted. Unreadable
        source posts are logged and counted as failed. With prune=True, rows whose
        slug no longer exists in source are deleted.
        """
        counts = {"created": 0, "updated": 0, "unchanged": 0, "failed": 0, "deleted": 0}
        slugs = source.list_slugs()
        with Session(self.engine) as session:
            for slug in slugs:
                try:
                    raw = source.read(slug)
                except (PostNotFound, OSError, UnicodeDecodeError) as e:
                    logger.warning("skipping %s: %s", slug, e)
                    counts["failed"] += 1
                    continue
                counts[self._upsert(session, slug, raw)] += 1
            if prune:
                keep = set(slugs)
                for row in session.exec(select(PostRow)).all():
                    if row.slug not in keep:
                        session.delete(row)
                        counts["deleted"] += 1
            session.commit()
        return counts
