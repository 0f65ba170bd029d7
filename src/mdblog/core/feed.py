"""RSS 2.0 feed and sitemap rendering over post listings"""

from datetime import date, datetime, time, timezone
from email.utils import format_datetime
from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader
from pydantic import BaseModel

from mdblog.config import Settings
from mdblog.core.models import PostMeta


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
STATIC_ROUTES = ("", "/about", "/projects", "/experience", "/contact", "/blog")

_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=True,
    keep_trailing_newline=True,
)


class SitemapEntry(BaseModel):
    url: str
    lastmod: date


def _base_url(settings: Settings) -> str:
    return settings.site_url.rstrip("/")


def post_url(settings: Settings, slug: str) -> str:
    return f"{_base_url(settings)}/blog/{slug}"


def rfc822(value: date | datetime) -> str:
    """Format a date or datetime for RSS (dates are taken as midnight UTC)."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time(), tzinfo=timezone.utc)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value)


def build_rss(posts: Iterable[PostMeta], settings: Settings, now: datetime | None = None) -> str:
    """Render an RSS 2.0 document with one item per post, in the order given."""
    now = now or datetime.now(timezone.utc)
    items = [
        {
            "title": p.title,
            "link": post_url(settings, p.slug),
            "pub_date": rfc822(p.date),
            "description": p.excerpt,
            "tags": p.tags,
        }
        for p in posts
    ]
    return _env.get_template("rss.xml.jinja").render(
        title=settings.site_title,
        base_url=_base_url(settings),
        description=settings.site_description,
        language=settings.language,
        build_date=rfc822(now),
        items=items,
    )


def sitemap_entries(posts: Iterable[PostMeta], settings: Settings, now: datetime | None = None) -> list[SitemapEntry]:
    """Static site routes (last modified now) followed by one entry per post (last modified on its date).

    Undated posts are stamped with today's date.
    """
    today = (now or datetime.now(timezone.utc)).date()
    base = _base_url(settings)
    entries = [SitemapEntry(url=f"{base}{route}", lastmod=today) for route in STATIC_ROUTES]
    entries.extend(
        SitemapEntry(url=post_url(settings, p.slug), lastmod=today if p.date == date.min else p.date)
        for p in posts
    )
    return entries


def build_sitemap(entries: Iterable[SitemapEntry]) -> str:
    return _env.get_template("sitemap.xml.jinja").render(entries=list(entries))
