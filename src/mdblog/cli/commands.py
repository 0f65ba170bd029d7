"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdblog.config import Settings, load_config
from mdblog.core.feed import build_rss, build_sitemap, sitemap_entries
from mdblog.core.models import PostMeta
from mdblog.core.search import all_categories, all_tags, filter_by_category, filter_by_tag, search_posts
from mdblog.core.toc import build_toc
from mdblog.repository import BlogRepository
from mdblog.store.database import init_db, make_engine
from mdblog.store.fs_store import FileSystemStore
from mdblog.store.sql_store import SQLStore


LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(ctx: typer.Context, overrides: dict = None) -> Settings:
    """Load config with global and per-command overrides and standard CLI error handling."""
    merged = dict((ctx.obj or {}).get("overrides", {}))
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})
    try:
        return load_config(overrides=merged)
    except ValueError as e:
        _fail(str(e))


def _repo(ctx: typer.Context, settings: Settings) -> BlogRepository:
    """Repository over the content directory, or over the database with --db."""
    store = None
    if (ctx.obj or {}).get("use_db"):
        engine = make_engine(settings.db_url)
        init_db(engine)
        store = SQLStore(engine)
    return BlogRepository.from_settings(settings, store=store)


def _echo_posts(posts: list[PostMeta], as_json: bool = False) -> None:
    if as_json:
        typer.echo(json.dumps([p.model_dump(mode="json", by_alias=True) for p in posts], indent=2))
        return
    for p in posts:
        flag = "*" if p.featured else " "
        typer.echo(f"{flag} {p.date.isoformat()}  {p.slug}  {p.title}")


def _write_or_echo(text: str, out: Optional[str]) -> None:
    if out is None:
        typer.echo(text, nl=False)
        return
    path = Path(out)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    typer.echo(f"Wrote {path}")


def main_callback(
    ctx: typer.Context,
    content_dir: Annotated[Optional[str], typer.Option("--content-dir", help="Directory of .md/.mdx posts")] = None,
    db_url: Annotated[Optional[str], typer.Option("--db-url", help="Database URL for --db and sync")] = None,
    use_db: Annotated[bool, typer.Option("--db", help="Read posts from the database instead of files")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log at DEBUG level")] = False,
    ):
    """Configure logging and shared options for every command."""
    ctx.obj = {"overrides": {"content_dir": content_dir, "db_url": db_url}, "use_db": use_db}
    settings = _settings(ctx)
    logging.basicConfig(level="DEBUG" if verbose else settings.log_level, format=LOG_FORMAT)


def list_cmd(
    ctx: typer.Context,
    tag: Annotated[Optional[str], typer.Option("--tag", help="Only posts with this tag")] = None,
    category: Annotated[Optional[str], typer.Option("--category", help="Only posts in this category")] = None,
    featured: Annotated[bool, typer.Option("--featured", help="Only featured posts")] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print metadata as JSON")] = False,
    ):
    """List post metadata, newest first."""
    repo = _repo(ctx, _settings(ctx))
    posts = repo.get_featured_posts() if featured else repo.get_all_metadata()
    if tag:
        posts = filter_by_tag(posts, tag)
    if category:
        posts = filter_by_category(posts, category)
    if not posts and not as_json:
        typer.echo("No posts found.")
        return
    _echo_posts(posts, as_json)


def show_cmd(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Post slug")],
    as_json: Annotated[bool, typer.Option("--json", help="Print the full post as JSON")] = False,
    ):
    """Show one post's metadata and body."""
    repo = _repo(ctx, _settings(ctx))
    post = repo.get_full_document(slug)
    if post is None:
        _fail(f"Post not found: {slug}")
    if as_json:
        previous, newer = repo.get_adjacent_posts(slug)
        data = post.model_dump(mode="json", by_alias=True)
        data["prevPost"] = previous.slug if previous else None
        data["nextPost"] = newer.slug if newer else None
        typer.echo(json.dumps(data, indent=2))
        return
    typer.echo(post.title)
    typer.echo(f"{post.date.isoformat()} | {post.author} | {post.category} | {post.reading_time}")
    if post.tags:
        typer.echo(f"tags: {', '.join(post.tags)}")
    typer.echo("")
    typer.echo(post.content)


def related_cmd(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Post slug")],
    limit: Annotated[Optional[int], typer.Option("--limit", "-n", help="Max related posts")] = None,
    ):
    """List posts related to SLUG by category and shared tags."""
    settings = _settings(ctx)
    repo = _repo(ctx, settings)
    if repo.get_metadata(slug) is None:
        _fail(f"Post not found: {slug}")
    _echo_posts(repo.get_related_posts(slug, settings.related_limit if limit is None else limit))


def search_cmd(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Text to find in titles, excerpts, and tags")],
    ):
    """Search posts by title, excerpt, or tag."""
    repo = _repo(ctx, _settings(ctx))
    results = search_posts(repo.get_all_metadata(), query)
    if not results:
        typer.echo("No matching posts.")
        return
    _echo_posts(results)


def tags_cmd(
    ctx: typer.Context,
    categories: Annotated[bool, typer.Option("--categories", help="List categories with post counts instead")] = False,
    ):
    """List all tags (or categories) in use."""
    posts = _repo(ctx, _settings(ctx)).get_all_metadata()
    if categories:
        for name, count in all_categories(posts):
            typer.echo(f"{name} ({count})")
        return
    for t in all_tags(posts):
        typer.echo(t)


def toc_cmd(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Post slug")],
    ):
    """Print a post's table of contents."""
    post = _repo(ctx, _settings(ctx)).get_full_document(slug)
    if post is None:
        _fail(f"Post not found: {slug}")
    for item in build_toc(post.content):
        typer.echo(f"{'  ' * (item.level - 1)}- {item.text} (#{item.id})")


def rss_cmd(
    ctx: typer.Context,
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Write the feed here instead of stdout")] = None,
    ):
    """Render the RSS 2.0 feed."""
    settings = _settings(ctx)
    _write_or_echo(build_rss(_repo(ctx, settings).get_all_metadata(), settings), out)


def sitemap_cmd(
    ctx: typer.Context,
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Write the sitemap here instead of stdout")] = None,
    ):
    """Render sitemap.xml for static pages and posts."""
    settings = _settings(ctx)
    posts = _repo(ctx, settings).get_all_metadata()
    _write_or_echo(build_sitemap(sitemap_entries(posts, settings)), out)


def sync_cmd(
    ctx: typer.Context,
    prune: Annotated[bool, typer.Option("--prune", help="Delete database posts missing from the content dir")] = False,
    ):
    """Copy posts from the content directory into the database."""
    settings = _settings(ctx)
    engine = make_engine(settings.db_url)
    init_db(engine)
    try:
        counts = SQLStore(engine).sync_from(FileSystemStore(settings.content_dir), prune=prune)
    except Exception as e:
        _fail("Sync failed", e)
    typer.echo(
        f"Sync complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged, "
        f"{counts['failed']} failed, "
        f"{counts['deleted']} deleted"
    )
