"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdblog.cli.commands import (
    list_cmd, main_callback, related_cmd, rss_cmd, search_cmd,
    show_cmd, sitemap_cmd, sync_cmd, tags_cmd, toc_cmd,
)


app = typer.Typer(name="mdblog", no_args_is_help=True, help="Markdown/MDX blog content tools")

app.callback()(main_callback)
app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
app.command(name="related")(related_cmd)
app.command(name="search")(search_cmd)
app.command(name="tags")(tags_cmd)
app.command(name="toc")(toc_cmd)
app.command(name="rss")(rss_cmd)
app.command(name="sitemap")(sitemap_cmd)
app.command(name="sync")(sync_cmd)
