"""Table-of-contents extraction from markdown headings"""

from mdblog.core.derive import MDX_ESM_RE
from mdblog.core.models import TocItem
from mdblog.core.utils.slug import Slugger
from mdblog.core.utils.tokens import heading_level, inline_text, make_parser


MAX_TOC_LEVEL = 4


def build_toc(markdown: str, max_level: int = MAX_TOC_LEVEL) -> list[TocItem]:
    """Return h1..h{max_level} headings in document order with unique anchor ids.

    Ids are assigned to every heading (deeper ones included) so they match the
    anchors a renderer would put on the page; only the listed levels are returned.
    """
    tokens = make_parser().parse(MDX_ESM_RE.sub('', markdown))
    slugger = Slugger()
    items = []
    for i, tok in enumerate(tokens):
        level = heading_level(tok)
        if level is None or i + 1 >= len(tokens):
            continue
        text = inline_text(tokens[i + 1]).strip()
        if not text:
            continue
        anchor = slugger.slug(text)
        if level <= max_level:
            items.append(TocItem(id=anchor, text=text, level=level))
    return items
