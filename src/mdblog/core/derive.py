"""Derived post fields: word count, reading time, and plain-text excerpts"""

import math
import re

from mdblog.core.utils.tokens import inline_text, make_parser


WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 150
ELLIPSIS = "..."

MDX_ESM_RE = re.compile(r'^(?:import|export)\s.*$', re.MULTILINE)


def word_count(text: str) -> int:
    return len(text.split())


def reading_minutes(text: str, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Minutes to read text at words_per_minute, rounded up, never below 1."""
    return max(1, math.ceil(word_count(text) / words_per_minute))


def format_reading_time(minutes: int) -> str:
    return f"{minutes} min read"


def plain_text(markdown: str) -> str:
    """Flatten markdown to prose: inline text of headings, paragraphs and list items.

    MDX import/export lines, code blocks, raw HTML / JSX blocks, and images are
    dropped; link text is kept.
    """
    tokens = make_parser().parse(MDX_ESM_RE.sub('', markdown))
    parts = [inline_text(tok) for tok in tokens if tok.type == 'inline']
    return re.sub(r'\s+', ' ', ' '.join(parts)).strip()


def make_excerpt(markdown: str, length: int = EXCERPT_LENGTH) -> str:
    """First ~length characters of the body's prose, cut on a word boundary, with an ellipsis.

    The ellipsis marks a cut, so text that already fits is returned as-is
    rather than always getting "..." appended.
    """
    text = plain_text(markdown)
    if len(text) <= length:
        return text
    cut = text[:length]
    if not text[length].isspace() and ' ' in cut:
        cut = cut.rsplit(' ', 1)[0]
    return cut.rstrip(' ,.;:!?-') + ELLIPSIS
