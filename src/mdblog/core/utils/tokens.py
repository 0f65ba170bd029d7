"""Shared markdown-it parser construction and token utilities"""

from markdown_it import MarkdownIt


DEFAULT_PRESET = "gfm-like"


def make_parser(preset: str = DEFAULT_PRESET) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name (linkify off, no extra deps)."""
    return MarkdownIt(preset, options_update={"linkify": False})


def heading_level(token) -> int | None:
    """Return the heading level (1-6) for a heading_open token, else None."""
    if token.type == 'heading_open' and token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def inline_text(token) -> str:
    """Concatenate the visible text of an inline token's children (links keep their label)."""
    parts = []
    for child in token.children or []:
        if child.type in ('text', 'code_inline'):
            parts.append(child.content)
        elif child.type in ('softbreak', 'hardbreak'):
            parts.append(' ')
    return ''.join(parts)
