"""Heading anchor generation (GitHub-style) for table-of-contents ids"""

import re


def heading_slug(text: str) -> str:
    """Lowercase text, drop punctuation, and turn each whitespace char into a hyphen."""
    text = text.strip().lower()
    text = re.sub(r'[^\w\s-]', '', text)
    return re.sub(r'\s', '-', text)


class Slugger:
    """Issues unique heading slugs within one document; repeats get -1, -2, ... suffixes."""

    def __init__(self):
        self._seen: dict[str, int] = {}

    def slug(self, text: str) -> str:
        base = heading_slug(text)
        result = base
        while result in self._seen:
            self._seen[base] += 1
            result = f"{base}-{self._seen[base]}"
        self._seen[result] = 0
        return result

    def reset(self) -> None:
        self._seen.clear()
