"""
Structure-preserving chunking of long HTML bodies.

A body is cut only right after a closing block tag (``</h2>``, ``</h3>``,
``</p>``, ``</div>``, ``</li>``), so a boundary never falls inside a tag.
Markup is scanned as whole tags and comments; a ``</p>`` inside an
attribute value or a comment is not a boundary.
Chunks concatenate back to the exact original text.
"""

from __future__ import annotations

import re

DEFAULT_MAX_WORDS = 1500

BLOCK_BOUNDARY_RE = re.compile(r"</(?:h[23]|p|div|li)\s*>", re.IGNORECASE)
MARKUP_RE = re.compile(r"<!--.*?-->|<(?:\"[^\"]*\"|'[^']*'|[^'\">])*>", re.DOTALL)


def strip_tags(html: str) -> str:
    """Remove markup, leaving a space where each tag or comment was."""
    return MARKUP_RE.sub(" ", html)


def count_words(text: str) -> int:
    """Whitespace-separated words in text with tags stripped."""
    return len(strip_tags(text).split())


def split_fragments(html: str) -> list[str]:
    """
    Split html after every closing block boundary.

    Each fragment ends with its boundary tag; trailing text without a
    boundary forms the last fragment.
    """
    fragments: list[str] = []
    start = 0
    for match in MARKUP_RE.finditer(html):
        if BLOCK_BOUNDARY_RE.fullmatch(match.group()):
            fragments.append(html[start:match.end()])
            start = match.end()
    if start < len(html):
        fragments.append(html[start:])
    return fragments


def split_into_chunks(html: str, max_words: int = DEFAULT_MAX_WORDS) -> list[str]:
    """
    Group fragments into the fewest chunks of at most ``max_words`` words.

    Fragments are accumulated greedily; a chunk is closed when the next
    fragment would push it over the ceiling. A single fragment larger than
    the ceiling becomes a chunk on its own.
    """
    if max_words < 1:
        raise ValueError("max_words must be positive")

    chunks: list[str] = []
    current: list[str] = []
    current_words = 0

    for fragment in split_fragments(html):
        words = count_words(fragment)
        if current and current_words + words > max_words:
            chunks.append("".join(current))
            current = [fragment]
            current_words = words
        else:
            current.append(fragment)
            current_words += words

    if current:
        chunks.append("".join(current))

    return chunks
