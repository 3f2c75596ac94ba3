"""Line-anchored block passes: headings, block quotes and horizontal rules."""

from __future__ import annotations

from marksafe.parsing.patterns import BLOCKQUOTE, H1, H2, H3, HORIZONTAL_RULE


def parse_headings(text: str) -> str:
    """Rewrite ``#``, ``##`` and ``###`` lines as h1-h3.

    Each level's pattern requires exactly one space after its hashes, so
    ``## x`` never matches the level-one rule. Deeper levels are not
    recognized and stay as text.
    """
    text = H1.sub(r"<h1>\1</h1>", text)
    text = H2.sub(r"<h2>\1</h2>", text)
    return H3.sub(r"<h3>\1</h3>", text)


def parse_block_lines(text: str) -> str:
    """Rewrite ``> `` lines as block quotes and ``---`` lines as rules.

    Every quoted line becomes its own single-paragraph block quote; quotes
    are never merged or nested.
    """
    text = BLOCKQUOTE.sub(r"<blockquote><p>\1</p></blockquote>", text)
    return HORIZONTAL_RULE.sub("<hr>", text)
