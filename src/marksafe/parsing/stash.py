"""Placeholder stash for fragments later passes must not touch.

Escaped code content and the opening tags of validated links are swapped
for opaque placeholders as soon as they are produced. Later rewrite passes
see only the placeholder, so emphasis markers inside code or inside an href
can never be reinterpreted. The final pass restores every placeholder.

Placeholders are delimited by STX/ETX control characters, which are removed
from the source text before parsing starts, so user input cannot forge one.
"""

from __future__ import annotations

import re

from marksafe.errors import ParseError

STX = "\u0002"
ETX = "\u0003"
PLACEHOLDER = STX + "ms:%d" + ETX
PLACEHOLDER_RE = re.compile(STX + r"ms:([0-9]+)" + ETX)

_MARKERS = re.compile(f"[{STX}{ETX}]")


def strip_markers(text: str) -> str:
    """Remove placeholder delimiters from untrusted text."""
    return _MARKERS.sub("", text)


class Stash:
    """Per-parse, append-only store of protected fragments.

    A Stash belongs to exactly one parse call and is discarded with it.
    """

    __slots__ = ("_fragments",)

    def __init__(self) -> None:
        self._fragments: list[str] = []

    def __len__(self) -> int:
        return len(self._fragments)

    def store(self, fragment: str) -> str:
        """Stash fragment and return the placeholder that stands in for it."""
        self._fragments.append(fragment)
        return PLACEHOLDER % (len(self._fragments) - 1)

    def restore(self, text: str) -> str:
        """Replace every placeholder in text with its stashed fragment.

        Raises:
            ParseError: A placeholder refers to a fragment that was never
                stashed.
        """

        def replace(match: re.Match[str]) -> str:
            index = int(match.group(1))
            if index >= len(self._fragments):
                raise ParseError(f"unknown placeholder #{index}", pass_name="restore")
            return self._fragments[index]

        return PLACEHOLDER_RE.sub(replace, text)
