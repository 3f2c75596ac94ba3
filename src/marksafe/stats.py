"""Document counters for an editor status bar."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True, slots=True)
class TextStats:
    """Character, word and line counts for a source snapshot."""

    characters: int
    words: int
    lines: int

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def count_text(text: str) -> TextStats:
    """Count characters, whitespace-separated words and lines.

    Examples:
        >>> count_text("Hello world\\nbye")
        TextStats(characters=15, words=3, lines=2)
        >>> count_text("")
        TextStats(characters=0, words=0, lines=1)
    """
    return TextStats(
        characters=len(text),
        words=len(text.split()),
        lines=text.count("\n") + 1,
    )
