"""Reference listing of the recognized source syntax, for help panels."""

from __future__ import annotations

from types import MappingProxyType

SUPPORTED_SYNTAX = MappingProxyType(
    {
        "headers": ("# Header 1", "## Header 2", "### Header 3"),
        "formatting": ("**Bold text**", "*Italic text*", "~~Strikethrough~~", "`Inline code`"),
        "lists": ("- Unordered item", "* Another item", "1. Ordered item", "2. Second item"),
        "blocks": ("> Blockquote", "```\nCode block\n```", "---"),
        "links": ("[Link text](https://example.com)",),
    }
)


def supported_syntax() -> dict[str, list[str]]:
    """Examples of every construct the parser recognizes, grouped by kind.

    Returns a fresh dict so callers may modify it freely.
    """
    return {group: list(examples) for group, examples in SUPPORTED_SYNTAX.items()}
