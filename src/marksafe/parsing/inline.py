"""Inline passes: links, then emphasis spans.

Links run before emphasis so that a validated href is already stashed when
the asterisk rules run; an unvalidated link is left exactly as typed.
Emphasis order is fixed: bold before italic, because the italic delimiter
is a substring of the bold one, then strikethrough.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from marksafe.parsing.patterns import BOLD, ITALIC, LINK, STRIKETHROUGH
from marksafe.parsing.stash import Stash
from marksafe.utils.logger import get_logger
from marksafe.utils.text import escape_html

logger = get_logger(__name__)


def parse_links(text: str, stash: Stash, is_allowed: Callable[[str], bool]) -> str:
    """Rewrite ``[text](url)`` as an anchor when url passes validation.

    The anchor's opening tag is stashed so later passes cannot inject markup
    into the attribute value. Rejected targets leave the bracket syntax in
    place as literal text.

    Args:
        text: Text after list assembly
        stash: Per-parse stash
        is_allowed: URL validator deciding whether a link may be emitted

    Returns:
        Text with validated links rewritten
    """

    def link(match: re.Match[str]) -> str:
        label, url = match.group(1), match.group(2)
        if not is_allowed(url):
            logger.debug("Leaving link with rejected target as text: %r", url)
            return match.group(0)
        open_tag = stash.store(f'<a href="{escape_html(url)}">')
        return f"{open_tag}{escape_html(label)}</a>"

    return LINK.sub(link, text)


def parse_inline_spans(text: str) -> str:
    """Apply bold, italic and strikethrough, strictly in that order."""
    text = BOLD.sub(r"<strong>\1</strong>", text)
    text = ITALIC.sub(r"<em>\1</em>", text)
    return STRIKETHROUGH.sub(r"<del>\1</del>", text)
