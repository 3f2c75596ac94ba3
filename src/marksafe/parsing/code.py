"""Code extraction, always the first pass.

Fenced blocks become ``<pre><code>`` on a line of their own; inline spans
become ``<code>``. In both cases the escaped content goes into the stash, so
nothing that runs afterwards can alter it.
"""

from __future__ import annotations

import re

from marksafe.parsing.patterns import CODE_FENCE, FENCE_INFO, INLINE_CODE
from marksafe.parsing.stash import Stash
from marksafe.utils.text import escape_code


def extract_code(text: str, stash: Stash) -> str:
    """Replace fenced code blocks and inline code spans with placeholders.

    Fences are matched first (non-greedy, across lines) so that the backticks
    of a fence are never mistaken for inline code delimiters. A fence with
    no closing marker is left as ordinary text.

    Args:
        text: Source text with normalized line endings
        stash: Per-parse stash receiving the escaped content

    Returns:
        Text with every code region replaced by its placeholder
    """

    def fence(match: re.Match[str]) -> str:
        content = match.group(1)
        open_tag = "<code>"
        info = FENCE_INFO.match(content)
        if info:
            open_tag = f'<code class="language-{info.group(1).lower()}">'
            content = content[info.end() :]
        body = stash.store(escape_code(content.strip()))
        # Own line, so the block assembler sees it as a block
        return f"\n<pre>{open_tag}{body}</code></pre>\n"

    def span(match: re.Match[str]) -> str:
        return stash.store(f"<code>{escape_code(match.group(1))}</code>")

    text = CODE_FENCE.sub(fence, text)
    return INLINE_CODE.sub(span, text)
