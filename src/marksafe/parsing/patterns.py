"""Compiled patterns for the rewrite passes.

All patterns are compiled once at import time and shared; re.Pattern objects
are immutable and safe to use from any thread.
"""

import re

# Line endings are normalized to "\n" before any pass runs
LINE_ENDINGS = re.compile(r"\r\n?")

# Fenced code: non-greedy up to the next fence, may span lines
CODE_FENCE = re.compile(r"```([\s\S]*?)```")
# Language hint directly after the opening fence, e.g. ```python
FENCE_INFO = re.compile(r"([A-Za-z][\w+#.\-]*)[ \t]*\n")
# Inline code never crosses a line boundary
INLINE_CODE = re.compile(r"`([^`\n]+)`")

# Headings, only three levels; line-anchored
H1 = re.compile(r"^# (.+)$", re.MULTILINE)
H2 = re.compile(r"^## (.+)$", re.MULTILINE)
H3 = re.compile(r"^### (.+)$", re.MULTILINE)

BLOCKQUOTE = re.compile(r"^> (.+)$", re.MULTILINE)
HORIZONTAL_RULE = re.compile(r"^---[ \t]*$", re.MULTILINE)

# Matched against a stripped line
UNORDERED_ITEM = re.compile(r"^[-*] (.+)$")
ORDERED_ITEM = re.compile(r"^\d+\. (.+)$")

LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

# Inline spans stay within one line
BOLD = re.compile(r"\*\*([^*\n]+)\*\*")
ITALIC = re.compile(r"\*([^*\n]+)\*")
STRIKETHROUGH = re.compile(r"~~([^~\n]+)~~")

BLANK_LINE = re.compile(r"\n\s*\n")

# A line produced by a block pass; everything else is paragraph text
BLOCK_LINE = re.compile(r"^</?(?:h[1-3]|ul|ol|li|blockquote|pre|hr)\b", re.IGNORECASE)
