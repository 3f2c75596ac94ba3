"""Rewrite passes used by the Parser.

Each pass is a function from string to string (stateful helpers such as the
stash or the URL validator are passed in explicitly). The Parser runs them
in a fixed order; see marksafe.parser for why the order matters.
"""

from marksafe.parsing.blocks import parse_block_lines, parse_headings
from marksafe.parsing.code import extract_code
from marksafe.parsing.inline import parse_inline_spans, parse_links
from marksafe.parsing.lists import parse_lists
from marksafe.parsing.paragraphs import assemble_paragraphs
from marksafe.parsing.stash import Stash, strip_markers

__all__ = [
    "Stash",
    "assemble_paragraphs",
    "extract_code",
    "parse_block_lines",
    "parse_headings",
    "parse_inline_spans",
    "parse_links",
    "parse_lists",
    "strip_markers",
]
