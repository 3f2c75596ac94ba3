"""Paragraph assembly, the last rewrite pass before placeholders are restored.

Splits on blank lines, then scans each chunk line by line. Lines produced
by a block pass pass through untouched; every maximal run of other lines is
wrapped in one ``<p>``, with the line breaks inside the run kept as ``<br>``.
A heading directly followed by text therefore yields a heading and a
paragraph rather than a paragraph swallowing the heading.
"""

from __future__ import annotations

from marksafe.parsing.patterns import BLANK_LINE, BLOCK_LINE


def assemble_paragraphs(text: str) -> str:
    """Wrap non-block text in paragraphs and join the blocks with newlines."""
    blocks: list[str] = []

    for chunk in BLANK_LINE.split(text):
        run: list[str] = []
        for line in chunk.split("\n"):
            stripped = line.strip()
            if not stripped:
                continue
            if BLOCK_LINE.match(stripped):
                if run:
                    blocks.append(_paragraph(run))
                    run = []
                blocks.append(stripped)
            else:
                run.append(stripped)
        if run:
            blocks.append(_paragraph(run))

    return "\n".join(blocks)


def _paragraph(lines: list[str]) -> str:
    return "<p>" + "<br>".join(lines) + "</p>"
