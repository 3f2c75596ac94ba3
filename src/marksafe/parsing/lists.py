"""List assembly: one forward scan over lines with two flags.

The scan is the only place list containers are opened or closed, and it
closes whatever it opened before emitting any non-item line and again at the
end of input. Lists are flat: an item line always belongs to the current
container of its kind, and switching kinds closes the other one first.

Example:
    >>> print(parse_lists("- a\\n- b\\n1. c"))
    <ul>
    <li>a</li>
    <li>b</li>
    </ul>
    <ol>
    <li>c</li>
    </ol>
"""

from __future__ import annotations

from marksafe.parsing.patterns import ORDERED_ITEM, UNORDERED_ITEM


def parse_lists(text: str) -> str:
    """Wrap runs of list-item lines in ``<ul>``/``<ol>`` containers.

    Args:
        text: Text after the block-line pass

    Returns:
        Text with list items rewritten and every container terminated
    """
    result: list[str] = []
    in_unordered = False
    in_ordered = False

    for line in text.split("\n"):
        stripped = line.strip()

        unordered = UNORDERED_ITEM.match(stripped)
        if unordered:
            if in_ordered:
                result.append("</ol>")
                in_ordered = False
            if not in_unordered:
                result.append("<ul>")
                in_unordered = True
            result.append(f"<li>{unordered.group(1)}</li>")
            continue

        ordered = ORDERED_ITEM.match(stripped)
        if ordered:
            if in_unordered:
                result.append("</ul>")
                in_unordered = False
            if not in_ordered:
                result.append("<ol>")
                in_ordered = True
            result.append(f"<li>{ordered.group(1)}</li>")
            continue

        if in_unordered:
            result.append("</ul>")
            in_unordered = False
        if in_ordered:
            result.append("</ol>")
            in_ordered = False
        result.append(line)

    if in_unordered:
        result.append("</ul>")
    if in_ordered:
        result.append("</ol>")

    return "\n".join(result)
