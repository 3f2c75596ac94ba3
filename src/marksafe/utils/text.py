"""Text escaping utilities for marksafe.

Every fallback path in the library ends here: when a conversion cannot
complete, the caller gets the original input run through escape_html, which
renders as visible literal text and never as markup.

Example:
    >>> from marksafe.utils.text import escape_html
    >>> escape_html("<b>hi</b>")
    '&lt;b&gt;hi&lt;/b&gt;'
"""

from __future__ import annotations

import html as html_module


def escape_html(text: str) -> str:
    """Escape HTML special characters for safe use in text and attributes.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#x27;

    Args:
        text: Text to escape

    Returns:
        HTML-escaped text safe for element content and quoted attribute values

    Examples:
        >>> escape_html("<script>alert('xss')</script>")
        "&lt;script&gt;alert(&#x27;xss&#x27;)&lt;/script&gt;"
    """
    if not text:
        return ""

    return html_module.escape(text, quote=True)


def escape_code(text: str) -> str:
    """Escape code span/block content.

    Quotes are left alone so source code stays readable inside ``<code>``;
    only the characters that could open markup or an entity are replaced.

    Examples:
        >>> escape_code('if a < b && c > "d":')
        'if a &lt; b &amp;&amp; c &gt; "d":'
    """
    if not text:
        return ""

    return html_module.escape(text, quote=False)
