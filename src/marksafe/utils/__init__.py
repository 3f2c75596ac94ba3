"""Utility modules for marksafe.

Provides:
- text: escape_html, escape_code for the escaping every fallback relies on
- logger: get_logger for logging
"""

from marksafe.utils.logger import get_logger
from marksafe.utils.text import escape_code, escape_html

__all__ = [
    "escape_code",
    "escape_html",
    "get_logger",
]
