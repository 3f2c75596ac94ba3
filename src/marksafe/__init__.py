"""
marksafe — Lightweight Markdown to safe HTML for live previews

Converts a small, fixed Markdown vocabulary into HTML and filters the result
through an allow-list sanitizer, so the output can be handed straight to a
rendering surface. Parsing and sanitizing are pure, stateless, and never
raise: on internal failure they degrade to escaped text.

Quick Start:
    >>> from marksafe import render
    >>> render("# Hello **World**")
    '<h1>Hello <strong>World</strong></h1>'

    >>> # Or step by step
    >>> from marksafe import parse, sanitize
    >>> markup = parse("[site](https://example.com)")   # untrusted
    >>> sanitize(markup)                                  # safe to render
    '<p><a href="https://example.com">site</a></p>'

    >>> # Or a reusable processor with injected components
    >>> from marksafe import Markdown, Sanitizer, UrlPolicy
    >>> md = Markdown(url_policy=UrlPolicy(frozenset({"https"})))
    >>> md("[plain](http://example.com)")
    '<p>[plain](http://example.com)</p>'

Installation:
    pip install marksafe
"""

from collections.abc import Iterable

from marksafe.config import (
    ParseConfig,
    SanitizeConfig,
    get_parse_config,
    get_sanitize_config,
    parse_config_context,
    reset_parse_config,
    reset_sanitize_config,
    sanitize_config_context,
    set_parse_config,
    set_sanitize_config,
)
from marksafe.errors import MarksafeError, ParseError, SanitizeError, UrlPolicyError
from marksafe.parser import Parser
from marksafe.profiling import (
    ConversionAccumulator,
    get_conversion_accumulator,
    profiled_conversion,
)
from marksafe.sanitize import Policy, Sanitizer, sanitize
from marksafe.stats import TextStats, count_text
from marksafe.syntax import supported_syntax
from marksafe.urls import ALLOWED_PROTOCOLS, UrlPolicy, is_allowed_url

__version__ = "0.1.0"

_DEFAULT_PARSER = Parser()


def parse(text: str, *, url_policy: UrlPolicy | None = None) -> str:
    """Convert source text into markup.

    The result is untrusted: raw HTML typed by the user passes through
    unchanged. Run it through sanitize() before rendering.

    Args:
        text: Markdown source text
        url_policy: Link target validator (defaults to http/https only)

    Returns:
        Markup string

    Example:
        >>> parse("# Title")
        '<h1>Title</h1>'
    """
    if url_policy is None:
        return _DEFAULT_PARSER.parse(text)
    return Parser(url_policy).parse(text)


def render(text: str) -> str:
    """Parse and sanitize in one call; the preview pipeline.

    Whitespace-only input renders to an empty string.

    Example:
        >>> render("hello world")
        '<p>hello world</p>'
    """
    if not isinstance(text, str) or not text.strip():
        return ""
    return sanitize(parse(text))


class Markdown:
    """Reusable processor combining an injected Parser and Sanitizer.

    Usage:
        >>> md = Markdown()
        >>> md("- a\\n- b")
        '<ul>\\n<li>a</li>\\n<li>b</li>\\n</ul>'

        >>> # Inject your own components
        >>> md = Markdown(sanitizer=Sanitizer(SanitizeConfig(allowed_tags={"p"})))

    Thread Safety:
        Holds only immutable components. Safe to share across threads.

    """

    __slots__ = ("_parser", "_sanitizer")

    def __init__(
        self,
        *,
        parser: Parser | None = None,
        sanitizer: Sanitizer | None = None,
        url_policy: UrlPolicy | None = None,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            parser: Parser to use (built from url_policy if None)
            sanitizer: Sanitizer to use (built from url_policy if None)
            url_policy: Link target validator shared by the default
                parser and sanitizer
        """
        self._parser = parser or Parser(url_policy)
        self._sanitizer = sanitizer or Sanitizer(url_policy=url_policy)

    def __call__(self, text: str) -> str:
        """Parse and sanitize in one call."""
        if not isinstance(text, str) or not text.strip():
            return ""
        return self._sanitizer.sanitize(self._parser.parse(text))

    @property
    def parser(self) -> Parser:
        return self._parser

    @property
    def sanitizer(self) -> Sanitizer:
        return self._sanitizer

    def parse(self, text: str) -> str:
        """Convert source text into (untrusted) markup."""
        return self._parser.parse(text)

    def sanitize(self, markup: str) -> str:
        """Filter markup through the allow-lists."""
        return self._sanitizer.sanitize(markup)

    def render_many(self, sources: Iterable[str]) -> list[str]:
        """Render several independent sources, in order.

        Example:
            >>> md = Markdown()
            >>> md.render_many(["# One", "# Two"])
            ['<h1>One</h1>', '<h1>Two</h1>']
        """
        return [self(source) for source in sources]


__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Core API
    "parse",
    "sanitize",
    "is_allowed_url",
    "render",
    # Components
    "Parser",
    "Sanitizer",
    "Policy",
    "UrlPolicy",
    "ALLOWED_PROTOCOLS",
    # High-level
    "Markdown",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "SanitizeConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    "get_sanitize_config",
    "set_sanitize_config",
    "reset_sanitize_config",
    "sanitize_config_context",
    # Errors
    "MarksafeError",
    "ParseError",
    "SanitizeError",
    "UrlPolicyError",
    # Profiling
    "ConversionAccumulator",
    "get_conversion_accumulator",
    "profiled_conversion",
    # Editor helpers
    "TextStats",
    "count_text",
    "supported_syntax",
]
