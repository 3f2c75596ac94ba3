"""Ordered rewrite pipeline turning source text into (untrusted) markup.

The pipeline is a fixed sequence of string-to-string passes. The order is
the grammar: moving a pass changes which construct wins where two of them
overlap.

Pass order:
1. code         fenced blocks and inline spans, escaped and stashed
2. headings     ``#``/``##``/``###`` lines
3. block-lines  ``> `` quotes and ``---`` rules
4. lists        flat ``<ul>``/``<ol>`` assembly
5. links        ``[text](url)``, only for validated targets
6. inline       bold, then italic, then strikethrough
7. paragraphs   blank-line split and ``<p>`` wrapping
8. restore      stashed fragments put back

Output of parse() is NOT safe to render; hand it to the Sanitizer first.

Thread Safety:
    Parser holds only immutable settings. Per-call state (the stash) is
    created inside parse(), so one Parser may be shared across threads.

"""

from __future__ import annotations

from collections.abc import Callable
from functools import partial

from marksafe.config import ParseConfig, get_parse_config
from marksafe.errors import ParseError
from marksafe.parsing import (
    Stash,
    assemble_paragraphs,
    extract_code,
    parse_block_lines,
    parse_headings,
    parse_inline_spans,
    parse_links,
    parse_lists,
    strip_markers,
)
from marksafe.parsing.patterns import LINE_ENDINGS
from marksafe.profiling import get_conversion_accumulator
from marksafe.urls import DEFAULT_URL_POLICY, UrlPolicy
from marksafe.utils.logger import get_logger
from marksafe.utils.text import escape_html

logger = get_logger(__name__)


class Parser:
    """Converts lightweight markup source into an HTML string.

    Usage:
        >>> parser = Parser()
        >>> parser.parse("# Title")
        '<h1>Title</h1>'
        >>> parser("**bold** and *italic*")
        '<p><strong>bold</strong> and <em>italic</em></p>'

    parse() never raises: an internal failure in any pass abandons the
    pipeline and returns the escaped input. With ``ParseConfig(strict=True)``
    the failure is re-raised as ParseError instead.

    """

    __slots__ = ("_config", "_url_policy")

    def __init__(
        self,
        url_policy: UrlPolicy | Callable[[str], bool] | None = None,
        *,
        config: ParseConfig | None = None,
    ) -> None:
        """Initialize parser.

        Args:
            url_policy: Link target validator (defaults to http/https only)
            config: Parser settings; falls back to the context config at
                call time when omitted
        """
        self._url_policy = url_policy or DEFAULT_URL_POLICY
        self._config = config

    def __call__(self, text: str) -> str:
        return self.parse(text)

    @property
    def config(self) -> ParseConfig:
        """Explicit config if one was given, otherwise the context config."""
        return self._config or get_parse_config()

    def parse(self, text: str) -> str:
        """Convert source text to markup.

        Args:
            text: Complete source snapshot

        Returns:
            Markup string, or the escaped input if a pass failed

        Raises:
            ParseError: Only in strict mode, when a pass fails
        """
        if not isinstance(text, str) or not text:
            return ""

        acc = get_conversion_accumulator()
        try:
            html = self._run(text)
        except Exception as exc:
            if acc is not None:
                acc.record_parse(len(text), degraded=True)
            if self.config.strict:
                if isinstance(exc, ParseError):
                    raise
                raise ParseError(f"{type(exc).__name__}: {exc}") from exc
            logger.warning("Markup conversion failed; showing escaped text", exc_info=True)
            return escape_html(text)

        if acc is not None:
            acc.record_parse(len(text))
        return html

    def _run(self, text: str) -> str:
        stash = Stash()
        text = strip_markers(LINE_ENDINGS.sub("\n", text))
        for name, rewrite in self._passes(stash):
            try:
                text = rewrite(text)
            except ParseError:
                raise
            except Exception as exc:
                raise ParseError(f"{type(exc).__name__}: {exc}", pass_name=name) from exc
        return text.strip()

    def _passes(self, stash: Stash) -> tuple[tuple[str, Callable[[str], str]], ...]:
        return (
            ("code", partial(extract_code, stash=stash)),
            ("headings", parse_headings),
            ("block-lines", parse_block_lines),
            ("lists", parse_lists),
            ("links", partial(parse_links, stash=stash, is_allowed=self._url_policy)),
            ("inline", parse_inline_spans),
            ("paragraphs", assemble_paragraphs),
            ("restore", stash.restore),
        )


__all__ = ["Parser"]
