"""Allow-list sanitizer for parser output (or any untrusted HTML).

Two stages, composed as Policy objects via the | operator:

1. ``coarse_strike`` removes dangerous URI scheme prefixes, event-handler
   tokens and the five dangerous elements (with their content) using a fixed,
   ordered list of patterns. It is a fast first cut and is never relied on.
2. ``allow_list_filter`` parses the markup into a tree and walks it. Allowed
   elements keep only allowed attributes (``href`` only when it passes the
   URL policy); any other element is replaced by its flattened text; the
   dangerous elements are dropped with their content; comments, doctypes,
   CDATA and processing instructions are deleted. This stage alone
   guarantees the output invariant.

Example:
    >>> from marksafe.sanitize import sanitize
    >>> sanitize('<p onclick="x()">Hi <span>there</span></p>')
    '<p>Hi there</p>'
    >>> sanitize('<a href="javascript:alert(1)">x</a>')
    '<a>x</a>'

Thread Safety:
    Sanitizer holds only immutable settings; each call builds and discards
    its own tree, so one instance may be shared across threads.

"""

from __future__ import annotations

import re
import warnings
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
from bs4.element import NavigableString, PreformattedString, Tag

from marksafe.config import SanitizeConfig, get_sanitize_config
from marksafe.errors import SanitizeError
from marksafe.profiling import get_conversion_accumulator
from marksafe.urls import DEFAULT_URL_POLICY, UrlPolicy
from marksafe.utils.logger import get_logger
from marksafe.utils.text import escape_html

logger = get_logger(__name__)

# Characters stripped from an otherwise valid href
_UNSAFE_URL_CHARS = re.compile(r"[<>\"']")

# Whitespace as the HTML tree builder defines it
_HTML_SPACE = " \t\n\r\f"

# Whitespace inside these is kept verbatim by the tree builder
_PRESERVE_WHITESPACE = ("pre", "textarea")


@dataclass(frozen=True, slots=True)
class StrikeRule:
    """A named pattern whose every match is deleted."""

    name: str
    pattern: re.Pattern[str]

    def apply(self, text: str) -> str:
        return self.pattern.sub("", text)


def _element_rule(tag: str) -> StrikeRule:
    # Opening tag through the matching closing tag, non-greedy, with content
    return StrikeRule(
        tag,
        re.compile(rf"<{tag}\b[^<]*(?:(?!</{tag}>)<[^<]*)*</{tag}>", re.IGNORECASE),
    )


SCHEME_RULES: tuple[StrikeRule, ...] = (
    StrikeRule("javascript-scheme", re.compile(r"javascript:", re.IGNORECASE)),
    StrikeRule("vbscript-scheme", re.compile(r"vbscript:", re.IGNORECASE)),
    StrikeRule("data-scheme", re.compile(r"data:", re.IGNORECASE)),
    StrikeRule("event-handler", re.compile(r"on\w+\s*=", re.IGNORECASE)),
)

STRIKE_RULES: tuple[StrikeRule, ...] = SCHEME_RULES + tuple(
    _element_rule(tag) for tag in ("script", "iframe", "object", "embed", "form")
)


def strike(text: str, rules: Iterable[StrikeRule] = STRIKE_RULES) -> str:
    """Apply rules in order, repeating until nothing more is removed.

    Repetition matters: deleting one match can splice the text around it
    into a new one (``javajavascript:script:``).
    """
    rules = tuple(rules)
    while True:
        result = text
        for rule in rules:
            result = rule.apply(result)
        if result == text:
            return result
        text = result


class Policy:
    """Wrapper for a str -> str transform, supports composition via |."""

    __slots__ = ("_fn",)

    def __init__(self, fn: Callable[[str], str]) -> None:
        self._fn = fn

    def __call__(self, markup: str) -> str:
        return self._fn(markup)

    def __or__(self, other: "Policy") -> "Policy":
        """Chain policies: (self | other)(markup) applies self then other."""

        def chained(markup: str) -> str:
            return other._fn(self._fn(markup))

        return Policy(chained)


coarse_strike = Policy(strike)


def allow_list_filter(
    config: SanitizeConfig,
    url_policy: UrlPolicy | Callable[[str], bool] = DEFAULT_URL_POLICY,
) -> Policy:
    """Build the structural stage for the given allow-lists and URL policy."""

    def fn(markup: str) -> str:
        with warnings.catch_warnings():
            # Plain text that looks like a URL or file name is still markup here
            warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
            soup = BeautifulSoup(markup, "html.parser")
        _filter_tree(soup, config, url_policy)
        return soup.decode()

    return Policy(fn)


def _filter_tree(
    root: Tag,
    config: SanitizeConfig,
    url_policy: Callable[[str], bool],
) -> None:
    # Iterative depth-first walk; deep nesting must not hit the recursion limit
    stack: list[Tag] = [root]
    while stack:
        parent = stack.pop()
        for child in list(parent.children):
            if isinstance(child, Tag):
                name = (child.name or "").lower()
                if name in config.dangerous_tags:
                    logger.debug("Dropping <%s> with its content", name)
                    child.decompose()
                elif name in config.allowed_tags:
                    _filter_attributes(child, name, config, url_policy)
                    stack.append(child)
                else:
                    logger.debug("Demoting <%s> to text", name)
                    _demote(child, config)
            elif isinstance(child, PreformattedString):
                # Comments, doctypes, CDATA, processing instructions
                child.extract()

    root.smooth()
    for string in list(root.find_all(string=True)):
        cleaned = strike(str(string), SCHEME_RULES)
        if cleaned and not cleaned.strip(_HTML_SPACE):
            cleaned = _collapse_whitespace(string, cleaned)
        if cleaned != string:
            string.replace_with(NavigableString(cleaned))


def _collapse_whitespace(string: NavigableString, text: str) -> str:
    """Reduce a whitespace-only run the way the tree builder does on input.

    Demotion and smoothing can join whitespace runs the builder had already
    collapsed; without this a second pass would collapse them again.
    """
    if string.find_parent(list(_PRESERVE_WHITESPACE)) is not None:
        return text
    return "\n" if "\n" in text else " "


def _demote(element: Tag, config: SanitizeConfig) -> None:
    """Replace element with a single text node holding all of its text."""
    for dangerous in element.find_all(sorted(config.dangerous_tags)):
        dangerous.decompose()
    element.replace_with(NavigableString(element.get_text()))


def _filter_attributes(
    element: Tag,
    name: str,
    config: SanitizeConfig,
    url_policy: Callable[[str], bool],
) -> None:
    allowed = config.attributes_for(name)
    for attr in list(element.attrs):
        key = attr.lower()
        if key not in allowed:
            del element.attrs[attr]
            continue

        value = element.attrs[attr]
        if isinstance(value, list):
            # Multi-valued attributes such as class
            value = " ".join(value)
        value = strike(value or "", SCHEME_RULES)

        if key == "href":
            value = _UNSAFE_URL_CHARS.sub("", value)
            if not url_policy(value):
                logger.debug("Dropping href with rejected target: %r", value)
                del element.attrs[attr]
                continue

        element.attrs[attr] = value


class Sanitizer:
    """Allow-list HTML filter.

    Usage:
        >>> sanitizer = Sanitizer()
        >>> sanitizer("<div>hi</div>")
        'hi'
        >>> sanitizer('<h1 class="title" id="x">T</h1>')
        '<h1 class="title">T</h1>'

    sanitize() never raises: if the tree cannot be built or walked, it
    returns the escaped input. With ``SanitizeConfig(strict=True)`` the
    failure is re-raised as SanitizeError instead.

    """

    __slots__ = ("_config", "_url_policy")

    def __init__(
        self,
        config: SanitizeConfig | None = None,
        *,
        url_policy: UrlPolicy | Callable[[str], bool] | None = None,
    ) -> None:
        """Initialize sanitizer.

        Args:
            config: Allow-lists; falls back to the context config at call
                time when omitted
            url_policy: href validator (defaults to http/https only)
        """
        self._config = config
        self._url_policy = url_policy or DEFAULT_URL_POLICY

    def __call__(self, markup: str) -> str:
        return self.sanitize(markup)

    @property
    def config(self) -> SanitizeConfig:
        """Explicit config if one was given, otherwise the context config."""
        return self._config or get_sanitize_config()

    def policy(self) -> Policy:
        """The composed two-stage policy for the current config."""
        first, second = (stage for _, stage in self._stages(self.config))
        return first | second

    def _stages(self, config: SanitizeConfig) -> tuple[tuple[str, Policy], ...]:
        return (
            ("strike", coarse_strike),
            ("allow-list", allow_list_filter(config, self._url_policy)),
        )

    def sanitize(self, markup: str) -> str:
        """Filter markup down to the allow-listed subset.

        Args:
            markup: Untrusted HTML, typically Parser output

        Returns:
            Markup containing only allowed tags, attributes and link targets,
            or the escaped input if the tree could not be processed

        Raises:
            SanitizeError: Only in strict mode, when a stage fails
        """
        if not isinstance(markup, str) or not markup:
            return ""

        config = self.config
        acc = get_conversion_accumulator()
        safe = markup
        stage_name = None
        try:
            for stage_name, stage in self._stages(config):
                safe = stage(safe)
        except Exception as exc:
            if acc is not None:
                acc.record_sanitize(len(markup), degraded=True)
            if config.strict:
                raise SanitizeError(f"{type(exc).__name__}: {exc}", stage=stage_name) from exc
            logger.warning("Sanitization failed; showing escaped markup", exc_info=True)
            return escape_html(markup)

        if acc is not None:
            acc.record_sanitize(len(markup))
        return safe


_DEFAULT_SANITIZER = Sanitizer()


def sanitize(markup: str, *, config: SanitizeConfig | None = None) -> str:
    """Sanitize markup with the default (or given) allow-lists.

    Args:
        markup: Untrusted HTML
        config: Allow-lists to apply instead of the context config

    Returns:
        Safe markup
    """
    if config is None:
        return _DEFAULT_SANITIZER.sanitize(markup)
    return Sanitizer(config).sanitize(markup)


__all__ = [
    "STRIKE_RULES",
    "Policy",
    "Sanitizer",
    "StrikeRule",
    "allow_list_filter",
    "coarse_strike",
    "sanitize",
    "strike",
]
