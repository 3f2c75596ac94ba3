"""Link target validation shared by the parser and the sanitizer.

A candidate is acceptable only if it parses as an absolute URL whose scheme
is in the protocol allow-list ({"http", "https"} by default) and which names
a host. Everything else, including relative paths, script-executing schemes,
data URIs and strings a browser might repair in surprising ways, is rejected.

Example:
    >>> from marksafe.urls import is_allowed_url
    >>> is_allowed_url("https://example.com/page")
    True
    >>> is_allowed_url("javascript:alert(1)")
    False
    >>> is_allowed_url("/relative/path")
    False

Thread Safety:
    UrlPolicy is immutable. Module functions hold no state.

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from marksafe.errors import UrlPolicyError

ALLOWED_PROTOCOLS: frozenset[str] = frozenset(("http", "https"))

# RFC 3986 scheme grammar
_SCHEME_NAME = re.compile(r"[a-z][a-z0-9+.\-]*\Z")

# Whitespace, C0 controls and DEL. Browsers silently strip or re-encode these,
# so a candidate containing any of them is ambiguous.
_AMBIGUOUS_CHARS = re.compile(r"[\x00-\x20\x7f\\]")


@dataclass(frozen=True, slots=True)
class UrlPolicy:
    """Immutable link target validator.

    Attributes:
        allowed_schemes: Lowercase scheme names accepted as link targets.

    Usage:
        >>> policy = UrlPolicy()
        >>> policy("http://example.com")
        True
        >>> policy.is_allowed("mailto:someone@example.com")
        False

    """

    allowed_schemes: frozenset[str] = field(default=ALLOWED_PROTOCOLS)

    def __post_init__(self) -> None:
        if not self.allowed_schemes:
            raise UrlPolicyError(None, "at least one scheme must be allowed")
        normalized = frozenset(s.lower() for s in self.allowed_schemes)
        for scheme in normalized:
            if not _SCHEME_NAME.match(scheme):
                raise UrlPolicyError(scheme, "not a valid URL scheme name")
        object.__setattr__(self, "allowed_schemes", normalized)

    def __call__(self, candidate: object) -> bool:
        return self.is_allowed(candidate)

    def is_allowed(self, candidate: object) -> bool:
        """Decide whether candidate is an acceptable link target.

        Fail-closed: anything that is not unambiguously an absolute URL with
        an allowed scheme and a host resolves to False.

        Args:
            candidate: Proposed href value

        Returns:
            True if the link may be emitted or kept
        """
        if not isinstance(candidate, str) or not candidate:
            return False
        if _AMBIGUOUS_CHARS.search(candidate):
            return False

        try:
            parts = urlsplit(candidate)
            # Accessing .port validates it; raises ValueError when out of range
            parts.port
        except ValueError:
            return False

        if parts.scheme.lower() not in self.allowed_schemes:
            return False
        # "http:example.com" has no authority component
        if not candidate[len(parts.scheme) + 1 :].startswith("//"):
            return False
        return bool(parts.hostname)


DEFAULT_URL_POLICY = UrlPolicy()


def is_allowed_url(candidate: object, policy: UrlPolicy | None = None) -> bool:
    """Check a link target against the default (or given) URL policy.

    Args:
        candidate: Proposed href value
        policy: Policy to apply (defaults to http/https only)

    Returns:
        True if candidate is an absolute URL with an allowed scheme
    """
    return (policy or DEFAULT_URL_POLICY).is_allowed(candidate)


__all__ = [
    "ALLOWED_PROTOCOLS",
    "DEFAULT_URL_POLICY",
    "UrlPolicy",
    "is_allowed_url",
]
