"""ContextVar-based configuration for marksafe.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Explicit constructor arguments on Parser and Sanitizer always win; the
context value is what they fall back to when constructed without one.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Direct construction (preferred)
    sanitizer = Sanitizer(SanitizeConfig(allowed_tags=...))

    # Context override (tests, embedding applications)
    with sanitize_config_context(SanitizeConfig(strict=True)):
        html = sanitize(markup)

"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

DEFAULT_ALLOWED_TAGS: frozenset[str] = frozenset(
    (
        "h1",
        "h2",
        "h3",
        "p",
        "br",
        "strong",
        "em",
        "del",
        "code",
        "pre",
        "ul",
        "ol",
        "li",
        "blockquote",
        "a",
        "hr",
    )
)

# "*" lists attributes permitted on any allowed tag
DEFAULT_ALLOWED_ATTRIBUTES: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "a": frozenset(("href",)),
        "*": frozenset(("class",)),
    }
)

DEFAULT_DANGEROUS_TAGS: frozenset[str] = frozenset(
    ("script", "iframe", "object", "embed", "form")
)


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parser configuration.

    Attributes:
        strict: Re-raise internal failures as ParseError instead of
            degrading to escaped text. Meant for tests and debugging.

    """

    strict: bool = False

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "ParseConfig":
        """Create ParseConfig from dictionary, ignoring unknown keys."""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


@dataclass(frozen=True, slots=True)
class SanitizeConfig:
    """Immutable sanitizer allow-list configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).
    Tag and attribute names are compared lowercase.

    Attributes:
        allowed_tags: Elements kept in the output
        allowed_attributes: Tag name -> permitted attribute names; the "*"
            entry applies to every allowed tag
        dangerous_tags: Elements removed together with their content
        strict: Re-raise internal failures as SanitizeError instead of
            degrading to escaped text

    """

    allowed_tags: frozenset[str] = DEFAULT_ALLOWED_TAGS
    allowed_attributes: Mapping[str, frozenset[str]] = field(
        default_factory=lambda: DEFAULT_ALLOWED_ATTRIBUTES
    )
    dangerous_tags: frozenset[str] = DEFAULT_DANGEROUS_TAGS
    strict: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "allowed_tags", frozenset(t.lower() for t in self.allowed_tags)
        )
        object.__setattr__(
            self,
            "allowed_attributes",
            MappingProxyType(
                {
                    tag.lower(): frozenset(a.lower() for a in attrs)
                    for tag, attrs in self.allowed_attributes.items()
                }
            ),
        )
        object.__setattr__(
            self, "dangerous_tags", frozenset(t.lower() for t in self.dangerous_tags)
        )

    def attributes_for(self, tag: str) -> frozenset[str]:
        """Attributes permitted on tag, including the global "*" entry."""
        return self.allowed_attributes.get(tag, frozenset()) | self.allowed_attributes.get(
            "*", frozenset()
        )

    def to_dict(self) -> dict[str, Any]:
        """Describe the active allow-lists (sorted, JSON-friendly)."""
        return {
            "allowed_tags": sorted(self.allowed_tags),
            "allowed_attributes": {
                tag: sorted(attrs) for tag, attrs in sorted(self.allowed_attributes.items())
            },
            "dangerous_tags": sorted(self.dangerous_tags),
            "strict": self.strict,
        }

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "SanitizeConfig":
        """Create SanitizeConfig from dictionary.

        Useful when allow-lists come from external sources (YAML/JSON settings).
        Only includes keys that are valid SanitizeConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = SanitizeConfig.from_dict({
            ...     "allowed_tags": ["p", "em"],
            ...     "unknown_key": "ignored",
            ... })
            >>> sorted(config.allowed_tags)
            ['em', 'p']

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        for key in ("allowed_tags", "dangerous_tags"):
            if key in filtered:
                filtered[key] = frozenset(filtered[key])
        if "allowed_attributes" in filtered:
            filtered["allowed_attributes"] = {
                tag: frozenset(attrs) for tag, attrs in filtered["allowed_attributes"].items()
            }
        return cls(**filtered)


# Module-level defaults (reused, never recreated)
_DEFAULT_PARSE_CONFIG: ParseConfig = ParseConfig()
_DEFAULT_SANITIZE_CONFIG: SanitizeConfig = SanitizeConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_PARSE_CONFIG,
)
_sanitize_config: ContextVar[SanitizeConfig] = ContextVar(
    "sanitize_config",
    default=_DEFAULT_SANITIZE_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default parse configuration."""
    _parse_config.set(_DEFAULT_PARSE_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary parse config changes.

    Properly restores previous config even if an exception is raised.
    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


def get_sanitize_config() -> SanitizeConfig:
    """Get current sanitizer configuration (thread-local).

    Returns:
        The active SanitizeConfig for this thread/context.

    """
    return _sanitize_config.get()


def set_sanitize_config(config: SanitizeConfig) -> None:
    """Set sanitizer configuration for current context.

    Args:
        config: SanitizeConfig instance to use for this context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _sanitize_config.set(config)


def reset_sanitize_config() -> None:
    """Reset to default sanitizer configuration.

    Reuses the module-level default singleton, avoiding allocation.
    """
    _sanitize_config.set(_DEFAULT_SANITIZE_CONFIG)


@contextmanager
def sanitize_config_context(config: SanitizeConfig) -> Iterator[None]:
    """Context manager for temporary sanitizer config changes.

    Args:
        config: SanitizeConfig to use within the context.

    Example:
        >>> with sanitize_config_context(SanitizeConfig(strict=True)):
        ...     html = sanitize("<p>hi</p>")
        >>> # Automatically reset to previous config

    """
    previous = _sanitize_config.get()
    _sanitize_config.set(config)
    try:
        yield
    finally:
        _sanitize_config.set(previous)


__all__ = [
    "DEFAULT_ALLOWED_ATTRIBUTES",
    "DEFAULT_ALLOWED_TAGS",
    "DEFAULT_DANGEROUS_TAGS",
    "ParseConfig",
    "SanitizeConfig",
    "get_parse_config",
    "get_sanitize_config",
    "parse_config_context",
    "reset_parse_config",
    "reset_sanitize_config",
    "sanitize_config_context",
    "set_parse_config",
    "set_sanitize_config",
]
