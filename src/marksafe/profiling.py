"""marksafe ConversionAccumulator — opt-in metrics for parse/sanitize calls.

This module provides accumulated metrics during conversion:
- Parse and sanitize call counts
- Total source length seen
- How many calls degraded to escaped fallback output

Zero overhead when disabled (get_conversion_accumulator() returns None).
Fallback counts are how a host application learns that the preview it is
showing is degraded and that the user should be told.

Example:
    from marksafe import render
    from marksafe.profiling import profiled_conversion

    with profiled_conversion() as metrics:
        html = render("# Hello **World**")

    print(metrics.summary())
    # {"total_ms": 0.4, "parse_calls": 1, "sanitize_calls": 1, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ConversionAccumulator:
    """Accumulated metrics during conversion.

    Attributes:
        start_time: Profiling start timestamp.
        parse_calls: Number of parse() calls recorded.
        sanitize_calls: Number of sanitize() calls recorded.
        source_length: Total length of text handed to parse().
        markup_length: Total length of markup handed to sanitize().
        parse_fallbacks: Parse calls that returned escaped fallback text.
        sanitize_fallbacks: Sanitize calls that returned escaped fallback text.

    """

    start_time: float = field(default_factory=perf_counter)
    parse_calls: int = 0
    sanitize_calls: int = 0
    source_length: int = 0
    markup_length: int = 0
    parse_fallbacks: int = 0
    sanitize_fallbacks: int = 0

    def record_parse(self, source_length: int, *, degraded: bool = False) -> None:
        """Record a parse call.

        Args:
            source_length: Length of the source string parsed.
            degraded: True if the call fell back to escaped output.

        """
        self.parse_calls += 1
        self.source_length += source_length
        if degraded:
            self.parse_fallbacks += 1

    def record_sanitize(self, markup_length: int, *, degraded: bool = False) -> None:
        """Record a sanitize call."""
        self.sanitize_calls += 1
        self.markup_length += markup_length
        if degraded:
            self.sanitize_fallbacks += 1

    @property
    def degraded(self) -> bool:
        """True if any recorded call fell back to escaped output."""
        return bool(self.parse_fallbacks or self.sanitize_fallbacks)

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of conversion metrics.

        Returns:
            Dict with total_ms, call counts, lengths and fallback counts.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "parse_calls": self.parse_calls,
            "sanitize_calls": self.sanitize_calls,
            "source_length": self.source_length,
            "markup_length": self.markup_length,
            "parse_fallbacks": self.parse_fallbacks,
            "sanitize_fallbacks": self.sanitize_fallbacks,
        }


_accumulator: ContextVar[ConversionAccumulator | None] = ContextVar(
    "conversion_accumulator",
    default=None,
)


def get_conversion_accumulator() -> ConversionAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_conversion() -> Iterator[ConversionAccumulator]:
    """Context manager for profiled conversion.

    Creates a ConversionAccumulator and makes it available via
    get_conversion_accumulator() for the duration of the with block.

    Yields:
        ConversionAccumulator populated by parse and sanitize calls.

    Example:
        with profiled_conversion() as metrics:
            html = render(source)
        if metrics.degraded:
            notify_user("Preview shown as plain text")

    """
    acc = ConversionAccumulator()
    token: Token[ConversionAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)


__all__ = [
    "ConversionAccumulator",
    "get_conversion_accumulator",
    "profiled_conversion",
]
