"""Tests for marksafe.profiling — conversion metrics API."""

from marksafe import Parser, Sanitizer, parse, render, sanitize
from marksafe.profiling import (
    ConversionAccumulator,
    get_conversion_accumulator,
    profiled_conversion,
)


def _exploding_policy(url: str) -> bool:
    raise RuntimeError("boom")


class TestGetConversionAccumulator:
    def test_returns_none_when_disabled(self) -> None:
        assert get_conversion_accumulator() is None

    def test_returns_none_outside_context(self) -> None:
        with profiled_conversion():
            pass
        assert get_conversion_accumulator() is None


class TestProfiledConversion:
    def test_yields_accumulator(self) -> None:
        with profiled_conversion() as acc:
            assert isinstance(acc, ConversionAccumulator)
            assert get_conversion_accumulator() is acc

    def test_records_parse_call(self) -> None:
        with profiled_conversion() as acc:
            parse("# Hello")
        assert acc.parse_calls == 1
        assert acc.source_length == len("# Hello")
        assert acc.sanitize_calls == 0

    def test_render_records_both_stages(self) -> None:
        with profiled_conversion() as acc:
            render("# One")
            render("# Two")
        assert acc.parse_calls == 2
        assert acc.sanitize_calls == 2
        assert acc.markup_length == len("<h1>One</h1>") + len("<h1>Two</h1>")
        assert acc.degraded is False

    def test_empty_input_not_recorded(self) -> None:
        with profiled_conversion() as acc:
            parse("")
            sanitize("")
        assert acc.parse_calls == 0
        assert acc.sanitize_calls == 0

    def test_sanitize_fallback_counted(self) -> None:
        with profiled_conversion() as acc:
            Sanitizer(url_policy=_exploding_policy)('<a href="https://e.com">x</a>')
        assert acc.sanitize_fallbacks == 1
        assert acc.degraded is True

    def test_parse_fallback_counted(self) -> None:
        class Broken(Parser):
            def _passes(self, stash):  # type: ignore[no-untyped-def]
                return (("broken", _explode),)

        def _explode(text: str) -> str:
            raise ValueError("bad")

        with profiled_conversion() as acc:
            Broken().parse("x")
        assert acc.parse_fallbacks == 1
        assert acc.parse_calls == 1
        assert acc.degraded is True

    def test_total_duration_non_negative(self) -> None:
        with profiled_conversion() as acc:
            render("# Hello **World**")
        assert acc.total_duration_ms >= 0


class TestSummary:
    def test_summary_keys(self) -> None:
        with profiled_conversion() as acc:
            render("text")
        summary = acc.summary()
        assert set(summary) == {
            "total_ms",
            "parse_calls",
            "sanitize_calls",
            "source_length",
            "markup_length",
            "parse_fallbacks",
            "sanitize_fallbacks",
        }
        assert summary["parse_calls"] == 1
        assert summary["sanitize_fallbacks"] == 0

    def test_manual_recording(self) -> None:
        acc = ConversionAccumulator()
        acc.record_parse(10)
        acc.record_sanitize(20, degraded=True)
        assert acc.summary()["source_length"] == 10
        assert acc.summary()["markup_length"] == 20
        assert acc.degraded is True
