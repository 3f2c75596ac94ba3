"""Tests for the Parser pipeline and pass ordering."""

import logging

import pytest

from marksafe import ParseConfig, ParseError, Parser, UrlPolicy, parse, render
from marksafe.config import parse_config_context


class TestBasicConstructs:
    def test_plain_text(self) -> None:
        assert parse("hello world") == "<p>hello world</p>"

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("# Title", "<h1>Title</h1>"),
            ("## Sub", "<h2>Sub</h2>"),
            ("### Minor", "<h3>Minor</h3>"),
            ("#### Too deep", "<p>#### Too deep</p>"),
        ],
    )
    def test_headings(self, source: str, expected: str) -> None:
        assert parse(source) == expected

    def test_bold_and_italic(self) -> None:
        assert parse("**bold** and *italic*") == (
            "<p><strong>bold</strong> and <em>italic</em></p>"
        )

    def test_strikethrough(self) -> None:
        assert parse("~~gone~~") == "<p><del>gone</del></p>"

    def test_blockquote(self) -> None:
        assert parse("> quoted") == "<blockquote><p>quoted</p></blockquote>"

    def test_horizontal_rule(self) -> None:
        assert parse("a\n---\nb") == "<p>a</p>\n<hr>\n<p>b</p>"

    def test_line_breaks_and_paragraphs(self) -> None:
        assert parse("one\ntwo\n\nthree") == "<p>one<br>two</p>\n<p>three</p>"

    def test_heading_followed_by_text(self) -> None:
        assert parse("# T\nbody") == "<h1>T</h1>\n<p>body</p>"


class TestLists:
    def test_list_then_paragraph(self) -> None:
        assert parse("- a\n- b\n\ntext") == (
            "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n<p>text</p>"
        )

    def test_list_closes_at_non_list_line(self) -> None:
        assert parse("- a\ntext") == "<ul>\n<li>a</li>\n</ul>\n<p>text</p>"

    def test_ordered_list(self) -> None:
        assert parse("1. one\n2. two") == "<ol>\n<li>one</li>\n<li>two</li>\n</ol>"

    def test_list_items_get_inline_spans(self) -> None:
        assert parse("* *em*\n* **b**") == (
            "<ul>\n<li><em>em</em></li>\n<li><strong>b</strong></li>\n</ul>"
        )


class TestLinks:
    def test_valid_link(self) -> None:
        assert parse("[Example](https://example.com)") == (
            '<p><a href="https://example.com">Example</a></p>'
        )

    def test_rejected_link_stays_literal(self) -> None:
        html = parse("[x](javascript:alert(1))")
        assert "<a" not in html
        assert "[x](javascript:alert(1))" in html

    def test_relative_link_stays_literal(self) -> None:
        assert parse("[x](/local)") == "<p>[x](/local)</p>"

    def test_emphasis_never_enters_href(self) -> None:
        assert parse("[x](https://example.com/*a*)") == (
            '<p><a href="https://example.com/*a*">x</a></p>'
        )

    def test_emphasis_inside_label(self) -> None:
        assert parse("[**b**](https://example.com)") == (
            '<p><a href="https://example.com"><strong>b</strong></a></p>'
        )

    def test_custom_url_policy(self) -> None:
        https_only = UrlPolicy(frozenset({"https"}))
        assert parse("[x](http://example.com)", url_policy=https_only) == (
            "<p>[x](http://example.com)</p>"
        )
        assert "<a" in parse("[x](http://example.com)")


class TestCodeProtection:
    def test_fenced_code_not_reinterpreted(self) -> None:
        source = "```\n# not heading\n**not bold**\n- not list\n<b>x</b>\n```"
        assert parse(source) == (
            "<pre><code># not heading\n**not bold**\n- not list\n"
            "&lt;b&gt;x&lt;/b&gt;</code></pre>"
        )

    def test_fenced_code_with_language(self) -> None:
        assert parse("```python\nprint(1)\n```") == (
            '<pre><code class="language-python">print(1)</code></pre>'
        )

    def test_single_word_first_line_is_info_string(self) -> None:
        assert render("```Hello\nWorld\n```") == (
            '<pre><code class="language-hello">World</code></pre>'
        )

    def test_prose_first_line_stays_visible(self) -> None:
        assert parse("```Hello world\nx\n```") == "<pre><code>Hello world\nx</code></pre>"
        assert parse("```print(1)```") == "<pre><code>print(1)</code></pre>"

    def test_code_block_between_paragraphs(self) -> None:
        assert parse("before\n```\nx\n```\nafter") == (
            "<p>before</p>\n<pre><code>x</code></pre>\n<p>after</p>"
        )

    def test_inline_code_not_reinterpreted(self) -> None:
        assert parse("Use `**x**` and `[a](https://e.com)`") == (
            "<p>Use <code>**x**</code> and <code>[a](https://e.com)</code></p>"
        )

    def test_inline_code_escaped(self) -> None:
        assert parse("`<script>`") == "<p><code>&lt;script&gt;</code></p>"

    def test_unclosed_fence_is_text(self) -> None:
        assert parse("```\ncode") == "<p>```<br>code</p>"


class TestInputHandling:
    def test_empty(self) -> None:
        assert parse("") == ""

    @pytest.mark.parametrize("value", [None, 42, b"# x"])
    def test_non_string(self, value: object) -> None:
        assert parse(value) == ""  # type: ignore[arg-type]

    def test_crlf_line_endings(self) -> None:
        assert parse("# A\r\nb\r\n\r\nc") == "<h1>A</h1>\n<p>b</p>\n<p>c</p>"

    def test_placeholder_markers_cannot_be_forged(self) -> None:
        assert parse("\x02ms:0\x03") == "<p>ms:0</p>"

    def test_raw_html_passes_through_untrusted(self) -> None:
        # The parser leaves raw HTML alone; the sanitizer is the boundary
        assert parse("<div>hi</div>") == "<p><div>hi</div></p>"

    def test_deterministic(self) -> None:
        source = "# T\n\n- a\n- b\n\n**x** [l](https://e.com)"
        assert parse(source) == parse(source)


class _ExplodingParser(Parser):
    """Parser whose pipeline fails on its second pass."""

    def _passes(self, stash):  # type: ignore[no-untyped-def]
        def boom(text: str) -> str:
            raise RuntimeError("boom")

        return (("code", lambda text: text), ("boom", boom))


class TestFallback:
    def test_failure_degrades_to_escaped_input(self) -> None:
        parser = _ExplodingParser()
        assert parser.parse("<b>x</b> & **y**") == "&lt;b&gt;x&lt;/b&gt; &amp; **y**"

    def test_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="marksafe"):
            _ExplodingParser().parse("x")
        assert any(r.name == "marksafe.parser" for r in caplog.records)

    def test_strict_mode_raises(self) -> None:
        parser = _ExplodingParser(config=ParseConfig(strict=True))
        with pytest.raises(ParseError) as exc_info:
            parser.parse("x")
        assert exc_info.value.pass_name == "boom"
        assert "[boom]" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_strict_mode_from_context(self) -> None:
        with parse_config_context(ParseConfig(strict=True)):
            with pytest.raises(ParseError):
                _ExplodingParser().parse("x")
        assert _ExplodingParser().parse("x") == "x"


class TestParserComponent:
    def test_callable(self) -> None:
        parser = Parser()
        assert parser("# T") == parser.parse("# T") == "<h1>T</h1>"

    def test_reusable(self) -> None:
        parser = Parser()
        assert parser("[a](https://a.com)") == '<p><a href="https://a.com">a</a></p>'
        assert parser("`x`") == "<p><code>x</code></p>"

    def test_explicit_config_wins(self) -> None:
        parser = Parser(config=ParseConfig())
        with parse_config_context(ParseConfig(strict=True)):
            assert parser.config.strict is False
