"""Tests for the top-level API: render, Markdown and the package exports."""

import pytest

import marksafe
from marksafe import Markdown, Parser, SanitizeConfig, Sanitizer, UrlPolicy, render


class TestRender:
    def test_heading(self) -> None:
        assert render("# Hello **World**") == "<h1>Hello <strong>World</strong></h1>"

    def test_list_then_paragraph(self) -> None:
        assert render("- a\n- b\n\ntext") == (
            "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n<p>text</p>"
        )

    def test_hr_serialized_as_void(self) -> None:
        assert render("a\n---\nb") == "<p>a</p>\n<hr/>\n<p>b</p>"

    def test_raw_script_removed(self) -> None:
        assert render("hi <script>alert(1)</script> there") == "<p>hi  there</p>"

    def test_raw_div_flattened(self) -> None:
        assert render("<div>hi</div>") == "<p>hi</p>"

    def test_raw_event_handler_removed(self) -> None:
        html = render('<p onclick="alert(1)">Click me</p>')
        assert "onclick" not in html
        assert "alert" not in html
        assert "Click me" in html

    def test_rejected_link_is_text(self) -> None:
        assert render("[x](javascript:alert(1))") == "<p>[x](alert(1))</p>"

    def test_code_shown_literally(self) -> None:
        assert render("`<script>alert(1)</script>`") == (
            "<p><code>&lt;script&gt;alert(1)&lt;/script&gt;</code></p>"
        )

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\t"])
    def test_blank_input(self, text: str) -> None:
        assert render(text) == ""

    def test_non_string(self) -> None:
        assert render(None) == ""  # type: ignore[arg-type]


class TestMarkdown:
    def test_callable(self) -> None:
        md = Markdown()
        assert md("- a\n- b") == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>"

    def test_blank_input(self) -> None:
        assert Markdown()("  ") == ""

    def test_parse_and_sanitize_separately(self) -> None:
        md = Markdown()
        markup = md.parse("<span>x</span>")
        assert markup == "<p><span>x</span></p>"
        assert md.sanitize(markup) == "<p>x</p>"

    def test_shared_url_policy(self) -> None:
        md = Markdown(url_policy=UrlPolicy(frozenset({"https"})))
        assert md("[plain](http://example.com)") == "<p>[plain](http://example.com)</p>"
        assert md.sanitize('<a href="http://example.com">x</a>') == "<a>x</a>"

    def test_injected_components(self) -> None:
        parser = Parser()
        sanitizer = Sanitizer(SanitizeConfig(allowed_tags=frozenset({"p"})))
        md = Markdown(parser=parser, sanitizer=sanitizer)
        assert md.parser is parser
        assert md.sanitizer is sanitizer
        assert md("**b**") == "<p>b</p>"

    def test_render_many(self) -> None:
        md = Markdown()
        assert md.render_many(["# One", "", "*two*"]) == [
            "<h1>One</h1>",
            "",
            "<p><em>two</em></p>",
        ]

    def test_render_many_accepts_generators(self) -> None:
        md = Markdown()
        assert md.render_many(f"# {i}" for i in range(3)) == [
            "<h1>0</h1>",
            "<h1>1</h1>",
            "<h1>2</h1>",
        ]


class TestExports:
    def test_all_names_resolve(self) -> None:
        for name in marksafe.__all__:
            assert hasattr(marksafe, name), name

    def test_version(self) -> None:
        assert marksafe.__version__ == "0.1.0"

    def test_supported_syntax_exported(self) -> None:
        assert "headers" in marksafe.supported_syntax()
