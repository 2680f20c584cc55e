"""Tests for content isolation and Markdown rendering."""

from __future__ import annotations

from unittest.mock import patch

from pagemark.document import Document
from pagemark.extractors.main_content import (
    IsolatedContent,
    ReadabilityIsolator,
    _preprocess_html,
    extract_main_content,
)
from pagemark.extractors.markdown import MarkdownifyConverter, html_to_markdown
from pagemark.protocols import ContentIsolator, MarkupConverter

# ---------------------------------------------------------------------------
# Markdown conversion
# ---------------------------------------------------------------------------

class TestHtmlToMarkdown:
    def test_paragraph(self):
        assert html_to_markdown("<p>Body</p>") == "Body"

    def test_empty_input(self):
        assert html_to_markdown("") == ""
        assert html_to_markdown("   \n ") == ""

    def test_atx_headings(self):
        md = html_to_markdown("<h2>Section</h2><p>Text</p>")
        assert "## Section" in md

    def test_dash_bullets(self):
        md = html_to_markdown("<ul><li>one</li><li>two</li></ul>")
        assert "- one" in md
        assert "- two" in md

    def test_unknown_tags_degrade_to_text(self):
        md = html_to_markdown("<custom-widget>Visible <blink>text</blink></custom-widget>")
        assert "Visible" in md
        assert "text" in md
        assert "<" not in md

    def test_no_excessive_blank_lines(self):
        md = html_to_markdown("<p>a</p><br><br><br><br><p>b</p>")
        assert "\n\n\n" not in md

    def test_no_trailing_whitespace(self):
        md = html_to_markdown("<p>line   </p><p>next</p>")
        assert all(line == line.rstrip() for line in md.splitlines())

    def test_deterministic(self):
        html = "<h1>T</h1><p>Some <a href='https://example.com'>link</a></p>"
        assert html_to_markdown(html) == html_to_markdown(html)

    def test_code_fence_language_from_class(self):
        md = html_to_markdown('<pre class="language-python">x = 1</pre>')
        assert "```python" in md
        assert "x = 1" in md

    def test_markdownify_failure_falls_back_to_text(self):
        with patch("pagemark.extractors.markdown.markdownify", side_effect=ValueError("boom")):
            md = html_to_markdown("<p>Plain words</p>")
        assert md == "Plain words"

    def test_converter_satisfies_protocol(self):
        converter = MarkdownifyConverter()
        assert isinstance(converter, MarkupConverter)
        assert converter.render("<p>Body</p>") == "Body"


# ---------------------------------------------------------------------------
# Content isolation
# ---------------------------------------------------------------------------

class TestPreprocess:
    def test_removes_template_blocks(self):
        html = "<body><template><p>hidden modal</p></template><p>kept</p></body>"
        out = _preprocess_html(html)
        assert "hidden modal" not in out
        assert "kept" in out

    def test_removes_cookie_banner(self):
        html = '<body><div id="cookie-banner">Accept cookies</div><p>kept</p></body>'
        out = _preprocess_html(html)
        assert "Accept cookies" not in out
        assert "kept" in out


class TestExtractMainContent:
    def test_article_isolated(self, article_html):
        result = extract_main_content(article_html, url="https://example.com/blog/readable-content")
        assert isinstance(result, IsolatedContent)
        assert result.method in ("readability", "trafilatura")
        assert "Markdown" in result.html
        assert result.title

    def test_login_page_has_no_content(self, minimal_html):
        assert extract_main_content(minimal_html, url="https://example.com/login") is None

    def test_empty_html(self):
        assert extract_main_content("") is None

    def test_extractor_errors_mean_no_content(self):
        with patch("pagemark.extractors.main_content._try_readability", return_value=(None, None)), \
             patch("pagemark.extractors.main_content._try_trafilatura", return_value=None):
            assert extract_main_content("<p>anything</p>") is None

    def test_readability_preferred_on_similar_counts(self):
        r_html = "<p>" + " ".join(["word"] * 60) + "</p>"
        t_html = "<p>" + " ".join(["other"] * 70) + "</p>"
        with patch("pagemark.extractors.main_content._try_readability", return_value=(r_html, "R")), \
             patch("pagemark.extractors.main_content._try_trafilatura", return_value=t_html):
            result = extract_main_content("<html></html>")
        assert result == IsolatedContent(r_html, "R", "readability")

    def test_trafilatura_wins_with_many_more_words(self):
        r_html = "<p>" + " ".join(["word"] * 60) + "</p>"
        t_html = "<p>" + " ".join(["other"] * 200) + "</p>"
        with patch("pagemark.extractors.main_content._try_readability", return_value=(r_html, "R")), \
             patch("pagemark.extractors.main_content._try_trafilatura", return_value=t_html):
            result = extract_main_content("<html></html>")
        assert result is not None
        assert result.method == "trafilatura"
        assert result.title == "R"

    def test_trafilatura_only(self):
        t_html = "<p>" + " ".join(["other"] * 40) + "</p>"
        with patch("pagemark.extractors.main_content._try_readability", return_value=(None, "Heading")), \
             patch("pagemark.extractors.main_content._try_trafilatura", return_value=t_html):
            result = extract_main_content("<html></html>")
        assert result == IsolatedContent(t_html, "Heading", "trafilatura")

    def test_isolator_uses_document_url(self):
        doc = Document("<p>x</p>", base_url="https://example.com/a")
        with patch("pagemark.extractors.main_content.extract_main_content", return_value=None) as mock:
            assert ReadabilityIsolator().isolate(doc) is None
        mock.assert_called_once_with("<p>x</p>", url="https://example.com/a")

    def test_isolator_satisfies_protocol(self):
        assert isinstance(ReadabilityIsolator(), ContentIsolator)
