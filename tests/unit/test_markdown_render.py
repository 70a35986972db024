"""Unit tests for article markdown rendering and display helpers."""

from datetime import datetime

from techtales.views.formatting import format_date, initials
from techtales.views.markdown_render import preprocess_heading_numbers, render_markdown


class TestHeadingNumbers:
    """Section number spans."""

    def test_heading(self):
        assert preprocess_heading_numbers("## 2.1 Setup") == (
            '## <span class="heading-number">2.1</span>'
            '<span class="heading-title">Setup</span>'
        )

    def test_paragraph_needs_trailing_dot(self):
        assert preprocess_heading_numbers("2.1 Setup") == "2.1 Setup"
        assert preprocess_heading_numbers("2.1. Setup").startswith('<span class="heading-number">2.1.</span>')

    def test_only_line_starts_match(self):
        text = "Version 3.24. is out"
        assert preprocess_heading_numbers(text) == text

    def test_each_line_is_handled(self):
        result = preprocess_heading_numbers("# 1.1. One\ntext\n# 1.2. Two")
        assert result.count("heading-number") == 2


class TestRenderMarkdown:
    """Markdown to HTML."""

    def test_heading_and_paragraph(self):
        html = render_markdown("# 1.1. Intro\n\nHello **world**")

        assert html.startswith('<h1><span class="heading-number">1.1.</span>')
        assert "<strong>world</strong>" in html

    def test_tables(self):
        html = render_markdown("| a | b |\n|---|---|\n| 1 | 2 |")

        assert "<table>" in html

    def test_newlines_become_breaks(self):
        assert "<br" in render_markdown("line one\nline two")

    def test_empty(self):
        assert render_markdown("") == ""


class TestFormatting:
    """Display helpers."""

    def test_format_date(self):
        assert format_date(datetime(2024, 3, 1)) == "March 1, 2024"
        assert format_date(datetime(2023, 12, 25, 18, 30)) == "December 25, 2023"

    def test_initials(self):
        assert initials("Jane Smith") == "Ja"
        assert initials("J") == "J"
