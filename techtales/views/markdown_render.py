"""
Markdown rendering for article bodies.

Section numbers at the start of headings and paragraphs are wrapped in spans
so they can be styled apart from the title:

    >>> preprocess_heading_numbers("### 3.24. Team roles")
    '### <span class="heading-number">3.24.</span><span class="heading-title">Team roles</span>'
    >>> preprocess_heading_numbers("3.24. Team roles")
    '<span class="heading-number">3.24.</span><span class="heading-title">Team roles</span>'
    >>> preprocess_heading_numbers("Plain text")
    'Plain text'
"""

import html
import re

import markdown

from techtales.logging_config import get_logger

logger = get_logger(__name__)

HEADING_NUMBER_RE = re.compile(r"^(#{1,6})[ \t]+(\d+\.\d+\.?)[ \t]+(.+)$", re.MULTILINE)
PARAGRAPH_NUMBER_RE = re.compile(r"^(\d+\.\d+\.)[ \t]+(.+)$", re.MULTILINE)

# "extra" covers tables, fenced code and footnotes; "nl2br" turns newlines into breaks
MARKDOWN_EXTENSIONS = ["extra", "nl2br", "sane_lists"]


def _number_spans(number: str, title: str) -> str:
    return (
        f'<span class="heading-number">{number}</span>'
        f'<span class="heading-title">{title}</span>'
    )


def preprocess_heading_numbers(content: str) -> str:
    """Wrap leading section numbers (``3.24.``) of headings and paragraphs in spans."""
    content = HEADING_NUMBER_RE.sub(
        lambda m: f"{m.group(1)} {_number_spans(m.group(2), m.group(3))}",
        content,
    )
    return PARAGRAPH_NUMBER_RE.sub(
        lambda m: _number_spans(m.group(1), m.group(2)),
        content,
    )


def render_markdown(content: str) -> str:
    """Render article markdown to HTML. Falls back to escaped text on failure."""
    try:
        return markdown.markdown(
            preprocess_heading_numbers(content),
            extensions=MARKDOWN_EXTENSIONS,
            output_format="html",
        )
    except Exception:
        logger.exception("Error parsing markdown")
        return html.escape(content)
