"""Markup conversion for export destinations."""

from .common import (
    EMPTY_CONTAINER,
    ConversionResult,
    collapse_whitespace,
    plain_text,
    strip_tags,
)
from .html_sanitizer import (
    ListKind,
    sanitize,
    sanitize_html,
    strip_leading_matching_heading,
)
from .html_to_markdown import HtmlToMarkdownParser, html_to_markdown

__all__ = [
    "EMPTY_CONTAINER",
    "ConversionResult",
    "HtmlToMarkdownParser",
    "ListKind",
    "collapse_whitespace",
    "html_to_markdown",
    "plain_text",
    "sanitize",
    "sanitize_html",
    "strip_leading_matching_heading",
    "strip_tags",
]
