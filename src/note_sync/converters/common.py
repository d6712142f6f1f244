"""Common types and utilities for markup conversion."""

import html
import re
from dataclasses import dataclass, field

# Any tag, including ones split across lines
_TAG_PATTERN = re.compile(r"<[^>]+>", re.DOTALL)
_WHITESPACE_PATTERN = re.compile(r"\s+")

EMPTY_CONTAINER = "<div></div>"


@dataclass
class ConversionResult:
    """Result of format conversion with metadata and warnings.

    Attributes:
        text: Converted text output
        source_format: Format of input text ('html' or 'unknown')
        target_format: Format of output text ('html' or 'markdown')
        converted: True if conversion performed, False if pass-through
        warnings: List of warnings about lossy conversions or unsupported features
    """

    text: str
    source_format: str = "unknown"
    target_format: str = "unknown"
    converted: bool = False
    warnings: list[str] = field(default_factory=list)


def strip_tags(markup: str) -> str:
    """Remove every tag, keeping the text between them."""
    return _TAG_PATTERN.sub("", markup)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace (newlines included) to single spaces and trim."""
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def plain_text(markup: str) -> str:
    """Best-effort visible text of a markup fragment.

    Tags are stripped, entities decoded, then whitespace collapsed.

    Examples:
        >>> plain_text("<p>Fish &amp; <b>chips</b></p>")
        'Fish & chips'
    """
    return collapse_whitespace(html.unescape(strip_tags(markup)))
