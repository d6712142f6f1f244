"""Sanitized HTML to Markdown conversion using regex patterns."""

import html
import re

from .common import ConversionResult, strip_tags
from .html_sanitizer import BULLET

_LIST_LINE_PATTERN = re.compile(r"(?m)^((?:-|\d+\.) .*)\n{2,}(?=(?:-|\d+\.) )")

_TAG_SPLIT_PATTERN = re.compile(r"(<[^>]+>)")
_TAG_NAME_PATTERN = re.compile(r"<(/?)([a-zA-Z][a-zA-Z0-9]*)")
_INLINE_MARKUP_PATTERN = re.compile(r"([\\`*_~\[\]])")
_BLOCK_MARKER_PATTERN = re.compile(r"^(\s*)([#>+-])")
_ORDERED_MARKER_PATTERN = re.compile(r"^(\s*\d+)\.")
# Text after these starts a new Markdown line
_LINE_START_TAGS = frozenset({"p", "div", "br", "blockquote", "li"})
_HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})


class HtmlToMarkdownParser:
    """Parser for converting sanitized note HTML to Markdown.

    Expects the output of ``sanitize``: lists are already flattened into
    ``<div>• item</div>`` / ``<div>1. item</div>`` lines.
    """

    def __init__(self):
        """Initialize parser with empty warnings and code block stash."""
        self.warnings: list[str] = []
        self._code_blocks: list[str] = []

    def parse(self, html_text: str) -> ConversionResult:
        """
        Parse sanitized HTML and convert to Markdown.

        This is a best-effort conversion. Unknown tags are stripped and their
        text is kept.

        Args:
            html_text: Sanitized HTML

        Returns:
            ConversionResult with Markdown text and warnings about lossy conversions
        """
        self.warnings = []
        self._code_blocks = []
        self._detect_lossy_elements(html_text)

        text = html_text
        text = self._stash_code_blocks(text)
        text = self._escape_text(text)
        text = self._convert_inline(text)
        text = self._convert_headings(text)
        text = self._convert_list_lines(text)
        text = self._convert_blockquotes(text)
        text = self._convert_blocks(text)
        text = self._cleanup(text)
        text = self._restore_code_blocks(text)

        return ConversionResult(
            text=text,
            source_format="html",
            target_format="markdown",
            converted=True,
            warnings=self.warnings,
        )

    def _detect_lossy_elements(self, text: str) -> None:
        """Detect lossy elements before conversion and add warnings."""
        if re.search(r"<img\b", text, re.IGNORECASE):
            self.warnings.append(
                "Images detected - dropped (inline images are not exported)"
            )
        if re.search(r"<table\b", text, re.IGNORECASE):
            self.warnings.append(
                "Tables detected - flattened to plain lines"
            )

    def _stash_code_blocks(self, text: str) -> str:
        """Replace ``<pre>`` blocks with placeholders so later passes skip them."""

        def stash(match: re.Match[str]) -> str:
            code = html.unescape(strip_tags(match.group(1))).strip("\n")
            self._code_blocks.append(f"```\n{code}\n```")
            return f"\n\n\x00CODE{len(self._code_blocks) - 1}\x00\n\n"

        return re.sub(
            r"<pre[^>]*>(.*?)</pre>",
            stash,
            text,
            flags=re.IGNORECASE | re.DOTALL,
        )

    def _escape_text(self, text: str) -> str:
        """Backslash-escape Markdown syntax that appears in the note's own text.

        Only text between tags is touched, and never inside ``<code>``. A
        ``N.`` at the start of a ``<div>`` is left alone because the
        sanitizer renders ordered items that way, so a paragraph the user
        wrote as ``<div>1. Intro</div>`` still comes out as a list item.
        """
        parts = _TAG_SPLIT_PATTERN.split(text)
        line_start = True
        opened_div = False
        in_code = False

        for index, part in enumerate(parts):
            if index % 2:
                tag = _TAG_NAME_PATTERN.match(part)
                if tag is None:
                    continue
                closing, name = bool(tag.group(1)), tag.group(2).lower()
                if name == "code":
                    in_code = not closing
                elif name in _LINE_START_TAGS or (closing and name in _HEADING_TAGS):
                    line_start = True
                    opened_div = name == "div" and not closing
                continue

            if not part or in_code:
                continue
            raw = _INLINE_MARKUP_PATTERN.sub(r"\\\1", html.unescape(part))
            if line_start and raw.strip():
                raw = _BLOCK_MARKER_PATTERN.sub(r"\1\\\2", raw)
                if not opened_div:
                    raw = _ORDERED_MARKER_PATTERN.sub(r"\1\\.", raw)
            if raw.strip():
                line_start = False
            parts[index] = html.escape(raw, quote=False)

        return "".join(parts)

    def _convert_inline(self, text: str) -> str:
        """Convert inline formatting, links and line breaks."""
        flags = re.IGNORECASE | re.DOTALL
        text = re.sub(r"<br\s*/?>", "\n", text, flags=re.IGNORECASE)
        text = re.sub(r"<hr[^>]*>", "\n\n---\n\n", text, flags=re.IGNORECASE)
        text = re.sub(r"<(strong|b)\b[^>]*>(.*?)</\1>", r"**\2**", text, flags=flags)
        text = re.sub(r"<(em|i)\b[^>]*>(.*?)</\1>", r"*\2*", text, flags=flags)
        text = re.sub(
            r"<(s|del|strike)\b[^>]*>(.*?)</\1>", r"~~\2~~", text, flags=flags
        )
        text = re.sub(r"<code[^>]*>(.*?)</code>", r"`\1`", text, flags=flags)
        text = re.sub(
            r"<a\s[^>]*href=\"([^\"]*)\"[^>]*>(.*?)</a>", r"[\2](\1)", text, flags=flags
        )
        return text

    def _convert_headings(self, text: str) -> str:
        """Convert headings: <h2>Title</h2> -> ## Title."""

        def heading(match: re.Match[str]) -> str:
            level = int(match.group(1))
            content = " ".join(strip_tags(match.group(2)).split())
            return f"\n\n{'#' * level} {content}\n\n"

        return re.sub(
            r"<h([1-6])[^>]*>(.*?)</h\1>",
            heading,
            text,
            flags=re.IGNORECASE | re.DOTALL,
        )

    def _convert_list_lines(self, text: str) -> str:
        """Convert flattened list lines back to Markdown list items."""
        text = re.sub(
            rf"<div>{BULLET} (.*?)</div>",
            r"\n- \1\n",
            text,
            flags=re.DOTALL,
        )
        return re.sub(r"<div>(\d+)\. (.*?)</div>", r"\n\1. \2\n", text, flags=re.DOTALL)

    def _convert_blockquotes(self, text: str) -> str:
        """Convert blockquotes to ``> `` prefixed lines."""

        def quote(match: re.Match[str]) -> str:
            inner = re.sub(r"</(p|div)>", "\n", match.group(1), flags=re.IGNORECASE)
            lines = [line.strip() for line in strip_tags(inner).split("\n")]
            quoted = "\n".join(f"> {line}" for line in lines if line)
            return f"\n\n{quoted}\n\n"

        return re.sub(
            r"<blockquote[^>]*>(.*?)</blockquote>",
            quote,
            text,
            flags=re.IGNORECASE | re.DOTALL,
        )

    def _convert_blocks(self, text: str) -> str:
        """Turn block boundaries into newlines and drop every remaining tag."""
        text = re.sub(r"<p[^>]*>(.*?)</p>", r"\n\n\1\n\n", text, flags=re.IGNORECASE | re.DOTALL)
        text = re.sub(r"</(div|li|tr|table)>", "\n", text, flags=re.IGNORECASE)
        return strip_tags(text)

    def _cleanup(self, text: str) -> str:
        """Decode entities and normalize blank lines."""
        text = html.unescape(text)
        text = "\n".join(line.rstrip() for line in text.split("\n"))
        text = re.sub(r"\n{3,}", "\n\n", text)
        text = _LIST_LINE_PATTERN.sub(r"\1\n", text)
        return text.strip()

    def _restore_code_blocks(self, text: str) -> str:
        return re.sub(
            r"\x00CODE(\d+)\x00",
            lambda m: self._code_blocks[int(m.group(1))],
            text,
        )


def html_to_markdown(html_text: str) -> ConversionResult:
    """Convert sanitized note HTML to Markdown."""
    return HtmlToMarkdownParser().parse(html_text)
