"""Editor HTML to destination-safe HTML using regex patterns.

The note editor emits task lists with interactive checkboxes, editor-only
data attributes and nested list structures that foreign note stores render
badly or not at all. ``sanitize`` reduces that markup to static blocks:

1. strip editor-only attributes
2. drop checkbox controls and their labels
3. collapse ``<div class="content">text<ul>...</ul></div>`` wrappers
4. flatten lists into one ``<div>`` line per item
5. drop a leading ``<h1>`` that repeats the destination title
6. trim, never returning an empty string

This is a best-effort conversion. Unbalanced markup never raises; whatever
cannot be matched passes through unchanged.
"""

import re
from enum import Enum

from .common import EMPTY_CONTAINER, collapse_whitespace, plain_text, strip_tags

# Literal attributes added by the editor's task-list extension
EDITOR_ONLY_ATTRIBUTES: tuple[str, ...] = (
    ' data-type="taskItem"',
    ' data-type="taskList"',
    ' data-checked="true"',
    ' data-checked="false"',
    ' data-text-style=""',
)

BULLET = "•"

_LABEL_PATTERN = re.compile(r"<label[^>]*?>.*?</label>", re.IGNORECASE | re.DOTALL)
_CHECKBOX_PATTERN = re.compile(
    r"""<input[^>]*type=["']?checkbox["']?[^>]*/?>""", re.IGNORECASE | re.DOTALL
)
_CONTENT_WRAPPER_PATTERN = re.compile(
    # leading text may not cross a closing </div>
    r'<div[^>]*class="content"[^>]*>((?:(?!</div>).)*?)<ul[^>]*?>.*?</ul></div>',
    re.IGNORECASE | re.DOTALL,
)
_LIST_OPEN_PATTERN = re.compile(r"<(ul|ol)\b[^>]*>", re.IGNORECASE)
_LIST_TOKEN_PATTERN = re.compile(r"<(/?)(ul|ol|li)\b[^>]*>", re.IGNORECASE)
_NESTED_LIST_PATTERN = re.compile(r"<(?:ul|ol)\b", re.IGNORECASE)
_LEADING_H1_PATTERN = re.compile(
    r"^\s*<h1[^>]*>(.*?)</h1>", re.IGNORECASE | re.DOTALL
)


class ListKind(str, Enum):
    """Flattening style for a list."""

    UNORDERED = "unordered"
    ORDERED = "ordered"


# ---------------------------------------------------------------------------
# Steps 1-3: editor artifacts
# ---------------------------------------------------------------------------


def strip_editor_attributes(markup: str) -> str:
    """Remove task-list markers, checked flags and empty style placeholders."""
    for needle in EDITOR_ONLY_ATTRIBUTES:
        markup = markup.replace(needle, "")
    return markup


def remove_form_controls(markup: str) -> str:
    """Remove ``<label>`` elements (with content) and checkbox inputs."""
    markup = _LABEL_PATTERN.sub("", markup)
    return _CHECKBOX_PATTERN.sub("", markup)


def collapse_content_wrappers(markup: str) -> str:
    """Reduce a content div followed by its nested list shell to the leading text.

    After checkbox removal a task item looks like
    ``<div class="content">Parent<ul>...</ul></div>``; only ``Parent``
    survives.
    """
    return _CONTENT_WRAPPER_PATTERN.sub(
        lambda m: f'<div class="content">{m.group(1).strip()}</div>', markup
    )


# ---------------------------------------------------------------------------
# Step 4: list flattening
# ---------------------------------------------------------------------------


def _find_list_end(markup: str, start: int) -> tuple[int, int]:
    """Locate the close tag balancing a list opened just before *start*.

    Returns:
        (body_end, close_end). An unclosed list runs to the end of input.
    """
    depth = 1
    for match in _LIST_TOKEN_PATTERN.finditer(markup, start):
        if match.group(2).lower() == "li":
            continue
        depth += -1 if match.group(1) else 1
        if depth == 0:
            return match.start(), match.end()
    return len(markup), len(markup)


def split_list_items(body: str) -> list[str]:
    """Split a list body into the raw content of its top-level ``<li>`` items.

    Items inside nested lists stay part of their parent item. A missing
    ``</li>`` is implied by the next sibling ``<li>`` or the end of the body.
    """
    items: list[str] = []
    depth = 0
    item_start: int | None = None

    for match in _LIST_TOKEN_PATTERN.finditer(body):
        closing = bool(match.group(1))
        name = match.group(2).lower()

        if name in ("ul", "ol"):
            depth = max(depth - 1, 0) if closing else depth + 1
            continue
        if depth > 0:
            continue

        if item_start is not None:
            items.append(body[item_start : match.start()])
            item_start = None
        if not closing:
            item_start = match.end()

    if item_start is not None:
        items.append(body[item_start:])
    return items


def render_list_item(raw: str, kind: ListKind, index: int) -> str:
    """Render one list item as a single ``<div>`` line.

    Content from the first nested list onward is dropped. Returns an empty
    string when no text remains.

    Examples:
        >>> render_list_item("Parent<ul><li>Nested</li></ul>", ListKind.UNORDERED, 1)
        '<div>• Parent</div>'
    """
    nested = _NESTED_LIST_PATTERN.search(raw)
    if nested:
        raw = raw[: nested.start()]

    text = collapse_whitespace(strip_tags(raw))
    if not text:
        return ""

    if kind is ListKind.ORDERED:
        return f"<div>{index}. {text}</div>"
    return f"<div>{BULLET} {text}</div>"


def render_list(body: str, kind: ListKind) -> str:
    """Render the non-empty top-level items of a list body.

    Items are numbered by position from 1, so an empty item leaves a gap.
    """
    lines = (
        render_list_item(raw, kind, index)
        for index, raw in enumerate(split_list_items(body), 1)
    )
    return "".join(line for line in lines if line)


def flatten_lists(markup: str) -> str:
    """Replace every outermost ``<ul>``/``<ol>`` with flattened item lines."""
    parts: list[str] = []
    pos = 0
    while True:
        match = _LIST_OPEN_PATTERN.search(markup, pos)
        if match is None:
            parts.append(markup[pos:])
            break
        parts.append(markup[pos : match.start()])
        body_end, close_end = _find_list_end(markup, match.end())
        kind = (
            ListKind.ORDERED if match.group(1).lower() == "ol" else ListKind.UNORDERED
        )
        parts.append(render_list(markup[match.end() : body_end], kind))
        pos = close_end
    return "".join(parts)


# ---------------------------------------------------------------------------
# Steps 5-6: title dedup and final cleanup
# ---------------------------------------------------------------------------


def strip_leading_matching_heading(markup: str, title: str) -> str:
    """Remove a leading ``<h1>`` whose text equals *title* (trimmed, any case).

    A non-matching heading is kept as is.
    """
    match = _LEADING_H1_PATTERN.match(markup)
    if match is None:
        return markup

    if plain_text(match.group(1)).casefold() != collapse_whitespace(title).casefold():
        return markup
    return markup[match.end() :]


def sanitize_html(markup: str) -> str:
    """Apply the destination-independent steps (1-4) and trim."""
    markup = strip_editor_attributes(markup)
    markup = remove_form_controls(markup)
    markup = collapse_content_wrappers(markup)
    markup = flatten_lists(markup)
    return markup.strip()


def sanitize(content: str, target_title: str) -> str:
    """Convert editor HTML into markup safe for a foreign note store.

    Args:
        content: Editor-native HTML.
        target_title: Title the destination shows on its own; a leading
            ``<h1>`` repeating it is removed.

    Returns:
        Sanitized HTML, or ``"<div></div>"`` when nothing remains.
    """
    sanitized = sanitize_html(content)
    sanitized = strip_leading_matching_heading(sanitized, target_title).strip()
    return sanitized or EMPTY_CONTAINER
