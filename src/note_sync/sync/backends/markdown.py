"""Markdown file destination.

Writes the note as a plain Markdown file, optionally preceded by a YAML
front-matter block. The file is overwritten on every sync.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from note_sync.converters import html_to_markdown, sanitize
from note_sync.file_handler import write_file

from ..errors import NotConfiguredError, SyncIOError
from ..models import SyncTarget
from .base import METADATA_SOURCE, SyncBackend

if TYPE_CHECKING:
    from note_sync.config_schema import SyncConfig

logger = logging.getLogger(__name__)


def build_front_matter(title: str, synced_at: datetime | None = None) -> str:
    """Render the metadata block placed before the note body."""
    synced_at = synced_at or datetime.now(timezone.utc)
    metadata = {
        "title": title,
        "synced_at": synced_at.isoformat(timespec="seconds"),
        "source": METADATA_SOURCE,
    }
    dumped = yaml.safe_dump(metadata, sort_keys=False, allow_unicode=True)
    return f"---\n{dumped}---\n\n"


def render_markdown_document(
    content: str, title: str, include_metadata: bool
) -> str:
    """Sanitize editor HTML and render the complete Markdown file text.

    The file has no title field of its own, so a leading heading is kept
    even when it repeats *title*.
    """
    result = html_to_markdown(sanitize(content, ""))
    for warning in result.warnings:
        logger.info("Markdown export: %s", warning)

    body = result.text + "\n" if result.text else ""
    if include_metadata:
        return build_front_matter(title) + body
    return body


class MarkdownBackend(SyncBackend):
    """Export the note to a local Markdown file."""

    target = SyncTarget.MARKDOWN

    def export(self, content: str, config: SyncConfig) -> None:
        settings = config.markdown
        raw_path = (settings.path or "").strip()
        if not raw_path:
            raise NotConfiguredError("Markdown file path must be specified")

        path = Path(raw_path).expanduser()
        document = render_markdown_document(
            content, title=path.stem, include_metadata=settings.include_metadata
        )

        try:
            written = write_file(path, document)
        except OSError as exc:
            raise SyncIOError.from_os_error(exc) from exc

        logger.info("Wrote %d bytes to %s", written, path)
