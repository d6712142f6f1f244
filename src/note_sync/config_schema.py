"""Unified configuration schema for note_sync.

Defines Pydantic models for the config structure with dedicated sections
for the note source, each sync destination, and logging.

Usage:
    from note_sync.config_schema import UnifiedConfig, build_config

    raw = load_hierarchical_config()
    unified = build_config(raw)
    if unified.sync.is_any_enabled():
        ...
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from .sync.models import SyncTarget

logger = logging.getLogger(__name__)

DEFAULT_NOTE_TITLE = "What The Note"
DEFAULT_NOTES_FOLDER = "Notes"


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class MarkdownSyncConfig(BaseModel):
    """Markdown file destination settings."""

    enabled: bool = Field(default=False, description="Export to a Markdown file")
    path: str | None = Field(
        default=None, description="Output file path (~ is expanded)"
    )
    include_metadata: bool = Field(
        default=True, description="Prepend a YAML front-matter block"
    )

    model_config = {"frozen": True}


class AppleNotesSyncConfig(BaseModel):
    """Apple Notes destination settings.

    ``title`` is the exact note name used as the upsert key inside
    ``folder``; both are matched exactly by the automation script.
    """

    enabled: bool = Field(default=False, description="Export to Apple Notes")
    title: str = Field(default=DEFAULT_NOTE_TITLE, description="Target note name")
    folder: str = Field(
        default=DEFAULT_NOTES_FOLDER,
        description="Folder in the default Notes account",
    )
    include_metadata: bool = Field(
        default=True, description="Add a 'Synced from' footer line"
    )
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds to wait for osascript (None waits indefinitely)",
    )

    model_config = {"frozen": True}


class SyncConfig(BaseModel):
    """Per-destination settings.

    Any number of destinations may be enabled here; the one-at-a-time
    product rule is applied by ``validators.validate_sync_config``.
    """

    markdown: MarkdownSyncConfig = Field(default_factory=MarkdownSyncConfig)
    apple_notes: AppleNotesSyncConfig = Field(default_factory=AppleNotesSyncConfig)
    allow_multiple: bool = Field(
        default=False,
        description="Permit more than one destination at a time",
    )

    model_config = {"frozen": True}

    def is_any_enabled(self) -> bool:
        return self.markdown.enabled or self.apple_notes.enabled

    def enabled_targets(self) -> list[SyncTarget]:
        """Enabled destinations in sync order (Markdown first)."""
        targets = []
        if self.markdown.enabled:
            targets.append(SyncTarget.MARKDOWN)
        if self.apple_notes.enabled:
            targets.append(SyncTarget.APPLE_NOTES)
        return targets


class NoteConfig(BaseModel):
    """Location of the note document read by the CLI."""

    path: str | None = Field(default=None, description="Path to the note file")

    model_config = {"frozen": True}


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Optional log file path.
    """

    level: str = Field(default="INFO", description="Log level")
    file: str | None = Field(default=None, description="Log file path")

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Top-level unified config
# ---------------------------------------------------------------------------


class UnifiedConfig(BaseModel):
    """Top-level unified configuration.

    Every section has sensible defaults, so ``UnifiedConfig()``
    (zero-config, nothing enabled) is always valid.
    """

    note: NoteConfig = Field(default_factory=NoteConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}


def build_config(raw_data: dict) -> UnifiedConfig:
    """Construct a ``UnifiedConfig`` from the raw dict returned by
    ``load_hierarchical_config()``.

    Missing sections get defaults.

    Raises:
        pydantic.ValidationError: If a section has invalid values.
    """
    if not raw_data:
        return UnifiedConfig()

    return UnifiedConfig(**raw_data)
