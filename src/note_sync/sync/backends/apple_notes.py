"""Apple Notes destination driven through AppleScript.

``AppleNotesBackend`` works only on macOS. Everywhere else
``create_apple_notes_backend`` returns ``UnsupportedPlatformBackend``,
which fails every operation without spawning a process.
"""

from __future__ import annotations

import html
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from note_sync.converters import sanitize

from ..applescript import (
    LAUNCH_NOTES_SCRIPT,
    LIST_FOLDERS_SCRIPT,
    PERMISSION_PROBE_SCRIPT,
    build_update_script,
    parse_applescript_list,
    run_osascript,
)
from ..errors import NotConfiguredError, PlatformUnsupportedError
from ..models import SyncTarget
from .base import METADATA_SOURCE, SyncBackend

if TYPE_CHECKING:
    from note_sync.config_schema import SyncConfig

logger = logging.getLogger(__name__)

UNSUPPORTED_PLATFORM_DETAIL = "Apple Notes sync is only available on macOS"

_METADATA_STYLE = "font-size:11px;color:#6e6e73;margin:8px 0;"


def metadata_footer(synced_at: datetime | None = None) -> str:
    """Render the 'Synced from' line placed under the note title."""
    synced_at = synced_at or datetime.now(timezone.utc)
    return (
        f'<p style="{_METADATA_STYLE}"><em>Synced from {METADATA_SOURCE} • '
        f"{synced_at.isoformat()}</em></p>"
    )


def build_note_body(
    content: str,
    title: str,
    include_metadata: bool,
    synced_at: datetime | None = None,
) -> str:
    """Assemble the full note HTML: title heading, optional footer, body."""
    footer = metadata_footer(synced_at) if include_metadata else ""
    return f"<h1>{html.escape(title, quote=False)}</h1>{footer}{sanitize(content, title)}"


class AppleNotesBackend(SyncBackend):
    """Create or update one note in Apple Notes.

    Args:
        timeout: Default seconds to wait for each ``osascript`` call; the
            per-call config value wins when set.
    """

    target = SyncTarget.APPLE_NOTES

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def _run(self, script: str, config: SyncConfig | None = None) -> str:
        timeout = self.timeout
        if config is not None and config.apple_notes.timeout is not None:
            timeout = config.apple_notes.timeout
        return run_osascript(script, timeout=timeout)

    def ensure_running(self, config: SyncConfig | None = None) -> None:
        """Launch Notes if it is not running. Safe to call repeatedly."""
        self._run(LAUNCH_NOTES_SCRIPT, config)

    def check_availability(self, config: SyncConfig | None = None) -> None:
        """Probe whether Notes can be automated.

        Raises:
            PermissionDeniedError: If macOS blocks automation access.
        """
        self.ensure_running(config)
        self._run(PERMISSION_PROBE_SCRIPT, config)

    def list_collections(self, config: SyncConfig | None = None) -> list[str]:
        """Names of the folders in the default Notes account."""
        self.ensure_running(config)
        output = self._run(LIST_FOLDERS_SCRIPT, config)
        return parse_applescript_list(output)

    def export(self, content: str, config: SyncConfig) -> None:
        settings = config.apple_notes
        folder = settings.folder.strip()
        if not folder:
            raise NotConfiguredError("Apple Notes folder must be specified")
        title = settings.title.strip()
        if not title:
            raise NotConfiguredError("Apple Notes title must be specified")

        self.ensure_running(config)
        body = build_note_body(content, title, settings.include_metadata)
        self._run(build_update_script(title, folder, body), config)
        logger.info("Updated Apple Notes note '%s' in folder '%s'", title, folder)


class UnsupportedPlatformBackend(SyncBackend):
    """Stand-in for Apple Notes on platforms without it."""

    target = SyncTarget.APPLE_NOTES

    def _unsupported(self) -> PlatformUnsupportedError:
        logger.warning(UNSUPPORTED_PLATFORM_DETAIL)
        return PlatformUnsupportedError(UNSUPPORTED_PLATFORM_DETAIL)

    def ensure_running(self, config: SyncConfig | None = None) -> None:
        raise self._unsupported()

    def check_availability(self, config: SyncConfig | None = None) -> None:
        raise self._unsupported()

    def list_collections(self, config: SyncConfig | None = None) -> list[str]:
        raise self._unsupported()

    def export(self, content: str, config: SyncConfig) -> None:
        raise self._unsupported()


def create_apple_notes_backend(
    platform: str | None = None, timeout: float | None = None
) -> AppleNotesBackend | UnsupportedPlatformBackend:
    """Pick the Apple Notes backend for the running platform.

    Args:
        platform: ``sys.platform`` value to select for; defaults to the
            current one.
        timeout: Default osascript timeout for the functional backend.
    """
    platform = platform or sys.platform
    if platform == "darwin":
        return AppleNotesBackend(timeout=timeout)
    logger.debug("Apple Notes backend unavailable on %s", platform)
    return UnsupportedPlatformBackend()
