"""Note export engine.

Public API for pushing the note to its export destinations.

Modules:

- ``engine``      -- ``SyncService``: runs every enabled destination.
- ``backends``    -- ``MarkdownBackend`` and the Apple Notes backends.
- ``applescript`` -- script generation, ``osascript`` execution, error
  classification.
- ``errors``      -- ``SyncError`` taxonomy.
- ``models``      -- ``SyncTarget``, ``SyncOutcome``, ``SyncTestResponse``.
- ``reporter``    -- Human-readable and JSON outcome formatting.

Usage example
-------------
::

    from note_sync.config_schema import SyncConfig, MarkdownSyncConfig
    from note_sync.sync import SyncService, format_outcomes

    config = SyncConfig(
        markdown=MarkdownSyncConfig(enabled=True, path="~/note.md"),
    )
    service = SyncService()
    print(format_outcomes(service.sync_outcomes(note_html, config)))
"""

from .engine import SyncService, default_backends
from .errors import (
    NotConfiguredError,
    PermissionDeniedError,
    PlatformUnsupportedError,
    ScriptingError,
    SyncError,
    SyncErrorKind,
    SyncIOError,
)
from .models import (
    NO_TARGETS_MESSAGE,
    SUCCESS_MESSAGE,
    SyncOutcome,
    SyncTarget,
    SyncTestResponse,
)
from .reporter import format_outcomes, outcomes_to_json, test_response_to_json

__all__ = [
    "NO_TARGETS_MESSAGE",
    "SUCCESS_MESSAGE",
    "NotConfiguredError",
    "PermissionDeniedError",
    "PlatformUnsupportedError",
    "ScriptingError",
    "SyncError",
    "SyncErrorKind",
    "SyncIOError",
    "SyncOutcome",
    "SyncService",
    "SyncTarget",
    "SyncTestResponse",
    "default_backends",
    "format_outcomes",
    "outcomes_to_json",
    "test_response_to_json",
]
