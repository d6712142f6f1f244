"""Closed error taxonomy for sync destinations.

Every failure a destination can report is one of the ``SyncError``
subclasses below. ``str(error)`` is a single line meant for direct display
to the user.
"""

from __future__ import annotations

from enum import Enum


class SyncErrorKind(str, Enum):
    """Error categories surfaced to callers."""

    NOT_CONFIGURED = "not_configured"
    PERMISSION_DENIED = "permission_denied"
    SCRIPTING_FAILURE = "scripting_failure"
    PLATFORM_UNSUPPORTED = "platform_unsupported"
    IO_FAILURE = "io_failure"


class SyncError(Exception):
    """Base class for destination failures.

    Attributes:
        detail: Human-readable description without the category prefix.
    """

    kind: SyncErrorKind
    prefix: str = "Sync failed"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.prefix}: {self.detail}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyncError):
            return NotImplemented
        return type(self) is type(other) and self.detail == other.detail

    def __hash__(self) -> int:
        return hash((type(self), self.detail))

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "message": str(self)}


class NotConfiguredError(SyncError):
    """A required destination setting is missing, or the target folder is absent."""

    kind = SyncErrorKind.NOT_CONFIGURED
    prefix = "Sync not configured"


class PermissionDeniedError(SyncError):
    """The OS denied access to the automation bridge."""

    kind = SyncErrorKind.PERMISSION_DENIED
    prefix = "Permission denied while running sync"


class ScriptingError(SyncError):
    """The automated application reported an unclassified error."""

    kind = SyncErrorKind.SCRIPTING_FAILURE
    prefix = "AppleScript failed"


class PlatformUnsupportedError(SyncError):
    """The destination does not exist on this operating system."""

    kind = SyncErrorKind.PLATFORM_UNSUPPORTED
    prefix = "Sync not implemented"


class SyncIOError(SyncError):
    """A process could not be spawned or a file could not be written."""

    kind = SyncErrorKind.IO_FAILURE
    prefix = "IO error"

    @classmethod
    def from_os_error(cls, exc: OSError) -> SyncIOError:
        return cls(str(exc))
