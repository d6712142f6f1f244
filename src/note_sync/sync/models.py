"""Pydantic models for sync orchestration.

Defines the data contracts shared by the engine, backends and reporter:

- ``SyncTarget``: Enum of export destinations.
- ``SyncOutcome``: Result of syncing one destination.
- ``SyncTestResponse``: Result of the single-destination test action.

All models are frozen (immutable) and built fresh for every call.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from .errors import SyncError

SUCCESS_MESSAGE = "Sync completed successfully"
NO_TARGETS_MESSAGE = "No sync targets are enabled"


class SyncTarget(str, Enum):
    """Export destinations, in sync order."""

    MARKDOWN = "markdown"
    APPLE_NOTES = "apple-notes"

    @property
    def label(self) -> str:
        """Human-readable destination name."""
        return _TARGET_LABELS[self]


_TARGET_LABELS: dict[SyncTarget, str] = {
    SyncTarget.MARKDOWN: "Markdown",
    SyncTarget.APPLE_NOTES: "Apple Notes",
}


class SyncOutcome(BaseModel):
    """Result of syncing one destination.

    Attributes:
        target: Destination that was synced.
        error: The classified failure, or None on success.
    """

    target: SyncTarget
    error: SyncError | None = None

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        """One-line message for display."""
        return SUCCESS_MESSAGE if self.error is None else str(self.error)


class SyncTestResponse(BaseModel):
    """Structured result of the test-sync action.

    Attributes:
        success: Whether the tested destination succeeded.
        target: Label of the tested destination, None when nothing is enabled.
        message: One-line message for display.
    """

    success: bool
    target: str | None = None
    message: str

    model_config = {"frozen": True}

    @classmethod
    def from_outcome(cls, outcome: SyncOutcome) -> SyncTestResponse:
        return cls(
            success=outcome.success,
            target=outcome.target.label,
            message=outcome.message,
        )
