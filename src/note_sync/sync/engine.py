"""Sync orchestrator that pushes one note to every enabled destination.

The ``SyncService`` is a pure function of (content, configuration): both
are passed into every call and nothing is cached between calls. It:

1. Determines the enabled destinations in fixed order (Markdown first).
2. Invokes each destination's backend sequentially.
3. Records a ``SyncOutcome`` per destination.

Error handling is per-destination: one destination's failure is recorded
and the next destination still runs. ``sync_all`` then surfaces only the
first failure.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping

from .backends import MarkdownBackend, SyncBackend, create_apple_notes_backend
from .errors import SyncError, SyncIOError
from .models import NO_TARGETS_MESSAGE, SyncOutcome, SyncTarget, SyncTestResponse

if TYPE_CHECKING:
    from note_sync.config_schema import SyncConfig

logger = logging.getLogger(__name__)


def default_backends() -> dict[SyncTarget, SyncBackend]:
    """Backends for the running platform."""
    return {
        SyncTarget.MARKDOWN: MarkdownBackend(),
        SyncTarget.APPLE_NOTES: create_apple_notes_backend(),
    }


class SyncService:
    """Run the note through every enabled destination.

    Args:
        backends: Backend per destination. Defaults to
            ``default_backends()``; tests inject fakes here.
    """

    def __init__(
        self, backends: Mapping[SyncTarget, SyncBackend] | None = None
    ) -> None:
        self.backends: dict[SyncTarget, SyncBackend] = dict(
            backends if backends is not None else default_backends()
        )

    # ------------------------------------------------------------------
    # Content operations
    # ------------------------------------------------------------------

    def sync_outcomes(self, content: str, config: SyncConfig) -> list[SyncOutcome]:
        """Sync every enabled destination and report each result.

        Returns:
            One outcome per enabled destination, in sync order. Empty when
            nothing is enabled.
        """
        outcomes: list[SyncOutcome] = []
        for target in config.enabled_targets():
            outcomes.append(self._sync_target(target, content, config))
        return outcomes

    def sync_all(self, content: str, config: SyncConfig) -> None:
        """Sync every enabled destination, failing on the first error.

        Later destinations still run; their results are not reported.
        Use ``sync_outcomes`` for full visibility.

        Raises:
            SyncError: The first failed destination's error.
        """
        if not config.is_any_enabled():
            logger.debug("No sync targets enabled")
            return

        for outcome in self.sync_outcomes(content, config):
            if outcome.error is not None:
                raise outcome.error

    def test_sync(self, content: str, config: SyncConfig) -> SyncTestResponse:
        """Sync and report the first enabled destination's result."""
        outcomes = self.sync_outcomes(content, config)
        if not outcomes:
            return SyncTestResponse(success=False, target=None, message=NO_TARGETS_MESSAGE)
        return SyncTestResponse.from_outcome(outcomes[0])

    # ------------------------------------------------------------------
    # Read-only Apple Notes probes
    # ------------------------------------------------------------------

    def check_availability(self, config: SyncConfig | None = None) -> None:
        """Check that Apple Notes can be automated.

        Raises:
            SyncError: Permission, platform or scripting failure.
        """
        self.backends[SyncTarget.APPLE_NOTES].check_availability(config)  # type: ignore[attr-defined]

    def list_collections(self, config: SyncConfig | None = None) -> list[str]:
        """Folder names available in Apple Notes."""
        return self.backends[SyncTarget.APPLE_NOTES].list_collections(config)  # type: ignore[attr-defined]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _sync_target(
        self, target: SyncTarget, content: str, config: SyncConfig
    ) -> SyncOutcome:
        backend = self.backends[target]
        try:
            backend.export(content, config)
        except SyncError as exc:
            logger.error("%s sync failed: %s", target.label, exc)
            return SyncOutcome(target=target, error=exc)
        except OSError as exc:
            logger.error("%s sync failed: %s", target.label, exc)
            return SyncOutcome(target=target, error=SyncIOError.from_os_error(exc))

        logger.info("%s sync completed", target.label)
        return SyncOutcome(target=target)
