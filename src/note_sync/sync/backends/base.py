"""Base destination backend interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..models import SyncTarget

if TYPE_CHECKING:
    from note_sync.config_schema import SyncConfig

METADATA_SOURCE = "What The Note"


class SyncBackend(ABC):
    """Abstract base class for export destinations.

    A backend receives the raw editor HTML and the sync configuration,
    derives whatever representation its destination needs and writes it.
    """

    target: SyncTarget

    @abstractmethod
    def export(self, content: str, config: SyncConfig) -> None:
        """Write *content* to the destination.

        Args:
            content: Editor-native HTML of the note.
            config: Sync section of the configuration.

        Raises:
            SyncError: Classified destination failure.
        """
        raise NotImplementedError
