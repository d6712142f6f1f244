"""Export destination backends."""

from .apple_notes import (
    AppleNotesBackend,
    UnsupportedPlatformBackend,
    create_apple_notes_backend,
)
from .base import SyncBackend
from .markdown import MarkdownBackend

__all__ = [
    "AppleNotesBackend",
    "MarkdownBackend",
    "SyncBackend",
    "UnsupportedPlatformBackend",
    "create_apple_notes_backend",
]
