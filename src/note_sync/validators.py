"""
Input validation functions for note_sync.

Provides validation for destination settings so that a bad configuration
is rejected before any destination is touched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config_schema import SyncConfig


# ---------------------------------------------------------------------------
# Error message formatting helpers
# ---------------------------------------------------------------------------


def format_validation_error(field_name: str, reason: str) -> str:
    """
    Generate consistent error message for validation failures.

    Args:
        field_name: Human-readable field name (e.g., "Apple Notes title")
        reason: Description of validation failure (e.g., "cannot be empty")

    Returns:
        Formatted error message string
    """
    return f"{field_name} {reason}"


def validate_title(title: str | None) -> tuple[bool, str]:
    """
    Validate the Apple Notes target note title.

    Returns:
        Tuple of (is_valid, error_message).
        Returns (True, "") if valid, (False, reason) if invalid.
    """
    if not title or not title.strip():
        return (
            False,
            format_validation_error("Apple Notes title", "cannot be empty"),
        )
    return (True, "")


def validate_folder_name(folder: str | None) -> tuple[bool, str]:
    """
    Validate the Apple Notes folder name.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not folder or not folder.strip():
        return (
            False,
            format_validation_error("Apple Notes folder", "cannot be empty"),
        )
    return (True, "")


def validate_markdown_path(path: str | None) -> tuple[bool, str]:
    """
    Validate the Markdown output path.

    Only emptiness is checked here; the parent directory is created on
    export and write failures surface as I/O errors.
    """
    if not path or not path.strip():
        return (
            False,
            format_validation_error("Markdown path", "cannot be empty"),
        )
    return (True, "")


def validate_sync_config(
    config: SyncConfig, allow_multiple: bool | None = None
) -> tuple[bool, str]:
    """
    Validate the sync destinations as a whole.

    Args:
        config: Sync section of the unified config.
        allow_multiple: Override for ``config.allow_multiple``.

    Returns:
        Tuple of (is_valid, error_message).

    Validation rules:
        - At most one destination enabled unless multiple are allowed
        - Apple Notes title and folder non-blank when Apple Notes is enabled
        - Markdown path non-blank when Markdown is enabled
    """
    if allow_multiple is None:
        allow_multiple = config.allow_multiple

    if (
        not allow_multiple
        and config.markdown.enabled
        and config.apple_notes.enabled
    ):
        return (False, "Only one sync target can be enabled at a time")

    if config.apple_notes.enabled:
        for ok, message in (
            validate_title(config.apple_notes.title),
            validate_folder_name(config.apple_notes.folder),
        ):
            if not ok:
                return (False, message)

    if config.markdown.enabled:
        ok, message = validate_markdown_path(config.markdown.path)
        if not ok:
            return (False, message)

    return (True, "")
