"""Configuration loading for note_sync.

Reads destination settings from CLI args, environment variables, .env
files, and YAML config files.

Precedence (highest to lowest):
    CLI args > Environment variables > .env file > YAML config > Built-in defaults

Environment variables:
    NOTE_SYNC_NOTE_PATH: Path to the note file
    NOTE_SYNC_MARKDOWN_ENABLED: Enable the Markdown destination
    NOTE_SYNC_MARKDOWN_PATH: Markdown output file
    NOTE_SYNC_APPLE_NOTES_ENABLED: Enable the Apple Notes destination
    NOTE_SYNC_APPLE_NOTES_TITLE: Apple Notes note name
    NOTE_SYNC_APPLE_NOTES_FOLDER: Apple Notes folder name
    NOTE_SYNC_INCLUDE_METADATA: Metadata footer/front matter for every destination
    NOTE_SYNC_SCRIPT_TIMEOUT: Seconds to wait for osascript
    NOTE_SYNC_ALLOW_MULTIPLE: Permit several destinations at once
"""

import logging
import os
from pathlib import Path
from typing import Any

from .config_loader import load_config_file, load_hierarchical_config
from .config_schema import UnifiedConfig, build_config
from .validators import validate_sync_config

logger = logging.getLogger(__name__)


def get_bool_env(key: str) -> bool | None:
    """Return True/False from env var, or None if unset."""
    val = os.getenv(key)
    if val is None:
        return None
    return val.strip().lower() in ("true", "1", "yes", "on")


def _env_overrides() -> dict[str, dict[str, Any]]:
    """Collect env var values into the config section layout."""
    markdown: dict[str, Any] = {}
    apple_notes: dict[str, Any] = {}
    sync: dict[str, Any] = {}
    note: dict[str, Any] = {}

    if os.getenv("NOTE_SYNC_NOTE_PATH"):
        note["path"] = os.getenv("NOTE_SYNC_NOTE_PATH")

    markdown_enabled = get_bool_env("NOTE_SYNC_MARKDOWN_ENABLED")
    if markdown_enabled is not None:
        markdown["enabled"] = markdown_enabled
    if os.getenv("NOTE_SYNC_MARKDOWN_PATH"):
        markdown["path"] = os.getenv("NOTE_SYNC_MARKDOWN_PATH")

    notes_enabled = get_bool_env("NOTE_SYNC_APPLE_NOTES_ENABLED")
    if notes_enabled is not None:
        apple_notes["enabled"] = notes_enabled
    # Blank values are kept so validation can reject them
    for key in ("title", "folder"):
        env_val = os.getenv(f"NOTE_SYNC_APPLE_NOTES_{key.upper()}")
        if env_val is not None:
            apple_notes[key] = env_val

    include_metadata = get_bool_env("NOTE_SYNC_INCLUDE_METADATA")
    if include_metadata is not None:
        markdown["include_metadata"] = include_metadata
        apple_notes["include_metadata"] = include_metadata

    timeout_raw = os.getenv("NOTE_SYNC_SCRIPT_TIMEOUT")
    if timeout_raw:
        try:
            apple_notes["timeout"] = float(timeout_raw)
        except ValueError:
            raise ValueError(
                f"Invalid NOTE_SYNC_SCRIPT_TIMEOUT '{timeout_raw}': must be a number of seconds"
            ) from None

    allow_multiple = get_bool_env("NOTE_SYNC_ALLOW_MULTIPLE")
    if allow_multiple is not None:
        sync["allow_multiple"] = allow_multiple

    overrides: dict[str, dict[str, Any]] = {}
    if markdown:
        sync["markdown"] = markdown
    if apple_notes:
        sync["apple_notes"] = apple_notes
    if sync:
        overrides["sync"] = sync
    if note:
        overrides["note"] = note
    return overrides


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *overrides* into a copy of *base*."""
    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            merged[key] = _merge(current, value)
        else:
            merged[key] = value
    return merged


def validate_config(config: UnifiedConfig) -> None:
    """Validate configuration values and raise ValueError if invalid."""
    ok, message = validate_sync_config(config.sync)
    if not ok:
        raise ValueError(message)


def load_config(
    note_path: str | None = None,
    config_file: str | None = None,
    yaml_data: dict | None = None,
) -> UnifiedConfig:
    """Load configuration with unified precedence.

    The caller is responsible for calling ``load_dotenv()`` before this
    function so that .env values are available via ``os.getenv()``.

    Args:
        note_path: Override note file path (CLI ``--note``).
        config_file: Explicit YAML config file (CLI ``--config``). When
            unset, config files are discovered by convention.
        yaml_data: Pre-loaded YAML dict; skips file loading entirely.

    Returns:
        Validated ``UnifiedConfig`` instance.

    Raises:
        ValueError: If a value is malformed or the destinations violate
            the sync rules.
    """
    if yaml_data is not None:
        raw = yaml_data
    elif config_file:
        raw = load_config_file(Path(config_file).expanduser())
    else:
        raw = load_hierarchical_config()

    merged = _merge(raw, _env_overrides())
    if note_path:
        merged = _merge(merged, {"note": {"path": note_path}})

    config = build_config(merged)
    validate_config(config)

    logger.debug(
        "Loaded config: markdown=%s apple_notes=%s",
        config.sync.markdown.enabled,
        config.sync.apple_notes.enabled,
    )
    return config
