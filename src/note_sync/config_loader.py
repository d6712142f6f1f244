"""
YAML config file discovery and loading for note_sync.

Config files are looked up by convention, may pull in other files with
``!include`` and may reference environment variables as ``${VAR}`` or
``${VAR:-default}``. When several files exist, top-level sections from the
more specific file replace those from the more general one.

Usage:
    from note_sync.config_loader import load_hierarchical_config

    raw = load_hierarchical_config()
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "NOTE_SYNC_CONFIG"
PROJECT_CONFIG = Path(".note_sync") / "config.yml"
GLOBAL_CONFIG = Path(".config") / "note_sync" / "config.yml"

# ${VAR} or ${VAR:-default}
_ENV_REFERENCE = re.compile(r"\$\{([^}:]+?)(?::-(.*?))?\}")


# ---------------------------------------------------------------------------
# Environment references
# ---------------------------------------------------------------------------


def interpolate_env_vars(value: str) -> str:
    """Expand ``${VAR}`` and ``${VAR:-default}`` references in *value*.

    An unset or empty variable expands to its default, or to nothing when
    there is none. A ``${`` without a closing brace is left as is.

    Examples:
        >>> interpolate_env_vars("folder: ${UNSET_FOLDER:-Notes}")
        'folder: Notes'
    """

    def expand(match: re.Match) -> str:
        current = os.environ.get(match.group(1))
        if current:
            return current
        return match.group(2) or ""

    return _ENV_REFERENCE.sub(expand, value)


def _interpolate_recursive(node: Any) -> Any:
    """Expand env references in every string of a parsed YAML tree."""
    if isinstance(node, dict):
        return {key: _interpolate_recursive(item) for key, item in node.items()}
    if isinstance(node, list):
        return [_interpolate_recursive(item) for item in node]
    if isinstance(node, str):
        return interpolate_env_vars(node)
    return node


# ---------------------------------------------------------------------------
# !include
# ---------------------------------------------------------------------------


class ConfigLoader(yaml.SafeLoader):
    """SafeLoader that understands ``!include <path>``.

    The tag is registered on this subclass only. ``_include_stack`` holds
    the chain of files being loaded so cycles can be reported.
    """

    _include_stack: list[Path]


def _include_constructor(loader: ConfigLoader, node: yaml.ScalarNode) -> Any:
    raw_path = Path(loader.construct_scalar(node))
    including_file = Path(loader.name).resolve()
    target = (raw_path if raw_path.is_absolute() else including_file.parent / raw_path).resolve()

    chain = getattr(loader, "_include_stack", [including_file])
    if target in chain:
        cycle = " -> ".join(str(p) for p in [*chain, target])
        raise ValueError(f"Circular include detected: {cycle}")
    if not target.is_file():
        raise FileNotFoundError(
            f"Include file not found: {target} (referenced from {including_file})"
        )

    return _load_yaml_with_includes(target, _include_stack=[*chain, target])


ConfigLoader.add_constructor("!include", _include_constructor)


def _load_yaml_with_includes(
    path: Path,
    *,
    _include_stack: list[Path] | None = None,
) -> Any:
    """Parse one YAML file, resolving ``!include`` tags relative to it."""
    path = path.resolve()
    with path.open("r", encoding="utf-8") as stream:
        loader = ConfigLoader(stream)
        loader._include_stack = _include_stack or [path]
        try:
            return loader.get_single_data()
        finally:
            loader.dispose()


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def discover_config_files() -> list[Path]:
    """Existing config files, most specific first.

    1. the file named by ``NOTE_SYNC_CONFIG``
    2. ``.note_sync/config.yml`` under the working directory
    3. ``~/.config/note_sync/config.yml``
    """
    candidates = [Path.cwd() / PROJECT_CONFIG, Path.home() / GLOBAL_CONFIG]
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        candidates.insert(0, Path(explicit).expanduser().resolve())
    return [path for path in candidates if path.exists()]


_STARTER_CONFIG = """\
# note-sync configuration
#
# Destination settings can also be set via environment variables:
#   NOTE_SYNC_MARKDOWN_ENABLED, NOTE_SYNC_MARKDOWN_PATH,
#   NOTE_SYNC_APPLE_NOTES_ENABLED, NOTE_SYNC_APPLE_NOTES_TITLE,
#   NOTE_SYNC_APPLE_NOTES_FOLDER
#
# note:
#   path: ~/Library/Application Support/what-the-note/note.txt
#
# sync:
#   markdown:
#     enabled: false
#     path: ~/Documents/note.md
#     include_metadata: true
#   apple_notes:
#     enabled: false
#     title: What The Note
#     folder: Notes
#     include_metadata: true
#     timeout: 30
#
# logging:
#   level: INFO
#   file: null
"""


def resolve_config_path() -> Path:
    """The config file in effect, or the project path a new one would use."""
    found = discover_config_files()
    return found[0] if found else Path.cwd() / PROJECT_CONFIG


def ensure_config(target: Path | None = None) -> Path:
    """Return the config file in effect, writing a starter file if none exists.

    Args:
        target: Where to write the starter file. Defaults to
            ``resolve_config_path()``.
    """
    found = discover_config_files()
    if found:
        logger.debug("Using existing config file %s", found[0])
        return found[0]

    path = target or resolve_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_STARTER_CONFIG, encoding="utf-8")
    logger.info("Wrote starter config to %s", path)
    return path


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_config_file(path: Path) -> dict[str, Any]:
    """Load one config file named on the command line.

    Raises:
        FileNotFoundError: If *path* or an included file is missing.
        ValueError: If the document is not a mapping.
    """
    document = _load_yaml_with_includes(path)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(
            f"Config file {path} must contain a mapping, got {type(document).__name__}"
        )
    return _interpolate_recursive(document)


def load_hierarchical_config() -> dict[str, Any]:
    """Merge every discovered config file into one raw dict.

    Files are applied from the most general to the most specific and each
    one replaces whole top-level sections. Env references are expanded
    after the merge. With no files this returns ``{}``.
    """
    merged: dict[str, Any] = {}
    for path in reversed(discover_config_files()):
        logger.debug("Reading config file %s", path)
        document = _load_yaml_with_includes(path)
        if isinstance(document, dict):
            merged.update(document)
        elif document is not None:
            logger.warning(
                "Ignoring config file %s: root is %s, not a mapping",
                path,
                type(document).__name__,
            )
    if not merged:
        logger.debug("No config file settings, using defaults")
    return _interpolate_recursive(merged)
