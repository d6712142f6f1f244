"""AppleScript bridge to Apple Notes.

Builds the automation scripts, runs them through ``osascript`` and maps
failures onto the sync error taxonomy.
"""

from __future__ import annotations

import logging
import subprocess

from .errors import (
    NotConfiguredError,
    PermissionDeniedError,
    ScriptingError,
    SyncError,
    SyncIOError,
)

logger = logging.getLogger(__name__)

OSASCRIPT = "osascript"

# Raised by the upsert script when the folder lookup comes back empty
FOLDER_NOT_FOUND_MARKER = "Apple Notes folder not found"

# errAEEventNotPermitted
AUTOMATION_DENIED_CODE = "-1743"

PERMISSION_PROBE_SCRIPT = """
try
    tell application "Notes" to return true
on error errMsg number errNum
    error errMsg number errNum
end try
"""

LAUNCH_NOTES_SCRIPT = """
tell application "Notes"
    if it is not running then
        launch
    end if
end tell
"""

LIST_FOLDERS_SCRIPT = """
try
    tell application "Notes"
        set folderNames to name of folders of default account
        return folderNames
    end tell
on error errMsg number errNum
    error errMsg number errNum
end try
"""

_UPDATE_SCRIPT_TEMPLATE = """
try
    set noteName to {title}
    set noteHTML to {body}
    set targetFolderName to {folder}

    tell application "Notes"
        if it is not running then launch
        set targetAccount to default account
        set targetFolders to every folder of targetAccount whose name is targetFolderName
        if targetFolders is {{}} then
            error "{marker}"
        end if

        set targetFolder to item 1 of targetFolders
        set notesByName to every note of targetFolder whose name is noteName

        if notesByName is {{}} then
            make new note at end of notes of targetFolder with properties {{name:noteName, body:noteHTML}}
        else
            set theNote to item 1 of notesByName
            set body of theNote to noteHTML
        end if
    end tell
on error errMsg number errNum
    error errMsg number errNum
end try
"""


def applescript_string_literal(text: str) -> str:
    """Quote *text* as an AppleScript string expression.

    Backslashes and double quotes are escaped. AppleScript literals cannot
    span lines, so multi-line text becomes quoted segments joined with
    ``& return &``.

    Examples:
        >>> applescript_string_literal('say "hi"')
        '"say \\\\"hi\\\\""'
        >>> applescript_string_literal("a\\nb")
        '"a" & return & "b"'
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    escaped = normalized.replace("\\", "\\\\").replace('"', '\\"')

    if "\n" not in escaped:
        return f'"{escaped}"'

    return " & return & ".join(f'"{part}"' for part in escaped.split("\n"))


def build_update_script(title: str, folder: str, body_html: str) -> str:
    """Build the create-or-update script for one note.

    The note is matched by exact name inside the folder of the same exact
    name in the default account. A missing folder raises
    ``FOLDER_NOT_FOUND_MARKER`` instead of creating one.
    """
    return _UPDATE_SCRIPT_TEMPLATE.format(
        title=applescript_string_literal(title),
        body=applescript_string_literal(body_html),
        folder=applescript_string_literal(folder),
        marker=FOLDER_NOT_FOUND_MARKER,
    )


def parse_applescript_list(output: str) -> list[str]:
    """Parse an AppleScript list printed by ``osascript``.

    Accepts both the bracketed form (``{"Notes", "Work"}``) and the bare
    comma-separated form ``osascript`` prints for lists of strings. Empty
    elements are dropped.

    Examples:
        >>> parse_applescript_list('{"Notes", "Work"}')
        ['Notes', 'Work']
        >>> parse_applescript_list("{}")
        []
    """
    content = output.strip().lstrip("{").rstrip("}").strip()
    if not content:
        return []

    names = []
    for part in content.split(","):
        cleaned = part.strip().strip('"').strip()
        if cleaned:
            names.append(cleaned)
    return names


def classify_failure(stderr: str) -> SyncError:
    """Map ``osascript`` stderr onto the error taxonomy.

    Permission denial wins over every other signal, then a missing folder,
    then a generic scripting failure carrying the trimmed stderr.
    """
    lowered = stderr.lower()
    if (
        AUTOMATION_DENIED_CODE in stderr
        or "not authorised" in lowered
        or "not authorized" in lowered
    ):
        return PermissionDeniedError("macOS blocked automation access to Notes")

    if FOLDER_NOT_FOUND_MARKER.lower() in lowered:
        return NotConfiguredError("Apple Notes folder does not exist")

    return ScriptingError(stderr.strip())


def run_osascript(script: str, timeout: float | None = None) -> str:
    """Run *script* with ``osascript -e`` and return its stdout.

    Args:
        script: AppleScript source.
        timeout: Seconds to wait before killing the process; None waits
            indefinitely.

    Raises:
        SyncIOError: If osascript cannot be started or times out.
        SyncError: Classified failure on a non-zero exit.
    """
    try:
        result = subprocess.run(
            [OSASCRIPT, "-e", script],
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise SyncIOError(f"osascript timed out after {timeout}s") from None
    except OSError as exc:
        raise SyncIOError.from_os_error(exc) from exc

    if result.returncode == 0:
        logger.debug("AppleScript completed successfully")
        return result.stdout

    logger.debug(
        "AppleScript exited with %d: %s", result.returncode, result.stderr.strip()
    )
    raise classify_failure(result.stderr)
