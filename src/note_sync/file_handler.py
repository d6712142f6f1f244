"""File handler module: encoding-aware read/write and the note reader.

Provides the file I/O used by the Markdown destination and the CLI's note
reader. All functions are synchronous and only touch the paths they are
given.
"""

from pathlib import Path

from charset_normalizer import from_bytes

# Shown when the note store has never been written
DEFAULT_NOTE_HTML = (
    "<h1>Welcome to What The Note!</h1>"
    "<p>A minimal, always-accessible sticky note for macOS.</p>"
    "<h2>Quick Start</h2>"
    "<ul>"
    "<li><p><strong>Show/Hide:</strong> Use keyboard shortcut (⌥⌘N) or hover your mouse in the top-right corner</p></li>"
    "<li><p><strong>Formatting:</strong> Click the text icon in the top-left to reveal styling options</p></li>"
    "<li><p><strong>Settings:</strong> Click the gear icon to customize behavior and shortcuts</p></li>"
    "</ul>"
    "<h2>Features</h2>"
    '<ul data-type="taskList">'
    '<li data-checked="false"><label><input type="checkbox"></label><div><p>Auto-save - your notes are saved instantly</p></div></li>'
    '<li data-checked="false"><label><input type="checkbox"></label><div><p>Rich formatting - bold, italic, lists, headings, and more</p></div></li>'
    '<li data-checked="false"><label><input type="checkbox"></label><div><p>Drag to reposition, resize from edges</p></div></li>'
    '<li data-checked="false"><label><input type="checkbox"></label><div><p>Click away to hide (customizable in settings)</p></div></li>'
    '<li data-checked="false"><label><input type="checkbox"></label><div><p>Adjustable text size in preferences</p></div></li>'
    "</ul>"
    "<p><em>Delete this text and start writing your notes!</em></p>"
)


# =============================================================================
# File Read/Write
# =============================================================================


def read_file_with_encoding(path: Path) -> tuple[str, str]:
    """Read a file with automatic encoding detection.

    Reads raw bytes first, then uses charset-normalizer to detect encoding.
    Defaults to UTF-8 for empty files or when detection fails.

    Returns:
        Tuple of (content_string, detected_encoding).
    """
    raw = path.read_bytes()
    if not raw:
        return ("", "utf-8")

    result = from_bytes(raw).best()
    if result is None:
        encoding = "utf-8"
        content = raw.decode(encoding, errors="replace")
    else:
        encoding = result.encoding
        # ascii is a strict subset of utf-8
        if encoding == "ascii":
            encoding = "utf-8"
        content = str(result)
    return (content, encoding)


def write_file(path: Path, content: str, encoding: str = "utf-8") -> int:
    """Write content to a file, creating parent directories as needed.

    Existing content is replaced.

    Returns:
        Number of bytes written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    encoded = content.encode(encoding)
    path.write_bytes(encoded)
    return len(encoded)


def read_note(path: str | Path | None) -> str:
    """Read the note document, or the welcome note when none was saved yet.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    if path is None:
        return DEFAULT_NOTE_HTML
    note_path = Path(path).expanduser()
    if not note_path.exists():
        return DEFAULT_NOTE_HTML
    content, _encoding = read_file_with_encoding(note_path)
    return content
