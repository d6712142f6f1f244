"""Tests for sync.backends.apple_notes.

Strategy: patch run_osascript where the backend imports it, and inspect the
generated scripts.
"""

from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from note_sync.config_schema import AppleNotesSyncConfig, SyncConfig
from note_sync.sync.applescript import (
    LAUNCH_NOTES_SCRIPT,
    LIST_FOLDERS_SCRIPT,
    PERMISSION_PROBE_SCRIPT,
)
from note_sync.sync.backends.apple_notes import (
    AppleNotesBackend,
    UnsupportedPlatformBackend,
    build_note_body,
    create_apple_notes_backend,
    metadata_footer,
)
from note_sync.sync.errors import (
    NotConfiguredError,
    PermissionDeniedError,
    PlatformUnsupportedError,
)

RUN = "note_sync.sync.backends.apple_notes.run_osascript"
SYNCED_AT = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _config(**overrides):
    settings = {"enabled": True, "title": "Inbox", "folder": "Notes"}
    settings.update(overrides)
    return SyncConfig(apple_notes=AppleNotesSyncConfig(**settings))


class TestNoteBody:
    def test_title_heading_replaces_duplicate(self):
        body = build_note_body("<h1>inbox</h1><p>x</p>", "Inbox", include_metadata=False)
        assert body == "<h1>Inbox</h1><p>x</p>"

    def test_title_is_escaped(self):
        body = build_note_body("<p>x</p>", "A & <B>", include_metadata=False)
        assert body.startswith("<h1>A &amp; &lt;B&gt;</h1>")

    def test_metadata_footer_follows_title(self):
        body = build_note_body("<p>x</p>", "Inbox", True, synced_at=SYNCED_AT)

        assert body == (
            "<h1>Inbox</h1>"
            + metadata_footer(SYNCED_AT)
            + "<p>x</p>"
        )

    def test_footer_text(self):
        footer = metadata_footer(SYNCED_AT)
        assert "Synced from What The Note • 2026-01-02T03:04:05+00:00" in footer
        assert footer.startswith("<p style=")

    def test_empty_content(self):
        body = build_note_body("", "Inbox", include_metadata=False)
        assert body == "<h1>Inbox</h1><div></div>"


class TestAppleNotesBackend:
    @patch(RUN, return_value="")
    def test_export_launches_then_upserts(self, mock_run):
        AppleNotesBackend().export("<p>Body</p>", _config())

        assert mock_run.call_count == 2
        assert mock_run.call_args_list[0][0][0] == LAUNCH_NOTES_SCRIPT
        script = mock_run.call_args_list[1][0][0]
        assert 'set noteName to "Inbox"' in script
        assert 'set targetFolderName to "Notes"' in script
        assert "<p>Body</p>" in script

    @patch(RUN, return_value="")
    def test_export_trims_title_and_folder(self, mock_run):
        AppleNotesBackend().export("<p>x</p>", _config(title=" Inbox ", folder=" Work "))

        script = mock_run.call_args_list[1][0][0]
        assert 'set noteName to "Inbox"' in script
        assert 'set targetFolderName to "Work"' in script

    @pytest.mark.parametrize("field", ["title", "folder"])
    @patch(RUN)
    def test_blank_settings_rejected_before_launch(self, mock_run, field):
        with pytest.raises(NotConfiguredError, match=field):
            AppleNotesBackend().export("<p>x</p>", _config(**{field: "  "}))
        mock_run.assert_not_called()

    @patch(RUN, return_value="")
    def test_config_timeout_wins(self, mock_run):
        AppleNotesBackend(timeout=3).export("<p>x</p>", _config(timeout=7))
        assert all(c[1]["timeout"] == 7 for c in mock_run.call_args_list)

    @patch(RUN, return_value="")
    def test_default_timeout(self, mock_run):
        AppleNotesBackend(timeout=3).export("<p>x</p>", _config())
        assert all(c[1]["timeout"] == 3 for c in mock_run.call_args_list)

    @patch(RUN, side_effect=PermissionDeniedError("blocked"))
    def test_errors_propagate(self, mock_run):
        with pytest.raises(PermissionDeniedError):
            AppleNotesBackend().export("<p>x</p>", _config())

    @patch(RUN, side_effect=["", '{"Notes", "Work"}'])
    def test_list_collections(self, mock_run):
        assert AppleNotesBackend().list_collections() == ["Notes", "Work"]
        assert mock_run.call_args_list[1][0][0] == LIST_FOLDERS_SCRIPT

    @patch(RUN, return_value="true")
    def test_check_availability(self, mock_run):
        AppleNotesBackend().check_availability()
        scripts = [c[0][0] for c in mock_run.call_args_list]
        assert scripts == [LAUNCH_NOTES_SCRIPT, PERMISSION_PROBE_SCRIPT]


class TestUnsupportedPlatform:
    @patch(RUN)
    def test_every_operation_fails_without_spawning(self, mock_run):
        backend = UnsupportedPlatformBackend()

        with pytest.raises(PlatformUnsupportedError):
            backend.export("<p>x</p>", _config())
        with pytest.raises(PlatformUnsupportedError):
            backend.check_availability()
        with pytest.raises(PlatformUnsupportedError):
            backend.list_collections()
        with pytest.raises(PlatformUnsupportedError):
            backend.ensure_running()
        mock_run.assert_not_called()

    def test_message(self):
        with pytest.raises(PlatformUnsupportedError) as exc_info:
            UnsupportedPlatformBackend().list_collections()
        assert str(exc_info.value) == (
            "Sync not implemented: Apple Notes sync is only available on macOS"
        )


class TestFactory:
    def test_darwin(self):
        backend = create_apple_notes_backend("darwin", timeout=3)
        assert isinstance(backend, AppleNotesBackend)
        assert backend.timeout == 3

    @pytest.mark.parametrize("platform", ["linux", "win32"])
    def test_other(self, platform):
        assert isinstance(create_apple_notes_backend(platform), UnsupportedPlatformBackend)
