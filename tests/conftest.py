"""Shared pytest fixtures for note-sync tests."""

import pytest
from dotenv import load_dotenv

from note_sync.config_schema import (
    AppleNotesSyncConfig,
    MarkdownSyncConfig,
    SyncConfig,
)
from note_sync.sync.backends import SyncBackend
from note_sync.sync.models import SyncTarget

load_dotenv()

_ENV_KEYS = (
    "NOTE_SYNC_CONFIG",
    "NOTE_SYNC_NOTE_PATH",
    "NOTE_SYNC_MARKDOWN_ENABLED",
    "NOTE_SYNC_MARKDOWN_PATH",
    "NOTE_SYNC_APPLE_NOTES_ENABLED",
    "NOTE_SYNC_APPLE_NOTES_TITLE",
    "NOTE_SYNC_APPLE_NOTES_FOLDER",
    "NOTE_SYNC_INCLUDE_METADATA",
    "NOTE_SYNC_SCRIPT_TIMEOUT",
    "NOTE_SYNC_ALLOW_MULTIPLE",
    "LOG_LEVEL",
)


def pytest_addoption(parser):
    """Add custom CLI options for test filtering."""
    parser.addoption(
        "--run-live",
        action="store_true",
        default=False,
        help="Run tests that drive a real Apple Notes instance",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "live: mark test as requiring macOS with Notes automation access"
    )


def pytest_collection_modifyitems(config, items):
    """Skip live tests unless --run-live is passed."""
    if config.getoption("--run-live"):
        return
    skip_live = pytest.mark.skip(reason="need --run-live option to run")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove note-sync env vars and run from an empty directory."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return tmp_path


@pytest.fixture
def markdown_config(tmp_path):
    """SyncConfig with only the Markdown destination enabled."""
    return SyncConfig(
        markdown=MarkdownSyncConfig(enabled=True, path=str(tmp_path / "note.md")),
    )


@pytest.fixture
def apple_notes_config():
    """SyncConfig with only the Apple Notes destination enabled."""
    return SyncConfig(
        apple_notes=AppleNotesSyncConfig(enabled=True, title="Inbox", folder="Notes"),
    )


@pytest.fixture
def both_config(tmp_path):
    """SyncConfig with both destinations enabled."""
    return SyncConfig(
        markdown=MarkdownSyncConfig(enabled=True, path=str(tmp_path / "note.md")),
        apple_notes=AppleNotesSyncConfig(enabled=True),
        allow_multiple=True,
    )


class FakeBackend(SyncBackend):
    """Backend that records calls and optionally raises."""

    def __init__(self, target, error=None):
        self.target = target
        self.error = error
        self.calls = []

    def export(self, content, config):
        self.calls.append(content)
        if self.error is not None:
            raise self.error

    def check_availability(self, config=None):
        if self.error is not None:
            raise self.error

    def list_collections(self, config=None):
        if self.error is not None:
            raise self.error
        return ["Notes", "Work"]


@pytest.fixture
def make_backends():
    """Factory for a backend mapping with per-destination errors."""

    def _make(markdown_error=None, apple_notes_error=None):
        return {
            SyncTarget.MARKDOWN: FakeBackend(SyncTarget.MARKDOWN, markdown_error),
            SyncTarget.APPLE_NOTES: FakeBackend(
                SyncTarget.APPLE_NOTES, apple_notes_error
            ),
        }

    return _make
