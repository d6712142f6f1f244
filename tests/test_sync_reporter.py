"""Tests for sync outcome formatting functions.

Covers:
- format_outcomes with successes, failures and no targets
- outcomes_to_json structure and counts
- test_response_to_json
"""

from __future__ import annotations

import json

from note_sync.sync.errors import ScriptingError, SyncIOError
from note_sync.sync.models import SyncOutcome, SyncTarget, SyncTestResponse
from note_sync.sync import reporter
from note_sync.sync.reporter import format_outcomes, outcomes_to_json

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _outcomes() -> list[SyncOutcome]:
    return [
        SyncOutcome(target=SyncTarget.MARKDOWN, error=SyncIOError("disk full")),
        SyncOutcome(target=SyncTarget.APPLE_NOTES),
    ]


class TestFormatOutcomes:
    def test_mixed(self):
        text = format_outcomes(_outcomes())

        assert text.splitlines() == [
            "[FAILED] Markdown: IO error: disk full",
            "[OK] Apple Notes",
            "",
            "Synced 2 targets: 1 succeeded, 1 failed",
        ]

    def test_empty(self):
        assert format_outcomes([]) == "No sync targets are enabled"


class TestOutcomesToJson:
    def test_structure(self):
        data = outcomes_to_json(_outcomes())

        assert data["counts"] == {"total": 2, "succeeded": 1, "failed": 1}
        assert data["results"][0] == {
            "target": "markdown",
            "label": "Markdown",
            "success": False,
            "message": "IO error: disk full",
            "error": {"kind": "io_failure", "message": "IO error: disk full"},
        }
        assert "error" not in data["results"][1]

    def test_serializable(self):
        json.dumps(outcomes_to_json(_outcomes()))

    def test_empty(self):
        assert outcomes_to_json([]) == {
            "counts": {"total": 0, "succeeded": 0, "failed": 0},
            "results": [],
        }


class TestResponseToJson:
    def test_plain_dict(self):
        response = SyncTestResponse.from_outcome(
            SyncOutcome(target=SyncTarget.APPLE_NOTES, error=ScriptingError("boom"))
        )
        assert reporter.test_response_to_json(response) == {
            "success": False,
            "target": "Apple Notes",
            "message": "AppleScript failed: boom",
        }
