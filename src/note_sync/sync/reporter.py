"""Sync outcome formatting functions.

Provides human-readable and machine-readable output for sync operations:

- ``format_outcomes`` -- one line per destination.
- ``outcomes_to_json`` -- structured dict with counts and per-destination results.
- ``test_response_to_json`` -- structured dict for the test-sync action.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import NO_TARGETS_MESSAGE

if TYPE_CHECKING:
    from .models import SyncOutcome, SyncTestResponse


def format_outcomes(outcomes: list[SyncOutcome]) -> str:
    """Format sync outcomes as human-readable text.

    Args:
        outcomes: Outcomes in sync order.

    Returns:
        Multi-line formatted string.
    """
    if not outcomes:
        return NO_TARGETS_MESSAGE

    lines: list[str] = []
    for outcome in outcomes:
        if outcome.success:
            lines.append(f"[OK] {outcome.target.label}")
        else:
            lines.append(f"[FAILED] {outcome.target.label}: {outcome.message}")

    failed = sum(1 for o in outcomes if not o.success)
    lines.append("")
    lines.append(
        f"Synced {len(outcomes)} targets: "
        f"{len(outcomes) - failed} succeeded, {failed} failed"
    )
    return "\n".join(lines)


def outcomes_to_json(outcomes: list[SyncOutcome]) -> dict:
    """Convert sync outcomes to a structured dict for JSON serialisation."""
    results_list = []
    for outcome in outcomes:
        entry: dict = {
            "target": outcome.target.value,
            "label": outcome.target.label,
            "success": outcome.success,
            "message": outcome.message,
        }
        if outcome.error is not None:
            entry["error"] = outcome.error.to_dict()
        results_list.append(entry)

    failed = sum(1 for o in outcomes if not o.success)
    return {
        "counts": {
            "total": len(outcomes),
            "succeeded": len(outcomes) - failed,
            "failed": failed,
        },
        "results": results_list,
    }


def test_response_to_json(response: SyncTestResponse) -> dict:
    """Convert a test-sync response to a plain dict."""
    return response.model_dump()
