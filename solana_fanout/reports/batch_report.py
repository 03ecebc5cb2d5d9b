"""
REPORTING - BATCH REPORT

Human-readable and JSON summaries of a finished transfer batch.
"""

from __future__ import annotations

import json
from datetime import timedelta
from typing import Dict, List, Sequence

from solana_fanout.domain.models import TransferOutcome

NOT_APPLICABLE = "N/A"


def format_duration(elapsed: timedelta) -> str:
    seconds = elapsed.total_seconds()
    if seconds == 0:
        return "0s"
    if seconds < 1:
        return f"{seconds * 1000:.3f}ms"
    return f"{seconds:.3f}s"


def outcome_to_dict(outcome: TransferOutcome) -> Dict:
    return {
        "from": outcome.source,
        "to": outcome.destination,
        "hash": outcome.signature,
        "status": outcome.status_text,
        "duration": format_duration(outcome.elapsed),
        "elapsed_seconds": outcome.elapsed.total_seconds(),
    }


def render_line(outcome: TransferOutcome) -> str:
    return (
        f"From: {outcome.source} | "
        f"To: {outcome.destination} | "
        f"Hash: {outcome.signature or NOT_APPLICABLE} | "
        f"Status: {outcome.status_text} | "
        f"Duration: {format_duration(outcome.elapsed)}"
    )


def render_lines(outcomes: Sequence[TransferOutcome]) -> List[str]:
    return [render_line(outcome) for outcome in outcomes]


def render_json(outcomes: Sequence[TransferOutcome]) -> str:
    return json.dumps([outcome_to_dict(outcome) for outcome in outcomes], indent=2)


def render(outcomes: Sequence[TransferOutcome], output_format: str = "text") -> str:
    if output_format == "json":
        return render_json(outcomes)
    if output_format == "text":
        return "\n".join(render_lines(outcomes))
    raise ValueError(f"Unknown report format: {output_format}")
