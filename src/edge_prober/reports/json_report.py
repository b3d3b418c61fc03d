"""JSON report generator for Edge Prober."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from edge_prober.core.models import RunReport


def generate_json_report(report: "RunReport") -> dict[str, Any]:
    """Build the JSON document for a run.

    Results keep target order. Diagnostics (``elapsed_ms``, ``detail``)
    are included here even though the text report omits them.
    """
    return {
        "summary": report.summary(),
        "started_at": report.started_at.isoformat(),
        "completed_at": report.completed_at.isoformat() if report.completed_at else None,
        "results": [
            {
                "hostname": r.target.hostname,
                "port": r.target.port,
                "protocol": r.target.protocol,
                "description": r.target.description,
                "outcome": r.outcome.value,
                "elapsed_ms": r.elapsed_ms,
                "detail": r.detail,
            }
            for r in report.results
        ],
    }


def save_json_report(report: "RunReport", output_path: Path) -> Path:
    """Save JSON report to file.

    Args:
        report: Run report
        output_path: Directory or file path

    Returns:
        Path to saved file
    """
    if output_path.is_dir():
        file_path = output_path / f"edge-probe-{report.run_id}.json"
    else:
        file_path = output_path
        file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(generate_json_report(report), f, indent=2, default=str)

    return file_path
