"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from typing import Any

FINDING_KINDS = ("major", "minor", "patch", "other")


def aggregate(projects: list[dict[str, Any]]) -> dict[str, Any]:
    """Aggregate per-project findings into a single report.

    The input ``projects`` is expected to be a list of dicts with ``path``,
    ``findings`` and ``errors`` keys. Each finding carries the advisory
    ``part``; findings without a part (unparsable, unpinned, out of range)
    are counted as ``other``.
    """

    by_kind = dict.fromkeys(FINDING_KINDS, 0)
    total_findings = 0
    total_errors = 0

    for project in projects:
        for finding in project.get("findings", []):
            total_findings += 1
            by_kind[finding.get("part") or "other"] += 1
        total_errors += len(project.get("errors", []))

    report: dict[str, Any] = {
        "version": "1",
        "hasFindings": total_findings > 0,
        "projects": projects,
        "totals": {
            "projects": len(projects),
            "findings": total_findings,
            "errors": total_errors,
            **by_kind,
        },
    }

    return report
