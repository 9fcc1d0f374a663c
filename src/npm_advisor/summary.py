"""Human-readable summary rendering for $GITHUB_STEP_SUMMARY."""

from __future__ import annotations

from typing import Any


def _cell(value: Any) -> str:
    # "|" would otherwise split the cell, e.g. in "^16.8.0 || ^17.0.0".
    return str(value).replace("|", "\\|")


def _row(*cells: Any) -> str:
    return "| " + " | ".join(_cell(c) for c in cells) + " |"


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of advisories."""
    totals = report.get("totals", {})
    projects = report.get("projects", [])

    lines = []
    lines.append("# npm-advisor Summary")
    lines.append("")
    lines.append(
        f"Total projects: {totals.get('projects', 0)} | Findings: {totals.get('findings', 0)}"
        f" | Errors: {totals.get('errors', 0)}"
    )
    lines.append("")
    lines.append("| Project | Package | Required | Latest | Advisory |")
    lines.append("| --- | --- | --- | --- | --- |")

    has_rows = False

    for proj in projects:
        path = proj.get("path") or "(unknown project)"
        findings = proj.get("findings") or []
        errors = proj.get("errors") or []
        if not findings and not errors:
            lines.append(_row(path, "All dependencies up to date", "n/a", "n/a", "n/a"))
            has_rows = True
            continue

        for finding in findings:
            lines.append(
                _row(
                    path,
                    finding.get("name", ""),
                    finding.get("required", ""),
                    finding.get("latest") or "n/a",
                    finding.get("message", ""),
                )
            )
            has_rows = True

        for error in errors:
            lines.append(
                _row(
                    path,
                    error.get("name") or "(package.json)",
                    error.get("required") or "n/a",
                    "n/a",
                    f"Error: {error.get('error', '')}",
                )
            )
            has_rows = True

    if not has_rows:
        lines.append(_row("(no projects checked)", "All dependencies up to date", "n/a", "n/a", "n/a"))

    return "\n".join(lines) + "\n"
