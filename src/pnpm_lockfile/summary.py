"""Human-readable Markdown rendering of a prune report."""

from __future__ import annotations

from typing import Any


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of importers."""
    totals = report.get("totals", {})
    importers = report.get("importers", {})
    packages = totals.get("packages", {})

    lines = []
    lines.append("# pnpm lockfile prune summary")
    lines.append("")
    lines.append(
        f"Packages kept: {packages.get('kept', 0)} | removed: {packages.get('removed', 0)}"
    )
    lines.append("")
    lines.append("| Importer | Status |")
    lines.append("| --- | --- |")

    workspace_dependencies = set(importers.get("workspaceDependencies") or [])
    for path in importers.get("kept") or []:
        status = "kept (workspace dependency)" if path in workspace_dependencies else "kept"
        lines.append(f"| {path} | {status} |")
    for path in importers.get("removed") or []:
        lines.append(f"| {path} | removed |")

    if not importers.get("kept") and not importers.get("removed"):
        lines.append("| (no importers) | n/a |")

    return "\n".join(lines) + "\n"
