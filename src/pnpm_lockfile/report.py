"""Prune report aggregation and schema-friendly output."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .encoder import importer_order
from .models import ROOT_IMPORTER, LockfileModel, normalize_workspace_path


def aggregate(
    source: LockfileModel, pruned: LockfileModel, requested: Iterable[str]
) -> dict[str, Any]:
    """Summarise what a prune kept and removed.

    ``workspaceDependencies`` lists importers that were not requested but had
    to be kept because a kept workspace depends on them through ``link:`` or
    ``file:``.
    """
    requested_paths = {normalize_workspace_path(path) for path in requested}
    kept = importer_order(pruned.importers)
    removed = [path for path in importer_order(source.importers) if path not in pruned.importers]
    workspace_dependencies = [
        path for path in kept if path not in requested_paths and path != ROOT_IMPORTER
    ]

    kept_packages = len(pruned.packages)
    report: dict[str, Any] = {
        "lockfileVersion": pruned.lockfile_version,
        "importers": {
            "kept": kept,
            "removed": removed,
            "workspaceDependencies": workspace_dependencies,
        },
        "totals": {
            "importers": {"kept": len(kept), "removed": len(removed)},
            "packages": {
                "kept": kept_packages,
                "removed": len(source.packages) - kept_packages,
            },
        },
    }

    return report
