"""Core entry points that read and write lockfiles on disk.

The decode/encode/resolve/prune operations are pure; this module adds the
file I/O and logging around them so scripts and build tooling can call one
function per task.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .lockfile import PnpmLockfile
from .report import aggregate

logger = logging.getLogger(__name__)


def read_lockfile(path: Path) -> PnpmLockfile:
    """Read and decode the lockfile at ``path``."""
    lockfile = PnpmLockfile.decode(path.read_bytes())
    model = lockfile.model
    logger.info(
        f"Loaded {path} (lockfileVersion {model.lockfile_version}, "
        f"{len(model.importers)} importers, {len(model.packages)} packages)"
    )
    return lockfile


def prune_lockfile(
    lockfile_path: Path,
    workspaces: Iterable[str],
    extra_packages: Iterable[str] = (),
    output_path: Path | None = None,
) -> dict[str, Any]:
    """Prune a lockfile to ``workspaces`` and optionally write the result.

    Params:
        lockfile_path: lockfile to read
        workspaces: repo-relative workspace paths to keep ("" or "." for root)
        extra_packages: package names to keep even if nothing depends on them
        output_path: where to write the pruned lockfile; parent directories
            are created. When None nothing is written.

    Returns: dict report (see ``report.aggregate``)
    """
    workspaces = list(workspaces)
    source = read_lockfile(lockfile_path)
    pruned = source.subgraph(workspaces, extra_packages)

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(pruned.encode())
        logger.info(f"Wrote pruned lockfile to {output_path}")

    report = aggregate(source.model, pruned.model, workspaces)
    totals = report["totals"]
    logger.info(
        f"Kept {totals['importers']['kept']} importers and "
        f"{totals['packages']['kept']} packages, removed {totals['packages']['removed']} packages"
    )
    return report


def resolve_in_lockfile(
    lockfile_path: Path, workspace: str, name: str, specifier: str
) -> dict[str, Any]:
    """Resolve ``name@specifier`` for ``workspace`` in the lockfile at ``lockfile_path``."""
    lockfile = read_lockfile(lockfile_path)
    version, found = lockfile.resolve_specifier(workspace, name, specifier)
    package = lockfile.resolve_package(workspace, name, specifier)
    return {
        "workspace": workspace,
        "package": name,
        "specifier": specifier,
        "found": found,
        "version": version,
        "key": package.key if package.found else None,
    }
