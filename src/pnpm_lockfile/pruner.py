"""Prune a lockfile down to the subgraph a set of workspaces needs."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable

from .errors import UnknownWorkspace
from .models import (
    ROOT_IMPORTER,
    LockfileModel,
    PackageLocator,
    normalize_workspace_path,
)

logger = logging.getLogger(__name__)


def prune(
    model: LockfileModel,
    workspace_paths: Iterable[str],
    extra_package_names: Iterable[str] = (),
) -> LockfileModel:
    """Return a new model restricted to what ``workspace_paths`` can reach.

    The result keeps the requested importers, the root importer, and every
    importer reached through a ``link:`` or ``file:`` reference, because those
    workspaces live in the repository and must be installable alongside.
    Packages are the breadth-first closure over all four dependency kinds,
    seeded by the kept importers and by every package named in
    ``extra_package_names``. Edges that do not resolve are dead ends.

    Raises:
        UnknownWorkspace: For the first requested path with no importer.
    """
    requested: list[str] = []
    for workspace_path in workspace_paths:
        path = normalize_workspace_path(workspace_path)
        if path not in model.importers:
            raise UnknownWorkspace(workspace_path)
        requested.append(path)

    importer_queue: deque[str] = deque(requested)
    if ROOT_IMPORTER in model.importers:
        importer_queue.append(ROOT_IMPORTER)
    package_queue: deque[PackageLocator] = deque()
    seen_importers: set[str] = set()
    seen_packages: set[PackageLocator] = set()

    def follow(name: str, reference: str, base: str) -> None:
        locator, workspace = model.resolve_reference(name, reference, base)
        if workspace is not None and workspace not in seen_importers:
            importer_queue.append(workspace)
        if locator is not None:
            if locator not in seen_packages:
                seen_packages.add(locator)
                package_queue.append(locator)
        elif workspace is None:
            logger.debug(f"Unresolved dependency {name}@{reference} (from '{base}')")

    extras = set(extra_package_names)
    if extras:
        matched: set[str] = set()
        for locator, entry in model.packages.items():
            package_name = entry.package_name(locator)
            if package_name in extras and locator not in seen_packages:
                matched.add(package_name)
                seen_packages.add(locator)
                package_queue.append(locator)
        for missing in sorted(extras - matched):
            logger.warning(f"Extra package '{missing}' has no entry in the lockfile")

    while importer_queue or package_queue:
        if importer_queue:
            path = importer_queue.popleft()
            if path in seen_importers:
                continue
            seen_importers.add(path)
            for _kind, name, spec in model.importers[path].iter_dependencies():
                follow(name, spec.version, path)
        else:
            locator = package_queue.popleft()
            for _kind, name, reference in model.packages[locator].iter_dependencies():
                follow(name, reference, ROOT_IMPORTER)

    injected = sorted(seen_importers - set(requested) - {ROOT_IMPORTER})
    if injected:
        logger.debug(f"Keeping workspace dependencies as importers: {', '.join(injected)}")

    return LockfileModel(
        lockfile_version=model.lockfile_version,
        importers={
            path: entry for path, entry in model.importers.items() if path in seen_importers
        },
        packages={
            locator: entry for locator, entry in model.packages.items() if locator in seen_packages
        },
        metadata=dict(model.metadata),
        inline_root=model.inline_root,
    )
