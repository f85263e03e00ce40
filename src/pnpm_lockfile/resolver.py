"""Specifier resolution against a decoded lockfile.

Resolution is a lookup of the decision pnpm already recorded for a workspace,
not a semver computation: the declared specifier must match the recorded one
byte for byte.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import UnknownWorkspace
from .models import LockfileModel


@dataclass(frozen=True)
class ResolvedPackage:
    """Package-map key and bare version a declared dependency resolved to."""

    key: str
    version: str
    found: bool

    @classmethod
    def not_found(cls) -> ResolvedPackage:
        return cls(key="", version="", found=False)


def resolve_specifier(
    model: LockfileModel, workspace_path: str, name: str, specifier: str
) -> tuple[str, bool]:
    """Return ``(version, found)`` recorded for ``name@specifier`` in a workspace.

    The version is returned verbatim and may carry a peer suffix, e.g.
    ``12.2.5_ir3quccc6i62x6qn6jjhyjjiey``. ``("", False)`` means the workspace
    does not depend on ``name`` or declares it with a different specifier.

    Raises:
        UnknownWorkspace: If the lockfile has no importer for the workspace.
    """
    importer = model.importer(workspace_path)
    if importer is None:
        raise UnknownWorkspace(workspace_path)

    spec = importer.find(name)
    if spec is None or spec.specifier != specifier:
        return "", False
    return spec.version, True


def resolve_package(
    model: LockfileModel, workspace_path: str, name: str, specifier: str
) -> ResolvedPackage:
    """Resolve a declared dependency all the way to its package entry.

    Workspace links (``link:``) have no package entry and are reported as not
    found.
    """
    version, found = resolve_specifier(model, workspace_path, name, specifier)
    if not found:
        return ResolvedPackage.not_found()

    key = model.dialect.reference_key(name, version)
    locator = model.locator(key) if key is not None else None
    if locator is None:
        return ResolvedPackage.not_found()

    entry = model.packages[locator]
    return ResolvedPackage(
        key=locator.key,
        version=entry.version or locator.version or version,
        found=True,
    )


def all_dependencies(model: LockfileModel, key: str) -> tuple[dict[str, str], bool]:
    """Return the installable edges of one package and whether it exists.

    Covers ``dependencies`` and ``optionalDependencies``; resolved peers are
    already listed under ``dependencies`` by pnpm.
    """
    entry = model.package(key)
    if entry is None:
        return {}, False
    edges = dict(entry.dependencies)
    edges.update(entry.optional_dependencies)
    return edges, True
