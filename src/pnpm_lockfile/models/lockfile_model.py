"""Lockfile model."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Any

from .importer import ROOT_IMPORTER, ImporterEntry, normalize_workspace_path
from .locator import PackageLocator
from .package_entry import ResolvedPackageEntry

if TYPE_CHECKING:
    from ..dialects import Dialect


@dataclass(frozen=True)
class LockfileModel:
    """Immutable, typed view of one pnpm-lock.yaml document.

    Only the decoder and the pruner create models. ``metadata`` holds every
    top-level field other than ``lockfileVersion``, ``importers`` and
    ``packages``, in source order. ``inline_root`` marks single-project
    lockfiles whose root importer sits at the top level of the document.
    """

    lockfile_version: str
    importers: dict[str, ImporterEntry]
    packages: dict[PackageLocator, ResolvedPackageEntry]
    metadata: dict[str, Any] = field(default_factory=dict)
    inline_root: bool = False

    @cached_property
    def dialect(self) -> Dialect:
        from ..dialects import get_dialect

        return get_dialect(self.lockfile_version)

    @cached_property
    def _locators_by_key(self) -> dict[str, PackageLocator]:
        return {locator.key: locator for locator in self.packages}

    def locator(self, key: str) -> PackageLocator | None:
        return self._locators_by_key.get(key)

    def package(self, key: str) -> ResolvedPackageEntry | None:
        """Return the package entry stored under ``key``, if any."""
        locator = self.locator(key)
        if locator is None:
            return None
        return self.packages[locator]

    def importer(self, workspace_path: str) -> ImporterEntry | None:
        return self.importers.get(normalize_workspace_path(workspace_path))

    def resolve_reference(
        self, name: str, reference: str, base: str = ROOT_IMPORTER
    ) -> tuple[PackageLocator | None, str | None]:
        """Map a dependency edge to its package locator and workspace target.

        ``base`` is the importer the edge belongs to, used for relative
        ``link:`` paths. Either side of the result is ``None`` when the edge
        does not point at an existing package entry or importer.
        """
        from ..dialects import workspace_target

        key = self.dialect.reference_key(name, reference)
        locator = self.locator(key) if key is not None else None
        workspace = workspace_target(reference, base)
        if workspace is not None and workspace not in self.importers:
            workspace = None
        return locator, workspace

    def dangling_references(self) -> list[tuple[str, str, str]]:
        """List ``(source, name, reference)`` edges that resolve to nothing.

        Peer dependency ranges are skipped; they are never package keys.
        pnpm legitimately omits unreachable optional peers, so a non-empty
        result is not an error by itself.
        """
        dangling: list[tuple[str, str, str]] = []
        for path, importer in self.importers.items():
            for _kind, name, spec in importer.iter_dependencies():
                if self.resolve_reference(name, spec.version, path) == (None, None):
                    dangling.append((path, name, spec.version))
        for locator, entry in self.packages.items():
            for kind, name, reference in entry.iter_dependencies():
                if kind == "peerDependencies":
                    continue
                if self.resolve_reference(name, reference) == (None, None):
                    dangling.append((locator.key, name, reference))
        return dangling
