"""Resolved package entry model."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from .locator import REGISTRY, PackageLocator


@dataclass(frozen=True)
class ResolvedPackageEntry:
    """One value of the lockfile's ``packages`` section.

    Dependency edges map a dependency name to the reference pnpm recorded
    (a version, a version with peer suffix, or a full key). Edges are kept as
    written; turning them into locators is the job of
    ``LockfileModel.resolve_reference``. ``peer_dependencies`` holds declared
    ranges, which normally do not resolve to any key.
    """

    resolution: dict[str, Any] | None = None
    dependencies: dict[str, str] = field(default_factory=dict)
    optional_dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    peer_dependencies: dict[str, str] = field(default_factory=dict)
    engines: dict[str, str] | None = None
    name: str | None = None
    version: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def iter_dependencies(self) -> Iterator[tuple[str, str, str]]:
        """Yield ``(kind, name, reference)`` for every edge of every kind."""
        buckets = (
            ("dependencies", self.dependencies),
            ("optionalDependencies", self.optional_dependencies),
            ("devDependencies", self.dev_dependencies),
            ("peerDependencies", self.peer_dependencies),
        )
        for kind, edges in buckets:
            for dep_name, reference in edges.items():
                yield kind, dep_name, reference

    def package_name(self, locator: PackageLocator) -> str:
        """Return the npm name of this entry."""
        if self.name:
            return self.name
        if locator.kind == REGISTRY:
            return locator.name
        return ""
