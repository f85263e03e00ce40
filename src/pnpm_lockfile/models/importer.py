"""Importer (workspace) entry model."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

DEPENDENCY_KINDS = (
    "dependencies",
    "devDependencies",
    "optionalDependencies",
    "peerDependencies",
)

ROOT_IMPORTER = "."


@dataclass(frozen=True)
class DependencySpec:
    """A direct dependency as declared by a workspace and as pnpm resolved it."""

    specifier: str
    version: str


@dataclass(frozen=True)
class ImporterEntry:
    """Direct dependencies of one workspace package, bucketed by kind.

    ``sections`` only holds non-empty kinds. ``extra`` keeps importer fields
    this package does not interpret (``dependenciesMeta``,
    ``publishDirectory``) so they can be written back unchanged.
    """

    sections: dict[str, dict[str, DependencySpec]] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = set(self.sections) - set(DEPENDENCY_KINDS)
        if unknown:
            raise ValueError(f"Unknown dependency kinds: {', '.join(sorted(unknown))}")

    def iter_dependencies(self) -> Iterator[tuple[str, str, DependencySpec]]:
        for kind in DEPENDENCY_KINDS:
            for name, spec in self.sections.get(kind, {}).items():
                yield kind, name, spec

    def find(self, name: str) -> DependencySpec | None:
        """Return the spec recorded for ``name`` under any dependency kind."""
        for kind in DEPENDENCY_KINDS:
            spec = self.sections.get(kind, {}).get(name)
            if spec is not None:
                return spec
        return None


def normalize_workspace_path(path: str) -> str:
    """Return the importer key for a repo-relative workspace path.

    The root package may be given as ``""`` or ``"."``; separators are
    normalized to ``/``.
    """
    normalized = str(path).replace("\\", "/").strip("/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized or ROOT_IMPORTER
