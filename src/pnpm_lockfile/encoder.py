"""Encode a ``LockfileModel`` back into pnpm-lock.yaml content."""

from __future__ import annotations

from typing import Any

from .decoder import PACKAGE_EDGE_FIELDS, SPECIFIERS
from .dialects import Dialect
from .document import FlowMapping, PlainScalar, serialize_document
from .errors import EncodeError
from .models import (
    ROOT_IMPORTER,
    ImporterEntry,
    LockfileModel,
    PackageLocator,
    ResolvedPackageEntry,
)

IMPORTER_SECTION_ORDER = (
    "dependencies",
    "optionalDependencies",
    "devDependencies",
    "peerDependencies",
)

# Order pnpm writes package entry fields in; unknown fields follow.
PACKAGE_FIELD_ORDER = (
    "resolution",
    "id",
    "name",
    "version",
    "engines",
    "cpu",
    "os",
    "libc",
    "deprecated",
    "hasBin",
    "prepare",
    "requiresBuild",
    "bundledDependencies",
    "peerDependencies",
    "peerDependenciesMeta",
    "dependencies",
    "optionalDependencies",
    "devDependencies",
    "transitivePeerDependencies",
    "dev",
    "optional",
    "patched",
)


def encode(model: LockfileModel) -> bytes:
    """Serialize ``model`` deterministically.

    Importers are written root first, then by ascending path; packages by
    ascending key.

    Raises:
        EncodeError: If the model breaks an invariant the format relies on,
            such as a locator with an empty name.
    """
    dialect = model.dialect
    version: str = model.lockfile_version
    document: dict[str, Any] = {
        "lockfileVersion": version if dialect.quoted_version else PlainScalar(version),
    }
    document.update(model.metadata)

    if model.inline_root:
        extra_paths = sorted(set(model.importers) - {ROOT_IMPORTER})
        if extra_paths:
            raise EncodeError(
                f"single-project lockfile cannot hold workspace importers: {', '.join(extra_paths)}"
            )
        root = model.importers.get(ROOT_IMPORTER, ImporterEntry())
        document.update(_encode_importer(dialect, ROOT_IMPORTER, root))
    else:
        document["importers"] = {
            path: _encode_importer(dialect, path, model.importers[path])
            for path in importer_order(model.importers)
        }

    if model.packages:
        keyed = [(_locator_key(dialect, locator), locator) for locator in model.packages]
        document["packages"] = {
            key: _encode_package(model.packages[locator]) for key, locator in sorted(keyed)
        }

    return serialize_document(document)


def importer_order(paths: Any) -> list[str]:
    """Return importer paths with the root first, then ascending."""
    paths = list(paths)
    ordered = [ROOT_IMPORTER] if ROOT_IMPORTER in paths else []
    ordered.extend(sorted(path for path in paths if path != ROOT_IMPORTER))
    return ordered


def _locator_key(dialect: Dialect, locator: PackageLocator) -> str:
    if not locator.name:
        raise EncodeError(f"package locator '{locator.key}' has an empty name")
    key = dialect.format_locator(locator)
    if key != locator.key:
        raise EncodeError(
            f"package locator '{locator.key}' does not round-trip ({key!r}) "
            f"under {dialect.display_name}"
        )
    return key


def _encode_importer(dialect: Dialect, path: str, entry: ImporterEntry) -> dict[str, Any]:
    encoded: dict[str, Any] = {}

    if dialect.inline_specifiers:
        for kind in IMPORTER_SECTION_ORDER:
            specs = entry.sections.get(kind)
            if specs:
                encoded[kind] = {
                    name: {"specifier": specs[name].specifier, "version": specs[name].version}
                    for name in sorted(specs)
                }
    else:
        specifiers: dict[str, str] = {}
        for _kind, name, spec in entry.iter_dependencies():
            if specifiers.get(name, spec.specifier) != spec.specifier:
                raise EncodeError(
                    f"importer '{path}': dependency '{name}' has conflicting specifiers"
                )
            specifiers[name] = spec.specifier
        encoded[SPECIFIERS] = dict(sorted(specifiers.items()))
        for kind in IMPORTER_SECTION_ORDER:
            specs = entry.sections.get(kind)
            if specs:
                encoded[kind] = {name: specs[name].version for name in sorted(specs)}

    encoded.update(entry.extra)
    return encoded


def _encode_package(entry: ResolvedPackageEntry) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    if entry.resolution is not None:
        fields["resolution"] = FlowMapping(entry.resolution)
    if entry.name is not None:
        fields["name"] = entry.name
    if entry.version is not None:
        fields["version"] = entry.version
    if entry.engines is not None:
        fields["engines"] = FlowMapping(entry.engines)
    for field, attribute in PACKAGE_EDGE_FIELDS.items():
        edges = getattr(entry, attribute)
        if edges:
            fields[field] = dict(sorted(edges.items()))
    fields.update(entry.extra)

    ordered = {key: fields[key] for key in PACKAGE_FIELD_ORDER if key in fields}
    ordered.update((key, value) for key, value in fields.items() if key not in ordered)
    return ordered
