"""Decode pnpm-lock.yaml content into a ``LockfileModel``."""

from __future__ import annotations

import logging
from typing import Any

import yaml

from .dialects import Dialect, get_dialect
from .document import force_str, parse_document
from .errors import MalformedDocument, MalformedImporter
from .models import (
    DEPENDENCY_KINDS,
    ROOT_IMPORTER,
    DependencySpec,
    ImporterEntry,
    LockfileModel,
    PackageLocator,
    ResolvedPackageEntry,
    normalize_workspace_path,
)

logger = logging.getLogger(__name__)

SPECIFIERS = "specifiers"

# Fields that make up the root importer of a single-project lockfile.
INLINE_ROOT_FIELDS = (SPECIFIERS, *DEPENDENCY_KINDS, "dependenciesMeta", "publishDirectory")

# Package entry fields the model keeps as typed attributes.
PACKAGE_EDGE_FIELDS = {
    "dependencies": "dependencies",
    "optionalDependencies": "optional_dependencies",
    "devDependencies": "dev_dependencies",
    "peerDependencies": "peer_dependencies",
}
PACKAGE_TYPED_FIELDS = {"resolution", "engines", "name", "version", *PACKAGE_EDGE_FIELDS}


def decode(content: bytes | str) -> LockfileModel:
    """Decode raw lockfile content.

    Raises:
        MalformedDocument: If the content is not YAML or not shaped like a
            lockfile.
        UnsupportedSchema: If ``lockfileVersion`` is missing or unknown.
        MalformedImporter: If an importer dependency lacks its specifier or
            version.
        MalformedLocator: If a package key cannot be parsed.
    """
    try:
        document = parse_document(content)
    except yaml.YAMLError as exc:
        raise MalformedDocument(f"lockfile is not valid YAML: {exc}") from exc

    if not isinstance(document, dict):
        raise MalformedDocument("lockfile top level must be a mapping")

    raw_version = document.get("lockfileVersion")
    dialect = get_dialect(raw_version)

    raw_importers = document.get("importers")
    inline_root = raw_importers is None
    if inline_root:
        root_fields = {key: document[key] for key in INLINE_ROOT_FIELDS if key in document}
        importers = {ROOT_IMPORTER: _decode_importer(dialect, ROOT_IMPORTER, root_fields)}
        consumed = {"lockfileVersion", "packages", *root_fields}
    else:
        if not isinstance(raw_importers, dict):
            raise MalformedDocument("'importers' must be a mapping")
        importers = {}
        for raw_path, raw_importer in raw_importers.items():
            path = normalize_workspace_path(force_str(raw_path))
            importers[path] = _decode_importer(dialect, path, raw_importer)
        consumed = {"lockfileVersion", "importers", "packages"}

    packages = _decode_packages(dialect, document.get("packages"))
    metadata = {force_str(key): value for key, value in document.items() if key not in consumed}

    logger.debug(
        f"Decoded {dialect.display_name} lockfile: "
        f"{len(importers)} importers, {len(packages)} packages"
    )

    return LockfileModel(
        lockfile_version=force_str(raw_version),
        importers=importers,
        packages=packages,
        metadata=metadata,
        inline_root=inline_root,
    )


def _decode_importer(dialect: Dialect, path: str, raw: Any) -> ImporterEntry:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise MalformedDocument(f"importer '{path}' must be a mapping")

    specifiers: dict[str, Any] = {}
    if not dialect.inline_specifiers:
        raw_specifiers = raw.get(SPECIFIERS) or {}
        if not isinstance(raw_specifiers, dict):
            raise MalformedDocument(f"importer '{path}': 'specifiers' must be a mapping")
        specifiers = {force_str(name): value for name, value in raw_specifiers.items()}

    sections: dict[str, dict[str, DependencySpec]] = {}
    for kind in DEPENDENCY_KINDS:
        bucket = raw.get(kind)
        if not bucket:
            continue
        if not isinstance(bucket, dict):
            raise MalformedDocument(f"importer '{path}': '{kind}' must be a mapping")

        specs: dict[str, DependencySpec] = {}
        for raw_name, value in bucket.items():
            name = force_str(raw_name)
            if dialect.inline_specifiers:
                if not isinstance(value, dict):
                    raise MalformedImporter(path, name, "must map to a specifier and a version")
                specifier = value.get("specifier")
                version = value.get("version")
            else:
                specifier = specifiers.get(name)
                version = value
            if specifier is None:
                raise MalformedImporter(path, name, "has no specifier")
            if version is None:
                raise MalformedImporter(path, name, "has no version")
            if isinstance(specifier, (dict, list)) or isinstance(version, (dict, list)):
                raise MalformedImporter(path, name, "must have scalar specifier and version")
            specs[name] = DependencySpec(specifier=force_str(specifier), version=force_str(version))
        sections[kind] = specs

    if specifiers:
        listed = {name for specs in sections.values() for name in specs}
        for name in specifiers:
            if name not in listed:
                raise MalformedImporter(path, name, "has a specifier but no version")

    handled = {SPECIFIERS, *DEPENDENCY_KINDS}
    extra = {force_str(key): value for key, value in raw.items() if key not in handled}
    return ImporterEntry(sections=sections, extra=extra)


def _decode_packages(
    dialect: Dialect, raw: Any
) -> dict[PackageLocator, ResolvedPackageEntry]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise MalformedDocument("'packages' must be a mapping")

    packages: dict[PackageLocator, ResolvedPackageEntry] = {}
    for raw_key, raw_entry in raw.items():
        key = force_str(raw_key)
        locator = dialect.parse_locator(key)
        if raw_entry is None:
            raw_entry = {}
        if not isinstance(raw_entry, dict):
            raise MalformedDocument(f"package '{key}' must be a mapping")
        packages[locator] = _decode_package_entry(key, raw_entry)
    return packages


def _string_map(owner: str, field: str, raw: Any) -> dict[str, str]:
    if not raw:
        return {}
    if not isinstance(raw, dict):
        raise MalformedDocument(f"'{owner}': '{field}' must be a mapping")
    edges: dict[str, str] = {}
    for name, value in raw.items():
        if isinstance(value, (dict, list)):
            raise MalformedDocument(f"'{owner}': '{field}.{force_str(name)}' must be a scalar")
        edges[force_str(name)] = force_str(value)
    return edges


def _decode_package_entry(key: str, raw: dict[str, Any]) -> ResolvedPackageEntry:
    resolution = raw.get("resolution")
    if resolution is not None and not isinstance(resolution, dict):
        raise MalformedDocument(f"'{key}': 'resolution' must be a mapping")

    edges = {
        attribute: _string_map(key, field, raw.get(field))
        for field, attribute in PACKAGE_EDGE_FIELDS.items()
    }
    engines = raw.get("engines")

    return ResolvedPackageEntry(
        resolution=dict(resolution) if resolution is not None else None,
        engines=_string_map(key, "engines", engines) if engines is not None else None,
        name=force_str(raw["name"]) if raw.get("name") is not None else None,
        version=force_str(raw["version"]) if raw.get("version") is not None else None,
        extra={force_str(k): v for k, v in raw.items() if k not in PACKAGE_TYPED_FIELDS},
        **edges,
    )
