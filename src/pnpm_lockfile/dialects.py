"""Registry of supported pnpm-lock.yaml schema families.

Each family is a ``Dialect`` record bundling the rules that differ between
them: the grammar of package keys and the layout of importer sections. The
decoder selects a dialect once from ``lockfileVersion``; everything else asks
the model for its dialect instead of checking version numbers itself.
"""

from __future__ import annotations

import posixpath
from collections.abc import Callable
from dataclasses import dataclass

from packaging.version import InvalidVersion, Version

from .document import force_str
from .errors import MalformedLocator, UnsupportedSchema
from .models.importer import ROOT_IMPORTER, normalize_workspace_path
from .models.locator import LOCAL, REGISTRY, REMOTE, PackageLocator

FILE_PREFIX = "file:"
LINK_PREFIX = "link:"


def _split_peer_groups(key: str, text: str) -> tuple[str, str]:
    """Split ``name@1.0.0(react@18.2.0)`` into head and parenthesised suffix."""
    start = text.find("(")
    if start == -1:
        if ")" in text:
            raise MalformedLocator(key, "unbalanced peer suffix")
        return text, ""
    suffix = text[start:]
    depth = 0
    for ch in suffix:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                break
    if depth != 0 or not suffix.endswith(")"):
        raise MalformedLocator(key, "unbalanced peer suffix")
    return text[:start], suffix


def _parse_remote(key: str) -> PackageLocator:
    if not key or "/" not in key or any(ch.isspace() for ch in key):
        raise MalformedLocator(key)
    return PackageLocator(key=key, kind=REMOTE, name=key)


def _parse_v5_locator(key: str) -> PackageLocator:
    if key.startswith(FILE_PREFIX):
        path = key[len(FILE_PREFIX):]
        if not path:
            raise MalformedLocator(key, "empty path")
        return PackageLocator(key=key, kind=LOCAL, name=path)
    if not key.startswith("/"):
        return _parse_remote(key)

    # "/name/1.0.0_peerhash" or "/@scope/name/1.0.0_peerhash"
    parts = key[1:].split("/")
    expected = 3 if parts[0].startswith("@") else 2
    if len(parts) != expected or not all(parts):
        raise MalformedLocator(key)
    name = "/".join(parts[:-1])
    version, _, peer_suffix = parts[-1].partition("_")
    if not version or name == "@":
        raise MalformedLocator(key)
    return PackageLocator(
        key=key, kind=REGISTRY, name=name, version=version, peer_suffix=peer_suffix
    )


def _parse_v6_locator(key: str) -> PackageLocator:
    if key.startswith(FILE_PREFIX):
        path, peer_suffix = _split_peer_groups(key, key[len(FILE_PREFIX):])
        if not path:
            raise MalformedLocator(key, "empty path")
        return PackageLocator(key=key, kind=LOCAL, name=path, peer_suffix=peer_suffix)
    if not key.startswith("/"):
        return _parse_remote(key)

    # "/name@1.0.0(peer@2.0.0)" or "/@scope/name@1.0.0"
    head, peer_suffix = _split_peer_groups(key, key[1:])
    at = head.find("@", 1)
    if at <= 0:
        raise MalformedLocator(key)
    name, version = head[:at], head[at + 1:]
    slashes = 1 if name.startswith("@") else 0
    if not version or name.count("/") != slashes or name.endswith("/") or name == "@":
        raise MalformedLocator(key)
    return PackageLocator(
        key=key, kind=REGISTRY, name=name, version=version, peer_suffix=peer_suffix
    )


def _format_v5_locator(locator: PackageLocator) -> str:
    if locator.kind == REGISTRY:
        key = f"/{locator.name}/{locator.version}"
        return f"{key}_{locator.peer_suffix}" if locator.peer_suffix else key
    if locator.kind == LOCAL:
        return f"{FILE_PREFIX}{locator.name}"
    return locator.name


def _format_v6_locator(locator: PackageLocator) -> str:
    if locator.kind == REGISTRY:
        return f"/{locator.name}@{locator.version}{locator.peer_suffix}"
    if locator.kind == LOCAL:
        return f"{FILE_PREFIX}{locator.name}{locator.peer_suffix}"
    return locator.name


@dataclass(slots=True, frozen=True)
class Dialect:
    """Rules for one pnpm lockfile schema family.

    ``inline_specifiers`` is true when importer dependencies carry their own
    ``{specifier, version}`` mapping (v6) instead of sharing a separate
    ``specifiers`` map (v5). ``quoted_version`` tells the encoder to write
    ``lockfileVersion`` as a string (``'6.0'``) rather than a bare number.
    """

    family: int
    display_name: str
    parse_locator: Callable[[str], PackageLocator]
    format_locator: Callable[[PackageLocator], str]
    key_separator: str
    inline_specifiers: bool
    quoted_version: bool

    def registry_key(self, name: str, version: str) -> str:
        """Return the package key pnpm uses for ``name`` at ``version``."""
        return f"/{name}{self.key_separator}{version}"

    def reference_key(self, name: str, reference: str) -> str | None:
        """Return the package key an edge reference points at.

        ``link:`` references point at a workspace directory and have no
        package entry, so they map to ``None``.
        """
        if reference.startswith(LINK_PREFIX):
            return None
        if reference.startswith(FILE_PREFIX) or reference.startswith("/"):
            return reference
        if "/" in reference.split("(", 1)[0]:
            return reference
        return self.registry_key(name, reference)


def workspace_target(reference: str, base: str = ROOT_IMPORTER) -> str | None:
    """Return the importer path a ``link:`` or ``file:`` reference names.

    ``link:`` paths are relative to the referencing importer ``base``;
    ``file:`` paths are relative to the lockfile root.
    """
    if reference.startswith(LINK_PREFIX):
        base_dir = "" if base == ROOT_IMPORTER else base
        target = posixpath.join(base_dir, reference[len(LINK_PREFIX):])
    elif reference.startswith(FILE_PREFIX):
        target = reference[len(FILE_PREFIX):].split("(", 1)[0]
    else:
        return None
    return normalize_workspace_path(posixpath.normpath(target))


PNPM_V5 = Dialect(
    family=5,
    display_name="pnpm lockfile v5 (pnpm 6/7)",
    parse_locator=_parse_v5_locator,
    format_locator=_format_v5_locator,
    key_separator="/",
    inline_specifiers=False,
    quoted_version=False,
)

PNPM_V6 = Dialect(
    family=6,
    display_name="pnpm lockfile v6 (pnpm 8)",
    parse_locator=_parse_v6_locator,
    format_locator=_format_v6_locator,
    key_separator="@",
    inline_specifiers=True,
    quoted_version=True,
)

# Supported schema families, keyed by the major part of lockfileVersion.
DIALECTS: dict[int, Dialect] = {
    PNPM_V5.family: PNPM_V5,
    PNPM_V6.family: PNPM_V6,
}


def get_dialect(lockfile_version: object) -> Dialect:
    """Return the dialect for a ``lockfileVersion`` value.

    Raises:
        UnsupportedSchema: If the version is missing, unparseable or belongs
            to an unsupported family.
    """
    if lockfile_version is None or force_str(lockfile_version) == "":
        raise UnsupportedSchema(None)
    try:
        parsed = Version(force_str(lockfile_version))
    except InvalidVersion as exc:
        raise UnsupportedSchema(lockfile_version) from exc
    dialect = DIALECTS.get(parsed.major)
    if dialect is None:
        raise UnsupportedSchema(lockfile_version)
    return dialect
