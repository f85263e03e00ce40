"""Tests for package key grammars and dialect selection."""

import pytest

from pnpm_lockfile.dialects import PNPM_V5, PNPM_V6, get_dialect, workspace_target
from pnpm_lockfile.errors import MalformedLocator, UnsupportedSchema
from pnpm_lockfile.models import LOCAL, REGISTRY, REMOTE, PackageLocator


@pytest.mark.parametrize(
    ("key", "kind", "name", "version", "peer_suffix"),
    [
        ("/lodash/4.17.21", REGISTRY, "lodash", "4.17.21", ""),
        ("/@babel/core/7.19.1", REGISTRY, "@babel/core", "7.19.1", ""),
        (
            "/next/12.2.5_ir3quccc6i62x6qn6jjhyjjiey",
            REGISTRY,
            "next",
            "12.2.5",
            "ir3quccc6i62x6qn6jjhyjjiey",
        ),
        ("/react-dom/18.2.0_react@18.2.0", REGISTRY, "react-dom", "18.2.0", "react@18.2.0"),
        ("file:packages/ui", LOCAL, "packages/ui", "", ""),
        (
            "github.com/jonschlinkert/is-number/98e8ff1",
            REMOTE,
            "github.com/jonschlinkert/is-number/98e8ff1",
            "",
            "",
        ),
    ],
)
def test_parse_v5_keys(key, kind, name, version, peer_suffix) -> None:
    locator = PNPM_V5.parse_locator(key)

    assert locator == PackageLocator(
        key=key, kind=kind, name=name, version=version, peer_suffix=peer_suffix
    )
    assert PNPM_V5.format_locator(locator) == key


@pytest.mark.parametrize(
    ("key", "kind", "name", "version", "peer_suffix"),
    [
        ("/lodash@4.17.21", REGISTRY, "lodash", "4.17.21", ""),
        ("/@babel/core@7.19.1", REGISTRY, "@babel/core", "7.19.1", ""),
        (
            "/react-dom@18.2.0(react@18.2.0)",
            REGISTRY,
            "react-dom",
            "18.2.0",
            "(react@18.2.0)",
        ),
        (
            "/styled-jsx@5.1.1(@babel/core@7.22.5)(react@18.2.0)",
            REGISTRY,
            "styled-jsx",
            "5.1.1",
            "(@babel/core@7.22.5)(react@18.2.0)",
        ),
        ("file:packages/ui(react@18.2.0)", LOCAL, "packages/ui", "", "(react@18.2.0)"),
        ("file:packages/ui", LOCAL, "packages/ui", "", ""),
    ],
)
def test_parse_v6_keys(key, kind, name, version, peer_suffix) -> None:
    locator = PNPM_V6.parse_locator(key)

    assert locator == PackageLocator(
        key=key, kind=kind, name=name, version=version, peer_suffix=peer_suffix
    )
    assert PNPM_V6.format_locator(locator) == key


@pytest.mark.parametrize(
    "key",
    ["", "/", "/lodash", "/lodash/", "/lodash/_hash", "/@babel/core", "/a/b/c", "lodash", "file:"],
)
def test_malformed_v5_keys(key) -> None:
    with pytest.raises(MalformedLocator) as exc_info:
        PNPM_V5.parse_locator(key)

    assert exc_info.value.key == key


@pytest.mark.parametrize(
    "key",
    [
        "/lodash",
        "/lodash@",
        "/@babel/core",
        "/a/b@1.0.0",
        "/react-dom@18.2.0(react@18.2.0",
        "/react-dom@18.2.0react@18.2.0)",
        "file:",
    ],
)
def test_malformed_v6_keys(key) -> None:
    with pytest.raises(MalformedLocator):
        PNPM_V6.parse_locator(key)


def test_malformed_locator_message() -> None:
    with pytest.raises(MalformedLocator, match="malformed package key '/lodash'"):
        PNPM_V5.parse_locator("/lodash")


@pytest.mark.parametrize(
    ("version", "dialect"),
    [("5.3", PNPM_V5), ("5.4", PNPM_V5), ("6.0", PNPM_V6), ("6.1", PNPM_V6)],
)
def test_get_dialect(version, dialect) -> None:
    assert get_dialect(version) is dialect


@pytest.mark.parametrize("version", ["9.0", "4.0", "3", "not-a-version"])
def test_get_dialect_rejects_unknown_versions(version) -> None:
    with pytest.raises(UnsupportedSchema, match="unsupported lockfileVersion"):
        get_dialect(version)


def test_get_dialect_rejects_missing_version() -> None:
    with pytest.raises(UnsupportedSchema, match="no 'lockfileVersion' field"):
        get_dialect(None)


def test_reference_keys() -> None:
    assert PNPM_V5.reference_key("lodash", "4.17.21") == "/lodash/4.17.21"
    assert PNPM_V6.reference_key("lodash", "4.17.21") == "/lodash@4.17.21"
    assert (
        PNPM_V6.reference_key("react-dom", "18.2.0(react@18.2.0)")
        == "/react-dom@18.2.0(react@18.2.0)"
    )
    assert PNPM_V5.reference_key("ui", "file:packages/ui") == "file:packages/ui"
    assert PNPM_V5.reference_key("ui", "link:../../packages/ui") is None
    assert PNPM_V6.reference_key("string-width", "/string-width@4.2.3") == "/string-width@4.2.3"
    assert (
        PNPM_V5.reference_key("is-number", "github.com/jonschlinkert/is-number/98e8ff1")
        == "github.com/jonschlinkert/is-number/98e8ff1"
    )


def test_workspace_target() -> None:
    assert workspace_target("link:../../packages/ui", "apps/web") == "packages/ui"
    assert workspace_target("link:packages/eslint-config-custom") == "packages/eslint-config-custom"
    assert workspace_target("link:../tsconfig", "packages/ui") == "packages/tsconfig"
    assert workspace_target("file:packages/ui(react@18.2.0)", "apps/web") == "packages/ui"
    assert workspace_target("18.2.0", "apps/web") is None
