"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from pnpm_lockfile.decoder import decode
from pnpm_lockfile.models import LockfileModel

TESTDATA = Path(__file__).parent / "testdata"

LOCKFILE_FIXTURES = (
    "pnpm6-workspace.yaml",
    "pnpm7-workspace.yaml",
    "pnpm8-workspace.yaml",
)


@pytest.fixture
def testdata() -> Path:
    """Directory holding the lockfile fixtures."""
    return TESTDATA


@pytest.fixture
def pnpm6_model() -> LockfileModel:
    return decode((TESTDATA / "pnpm6-workspace.yaml").read_bytes())


@pytest.fixture
def pnpm7_model() -> LockfileModel:
    return decode((TESTDATA / "pnpm7-workspace.yaml").read_bytes())


@pytest.fixture
def pnpm8_model() -> LockfileModel:
    return decode((TESTDATA / "pnpm8-workspace.yaml").read_bytes())


# Dependencies named with YAML 1.1 boolean words, written unquoted as pnpm does.
BOOLEAN_WORD_NAMES_V5 = b"""\
lockfileVersion: 5.4

importers:

  .:
    specifiers:
      on: ^2.0.0
      yes: ^1.0.0
    dependencies:
      on: 2.0.0
      yes: 1.0.0

packages:

  /on/2.0.0:
    resolution: {integrity: sha512-on}
    dependencies:
      off: 3.0.0
    dev: false

  /off/3.0.0:
    resolution: {integrity: sha512-off}
    dev: false

  /yes/1.0.0:
    resolution: {integrity: sha512-yes}
    dev: false
"""
