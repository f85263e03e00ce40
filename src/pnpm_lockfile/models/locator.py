"""Package locator model."""

from __future__ import annotations

from dataclasses import dataclass

REGISTRY = "registry"
LOCAL = "local"
REMOTE = "remote"

_KINDS = {REGISTRY, LOCAL, REMOTE}


@dataclass(frozen=True, order=True)
class PackageLocator:
    """Identify one resolved package instance in the ``packages`` section.

    ``key`` is the exact string used in the lockfile. The remaining fields are
    what the dialect grammar split it into:

    - ``registry`` keys carry the npm ``name``, the bare ``version`` and the
      peer-dependency disambiguation suffix, if any.
    - ``local`` keys (``file:packages/ui``) carry the path in ``name``.
    - ``remote`` keys (``github.com/org/repo/sha``) carry the whole key in
      ``name``.

    Two builds of the same name and version with different peers are distinct
    locators.
    """

    key: str
    kind: str
    name: str
    version: str = ""
    peer_suffix: str = ""

    def __post_init__(self) -> None:
        if self.kind not in _KINDS:
            raise ValueError(f"Invalid locator kind: {self.kind}")

    def __str__(self) -> str:
        return self.key

    @property
    def is_local(self) -> bool:
        return self.kind == LOCAL
