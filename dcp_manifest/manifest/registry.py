# Purpose: Run-scoped table of random identifiers keyed by file base name.
from __future__ import annotations
import uuid
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping

# No file can have an empty name, so this key never collides with a real entry.
PACKAGE_KEY = ""
URN_PREFIX = "urn:uuid:"


def new_id() -> str:
    return str(uuid.uuid4())


class IdentifierRegistry(Mapping[str, str]):
    """
    Read-only mapping of base name -> UUID string, plus the package id under
    PACKAGE_KEY. Built once by `assign`; there is no way to add or replace
    entries afterwards.
    """

    def __init__(self, ids: Dict[str, str]):
        if PACKAGE_KEY not in ids:
            raise ValueError("registry needs a package identifier")
        self._ids = MappingProxyType(dict(ids))

    def __getitem__(self, name: str) -> str:
        return self._ids[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"IdentifierRegistry(package={self.package_id!r}, files={len(self) - 1})"

    @property
    def package_id(self) -> str:
        return self._ids[PACKAGE_KEY]

    def lookup(self, name: str) -> str:
        # unknown names get an empty id rather than an error
        return self._ids.get(name, "")

    def urn(self, name: str) -> str:
        return URN_PREFIX + self.lookup(name)

    @property
    def package_urn(self) -> str:
        return URN_PREFIX + self.package_id


def assign(file_names: Iterable[str]) -> IdentifierRegistry:
    ids: Dict[str, str] = {PACKAGE_KEY: new_id()}
    for name in file_names:
        if name not in ids:
            ids[name] = new_id()
    return IdentifierRegistry(ids)
