"""Module sources: lookups from module name to Python source text."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Protocol, runtime_checkable


@runtime_checkable
class ModuleSource(Protocol):
    """Anything that can list module names and return their source text."""

    def names(self) -> list[str]:
        ...

    def read(self, name: str) -> str:
        ...


class InMemoryModuleSource(Mapping[str, str]):
    """Read-only in-memory module source.

    Never touches the filesystem; the mapping is frozen at construction.
    """

    def __init__(self, modules: Mapping[str, str]) -> None:
        self._modules = MappingProxyType(dict(modules))

    def names(self) -> list[str]:
        return sorted(self._modules)

    def read(self, name: str) -> str:
        try:
            return self._modules[name]
        except KeyError:
            raise KeyError(f"Module '{name}' not found in module source") from None

    def __getitem__(self, name: str) -> str:
        return self._modules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._modules)

    def __len__(self) -> int:
        return len(self._modules)

    def __repr__(self) -> str:
        return f"InMemoryModuleSource({self.names()!r})"
