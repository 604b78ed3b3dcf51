"""
Virtual environment — the hermetic stand-in for `os.environ`.

Fetched variables are visible and read-only. The two bootstrap coordinates
(`NOT_ENV_URL`, `NOT_ENV_API_KEY`) always resolve against the OS-level
snapshot taken before bootstrap, and stay writable so tooling can point the
process at another service. Nothing else from the OS is observable.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, MutableMapping

from not_env.config import PRESERVED_KEYS
from not_env.errors import ReadOnlyVariableError
from not_env.services.variable_store import VariableStore


@dataclass(frozen=True)
class VariableDescriptor:
    value: str
    enumerable: bool = True
    configurable: bool = True


class VirtualEnvironment(MutableMapping[str, str]):
    def __init__(self, store: VariableStore, snapshot: MutableMapping[str, str]) -> None:
        self._store = store
        self._snapshot = snapshot

    @property
    def store(self) -> VariableStore:
        return self._store

    # ── Lookup ─────────────────────────────────────────────────────

    def read(self, key: str) -> str | None:
        """Return the visible value of *key*, or None. Never raises."""
        if key in PRESERVED_KEYS:
            return self._snapshot.get(key)
        return self._store.get(key)

    def contains(self, key: str) -> bool:
        if key in PRESERVED_KEYS:
            return key in self._snapshot
        return key in self._store

    def enumerate(self) -> list[str]:
        """Store keys in fetch order, then whichever coordinates are set.

        A coordinate is listed only when the snapshot holds it, even if the
        service also sent a variable by that name.
        """
        keys = [key for key in self._store if key not in PRESERVED_KEYS]
        keys.extend(key for key in PRESERVED_KEYS if key in self._snapshot)
        return keys

    def describe(self, key: str) -> VariableDescriptor | None:
        if not self.contains(key):
            return None
        return VariableDescriptor(value=self._value(key))

    def _value(self, key: str) -> str:
        if key in PRESERVED_KEYS:
            return self._snapshot[key]
        return self._store[key]

    # ── Mutation ───────────────────────────────────────────────────

    def write(self, key: str, value: str) -> bool:
        """Update a bootstrap coordinate. Returns False for anything else."""
        if key not in PRESERVED_KEYS:
            return False
        self._snapshot[key] = value
        return True

    # ── Mapping protocol ───────────────────────────────────────────

    def __getitem__(self, key: str) -> str:
        if not self.contains(key):
            raise KeyError(key)
        return self._value(key)

    def get(self, key: str, default: str | None = None) -> str | None:
        value = self.read(key)
        return default if value is None else value

    def __setitem__(self, key: str, value: str) -> None:
        if not self.write(key, value):
            raise ReadOnlyVariableError(key)

    def __delitem__(self, key: str) -> None:
        if key not in PRESERVED_KEYS:
            raise ReadOnlyVariableError(key)
        del self._snapshot[key]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.enumerate())

    def __len__(self) -> int:
        return len(self.enumerate())

    def copy(self) -> dict[str, str]:
        return {key: self._value(key) for key in self.enumerate()}

    def __repr__(self) -> str:
        return f"VirtualEnvironment(keys={self.enumerate()!r})"
