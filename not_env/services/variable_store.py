"""
Immutable key → value mapping built once from the service's response.
"""

from __future__ import annotations
from typing import Iterable, Iterator, Mapping, Tuple, Union

from not_env.models import RawVariable

Pair = Union[RawVariable, Tuple[str, str]]


class VariableStore(Mapping[str, str]):
    """Read-only view over the fetched variables.

    Later duplicates overwrite earlier ones; a key keeps the position of
    its first occurrence.
    """

    __slots__ = ("_vars",)

    def __init__(self, variables: Mapping[str, str] | None = None) -> None:
        self._vars: dict[str, str] = dict(variables) if variables else {}

    @classmethod
    def from_pairs(cls, pairs: Iterable[Pair]) -> VariableStore:
        merged: dict[str, str] = {}
        for pair in pairs:
            if isinstance(pair, RawVariable):
                merged[pair.key] = pair.value
            else:
                key, value = pair
                merged[key] = value
        return cls(merged)

    def __getitem__(self, key: str) -> str:
        return self._vars[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def __contains__(self, key: object) -> bool:
        return key in self._vars

    def has(self, key: str) -> bool:
        return key in self._vars

    def __repr__(self) -> str:
        return f"VariableStore(keys={list(self._vars)!r})"
