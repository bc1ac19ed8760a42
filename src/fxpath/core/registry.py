"""Stable dense integer ids for arbitrary hashable keys."""
from dataclasses import dataclass
from typing import Dict, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True)
class Index:
    """Id handed out by a registry, tagged with how it was obtained."""
    value: int


@dataclass(frozen=True)
class Fetched(Index):
    """The key was already registered."""


@dataclass(frozen=True)
class Inserted(Index):
    """The key was registered by this call."""


class IndexRegistry(Generic[K]):
    """Assigns ids 0, 1, 2, ... to keys in first-seen order.

    Keys are never removed and ids are never reused, so ids can be stored
    elsewhere by value for the lifetime of the registry.
    """

    def __init__(self):
        self._ids: Dict[K, int] = {}
        self._keys: List[K] = []

    def entry(self, key: K) -> Index:
        """Return the id for ``key``, registering it first if needed."""
        index = self._ids.get(key)
        if index is not None:
            return Fetched(index)

        self._keys.append(key)
        index = len(self._keys) - 1
        self._ids[key] = index
        return Inserted(index)

    def get(self, key: K) -> Optional[int]:
        return self._ids.get(key)

    def contains(self, key: K) -> bool:
        return key in self._ids

    def get_by_id(self, index: int) -> Optional[K]:
        if not self.contains_id(index):
            return None
        return self._keys[index]

    def contains_id(self, index: int) -> bool:
        return 0 <= index < len(self._keys)

    def __contains__(self, key) -> bool:
        return self.contains(key)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[Tuple[K, int]]:
        return ((key, index) for index, key in enumerate(self._keys))
