"""ObservableDictionary — a mapping that reports every change.

Reads never notify. Each successful mutation commits to the backing dict,
then sends property notifications followed by exactly one collection
notification. Pairs in events are (key, value) tuples; indexes are the
key's rank in iteration (insertion) order.

All state lives in _anchor — instances are thin handles holding an _id.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any, Generic, TypeVar

from bindkit import _anchor
from bindkit.errors import DuplicateKeyError, InvalidArgumentError, KeyNotFoundError
from bindkit.events import COUNT, INDEXER, KEYS, VALUES, CollectionChangedEvent
from bindkit.notifier import ChangeNotifier

KT = TypeVar("KT")
VT = TypeVar("VT")


class ObservableDictionary(ChangeNotifier, MutableMapping, Generic[KT, VT]):
    """A dict with change notification and a reentrancy guard.

    Usage:
        d = ObservableDictionary({"a": 1})
        d.collection_changed.subscribe(lambda sender, e: print(e.action))

        d.add("b", 2)   # ADD
        d["b"] = 3      # REPLACE
        d.remove("a")   # REMOVE
        d.clear()       # RESET
    """

    __slots__ = ()

    def __init__(
        self,
        data: Mapping[KT, VT] | Iterable[tuple[KT, VT]] | None = None,
        /,
        *,
        read_only: bool = False,
        **kwargs: VT,
    ) -> None:
        store: dict[KT, VT] = {}
        if data is not None:
            pairs = data.items() if isinstance(data, Mapping) else data
            for key, value in pairs:
                if key in store:
                    raise DuplicateKeyError(key)
                store[key] = value
        for key, value in kwargs.items():
            if key in store:
                raise DuplicateKeyError(key)
            store[key] = value
        self._init_notifier(store, read_only)

    @property
    def _data(self) -> dict[KT, VT]:
        return _anchor.backing[self._id]

    # --- Read operations ---

    def __getitem__(self, key: KT) -> VT:
        try:
            return self._data[key]
        except KeyError:
            raise KeyNotFoundError(key) from None

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[KT]:
        return iter(self._data)

    @property
    def count(self) -> int:
        return len(self._data)

    def contains_key(self, key: KT) -> bool:
        return key in self._data

    def try_get(self, key: KT) -> tuple[bool, VT | None]:
        """Return (True, value) if key is present, else (False, None)."""
        data = self._data
        if key in data:
            return True, data[key]
        return False, None

    def keys(self):
        return self._data.keys()

    def values(self):
        return self._data.values()

    def items(self):
        return self._data.items()

    def index_of(self, key: KT) -> int:
        """Rank of key in iteration order, or -1."""
        for index, candidate in enumerate(self._data):
            if candidate is key or candidate == key:
                return index
        return -1

    def copy_to(self, target: list, index: int = 0) -> None:
        """Write the (key, value) pairs into target starting at index."""
        if target is None:
            raise InvalidArgumentError("target must not be None")
        if index < 0 or index > len(self._data):
            raise IndexError(index)
        for offset, pair in enumerate(self._data.items()):
            target[index + offset] = pair

    # --- Write operations (notify) ---

    def add(self, key: KT, value: VT) -> None:
        """Add a new key. Raises DuplicateKeyError if key is already present."""
        with self._mutation():
            if key in self._data:
                raise DuplicateKeyError(key)
            self._insert(key, value)

    def __setitem__(self, key: KT, value: VT) -> None:
        with self._mutation():
            data = self._data
            if key not in data:
                self._insert(key, value)
                return
            old = data[key]
            data[key] = value
            self._notify(
                CollectionChangedEvent.replaced((key, value), (key, old), self.index_of(key)),
                COUNT, INDEXER, VALUES,
            )

    def remove(self, key: KT) -> bool:
        """Remove key. Returns False, without notifying, if it was absent."""
        with self._mutation():
            data = self._data
            if key not in data:
                return False
            index = self.index_of(key)
            value = data.pop(key)
            self._notify(
                CollectionChangedEvent.removed(((key, value),), index),
                COUNT, INDEXER, KEYS, VALUES,
            )
            return True

    def __delitem__(self, key: KT) -> None:
        if not self.remove(key):
            raise KeyNotFoundError(key)

    def clear(self) -> None:
        with self._mutation():
            self._data.clear()
            self._notify(CollectionChangedEvent.reset(), COUNT, INDEXER, KEYS, VALUES)

    def _insert(self, key: KT, value: VT) -> None:
        # Caller holds the mutation guard and has checked key is absent.
        data = self._data
        data[key] = value
        self._notify(
            CollectionChangedEvent.added(((key, value),), len(data) - 1),
            COUNT, INDEXER, KEYS, VALUES,
        )

    def __repr__(self) -> str:
        return f"ObservableDictionary({self._data!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ObservableDictionary):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other.items())
        return NotImplemented
