"""ObservableCollection — a list that reports every change, with batched ranges.

Single-item mutations send one collection notification each. add_range()
and remove_range() send exactly one for the whole batch, so a bound view
redraws once instead of once per element.

All state lives in _anchor — instances are thin handles holding an _id.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableSequence
from typing import Generic, TypeVar

from bindkit import _anchor
from bindkit.errors import InvalidArgumentError
from bindkit.events import COUNT, INDEXER, CollectionChangedEvent
from bindkit.notifier import ChangeNotifier

T = TypeVar("T")


class ObservableCollection(ChangeNotifier, MutableSequence, Generic[T]):
    """An ordered sequence with change notification and batched range operations.

    Usage:
        items = ObservableCollection(["a"])
        items.collection_changed.subscribe(lambda sender, e: print(e.action, e.new_items))

        items.add_range(["b", "c"])   # one ADD carrying ("b", "c")
        items[0] = "z"                # REPLACE
        items.remove_range(["b"])     # one REMOVE carrying ("b",)
    """

    __slots__ = ()

    def __init__(self, items: Iterable[T] | None = None, *, read_only: bool = False) -> None:
        self._init_notifier(list(items) if items is not None else [], read_only)

    @property
    def _items(self) -> list[T]:
        return _anchor.backing[self._id]

    def _normalize(self, index: int) -> int:
        if isinstance(index, slice):
            raise InvalidArgumentError("slice assignment and deletion are not supported")
        size = len(self._items)
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError("ObservableCollection index out of range")
        return index

    # --- Read operations ---

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    # --- Write operations (notify) ---

    def insert(self, index: int, item: T) -> None:
        with self._mutation():
            items = self._items
            size = len(items)
            if index < 0:
                index = max(0, index + size)
            index = min(index, size)
            items.insert(index, item)
            self._notify(CollectionChangedEvent.added((item,), index), COUNT, INDEXER)

    def add(self, item: T) -> None:
        self.insert(len(self._items), item)

    def __setitem__(self, index: int, item: T) -> None:
        with self._mutation():
            index = self._normalize(index)
            items = self._items
            old = items[index]
            items[index] = item
            self._notify(CollectionChangedEvent.replaced(item, old, index), INDEXER)

    def remove_at(self, index: int) -> T:
        with self._mutation():
            index = self._normalize(index)
            item = self._items.pop(index)
            self._notify(CollectionChangedEvent.removed((item,), index), COUNT, INDEXER)
            return item

    def __delitem__(self, index: int) -> None:
        self.remove_at(index)

    def pop(self, index: int = -1) -> T:
        return self.remove_at(index)

    def remove(self, item: T) -> None:
        """Remove the first occurrence of item. Raises ValueError if absent."""
        with self._mutation():
            items = self._items
            index = items.index(item)
            del items[index]
            self._notify(CollectionChangedEvent.removed((item,), index), COUNT, INDEXER)

    def move(self, old_index: int, new_index: int) -> None:
        """Move the item at old_index so that it ends up at new_index."""
        with self._mutation():
            old_index = self._normalize(old_index)
            new_index = self._normalize(new_index)
            items = self._items
            item = items.pop(old_index)
            items.insert(new_index, item)
            self._notify(CollectionChangedEvent.moved(item, new_index, old_index), INDEXER)

    def clear(self) -> None:
        with self._mutation():
            self._items.clear()
            self._notify(CollectionChangedEvent.reset(), COUNT, INDEXER)

    # --- Range operations (one notification per batch) ---

    def add_range(self, items: Iterable[T]) -> None:
        """Append all items, announcing them as a single ADD.

        An empty batch is a no-op; None is an error.
        """
        if items is None:
            raise InvalidArgumentError("items must not be None")
        batch = list(items)
        if not batch:
            return
        with self._mutation():
            store = self._items
            start = len(store)
            store.extend(batch)
            self._notify(CollectionChangedEvent.added(batch, start), COUNT, INDEXER)

    def remove_range(self, items: Iterable[T]) -> None:
        """Remove the first match of each item, announcing them as a single REMOVE.

        Items that are not present are skipped. The event carries only the
        items that were removed, and nothing is sent if none were, so a
        non-empty batch can produce zero notifications.
        """
        if items is None:
            raise InvalidArgumentError("items must not be None")
        batch = list(items)
        if not batch:
            return
        with self._mutation():
            store = self._items
            removed = []
            for item in batch:
                if item in store:
                    store.remove(item)
                    removed.append(item)
            if removed:
                self._notify(CollectionChangedEvent.removed(removed), COUNT, INDEXER)

    extend = add_range

    def __repr__(self) -> str:
        return f"ObservableCollection({self._items!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObservableCollection):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented
