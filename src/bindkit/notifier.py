"""Change notification contract shared by the observable containers.

Two events per container:

- property_changed: handler(sender, name) where name is one of
  bindkit.events.COUNT / INDEXER / KEYS / VALUES.
- collection_changed: handler(sender, event) with a CollectionChangedEvent.

Dispatch is synchronous, in subscription order. For one mutation every
property notification is sent before the collection notification, and all
of them before the mutating call returns.

Reentrancy: while a mutation is notifying, any other mutating call on the
same container raises ReentrancyError. The guard is released on every exit
path, including when a handler raises.
"""

from __future__ import annotations

import logging
import weakref
from contextlib import contextmanager
from typing import Callable, Generic, Iterator, TypeVar

from bindkit import _anchor
from bindkit.errors import InvalidArgumentError, ReadOnlyError, ReentrancyError
from bindkit.events import CollectionChangedEvent

logger = logging.getLogger("bindkit.notifier")

A = TypeVar("A")

Disposer = Callable[[], None]


class Event(Generic[A]):
    """Multi-subscriber synchronous event."""

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: list[Callable[[object, A], None]] = []

    def subscribe(self, handler: Callable[[object, A], None]) -> Disposer:
        """Register a handler. Returns a function that removes it."""
        if not callable(handler):
            raise InvalidArgumentError("handler must be callable")
        self._handlers.append(handler)

        def _unsubscribe() -> None:
            self.unsubscribe(handler)

        return _unsubscribe

    def unsubscribe(self, handler: Callable[[object, A], None]) -> None:
        try:
            self._handlers.remove(handler)
        except ValueError:
            pass  # already removed

    def emit(self, sender: object, arg: A) -> None:
        # Snapshot — handlers may unsubscribe while we dispatch.
        for handler in list(self._handlers):
            handler(sender, arg)

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"Event({len(self._handlers)} handlers)"


class ChangeNotifier:
    """Mixin implementing property/collection change notification with a reentrancy guard.

    Subclasses call _init_notifier() from __init__ with their backing store.
    """

    __slots__ = ("_id", "property_changed", "collection_changed", "__weakref__")

    def _init_notifier(self, store: object, read_only: bool) -> None:
        self._id = _anchor.new_id()
        _anchor.register(self._id, store, bool(read_only))
        weakref.finalize(self, _anchor.release, self._id)
        self.property_changed: Event[str] = Event()
        self.collection_changed: Event[CollectionChangedEvent] = Event()

    @property
    def is_being_modified(self) -> bool:
        """True while a mutation is committing or notifying."""
        return _anchor.modifying[self._id]

    @property
    def read_only(self) -> bool:
        return _anchor.read_only[self._id]

    @read_only.setter
    def read_only(self, value: bool) -> None:
        _anchor.read_only[self._id] = bool(value)

    def _check_reentrancy(self) -> None:
        if _anchor.modifying[self._id]:
            logger.debug("Rejected reentrant mutation of %s#%d", type(self).__name__, self._id)
            raise ReentrancyError()

    def _check_read_only(self) -> None:
        if _anchor.read_only[self._id]:
            logger.debug("Rejected mutation of read-only %s#%d", type(self).__name__, self._id)
            raise ReadOnlyError()

    @contextmanager
    def _mutation(self) -> Iterator[None]:
        """Hold the mutation guard for a commit and its notifications."""
        self._check_reentrancy()
        self._check_read_only()
        _anchor.modifying[self._id] = True
        try:
            yield
        finally:
            _anchor.modifying[self._id] = False

    def _on_property_changed(self, name: str) -> None:
        if not name or not name.strip():
            raise InvalidArgumentError("property name must not be empty")
        self.property_changed.emit(self, name)

    def _on_collection_changed(self, event: CollectionChangedEvent) -> None:
        self.collection_changed.emit(self, event)

    def _notify(self, event: CollectionChangedEvent, *properties: str) -> None:
        """Announce a committed mutation: properties first, then the structural event."""
        for name in properties:
            self._on_property_changed(name)
        self._on_collection_changed(event)
