"""bindkit: change-notifying containers and helpers for data-binding UIs."""

from importlib.metadata import version as _version

__version__ = _version("bindkit")

from bindkit.errors import (
    BindkitError,
    DisposedError,
    DuplicateKeyError,
    InvalidArgumentError,
    KeyNotFoundError,
    ReadOnlyError,
    ReentrancyError,
)
from bindkit.events import CollectionChangeAction, CollectionChangedEvent
from bindkit.notifier import ChangeNotifier, Event
from bindkit.dictionary import ObservableDictionary
from bindkit.collection import ObservableCollection
from bindkit.proxy import FieldAccessor, NotifyingProxy
from bindkit.debounce import Debouncer
# textual NOT auto-imported — opt-in only

__all__ = [
    "ObservableDictionary",
    "ObservableCollection",
    "CollectionChangeAction",
    "CollectionChangedEvent",
    "ChangeNotifier",
    "Event",
    "NotifyingProxy",
    "FieldAccessor",
    "Debouncer",
    "BindkitError",
    "ReentrancyError",
    "ReadOnlyError",
    "DuplicateKeyError",
    "KeyNotFoundError",
    "InvalidArgumentError",
    "DisposedError",
]
