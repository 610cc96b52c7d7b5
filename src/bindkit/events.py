"""Change event records shared by the observable containers.

A collection-changed notification carries one CollectionChangedEvent.
Property-changed notifications carry only a name — one of the constants
below.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from bindkit.errors import InvalidArgumentError

COUNT = "count"
INDEXER = "indexer"
KEYS = "keys"
VALUES = "values"


class CollectionChangeAction(enum.Enum):
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    RESET = "reset"


@dataclass(frozen=True)
class CollectionChangedEvent:
    """What changed in a collection.

    RESET carries no items: the whole container should be treated as
    invalidated. An index of -1 means the position is not known.
    """

    action: CollectionChangeAction
    new_items: tuple[Any, ...] = ()
    old_items: tuple[Any, ...] = ()
    new_starting_index: int = -1
    old_starting_index: int = -1

    def __post_init__(self) -> None:
        # Accept any iterable for the payloads but store tuples.
        object.__setattr__(self, "new_items", tuple(self.new_items))
        object.__setattr__(self, "old_items", tuple(self.old_items))

        action = self.action
        if action is CollectionChangeAction.RESET:
            if self.new_items or self.old_items:
                raise InvalidArgumentError("RESET events carry no items")
        elif action is CollectionChangeAction.ADD:
            if not self.new_items or self.old_items:
                raise InvalidArgumentError("ADD events carry new_items only")
        elif action is CollectionChangeAction.REMOVE:
            if not self.old_items or self.new_items:
                raise InvalidArgumentError("REMOVE events carry old_items only")
        elif not self.new_items or not self.old_items:
            raise InvalidArgumentError(f"{action.name} events carry new_items and old_items")

    @property
    def starting_index(self) -> int:
        if self.action is CollectionChangeAction.REMOVE:
            return self.old_starting_index
        return self.new_starting_index

    # --- Factories ---

    @classmethod
    def added(cls, items, index: int = -1) -> CollectionChangedEvent:
        return cls(CollectionChangeAction.ADD, new_items=items, new_starting_index=index)

    @classmethod
    def removed(cls, items, index: int = -1) -> CollectionChangedEvent:
        return cls(CollectionChangeAction.REMOVE, old_items=items, old_starting_index=index)

    @classmethod
    def replaced(cls, new_item, old_item, index: int = -1) -> CollectionChangedEvent:
        return cls(
            CollectionChangeAction.REPLACE,
            new_items=(new_item,),
            old_items=(old_item,),
            new_starting_index=index,
            old_starting_index=index,
        )

    @classmethod
    def moved(cls, item, new_index: int, old_index: int) -> CollectionChangedEvent:
        return cls(
            CollectionChangeAction.MOVE,
            new_items=(item,),
            old_items=(item,),
            new_starting_index=new_index,
            old_starting_index=old_index,
        )

    @classmethod
    def reset(cls) -> CollectionChangedEvent:
        return cls(CollectionChangeAction.RESET)
