"""Data anchor — plain Python structures that hold all container state.

Containers are thin handles holding an _id; their backing store and flags
live here. Separating data from behavior keeps the handles slotted and
lets a finalizer drop an instance's state when the handle is collected.
"""

import itertools

backing: dict[int, object] = {}  # container id -> dict or list
modifying: dict[int, bool] = {}
read_only: dict[int, bool] = {}

# One counter for every container; ids are never reused within a process.
_id_counter = itertools.count(1)


def new_id() -> int:
    return next(_id_counter)


def register(obj_id: int, store: object, readonly: bool) -> None:
    backing[obj_id] = store
    modifying[obj_id] = False
    read_only[obj_id] = readonly


def release(obj_id: int) -> None:
    """Drop everything held for obj_id. Called when its handle is collected."""
    backing.pop(obj_id, None)
    modifying.pop(obj_id, None)
    read_only.pop(obj_id, None)
