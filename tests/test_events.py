"""Tests for CollectionChangedEvent."""

import dataclasses

import pytest

from bindkit import CollectionChangeAction, CollectionChangedEvent, InvalidArgumentError


class TestShape:
    def test_reset_has_no_items(self):
        e = CollectionChangedEvent.reset()
        assert e.action is CollectionChangeAction.RESET
        assert e.new_items == ()
        assert e.old_items == ()
        assert e.starting_index == -1

    def test_reset_with_items_rejected(self):
        with pytest.raises(InvalidArgumentError):
            CollectionChangedEvent(CollectionChangeAction.RESET, new_items=(1,))

    def test_add_requires_new_items(self):
        with pytest.raises(InvalidArgumentError):
            CollectionChangedEvent(CollectionChangeAction.ADD)
        with pytest.raises(InvalidArgumentError):
            CollectionChangedEvent(CollectionChangeAction.ADD, new_items=(1,), old_items=(2,))

    def test_remove_requires_old_items(self):
        with pytest.raises(InvalidArgumentError):
            CollectionChangedEvent(CollectionChangeAction.REMOVE, new_items=(1,))

    def test_replace_requires_both(self):
        with pytest.raises(InvalidArgumentError):
            CollectionChangedEvent(CollectionChangeAction.REPLACE, new_items=(1,))

    def test_payloads_stored_as_tuples(self):
        e = CollectionChangedEvent.added([1, 2], 0)
        assert e.new_items == (1, 2)

    def test_frozen(self):
        e = CollectionChangedEvent.added([1])
        with pytest.raises(dataclasses.FrozenInstanceError):
            e.action = CollectionChangeAction.REMOVE


class TestStartingIndex:
    def test_remove_uses_old_index(self):
        e = CollectionChangedEvent.removed(["x"], 3)
        assert e.starting_index == 3
        assert e.new_starting_index == -1

    def test_replace_sets_both(self):
        e = CollectionChangedEvent.replaced("new", "old", 2)
        assert e.new_starting_index == e.old_starting_index == 2

    def test_move(self):
        e = CollectionChangedEvent.moved("x", new_index=4, old_index=1)
        assert e.starting_index == 4
        assert e.old_starting_index == 1
