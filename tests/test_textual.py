"""Tests for bindkit.textual — Textual integration layer."""

import threading

import pytest
from textual.css.query import NoMatches

from bindkit import CollectionChangeAction, ObservableCollection, ObservableDictionary
from bindkit import textual as btx


class _MockApp:
    """Minimal mock matching the Textual App interface btx needs."""

    def __init__(self, *, is_running=True):
        self.is_running = is_running
        self._call_from_thread_log = []

    def call_from_thread(self, fn, *args):
        self._call_from_thread_log.append((fn, args))
        fn(*args)


class TestBind:
    def test_skips_when_not_running(self):
        app = _MockApp(is_running=False)
        items = ObservableCollection()
        effects = []
        btx.bind(app, items, effects.append)
        items.append(1)
        assert effects == []

    def test_skips_during_pause(self):
        app = _MockApp()
        items = ObservableCollection()
        effects = []
        btx.bind(app, items, effects.append)
        with btx.pause(app):
            items.append(1)
        assert effects == []

    def test_fires_when_safe(self):
        app = _MockApp()
        items = ObservableCollection()
        effects = []
        btx.bind(app, items, effects.append)
        items.add_range([1, 2])
        assert len(effects) == 1
        assert effects[0].action is CollectionChangeAction.ADD
        assert effects[0].new_items == (1, 2)

    def test_catches_nomatch(self):
        """NoMatches from widget queries are silently swallowed."""
        app = _MockApp()
        d = ObservableDictionary()

        def _raise_nomatch(event):
            raise NoMatches("ItemTable")

        # Should not raise
        btx.bind(app, d, _raise_nomatch)
        d.add("a", 1)
        assert d.is_being_modified is False

    def test_propagates_real_errors(self):
        """Non-NoMatches exceptions propagate normally."""
        app = _MockApp()
        d = ObservableDictionary()

        def _raise_value_error(event):
            raise ValueError("boom")

        btx.bind(app, d, _raise_value_error)
        with pytest.raises(ValueError, match="boom"):
            d.add("a", 1)

    def test_dispose_stops_binding(self):
        app = _MockApp()
        items = ObservableCollection()
        effects = []
        dispose = btx.bind(app, items, effects.append)
        items.append(1)
        dispose()
        items.append(2)
        assert len(effects) == 1

    def test_thread_marshal(self):
        """Changes made on a background thread use call_from_thread."""
        app = _MockApp()
        items = ObservableCollection()
        effects = []
        btx.bind(app, items, effects.append)

        t = threading.Thread(target=lambda: items.append(1))
        t.start()
        t.join()

        assert len(effects) == 1
        assert len(app._call_from_thread_log) == 1


class TestBindProperty:
    def test_only_named_property(self):
        app = _MockApp()
        d = ObservableDictionary()
        seen = []
        btx.bind_property(app, d, "count", seen.append)
        d.add("a", 1)
        d["a"] = 2
        d.remove("a")
        assert seen == ["count", "count", "count"]

    def test_skips_during_pause(self):
        app = _MockApp()
        d = ObservableDictionary()
        seen = []
        btx.bind_property(app, d, "keys", seen.append)
        with btx.pause(app):
            d.add("a", 1)
        assert seen == []


class TestPause:
    def test_pause_restores_on_exception(self):
        app = _MockApp()
        assert btx.is_safe(app)

        with pytest.raises(RuntimeError):
            with btx.pause(app):
                assert not btx.is_safe(app)
                raise RuntimeError("oops")

        # Restored despite exception
        assert btx.is_safe(app)

    def test_pause_does_not_mutate_app(self):
        """Pause state lives in the module, not on the app."""
        app = _MockApp()
        attrs_before = set(vars(app))
        with btx.pause(app):
            attrs_during = set(vars(app))
        assert attrs_before == attrs_during

    def test_multiple_apps_independent(self):
        """Pausing one app does not affect another."""
        app_a = _MockApp()
        app_b = _MockApp()
        with btx.pause(app_a):
            assert not btx.is_safe(app_a)
            assert btx.is_safe(app_b)
