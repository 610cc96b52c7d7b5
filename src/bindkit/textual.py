"""Textual integration for bindkit. Opt-in — requires textual.

Connects container notifications to widgets of a Textual app. The guard,
NoMatches handling and thread marshaling live here, not at callsites, and
Textual coupling stays in this module — the containers know nothing of it.
"""

import logging
import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

logger = logging.getLogger("bindkit.textual")

# Module-owned pause state — keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend bound handlers during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def _guard(app, handler):
    """Wrap handler(arg) so it only runs while app is safe, on app's thread."""
    _main = threading.get_ident()

    def _guarded(arg):
        if not is_safe(app):
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe, arg)
        else:
            _safe(arg)

    def _safe(arg):
        try:
            handler(arg)
        except NoMatches:
            logger.debug("Bound handler %r found no widget; skipped", handler)

    return _guarded


def bind(app, source, handler):
    """Call handler(event) for every collection change of source.

    Returns a disposer that unsubscribes the handler.
    """
    guarded = _guard(app, handler)
    return source.collection_changed.subscribe(lambda sender, event: guarded(event))


def bind_property(app, source, name, handler):
    """Call handler(name) whenever property `name` of source changes.

    Returns a disposer that unsubscribes the handler.
    """
    guarded = _guard(app, handler)

    def _on_property(sender, changed):
        if changed == name:
            guarded(changed)

    return source.property_changed.subscribe(_on_property)
