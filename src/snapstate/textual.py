"""Textual integration for snapstate. Opt-in — requires textual.

Guard, NoMatches handling and thread marshaling live here so callsites
only say which Signal drives which widget update. Textual coupling stays
in this module; the core package doesn't import it.
"""

import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

# Module-owned pause state, keyed by id(app) so multiple apps work in tests.
# An id is present exactly while its app is inside a pause() block.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend guarded reactions during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def reaction(app, signal, effect_fn, *, fire_immediately=False):
    """Call effect_fn(signal.value()) on change, safely bridged to Textual.

    Skips while the app is paused or not running, swallows NoMatches from
    widget queries, and marshals calls made off the app thread through
    call_from_thread. Returns the subscription's disposer.
    """
    _main = threading.get_ident()

    def _guarded():
        if not is_safe(app):
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe)
        else:
            _safe()

    def _safe():
        try:
            effect_fn(signal.value())
        except NoMatches:
            pass

    dispose = signal.subscribe(_guarded)
    if fire_immediately:
        _guarded()
    return dispose
