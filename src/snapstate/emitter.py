"""Keyed listener registry — the dispatch layer under Store.

Listeners are registered per event key, either persistently (on) or for a
single delivery (once). Both registration calls return a disposer.
emit() works on a snapshot of the listener sets, so a listener added while
an event is being dispatched is not called by that dispatch.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import Any, Callable

Disposer = Callable[[], None]
Listener = Callable[..., Any]


class DispatchError(ExceptionGroup):
    """One or more listeners raised during a dispatch.

    The remaining listeners still ran; every failure is in .exceptions.
    """


class _Listeners:
    __slots__ = ("persistent", "once")

    def __init__(self) -> None:
        # dicts as insertion-ordered sets
        self.persistent: dict[Listener, None] = {}
        self.once: dict[Listener, None] = {}


class EventEmitter:
    """Calls listeners when events are emitted.

    Usage:
        emitter = EventEmitter()
        off = emitter.on("saved", lambda path: print(path))
        emitter.emit("saved", "/tmp/out.json")  # prints /tmp/out.json
        off()
    """

    def __init__(self) -> None:
        self._events: dict[Hashable, _Listeners] = {}

    def on(self, event: Hashable, listener: Listener) -> Disposer:
        """Add a listener. Returns a function that removes it."""
        self._events.setdefault(event, _Listeners()).persistent[listener] = None
        return lambda: self.off(event, listener)

    def once(self, event: Hashable, listener: Listener) -> Disposer:
        """Add a listener that is removed after its first delivery."""
        self._events.setdefault(event, _Listeners()).once[listener] = None
        return lambda: self.off(event, listener)

    def off(self, event: Hashable, listener: Listener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        listeners = self._events.get(event)
        if listeners is None:
            return
        listeners.persistent.pop(listener, None)
        listeners.once.pop(listener, None)
        if not listeners.persistent and not listeners.once:
            del self._events[event]

    def emit(self, event: Hashable, *args: Any) -> None:
        """Call every listener of event with args.

        Persistent listeners run first, then once-listeners, each group in
        registration order. A raising listener doesn't stop the others;
        failures are raised together as a DispatchError afterwards.
        """
        self.emit_many([event], *args)

    def emit_many(self, events: Iterable[Hashable], *args: Any) -> None:
        """Emit several events as one dispatch.

        Listener sets of all events are snapshotted before the first call,
        so a listener added by any of them isn't called by this dispatch.
        """
        calls = [listener for event in events for listener in self._take(event)]

        failures: list[Exception] = []
        for listener in calls:
            try:
                listener(*args)
            except Exception as exc:
                failures.append(exc)

        if failures:
            raise DispatchError(f"{len(failures)} listener(s) failed", failures)

    def _take(self, event: Hashable) -> list[Listener]:
        """Listeners to call for event; once-listeners are consumed."""
        listeners = self._events.get(event)
        if listeners is None:
            return []

        persistent = list(listeners.persistent)
        once = list(listeners.once)
        listeners.once.clear()
        if not listeners.persistent:
            self._events.pop(event, None)
        return persistent + once

    def listener_count(self, event: Hashable) -> int:
        listeners = self._events.get(event)
        if listeners is None:
            return 0
        return len(listeners.persistent) + len(listeners.once)

    def teardown(self) -> None:
        """Remove all listeners for all events."""
        self._events.clear()
