"""Store — a single replace-on-write state value with change notifications.

Every set() replaces the state wholesale, then emits one generic change
event followed by one event per top-level field whose value differs from
the previous state. Signals created by select() listen only to the events
for the fields their selector read.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
from collections.abc import Hashable, Mapping
from typing import Any, Callable, Generic, TypeVar

from snapstate._tracking import field_names, read_field, track_reads
from snapstate.emitter import EventEmitter
from snapstate.equality import DEFAULT_EQUALITY, EqualityMode, resolve_mode, same_value
from snapstate.signal import Signal

S = TypeVar("S")
V = TypeVar("V")

logger = logging.getLogger("snapstate.store")

# Event keys. Field events are tuples so field names of any hashable type
# can't collide with each other or with the generic event.
CHANGE = ("change",)


def field_event(name: Hashable) -> tuple:
    return ("change", name)


class Store(Generic[S]):
    """Owner of one immutable-by-convention state value.

    Usage:
        store = Store({"count": 0, "label": "clicks"})
        count = store.select(lambda s: s["count"])
        count.subscribe(lambda: print(count.value()))
        store.set(lambda s: {**s, "count": s["count"] + 1})  # prints 1
        store.update(label="taps")  # count's subscribers are not called
    """

    def __init__(self, initial_state: S) -> None:
        field_names(initial_state)  # rejects unsupported shapes early
        self._state = initial_state
        self._events = EventEmitter()

    @property
    def state(self) -> S:
        return self._state

    def select(
        self,
        selector: Callable[[S], V],
        *,
        equality: EqualityMode | str = DEFAULT_EQUALITY,
    ) -> Signal[S, V]:
        """Create a Signal over selector(state).

        The selector runs once here against a read-tracking view; the fields
        it reads decide which changes the Signal listens to. A selector that
        reads no field listens to every change.
        """
        mode = resolve_mode(equality)
        initial_value, keys = track_reads(selector, self._state)
        signal: Signal[S, V] = Signal(initial_value, selector, mode, keys)

        def _notify() -> None:
            signal.notify(self._state)

        if not keys:
            signal._attach(self._events.on(CHANGE, _notify))
        for key in keys:
            signal._attach(self._events.on(field_event(key), _notify))

        logger.debug(
            "Registered signal %r on %s (%s)",
            signal, list(keys) or "<any>", mode.value,
        )
        return signal

    def set(self, updater: Callable[[S], S]) -> None:
        """Replace the state with updater(state) and notify.

        If updater raises, nothing changes and nothing is notified. If
        listeners raise, the rest of the cascade still runs and the
        failures are raised together as a DispatchError.
        """
        old_state = self._state
        new_state = updater(old_state)
        names = field_names(new_state)
        self._state = new_state

        changed = [
            name
            for name in names
            if not same_value(read_field(new_state, name), read_field(old_state, name))
        ]
        logger.debug("State replaced; changed fields: %s", changed)

        # One dispatch: Signals selected by a listener sit out this cascade.
        self._events.emit_many([CHANGE] + [field_event(name) for name in changed])

    def update(self, **changes: Any) -> None:
        """set() shorthand: replace the given top-level fields."""
        self.set(lambda state: _replace_fields(state, changes))

    def __repr__(self) -> str:
        return f"Store({self._state!r})"


def _replace_fields(state: Any, changes: dict[str, Any]) -> Any:
    if isinstance(state, Mapping):
        return {**state, **changes}
    if dataclasses.is_dataclass(state) and not isinstance(state, type):
        return dataclasses.replace(state, **changes)
    new_state = copy.copy(state)
    for name, value in changes.items():
        setattr(new_state, name, value)
    return new_state
