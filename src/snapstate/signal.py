"""Signal — a cached, selector-derived view over a Store's state.

Signals are created by Store.select(). The Store calls notify() with the
new state whenever one of the fields the selector read at creation time
changes (or on any change, for selectors that read no field). notify()
recomputes the value and, if it differs under the configured equality
mode, caches it and calls the subscribers.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Callable, Generic, TypeVar

from snapstate.emitter import Disposer
from snapstate.equality import EqualityMode, same_value, shallow_equal

S = TypeVar("S")
V = TypeVar("V")

logger = logging.getLogger("snapstate.signal")


class Signal(Generic[S, V]):
    """A selected value that notifies its subscribers when it changes."""

    __slots__ = (
        "_value",
        "_selector",
        "_equality",
        "_dependency_keys",
        "_subscribers",
        "_registrations",
        "_disposed",
    )

    def __init__(
        self,
        initial_value: V,
        selector: Callable[[S], V],
        equality: EqualityMode,
        dependency_keys: tuple[Hashable, ...] = (),
    ) -> None:
        self._value = initial_value
        self._selector = selector
        self._equality = equality
        self._dependency_keys = frozenset(dependency_keys)
        self._subscribers: list[Callable[[], None]] = []
        self._registrations: list[Disposer] = []
        self._disposed = False

    def value(self) -> V:
        """The cached value. Never recomputes."""
        return self._value

    @property
    def equality(self) -> EqualityMode:
        return self._equality

    @property
    def dependency_keys(self) -> frozenset:
        """Top-level fields the selector read. Empty means the whole state."""
        return self._dependency_keys

    @property
    def disposed(self) -> bool:
        return self._disposed

    def subscribe(self, listener: Callable[[], None]) -> Disposer:
        """Call listener (no arguments) each time the value changes.

        The same listener may be added more than once. Returns a function
        that removes this subscription; callers are free to ignore it.
        """
        self._subscribers.append(listener)

        def _unsubscribe() -> None:
            try:
                self._subscribers.remove(listener)
            except ValueError:
                pass  # already removed

        return _unsubscribe

    def notify(self, new_state: S) -> None:
        """Recompute from new_state; cache and fan out if the value changed.

        Called by the owning Store's dispatch, not by consumers.
        """
        if self._disposed:
            return

        old_value = self._value
        new_value = self._selector(new_state)

        if self._equality is EqualityMode.IDENTITY:
            unchanged = same_value(old_value, new_value)
        else:
            unchanged = shallow_equal(old_value, new_value)
        if unchanged:
            return

        self._value = new_value
        for listener in list(self._subscribers):
            listener()

    def _attach(self, disposer: Disposer) -> None:
        """Remember a Store registration so dispose() can remove it."""
        self._registrations.append(disposer)

    def dispose(self) -> None:
        """Detach from the Store and drop all subscribers. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        for disposer in self._registrations:
            disposer()
        self._registrations.clear()
        self._subscribers.clear()
        logger.debug("Disposed signal %r", self)

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else f"value={self._value!r}"
        return f"Signal({getattr(self._selector, '__name__', 'selector')}, {state})"
