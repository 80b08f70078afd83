"""Dependency discovery — which top-level fields does a selector read?

select() runs its selector once against a view of the state that records
every top-level field name accessed and delegates the read to the real
state. Tracking is shallow: the view hands out the real nested values, so
reads below the top level are invisible to it.

A state is either a Mapping (fields are keys) or an attribute record
(dataclass fields, or vars() of a plain object). Methods and properties of
an attribute record run against the view, so the fields they read count.

The mapping view is a Mapping, not a dict: it supports copy() and the |
operator, but isinstance(view, dict) is False and dict-only methods that
mutate are absent.
"""

from __future__ import annotations

import dataclasses
import inspect
import types
from collections.abc import Hashable, Iterator, Mapping
from typing import Any, Callable, TypeVar

V = TypeVar("V")


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


# Returned by read_field() for a field the state doesn't have.
MISSING: Any = _Missing()


def field_names(state: object) -> list[Hashable]:
    """Own top-level field names of a state, in definition/insertion order."""
    if isinstance(state, Mapping):
        return list(state.keys())
    if dataclasses.is_dataclass(state) and not isinstance(state, type):
        return [f.name for f in dataclasses.fields(state)]
    try:
        return list(vars(state))
    except TypeError:
        raise TypeError(
            f"state must be a mapping or an attribute record, got {type(state).__name__}"
        ) from None


def read_field(state: object, name: Hashable) -> Any:
    if isinstance(state, Mapping):
        return state.get(name, MISSING)
    return getattr(state, name, MISSING)


class _MappingView(Mapping):
    """Read-only mapping facade that records which keys get read."""

    __slots__ = ("_target", "_reads")

    def __init__(self, target: Mapping, reads: dict) -> None:
        self._target = target
        self._reads = reads

    def __getitem__(self, key):
        value = self._target[key]
        self._reads[key] = None
        return value

    def get(self, key, default=None):
        if key in self._target:
            return self[key]
        return default

    def __contains__(self, key) -> bool:
        return key in self._target

    def __iter__(self) -> Iterator:
        return iter(self._target)

    def __len__(self) -> int:
        return len(self._target)

    # dict conveniences; each reads every key.
    def copy(self) -> dict:
        return dict(self.items())

    def __or__(self, other):
        if not isinstance(other, Mapping):
            return NotImplemented
        return {**self, **other}

    def __ror__(self, other):
        if not isinstance(other, Mapping):
            return NotImplemented
        return {**other, **self}

    def __repr__(self) -> str:
        return f"<tracking {self._target!r}>"


class _AttributeView:
    """Read-only attribute facade that records which fields get read."""

    __slots__ = ("_target", "_reads", "_fields")

    def __init__(self, target: object, reads: dict) -> None:
        object.__setattr__(self, "_target", target)
        object.__setattr__(self, "_reads", reads)
        object.__setattr__(self, "_fields", frozenset(field_names(target)))

    def __getattr__(self, name: str) -> Any:
        if name in self._fields:
            value = getattr(self._target, name)
            self._reads[name] = None
            return value

        # Methods and properties run against the view so their field reads count.
        attr = inspect.getattr_static(type(self._target), name, None)
        if isinstance(attr, (types.FunctionType, property)):
            return attr.__get__(self, type(self._target))
        return getattr(self._target, name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"cannot assign {name!r}: state is read-only inside a selector")

    def __repr__(self) -> str:
        return f"<tracking {self._target!r}>"


def track_reads(selector: Callable[[Any], V], state: object) -> tuple[V, tuple[Hashable, ...]]:
    """Call selector(state) once, observing its top-level reads.

    Returns the selector's result and the field names it read, in first-read
    order. If the selector hands back the view itself, the real state is
    returned in its place so the view never outlives the call.
    """
    reads: dict[Hashable, None] = {}
    if isinstance(state, Mapping):
        view: object = _MappingView(state, reads)
    else:
        view = _AttributeView(state, reads)

    value = selector(view)
    if value is view:
        value = state
    return value, tuple(reads)
