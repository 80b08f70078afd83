"""Equality gates used by Signals before notifying subscribers.

same_value() is identity comparison, except that immutable scalars compare
by value (so two equal ints produced by separate computations are "the same").
shallow_equal() goes one level into mappings, sequences and attribute
records, comparing their members with same_value().
"""

from __future__ import annotations

import dataclasses
import enum
import math
from collections.abc import Mapping
from typing import Any

_SCALARS = (type(None), bool, int, float, complex, str, bytes)


class EqualityMode(str, enum.Enum):
    """How a Signal decides that its recomputed value is unchanged."""

    SHALLOW = "shallow"
    IDENTITY = "identity"


DEFAULT_EQUALITY = EqualityMode.SHALLOW


def resolve_mode(mode: EqualityMode | str) -> EqualityMode:
    try:
        return EqualityMode(mode)
    except ValueError:
        raise ValueError(
            f"unknown equality mode {mode!r}, expected one of "
            f"{[m.value for m in EqualityMode]}"
        ) from None


def same_value(a: Any, b: Any) -> bool:
    if a is b:
        return True
    if type(a) is not type(b) or not isinstance(a, _SCALARS):
        return False
    if isinstance(a, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b


def _record_fields(obj: Any) -> dict[str, Any] | None:
    """Own fields of an attribute record, or None if obj isn't one."""
    if isinstance(obj, type) or callable(obj):
        return None
    if dataclasses.is_dataclass(obj):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    try:
        return dict(vars(obj))
    except TypeError:
        return None


def shallow_equal(a: Any, b: Any) -> bool:
    """One-level structural equality. Members are compared with same_value()."""
    if same_value(a, b):
        return True

    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if len(a) != len(b):
            return False
        for key, value in a.items():
            if key not in b or not same_value(value, b[key]):
                return False
        return True

    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if type(a) is not type(b) or len(a) != len(b):
            return False
        return all(same_value(x, y) for x, y in zip(a, b))

    if type(a) is type(b) and not isinstance(a, _SCALARS):
        fields_a = _record_fields(a)
        fields_b = _record_fields(b)
        if fields_a is None or fields_b is None:
            return False
        return shallow_equal(fields_a, fields_b)

    return False
