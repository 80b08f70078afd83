"""snapstate: replace-on-write state with field-scoped selector signals."""

from importlib.metadata import version as _version

__version__ = _version("snapstate")

from snapstate.equality import EqualityMode, same_value, shallow_equal
from snapstate.emitter import DispatchError, EventEmitter
from snapstate.signal import Signal
from snapstate.store import Store
from snapstate.result import Ok, Err, Result, attempt, either, map_result, unwrap, unwrap_error
# textual NOT auto-imported — opt-in only

__all__ = [
    "Store",
    "Signal",
    "EqualityMode",
    "same_value",
    "shallow_equal",
    "EventEmitter",
    "DispatchError",
    "Ok",
    "Err",
    "Result",
    "attempt",
    "either",
    "map_result",
    "unwrap",
    "unwrap_error",
]
