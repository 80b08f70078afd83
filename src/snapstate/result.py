"""Ok/Err values for callers that would rather inspect a failure than catch it.

Usage:
    result = attempt(store.set, lambda s: {**s, "count": parse(text)})
    either(result, lambda _: log.append("saved"), lambda err: log.append(str(err)))
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
R = TypeVar("R")
RE = TypeVar("RE")


class UnwrapError(Exception):
    """Raised when a Result doesn't hold what the caller asked for."""


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E
    ok: bool = field(default=False, init=False)


Result = Union[Ok[T], Err[E]]


def unwrap(result: Result[T, Any]) -> T:
    """Return the value of an Ok, or raise the error of an Err."""
    if isinstance(result, Ok):
        return result.value
    if isinstance(result.error, BaseException):
        raise result.error
    raise UnwrapError(f"Expected a value, but got error {result.error!r}")


def unwrap_error(result: Result[Any, E]) -> E:
    if isinstance(result, Err):
        return result.error
    raise UnwrapError(f"Expected an error, but got {result.value!r}")


def either(
    result: Result[T, E],
    on_ok: Callable[[T], Any],
    on_error: Callable[[E], Any],
) -> None:
    if isinstance(result, Ok):
        on_ok(result.value)
    else:
        on_error(result.error)


def map_result(
    result: Result[T, E],
    on_ok: Callable[[T], R],
    on_error: Callable[[E], RE],
) -> Result[R, RE]:
    """Map the value or the error, keeping the Ok/Err side."""
    if isinstance(result, Ok):
        return Ok(on_ok(result.value))
    return Err(on_error(result.error))


def attempt(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T, Exception]:
    """Call fn, capturing a raised Exception as an Err."""
    try:
        return Ok(fn(*args, **kwargs))
    except Exception as exc:
        return Err(exc)


async def from_awaitable(awaitable: Awaitable[T]) -> Result[T, Exception]:
    """Await, capturing a raised Exception as an Err."""
    try:
        return Ok(await awaitable)
    except Exception as exc:
        return Err(exc)


async def _settle(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def await_result(result: Result[Any, Any] | Awaitable[Result[Any, Any]]) -> Result[Any, Any]:
    """Await a result (if needed) and the value or error inside it."""
    result = await _settle(result)
    if isinstance(result, Ok):
        return Ok(await _settle(result.value))
    return Err(await _settle(result.error))


async def map_async(
    result: Result[Any, Any] | Awaitable[Result[Any, Any]],
    on_ok: Callable[[Any], Any],
    on_error: Callable[[Any], Any],
) -> Result[Any, Any]:
    """map_result() where the result, its contents and the mappers may be async."""
    result = await await_result(result)
    if isinstance(result, Ok):
        return Ok(await _settle(on_ok(result.value)))
    return Err(await _settle(on_error(result.error)))


async def map_awaitable(
    awaitable: Awaitable[T],
    on_ok: Callable[[T], Any],
    on_error: Callable[[Exception], Any],
) -> Result[Any, Any]:
    """Await, then map the value or the raised Exception."""
    return await map_async(from_awaitable(awaitable), on_ok, on_error)
