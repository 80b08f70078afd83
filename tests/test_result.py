"""Tests for Ok/Err result helpers."""

import asyncio

import pytest

from snapstate import Err, Ok, Store, attempt, either, map_result, unwrap, unwrap_error
from snapstate.result import UnwrapError, await_result, from_awaitable, map_async, map_awaitable


class TestUnwrap:
    def test_ok(self):
        assert unwrap(Ok(1)) == 1

    def test_err_exception_is_raised(self):
        with pytest.raises(ValueError, match="bad"):
            unwrap(Err(ValueError("bad")))

    def test_err_plain_value(self):
        with pytest.raises(UnwrapError, match="'nope'"):
            unwrap(Err("nope"))

    def test_unwrap_error(self):
        assert unwrap_error(Err("e")) == "e"
        with pytest.raises(UnwrapError, match="Expected an error"):
            unwrap_error(Ok(1))

    def test_flags(self):
        assert Ok(1).ok is True
        assert Err(1).ok is False


class TestEither:
    def test_routes(self):
        log = []
        either(Ok(1), lambda v: log.append(("ok", v)), lambda e: log.append(("err", e)))
        either(Err(2), lambda v: log.append(("ok", v)), lambda e: log.append(("err", e)))
        assert log == [("ok", 1), ("err", 2)]


class TestMapResult:
    def test_maps_value(self):
        assert map_result(Ok(2), lambda v: v * 10, str) == Ok(20)

    def test_maps_error(self):
        assert map_result(Err(ValueError("x")), lambda v: v, str) == Err("x")


class TestAttempt:
    def test_success(self):
        assert attempt(int, "7") == Ok(7)

    def test_failure(self):
        result = attempt(int, "seven")
        assert isinstance(result, Err)
        assert isinstance(result.error, ValueError)

    def test_wraps_store_set(self):
        store = Store({"count": 0})

        def parse(s):
            return {**s, "count": int("x")}

        result = attempt(store.set, parse)
        assert isinstance(unwrap_error(result), ValueError)
        assert store.state == {"count": 0}


class TestFromAwaitable:
    def test_success(self):
        async def work():
            return 5

        assert asyncio.run(from_awaitable(work())) == Ok(5)

    def test_failure(self):
        async def work():
            raise RuntimeError("down")

        result = asyncio.run(from_awaitable(work()))
        assert str(unwrap_error(result)) == "down"


class TestAsyncMapping:
    def test_await_result_settles_contents(self):
        async def five():
            return 5

        assert asyncio.run(await_result(Ok(five()))) == Ok(5)
        assert asyncio.run(await_result(Err("plain"))) == Err("plain")

    def test_map_async_accepts_awaitable_result_and_async_mapper(self):
        async def pending():
            return Ok(2)

        async def triple(v):
            return v * 3

        assert asyncio.run(map_async(pending(), triple, str)) == Ok(6)

    def test_map_async_error_side(self):
        result = asyncio.run(map_async(Err(KeyError("k")), lambda v: v, type))
        assert result == Err(KeyError)

    def test_map_awaitable(self):
        async def ok():
            return "a"

        async def fail():
            raise RuntimeError("down")

        assert asyncio.run(map_awaitable(ok(), str.upper, str)) == Ok("A")
        assert asyncio.run(map_awaitable(fail(), str.upper, str)) == Err("down")
