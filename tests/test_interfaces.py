"""Tests for driver and middleware interfaces."""

import pytest
from structlog.testing import capture_logs

from botwire.drivers import NullDriver
from botwire.interfaces import Driver, Middleware


def test_driver_is_abstract():
    with pytest.raises(TypeError):
        Driver()


def test_null_driver_short_name():
    assert NullDriver.short_name() == "Null"


def test_short_name_keeps_class_name_when_nothing_left():
    class Driver_(NullDriver):
        pass

    Driver_.__name__ = "Driver"
    assert Driver_.short_name() == "Driver"


def test_null_driver_not_configured():
    assert NullDriver().is_configured() is False


@pytest.mark.asyncio
async def test_null_driver_discards_messages():
    assert await NullDriver().send_message("alice", "hello") is None


@pytest.mark.asyncio
async def test_middleware_hooks_pass_through():
    """Default hooks hand the value to next_ and return its result."""
    seen = []

    async def next_(value):
        seen.append(value)
        return f"next:{value}"

    mw = Middleware()
    assert await mw.received("a", next_) == "next:a"
    assert await mw.captured("b", next_) == "next:b"
    assert await mw.heard("c", next_) == "next:c"
    assert await mw.sending("d", next_) == "next:d"
    assert seen == ["a", "b", "c", "d"]


def test_middleware_matching_defaults_to_regex_result():
    mw = Middleware()
    assert mw.matching("hello", "hello", True) is True
    assert mw.matching("hello", "bye", False) is False


@pytest.mark.asyncio
async def test_middleware_subclass_can_rewrite_message():
    class Upper(Middleware):
        async def received(self, message, next_):
            return await next_(message.upper())

    async def next_(value):
        return value

    assert await Upper().received("hi", next_) == "HI"


@pytest.mark.asyncio
async def test_middleware_hooks_log_on_middleware_logger():
    async def next_(value):
        return value

    class Auth(Middleware):
        pass

    mw = Auth()
    with capture_logs() as logs:
        await mw.received("a", next_)
        mw.matching("a", "a", True)
        await mw.sending("b", next_)

    assert [e["event"] for e in logs] == [
        "middleware_received",
        "middleware_matching",
        "middleware_sending",
    ]
    assert all(e["middleware"] == "Auth" for e in logs)
