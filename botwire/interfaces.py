"""Capability interfaces for drivers and middleware.

Commands only accept values that implement these contracts: a driver
filter is normalized when given a Driver subclass, and the middleware
list only ever holds Middleware instances.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable

import structlog

logger = structlog.get_logger("botwire.middleware")

# Type alias for the continuation passed to middleware hooks
NextHandler = Callable[[Any], Awaitable[Any]]

DRIVER_SUFFIX = "Driver"


class Driver(ABC):
    """Base class for transport drivers (Telegram, Slack, web, ...).

    Subclasses may set ``name`` to override the short name used in
    command driver filters. Otherwise the class name is used with a
    trailing "Driver" removed, so ``TelegramDriver`` becomes "Telegram".
    """

    name: str = ""

    @classmethod
    def short_name(cls) -> str:
        """Return the name used to restrict commands to this driver."""
        if cls.name:
            return cls.name
        stripped = cls.__name__.removesuffix(DRIVER_SUFFIX)
        return stripped or cls.__name__

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the driver has the credentials it needs."""
        ...

    @abstractmethod
    async def send_message(self, recipient: str, text: str) -> None:
        """Deliver a text message to a recipient on this transport."""
        ...


class Middleware:
    """Base class for command middleware.

    Override the hooks you need. The conversation engine calls them
    around command execution; each async hook must hand the (possibly
    modified) value to ``next_`` and return its result.

    The default hooks log a debug event on the botwire.middleware logger.
    """

    async def received(self, message: Any, next_: NextHandler) -> Any:
        """Called for every incoming message before matching."""
        logger.debug("middleware_received", middleware=type(self).__name__)
        return await next_(message)

    async def captured(self, message: Any, next_: NextHandler) -> Any:
        """Called when a message answers a pending conversation question."""
        logger.debug("middleware_captured", middleware=type(self).__name__)
        return await next_(message)

    def matching(self, message: Any, pattern: str, regex_matched: bool) -> bool:
        """Decide whether a command pattern matches a message."""
        logger.debug(
            "middleware_matching",
            middleware=type(self).__name__,
            pattern=pattern,
            matched=regex_matched,
        )
        return regex_matched

    async def heard(self, message: Any, next_: NextHandler) -> Any:
        """Called after a command matched, before its callback runs."""
        logger.debug("middleware_heard", middleware=type(self).__name__)
        return await next_(message)

    async def sending(self, payload: Any, next_: NextHandler) -> Any:
        """Called for every outgoing payload before the driver sends it."""
        logger.debug("middleware_sending", middleware=type(self).__name__)
        return await next_(payload)
