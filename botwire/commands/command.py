"""Command definition: one registered chatbot command.

A Command stores the pattern it listens for, the callback to run, and
the filters and flags the conversation engine reads when it executes a
match. Setters are fluent and never raise; values that do not satisfy
the Driver/Middleware contracts are passed through or dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from ..interfaces import Driver, Middleware

CommandCallback = Union[Callable[..., Any], str]


def as_list(value: Any) -> List[Any]:
    """Wrap a single value in a list; copy list/tuple/set input."""
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def normalize_driver(driver: Any) -> Any:
    """Map a Driver subclass to its short name, leave anything else alone."""
    if isinstance(driver, type) and issubclass(driver, Driver) and driver is not Driver:
        return driver.short_name()
    return driver


@dataclass
class Command:
    """A single command registration.

    Attributes:
        pattern: Text pattern matched against incoming messages.
        callback: Callable, or a string identifier resolved by the caller.
        recipient: Optional addressee the command is scoped to.
        driver: Optional driver filter. A plain string when passed to the
            constructor, a list once set_driver() has been applied.
        middleware: Middleware instances, most recently added first.
    """

    pattern: str
    callback: CommandCallback
    recipient: Optional[str] = None
    driver: Optional[Union[str, List[str]]] = None
    middleware: List[Middleware] = field(default_factory=list, init=False)
    _stops_conversation: bool = field(default=False, init=False, repr=False)
    _skips_conversation: bool = field(default=False, init=False, repr=False)

    def apply_group_attributes(self, attributes: Mapping[str, Any]) -> None:
        """Apply middleware/driver/recipient from a command group.

        Keys that are missing or set to None are skipped.
        """
        if attributes.get("middleware") is not None:
            self.set_middleware(attributes["middleware"])

        if attributes.get("driver") is not None:
            self.set_driver(attributes["driver"])

        if attributes.get("recipient") is not None:
            self.set_recipient(attributes["recipient"])

    def set_driver(self, driver: Any) -> "Command":
        """Restrict the command to one or more drivers.

        Accepts a driver name, a Driver subclass, or a list of either.
        """
        self.driver = [normalize_driver(d) for d in as_list(driver)]
        return self

    def stops_conversation(self) -> "Command":
        """Mark that this command stops a running conversation."""
        self._stops_conversation = True
        return self

    def should_stop_conversation(self) -> bool:
        return self._stops_conversation

    def skips_conversation(self) -> "Command":
        """Mark that this command runs without interrupting a conversation."""
        self._skips_conversation = True
        return self

    def should_skip_conversation(self) -> bool:
        return self._skips_conversation

    def set_recipient(self, recipient: Optional[str]) -> "Command":
        self.recipient = recipient
        return self

    def set_middleware(self, middleware: Union[Middleware, Sequence[Any]]) -> "Command":
        """Prepend middleware to the command.

        Non-Middleware values are dropped. Duplicates are kept.
        """
        accepted = [m for m in as_list(middleware) if isinstance(m, Middleware)]
        self.middleware = accepted + self.middleware
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of the registration fields."""
        return {
            "pattern": self.pattern,
            "callback": self.callback,
            "driver": list(self.driver) if isinstance(self.driver, list) else self.driver,
            "middleware": list(self.middleware),
            "recipient": self.recipient,
        }

    def get_pattern(self) -> str:
        return self.pattern

    def get_callback(self) -> CommandCallback:
        return self.callback

    def get_middleware(self) -> List[Middleware]:
        return self.middleware
