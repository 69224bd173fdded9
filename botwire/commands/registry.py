"""Command registry with nested attribute groups.

The registry owns Command instances for their whole lifetime. Commands
registered inside ``group()`` blocks pick up the group's middleware,
driver and recipient.

Key classes:
    CommandRegistry: Builds, groups and exports commands.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

import structlog
from pydantic import ValidationError

from ..exceptions import ConfigurationError
from ..interfaces import Driver
from .command import Command, CommandCallback, as_list
from .models import CommandEntry

logger = structlog.get_logger("botwire.commands")


def merge_group_attributes(
    outer: Mapping[str, Any], inner: Mapping[str, Any]
) -> Dict[str, Any]:
    """Merge attributes of a nested group into those of its parent.

    Middleware accumulates (outer first); every other key is replaced
    by the inner value.
    """
    merged = dict(outer)
    for key, value in inner.items():
        if value is None:
            continue
        if key == "middleware":
            existing = merged.get("middleware")
            existing = as_list(existing) if existing is not None else []
            merged["middleware"] = [*existing, *as_list(value)]
        else:
            merged[key] = value
    return merged


def _describe(value: Any) -> Any:
    """Render a callable or middleware as a plain string for export."""
    if isinstance(value, str) or value is None:
        return value
    qualname = getattr(value, "__qualname__", None)
    if qualname is not None:
        return f"{getattr(value, '__module__', '')}.{qualname}".lstrip(".")
    return type(value).__name__


def _describe_driver(driver: Any) -> Any:
    """Render a driver filter so only strings and lists of strings remain."""
    if driver is None or isinstance(driver, str):
        return driver
    rendered = []
    for item in as_list(driver):
        if isinstance(item, Driver):
            rendered.append(type(item).short_name())
        elif isinstance(item, str):
            rendered.append(item)
        else:
            rendered.append(_describe(item))
    return rendered


class CommandRegistry:
    """Holds registered commands in registration order."""

    def __init__(self) -> None:
        self._commands: List[Command] = []
        self._group_attributes: Dict[str, Any] = {}

    def hears(
        self,
        pattern: str,
        callback: CommandCallback,
        recipient: Optional[str] = None,
        driver: Any = None,
    ) -> Command:
        """Register a command and return it for further chaining.

        Args:
            pattern: Message pattern to listen for.
            callback: Callable or string identifier.
            recipient: Optional addressee scope.
            driver: Optional driver name, Driver subclass, or list.
        """
        command = Command(pattern, callback, recipient=recipient)
        if driver is not None:
            command.set_driver(driver)
        command.apply_group_attributes(self._group_attributes)

        if any(c.pattern == pattern for c in self._commands):
            logger.warning("command_pattern_duplicate", pattern=pattern)
        self._commands.append(command)

        logger.debug(
            "command_registered",
            pattern=pattern,
            driver=command.driver,
            middleware=len(command.middleware),
        )
        return command

    @contextmanager
    def group(self, **attributes: Any) -> Iterator["CommandRegistry"]:
        """Apply shared attributes to every command registered in the block.

        Usage::

            with registry.group(driver=TelegramDriver, middleware=[auth]):
                registry.hears("start", on_start)
        """
        previous = self._group_attributes
        self._group_attributes = merge_group_attributes(previous, attributes)
        try:
            yield self
        finally:
            self._group_attributes = previous

    def load(self, entries: Iterable[Mapping[str, Any]]) -> List[Command]:
        """Register commands declared in configuration.

        Raises:
            ConfigurationError: If an entry fails validation.
        """
        loaded = []
        for index, raw in enumerate(entries):
            try:
                entry = CommandEntry.model_validate(raw)
            except ValidationError as e:
                raise ConfigurationError(
                    "Invalid command entry",
                    setting_name=f"commands[{index}]",
                    errors=e.error_count(),
                ) from e

            command = self.hears(
                entry.pattern,
                entry.callback,
                recipient=entry.recipient,
                driver=entry.driver,
            )
            if entry.stops_conversation:
                command.stops_conversation()
            if entry.skips_conversation:
                command.skips_conversation()
            loaded.append(command)

        logger.info("commands_loaded", count=len(loaded))
        return loaded

    @property
    def commands(self) -> List[Command]:
        """Registered commands, oldest first."""
        return list(self._commands)

    def to_list(self) -> List[Dict[str, Any]]:
        return [command.to_dict() for command in self._commands]

    def export(self) -> List[Dict[str, Any]]:
        """Like to_list(), with callables, drivers and middleware rendered as names."""
        exported = []
        for snapshot in self.to_list():
            snapshot["callback"] = _describe(snapshot["callback"])
            snapshot["driver"] = _describe_driver(snapshot["driver"])
            snapshot["middleware"] = [type(m).__name__ for m in snapshot["middleware"]]
            exported.append(snapshot)
        return exported

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(list(self._commands))
