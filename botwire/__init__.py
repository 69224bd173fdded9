"""botwire - command registration for conversational bots."""

from .commands import Command, CommandRegistry
from .drivers import NullDriver
from .interfaces import Driver, Middleware

__version__ = "0.1.0"

__all__ = [
    "Command",
    "CommandRegistry",
    "Driver",
    "Middleware",
    "NullDriver",
]
