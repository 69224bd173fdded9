"""Command definitions and registration for botwire.

Provides the Command value object, the CommandRegistry that owns
commands and applies group attributes, and the CommandEntry model
for commands declared in configuration.
"""

from .command import Command, normalize_driver
from .models import CommandEntry
from .registry import CommandRegistry, merge_group_attributes

__all__ = [
    "Command",
    "CommandEntry",
    "CommandRegistry",
    "merge_group_attributes",
    "normalize_driver",
]
