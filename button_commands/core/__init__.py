"""
Classes base para plugins.
"""
from button_commands.core.plugin import BasePlugin
from button_commands.core.command import Command, command
from button_commands.core.events import Events, hook

__all__ = [
    "BasePlugin",
    "Command",
    "command",
    "Events",
    "hook",
]
