"""
Button Behavior Records
=======================

Defines the stored configuration that controls how a registered
button reacts when a player presses it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from button_commands.storage import DataFileError


def _read_flag(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DataFileError(f"'{key}' must be true or false, got {value!r}")
    return value


class CommandType(Enum):
    """Channel a command template is dispatched to."""

    CHAT = "Chat"
    SERVER = "Server"
    CLIENT = "Client"

    @classmethod
    def parse(cls, value: Any) -> 'CommandType':
        """Accepts the persisted name ("Chat") or the enum index (0)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        raise DataFileError(f"Unknown command type: {value!r}")


@dataclass
class CommandTemplate:
    """A command string with placeholder tokens plus its dispatch channel."""

    type: CommandType
    command: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"Type": self.type.value, "Command": self.command}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CommandTemplate':
        if not isinstance(data, dict):
            raise DataFileError(f"Command entry must be an object, got {type(data).__name__}")
        return cls(
            type=CommandType.parse(data.get("Type", CommandType.CHAT.value)),
            command=str(data.get("Command") or ""),
        )


@dataclass
class ButtonBehavior:
    """Behavior record stored for a single button id."""

    require_button_powered: bool = False
    disable_power_output_on_press: bool = False
    run_random_command: bool = False
    cooldown_seconds: float = 0.0
    commands: List[CommandTemplate] = field(default_factory=list)

    def __post_init__(self):
        self.cooldown_seconds = max(0.0, float(self.cooldown_seconds))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the persisted property names."""
        return {
            "Require Button Powered": self.require_button_powered,
            "Disable Power Output On Press": self.disable_power_output_on_press,
            "Run Random Command": self.run_random_command,
            "Cooldown Seconds": self.cooldown_seconds,
            "Commands": [cmd.to_dict() for cmd in self.commands],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ButtonBehavior':
        """Deserialize from the persisted layout. Missing fields take defaults."""
        if not isinstance(data, dict):
            raise DataFileError(f"Button entry must be an object, got {type(data).__name__}")

        commands = data.get("Commands") or []
        if not isinstance(commands, list):
            raise DataFileError("'Commands' must be a list")

        try:
            cooldown = float(data.get("Cooldown Seconds", 0.0) or 0.0)
        except (TypeError, ValueError):
            raise DataFileError(f"Invalid 'Cooldown Seconds': {data.get('Cooldown Seconds')!r}")

        return cls(
            require_button_powered=_read_flag(data, "Require Button Powered"),
            disable_power_output_on_press=_read_flag(data, "Disable Power Output On Press"),
            run_random_command=_read_flag(data, "Run Random Command"),
            cooldown_seconds=cooldown,
            commands=[CommandTemplate.from_dict(cmd) for cmd in commands],
        )


def default_behavior(cooldown_seconds: float = 60.0) -> ButtonBehavior:
    """Record assigned to a freshly registered button."""
    return ButtonBehavior(
        require_button_powered=True,
        disable_power_output_on_press=True,
        run_random_command=False,
        cooldown_seconds=cooldown_seconds,
        commands=[
            CommandTemplate(CommandType.CHAT, "Hello, {PlayerName}!"),
            CommandTemplate(CommandType.SERVER, "inventory.giveto {PlayerId} scrap 50"),
            CommandTemplate(CommandType.CLIENT, "heli.calltome"),
        ],
    )
