"""
Press Evaluator
===============

Decides what happens when a player presses a button:

1. unknown button, missing player or unpowered button -> ignored, silently
2. cooldown still running -> gated, the player is told how long to wait
3. otherwise one random template or all templates, in order, are rendered
   and dispatched through the host
"""
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from button_commands.host import HostSurface
from button_commands.lang import Lang
from button_commands.models.button import CommandTemplate, CommandType
from button_commands.models.entities import BasePlayer, PressButton
from button_commands.registry import ButtonRegistry
from button_commands.utils import CooldownTracker, TextUtils

logger = logging.getLogger(__name__)

# reply(player, message_key, *args)
ReplyCallback = Callable[..., None]


class PressOutcome(Enum):
    """How a press was handled."""

    IGNORED = "ignored"
    GATED = "gated"
    DISPATCHED = "dispatched"


@dataclass
class PressResult:
    """Result of evaluating a single press."""

    outcome: PressOutcome
    commands: List[CommandTemplate] = field(default_factory=list)  # rendered
    remaining_seconds: int = 0
    suppress_power_output: bool = False

    @classmethod
    def ignored(cls) -> 'PressResult':
        return cls(PressOutcome.IGNORED)


class PressEvaluator:
    """Evaluates button presses against the registry and the cooldown state."""

    def __init__(
        self,
        registry: ButtonRegistry,
        host: HostSurface,
        reply: Optional[ReplyCallback] = None,
        cooldowns: Optional[CooldownTracker] = None,
        rng: Optional[random.Random] = None,
    ):
        self.registry = registry
        self.host = host
        self._reply = reply
        self.cooldowns = cooldowns if cooldowns is not None else CooldownTracker()
        self._rng = rng if rng is not None else random.Random()

    def evaluate(self, button: Optional[PressButton], player: Optional[BasePlayer]) -> PressResult:
        if button is None or player is None:
            return PressResult.ignored()

        button_id = button.net_id
        behavior = self.registry.get(button_id)
        if behavior is None:
            return PressResult.ignored()

        if behavior.require_button_powered and not button.is_powered():
            logger.debug(f"Button {button_id} pressed without power by {player.user_id}")
            return PressResult.ignored()

        if behavior.cooldown_seconds > 0:
            allowed, remaining = self.cooldowns.try_use(
                button_id, player.user_id, behavior.cooldown_seconds
            )
            if not allowed:
                remaining_whole = int(math.ceil(remaining))
                logger.debug(
                    f"⏳ Button {button_id} on cooldown for {player.user_id} ({remaining_whole}s)"
                )
                if self._reply:
                    self._reply(
                        player, Lang.ERROR_COOLDOWN_ACTIVE, TextUtils.format_duration(remaining_whole)
                    )
                return PressResult(PressOutcome.GATED, remaining_seconds=remaining_whole)

        if behavior.run_random_command and behavior.commands:
            selected = [self._rng.choice(behavior.commands)]
        else:
            selected = list(behavior.commands)

        rendered = []
        for template in selected:
            text = self.render(template.command, player)
            self.dispatch(player, template.type, text)
            rendered.append(CommandTemplate(template.type, text))

        return PressResult(
            PressOutcome.DISPATCHED,
            commands=rendered,
            suppress_power_output=behavior.disable_power_output_on_press,
        )

    def render(self, command: str, player: BasePlayer) -> str:
        """Fill in the player placeholders of a command template."""
        position = player.position
        values = {
            "PlayerId": player.user_id_string,
            "PlayerName": player.display_name,
            "PositionX": TextUtils.format_coordinate(position.x),
            "PositionY": TextUtils.format_coordinate(position.y),
            "PositionZ": TextUtils.format_coordinate(position.z),
        }
        if "{Grid}" in command:
            values["Grid"] = self.host.position_to_grid(position)
        return TextUtils.render_placeholders(command, values)

    def dispatch(self, player: BasePlayer, command_type: CommandType, text: str):
        logger.debug(f"▶️ {command_type.value} command for {player.user_id}: {text}")
        if command_type == CommandType.CHAT:
            self.host.send_chat_as(player, text)
        elif command_type == CommandType.CLIENT:
            self.host.run_client_command(player, text)
        elif command_type == CommandType.SERVER:
            self.host.run_server_command(text)
