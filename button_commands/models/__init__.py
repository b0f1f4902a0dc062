"""
Modelos de dados do plugin.
"""
from button_commands.models.button import (
    ButtonBehavior,
    CommandTemplate,
    CommandType,
    default_behavior,
)
from button_commands.models.entities import BasePlayer, PressButton, RaycastHit, Vector3

__all__ = [
    "ButtonBehavior",
    "CommandTemplate",
    "CommandType",
    "default_behavior",
    "BasePlayer",
    "PressButton",
    "RaycastHit",
    "Vector3",
]
