"""
Button Commands - plugin de servidor para botões elétricos
==========================================================

Executa comandos de chat, de cliente ou de servidor quando um jogador
pressiona um botão registrado.

Exemplo de uso:

    from button_commands import ButtonCommandsPlugin
    from button_commands.testing import LocalHost

    host = LocalHost()
    plugin = host.load_plugin(ButtonCommandsPlugin())
    host.permissions.grant("76561198000000000", "buttoncommands.admin")
"""
__version__ = "2.2.0"

from button_commands.models import (
    BasePlayer,
    ButtonBehavior,
    CommandTemplate,
    CommandType,
    PressButton,
    RaycastHit,
    Vector3,
    default_behavior,
)
from button_commands.storage import DataFile, DataFileError, StorageError
from button_commands.config import PluginConfig, ConfigField, migrate, button_commands_config
from button_commands.registry import ButtonRegistry, RegisterResult
from button_commands.evaluator import PressEvaluator, PressOutcome, PressResult
from button_commands.host import HostSurface
from button_commands.lang import Lang, Localizer
from button_commands.permissions import ADMIN, PermissionManager, PluginSecurityError
from button_commands.utils import CooldownTracker, TextUtils, format_duration
from button_commands.grid import position_to_grid
from button_commands.core import BasePlugin, Command, Events, command, hook
from button_commands.plugin import ButtonCommandsPlugin

__all__ = [
    "__version__",

    # Plugin
    "ButtonCommandsPlugin",
    "BasePlugin",
    "Command",
    "Events",
    "command",
    "hook",

    # Models
    "BasePlayer",
    "ButtonBehavior",
    "CommandTemplate",
    "CommandType",
    "PressButton",
    "RaycastHit",
    "Vector3",
    "default_behavior",

    # Registry & evaluation
    "ButtonRegistry",
    "RegisterResult",
    "PressEvaluator",
    "PressOutcome",
    "PressResult",
    "CooldownTracker",

    # Storage & config
    "DataFile",
    "DataFileError",
    "StorageError",
    "PluginConfig",
    "ConfigField",
    "migrate",
    "button_commands_config",

    # Host
    "HostSurface",
    "Lang",
    "Localizer",
    "ADMIN",
    "PermissionManager",
    "PluginSecurityError",

    # Utils
    "TextUtils",
    "format_duration",
    "position_to_grid",
]
