"""
Button Commands - executa comandos quando um botão elétrico é pressionado.

Exemplo de uso:

    from button_commands import ButtonCommandsPlugin
    from button_commands.testing import LocalHost

    host = LocalHost()
    plugin = host.load_plugin(ButtonCommandsPlugin(data_dir="data", config_dir="config"))
"""
import logging
import random
from typing import Callable, List, Optional

from button_commands import __version__
from button_commands.config import PluginConfig, button_commands_config
from button_commands.core.command import Command, command
from button_commands.core.events import Events, hook
from button_commands.core.plugin import BasePlugin
from button_commands.evaluator import PressEvaluator, PressResult
from button_commands.lang import Lang, Localizer
from button_commands.models.button import default_behavior
from button_commands.models.entities import BasePlayer, PressButton
from button_commands.permissions import ADMIN, ALLOWED_PERMISSIONS
from button_commands.registry import PRESS_BUTTONS_KEY, ButtonRegistry, RegisterResult
from button_commands.storage import DataFile, StorageError
from button_commands.utils import CooldownTracker

logger = logging.getLogger(__name__)


class ButtonCommandsPlugin(BasePlugin):
    """
    Serviço do plugin.

    Dono do registro de botões, do avaliador de pressões e das mensagens.
    O host chama ``on_button_press`` a cada pressão e ``bc.add`` pelo console.
    """

    name = "Button Commands"
    version = __version__
    author = "VisEntities"
    description = "Run commands when an electric button is pressed."
    permissions = tuple(ALLOWED_PERMISSIONS)

    def __init__(
        self,
        host=None,
        data_dir: str = "data",
        config_dir: str = "config",
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(host)
        self.data_dir = data_dir
        self.config_dir = config_dir
        self.config: PluginConfig = button_commands_config()
        self.localizer = Localizer()
        self.cooldowns = CooldownTracker(clock) if clock else CooldownTracker()
        self._rng = rng
        self.registry: Optional[ButtonRegistry] = None
        self.evaluator: Optional[PressEvaluator] = None

    # ==================== LIFECYCLE ====================

    def on_load(self):
        self.localizer.register_defaults()
        self.config._bind(self.file_name, self.config_dir, current_version=self.version)

        self.registry = ButtonRegistry(
            DataFile(self.file_name, self.data_dir),
            default_factory=self._new_button_behavior,
        )
        if not self.registry.load():
            self._import_legacy_buttons()

        self.evaluator = PressEvaluator(
            self.registry,
            self.host,
            reply=self.reply_to_player,
            cooldowns=self.cooldowns,
            rng=self._rng,
        )
        self.log_info(f"{len(self.registry)} botão(ões) registrado(s)")

    def on_unload(self):
        self.cooldowns.reset()

    def _new_button_behavior(self):
        return default_behavior(self.config.default_cooldown_seconds)

    def _import_legacy_buttons(self):
        """Versões antigas guardavam os botões dentro do arquivo de config."""
        if PRESS_BUTTONS_KEY not in self.config.extra:
            return
        imported = self.registry.import_legacy(self.config.extra)
        if imported:
            self.config.drop_extra(PRESS_BUTTONS_KEY)

    # ==================== HOOKS ====================

    @hook(Events.BUTTON_PRESS)
    def on_button_press(self, button: Optional[PressButton], player: Optional[BasePlayer]):
        """
        Hook do host para cada pressão de botão.

        Returns:
            True para suprimir a saída de energia do botão, None caso contrário
        """
        result = self.press(button, player)
        if result.suppress_power_output:
            return True
        return None

    def press(self, button: Optional[PressButton], player: Optional[BasePlayer]) -> PressResult:
        """Avalia a pressão e retorna o resultado completo."""
        if self.evaluator is None:
            return PressResult.ignored()
        return self.evaluator.evaluate(button, player)

    # ==================== COMANDOS ====================

    @command("bc.add", permission=ADMIN, description="Registra o botão para o qual você está olhando")
    def cmd_add_button(self, player: Optional[BasePlayer], args: List[str]) -> Optional[RegisterResult]:
        """Registra o botão sob a mira do jogador com o comportamento padrão."""
        if player is None or self.registry is None:
            return None

        hit = self.host.raycast(player, self.config.register_range)
        if hit is None:
            self.reply_to_player(player, Lang.ERROR_NO_BUTTON_IN_RANGE)
            return None

        button = hit.entity
        if not isinstance(button, PressButton):
            self.reply_to_player(player, Lang.ERROR_NO_BUTTON_IN_SIGHT)
            return None

        try:
            result = self.registry.register(button.net_id)
        except StorageError:
            logger.exception(f"[{self.name}] Falha ao salvar o botão {button.net_id}")
            return None

        if result == RegisterResult.ALREADY_REGISTERED:
            self.reply_to_player(player, Lang.ERROR_ALREADY_REGISTERED)
        else:
            self.log_info(f"{player.display_name} registrou o botão {button.net_id}")
            self.reply_to_player(player, Lang.INFO_BUTTON_REGISTERED)
        return result

    def on_permission_denied(self, player: BasePlayer, cmd: Command):
        self.reply_to_player(player, Lang.ERROR_NO_PERMISSION)

    # ==================== MENSAGENS ====================

    def get_message(self, player: Optional[BasePlayer], key: str, *args) -> str:
        language = None
        if player is not None and self.host is not None:
            language = self.host.get_language(player.user_id_string)
        return self.localizer.get_message(key, language, *args)

    def reply_to_player(self, player: BasePlayer, key: str, *args):
        message = self.get_message(player, key, *args)
        if message and message.strip():
            self.host.reply(player, message)
