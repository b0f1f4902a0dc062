"""
Button Commands - Test Runner
=============================

Caso de teste base com um LocalHost, relógio falso e diretórios temporários.

Uso:
    from button_commands.testing import PluginTestCase

    class TestBotoes(PluginTestCase):
        def test_cooldown(self):
            self.add_button(1, cooldown_seconds=10)
            self.press(1)
            self.press(1)
            self.assertReplyContains("wait 10s")
"""
from __future__ import annotations

import random
import shutil
import tempfile
import unittest
from typing import List, Optional

from button_commands.models.button import ButtonBehavior, CommandTemplate, CommandType
from button_commands.models.entities import BasePlayer, PressButton, Vector3
from button_commands.permissions import ADMIN
from button_commands.plugin import ButtonCommandsPlugin

from .mocks import FakeClock, LocalHost

DEFAULT_PLAYER_ID = 76561198000000001


class PluginTestCase(unittest.TestCase):
    """
    Caso de teste para o plugin.

    Cada teste recebe diretórios de dados e config novos, um LocalHost,
    um FakeClock e um Random com seed fixa.
    """

    plugin_class = ButtonCommandsPlugin
    world_size: int = 4500
    seed: int = 1234

    def setUp(self):
        """Preparar ambiente de teste."""
        self._tmp_dir = tempfile.mkdtemp(prefix="button_commands_")
        self.data_dir = f"{self._tmp_dir}/data"
        self.config_dir = f"{self._tmp_dir}/config"

        self.clock = FakeClock()
        self.host = LocalHost(world_size=self.world_size)
        self.before_load()
        self.plugin = self.host.load_plugin(self.plugin_class(
            data_dir=self.data_dir,
            config_dir=self.config_dir,
            clock=self.clock,
            rng=random.Random(self.seed),
        ))
        self.player = self.create_player(DEFAULT_PLAYER_ID, "Ava")

    def tearDown(self):
        """Limpar após teste."""
        if self.plugin in self.host.plugins:
            self.host.unload_plugin(self.plugin)
        shutil.rmtree(self._tmp_dir, ignore_errors=True)

    def before_load(self):
        """Sobrescreva para preparar arquivos antes do on_load."""
        pass

    # =========================================================================
    # Helpers
    # =========================================================================

    def create_player(
        self,
        user_id: int,
        display_name: str = "",
        position: Vector3 = None,
        admin: bool = False,
    ) -> BasePlayer:
        """Criar jogador de teste."""
        player = BasePlayer(user_id, display_name, position or Vector3())
        if admin:
            self.host.permissions.grant(player.user_id_string, ADMIN)
        return player

    def add_button(
        self,
        button_id: int,
        commands: Optional[List[CommandTemplate]] = None,
        require_powered: bool = False,
        disable_output: bool = False,
        run_random: bool = False,
        cooldown_seconds: float = 0.0,
    ) -> ButtonBehavior:
        """Registrar um botão diretamente no registro."""
        if commands is None:
            commands = [CommandTemplate(CommandType.SERVER, "say {PlayerName}")]
        behavior = ButtonBehavior(
            require_button_powered=require_powered,
            disable_power_output_on_press=disable_output,
            run_random_command=run_random,
            cooldown_seconds=cooldown_seconds,
            commands=commands,
        )
        self.plugin.registry.set(button_id, behavior)
        return behavior

    def press(self, button_id: int, player: BasePlayer = None, powered: bool = True):
        """Pressionar um botão pelo host (retorna o override de energia)."""
        button = PressButton(button_id, powered=powered)
        return self.host.press_button(button, player or self.player)

    def advance_time(self, seconds: float):
        self.clock.advance(seconds)

    def run_console_command(self, name: str, player: BasePlayer = None, args: List[str] = None):
        return self.host.run_console_command(player or self.player, name, args)

    def dispatched(self) -> List[str]:
        """Todos os comandos despachados, na ordem de cada canal."""
        return (
            [text for _, text in self.host.chat_log]
            + [cmd for _, cmd in self.host.client_commands]
            + list(self.host.server_commands)
        )

    # =========================================================================
    # Assertions
    # =========================================================================

    def assertNothingDispatched(self, msg: str = None):
        """Assert que nenhum comando foi executado."""
        if self.dispatched():
            self.fail(msg or f"Comandos inesperados: {self.dispatched()}")

    def assertNoReplies(self, msg: str = None):
        if self.host.replies:
            self.fail(msg or f"Mensagens inesperadas: {self.host.replies}")

    def assertServerCommand(self, command: str, msg: str = None):
        if command not in self.host.server_commands:
            self.fail(msg or f"'{command}' não encontrado em {self.host.server_commands}")

    def assertReplyContains(self, substring: str, msg: str = None):
        """Assert que alguma resposta ao jogador contém substring."""
        if not any(substring in text for _, text in self.host.replies):
            self.fail(msg or f"'{substring}' não encontrado em {self.host.replies}")
