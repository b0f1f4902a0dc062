"""
Button Commands - Testing Module
================================

Ferramentas para desenvolvimento e teste local do plugin.

Componentes:
- LocalHost: host em memória que registra comandos e respostas
- FakeClock: relógio controlado manualmente
- PluginTestCase: classe base para testes

Testes Unitários:
    from button_commands.testing import PluginTestCase

    class TestMeusBotoes(PluginTestCase):
        def test_press(self):
            self.add_button(123)
            self.press(123)
            self.assertServerCommand("inventory.giveto 76561198000000001 scrap 50")
"""

from .mocks import FakeClock, LocalHost
from .test_runner import PluginTestCase

__all__ = [
    'FakeClock',
    'LocalHost',
    'PluginTestCase',
]
