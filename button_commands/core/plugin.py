"""
Classe base para plugins do servidor.

O host instancia o plugin, vincula a si mesmo com ``_bind_host`` e chama
``on_load``. Depois entrega eventos com ``dispatch_event`` e comandos de
console com ``on_command``.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional
import logging

from button_commands.core.command import Command

logger = logging.getLogger(__name__)


class BasePlugin(ABC):
    """
    Classe base para todos os plugins.

    Atributos de classe:
        name: Nome do plugin
        version: Versão (semver)
        author: Autor do plugin
        description: Descrição do plugin
        permissions: Permissões de jogador que o plugin registra

    Exemplo:
        class MeuPlugin(BasePlugin):
            name = "MeuPlugin"
            version = "1.0.0"
            permissions = ("meuplugin.use",)

            def on_load(self):
                self.log_info("Pronto!")

            @command("meu.cmd", permission="meuplugin.use")
            def cmd_meu(self, player, args):
                ...
    """

    # Metadados do plugin (definir nas subclasses)
    name: str = "Unnamed Plugin"
    version: str = "1.0.0"
    author: str = "Unknown"
    description: str = "No description"
    permissions: Iterable[str] = ()

    def __init__(self, host=None):
        """
        Inicializa o plugin.

        Args:
            host: Superfície do servidor (HostSurface). Pode ser vinculado depois.
        """
        self.host = host
        self.enabled = True
        self.loaded = False
        self.commands: Dict[str, Command] = {}
        self.hooks: Dict[str, Any] = {}

        # Registrar comandos e hooks decorados
        self._register_decorated()

    @property
    def file_name(self) -> str:
        """Nome usado nos arquivos de config e dados ("ButtonCommands")."""
        return self.name.replace(" ", "")

    def _bind_host(self, host):
        """Vincula o host (chamado pelo loader)."""
        self.host = host

    def _register_decorated(self):
        """Registra métodos decorados com @command e @hook."""
        for attr_name in dir(type(self)):
            if isinstance(getattr(type(self), attr_name, None), property):
                continue
            attr = getattr(self, attr_name, None)
            if attr is None or not callable(attr):
                continue

            if hasattr(attr, "_command_info"):
                cmd = Command.from_handler(attr)
                self.commands[cmd.name] = cmd
                for alias in cmd.aliases:
                    self.commands[alias] = cmd

            event = getattr(attr, "_hook_event", None)
            if event:
                self.hooks[event] = attr

    # ==================== LIFECYCLE ====================

    @abstractmethod
    def on_load(self):
        """
        Chamado quando o plugin é carregado.
        Use para carregar config e dados.
        """
        pass

    def on_unload(self):
        """
        Chamado quando o plugin é descarregado.
        Use para cleanup de recursos.
        """
        pass

    def load(self):
        """Registra permissões e chama on_load."""
        if self.host is not None:
            for permission in self.permissions:
                self.host.register_permission(permission, self.name)
        self.on_load()
        self.loaded = True
        logger.info(f"🔌 Plugin carregado: {self.name} v{self.version}")

    def unload(self):
        self.on_unload()
        self.loaded = False
        logger.info(f"Plugin descarregado: {self.name}")

    # ==================== DISPATCH ====================

    def dispatch_event(self, event: str, *args) -> Any:
        """
        Entrega um evento do host ao hook registrado.

        Returns:
            Valor de retorno do hook (None = sem override)
        """
        if not self.enabled or event not in self.hooks:
            return None
        return self.hooks[event](*args)

    def on_command(self, name: str, player, args: Optional[List[str]] = None) -> Any:
        """
        Executa um comando de console.

        Args:
            name: Nome do comando
            player: Jogador que executou (None = console do servidor)
            args: Argumentos do comando
        """
        cmd = self.commands.get(name)
        if cmd is None or not self.enabled:
            return None

        if player is not None and not cmd.can_execute(self.host, player.user_id_string):
            self.on_permission_denied(player, cmd)
            return None

        return cmd.handler(player, list(args or []))

    def on_permission_denied(self, player, cmd: Command):
        """Chamado quando o jogador não tem a permissão do comando."""
        logger.info(f"[{self.name}] {player.user_id_string} sem permissão para {cmd.name}")

    # ==================== UTILITIES ====================

    def log_info(self, message: str):
        """Log info com prefixo do plugin."""
        logger.info(f"[{self.name}] {message}")
