"""
Superfície do host (servidor do jogo).

O plugin não fala com o jogo diretamente: tudo passa por um ``HostSurface``.
O servidor real implementa esta classe; ``button_commands.testing.LocalHost``
é a implementação em memória para desenvolvimento local.
"""
from abc import ABC, abstractmethod
from typing import Optional

from button_commands.grid import position_to_grid
from button_commands.lang import DEFAULT_LANGUAGE
from button_commands.models.entities import BasePlayer, RaycastHit, Vector3


class HostSurface(ABC):
    """Operações que o plugin consome do servidor do jogo."""

    # Tamanho do mapa em unidades do mundo
    world_size: int = 4500

    # ==================== COMANDOS ====================

    @abstractmethod
    def run_client_command(self, player: BasePlayer, command: str):
        """Executa um comando como se o jogador tivesse digitado no console."""
        pass

    @abstractmethod
    def run_server_command(self, command: str):
        """Executa um comando no console do servidor."""
        pass

    def send_chat_as(self, player: BasePlayer, text: str):
        """Envia uma linha de chat em nome do jogador."""
        self.run_client_command(player, f'chat.say "{text}"')

    # ==================== JOGADOR ====================

    @abstractmethod
    def reply(self, player: BasePlayer, message: str):
        """Envia uma mensagem privada ao jogador."""
        pass

    @abstractmethod
    def raycast(self, player: BasePlayer, max_distance: float) -> Optional[RaycastHit]:
        """Raycast a partir dos olhos do jogador. None se nada foi atingido."""
        pass

    def get_language(self, user_id: str) -> str:
        return DEFAULT_LANGUAGE

    # ==================== PERMISSÕES ====================

    @abstractmethod
    def register_permission(self, permission: str, owner: str):
        pass

    @abstractmethod
    def user_has_permission(self, user_id: str, permission: str) -> bool:
        pass

    # ==================== MAPA ====================

    def position_to_grid(self, position: Vector3) -> str:
        """Rótulo da célula do mapa (ex: "K14")."""
        return position_to_grid(position, self.world_size)
