"""
Referências a entidades do jogo.

Visões somente-leitura entregues pelo host. O plugin nunca altera estes
objetos, apenas lê os atributos de que precisa.
"""
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Vector3:
    """Posição no mundo."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class PressButton:
    """Botão elétrico de pressionar."""

    net_id: int
    powered: bool = False
    position: Vector3 = field(default_factory=Vector3)

    def is_powered(self) -> bool:
        return self.powered


@dataclass
class BasePlayer:
    """Jogador conectado."""

    user_id: int
    display_name: str = ""
    position: Vector3 = field(default_factory=Vector3)

    def __post_init__(self):
        if not self.display_name:
            self.display_name = str(self.user_id)

    @property
    def user_id_string(self) -> str:
        """ID da plataforma como texto (ex: SteamID64)."""
        return str(self.user_id)


@dataclass
class RaycastHit:
    """Resultado de um raycast a partir dos olhos do jogador."""

    entity: Any = None
    distance: float = 0.0
