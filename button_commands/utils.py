"""
Utilitários usados pelo avaliador de botões.

Formatação de duração, substituição de placeholders e controle de cooldown
por botão e por jogador.
"""
from typing import Callable, Dict, Optional, Tuple
import math
import re
import threading
import time

PLACEHOLDER_PATTERN = re.compile(r"\{(PlayerId|PlayerName|PositionX|PositionY|PositionZ|Grid)\}")


class TextUtils:
    """Utilitários para manipulação de texto."""

    @staticmethod
    def format_duration(seconds: float) -> str:
        """
        Formata segundos como string compacta.

        Frações são arredondadas para cima; segmentos zerados são omitidos.

        Exemplos:
            0 -> "0s"
            45 -> "45s"
            120 -> "2m"
            3661 -> "1h 1m 1s"
        """
        total = int(math.ceil(seconds)) if seconds > 0 else 0

        hours = total // 3600
        minutes = (total % 3600) // 60
        secs = total % 60

        parts = []
        if hours > 0:
            parts.append(f"{hours}h")
        if minutes > 0:
            parts.append(f"{minutes}m")
        if secs > 0 or not parts:
            parts.append(f"{secs}s")

        return " ".join(parts)

    @staticmethod
    def format_coordinate(value: float) -> str:
        """Coordenada como texto decimal: 135.0 -> "135", 12.25 -> "12.25"."""
        return format(float(value), ".7g")

    @staticmethod
    def render_placeholders(template: str, values: Dict[str, str]) -> str:
        """
        Substitui {PlayerId}, {PlayerName}, {PositionX/Y/Z} e {Grid} em uma passada.

        Tokens sem valor em ``values`` e tokens desconhecidos ficam como estão.
        """
        def _replace(match: re.Match) -> str:
            token = match.group(1)
            if token in values:
                return values[token]
            return match.group(0)

        return PLACEHOLDER_PATTERN.sub(_replace, template)


format_duration = TextUtils.format_duration


class CooldownTracker:
    """
    Cooldown por botão e por jogador.

    Guarda o instante (relógio monotônico) do último uso bem-sucedido de cada
    par (botão, jogador). Vive só em memória.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._last_press: Dict[int, Dict[int, float]] = {}
        self._lock = threading.RLock()

    def last_press(self, button_id: int, player_id: int) -> Optional[float]:
        with self._lock:
            return self._last_press.get(button_id, {}).get(player_id)

    def check(self, button_id: int, player_id: int, seconds: float) -> Tuple[bool, float]:
        """
        Verifica cooldown.

        Returns:
            (pode_usar, segundos_restantes)
        """
        if seconds <= 0:
            return True, 0.0

        with self._lock:
            last = self._last_press.get(button_id, {}).get(player_id)
            if last is None:
                return True, 0.0

            remaining = seconds - (self._clock() - last)
            if remaining <= 0:
                return True, 0.0
            return False, remaining

    def use(self, button_id: int, player_id: int):
        """Registra uso."""
        with self._lock:
            self._last_press.setdefault(button_id, {})[player_id] = self._clock()

    def try_use(self, button_id: int, player_id: int, seconds: float) -> Tuple[bool, float]:
        """Tenta usar. Retorna (sucesso, segundos_restantes)."""
        with self._lock:
            can_use, remaining = self.check(button_id, player_id, seconds)
            if can_use:
                self.use(button_id, player_id)
            return can_use, remaining

    def reset(self, button_id: int = None, player_id: int = None):
        """Reseta cooldown de um botão, de um par ou de tudo."""
        with self._lock:
            if button_id is None:
                self._last_press.clear()
            elif player_id is None:
                self._last_press.pop(button_id, None)
            else:
                self._last_press.get(button_id, {}).pop(player_id, None)

    def __len__(self) -> int:
        with self._lock:
            return sum(len(players) for players in self._last_press.values())
