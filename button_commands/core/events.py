"""
Sistema de eventos para plugins.
"""
from typing import Callable


def hook(event_name: str):
    """
    Decorador para registrar handler de evento do host.

    Eventos disponíveis:
        - "button_press": jogador pressionou um botão (button, player)

    Exemplo:
        @hook(Events.BUTTON_PRESS)
        def on_button_press(self, button, player):
            ...
    """
    def decorator(func: Callable):
        func._hook_event = event_name
        return func

    return decorator


class Events:
    """Constantes de nomes de eventos."""

    BUTTON_PRESS = "button_press"
