"""
Mensagens localizadas.

As mensagens são registradas por idioma e resolvidas pela chave. Argumentos
posicionais entram com ``str.format`` ("{0}").
"""
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"


class Lang:
    """Chaves das mensagens do plugin."""

    ERROR_NO_PERMISSION = "Error.NoPermission"
    ERROR_ALREADY_REGISTERED = "Error.AlreadyRegistered"
    ERROR_NO_BUTTON_IN_SIGHT = "Error.NoButtonInSight"
    ERROR_NO_BUTTON_IN_RANGE = "Error.NoButtonInRange"
    ERROR_COOLDOWN_ACTIVE = "Error.CooldownActive"
    INFO_BUTTON_REGISTERED = "Info.ButtonRegistered"


DEFAULT_MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        Lang.ERROR_NO_PERMISSION: "You do not have permission to use this command.",
        Lang.ERROR_ALREADY_REGISTERED: "This button already has commands assigned.",
        Lang.ERROR_NO_BUTTON_IN_SIGHT: "You must be looking directly at a button to register it.",
        Lang.ERROR_NO_BUTTON_IN_RANGE: "You are too far away from the button to register it.",
        Lang.ERROR_COOLDOWN_ACTIVE: "You must wait {0} before using this button again.",
        Lang.INFO_BUTTON_REGISTERED: "Button registered successfully. It will now run the assigned commands.",
    },
    "pt-br": {
        Lang.ERROR_NO_PERMISSION: "Você não tem permissão para usar este comando.",
        Lang.ERROR_ALREADY_REGISTERED: "Este botão já tem comandos atribuídos.",
        Lang.ERROR_NO_BUTTON_IN_SIGHT: "Você precisa estar olhando diretamente para um botão para registrá-lo.",
        Lang.ERROR_NO_BUTTON_IN_RANGE: "Você está longe demais do botão para registrá-lo.",
        Lang.ERROR_COOLDOWN_ACTIVE: "Aguarde {0} antes de usar este botão novamente.",
        Lang.INFO_BUTTON_REGISTERED: "Botão registrado com sucesso. Ele agora executará os comandos atribuídos.",
    },
}


class Localizer:
    """Tabelas de mensagens por idioma."""

    def __init__(self, default_language: str = DEFAULT_LANGUAGE):
        self.default_language = default_language
        self._messages: Dict[str, Dict[str, str]] = {}

    def register_messages(self, messages: Dict[str, str], language: str = DEFAULT_LANGUAGE):
        """Registra mensagens sem sobrescrever as já existentes."""
        table = self._messages.setdefault(language.lower(), {})
        for key, text in messages.items():
            table.setdefault(key, text)

    def register_defaults(self):
        for language, messages in DEFAULT_MESSAGES.items():
            self.register_messages(messages, language)

    def get_message(self, key: str, language: Optional[str] = None, *args) -> str:
        """
        Resolve a mensagem para o idioma.

        Cai para o idioma padrão e, por último, para a própria chave.
        """
        text = None
        if language:
            text = self._messages.get(language.lower(), {}).get(key)
        if text is None:
            text = self._messages.get(self.default_language, {}).get(key)
        if text is None:
            logger.warning(f"Mensagem sem tradução: {key}")
            text = key

        if args:
            try:
                text = text.format(*args)
            except (IndexError, KeyError, ValueError):
                logger.warning(f"Mensagem '{key}' com formato inválido: {text!r}")
        return text
