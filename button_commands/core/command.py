"""
Decoradores e classes para comandos de console.
"""
from typing import Callable, Optional, List


def command(
    name: str,
    aliases: Optional[List[str]] = None,
    permission: Optional[str] = None,
    description: str = "",
):
    """
    Decorador para registrar um método como comando de console.

    Args:
        name: Nome do comando (ex: "bc.add")
        aliases: Nomes alternativos
        permission: Permissão exigida do jogador (None = livre)
        description: Descrição do comando

    Exemplo:
        @command("bc.add", permission="buttoncommands.admin")
        def cmd_add(self, player, args):
            ...
    """
    def decorator(func: Callable):
        func._command_info = {
            "name": name,
            "aliases": list(aliases or []),
            "permission": permission,
            "description": description,
        }
        return func

    return decorator


class Command:
    """
    Representação de um comando registrado.

    Usado internamente pelo plugin.
    """

    def __init__(
        self,
        name: str,
        handler: Callable,
        aliases: Optional[List[str]] = None,
        permission: Optional[str] = None,
        description: str = "",
    ):
        self.name = name
        self.handler = handler
        self.aliases = list(aliases or [])
        self.permission = permission
        self.description = description

    @classmethod
    def from_handler(cls, handler: Callable) -> 'Command':
        info = handler._command_info
        return cls(
            name=info["name"],
            handler=handler,
            aliases=info["aliases"],
            permission=info["permission"],
            description=info["description"],
        )

    def can_execute(self, host, user_id: str) -> bool:
        """Verifica se o usuário tem a permissão do comando."""
        if not self.permission:
            return True
        return host is not None and host.user_has_permission(user_id, self.permission)
