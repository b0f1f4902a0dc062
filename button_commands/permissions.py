"""
Declaração de permissões do plugin e utilitários de segurança.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Set

logger = logging.getLogger(__name__)

ADMIN = "buttoncommands.admin"

ALLOWED_PERMISSIONS: Dict[str, str] = {
    ADMIN: "Permite registrar botões com o comando bc.add.",
}


class PluginSecurityError(RuntimeError):
    """Disparado quando uma permissão desconhecida é usada."""

    pass


class PermissionManager:
    """
    Registro de permissões por usuário.

    Plugins registram as permissões que declaram; depois elas podem ser
    concedidas a usuários pelo ID da plataforma.
    """

    def __init__(self):
        self._owners: Dict[str, str] = {}
        self._granted: Dict[str, Set[str]] = {}
        self._lock = threading.RLock()

    def register_permission(self, permission: str, owner: str):
        with self._lock:
            self._owners[permission.lower()] = owner
        logger.debug(f"🔐 Permissão registrada: {permission} ({owner})")

    def permission_exists(self, permission: str) -> bool:
        return permission.lower() in self._owners

    def grant(self, user_id: str, permission: str):
        if not self.permission_exists(permission):
            raise PluginSecurityError(f"Permissão não registrada: '{permission}'")
        with self._lock:
            self._granted.setdefault(str(user_id), set()).add(permission.lower())

    def revoke(self, user_id: str, permission: str):
        with self._lock:
            self._granted.get(str(user_id), set()).discard(permission.lower())

    def user_has_permission(self, user_id: str, permission: str) -> bool:
        with self._lock:
            return permission.lower() in self._granted.get(str(user_id), set())
