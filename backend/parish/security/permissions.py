from __future__ import annotations

from typing import Dict, Type, Union

from rest_framework import exceptions
from rest_framework.permissions import BasePermission

from parish.domain.roles import allowed_roles
from parish.security.tokens import Identity


class RolePermission(BasePermission):
    """Permite a requisição apenas se o papel da identidade está na lista da ação.

    Deve rodar *após* a autenticação; não faz I/O. `actions` mapeia método HTTP -> ação
    da tabela de permissões (chave "*" vale para qualquer método).
    """
    actions: Dict[str, str] = {}
    message = "Acesso negado. Não tem permissão para este recurso."

    def has_permission(self, request, view) -> bool:
        identity = getattr(request, "user", None)
        if not isinstance(identity, Identity):
            raise exceptions.NotAuthenticated("Autenticação necessária.")
        action = self.actions.get(request.method) or self.actions.get("*", "")
        return identity.role in allowed_roles(action)


def role_required(actions: Union[str, Dict[str, str]]) -> Type[RolePermission]:
    """Cria a classe de permissão configurada para uma (ou uma por método) ação da tabela.

    Args:
        actions (Union[str, Dict[str, str]]): Ação única ou mapa método -> ação.

    Returns:
        Type[RolePermission]: Classe pronta para `@permission_classes`.
    """
    mapping = {"*": actions} if isinstance(actions, str) else dict(actions)
    return type("RolePermission", (RolePermission,), {"actions": mapping})
