from __future__ import annotations

from typing import Dict, FrozenSet

from parish.domain.models import UserRole

# =========================
# Tabela de permissões (ação -> papéis permitidos)
# =========================

ALL_ROLES: FrozenSet[str] = frozenset(UserRole.values)
MANAGERS: FrozenSet[str] = frozenset({UserRole.DIRECTOR, UserRole.COORDINATOR})
DIRECTOR_ONLY: FrozenSet[str] = frozenset({UserRole.DIRECTOR})

PERMISSIONS: Dict[str, FrozenSet[str]] = {
    "auth.me": ALL_ROLES,

    "members.list": MANAGERS,
    "members.view": MANAGERS,
    "members.create": MANAGERS,
    "members.update": MANAGERS,
    "members.toggle_status": MANAGERS,
    "members.delete": MANAGERS,

    "ministries.list": MANAGERS,
    "ministries.create": DIRECTOR_ONLY,
    "ministries.update": DIRECTOR_ONLY,
    "ministries.toggle_status": DIRECTOR_ONLY,
    "ministries.delete": DIRECTOR_ONLY,

    "schedules.manage": MANAGERS,
    "schedules.my": ALL_ROLES,
    "schedules.all": ALL_ROLES,
    "participations.respond": ALL_ROLES,

    "dashboard.summary": ALL_ROLES,
    "reports.view": MANAGERS,
}

# Papéis que cada papel pode criar/editar/desativar/excluir.
MANAGEABLE_ROLES: Dict[str, FrozenSet[str]] = {
    UserRole.DIRECTOR: frozenset({UserRole.COORDINATOR, UserRole.VOLUNTEER}),
    UserRole.COORDINATOR: frozenset({UserRole.VOLUNTEER}),
    UserRole.VOLUNTEER: frozenset(),
}


def allowed_roles(action: str) -> FrozenSet[str]:
    """Retorna os papéis permitidos para a ação (vazio se a ação não existe)."""
    return PERMISSIONS.get(action, frozenset())


def is_allowed(role: str, action: str) -> bool:
    return role in allowed_roles(action)


def can_manage(actor_role: str, target_role: str) -> bool:
    """Verifica se `actor_role` pode gerir contas com `target_role`."""
    return target_role in MANAGEABLE_ROLES.get(actor_role, frozenset())
