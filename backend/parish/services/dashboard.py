from __future__ import annotations

from typing import Dict

from django.utils import timezone

from parish.domain.models import UserRole
from parish.domain.repositories import ParticipationRepository, UserRepository
from parish.domain.roles import MANAGERS
from parish.security.tokens import Identity
from parish.services.schedules import scoped_ministry_ids


def summary(actor: Identity) -> Dict[str, int]:
    """Números dos cartões da página inicial, conforme o papel.

    Gestores: voluntários ativos (total geral), participações pendentes e confirmações
    de hoje (restritas aos ministérios do coordenador). Voluntários: próximas escalas e
    participações aguardando confirmação.

    Args:
        actor (Identity): O usuário autenticado.

    Returns:
        Dict[str, int]: Os contadores.
    """
    today = timezone.localdate()
    if actor.role in MANAGERS:
        ministry_ids = scoped_ministry_ids(actor)
        return {
            "activeVolunteers": UserRepository.active_volunteers_count(),
            "pendingParticipations": ParticipationRepository.count_pending(ministry_ids),
            "confirmationsToday": ParticipationRepository.count_confirmed_on(today, ministry_ids),
        }
    if actor.role == UserRole.VOLUNTEER:
        return {
            "upcomingSchedules": ParticipationRepository.count_upcoming_for(actor.id, today),
            "pendingConfirmation": ParticipationRepository.count_pending_for(actor.id),
        }
    return {}
