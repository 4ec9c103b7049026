from __future__ import annotations

from django.db.models import QuerySet

from parish.domain.models import ScheduleVolunteer
from parish.domain.repositories import ParticipationRepository
from parish.security.tokens import Identity
from parish.services.schedules import scoped_ministry_ids

EXPORT_FORMATS = ("xlsx", "ics")


def report_queryset(actor: Identity) -> QuerySet[ScheduleVolunteer]:
    """Participações visíveis no relatório (coordenador: só os seus ministérios), por data."""
    return (
        ParticipationRepository.in_ministries(scoped_ministry_ids(actor))
        .order_by("schedule__date", "schedule__time", "volunteer__name")
    )
