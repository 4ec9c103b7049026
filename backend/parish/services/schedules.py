from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from parish.domain.errors import AuthorizationError, NotFoundError, ValidationError
from parish.domain.models import (
    Ministry,
    ParticipationStatus,
    Schedule,
    ScheduleVolunteer,
    UserRole,
)
from parish.domain.repositories import (
    MinistryMemberRepository,
    ParticipationRepository,
    ScheduleRepository,
    UserRepository,
)
from parish.security.tokens import Identity
from parish.services.audit import audit, snapshot_instance

log = logging.getLogger(__name__)

# =========================
# Escopo por papel
# =========================

def scoped_ministry_ids(actor: Identity) -> Optional[List[int]]:
    """Ministérios visíveis para o ator: coordenador só os seus; demais, todos (None)."""
    if actor.role == UserRole.COORDINATOR:
        return MinistryMemberRepository.ministry_ids_for(actor.id)
    return None

def _ensure_can_manage_ministry(actor: Identity, ministry_id: int) -> None:
    if actor.role == UserRole.COORDINATOR and not MinistryMemberRepository.is_member(actor.id, ministry_id):
        raise AuthorizationError("Não tem permissão para gerir escalas deste ministério.")

def _validated_refs(data: Dict[str, Any]) -> List[int]:
    """Confere ministério e voluntários referenciados; retorna os IDs de voluntários sem repetição."""
    if not Ministry.objects.filter(id=data["ministry_id"]).exists():
        raise NotFoundError("Ministério não encontrado.")
    volunteer_ids = list(dict.fromkeys(int(v) for v in data.get("volunteers") or []))
    if not volunteer_ids:
        raise ValidationError("Campos obrigatórios em falta.")
    missing = UserRepository.missing_ids(volunteer_ids)
    if missing:
        raise ValidationError(f"Voluntário(s) inexistente(s): {sorted(missing)}")
    return volunteer_ids

@dataclass(frozen=True)
class Reconciliation:
    """Diferença entre o conjunto atual e o novo conjunto de voluntários."""
    to_add: Set[int]
    to_remove: Set[int]
    unchanged: Set[int]

    @classmethod
    def compute(cls, current: Set[int], new: Set[int]) -> "Reconciliation":
        return cls(to_add=new - current, to_remove=current - new, unchanged=current & new)

# =========================
# Service Layer
# =========================

class ScheduleService:
    """Serviço de negócio para escalas e suas participações."""

    @staticmethod
    def list_for_management(actor: Identity) -> QuerySet[Schedule]:
        return ScheduleRepository.with_volunteers(scoped_ministry_ids(actor))

    @staticmethod
    def create(actor: Identity, data: Dict[str, Any]) -> Schedule:
        """Cria a escala e uma participação PENDING por voluntário, atomicamente.

        Args:
            actor (Identity): O criador (coordenador precisa pertencer ao ministério).
            data (Dict[str, Any]): type, date (date), time (time), ministry_id, volunteers, notes.

        Returns:
            Schedule: A escala criada.
        """
        _ensure_can_manage_ministry(actor, data["ministry_id"])
        volunteer_ids = _validated_refs(data)

        with transaction.atomic():
            schedule = Schedule.objects.create(
                type=data["type"],
                date=data["date"],
                time=data["time"],
                notes=data.get("notes"),
                ministry_id=data["ministry_id"],
                created_by_id=actor.id,
            )
            ScheduleVolunteer.objects.bulk_create([
                ScheduleVolunteer(schedule=schedule, volunteer_id=vid, status=ParticipationStatus.PENDING)
                for vid in volunteer_ids
            ])
            audit("create", schedule, after=snapshot_instance(schedule), author_id=actor.id)

        log.info("Schedule %s created by user %s with %d volunteer(s)", schedule.id, actor.id, len(volunteer_ids))
        return schedule

    @staticmethod
    def update(actor: Identity, schedule_id: int, data: Dict[str, Any]) -> Reconciliation:
        """Atualiza os campos da escala e reconcilia as participações numa única transação.

        Voluntários que permanecem na lista mantêm a participação (e o status) intactos.

        Args:
            actor (Identity): Quem está editando.
            schedule_id (int): O ID da escala.
            data (Dict[str, Any]): Os novos dados (mesmo formato de `create`).

        Returns:
            Reconciliation: Os conjuntos adicionados, removidos e mantidos.
        """
        schedule = ScheduleRepository.by_id(schedule_id)
        if not schedule:
            raise NotFoundError("Escala não encontrada.")
        _ensure_can_manage_ministry(actor, schedule.ministry_id)
        _ensure_can_manage_ministry(actor, data["ministry_id"])
        volunteer_ids = _validated_refs(data)

        before = snapshot_instance(schedule)
        with transaction.atomic():
            schedule.type = data["type"]
            schedule.date = data["date"]
            schedule.time = data["time"]
            schedule.notes = data.get("notes")
            schedule.ministry_id = data["ministry_id"]
            schedule.save()

            current = ParticipationRepository.volunteer_ids_for(schedule.id)
            diff = Reconciliation.compute(current, set(volunteer_ids))
            if diff.to_remove:
                ScheduleVolunteer.objects.filter(
                    schedule=schedule, volunteer_id__in=diff.to_remove
                ).delete()
            ScheduleVolunteer.objects.bulk_create([
                ScheduleVolunteer(schedule=schedule, volunteer_id=vid, status=ParticipationStatus.PENDING)
                for vid in volunteer_ids if vid in diff.to_add
            ])
            audit("update", schedule, before=before, after=snapshot_instance(schedule), author_id=actor.id)

        log.info(
            "Schedule %s updated: +%d -%d =%d",
            schedule.id, len(diff.to_add), len(diff.to_remove), len(diff.unchanged),
        )
        return diff

    @staticmethod
    def delete(actor: Identity, schedule_id: int) -> None:
        schedule = ScheduleRepository.by_id(schedule_id)
        if not schedule:
            raise NotFoundError("Escala não encontrada.")
        _ensure_can_manage_ministry(actor, schedule.ministry_id)

        before = snapshot_instance(schedule)
        with transaction.atomic():
            ScheduleVolunteer.objects.filter(schedule=schedule).delete()
            schedule.delete()
            audit("delete", schedule, before=before, author_id=actor.id, record_id=str(schedule_id))

# =========================
# Participações (máquina de estados)
# =========================

class ParticipationService:
    """Transições de status de uma participação, feitas pelo próprio voluntário.

    PENDING -> CONFIRMED | EXCHANGE_REQUESTED. Nenhuma outra transição é permitida.
    """

    @staticmethod
    def my(actor: Identity) -> QuerySet[ScheduleVolunteer]:
        return ParticipationRepository.for_volunteer(actor.id)

    @staticmethod
    def all() -> QuerySet[ScheduleVolunteer]:
        return ParticipationRepository.all_ordered()

    @staticmethod
    def _explain_rejection(participation_id: int, volunteer_id: int, action: str) -> None:
        """Relê o registro apenas para classificar por que a escrita condicional não afetou linhas."""
        current = ParticipationRepository.owned(participation_id, volunteer_id)
        if current is None:
            raise NotFoundError("Participação não encontrada.")
        if current.status == ParticipationStatus.CONFIRMED:
            if action == "confirm":
                raise ValidationError("Esta participação já foi confirmada.")
            raise ValidationError("Não é possível solicitar troca de uma participação já confirmada.")
        if current.status == ParticipationStatus.EXCHANGE_REQUESTED:
            if action == "confirm":
                raise ValidationError("Já foi solicitada troca para esta participação.")
            raise ValidationError("A troca já foi solicitada para esta participação.")
        raise ValidationError("Transição de status inválida.")

    @staticmethod
    def _transition(actor: Identity, participation_id: int, action: str, **changes) -> ScheduleVolunteer:
        with transaction.atomic():
            affected = ParticipationRepository.transition_from_pending(participation_id, actor.id, **changes)
            if affected == 0:
                ParticipationService._explain_rejection(participation_id, actor.id, action)
            participation = ParticipationRepository.base_qs().get(id=participation_id)
            audit(action, participation, before={"status": ParticipationStatus.PENDING},
                  after=snapshot_instance(participation), author_id=actor.id)
        return participation

    @staticmethod
    def confirm(actor: Identity, participation_id: int) -> ScheduleVolunteer:
        return ParticipationService._transition(
            actor, participation_id, "confirm",
            status=ParticipationStatus.CONFIRMED,
            change_reason=None,
            confirmed_at=timezone.now(),
        )

    @staticmethod
    def request_change(actor: Identity, participation_id: int, reason: Optional[str] = None) -> ScheduleVolunteer:
        return ParticipationService._transition(
            actor, participation_id, "request_change",
            status=ParticipationStatus.EXCHANGE_REQUESTED,
            change_reason=(reason or "").strip() or None,
            confirmed_at=None,
        )
