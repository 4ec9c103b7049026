from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError, QuerySet

from parish.domain.errors import ConflictError, NotFoundError, ReferentialIntegrityError, ValidationError
from parish.domain.models import Ministry
from parish.domain.repositories import MinistryMemberRepository, MinistryRepository
from parish.security.tokens import Identity
from parish.services.audit import audit, snapshot_instance

log = logging.getLogger(__name__)

# =========================
# Validação
# =========================

def _clean(data: Dict[str, Any]) -> Tuple[str, str, str]:
    """Valida e normaliza (nome, descrição, cor)."""
    name = (data.get("name") or "").strip()
    description = (data.get("description") or "").strip()
    color = (data.get("color") or "").strip()
    if len(name) < 2:
        raise ValidationError("Nome deve ter pelo menos 2 caracteres")
    if len(description) < 10:
        raise ValidationError("Descrição deve ter pelo menos 10 caracteres")
    return name, description, color

def _get_or_404(ministry_id: int) -> Ministry:
    ministry = Ministry.objects.filter(id=ministry_id).first()
    if not ministry:
        raise NotFoundError("Ministério não encontrado.")
    return ministry

# =========================
# Service Layer
# =========================

class MinistryService:
    """Serviço de negócio para ministérios."""

    @staticmethod
    def list() -> QuerySet[Ministry]:
        """Ministérios com a contagem de membros (`members_count`)."""
        return MinistryRepository.with_member_count()

    @staticmethod
    def create(actor: Identity, data: Dict[str, Any]) -> Ministry:
        name, description, color = _clean(data)
        if MinistryRepository.name_taken(name):
            raise ConflictError("Já existe um ministério com esse nome")
        try:
            with transaction.atomic():
                ministry = Ministry.objects.create(
                    name=name, description=description, color=color, is_active=True
                )
                audit("create", ministry, after=snapshot_instance(ministry), author_id=actor.id)
        except IntegrityError:
            raise ConflictError("Já existe um ministério com esse nome")
        return ministry

    @staticmethod
    def update(actor: Identity, ministry_id: int, data: Dict[str, Any]) -> Ministry:
        name, description, color = _clean(data)
        ministry = _get_or_404(ministry_id)
        if MinistryRepository.name_taken(name, exclude_id=ministry.id):
            raise ConflictError("Já existe outro ministério com esse nome")

        before = snapshot_instance(ministry)
        ministry.name, ministry.description, ministry.color = name, description, color
        try:
            with transaction.atomic():
                ministry.save(update_fields=["name", "description", "color"])
                audit("update", ministry, before=before, after=snapshot_instance(ministry), author_id=actor.id)
        except IntegrityError:
            raise ConflictError("Já existe outro ministério com esse nome")
        return ministry

    @staticmethod
    def toggle_status(actor: Identity, ministry_id: int) -> Ministry:
        ministry = _get_or_404(ministry_id)
        before = snapshot_instance(ministry)
        ministry.is_active = not ministry.is_active
        with transaction.atomic():
            ministry.save(update_fields=["is_active"])
            audit("toggle_status", ministry, before=before, after=snapshot_instance(ministry), author_id=actor.id)
        return ministry

    @staticmethod
    def delete(actor: Identity, ministry_id: int) -> None:
        ministry = _get_or_404(ministry_id)
        if MinistryMemberRepository.count_for_ministry(ministry.id) > 0:
            raise ReferentialIntegrityError(
                "Não é possível excluir um ministério que possui membros vinculados."
            )
        before = snapshot_instance(ministry)
        try:
            with transaction.atomic():
                ministry.delete()
                audit("delete", ministry, before=before, author_id=actor.id, record_id=str(ministry_id))
        except (ProtectedError, IntegrityError):
            raise ReferentialIntegrityError(
                "Não é possível excluir um ministério que possui escalas vinculadas."
            )
        log.info("Ministry %s deleted by user %s", ministry_id, actor.id)
