from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError, QuerySet

from parish.domain.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)
from parish.domain.models import Address, MinistryMember, User, UserRole, UserStatus
from parish.domain.repositories import MinistryRepository, UserRepository
from parish.domain.roles import MANAGEABLE_ROLES, can_manage
from parish.security.tokens import Identity
from parish.services.audit import audit, snapshot_instance

log = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Email, CPF ou RG já está em uso."
UPDATE_DUPLICATE_MESSAGE = "Email, CPF ou RG já está em uso por outro membro."

# =========================
# Helpers
# =========================

def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()

def _unique_ids(ids: Iterable[int]) -> List[int]:
    return list(dict.fromkeys(int(i) for i in ids))

def _ensure_can_assign_role(actor: Identity, role: str) -> None:
    """Coordenador só cria/define Voluntários; Diretor só Coordenadores e Voluntários."""
    if can_manage(actor.role, role):
        return
    if actor.role == UserRole.COORDINATOR:
        raise AuthorizationError("Coordenadores só podem criar Voluntários.")
    if actor.role == UserRole.DIRECTOR:
        raise ValidationError("Tipo de utilizador inválido.")
    raise AuthorizationError()

def _ensure_can_touch(actor: Identity, target: User, verb: str) -> None:
    """Diretores são intocáveis; coordenadores só alteram voluntários."""
    if target.role == UserRole.DIRECTOR:
        raise AuthorizationError(f"Não é permitido {verb} um Diretor.")
    if not can_manage(actor.role, target.role):
        raise AuthorizationError(f"Coordenadores só podem {verb} Voluntários.")

def _ensure_ministries_exist(ministry_ids: List[int]) -> None:
    if not ministry_ids:
        raise ValidationError("Selecione pelo menos um ministério.")
    missing = MinistryRepository.missing_ids(ministry_ids)
    if missing:
        raise ValidationError(f"Ministério(s) inexistente(s): {sorted(missing)}")

def _ensure_unique(
    email: str, cpf: str, rg: str, exclude_id: int | None = None, message: str = DUPLICATE_MESSAGE
) -> None:
    taken = UserRepository.duplicated_fields(email, cpf, rg, exclude_id=exclude_id)
    if taken:
        log.info("Member uniqueness violated on %s", ", ".join(taken))
        raise ConflictError(message)

def _replace_ministries(user: User, ministry_ids: List[int]) -> None:
    MinistryMember.objects.filter(user=user).delete()
    MinistryMember.objects.bulk_create(
        [MinistryMember(user=user, ministry_id=mid) for mid in ministry_ids]
    )

# =========================
# Service Layer
# =========================

class MemberService:
    """Serviço de negócio para usuários/membros."""

    @staticmethod
    def list(actor: Identity) -> QuerySet[User]:
        """Coordenador vê todos os voluntários; Diretor vê coordenadores e voluntários."""
        return UserRepository.with_roles(MANAGEABLE_ROLES.get(actor.role, frozenset()))

    @staticmethod
    def get(actor: Identity, user_id: int) -> User:
        user = UserRepository.detail(user_id)
        if not user:
            raise NotFoundError("Membro não encontrado.")
        if not can_manage(actor.role, user.role):
            raise AuthorizationError()
        return user

    @staticmethod
    def create(actor: Identity, data: Dict[str, Any]) -> User:
        """Cria usuário + endereço + vínculos de ministério como uma unidade atômica.

        Args:
            actor (Identity): Quem está criando (define quais papéis são permitidos).
            data (Dict[str, Any]): Dados validados (name, email, phone, cpf, rg, address,
                password, role, ministries).

        Returns:
            User: O usuário criado.
        """
        _ensure_can_assign_role(actor, data["role"])
        if not data.get("password"):
            raise ValidationError("Todos os campos são obrigatórios.")

        email = _normalize_email(data["email"])
        ministry_ids = _unique_ids(data.get("ministries") or [])
        _ensure_ministries_exist(ministry_ids)
        _ensure_unique(email, data["cpf"], data["rg"])

        try:
            with transaction.atomic():
                user = User(
                    name=data["name"],
                    email=email,
                    phone=data.get("phone"),
                    cpf=data["cpf"],
                    rg=data["rg"],
                    role=data["role"],
                    status=UserStatus.ACTIVE,
                )
                user.set_password(data["password"])
                user.save()
                Address.objects.create(user=user, **data["address"])
                _replace_ministries(user, ministry_ids)
                audit("create", user, after=snapshot_instance(user), author_id=actor.id)
        except IntegrityError:
            # só colisão de email/cpf/rg vira 409; outras falhas de integridade sobem
            _ensure_unique(email, data["cpf"], data["rg"])
            raise

        log.info("Member %s created by user %s (role=%s)", user.id, actor.id, user.role)
        return user

    @staticmethod
    def update(actor: Identity, user_id: int, data: Dict[str, Any]) -> User:
        """Atualiza dados, substitui endereço e o conjunto de ministérios numa transação."""
        target = UserRepository.by_id(user_id)
        if not target:
            raise NotFoundError("Membro não encontrado.")
        _ensure_can_touch(actor, target, "editar")
        _ensure_can_assign_role(actor, data["role"])

        email = _normalize_email(data["email"])
        ministry_ids = _unique_ids(data.get("ministries") or [])
        _ensure_ministries_exist(ministry_ids)
        _ensure_unique(email, data["cpf"], data["rg"], exclude_id=target.id, message=UPDATE_DUPLICATE_MESSAGE)

        before = snapshot_instance(target)
        try:
            with transaction.atomic():
                target.name = data["name"]
                target.email = email
                target.phone = data.get("phone")
                target.cpf = data["cpf"]
                target.rg = data["rg"]
                target.role = data["role"]
                if data.get("password"):
                    target.set_password(data["password"])
                target.save()
                Address.objects.update_or_create(user=target, defaults=data["address"])
                _replace_ministries(target, ministry_ids)
                audit("update", target, before=before, after=snapshot_instance(target), author_id=actor.id)
        except IntegrityError:
            _ensure_unique(email, data["cpf"], data["rg"], exclude_id=target.id, message=UPDATE_DUPLICATE_MESSAGE)
            raise
        return target

    @staticmethod
    def toggle_status(actor: Identity, user_id: int) -> User:
        target = UserRepository.by_id(user_id)
        if not target:
            raise NotFoundError("Membro não encontrado.")
        _ensure_can_touch(actor, target, "alterar o status de")

        before = snapshot_instance(target)
        target.status = UserStatus.INACTIVE if target.status == UserStatus.ACTIVE else UserStatus.ACTIVE
        with transaction.atomic():
            target.save(update_fields=["status"])
            audit("toggle_status", target, before=before, after=snapshot_instance(target), author_id=actor.id)
        return target

    @staticmethod
    def delete(actor: Identity, user_id: int) -> None:
        if user_id == actor.id:
            raise ValidationError("Não pode excluir a si mesmo.")
        target = UserRepository.by_id(user_id)
        if not target:
            raise NotFoundError("Membro não encontrado.")
        _ensure_can_touch(actor, target, "excluir")

        before = snapshot_instance(target)
        try:
            with transaction.atomic():
                target.delete()
                audit("delete", target, before=before, author_id=actor.id, record_id=str(user_id))
        except (ProtectedError, IntegrityError):
            raise ReferentialIntegrityError(
                "Não é possível excluir: este membro está vinculado a escalas ou outras atividades."
            )
        log.info("Member %s deleted by user %s", user_id, actor.id)
