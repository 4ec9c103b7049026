from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Set

from django.db.models import Count, Q, QuerySet

from parish.domain.models import (
    Ministry,
    MinistryMember,
    ParticipationStatus,
    Schedule,
    ScheduleVolunteer,
    User,
    UserRole,
    UserStatus,
)

# ==========================================================
# User Repository
# ==========================================================
class UserRepository:
    """Repositório para operações relacionadas a User."""

    @classmethod
    def by_id(cls, user_id: int) -> Optional[User]:
        return User.objects.filter(id=user_id).first()

    @classmethod
    def by_email(cls, email: str) -> Optional[User]:
        """Busca pelo e-mail normalizado (minúsculas)."""
        return User.objects.filter(email=(email or "").strip().lower()).first()

    @classmethod
    def with_roles(cls, roles: Iterable[str]) -> QuerySet[User]:
        """Retorna os usuários dos papéis informados, com endereço e ministérios carregados.

        Args:
            roles (Iterable[str]): Os papéis a serem listados.

        Returns:
            QuerySet[User]: Os usuários, do mais recente para o mais antigo.
        """
        return (
            User.objects
            .filter(role__in=list(roles))
            .select_related("address")
            .prefetch_related("ministries__ministry")
            .order_by("-created_at")
        )

    @classmethod
    def detail(cls, user_id: int) -> Optional[User]:
        return (
            User.objects
            .filter(id=user_id)
            .select_related("address")
            .prefetch_related("ministries__ministry")
            .first()
        )

    @classmethod
    def duplicated_fields(cls, email: str, cpf: str, rg: str, exclude_id: Optional[int] = None) -> List[str]:
        """Retorna quais campos únicos (email, cpf, rg) já estão em uso por outro usuário."""
        qs = User.objects.filter(Q(email=email) | Q(cpf=cpf) | Q(rg=rg))
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        taken: Set[str] = set()
        for u_email, u_cpf, u_rg in qs.values_list("email", "cpf", "rg"):
            if u_email == email:
                taken.add("email")
            if u_cpf == cpf:
                taken.add("cpf")
            if u_rg == rg:
                taken.add("rg")
        return sorted(taken)

    @classmethod
    def missing_ids(cls, ids: Iterable[int]) -> Set[int]:
        wanted = set(ids)
        found = set(User.objects.filter(id__in=wanted).values_list("id", flat=True))
        return wanted - found

    @classmethod
    def active_volunteers_count(cls) -> int:
        return User.objects.filter(role=UserRole.VOLUNTEER, status=UserStatus.ACTIVE).count()

# ==========================================================
# Ministry Repository
# ==========================================================
class MinistryRepository:
    """Repositório para operações relacionadas a Ministry."""

    @classmethod
    def with_member_count(cls) -> QuerySet[Ministry]:
        return Ministry.objects.annotate(members_count=Count("members")).order_by("created_at")

    @classmethod
    def name_taken(cls, name: str, exclude_id: Optional[int] = None) -> bool:
        """Verifica se já existe ministério com exatamente este nome."""
        qs = Ministry.objects.filter(name=name)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        return qs.exists()

    @classmethod
    def missing_ids(cls, ids: Iterable[int]) -> Set[int]:
        wanted = set(ids)
        found = set(Ministry.objects.filter(id__in=wanted).values_list("id", flat=True))
        return wanted - found

# ==========================================================
# MinistryMember Repository
# ==========================================================
class MinistryMemberRepository:
    """Repositório para os vínculos usuário <-> ministério."""

    @classmethod
    def ministry_ids_for(cls, user_id: int) -> List[int]:
        return list(
            MinistryMember.objects.filter(user_id=user_id).values_list("ministry_id", flat=True)
        )

    @classmethod
    def is_member(cls, user_id: int, ministry_id: int) -> bool:
        return MinistryMember.objects.filter(user_id=user_id, ministry_id=ministry_id).exists()

    @classmethod
    def count_for_ministry(cls, ministry_id: int) -> int:
        return MinistryMember.objects.filter(ministry_id=ministry_id).count()

# ==========================================================
# Schedule Repository
# ==========================================================
class ScheduleRepository:
    """Repositório para operações relacionadas a Schedule."""

    @classmethod
    def with_volunteers(cls, ministry_ids: Optional[Iterable[int]] = None) -> QuerySet[Schedule]:
        """Retorna as escalas (opcionalmente restritas a ministérios) com participações carregadas.

        Args:
            ministry_ids (Optional[Iterable[int]], optional): Ministérios permitidos; None = todos.

        Returns:
            QuerySet[Schedule]: As escalas, das mais recentes para as mais antigas.
        """
        qs = (
            Schedule.objects
            .select_related("ministry")
            .prefetch_related("volunteers__volunteer")
            .order_by("-date", "-time")
        )
        if ministry_ids is not None:
            qs = qs.filter(ministry_id__in=list(ministry_ids))
        return qs

    @classmethod
    def by_id(cls, schedule_id: int) -> Optional[Schedule]:
        return Schedule.objects.filter(id=schedule_id).first()

# ==========================================================
# Participation Repository
# ==========================================================
class ParticipationRepository:
    """Repositório para operações relacionadas a ScheduleVolunteer."""

    @classmethod
    def base_qs(cls) -> QuerySet[ScheduleVolunteer]:
        return ScheduleVolunteer.objects.select_related("volunteer", "schedule", "schedule__ministry")

    @classmethod
    def for_volunteer(cls, volunteer_id: int) -> QuerySet[ScheduleVolunteer]:
        return cls.base_qs().filter(volunteer_id=volunteer_id).order_by("schedule__date", "schedule__time")

    @classmethod
    def all_ordered(cls) -> QuerySet[ScheduleVolunteer]:
        return cls.base_qs().order_by("schedule__date", "schedule__time", "volunteer__name")

    @classmethod
    def in_ministries(cls, ministry_ids: Optional[Iterable[int]]) -> QuerySet[ScheduleVolunteer]:
        """Participações restritas aos ministérios informados (None = todas)."""
        qs = cls.base_qs()
        if ministry_ids is not None:
            qs = qs.filter(schedule__ministry_id__in=list(ministry_ids))
        return qs

    @classmethod
    def volunteer_ids_for(cls, schedule_id: int) -> Set[int]:
        return set(
            ScheduleVolunteer.objects.filter(schedule_id=schedule_id).values_list("volunteer_id", flat=True)
        )

    @classmethod
    def owned(cls, participation_id: int, volunteer_id: int) -> Optional[ScheduleVolunteer]:
        return ScheduleVolunteer.objects.filter(id=participation_id, volunteer_id=volunteer_id).first()

    @classmethod
    def transition_from_pending(cls, participation_id: int, volunteer_id: int, **changes) -> int:
        """Aplica `changes` somente se a participação pertence ao voluntário e está PENDING.

        Escrita única e condicional (compare-and-set): duas chamadas concorrentes sobre a
        mesma participação resultam em exatamente uma linha afetada.

        Args:
            participation_id (int): O ID da participação.
            volunteer_id (int): O ID do voluntário dono da participação.

        Returns:
            int: Número de linhas afetadas (0 ou 1).
        """
        return (
            ScheduleVolunteer.objects
            .filter(id=participation_id, volunteer_id=volunteer_id, status=ParticipationStatus.PENDING)
            .update(**changes)
        )

    @classmethod
    def count_pending(cls, ministry_ids: Optional[Iterable[int]] = None) -> int:
        return cls.in_ministries(ministry_ids).filter(status=ParticipationStatus.PENDING).count()

    @classmethod
    def count_confirmed_on(cls, day: date, ministry_ids: Optional[Iterable[int]] = None) -> int:
        return (
            cls.in_ministries(ministry_ids)
            .filter(status=ParticipationStatus.CONFIRMED, confirmed_at__date=day)
            .count()
        )

    @classmethod
    def count_upcoming_for(cls, volunteer_id: int, today: date) -> int:
        return ScheduleVolunteer.objects.filter(volunteer_id=volunteer_id, schedule__date__gte=today).count()

    @classmethod
    def count_pending_for(cls, volunteer_id: int) -> int:
        return ScheduleVolunteer.objects.filter(
            volunteer_id=volunteer_id, status=ParticipationStatus.PENDING
        ).count()
