import itertools
from datetime import date, time, timedelta

import pytest
from rest_framework.test import APIClient

from parish.domain.models import (
    Address,
    Ministry,
    MinistryMember,
    ParticipationStatus,
    Schedule,
    ScheduleVolunteer,
    User,
    UserRole,
    UserStatus,
)
from parish.security.tokens import Identity, issue

_seq = itertools.count(1)

PASSWORD = "secret123"


def auth_client(user) -> APIClient:
    client = APIClient()
    token = issue(Identity(id=user.id, role=user.role))
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return client


@pytest.fixture
def make_user(db):
    def _make(role=UserRole.VOLUNTEER, *, name=None, email=None, status=UserStatus.ACTIVE, ministries=()):
        n = next(_seq)
        user = User.objects.create_user(
            email or f"user{n}@paroquia.com",
            PASSWORD,
            name=name or f"Pessoa {n}",
            role=role,
            status=status,
            cpf=f"{n:03d}.000.000-00",
            rg=f"{n:02d}.000.000-0",
        )
        Address.objects.create(user=user, street="Rua A", number=str(n), city="Recife", state="PE", zip_code="50000-000")
        for m in ministries:
            MinistryMember.objects.create(user=user, ministry=m)
        return user
    return _make


@pytest.fixture
def make_ministry(db):
    def _make(name=None, **extra):
        n = next(_seq)
        extra.setdefault("description", "Ministério de serviço da comunidade.")
        extra.setdefault("color", "#123456")
        return Ministry.objects.create(name=name or f"Ministério {n}", **extra)
    return _make


@pytest.fixture
def make_schedule(db):
    def _make(ministry, created_by, volunteers=(), *, day=None, at=time(19, 30), kind="Missa", statuses=None):
        schedule = Schedule.objects.create(
            type=kind,
            date=day or date.today() + timedelta(days=7),
            time=at,
            ministry=ministry,
            created_by=created_by,
        )
        statuses = statuses or {}
        for v in volunteers:
            ScheduleVolunteer.objects.create(
                schedule=schedule, volunteer=v, status=statuses.get(v.id, ParticipationStatus.PENDING)
            )
        return schedule
    return _make


@pytest.fixture
def liturgy(make_ministry):
    return make_ministry("Liturgia")


@pytest.fixture
def music(make_ministry):
    return make_ministry("Música")


@pytest.fixture
def director(make_user):
    return make_user(UserRole.DIRECTOR, name="Diretor", email="director@paroquia.com")


@pytest.fixture
def coordinator(make_user, liturgy):
    return make_user(UserRole.COORDINATOR, name="Coordenadora", ministries=[liturgy])


@pytest.fixture
def volunteer(make_user, liturgy):
    return make_user(UserRole.VOLUNTEER, name="Voluntário", ministries=[liturgy])


@pytest.fixture
def director_client(director):
    return auth_client(director)


@pytest.fixture
def coordinator_client(coordinator):
    return auth_client(coordinator)


@pytest.fixture
def volunteer_client(volunteer):
    return auth_client(volunteer)


@pytest.fixture
def client_for():
    return auth_client
