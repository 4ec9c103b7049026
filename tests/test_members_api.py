import itertools

import pytest
from django.db import IntegrityError

from parish.domain.models import AuditLog, MinistryMember, User, UserRole, UserStatus
from parish.domain.repositories import UserRepository

_n = itertools.count(500)


def payload(member_of, **overrides):
    n = next(_n)
    data = {
        "name": f"Novo Membro {n}",
        "email": f"Novo{n}@Paroquia.com",
        "phone": "(81) 99999-0000",
        "cpf": f"{n:03d}.111.111-11",
        "rg": f"{n}.111.111",
        "address": {
            "street": "Rua das Flores", "number": "10", "complement": "",
            "neighborhood": "Centro", "city": "Recife", "state": "PE", "zipCode": "50000-000",
        },
        "password": "secret123",
        "role": "VOLUNTEER",
        "ministries": [m.id for m in member_of],
    }
    data.update(overrides)
    return data

# =========================
# Listagem
# =========================

@pytest.mark.django_db
def test_director_lists_coordinators_and_volunteers(director_client, director, coordinator, volunteer):
    ids = {m["id"] for m in director_client.get("/members").json()}
    assert ids == {coordinator.id, volunteer.id}


@pytest.mark.django_db
def test_coordinator_lists_only_volunteers(coordinator_client, coordinator, volunteer, liturgy):
    body = coordinator_client.get("/members").json()
    assert [m["id"] for m in body] == [volunteer.id]
    assert body[0]["ministryDetails"] == [{"id": liturgy.id, "name": "Liturgia", "color": "#123456"}]
    assert body[0]["address"]["zipCode"] == "50000-000"


@pytest.mark.django_db
def test_coordinator_cannot_read_coordinator(coordinator_client, make_user):
    other = make_user(UserRole.COORDINATOR)
    assert coordinator_client.get(f"/members/{other.id}").status_code == 403

# =========================
# Criação
# =========================

@pytest.mark.django_db
def test_director_creates_volunteer_atomically(director_client, director, liturgy, music):
    resp = director_client.post("/members", payload([liturgy, music]), format="json")
    assert resp.status_code == 201
    body = resp.json()
    user = User.objects.get(id=body["id"])
    assert user.email == user.email.lower()
    assert user.check_password("secret123")
    assert user.address.city == "Recife"
    assert sorted(body["ministries"]) == sorted([liturgy.id, music.id])
    assert "password" not in body

    log = AuditLog.objects.get(action="create", table="parish_user", record_id=str(user.id))
    assert log.author_id == director.id
    assert "password" not in log.after


@pytest.mark.django_db
def test_coordinator_cannot_create_director(coordinator_client, liturgy):
    resp = coordinator_client.post("/members", payload([liturgy], role="DIRECTOR"), format="json")
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Coordenadores só podem criar Voluntários."


@pytest.mark.django_db
def test_coordinator_cannot_create_coordinator(coordinator_client, liturgy):
    resp = coordinator_client.post("/members", payload([liturgy], role="COORDINATOR"), format="json")
    assert resp.status_code == 403


@pytest.mark.django_db
def test_director_cannot_create_director(director_client, liturgy):
    resp = director_client.post("/members", payload([liturgy], role="DIRECTOR"), format="json")
    assert resp.status_code == 400


@pytest.mark.django_db
def test_duplicate_email_is_409_case_insensitive(director_client, volunteer, liturgy):
    resp = director_client.post("/members", payload([liturgy], email=volunteer.email.upper()), format="json")
    assert resp.status_code == 409


@pytest.mark.django_db
def test_duplicate_cpf_is_409(director_client, volunteer, liturgy):
    resp = director_client.post("/members", payload([liturgy], cpf=volunteer.cpf), format="json")
    assert resp.status_code == 409


@pytest.mark.django_db
def test_create_requires_fields_and_ministries(director_client, liturgy):
    assert director_client.post("/members", {"name": "X"}, format="json").status_code == 400
    assert director_client.post("/members", payload([], ministries=[]), format="json").status_code == 400
    unknown = director_client.post("/members", payload([], ministries=[9999]), format="json")
    assert unknown.status_code == 400
    assert unknown.json()["detail"] == "Ministério(s) inexistente(s): [9999]"


@pytest.mark.django_db
def test_failed_membership_insert_rolls_back_user(director_client, liturgy, monkeypatch):
    def boom(user, ministry_ids):
        raise IntegrityError("forced")

    monkeypatch.setattr("parish.services.members._replace_ministries", boom)
    data = payload([liturgy])
    resp = director_client.post("/members", data, format="json")
    assert resp.status_code == 500
    assert not User.objects.filter(cpf=data["cpf"]).exists()
    assert not AuditLog.objects.filter(action="create").exists()


@pytest.mark.django_db
def test_unique_clash_missed_by_precheck_is_409(director_client, volunteer, liturgy, monkeypatch):
    real = UserRepository.duplicated_fields
    calls = []

    def racing(*args, **kwargs):
        calls.append(args)
        # primeira consulta não vê o registro concorrente
        return [] if len(calls) == 1 else real(*args, **kwargs)

    monkeypatch.setattr(UserRepository, "duplicated_fields", racing)
    resp = director_client.post("/members", payload([liturgy], cpf=volunteer.cpf), format="json")
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Email, CPF ou RG já está em uso."
    assert len(calls) == 2

# =========================
# Atualização / status
# =========================

@pytest.mark.django_db
def test_update_replaces_address_ministries_and_password(coordinator_client, volunteer, liturgy, music):
    data = payload([music], email=volunteer.email, cpf=volunteer.cpf, rg=volunteer.rg, password="novasenha")
    data["address"]["city"] = "Olinda"
    resp = coordinator_client.put(f"/members/{volunteer.id}", data, format="json")
    assert resp.status_code == 200

    volunteer.refresh_from_db()
    assert volunteer.address.city == "Olinda"
    assert list(MinistryMember.objects.filter(user=volunteer).values_list("ministry_id", flat=True)) == [music.id]
    assert volunteer.check_password("novasenha")


@pytest.mark.django_db
def test_update_without_password_keeps_it(director_client, volunteer, liturgy):
    data = payload([liturgy], email=volunteer.email, cpf=volunteer.cpf, rg=volunteer.rg)
    data.pop("password")
    assert director_client.put(f"/members/{volunteer.id}", data, format="json").status_code == 200
    volunteer.refresh_from_db()
    assert volunteer.check_password("secret123")


@pytest.mark.django_db
def test_coordinator_cannot_update_coordinator(coordinator_client, make_user, liturgy):
    other = make_user(UserRole.COORDINATOR)
    data = payload([liturgy], email=other.email, cpf=other.cpf, rg=other.rg, role="COORDINATOR")
    assert coordinator_client.put(f"/members/{other.id}", data, format="json").status_code == 403


@pytest.mark.django_db
def test_toggle_status_flips(director_client, volunteer):
    resp = director_client.put(f"/members/{volunteer.id}/toggle-status")
    assert resp.status_code == 200
    assert resp.json()["status"] == UserStatus.INACTIVE
    director_client.put(f"/members/{volunteer.id}/toggle-status")
    volunteer.refresh_from_db()
    assert volunteer.status == UserStatus.ACTIVE


@pytest.mark.django_db
def test_toggle_status_missing_is_404(director_client):
    assert director_client.put("/members/9999/toggle-status").status_code == 404

# =========================
# Exclusão
# =========================

@pytest.mark.django_db
def test_coordinator_cannot_delete_director(coordinator_client, director):
    resp = coordinator_client.delete(f"/members/{director.id}")
    assert resp.status_code == 403
    assert User.objects.filter(id=director.id).exists()


@pytest.mark.django_db
def test_cannot_delete_self(director_client, director):
    resp = director_client.delete(f"/members/{director.id}")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Não pode excluir a si mesmo."


@pytest.mark.django_db
def test_delete_linked_member_is_400(director_client, director, volunteer, liturgy, make_schedule):
    make_schedule(liturgy, director, [volunteer])
    resp = director_client.delete(f"/members/{volunteer.id}")
    assert resp.status_code == 400
    assert resp.json()["detail"] == (
        "Não é possível excluir: este membro está vinculado a escalas ou outras atividades."
    )
    assert User.objects.filter(id=volunteer.id).exists()


@pytest.mark.django_db
def test_delete_free_member(director_client, volunteer):
    assert director_client.delete(f"/members/{volunteer.id}").status_code == 204
    assert not User.objects.filter(id=volunteer.id).exists()
    assert AuditLog.objects.filter(action="delete", record_id=str(volunteer.id)).exists()


@pytest.mark.django_db
def test_director_accounts_are_untouchable_even_by_director(director_client, make_user, liturgy):
    other = make_user(UserRole.DIRECTOR)
    data = payload([liturgy], email=other.email, cpf=other.cpf, rg=other.rg, name="Renomeado", role="COORDINATOR")

    responses = [
        director_client.put(f"/members/{other.id}", data, format="json"),
        director_client.put(f"/members/{other.id}/toggle-status"),
        director_client.delete(f"/members/{other.id}"),
    ]
    assert [r.status_code for r in responses] == [403, 403, 403]
    assert responses[0].json()["detail"] == "Não é permitido editar um Diretor."

    other.refresh_from_db()
    assert other.role == UserRole.DIRECTOR
    assert other.status == UserStatus.ACTIVE
    assert other.name != "Renomeado"
