import pytest

from parish.domain.models import Ministry

DESCRIPTION = "Leitores e salmistas das celebrações."


@pytest.mark.django_db
def test_duplicate_name_is_409(director_client):
    first = director_client.post("/ministries", {"name": "Liturgy", "description": DESCRIPTION}, format="json")
    assert first.status_code == 201
    assert first.json()["isActive"] is True

    second = director_client.post("/ministries", {"name": "  Liturgy ", "description": DESCRIPTION}, format="json")
    assert second.status_code == 409
    assert second.json()["detail"] == "Já existe um ministério com esse nome"


@pytest.mark.django_db
def test_rename_to_existing_name_is_409(director_client, liturgy, music):
    resp = director_client.put(f"/ministries/{music.id}", {"name": "Liturgia", "description": DESCRIPTION}, format="json")
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Já existe outro ministério com esse nome"


@pytest.mark.django_db
def test_update_keeping_own_name(director_client, liturgy):
    resp = director_client.put(
        f"/ministries/{liturgy.id}", {"name": "Liturgia", "description": DESCRIPTION, "color": "#ff0000"}, format="json"
    )
    assert resp.status_code == 200
    assert resp.json()["color"] == "#ff0000"


@pytest.mark.django_db
@pytest.mark.parametrize("data, message", [
    ({"name": "A", "description": DESCRIPTION}, "Nome deve ter pelo menos 2 caracteres"),
    ({"name": "Acolhida", "description": "curta"}, "Descrição deve ter pelo menos 10 caracteres"),
    ({}, "Nome deve ter pelo menos 2 caracteres"),
])
def test_create_validation(director_client, data, message):
    resp = director_client.post("/ministries", data, format="json")
    assert resp.status_code == 400
    assert resp.json()["detail"] == message


@pytest.mark.django_db
def test_volunteer_cannot_write(volunteer_client, liturgy):
    assert volunteer_client.post("/ministries", {"name": "X1", "description": DESCRIPTION}, format="json").status_code == 403
    assert volunteer_client.put(f"/ministries/{liturgy.id}", {"name": "X1", "description": DESCRIPTION}, format="json").status_code == 403
    assert volunteer_client.put(f"/ministries/{liturgy.id}/toggle-status").status_code == 403
    assert volunteer_client.delete(f"/ministries/{liturgy.id}").status_code == 403


@pytest.mark.django_db
def test_coordinator_reads_but_cannot_create(coordinator_client, liturgy):
    body = coordinator_client.get("/ministries").json()
    assert body[0]["membersCount"] == 1
    resp = coordinator_client.post("/ministries", {"name": "Nova", "description": DESCRIPTION}, format="json")
    assert resp.status_code == 403


@pytest.mark.django_db
def test_toggle_status(director_client, liturgy):
    resp = director_client.put(f"/ministries/{liturgy.id}/toggle-status")
    assert resp.status_code == 200
    assert resp.json()["isActive"] is False


@pytest.mark.django_db
def test_missing_ministry_is_404(director_client):
    assert director_client.put("/ministries/9999/toggle-status").status_code == 404
    assert director_client.delete("/ministries/9999").status_code == 404


@pytest.mark.django_db
def test_delete_with_members_is_400(director_client, volunteer, liturgy):
    resp = director_client.delete(f"/ministries/{liturgy.id}")
    assert resp.status_code == 400
    assert Ministry.objects.filter(id=liturgy.id).exists()


@pytest.mark.django_db
def test_delete_with_schedules_is_400(director_client, director, music, make_schedule):
    make_schedule(music, director)
    resp = director_client.delete(f"/ministries/{music.id}")
    assert resp.status_code == 400
    assert Ministry.objects.filter(id=music.id).exists()


@pytest.mark.django_db
def test_delete_empty_ministry(director_client, music):
    assert director_client.delete(f"/ministries/{music.id}").status_code == 204
    assert not Ministry.objects.filter(id=music.id).exists()
