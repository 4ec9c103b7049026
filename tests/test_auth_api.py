import pytest
from rest_framework.test import APIClient

from parish.domain.models import UserStatus
from parish.security.tokens import verify

PASSWORD = "secret123"


@pytest.mark.django_db
def test_login_returns_token_and_user_summary(director):
    resp = APIClient().post("/auth/login", {"email": "DIRECTOR@paroquia.com", "password": PASSWORD}, format="json")
    assert resp.status_code == 200
    body = resp.json()
    assert body["user"] == {"id": director.id, "name": "Diretor", "email": "director@paroquia.com", "role": "DIRECTOR"}
    identity = verify(body["token"])
    assert identity.id == director.id and identity.role == "DIRECTOR"


@pytest.mark.django_db
def test_login_failures_are_uniform(director):
    client = APIClient()
    wrong = client.post("/auth/login", {"email": director.email, "password": "nope"}, format="json")
    unknown = client.post("/auth/login", {"email": "ghost@paroquia.com", "password": "nope"}, format="json")
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {"detail": "Email ou senha inválidos."}


@pytest.mark.django_db
def test_login_rejects_inactive_account(make_user):
    user = make_user(status=UserStatus.INACTIVE)
    resp = APIClient().post("/auth/login", {"email": user.email, "password": PASSWORD}, format="json")
    assert resp.status_code == 403


@pytest.mark.django_db
def test_login_requires_fields():
    resp = APIClient().post("/auth/login", {"email": "a@b.com"}, format="json")
    assert resp.status_code == 400


@pytest.mark.django_db
def test_me_returns_token_subject(volunteer, volunteer_client):
    resp = volunteer_client.get("/auth/me")
    assert resp.status_code == 200
    assert resp.json()["id"] == volunteer.id


@pytest.mark.django_db
def test_me_for_deleted_account_is_404(volunteer, volunteer_client):
    volunteer.delete()
    assert volunteer_client.get("/auth/me").status_code == 404

# =========================
# Gate de autenticação
# =========================

@pytest.mark.django_db
def test_missing_header_is_401():
    resp = APIClient().get("/auth/me")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Autenticação necessária. Token não fornecido."
    assert resp["WWW-Authenticate"].startswith("Bearer")


@pytest.mark.django_db
def test_malformed_header_is_401():
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION="Token abc")
    resp = client.get("/auth/me")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token mal formatado."


@pytest.mark.django_db
def test_invalid_token_is_401():
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION="Bearer abc.def.ghi")
    resp = client.get("/auth/me")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token inválido ou expirado."


@pytest.mark.django_db
def test_role_not_allowed_is_403(volunteer_client):
    resp = volunteer_client.get("/members")
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Acesso negado. Não tem permissão para este recurso."


@pytest.mark.django_db
def test_health_needs_no_token():
    resp = APIClient().get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
