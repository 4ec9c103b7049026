from datetime import date, timedelta
from io import BytesIO

import pytest
from django.utils import timezone
from icalendar import Calendar
from openpyxl import load_workbook

from parish.domain.models import ParticipationStatus, ScheduleVolunteer, UserRole, UserStatus


@pytest.fixture
def board(director, coordinator, volunteer, make_user, liturgy, music, make_schedule):
    """Liturgia: voluntário pendente + Ana confirmada hoje. Música: Bia pendente (fora do coordenador)."""
    ana = make_user(name="Ana Souza", ministries=[liturgy])
    bia = make_user(name="Bia Lima", ministries=[music])
    make_user(UserRole.VOLUNTEER, status=UserStatus.INACTIVE)

    missa = make_schedule(liturgy, director, [volunteer, ana], kind="Missa", statuses={ana.id: ParticipationStatus.CONFIRMED})
    ScheduleVolunteer.objects.filter(schedule=missa, volunteer=ana).update(confirmed_at=timezone.now())
    make_schedule(music, director, [bia], kind="Adoração", day=date.today() + timedelta(days=3))
    make_schedule(liturgy, director, [volunteer], kind="Batizado", day=date.today() - timedelta(days=3))
    return {"ana": ana, "bia": bia}

# =========================
# Dashboard
# =========================

@pytest.mark.django_db
def test_director_summary(director_client, board):
    assert director_client.get("/dashboard/summary").json() == {
        "activeVolunteers": 3,
        "pendingParticipations": 3,
        "confirmationsToday": 1,
    }


@pytest.mark.django_db
def test_coordinator_summary_is_scoped(coordinator_client, board):
    data = coordinator_client.get("/dashboard/summary").json()
    assert data["pendingParticipations"] == 2
    assert data["confirmationsToday"] == 1


@pytest.mark.django_db
def test_volunteer_summary(volunteer_client, board):
    assert volunteer_client.get("/dashboard/summary").json() == {
        "upcomingSchedules": 1,
        "pendingConfirmation": 2,
    }

# =========================
# Relatório
# =========================

@pytest.mark.django_db
def test_report_filters(director_client, board):
    assert len(director_client.get("/reports/schedules").json()) == 4
    assert len(director_client.get("/reports/schedules", {"status": "todos", "ministry": "Todos"}).json()) == 4

    confirmed = director_client.get("/reports/schedules", {"status": "confirmed"}).json()
    assert [r["volunteer"] for r in confirmed] == ["Ana Souza"]

    music_rows = director_client.get("/reports/schedules", {"ministry": "Música"}).json()
    assert [r["volunteer"] for r in music_rows] == ["Bia Lima"]

    assert [r["type"] for r in director_client.get("/reports/schedules", {"search": "adora"}).json()] == ["Adoração"]
    assert len(director_client.get("/reports/schedules", {"search": "souza"}).json()) == 1


@pytest.mark.django_db
def test_report_is_scoped_for_coordinator(coordinator_client, board):
    rows = coordinator_client.get("/reports/schedules").json()
    assert {r["ministry"] for r in rows} == {"Liturgia"}


@pytest.mark.django_db
def test_volunteer_cannot_see_reports(volunteer_client):
    assert volunteer_client.get("/reports/schedules").status_code == 403
    assert volunteer_client.get("/reports/schedules/export").status_code == 403

# =========================
# Exportação
# =========================

@pytest.mark.django_db
def test_export_xlsx(director_client, board):
    resp = director_client.get("/reports/schedules/export", {"format": "xlsx", "status": "pending"})
    assert resp.status_code == 200
    assert resp["Content-Type"].startswith("application/vnd.openxmlformats")
    assert "attachment;" in resp["Content-Disposition"]

    ws = load_workbook(BytesIO(resp.content)).active
    assert ws.cell(row=1, column=1).value == "Data"
    assert ws.max_row == 1 + 3


@pytest.mark.django_db
def test_export_ics_has_one_event_per_schedule(director_client, board):
    resp = director_client.get("/reports/schedules/export", {"format": "ics"})
    assert resp.status_code == 200
    assert resp["Content-Type"].startswith("text/calendar")

    cal = Calendar.from_ical(resp.content)
    events = [c for c in cal.walk() if c.name == "VEVENT"]
    assert len(events) == 3
    assert sorted(str(e["summary"]).split(" - ")[0] for e in events) == ["Adoração", "Batizado", "Missa"]


@pytest.mark.django_db
def test_export_unknown_format_is_400(director_client):
    resp = director_client.get("/reports/schedules/export", {"format": "pdf"})
    assert resp.status_code == 400
