from __future__ import annotations

from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Dict, Iterable, List

from django.utils.timezone import (
    get_current_timezone,
    get_current_timezone_name,
    make_aware,
    now as tz_now,
)
from icalendar import Calendar, Event, vCalAddress, vText

from parish.domain.models import Schedule, ScheduleVolunteer
from parish.utils import _get_setting

def export_participations_ics(participations: Iterable[ScheduleVolunteer]) -> bytes:
    """Exporta as escalas do relatório para um arquivo ICS (um evento por escala).

    Args:
        participations (Iterable[ScheduleVolunteer]): Participações filtradas do relatório.

    Returns:
        bytes: O conteúdo do arquivo ICS gerado.
    """
    cal = Calendar()
    cal.add("prodid", "-//Escalas da Paróquia//")
    cal.add("version", "2.0")
    cal.add("X-WR-CALNAME", "Escalas da Paróquia")
    cal.add("X-WR-TIMEZONE", get_current_timezone_name())

    tz = get_current_timezone()
    duration_min = int(_get_setting("ICS_EVENT_DURATION_MINUTES", 60))
    now = tz_now()

    # agrupa participações por escala, preservando a ordem do relatório
    by_schedule: Dict[int, List[ScheduleVolunteer]] = OrderedDict()
    schedules: Dict[int, Schedule] = {}
    for p in participations:
        by_schedule.setdefault(p.schedule_id, []).append(p)
        schedules[p.schedule_id] = p.schedule

    for sid, items in by_schedule.items():
        s = schedules[sid]
        ev = Event()

        dtstart = make_aware(datetime.combine(s.date, s.time), tz)
        dtend = dtstart + timedelta(minutes=duration_min)

        ev.add("uid", f"schedule-{s.id}@parish-schedule.local")
        ev.add("dtstamp", now)
        ev.add("dtstart", dtstart)
        ev.add("dtend", dtend)
        ev.add("categories", [s.ministry.name])

        names = ", ".join(p.volunteer.name for p in items)
        ev.add("summary", f"{s.type} - {s.ministry.name}" + (f" - {names}" if names else ""))

        desc_lines = [
            f"Escala: {s.type} ({s.ministry.name})",
            f"Início: {s.date.strftime('%d/%m/%Y')} às {s.time.strftime('%H:%M')}",
        ]
        if names:
            desc_lines.append(f"Escalados: {names}")
        if s.notes:
            desc_lines.append(f"Observações: {s.notes}")
        ev.add("description", "\n".join(desc_lines))

        loc = _get_setting("CALENDAR_LOCATION", None)
        if loc:
            ev.add("location", loc)

        for p in items:
            email = getattr(p.volunteer, "email", None)
            if email:
                attendee = vCalAddress(f"MAILTO:{email}")
                attendee.params["cn"] = vText(p.volunteer.name)
                attendee.params["role"] = vText("REQ-PARTICIPANT")
                attendee.params["partstat"] = vText(
                    "ACCEPTED" if p.status == "CONFIRMED" else "NEEDS-ACTION"
                )
                ev.add("attendee", attendee, encode=0)

        cal.add_component(ev)

    return cal.to_ical()
