import logging

from django.http import HttpResponse
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from parish.api.v1.filters import ParticipationReportFilter
from parish.api.v1.serializers import ParticipationRowSerializer
from parish.domain.errors import ValidationError
from parish.security.permissions import role_required
from parish.services.exporters.export_ics import export_participations_ics
from parish.services.exporters.export_xlsx import export_participations_xlsx
from parish.services.reports import EXPORT_FORMATS, report_queryset

log = logging.getLogger(__name__)

CONTENT_TYPES = {
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "ics": "text/calendar; charset=utf-8",
}


def _filtered(request):
    return ParticipationReportFilter(request.query_params, queryset=report_queryset(request.user)).qs


@api_view(["GET"])
@permission_classes([role_required("reports.view")])
def schedules_report(request):
    """Relatório de participações com filtros `status`, `ministry` e `search`."""
    return Response(ParticipationRowSerializer(_filtered(request), many=True).data)


@api_view(["GET"])
@permission_classes([role_required("reports.view")])
def schedules_export(request):
    """Exporta o relatório filtrado em XLSX (padrão) ou ICS."""
    fmt = (request.query_params.get("format") or "xlsx").strip().lower()
    if fmt not in EXPORT_FORMATS:
        raise ValidationError(f"Formato de exportação inválido: {fmt}. Use xlsx ou ics.")

    rows = list(_filtered(request))
    content = export_participations_xlsx(rows) if fmt == "xlsx" else export_participations_ics(rows)
    filename = f"escalas_{timezone.localdate():%Y%m%d}.{fmt}"
    log.info("Report export %s with %d row(s) by user %s", fmt, len(rows), request.user.id)

    resp = HttpResponse(content, content_type=CONTENT_TYPES[fmt])
    resp["Content-Disposition"] = f'attachment; filename="{filename}"'
    return resp
