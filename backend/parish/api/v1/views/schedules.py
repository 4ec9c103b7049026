from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from parish.api.v1.serializers import (
    ParticipationRowSerializer,
    RequestChangeSerializer,
    ScheduleSerializer,
    ScheduleVolunteerSerializer,
    ScheduleWriteSerializer,
)
from parish.domain.repositories import ScheduleRepository
from parish.security.permissions import role_required
from parish.services.schedules import ParticipationService, ScheduleService

# =========================
# Gestão de escalas
# =========================

@api_view(["GET", "POST"])
@permission_classes([role_required("schedules.manage")])
def management(request):
    if request.method == "GET":
        qs = ScheduleService.list_for_management(request.user)
        return Response(ScheduleSerializer(qs, many=True).data)

    serializer = ScheduleWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    schedule = ScheduleService.create(request.user, serializer.validated_data)
    return Response(
        ScheduleSerializer(ScheduleRepository.by_id(schedule.id)).data,
        status=status.HTTP_201_CREATED,
    )


@api_view(["PUT", "DELETE"])
@permission_classes([role_required("schedules.manage")])
def management_detail(request, schedule_id: int):
    if request.method == "DELETE":
        ScheduleService.delete(request.user, schedule_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = ScheduleWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    diff = ScheduleService.update(request.user, schedule_id, serializer.validated_data)
    data = ScheduleSerializer(ScheduleRepository.by_id(schedule_id)).data
    data["changes"] = {
        "added": sorted(diff.to_add),
        "removed": sorted(diff.to_remove),
        "unchanged": sorted(diff.unchanged),
    }
    return Response(data)

# =========================
# Consultas
# =========================

@api_view(["GET"])
@permission_classes([role_required("schedules.my")])
def my_schedules(request):
    return Response(ParticipationRowSerializer(ParticipationService.my(request.user), many=True).data)


@api_view(["GET"])
@permission_classes([role_required("schedules.all")])
def all_schedules(request):
    return Response(ParticipationRowSerializer(ParticipationService.all(), many=True).data)

# =========================
# Participação do voluntário
# =========================

@api_view(["POST", "PUT"])
@permission_classes([role_required("participations.respond")])
def confirm_participation(request, participation_id: int):
    participation = ParticipationService.confirm(request.user, participation_id)
    return Response({
        "detail": "Participação confirmada com sucesso.",
        "participation": ScheduleVolunteerSerializer(participation).data,
    })


@api_view(["POST", "PUT"])
@permission_classes([role_required("participations.respond")])
def request_change(request, participation_id: int):
    serializer = RequestChangeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    participation = ParticipationService.request_change(
        request.user, participation_id, serializer.validated_data.get("reason")
    )
    return Response({
        "detail": "Pedido de troca registado com sucesso.",
        "participation": ScheduleVolunteerSerializer(participation).data,
    })
