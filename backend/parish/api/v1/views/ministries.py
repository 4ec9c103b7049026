from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from parish.api.v1.serializers import MinistrySerializer, MinistryWriteSerializer
from parish.security.permissions import role_required
from parish.services.ministries import MinistryService


@api_view(["GET", "POST"])
@permission_classes([role_required({"GET": "ministries.list", "POST": "ministries.create"})])
def ministries(request):
    if request.method == "GET":
        return Response(MinistrySerializer(MinistryService.list(), many=True).data)

    serializer = MinistryWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    ministry = MinistryService.create(request.user, serializer.validated_data)
    return Response(MinistrySerializer(ministry).data, status=status.HTTP_201_CREATED)


@api_view(["PUT", "DELETE"])
@permission_classes([role_required({"PUT": "ministries.update", "DELETE": "ministries.delete"})])
def ministry_detail(request, ministry_id: int):
    if request.method == "DELETE":
        MinistryService.delete(request.user, ministry_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = MinistryWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    ministry = MinistryService.update(request.user, ministry_id, serializer.validated_data)
    return Response(MinistrySerializer(ministry).data)


@api_view(["PUT", "PATCH"])
@permission_classes([role_required("ministries.toggle_status")])
def ministry_toggle_status(request, ministry_id: int):
    ministry = MinistryService.toggle_status(request.user, ministry_id)
    return Response(MinistrySerializer(ministry).data)
