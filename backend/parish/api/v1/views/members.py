from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from parish.api.v1.serializers import MemberCreateSerializer, MemberSerializer, MemberWriteSerializer
from parish.domain.repositories import UserRepository
from parish.security.permissions import role_required
from parish.services.members import MemberService


@api_view(["GET", "POST"])
@permission_classes([role_required({"GET": "members.list", "POST": "members.create"})])
def members(request):
    if request.method == "GET":
        return Response(MemberSerializer(MemberService.list(request.user), many=True).data)

    serializer = MemberCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = MemberService.create(request.user, serializer.validated_data)
    return Response(MemberSerializer(UserRepository.detail(user.id)).data, status=status.HTTP_201_CREATED)


@api_view(["GET", "PUT", "DELETE"])
@permission_classes([role_required({"GET": "members.view", "PUT": "members.update", "DELETE": "members.delete"})])
def member_detail(request, member_id: int):
    if request.method == "GET":
        return Response(MemberSerializer(MemberService.get(request.user, member_id)).data)

    if request.method == "DELETE":
        MemberService.delete(request.user, member_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = MemberWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = MemberService.update(request.user, member_id, serializer.validated_data)
    return Response(MemberSerializer(UserRepository.detail(user.id)).data)


@api_view(["PUT", "PATCH"])
@permission_classes([role_required("members.toggle_status")])
def member_toggle_status(request, member_id: int):
    user = MemberService.toggle_status(request.user, member_id)
    return Response({"detail": f"Status do membro alterado para {user.status}.", "status": user.status})
