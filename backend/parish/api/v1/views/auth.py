from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from parish.api.v1.serializers import LoginSerializer, UserSummarySerializer
from parish.security.permissions import role_required
from parish.services import auth as auth_service


@api_view(["POST"])
@authentication_classes([])
@permission_classes([AllowAny])
def login(request):
    """Troca e-mail/senha por um token Bearer."""
    serializer = LoginSerializer(data=request.data)
    if not serializer.is_valid():
        return Response({"detail": "Email e senha são obrigatórios."}, status=status.HTTP_400_BAD_REQUEST)
    token, user = auth_service.login(**serializer.validated_data)
    return Response({"token": token, "user": UserSummarySerializer(user).data})


@api_view(["GET"])
@permission_classes([role_required("auth.me")])
def me(request):
    user = auth_service.me(request.user)
    return Response(UserSummarySerializer(user).data)
