from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from parish.security.permissions import role_required
from parish.services import dashboard as dashboard_service


@api_view(["GET"])
@permission_classes([role_required("dashboard.summary")])
def summary(request):
    return Response(dashboard_service.summary(request.user))
