from django.db import connection
from django.http import JsonResponse


def health(request):
    """Liveness: responde 200 se o processo e o banco respondem."""
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")
    return JsonResponse({"status": "ok"})
