from __future__ import annotations

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from parish.domain.errors import DomainError

log = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Erro interno do servidor."
INVALID_INPUT_MESSAGE = "Dados inválidos ou campos obrigatórios em falta."


def api_exception_handler(exc, context):
    """Converte qualquer exceção que chega à view em resposta JSON `{"detail": ...}`.

    - DomainError: status e mensagem do próprio erro.
    - ValidationError do DRF (serializers): 400 com os erros por campo em `errors`.
    - Demais APIException/Http404: renderização padrão do DRF.
    - Qualquer outra: registrada com traceback e respondida com 500 genérico.

    Args:
        exc (Exception): A exceção levantada.
        context (dict): Contexto do DRF (view, request).

    Returns:
        Response: A resposta HTTP.
    """
    if isinstance(exc, DomainError):
        return Response({"detail": exc.message}, status=exc.status_code)

    if isinstance(exc, exceptions.ValidationError):
        return Response(
            {"detail": INVALID_INPUT_MESSAGE, "errors": exc.detail},
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    request = context.get("request")
    log.error(
        "Unhandled error in %s | %s %s",
        getattr(view, "__name__", view.__class__.__name__ if view else "<unknown>"),
        getattr(request, "method", "-"),
        getattr(request, "path", "-"),
        exc_info=exc,
    )
    return Response({"detail": INTERNAL_ERROR_MESSAGE}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
