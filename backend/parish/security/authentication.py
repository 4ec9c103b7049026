from __future__ import annotations

from typing import Optional, Tuple

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication

from parish.security.tokens import Identity, verify

KEYWORD = "Bearer"


class BearerTokenAuthentication(BaseAuthentication):
    """Lê o token "Bearer" do cabeçalho Authorization e anexa a identidade ao request.

    Não consulta o banco: a identidade é exatamente o que o token assinado declara.
    """

    def authenticate(self, request) -> Optional[Tuple[Identity, str]]:
        header = request.META.get("HTTP_AUTHORIZATION")
        if not header:
            raise exceptions.NotAuthenticated("Autenticação necessária. Token não fornecido.")

        parts = header.split()
        if len(parts) != 2 or parts[0] != KEYWORD:
            raise exceptions.AuthenticationFailed("Token mal formatado.")

        identity = verify(parts[1])
        if identity is None:
            raise exceptions.AuthenticationFailed("Token inválido ou expirado.")
        return identity, parts[1]

    def authenticate_header(self, request) -> str:
        # Sem este cabeçalho o DRF converteria 401 em 403.
        return f'{KEYWORD} realm="api"'
