from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from parish.domain.models import UserRole
from parish.utils import _get_setting

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Identidade decodificada de um token: {id, role}."""
    id: int
    role: str

    # Compatibilidade com o contrato de `request.user` do DRF.
    is_authenticated = True
    is_anonymous = False


def _secret() -> str:
    return _get_setting("JWT_SECRET")


def _algorithm() -> str:
    return _get_setting("JWT_ALGORITHM", "HS256")


def issue(identity: Identity, now: Optional[datetime] = None) -> str:
    """Gera um token assinado para a identidade, com expiração.

    Args:
        identity (Identity): O usuário (id e papel) a ser embutido no token.
        now (Optional[datetime], optional): Instante de emissão. Defaults to agora (UTC).

    Returns:
        str: O token JWT compacto.
    """
    issued_at = now or datetime.now(timezone.utc)
    hours = int(_get_setting("JWT_EXPIRATION_HOURS", 8))
    claims: Dict[str, Any] = {
        "sub": str(identity.id),
        "role": identity.role,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=hours),
    }
    return jwt.encode(claims, _secret(), algorithm=_algorithm())


def verify(token: str) -> Optional[Identity]:
    """Verifica assinatura e expiração do token.

    Token malformado, assinatura inválida ou expirado resultam todos em None;
    nenhuma exceção é propagada para o chamador.

    Args:
        token (str): O token recebido do cliente.

    Returns:
        Optional[Identity]: A identidade decodificada, ou None se o token for inválido.
    """
    try:
        payload = jwt.decode(token, _secret(), algorithms=[_algorithm()])
    except JWTError as exc:
        log.debug("Token rejected: %s", exc)
        return None

    sub, role = payload.get("sub"), payload.get("role")
    if role not in UserRole.values:
        return None
    try:
        return Identity(id=int(sub), role=role)
    except (TypeError, ValueError):
        return None
