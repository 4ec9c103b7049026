from __future__ import annotations

import logging
from typing import Tuple

from django.contrib.auth.hashers import make_password
from django.utils import timezone

from parish.domain.errors import AuthenticationError, AuthorizationError, NotFoundError
from parish.domain.models import User
from parish.domain.repositories import UserRepository
from parish.security.tokens import Identity, issue

log = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Email ou senha inválidos."


def login(email: str, password: str) -> Tuple[str, User]:
    """Autentica por e-mail/senha e emite o token.

    E-mail desconhecido e senha errada produzem a mesma resposta (401).

    Args:
        email (str): O e-mail (comparado em minúsculas).
        password (str): A senha em texto plano.

    Returns:
        Tuple[str, User]: O token e o usuário autenticado.
    """
    user = UserRepository.by_email(email)
    if user is None:
        make_password(password)
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not user.check_password(password):
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not user.is_active:
        raise AuthorizationError("Conta inativa. Procure a coordenação.")

    user.last_login = timezone.now()
    user.save(update_fields=["last_login"])
    log.info("User %s logged in (role=%s)", user.id, user.role)
    return issue(Identity(id=user.id, role=user.role)), user


def me(actor: Identity) -> User:
    user = UserRepository.by_id(actor.id)
    if user is None:
        raise NotFoundError("Utilizador não encontrado.")
    return user
