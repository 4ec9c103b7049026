from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Erro de negócio tipado, com status HTTP e mensagem para o cliente."""
    status_code: int = 500
    default_message: str = "Erro interno do servidor."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    status_code = 400
    default_message = "Dados inválidos."


class AuthenticationError(DomainError):
    status_code = 401
    default_message = "Autenticação necessária."


class AuthorizationError(DomainError):
    status_code = 403
    default_message = "Acesso negado. Não tem permissão para este recurso."


class NotFoundError(DomainError):
    status_code = 404
    default_message = "Recurso não encontrado."


class ConflictError(DomainError):
    status_code = 409
    default_message = "Registro duplicado."


class ReferentialIntegrityError(DomainError):
    status_code = 400
    default_message = "Não é possível excluir: existem registros vinculados."
