from __future__ import annotations

from typing import List

from django.apps import AppConfig
from django.core.checks import Error, Tags, register

from parish.utils import _get_setting

HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")

# =========================
# System checks (validações de settings)
# =========================

@register(Tags.security)
def token_settings_check(app_configs, **kwargs):
    """Garante que os settings de assinatura de token estejam válidos."""
    errors: List[Error] = []

    if not _get_setting("JWT_SECRET"):
        errors.append(Error("JWT_SECRET deve ser definido e não pode ser vazio.", id="parish.E001"))

    algorithm = _get_setting("JWT_ALGORITHM", "HS256")
    if algorithm not in HMAC_ALGORITHMS:
        errors.append(
            Error(
                f"JWT_ALGORITHM deve ser um de {', '.join(HMAC_ALGORITHMS)}. Valor atual: {algorithm!r}",
                id="parish.E002",
            )
        )

    hours = _get_setting("JWT_EXPIRATION_HOURS", 8)
    if not isinstance(hours, int) or hours < 1:
        errors.append(Error("JWT_EXPIRATION_HOURS deve ser um inteiro >= 1.", id="parish.E003"))

    return errors

# =========================
# AppConfig
# =========================

class ParishConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'parish'
    verbose_name = "Escalas da Paróquia"
