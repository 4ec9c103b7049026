from typing import Any

from django.conf import settings

# =========================
# Helpers
# =========================

def _get_setting(name: str, default: Any = None) -> Any:
    """Obtém uma configuração do Django settings com um valor padrão."""
    return getattr(settings, name, default)
