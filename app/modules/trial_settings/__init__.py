# app/modules/trial_settings/__init__.py
"""
Módulo Trial Settings - Configuración global del trial gratuito

- Leer `free_trial_days` y `auto_create_trial` de app_config
- Actualizar ambos valores (queda registrado el admin que los cambió)
"""

from .router import router
from .service import TrialSettingsService

__all__ = [
    "router",
    "TrialSettingsService"
]
