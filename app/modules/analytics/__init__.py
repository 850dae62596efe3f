# app/modules/analytics/__init__.py
"""
Módulo Analytics - Métricas agregadas

- Totales de usuarios, trials y suscripciones
- Dispositivos activos y bloqueados
- Tasa de conversión trial -> suscripción
"""

from .router import router
from .service import AnalyticsService

__all__ = [
    "router",
    "AnalyticsService"
]
