# app/modules/plans/__init__.py
"""
Módulo Plans - Planes y sus suscriptores

- Planes disponibles con suscriptores e ingresos estimados
- Analítica de planes (RPC get_plan_analytics)
"""

from .router import router
from .service import PlansService

__all__ = [
    "router",
    "PlansService"
]
