# app/modules/overview/__init__.py
"""
Módulo Overview - Dashboard principal

- Total de usuarios, trials activos y suscripciones activas
- Total de dispositivos activos
- Próximos vencimientos (7 días)

Arquitectura:
- router.py: Endpoints FastAPI
- service.py: Consulta al gateway y cálculo de indicadores
- schemas.py: Modelos Pydantic de respuesta
"""

from .router import router
from .service import OverviewService

__all__ = [
    "router",
    "OverviewService"
]
