# app/modules/emergency_alerts/__init__.py
"""
Módulo Emergency Alerts - Alertas de emergencia disparadas por usuarios

- Listado (más recientes primero) con conteo de no resueltas
- Reconocer y resolver alertas
"""

from .router import router
from .service import EmergencyAlertsService

__all__ = [
    "router",
    "EmergencyAlertsService"
]
