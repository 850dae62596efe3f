# app/modules/login_monitoring/__init__.py
"""
Módulo Login Monitoring - Logins sospechosos y multi-dispositivo

- Cuentas con intentos fallidos repetidos e historial por email
- Bloqueo de la IP de origen
- Usuarios con sesiones en varios dispositivos
- Terminar sesiones y suspender usuarios
"""

from .router import router
from .service import LoginMonitoringService

__all__ = [
    "router",
    "LoginMonitoringService"
]
