# app/modules/security/__init__.py
"""
Módulo Security - IPs bloqueadas

- Listado de IPs bloqueadas
- Bloquear IP (RPC add_blocked_ip_secure)
- Desbloquear IP (RPC remove_blocked_ip_secure, solo SuperAdmin)
"""

from .router import router
from .service import SecurityService

__all__ = [
    "router",
    "SecurityService"
]
