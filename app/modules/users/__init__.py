# app/modules/users/__init__.py
"""
Módulo Users - Usuarios y trials

- Listado de usuarios con su suscripción
- Extender trial (RPC extend_trial_secure)
- Forzar estado de usuario (solo SuperAdmin)
"""

from .router import router
from .service import UsersService

__all__ = [
    "router",
    "UsersService"
]
