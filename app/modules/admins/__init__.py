# app/modules/admins/__init__.py
"""
Módulo Admins - Gestión de roles administrativos

- Listado de roles activos
- Alta, cambio de rol y desactivación (solo SuperAdmin)
"""

from .router import router
from .service import AdminsService

__all__ = [
    "router",
    "AdminsService"
]
