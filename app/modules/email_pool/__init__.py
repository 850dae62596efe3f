# app/modules/email_pool/__init__.py
"""
Módulo Email Pool - Remitentes SMTP para notificaciones

- Listado del pool de remitentes
- Agregar remitente, activar/desactivar
- Asignar y reasignar remitentes a usuarios
"""

from .router import router
from .service import EmailPoolService

__all__ = [
    "router",
    "EmailPoolService"
]
