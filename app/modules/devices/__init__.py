# app/modules/devices/__init__.py
"""
Módulo Devices - Huellas de dispositivo y abuso de trials

- Listado de dispositivos con filtros por hash/usuario y estado
- Bloquear, desbloquear y reiniciar el contador de trials

Todas las acciones requieren justificación y rol SuperAdmin.
"""

from .router import router
from .service import DevicesService

__all__ = [
    "router",
    "DevicesService"
]
