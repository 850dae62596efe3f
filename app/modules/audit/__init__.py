# app/modules/audit/__init__.py
"""
Módulo Audit - Registro de auditoría de acciones administrativas
"""

from .router import router
from .service import AuditService

__all__ = [
    "router",
    "AuditService"
]
