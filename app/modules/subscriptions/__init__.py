# app/modules/subscriptions/__init__.py
"""
Módulo Subscriptions - Suscripciones y planes de usuarios

- Usuarios con plan y remitente de email asignado
- Registros crudos de la tabla subscriptions
- Upgrade de plan (RPC upgrade_plan_secure)
"""

from .router import router
from .service import SubscriptionsService

__all__ = [
    "router",
    "SubscriptionsService"
]
