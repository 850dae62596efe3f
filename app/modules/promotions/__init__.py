# app/modules/promotions/__init__.py
"""
Módulo Promotions - Códigos promocionales

- CRUD de promociones (tabla promotions)
- Aplicar un código a un usuario (RPC apply_promotion_secure)
"""

from .router import router
from .service import PromotionsService

__all__ = [
    "router",
    "PromotionsService"
]
