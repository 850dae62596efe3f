# app/modules/promotions/router.py
from fastapi import APIRouter, Body, Depends, Path, status

from app.core.auth.dependencies import (
    get_current_admin, get_secure_api, require_delete, require_modify,
)
from app.core.auth.service import AdminIdentity
from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .service import PromotionsService
from .schemas import PromotionApply, PromotionCreate, PromotionToggle

router = APIRouter()


@router.get("", response_model=ListResponse)
async def get_promotions(
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Promociones registradas (más recientes primero)"""
    service = PromotionsService(api)
    return await service.get_promotions()


@router.post("", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def create_promotion(
    data: PromotionCreate,
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Crear promoción

    El código se guarda en mayúsculas, con 0 usos y activa.
    """
    service = PromotionsService(api)
    return await service.create_promotion(data)


@router.post("/apply", response_model=MutationResponse)
async def apply_promotion(
    data: PromotionApply,
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """Aplicar un código promocional a un usuario"""
    service = PromotionsService(api)
    return await service.apply_promotion(data)


@router.post("/{promotion_id}/toggle", response_model=MutationResponse)
async def toggle_promotion(
    promotion_id: str = Path(..., description="ID de la promoción"),
    data: PromotionToggle = Body(...),
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """Activar o desactivar una promoción"""
    service = PromotionsService(api)
    return await service.toggle_promotion(promotion_id, data.is_active)


@router.delete("/{promotion_id}", response_model=MutationResponse)
async def delete_promotion(
    promotion_id: str = Path(..., description="ID de la promoción"),
    current_admin: AdminIdentity = Depends(require_delete),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Eliminar promoción

    **Permisos:** Solo SuperAdmin
    """
    service = PromotionsService(api)
    return await service.delete_promotion(promotion_id)
