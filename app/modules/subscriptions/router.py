# app/modules/subscriptions/router.py
from fastapi import APIRouter, Body, Depends, Path

from app.core.auth.dependencies import get_current_admin, get_secure_api, require_modify
from app.core.auth.service import AdminIdentity
from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .service import SubscriptionsService
from .schemas import SubscriptionsOverview, UpgradePlanRequest

router = APIRouter()


@router.get("", response_model=SubscriptionsOverview)
async def get_subscriptions(
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Usuarios con suscripción, planes disponibles y remitente asignado

    Usuarios sin remitente aparecen como "Not assigned".
    """
    service = SubscriptionsService(api)
    return await service.get_overview()


@router.get("/records", response_model=ListResponse)
async def get_subscription_records(
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Registros de la tabla subscriptions"""
    service = SubscriptionsService(api)
    return await service.get_records()


@router.post("/{user_id}/upgrade", response_model=MutationResponse)
async def upgrade_plan(
    user_id: str = Path(..., description="ID del usuario"),
    data: UpgradePlanRequest = Body(...),
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Cambiar el plan de un usuario

    **Permisos:** SuperAdmin, SupportAdmin
    """
    service = SubscriptionsService(api)
    return await service.upgrade_plan(user_id, data)
