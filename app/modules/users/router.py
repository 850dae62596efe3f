# app/modules/users/router.py
from fastapi import APIRouter, Body, Depends, Path, Query
from typing import Optional

from app.core.auth.dependencies import (
    get_current_admin, get_secure_api, require_delete, require_modify,
)
from app.core.auth.service import AdminIdentity
from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .service import UsersService
from .schemas import ExtendTrialRequest, SetUserStatusRequest

router = APIRouter()


@router.get("", response_model=ListResponse)
async def get_users(
    search: Optional[str] = Query(None, description="Buscar por email o ID de usuario"),
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Listado de usuarios con su suscripción, plan y días restantes"""
    service = UsersService(api)
    return await service.get_users(search)


@router.post("/{user_id}/extend-trial", response_model=MutationResponse)
async def extend_trial(
    user_id: str = Path(..., description="ID del usuario"),
    data: ExtendTrialRequest = Body(...),
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Extender el trial de un usuario

    La validación (usuario existente, trial vigente, límites) la hace el
    procedimiento `extend_trial_secure`, que además registra auditoría.

    **Permisos:** SuperAdmin, SupportAdmin
    """
    service = UsersService(api)
    return await service.extend_trial(user_id, data)


@router.post("/{user_id}/status", response_model=MutationResponse)
async def set_user_status(
    user_id: str = Path(..., description="ID del usuario"),
    data: SetUserStatusRequest = Body(...),
    current_admin: AdminIdentity = Depends(require_delete),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Forzar el estado de suscripción de un usuario

    **Permisos:** Solo SuperAdmin
    """
    service = UsersService(api)
    return await service.set_status(user_id, data)
