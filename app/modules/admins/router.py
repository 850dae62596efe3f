# app/modules/admins/router.py
from fastapi import APIRouter, Body, Depends, Path, status

from app.core.auth.dependencies import (
    get_current_admin, get_secure_api, require_manage_admins,
)
from app.core.auth.service import AdminIdentity
from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .service import AdminsService
from .schemas import AdminRoleCreate, AdminRoleUpdate

router = APIRouter()


@router.get("", response_model=ListResponse)
async def get_admins(
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Roles administrativos activos"""
    service = AdminsService(api)
    return await service.get_admins()


@router.post("", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def create_admin(
    data: AdminRoleCreate,
    current_admin: AdminIdentity = Depends(require_manage_admins),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Otorgar rol administrativo a un usuario

    **Permisos:** Solo SuperAdmin
    """
    service = AdminsService(api)
    return await service.create_admin(data)


@router.put("/{user_id}", response_model=MutationResponse)
async def update_admin(
    user_id: str = Path(..., description="ID del usuario"),
    data: AdminRoleUpdate = Body(...),
    current_admin: AdminIdentity = Depends(require_manage_admins),
    api: SecureAPI = Depends(get_secure_api)
):
    """Cambiar el rol de un admin"""
    service = AdminsService(api)
    return await service.update_admin(user_id, data)


@router.delete("/{user_id}", response_model=MutationResponse)
async def deactivate_admin(
    user_id: str = Path(..., description="ID del usuario"),
    current_admin: AdminIdentity = Depends(require_manage_admins),
    api: SecureAPI = Depends(get_secure_api)
):
    """Desactivar el rol de un admin (no borra el registro)"""
    service = AdminsService(api)
    return await service.deactivate_admin(user_id)
