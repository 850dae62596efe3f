# app/modules/security/router.py
from fastapi import APIRouter, Depends, Path, status

from app.core.auth.dependencies import (
    get_current_admin, get_secure_api, require_delete, require_modify,
)
from app.core.auth.service import AdminIdentity
from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .service import SecurityService
from .schemas import BlockIPRequest

router = APIRouter()


@router.get("/blocked-ips", response_model=ListResponse)
async def get_blocked_ips(
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """IPs bloqueadas (más recientes primero)"""
    service = SecurityService(api)
    return await service.get_blocked_ips()


@router.post("/blocked-ips", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def block_ip(
    data: BlockIPRequest,
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Bloquear una dirección IPv4

    Sin razón explícita se registra "Manual block".
    """
    service = SecurityService(api)
    return await service.block_ip(data.ip_address, data.reason)


@router.delete("/blocked-ips/{blocked_ip_id}", response_model=MutationResponse)
async def unblock_ip(
    blocked_ip_id: str = Path(..., description="ID del bloqueo"),
    current_admin: AdminIdentity = Depends(require_delete),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Desbloquear una IP

    **Permisos:** Solo SuperAdmin
    """
    service = SecurityService(api)
    return await service.unblock_ip(blocked_ip_id)
