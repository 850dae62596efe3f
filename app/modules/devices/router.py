# app/modules/devices/router.py
from fastapi import APIRouter, Body, Depends, Path, Query
from typing import Optional

from app.core.auth.dependencies import get_current_admin, get_secure_api, require_delete
from app.core.auth.service import AdminIdentity
from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .service import DevicesService
from .schemas import DeviceAction, DeviceActionRequest, DeviceStatusFilter

router = APIRouter()


@router.get("", response_model=ListResponse)
async def get_devices(
    search: Optional[str] = Query(None, description="Buscar por hash o último usuario"),
    status: DeviceStatusFilter = Query(DeviceStatusFilter.ALL, description="all, blocked, ok"),
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Dispositivos registrados, del más reciente al más antiguo"""
    service = DevicesService(api)
    return await service.get_devices(search, status)


@router.get("/active", response_model=ListResponse)
async def get_active_devices(
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Dispositivos activos (RPC get_active_devices)"""
    service = DevicesService(api)
    return await service.get_active_devices()


@router.post("/{device_hash}/{action}", response_model=MutationResponse)
async def device_action(
    device_hash: str = Path(..., description="Hash del dispositivo"),
    action: DeviceAction = Path(..., description="block, unblock, reset-trial"),
    data: DeviceActionRequest = Body(...),
    current_admin: AdminIdentity = Depends(require_delete),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Bloquear, desbloquear o reiniciar el contador de trials de un dispositivo

    **Permisos:** Solo SuperAdmin
    """
    service = DevicesService(api)
    return await service.apply_action(device_hash, action, data.justification)
