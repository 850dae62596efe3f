# app/modules/login_monitoring/router.py
from fastapi import APIRouter, Body, Depends, Path, Query

from app.core.auth.dependencies import (
    get_current_admin, get_secure_api, require_delete, require_modify,
)
from app.core.auth.service import AdminIdentity
from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .service import LoginMonitoringService
from .schemas import BlockSourceIPRequest, SuspendUserRequest

router = APIRouter()


@router.get("/suspicious", response_model=ListResponse)
async def get_suspicious_logins(
    min_attempts: int = Query(5, ge=1, description="Mínimo de intentos fallidos"),
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Cuentas con intentos fallidos repetidos"""
    service = LoginMonitoringService(api)
    return await service.get_suspicious_logins(min_attempts)


@router.get("/history", response_model=ListResponse)
async def get_login_history(
    email: str = Query(..., min_length=1, description="Email de la cuenta"),
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Historial de intentos de login de una cuenta"""
    service = LoginMonitoringService(api)
    return await service.get_login_history(email)


@router.post("/block-ip", response_model=MutationResponse)
async def block_source_ip(
    data: BlockSourceIPRequest,
    min_attempts: int = Query(5, ge=1),
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Bloquear la IP de origen de logins sospechosos

    **Permisos:** SuperAdmin, SupportAdmin
    """
    service = LoginMonitoringService(api)
    return await service.block_source_ip(data.ip_address, min_attempts)


@router.get("/multi-device", response_model=ListResponse)
async def get_multi_device_logins(
    min_devices: int = Query(2, ge=1, description="Mínimo de dispositivos distintos"),
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Usuarios con sesiones activas en varios dispositivos"""
    service = LoginMonitoringService(api)
    return await service.get_multi_device_logins(min_devices)


@router.get("/users/{user_id}/sessions", response_model=ListResponse)
async def get_user_sessions(
    user_id: str = Path(..., description="ID del usuario"),
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Sesiones de un usuario por dispositivo"""
    service = LoginMonitoringService(api)
    return await service.get_user_sessions(user_id)


@router.delete("/users/{user_id}/sessions/{device_hash}", response_model=MutationResponse)
async def terminate_session(
    user_id: str = Path(..., description="ID del usuario"),
    device_hash: str = Path(..., description="Hash del dispositivo"),
    min_devices: int = Query(2, ge=1),
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Terminar la sesión de un usuario en un dispositivo

    **Permisos:** SuperAdmin, SupportAdmin
    """
    service = LoginMonitoringService(api)
    return await service.terminate_session(user_id, device_hash, min_devices)


@router.post("/users/{user_id}/suspend", response_model=MutationResponse)
async def suspend_user(
    user_id: str = Path(..., description="ID del usuario"),
    data: SuspendUserRequest = Body(...),
    min_devices: int = Query(2, ge=1),
    current_admin: AdminIdentity = Depends(require_delete),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Suspender un usuario (estado `suspended`)

    **Permisos:** Solo SuperAdmin
    """
    service = LoginMonitoringService(api)
    return await service.suspend_user(user_id, data.reason, min_devices)
