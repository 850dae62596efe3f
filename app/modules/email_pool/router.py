# app/modules/email_pool/router.py
from fastapi import APIRouter, Body, Depends, Path, status

from app.core.auth.dependencies import get_current_admin, get_secure_api, require_modify
from app.core.auth.service import AdminIdentity
from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .service import EmailPoolService
from .schemas import SenderAssign, SenderCreate, SenderReassign, SenderToggle

router = APIRouter()


@router.get("", response_model=ListResponse)
async def get_senders(
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Pool de remitentes SMTP (más recientes primero)"""
    service = EmailPoolService(api)
    return await service.get_senders()


@router.post("", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def add_sender(
    data: SenderCreate,
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Agregar remitente al pool (RPC add_sender_secure)

    **Permisos:** SuperAdmin, SupportAdmin
    """
    service = EmailPoolService(api)
    return await service.add_sender(data)


@router.post("/{sender_id}/toggle", response_model=MutationResponse)
async def toggle_sender(
    sender_id: str = Path(..., description="ID del remitente"),
    data: SenderToggle = Body(...),
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """Activar o desactivar un remitente"""
    service = EmailPoolService(api)
    return await service.toggle_sender(sender_id, data.is_active)


@router.get("/assignments", response_model=ListResponse)
async def get_assignments(
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Asignaciones usuario -> remitente"""
    service = EmailPoolService(api)
    return await service.get_assignments()


@router.post("/assignments", response_model=MutationResponse)
async def assign_sender(
    data: SenderAssign,
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """Asignar automáticamente un remitente a un usuario"""
    service = EmailPoolService(api)
    return await service.assign_sender(data.user_id)


@router.put("/assignments/{user_id}", response_model=MutationResponse)
async def reassign_sender(
    user_id: str = Path(..., description="ID del usuario"),
    data: SenderReassign = Body(...),
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """Cambiar el remitente asignado a un usuario"""
    service = EmailPoolService(api)
    return await service.reassign_sender(user_id, data.sender_id)
