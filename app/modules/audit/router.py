# app/modules/audit/router.py
from fastapi import APIRouter, Depends, Query

from app.core.auth.dependencies import get_current_admin, get_secure_api
from app.core.auth.service import AdminIdentity
from app.shared.schemas.common import ListResponse
from app.shared.services.secure_api import SecureAPI
from .service import AuditService

router = APIRouter()


@router.get("", response_model=ListResponse)
async def get_audit_logs(
    limit: int = Query(100, ge=1, le=1000, description="Número máximo de entradas"),
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Entradas de auditoría más recientes"""
    service = AuditService(api)
    return await service.get_logs(limit)
