# app/modules/overview/router.py
from fastapi import APIRouter, Depends

from app.core.auth.dependencies import get_current_admin, get_secure_api
from app.core.auth.service import AdminIdentity
from app.shared.services.secure_api import SecureAPI
from .service import OverviewService
from .schemas import DashboardStats

router = APIRouter()


@router.get("", response_model=DashboardStats)
async def get_dashboard(
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Dashboard principal

    **Incluye:**
    - Usuarios totales, trials activos y suscripciones activas
    - Dispositivos activos
    - Los 5 vencimientos más próximos (0 a 7 días)
    """
    service = OverviewService(api)
    return await service.get_dashboard()
