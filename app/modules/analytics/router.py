# app/modules/analytics/router.py
from fastapi import APIRouter, Depends

from app.core.auth.dependencies import get_current_admin, get_secure_api
from app.core.auth.service import AdminIdentity
from app.shared.services.secure_api import SecureAPI
from .service import AnalyticsService
from .schemas import AnalyticsSummary

router = APIRouter()


@router.get("", response_model=AnalyticsSummary)
async def get_analytics(
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Métricas agregadas

    La tasa de conversión es `activas / (trials + activas) * 100`, redondeada.
    """
    service = AnalyticsService(api)
    return await service.get_summary()
