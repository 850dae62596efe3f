# app/modules/plans/router.py
from fastapi import APIRouter, Depends, Path

from app.core.auth.dependencies import get_current_admin, get_secure_api
from app.core.auth.service import AdminIdentity
from app.shared.services.secure_api import SecureAPI
from .service import PlansService
from .schemas import PlanDetail, PlansOverview

router = APIRouter()


@router.get("", response_model=PlansOverview)
async def get_plans(
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Planes con estadísticas

    **Por plan:**
    - Número de suscriptores
    - Ingreso mensual (suma de precios) y anual (x12)
    """
    service = PlansService(api)
    return await service.get_overview()


@router.get("/analytics")
async def get_plan_analytics(
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Analítica de planes calculada por el backend"""
    service = PlansService(api)
    return await service.get_analytics()


@router.get("/{plan_id}", response_model=PlanDetail)
async def get_plan(
    plan_id: str = Path(..., description="ID del plan"),
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Detalle de un plan"""
    service = PlansService(api)
    return await service.get_plan(plan_id)
