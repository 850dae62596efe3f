# app/modules/emergency_alerts/router.py
from fastapi import APIRouter, Depends, Path

from app.core.auth.dependencies import get_current_admin, get_secure_api, require_modify
from app.core.auth.service import AdminIdentity
from app.shared.schemas.common import MutationResponse
from app.shared.services.secure_api import SecureAPI
from .service import EmergencyAlertsService
from .schemas import AlertsOverview, AlertStatus

router = APIRouter()


@router.get("", response_model=AlertsOverview)
async def get_alerts(
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Alertas de emergencia, más recientes primero"""
    service = EmergencyAlertsService(api)
    return await service.get_alerts()


@router.post("/{alert_id}/acknowledge", response_model=MutationResponse)
async def acknowledge_alert(
    alert_id: str = Path(..., description="ID de la alerta"),
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """Marcar una alerta como reconocida"""
    service = EmergencyAlertsService(api)
    return await service.set_status(alert_id, AlertStatus.ACKNOWLEDGED)


@router.post("/{alert_id}/resolve", response_model=MutationResponse)
async def resolve_alert(
    alert_id: str = Path(..., description="ID de la alerta"),
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """Marcar una alerta como resuelta"""
    service = EmergencyAlertsService(api)
    return await service.set_status(alert_id, AlertStatus.RESOLVED)
