# app/modules/emergency_alerts/service.py
import logging
from typing import Any, Dict, List

from app.shared.schemas.common import MutationResponse
from app.shared.services.secure_api import SecureAPI
from .schemas import AlertsOverview, AlertStatus

logger = logging.getLogger(__name__)


def count_unresolved(alerts: List[Dict[str, Any]]) -> int:
    return sum(1 for a in alerts if a.get("status") != AlertStatus.RESOLVED.value)


class EmergencyAlertsService:
    def __init__(self, api: SecureAPI):
        self.api = api

    async def get_alerts(self) -> AlertsOverview:
        alerts = await self.api.get_emergency_alerts()
        return AlertsOverview(
            success=True,
            items=alerts,
            total=len(alerts),
            unresolved=count_unresolved(alerts)
        )

    async def set_status(self, alert_id: str, status: AlertStatus) -> MutationResponse:
        logger.info(f"Alerta {alert_id} -> {status.value}")
        result = await self.api.set_emergency_alert_status(alert_id, status.value)

        return MutationResponse(
            success=True,
            message=f"Alert marked as {status.value}",
            result=result,
            items=await self.api.get_emergency_alerts()
        )
