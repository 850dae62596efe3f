# app/modules/emergency_alerts/schemas.py
from enum import Enum
from typing import Any, Dict, List

from app.shared.schemas.common import BaseResponse


class AlertStatus(str, Enum):
    NEW = "new"
    ACKNOWLEDGED = "acknowledged"
    RESOLVED = "resolved"


class AlertsOverview(BaseResponse):
    items: List[Dict[str, Any]]
    total: int
    unresolved: int
