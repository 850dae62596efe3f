# app/modules/analytics/schemas.py
from app.shared.schemas.common import BaseResponse


class AnalyticsSummary(BaseResponse):
    total_users: int
    active_trials: int
    active_subscriptions: int
    total_devices: int
    blocked_devices: int
    trial_conversion_rate: int

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "message": "Analytics loaded",
                "total_users": 120,
                "active_trials": 30,
                "active_subscriptions": 70,
                "total_devices": 95,
                "blocked_devices": 3,
                "trial_conversion_rate": 70
            }
        }
