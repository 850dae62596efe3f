# app/modules/overview/schemas.py
from pydantic import BaseModel
from typing import List, Optional

from app.shared.schemas.common import BaseResponse


class UpcomingExpiration(BaseModel):
    user_id: str
    email: Optional[str] = None
    plan_name: Optional[str] = None
    days_remaining: int


class DashboardStats(BaseResponse):
    total_users: int
    active_trials: int
    active_subscriptions: int
    total_devices: int
    upcoming_expirations: List[UpcomingExpiration]
