# app/modules/subscriptions/schemas.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from app.shared.schemas.common import BaseResponse


class UpgradePlanRequest(BaseModel):
    plan_id: str = Field(..., min_length=1, description="ID del nuevo plan")
    justification: Optional[str] = Field(None, max_length=500)


class SubscriptionsOverview(BaseResponse):
    users: List[Dict[str, Any]]
    plans: List[Dict[str, Any]]
    total: int
