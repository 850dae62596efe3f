# app/modules/plans/schemas.py
from decimal import Decimal
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from app.shared.schemas.common import BaseResponse


class PlanStats(BaseModel):
    plan_id: Optional[str] = None
    plan_name: str
    subscriber_count: int = 0
    revenue_monthly: Decimal = Decimal("0")
    revenue_annual: Decimal = Decimal("0")


class PlansOverview(BaseResponse):
    plans: List[Dict[str, Any]]
    stats: List[PlanStats]


class PlanDetail(BaseResponse):
    plan: Dict[str, Any]
