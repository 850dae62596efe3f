# app/modules/plans/service.py
from decimal import Decimal
from typing import Any, Dict, List

from app.shared.services.secure_api import SecureAPI
from .schemas import PlanDetail, PlanStats, PlansOverview


def build_plan_stats(users: List[Dict[str, Any]]) -> List[PlanStats]:
    """Suscriptores e ingreso mensual/anual agrupados por plan"""
    stats: Dict[Any, PlanStats] = {}
    for user in users:
        plan_id = user.get("plan_id")
        stat = stats.get(plan_id)
        if stat is None:
            stat = PlanStats(plan_id=plan_id, plan_name=user.get("plan_name") or "Unknown")
            stats[plan_id] = stat
        price = Decimal(str(user.get("price") or 0))
        stat.subscriber_count += 1
        stat.revenue_monthly += price
        stat.revenue_annual += price * 12
    return list(stats.values())


class PlansService:
    def __init__(self, api: SecureAPI):
        self.api = api

    async def get_overview(self) -> PlansOverview:
        plans = await self.api.get_plans()
        users = await self.api.get_users_with_subscriptions()
        return PlansOverview(
            success=True,
            message=f"{len(plans)} plans found",
            plans=plans,
            stats=build_plan_stats(users)
        )

    async def get_analytics(self) -> Any:
        return await self.api.get_plan_analytics()

    async def get_plan(self, plan_id: str) -> PlanDetail:
        plan = await self.api.get_plan_by_id(plan_id)
        return PlanDetail(success=True, plan=plan)
