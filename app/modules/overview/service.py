# app/modules/overview/service.py
from typing import Any, Dict, List

from app.shared.services.secure_api import SecureAPI
from .schemas import DashboardStats, UpcomingExpiration

EXPIRATION_WINDOW_DAYS = 7
MAX_UPCOMING = 5


def count_by_status(users: List[Dict[str, Any]], status: str) -> int:
    return sum(1 for u in users if u.get("status") == status)


class OverviewService:
    def __init__(self, api: SecureAPI):
        self.api = api

    async def get_dashboard(self) -> DashboardStats:
        """Indicadores del dashboard principal"""
        users = await self.api.get_users_with_subscriptions()

        if not users:
            return DashboardStats(
                success=True,
                message="No users found",
                total_users=0,
                active_trials=0,
                active_subscriptions=0,
                total_devices=0,
                upcoming_expirations=[]
            )

        expiring = [
            u for u in users
            if u.get("days_remaining") is not None
            and 0 <= u["days_remaining"] <= EXPIRATION_WINDOW_DAYS
        ]
        expiring.sort(key=lambda u: u["days_remaining"])

        devices = await self.api.get_active_devices()

        return DashboardStats(
            success=True,
            message="Dashboard loaded",
            total_users=len(users),
            active_trials=count_by_status(users, "trialing"),
            active_subscriptions=count_by_status(users, "active"),
            total_devices=len(devices),
            upcoming_expirations=[
                UpcomingExpiration(
                    user_id=u["user_id"],
                    email=u.get("email"),
                    plan_name=u.get("plan_name"),
                    days_remaining=u["days_remaining"]
                )
                for u in expiring[:MAX_UPCOMING]
            ]
        )
