# app/modules/analytics/service.py
from decimal import Decimal, ROUND_HALF_UP

from app.modules.overview.service import count_by_status
from app.shared.services.secure_api import SecureAPI
from .schemas import AnalyticsSummary


def conversion_rate(active_trials: int, active_subscriptions: int) -> int:
    """Porcentaje de suscripciones sobre trials + suscripciones (0 sin datos)

    Las mitades se redondean hacia arriba: 12.5 -> 13.
    """
    denominator = active_trials + active_subscriptions
    if denominator == 0:
        return 0
    rate = Decimal(active_subscriptions * 100) / Decimal(denominator)
    return int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class AnalyticsService:
    def __init__(self, api: SecureAPI):
        self.api = api

    async def get_summary(self) -> AnalyticsSummary:
        users = await self.api.get_users_with_subscriptions()
        devices = await self.api.get_active_devices()

        active_trials = count_by_status(users, "trialing")
        active_subscriptions = count_by_status(users, "active")

        return AnalyticsSummary(
            success=True,
            message="Analytics loaded",
            total_users=len(users),
            active_trials=active_trials,
            active_subscriptions=active_subscriptions,
            total_devices=len(devices),
            blocked_devices=sum(1 for d in devices if d.get("is_blocked")),
            trial_conversion_rate=conversion_rate(active_trials, active_subscriptions)
        )
