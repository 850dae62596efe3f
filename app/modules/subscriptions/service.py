# app/modules/subscriptions/service.py
from typing import Any, Dict, List

from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .schemas import SubscriptionsOverview, UpgradePlanRequest

NOT_ASSIGNED = "Not assigned"


def sender_emails_by_user(assignments: List[Dict[str, Any]]) -> Dict[str, str]:
    """user_id -> email del remitente asignado"""
    emails = {}
    for a in assignments:
        sender = a.get("sender_pool") or {}
        if sender.get("smtp_email"):
            emails[a["user_id"]] = sender["smtp_email"]
    return emails


class SubscriptionsService:
    def __init__(self, api: SecureAPI):
        self.api = api

    async def _load_users(self) -> List[Dict[str, Any]]:
        users = await self.api.get_users_with_subscriptions()
        senders = sender_emails_by_user(await self.api.get_sender_assignments())
        return [
            {**u, "sender_email": senders.get(u.get("user_id"), NOT_ASSIGNED)}
            for u in users
        ]

    async def get_overview(self) -> SubscriptionsOverview:
        users = await self._load_users()
        plans = await self.api.get_plans()
        return SubscriptionsOverview(
            success=True,
            message=f"{len(users)} users found",
            users=users,
            plans=plans,
            total=len(users)
        )

    async def get_records(self) -> ListResponse:
        records = await self.api.get_subscriptions()
        return ListResponse(success=True, items=records, total=len(records))

    async def upgrade_plan(self, user_id: str, data: UpgradePlanRequest) -> MutationResponse:
        """Cambiar plan del usuario y re-consultar"""
        justification = data.justification
        if not justification:
            current = next(
                (u for u in await self.api.get_users_with_subscriptions() if u.get("user_id") == user_id),
                None
            )
            previous_plan = current.get("plan_id") if current else None
            justification = f"Plan upgraded from {previous_plan} to {data.plan_id}"

        result = await self.api.upgrade_plan_secure(user_id, data.plan_id, justification)

        return MutationResponse(
            success=True,
            message=f"Plan upgraded to {data.plan_id}",
            result=result,
            items=await self._load_users()
        )
