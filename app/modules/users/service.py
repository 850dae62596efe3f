# app/modules/users/service.py
from typing import Any, Dict, List, Optional

from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .schemas import ExtendTrialRequest, SetUserStatusRequest


def filter_users(users: List[Dict[str, Any]], search: Optional[str]) -> List[Dict[str, Any]]:
    """Búsqueda por email o user_id (sin distinguir mayúsculas)"""
    if not search:
        return users
    term = search.lower()
    return [
        u for u in users
        if term in (u.get("email") or "").lower()
        or term in str(u.get("user_id") or "").lower()
    ]


class UsersService:
    def __init__(self, api: SecureAPI):
        self.api = api

    async def get_users(self, search: Optional[str] = None) -> ListResponse:
        users = filter_users(await self.api.get_users_with_subscriptions(), search)
        return ListResponse(
            success=True,
            message=f"{len(users)} users found",
            items=users,
            total=len(users)
        )

    async def extend_trial(self, user_id: str, data: ExtendTrialRequest) -> MutationResponse:
        """Extender trial y re-consultar usuarios"""
        justification = data.justification or f"Admin extended trial by {data.days} days"
        result = await self.api.extend_trial_secure(user_id, data.days, justification)

        return MutationResponse(
            success=True,
            message=f"Trial extended by {data.days} days",
            result=result,
            items=await self.api.get_users_with_subscriptions()
        )

    async def set_status(self, user_id: str, data: SetUserStatusRequest) -> MutationResponse:
        """Forzar estado de suscripción (override administrativo)"""
        result = await self.api.admin_set_user_status_secure(
            user_id, data.status.value, data.justification
        )

        return MutationResponse(
            success=True,
            message=f"User status set to {data.status.value}",
            result=result,
            items=await self.api.get_users_with_subscriptions()
        )
