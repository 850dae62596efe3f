# app/modules/email_pool/service.py
from typing import Any, Dict, List

from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .schemas import SenderCreate, map_sender


class EmailPoolService:
    def __init__(self, api: SecureAPI):
        self.api = api

    async def _senders(self) -> List[Dict[str, Any]]:
        return [map_sender(s) for s in await self.api.get_sender_pool()]

    async def _assignments(self) -> List[Dict[str, Any]]:
        return [
            {
                "id": a.get("id"),
                "user_id": a.get("user_id"),
                "sender_id": a.get("sender_id"),
                "sender_email": (a.get("sender_pool") or {}).get("smtp_email"),
            }
            for a in await self.api.get_sender_assignments()
        ]

    async def get_senders(self) -> ListResponse:
        senders = await self._senders()
        return ListResponse(success=True, items=senders, total=len(senders))

    async def get_assignments(self) -> ListResponse:
        assignments = await self._assignments()
        return ListResponse(success=True, items=assignments, total=len(assignments))

    async def add_sender(self, data: SenderCreate) -> MutationResponse:
        result = await self.api.add_sender_secure(
            data.email, data.smtp_server, data.smtp_port, data.password
        )
        return MutationResponse(
            success=True,
            message="Email added to pool",
            result=result,
            items=await self._senders()
        )

    async def toggle_sender(self, sender_id: str, is_active: bool) -> MutationResponse:
        result = await self.api.toggle_sender_status_secure(sender_id, is_active)
        return MutationResponse(
            success=True,
            message=f"Email {'activated' if is_active else 'deactivated'}",
            result=result,
            items=await self._senders()
        )

    async def assign_sender(self, user_id: str) -> MutationResponse:
        """El backend elige el remitente con menos asignaciones"""
        result = await self.api.assign_sender_secure(user_id)
        return MutationResponse(
            success=True,
            message="Sender assigned",
            result=result,
            items=await self._assignments()
        )

    async def reassign_sender(self, user_id: str, sender_id: str) -> MutationResponse:
        result = await self.api.update_sender_assignment_secure(user_id, sender_id)
        return MutationResponse(
            success=True,
            message="Sender assignment updated",
            result=result,
            items=await self._assignments()
        )
