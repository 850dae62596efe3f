# app/modules/security/service.py
from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .schemas import DEFAULT_BLOCK_REASON


class SecurityService:
    def __init__(self, api: SecureAPI):
        self.api = api

    async def get_blocked_ips(self) -> ListResponse:
        blocked = await self.api.get_blocked_ips()
        return ListResponse(success=True, items=blocked, total=len(blocked))

    async def block_ip(self, ip_address: str, reason: str = None) -> MutationResponse:
        result = await self.api.add_blocked_ip_secure(ip_address, reason or DEFAULT_BLOCK_REASON)
        return MutationResponse(
            success=True,
            message="IP address blocked",
            result=result,
            items=await self.api.get_blocked_ips()
        )

    async def unblock_ip(self, blocked_ip_id: str) -> MutationResponse:
        result = await self.api.remove_blocked_ip_secure(blocked_ip_id)
        return MutationResponse(
            success=True,
            message="IP address unblocked",
            result=result,
            items=await self.api.get_blocked_ips()
        )
