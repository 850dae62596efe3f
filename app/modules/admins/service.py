# app/modules/admins/service.py
import logging

from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .schemas import AdminRoleCreate, AdminRoleUpdate

logger = logging.getLogger(__name__)


class AdminsService:
    def __init__(self, api: SecureAPI):
        self.api = api

    async def get_admins(self) -> ListResponse:
        roles = await self.api.get_admin_roles()
        return ListResponse(success=True, items=roles, total=len(roles))

    async def create_admin(self, data: AdminRoleCreate) -> MutationResponse:
        logger.info(f"Nuevo rol admin {data.role.value} para {data.user_id}")
        result = await self.api.create_admin_role(data.user_id, data.role.value)

        return MutationResponse(
            success=True,
            message=f"Admin role {data.role.value} granted",
            result=result,
            items=await self.api.get_admin_roles()
        )

    async def update_admin(self, user_id: str, data: AdminRoleUpdate) -> MutationResponse:
        logger.info(f"Cambio de rol admin para {user_id} -> {data.role.value}")
        result = await self.api.update_admin_role(user_id, data.role.value)

        return MutationResponse(
            success=True,
            message=f"Admin role changed to {data.role.value}",
            result=result,
            items=await self.api.get_admin_roles()
        )

    async def deactivate_admin(self, user_id: str) -> MutationResponse:
        logger.warning(f"Desactivando rol admin de {user_id}")
        result = await self.api.deactivate_admin_role(user_id)

        return MutationResponse(
            success=True,
            message="Admin role deactivated",
            result=result,
            items=await self.api.get_admin_roles()
        )
