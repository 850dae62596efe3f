# app/modules/login_monitoring/service.py
import logging

from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .schemas import SUSPICIOUS_LOGIN_REASON

logger = logging.getLogger(__name__)

SUSPENDED_STATUS = "suspended"


class LoginMonitoringService:
    def __init__(self, api: SecureAPI):
        self.api = api

    # =====================================================
    # CONSULTAS
    # =====================================================

    async def get_suspicious_logins(self, min_attempts: int = 5) -> ListResponse:
        logins = await self.api.get_suspicious_logins(min_attempts)
        return ListResponse(success=True, items=logins, total=len(logins))

    async def get_login_history(self, email: str) -> ListResponse:
        history = await self.api.get_login_history(email)
        return ListResponse(success=True, items=history, total=len(history))

    async def get_multi_device_logins(self, min_devices: int = 2) -> ListResponse:
        users = await self.api.get_multi_device_logins(min_devices)
        return ListResponse(success=True, items=users, total=len(users))

    async def get_user_sessions(self, user_id: str) -> ListResponse:
        sessions = await self.api.get_user_sessions(user_id)
        return ListResponse(success=True, items=sessions, total=len(sessions))

    # =====================================================
    # ACCIONES
    # =====================================================

    async def block_source_ip(self, ip_address: str, min_attempts: int = 5) -> MutationResponse:
        """Bloquear la IP de origen de intentos sospechosos"""
        logger.warning(f"Bloqueando IP por actividad sospechosa: {ip_address}")
        result = await self.api.add_blocked_ip_secure(ip_address, SUSPICIOUS_LOGIN_REASON)

        return MutationResponse(
            success=True,
            message=f"IP {ip_address} blocked",
            result=result,
            items=await self.api.get_suspicious_logins(min_attempts)
        )

    async def terminate_session(
        self, user_id: str, device_hash: str, min_devices: int = 2
    ) -> MutationResponse:
        result = await self.api.terminate_user_session(user_id, device_hash)

        return MutationResponse(
            success=True,
            message="Session terminated",
            result=result,
            items=await self.api.get_multi_device_logins(min_devices)
        )

    async def suspend_user(self, user_id: str, reason: str, min_devices: int = 2) -> MutationResponse:
        logger.warning(f"Suspendiendo usuario {user_id}: {reason}")
        result = await self.api.admin_set_user_status_secure(user_id, SUSPENDED_STATUS, reason)

        return MutationResponse(
            success=True,
            message="User suspended",
            result=result,
            items=await self.api.get_multi_device_logins(min_devices)
        )
