# app/modules/audit/service.py
from app.shared.schemas.common import ListResponse
from app.shared.services.secure_api import SecureAPI


class AuditService:
    def __init__(self, api: SecureAPI):
        self.api = api

    async def get_logs(self, limit: int = 100) -> ListResponse:
        logs = await self.api.get_audit_logs_secure(limit)
        return ListResponse(
            success=True,
            message=f"{len(logs)} audit entries",
            items=logs,
            total=len(logs)
        )
