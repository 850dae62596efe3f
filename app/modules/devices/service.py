# app/modules/devices/service.py
from typing import Any, Dict, List, Optional

from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .schemas import DeviceAction, DeviceStatusFilter

ACTION_MESSAGES = {
    DeviceAction.BLOCK: "Device has been blocked",
    DeviceAction.UNBLOCK: "Device has been unblocked",
    DeviceAction.RESET_TRIAL: "Device trial count has been reset",
}


def filter_devices(
    devices: List[Dict[str, Any]],
    search: Optional[str] = None,
    status: DeviceStatusFilter = DeviceStatusFilter.ALL,
) -> List[Dict[str, Any]]:
    term = (search or "").lower()
    result = []
    for device in devices:
        matches_search = (
            term in (device.get("device_hash") or "").lower()
            or term in (device.get("last_user_id") or "").lower()
        )
        blocked = bool(device.get("is_blocked"))
        matches_status = (
            status == DeviceStatusFilter.ALL
            or (status == DeviceStatusFilter.BLOCKED and blocked)
            or (status == DeviceStatusFilter.OK and not blocked)
        )
        if matches_search and matches_status:
            result.append(device)
    return result


class DevicesService:
    def __init__(self, api: SecureAPI):
        self.api = api

    async def get_devices(
        self,
        search: Optional[str] = None,
        status: DeviceStatusFilter = DeviceStatusFilter.ALL,
    ) -> ListResponse:
        devices = filter_devices(await self.api.get_devices(), search, status)
        return ListResponse(success=True, items=devices, total=len(devices))

    async def get_active_devices(self) -> ListResponse:
        devices = await self.api.get_active_devices()
        return ListResponse(success=True, items=devices, total=len(devices))

    async def apply_action(
        self,
        device_hash: str,
        action: DeviceAction,
        justification: str,
    ) -> MutationResponse:
        """Ejecutar acción sobre el dispositivo y re-consultar el listado"""
        if action == DeviceAction.BLOCK:
            result = await self.api.block_device_secure(device_hash, justification)
        elif action == DeviceAction.UNBLOCK:
            result = await self.api.unblock_device_secure(device_hash, justification)
        else:
            result = await self.api.reset_device_trial_count(device_hash, justification)

        return MutationResponse(
            success=True,
            message=ACTION_MESSAGES[action],
            result=result,
            items=await self.api.get_devices()
        )
