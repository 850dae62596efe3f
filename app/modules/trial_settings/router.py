# app/modules/trial_settings/router.py
from fastapi import APIRouter, Depends

from app.core.auth.dependencies import get_current_admin, get_secure_api, require_modify
from app.core.auth.service import AdminIdentity
from app.shared.services.secure_api import SecureAPI
from .service import TrialSettingsService
from .schemas import TrialSettings, TrialSettingsUpdate

router = APIRouter()


@router.get("", response_model=TrialSettings)
async def get_trial_settings(
    current_admin: AdminIdentity = Depends(get_current_admin),
    api: SecureAPI = Depends(get_secure_api)
):
    """Configuración actual del trial gratuito"""
    service = TrialSettingsService(api)
    return await service.get_settings()


@router.put("", response_model=TrialSettings)
async def update_trial_settings(
    data: TrialSettingsUpdate,
    current_admin: AdminIdentity = Depends(require_modify),
    api: SecureAPI = Depends(get_secure_api)
):
    """
    Actualizar la configuración del trial

    **Validaciones:**
    - Días de trial entre 1 y 365

    **Permisos:** SuperAdmin, SupportAdmin
    """
    service = TrialSettingsService(api)
    return await service.update_settings(data, current_admin)
