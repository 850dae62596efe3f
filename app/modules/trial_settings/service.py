# app/modules/trial_settings/service.py
import logging

from app.core.auth.service import AdminIdentity
from app.shared.services.secure_api import SecureAPI
from .schemas import (
    AUTO_CREATE_TRIAL_KEY, FREE_TRIAL_DAYS_KEY, TrialSettings, TrialSettingsUpdate,
)

logger = logging.getLogger(__name__)


class TrialSettingsService:
    def __init__(self, api: SecureAPI):
        self.api = api

    async def get_settings(self) -> TrialSettings:
        """Leer configuración; las claves ausentes conservan su valor por defecto"""
        rows = await self.api.get_app_config([FREE_TRIAL_DAYS_KEY, AUTO_CREATE_TRIAL_KEY])
        values = {}

        for row in rows:
            if row.get("key") == FREE_TRIAL_DAYS_KEY:
                try:
                    values["free_trial_days"] = int(str(row["value"]).strip())
                except ValueError:
                    logger.warning(f"Invalid {FREE_TRIAL_DAYS_KEY} value: {row['value']!r}, using default")
                values["last_updated"] = row.get("updated_at")
            elif row.get("key") == AUTO_CREATE_TRIAL_KEY:
                values["auto_create_trial"] = row.get("value") == "true"
                values.setdefault("last_updated", row.get("updated_at"))

        return TrialSettings(success=True, **values)

    async def update_settings(self, data: TrialSettingsUpdate, admin: AdminIdentity) -> TrialSettings:
        """Guardar ambos valores con el admin actual como `updated_by`"""
        logger.info(
            f"Trial settings: {data.free_trial_days} días, "
            f"auto_create={data.auto_create_trial} (admin {admin.email})"
        )

        await self.api.update_app_config(FREE_TRIAL_DAYS_KEY, str(data.free_trial_days), admin.id)
        await self.api.update_app_config(
            AUTO_CREATE_TRIAL_KEY, "true" if data.auto_create_trial else "false", admin.id
        )

        settings = await self.get_settings()
        settings.message = "Trial settings updated"
        return settings
