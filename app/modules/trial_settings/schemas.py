# app/modules/trial_settings/schemas.py
from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional

from app.shared.schemas.common import BaseResponse

FREE_TRIAL_DAYS_KEY = "free_trial_days"
AUTO_CREATE_TRIAL_KEY = "auto_create_trial"
DEFAULT_TRIAL_DAYS = 7
DEFAULT_AUTO_CREATE = True


class TrialSettings(BaseResponse):
    free_trial_days: int = DEFAULT_TRIAL_DAYS
    auto_create_trial: bool = DEFAULT_AUTO_CREATE
    last_updated: Optional[datetime] = None


class TrialSettingsUpdate(BaseModel):
    free_trial_days: int = Field(..., ge=1, le=365, description="Días de trial para nuevos usuarios")
    auto_create_trial: bool = Field(..., description="Crear trial automáticamente al registrarse")

    class Config:
        json_schema_extra = {
            "example": {
                "free_trial_days": 14,
                "auto_create_trial": True
            }
        }
