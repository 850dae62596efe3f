# app/modules/devices/schemas.py
from enum import Enum
from pydantic import BaseModel, Field, field_validator


class DeviceStatusFilter(str, Enum):
    ALL = "all"
    BLOCKED = "blocked"
    OK = "ok"


class DeviceAction(str, Enum):
    BLOCK = "block"
    UNBLOCK = "unblock"
    RESET_TRIAL = "reset-trial"


class DeviceActionRequest(BaseModel):
    justification: str = Field(..., description="Justificación obligatoria de la acción")

    @field_validator("justification")
    @classmethod
    def validate_justification(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Justification is required for all device actions")
        return v.strip()
