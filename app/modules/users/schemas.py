# app/modules/users/schemas.py
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Optional


class UserStatus(str, Enum):
    """Estados de suscripción que el admin puede forzar"""
    TRIALING = "trialing"
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    SUSPENDED = "suspended"


class ExtendTrialRequest(BaseModel):
    days: int = Field(30, ge=1, le=365, description="Días a agregar al trial")
    justification: Optional[str] = Field(None, max_length=500)

    class Config:
        json_schema_extra = {
            "example": {
                "days": 30,
                "justification": "Cliente solicitó más tiempo de evaluación"
            }
        }


class SetUserStatusRequest(BaseModel):
    status: UserStatus
    justification: str = Field(..., min_length=1, max_length=500)

    @field_validator("justification")
    @classmethod
    def validate_justification(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Justification is required")
        return v.strip()
