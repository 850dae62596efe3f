# app/modules/login_monitoring/schemas.py
from pydantic import BaseModel, Field, field_validator

from app.modules.security.schemas import validate_ipv4

SUSPICIOUS_LOGIN_REASON = "Suspicious login activity detected"


class BlockSourceIPRequest(BaseModel):
    ip_address: str

    @field_validator("ip_address")
    @classmethod
    def check_ip(cls, v: str) -> str:
        return validate_ipv4(v)


class SuspendUserRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=500)

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("A reason is required to suspend a user")
        return v.strip()
