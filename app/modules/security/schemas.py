# app/modules/security/schemas.py
import re
from pydantic import BaseModel, Field, field_validator
from typing import Optional

IPV4_PATTERN = re.compile(r"^(\d{1,3}\.){3}\d{1,3}$")
DEFAULT_BLOCK_REASON = "Manual block"


def validate_ipv4(value: str) -> str:
    value = value.strip()
    if not IPV4_PATTERN.match(value):
        raise ValueError("Invalid IP address format")
    return value


class BlockIPRequest(BaseModel):
    ip_address: str = Field(..., description="Dirección IPv4")
    reason: Optional[str] = Field(None, max_length=500)

    @field_validator("ip_address")
    @classmethod
    def check_ip(cls, v: str) -> str:
        return validate_ipv4(v)

    class Config:
        json_schema_extra = {
            "example": {
                "ip_address": "203.0.113.42",
                "reason": "Fuerza bruta contra el login"
            }
        }
