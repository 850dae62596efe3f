# app/modules/email_pool/schemas.py
from pydantic import BaseModel, EmailStr, Field
from typing import Any, Dict


class SenderCreate(BaseModel):
    """Schema para agregar un remitente al pool"""
    email: EmailStr = Field(..., description="Cuenta SMTP")
    smtp_server: str = Field("smtp.gmail.com", min_length=1)
    smtp_port: int = Field(587, ge=1, le=65535)
    password: str = Field(..., min_length=1, description="Contraseña o app password SMTP")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "alerts01@emonitor.app",
                "smtp_server": "smtp.gmail.com",
                "smtp_port": 587,
                "password": "app-password"
            }
        }


class SenderToggle(BaseModel):
    is_active: bool


class SenderAssign(BaseModel):
    user_id: str = Field(..., min_length=1)


class SenderReassign(BaseModel):
    sender_id: str = Field(..., min_length=1)


def map_sender(item: Dict[str, Any]) -> Dict[str, Any]:
    """Proyección de sender_pool para la vista"""
    return {
        "id": item["id"],
        "email": item.get("smtp_email"),
        "smtp_host": item.get("smtp_server"),
        "smtp_port": item.get("smtp_port"),
        "username": item.get("smtp_email"),
        "assigned_count": item.get("assigned_count", 0),
        "is_active": item.get("is_active"),
        "created_at": item.get("created_at"),
    }
