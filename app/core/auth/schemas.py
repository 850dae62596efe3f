from pydantic import BaseModel, EmailStr, Field
from typing import Dict, List, Optional

from app.shared.schemas.common import BaseResponse


class LoginRequest(BaseModel):
    """Schema para login de administrador"""
    email: EmailStr = Field(..., description="Email del administrador")
    password: str = Field(..., min_length=1, description="Contraseña")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "admin@emonitor.app",
                "password": "super-secret"
            }
        }


class AdminResponse(BaseModel):
    """Schema para el admin autenticado"""
    id: str
    email: str
    role: str
    is_active: bool

    class Config:
        from_attributes = True


class SessionResponse(BaseModel):
    """Estado actual del gate de sesión"""
    state: str
    is_authenticated: bool
    is_loading: bool
    admin: Optional[AdminResponse] = None
    last_error: Optional[str] = None


class LoginResponse(BaseResponse):
    admin: AdminResponse


class PermissionsResponse(BaseModel):
    admin: AdminResponse
    permissions: List[str]
    can: Dict[str, bool]
