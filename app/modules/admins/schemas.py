# app/modules/admins/schemas.py
from pydantic import BaseModel, Field

from app.core.auth.service import AdminRole


class AdminRoleCreate(BaseModel):
    user_id: str = Field(..., min_length=1, description="ID del usuario en el backend")
    role: AdminRole

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "6f1c2d3e-0000-4000-8000-000000000001",
                "role": "SupportAdmin"
            }
        }


class AdminRoleUpdate(BaseModel):
    role: AdminRole
