# app/modules/promotions/schemas.py
from pydantic import BaseModel, Field, field_validator


class PromotionCreate(BaseModel):
    """Schema para crear una promoción"""
    code: str = Field(..., min_length=1, max_length=50, description="Código (se guarda en mayúsculas)")
    discount_percent: int = Field(10, ge=1, le=100)
    max_uses: int = Field(100, ge=1)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Promotion code is required")
        return v.strip().upper()

    class Config:
        json_schema_extra = {
            "example": {
                "code": "BLACKFRIDAY",
                "discount_percent": 30,
                "max_uses": 500
            }
        }


class PromotionToggle(BaseModel):
    is_active: bool


class PromotionApply(BaseModel):
    user_id: str = Field(..., min_length=1)
    promo_code: str = Field(..., min_length=1)
