# app/modules/promotions/service.py
from app.shared.schemas.common import ListResponse, MutationResponse
from app.shared.services.secure_api import SecureAPI
from .schemas import PromotionApply, PromotionCreate


class PromotionsService:
    def __init__(self, api: SecureAPI):
        self.api = api

    async def get_promotions(self) -> ListResponse:
        promotions = await self.api.get_promotions()
        active = sum(1 for p in promotions if p.get("is_active"))
        return ListResponse(
            success=True,
            message=f"{active} active promotions",
            items=promotions,
            total=len(promotions)
        )

    async def create_promotion(self, data: PromotionCreate) -> MutationResponse:
        result = await self.api.create_promotion(data.code, data.discount_percent, data.max_uses)
        return MutationResponse(
            success=True,
            message="Promotion created",
            result=result,
            items=await self.api.get_promotions()
        )

    async def toggle_promotion(self, promotion_id: str, is_active: bool) -> MutationResponse:
        result = await self.api.set_promotion_active(promotion_id, is_active)
        return MutationResponse(
            success=True,
            message=f"Promotion {'activated' if is_active else 'deactivated'}",
            result=result,
            items=await self.api.get_promotions()
        )

    async def delete_promotion(self, promotion_id: str) -> MutationResponse:
        result = await self.api.delete_promotion(promotion_id)
        return MutationResponse(
            success=True,
            message="Promotion deleted",
            result=result,
            items=await self.api.get_promotions()
        )

    async def apply_promotion(self, data: PromotionApply) -> MutationResponse:
        """Descuento, usos y vigencia los valida apply_promotion_secure"""
        result = await self.api.apply_promotion_secure(data.user_id, data.promo_code.strip().upper())
        return MutationResponse(
            success=True,
            message=f"Promotion {data.promo_code.upper()} applied",
            result=result,
            items=await self.api.get_promotions()
        )
