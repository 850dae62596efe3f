# app/shared/schemas/common.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime


class BaseResponse(BaseModel):
    success: bool
    message: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)


class ErrorResponse(BaseResponse):
    success: bool = False
    error_code: Optional[str] = None
    details: Optional[Any] = None
    hint: Optional[str] = None


class ListResponse(BaseResponse):
    """Colección completa tal como la devuelve el backend"""
    items: List[Dict[str, Any]]
    total: int


class MutationResponse(BaseResponse):
    """Resultado de una mutación más la colección afectada re-consultada"""
    result: Any = None
    items: List[Dict[str, Any]] = []
