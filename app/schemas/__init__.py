"""
Pydantic 스키마 모듈
"""

from app.schemas.cart import (
    CartItemAddRequest,
    CartItemUpdateRequest,
    CartLine,
    CheckoutResponse,
    UserResponse,
)
from app.schemas.catalog import (
    CommentCreateRequest,
    CommentResponse,
    ProductDetailResponse,
    ProductResponse,
)

__all__ = [
    "CartItemAddRequest",
    "CartItemUpdateRequest",
    "CartLine",
    "CheckoutResponse",
    "UserResponse",
    "CommentCreateRequest",
    "CommentResponse",
    "ProductDetailResponse",
    "ProductResponse",
]
