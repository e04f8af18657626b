"""
사용자, 장바구니, 결제 관련 Pydantic 스키마

API 요청/응답 모델을 정의합니다.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schemas.catalog import ProductResponse


class _CamelRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )


class CartItemAddRequest(_CamelRequest):
    """
    장바구니 추가 요청 스키마

    Example:
        {
            "itemId": 1,
            "quantity": 2
        }
    """

    item_id: int = Field(..., gt=0, strict=True, description="상품 ID", examples=[1])
    quantity: int = Field(
        1, gt=0, strict=True, description="추가 수량 (양수, 기본값 1)", examples=[2]
    )


class CartItemUpdateRequest(_CamelRequest):
    """
    장바구니 수량 변경 요청 스키마 (0이면 삭제)

    Example:
        {
            "quantity": 3
        }
    """

    quantity: int = Field(
        ..., ge=0, strict=True, description="새 수량 (0 이상)", examples=[3]
    )


class CartLine(_CamelModel):
    """장바구니 라인"""

    item_id: int = Field(..., description="상품 ID")
    quantity: int = Field(..., description="수량")


class UserResponse(_CamelModel):
    """
    사용자 정보 응답 스키마

    Example:
        {
            "id": 1,
            "name": "Alice",
            "cartItems": [{"itemId": 1, "quantity": 2}],
            "cartCount": 2
        }
    """

    id: int = Field(..., description="사용자 ID")
    cart_items: list[CartLine] = Field(default_factory=list, description="장바구니 라인")
    cart_count: int = Field(0, description="장바구니 수량 합계")


class CheckoutResponse(BaseModel):
    """
    결제 결과 응답 스키마

    Example:
        {
            "success": true,
            "message": "Checkout successful",
            "products": [{"id": 1, "title": "Wireless Mouse", "price": 25.99, "stock": 0, "comments": []}],
            "user": {"id": 1, "cartItems": [], "cartCount": 0}
        }
    """

    success: bool = Field(..., description="결제 성공 여부")
    message: str = Field(..., description="결과 메시지")
    products: list[ProductResponse] = Field(..., description="재고 차감 후 상품 목록")
    user: UserResponse = Field(..., description="결제 후 사용자 정보")
