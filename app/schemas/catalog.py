"""
상품 및 댓글 관련 Pydantic 스키마

API 요청/응답 모델을 정의합니다.
JSON 필드명은 camelCase 이며, 파일에 있는 추가 필드(image, description 등)는 그대로 유지합니다.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

COMMENT_AUTHOR_MAX_LENGTH = 100
COMMENT_TEXT_MAX_LENGTH = 500


class CommentCreateRequest(BaseModel):
    """
    댓글 작성 요청 스키마

    작성자 이름은 user 또는 author 중 하나로 보낼 수 있습니다.

    Example:
        {
            "user": "alice",
            "text": "Great product!",
            "rating": 5
        }
    """

    user: Optional[str] = Field(
        None,
        max_length=COMMENT_AUTHOR_MAX_LENGTH,
        description="작성자 이름",
        examples=["alice"],
    )
    author: Optional[str] = Field(
        None,
        max_length=COMMENT_AUTHOR_MAX_LENGTH,
        description="작성자 이름 (user 의 별칭)",
    )
    text: Optional[str] = Field(
        None,
        max_length=COMMENT_TEXT_MAX_LENGTH,
        description="댓글 본문 (최대 500자)",
        examples=["Great product!"],
    )
    rating: int = Field(..., ge=1, le=5, description="평점 (1-5)", examples=[5])

    @model_validator(mode="after")
    def check_author_and_text(self) -> "CommentCreateRequest":
        if not self.author_name or not (self.text or "").strip():
            raise ValueError("User and text are required")
        return self

    @property
    def author_name(self) -> str:
        return (self.user or self.author or "").strip()


class CommentResponse(BaseModel):
    """댓글 응답 스키마"""

    model_config = ConfigDict(extra="allow")

    user: Optional[str] = Field(None, description="작성자 이름")
    text: str = Field(..., description="댓글 본문")
    rating: int = Field(..., description="평점")


class ProductResponse(BaseModel):
    """
    상품 정보 응답 스키마

    Example:
        {
            "id": 1,
            "title": "Wireless Mouse",
            "price": 25.99,
            "stock": 5,
            "comments": []
        }
    """

    model_config = ConfigDict(extra="allow")

    id: int = Field(..., description="상품 ID")
    title: Optional[str] = Field(None, description="상품명")
    price: int | float = Field(..., description="상품 가격")
    stock: int = Field(..., description="현재 재고 수량")
    comments: list[CommentResponse] = Field(default_factory=list, description="댓글 목록")


class ProductDetailResponse(ProductResponse):
    """
    평균 평점이 포함된 상품 상세 응답 스키마

    Example:
        {
            "id": 1,
            "title": "Wireless Mouse",
            "price": 25.99,
            "stock": 5,
            "comments": [{"user": "alice", "text": "Nice", "rating": 4}],
            "rating": 4.0
        }
    """

    rating: Optional[float] = Field(None, description="평균 평점 (댓글이 없으면 null)")
