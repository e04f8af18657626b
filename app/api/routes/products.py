"""
상품 API 엔드포인트

상품 목록/상세 조회와 댓글 작성 기능을 제공합니다.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from app.api.deps import get_app_settings, get_store
from app.core.config import Settings
from app.core.exceptions import (
    CommentLimitExceededException,
    ProductNotFoundException,
)
from app.db.store import DataStore
from app.schemas.catalog import (
    CommentCreateRequest,
    ProductDetailResponse,
    ProductResponse,
)
from app.services.product_service import ProductService

router = APIRouter()

# 상품 조회 응답은 캐시 TTL 과 같은 시간 동안 클라이언트 캐시 허용
PRODUCT_CACHE_CONTROL = "public, max-age=5"


@router.get("/products", response_model=List[ProductResponse])
def list_products(
    response: Response,
    store: DataStore = Depends(get_store),
):
    """
    모든 상품 목록을 조회합니다.

    Returns:
        List[ProductResponse]: 상품 목록

    Example:
        Response (200):
        ```json
        [
            {
                "id": 1,
                "title": "Wireless Mouse",
                "price": 25.99,
                "stock": 5,
                "comments": []
            }
        ]
        ```
    """
    products = ProductService.list_products(store)
    response.headers["Cache-Control"] = PRODUCT_CACHE_CONTROL
    return products


@router.get("/products/{product_id}", response_model=ProductDetailResponse)
def get_product(
    response: Response,
    product_id: int = Path(..., gt=0),
    store: DataStore = Depends(get_store),
):
    """
    특정 상품의 상세 정보를 평균 평점과 함께 조회합니다.

    Args:
        product_id: 조회할 상품 ID

    Returns:
        ProductDetailResponse: 상품 상세 정보 (rating: 댓글이 없으면 null)

    Raises:
        HTTPException 404: 상품을 찾을 수 없는 경우
    """
    try:
        product = ProductService.get_product(product_id, store)
    except ProductNotFoundException as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    response.headers["Cache-Control"] = PRODUCT_CACHE_CONTROL
    return product


@router.post(
    "/products/{product_id}/comments",
    response_model=ProductDetailResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    comment: CommentCreateRequest,
    product_id: int = Path(..., gt=0),
    store: DataStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """
    상품에 댓글을 작성합니다.

    Args:
        comment: 댓글 정보 (user 또는 author, text, rating)
        product_id: 상품 ID

    Returns:
        ProductDetailResponse: 댓글이 추가된 상품 (새로 계산한 rating 포함)

    Raises:
        HTTPException 404: 상품을 찾을 수 없는 경우
        HTTPException 400: 댓글 수 상한 도달

    Example:
        Request:
        ```json
        {
            "user": "alice",
            "text": "Great product!",
            "rating": 5
        }
        ```
    """
    try:
        return ProductService.add_comment(
            product_id=product_id,
            author=comment.author_name,
            text=comment.text,
            rating=comment.rating,
            store=store,
            settings=settings,
        )

    except ProductNotFoundException as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    except CommentLimitExceededException as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
