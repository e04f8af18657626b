"""
사용자, 장바구니, 결제 API 엔드포인트

사용자 조회, 장바구니 추가/수량 변경/삭제, 결제 기능을 제공합니다.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from app.api.deps import get_app_settings, get_store
from app.core.config import Settings
from app.core.exceptions import (
    CartFullException,
    CartItemNotFoundException,
    EmptyCartException,
    InsufficientStockException,
    ProductNotFoundException,
    UserNotFoundException,
)
from app.db.store import DataStore
from app.schemas.cart import (
    CartItemAddRequest,
    CartItemUpdateRequest,
    CheckoutResponse,
    UserResponse,
)
from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService
from app.services.user_service import UserService

router = APIRouter()


@router.get("/users", response_model=List[UserResponse])
def list_users(store: DataStore = Depends(get_store)):
    """
    모든 사용자 목록을 조회합니다.

    Returns:
        List[UserResponse]: 사용자 목록 (장바구니 포함)
    """
    return UserService.list_users(store)


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int = Path(..., gt=0),
    store: DataStore = Depends(get_store),
):
    """
    특정 사용자를 조회합니다.

    Raises:
        HTTPException 404: 사용자를 찾을 수 없는 경우
    """
    try:
        return UserService.get_user(user_id, store)
    except UserNotFoundException as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.post(
    "/users/{user_id}/cart",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_to_cart(
    cart_item: CartItemAddRequest,
    user_id: int = Path(..., gt=0),
    store: DataStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """
    장바구니에 상품을 추가합니다.

    같은 상품을 다시 추가하면 수량이 누적됩니다.

    Args:
        cart_item: 추가 정보 (itemId, quantity)
        user_id: 사용자 ID

    Returns:
        UserResponse: 수정된 사용자 정보

    Raises:
        HTTPException 400: 상품이 없거나, 재고 부족, 장바구니 라인 상한 도달
        HTTPException 404: 사용자를 찾을 수 없는 경우

    Example:
        Request:
        ```json
        {
            "itemId": 1,
            "quantity": 2
        }
        ```

        Response (201):
        ```json
        {
            "id": 1,
            "cartItems": [{"itemId": 1, "quantity": 2}],
            "cartCount": 2
        }
        ```
    """
    try:
        return CartService.add_item(
            user_id=user_id,
            item_id=cart_item.item_id,
            quantity=cart_item.quantity,
            store=store,
            settings=settings,
        )

    except ProductNotFoundException:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Product does not exist",
        )

    except UserNotFoundException as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    except (InsufficientStockException, CartFullException) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.patch("/users/{user_id}/cart/{item_id}", response_model=UserResponse)
def update_cart_item(
    cart_item: CartItemUpdateRequest,
    user_id: int = Path(..., gt=0),
    item_id: int = Path(..., gt=0),
    store: DataStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """
    장바구니 라인의 수량을 변경합니다. quantity 가 0이면 라인을 삭제합니다.

    Raises:
        HTTPException 400: 재고 부족 또는 상품이 더 이상 없는 경우
        HTTPException 404: 사용자 또는 장바구니 라인을 찾을 수 없는 경우

    Example:
        Request:
        ```json
        {
            "quantity": 3
        }
        ```
    """
    try:
        return CartService.update_item_quantity(
            user_id=user_id,
            item_id=item_id,
            quantity=cart_item.quantity,
            store=store,
            settings=settings,
        )

    except (UserNotFoundException, CartItemNotFoundException) as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    except ProductNotFoundException:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Product does not exist",
        )

    except InsufficientStockException as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.delete("/users/{user_id}/cart/{item_id}", response_model=UserResponse)
def remove_cart_item(
    user_id: int = Path(..., gt=0),
    item_id: int = Path(..., gt=0),
    store: DataStore = Depends(get_store),
):
    """
    장바구니에서 상품 라인을 삭제합니다.

    Raises:
        HTTPException 404: 사용자 또는 장바구니 라인을 찾을 수 없는 경우
    """
    try:
        return CartService.remove_item(user_id=user_id, item_id=item_id, store=store)

    except (UserNotFoundException, CartItemNotFoundException) as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.post("/users/{user_id}/checkout", response_model=CheckoutResponse)
def checkout(
    user_id: int = Path(..., gt=0),
    store: DataStore = Depends(get_store),
):
    """
    장바구니를 결제합니다.

    모든 라인의 재고를 먼저 확인하고, 하나라도 부족하면 아무것도 변경하지 않습니다.

    Returns:
        CheckoutResponse: 성공 여부, 재고 차감 후 상품 목록, 비워진 장바구니의 사용자

    Raises:
        HTTPException 400: 빈 장바구니, 재고 부족, 상품 없음
        HTTPException 404: 사용자를 찾을 수 없는 경우

    Example:
        Response (200):
        ```json
        {
            "success": true,
            "message": "Checkout successful",
            "products": [{"id": 1, "title": "Wireless Mouse", "price": 25.99, "stock": 0, "comments": []}],
            "user": {"id": 1, "cartItems": [], "cartCount": 0}
        }
        ```
    """
    try:
        return CheckoutService.checkout(user_id=user_id, store=store)

    except UserNotFoundException as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    except ProductNotFoundException as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Product {e.product_id} does not exist",
        )

    except (EmptyCartException, InsufficientStockException) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
