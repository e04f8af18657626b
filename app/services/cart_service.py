"""
장바구니 서비스

사용자 컬렉션을 읽고, 장바구니 라인을 수정한 뒤, 컬렉션 전체를 다시 저장합니다.
모든 수정 후에는 cartCount 를 다시 계산합니다.
"""

import logging
from typing import Optional

from app.core.config import Settings
from app.core.exceptions import (
    CartFullException,
    CartItemNotFoundException,
    InsufficientStockException,
    ProductNotFoundException,
    UserNotFoundException,
)
from app.db.json_storage import PRODUCTS, USERS
from app.db.store import DataStore
from app.services.product_service import ProductService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


class CartService:
    """장바구니 추가/수량 변경/삭제 서비스"""

    @staticmethod
    def _find_line(user: dict, item_id: int) -> Optional[dict]:
        return next(
            (line for line in user.get("cartItems", []) if line["itemId"] == item_id),
            None,
        )

    @staticmethod
    def _load_user(users: list[dict], user_id: int) -> dict:
        user = UserService.find_user(users, user_id)
        if user is None:
            raise UserNotFoundException(user_id)
        user.setdefault("cartItems", [])
        return user

    @staticmethod
    def add_item(
        user_id: int,
        item_id: int,
        quantity: int,
        store: DataStore,
        settings: Settings,
    ) -> dict:
        """
        장바구니에 상품을 추가합니다.

        같은 상품이 이미 있으면 수량을 누적하고, 없으면 새 라인을 추가합니다.
        누적 수량이 상품 재고를 넘으면 거부합니다.

        Args:
            user_id: 사용자 ID
            item_id: 상품 ID
            quantity: 추가할 수량 (양수)
            store: 데이터 저장소
            settings: 애플리케이션 설정 (장바구니 라인 상한)

        Returns:
            수정된 사용자 dict

        Raises:
            ProductNotFoundException: 상품이 존재하지 않는 경우
            UserNotFoundException: 사용자를 찾을 수 없는 경우
            InsufficientStockException: 누적 수량이 재고를 초과하는 경우
            CartFullException: 새 라인을 추가할 공간이 없는 경우
        """
        with store.transaction(PRODUCTS, USERS):
            product = ProductService.find_product(store.load_products(), item_id)
            if product is None:
                raise ProductNotFoundException(item_id)

            users = store.load_users()
            user = CartService._load_user(users, user_id)

            line = CartService._find_line(user, item_id)
            existing_quantity = line["quantity"] if line else 0
            stock = product.get("stock", 0)
            if stock < existing_quantity + quantity:
                raise InsufficientStockException(
                    item_id, existing_quantity + quantity, stock
                )

            if line is not None:
                line["quantity"] += quantity
            else:
                if len(user["cartItems"]) >= settings.max_cart_lines:
                    raise CartFullException(user_id, settings.max_cart_lines)
                user["cartItems"].append({"itemId": item_id, "quantity": quantity})

            UserService.recompute_cart_count(user)
            store.save_users(users)

        logger.info(
            "Added %d to cart (cartCount=%d)",
            quantity,
            user["cartCount"],
            extra={"user_id": user_id, "item_id": item_id},
        )
        return user

    @staticmethod
    def update_item_quantity(
        user_id: int,
        item_id: int,
        quantity: int,
        store: DataStore,
        settings: Settings,
    ) -> dict:
        """
        장바구니 라인의 수량을 변경합니다. 0이면 라인을 삭제합니다.

        settings.enforce_stock_on_update 가 True면 새 수량을 상품 재고와 비교합니다.
        False면 재고 확인 없이 수량을 변경합니다 (추가 시에만 재고를 확인하던 기존 동작).

        Args:
            user_id: 사용자 ID
            item_id: 상품 ID
            quantity: 새 수량 (0 이상)
            store: 데이터 저장소
            settings: 애플리케이션 설정

        Returns:
            수정된 사용자 dict

        Raises:
            UserNotFoundException: 사용자를 찾을 수 없는 경우
            CartItemNotFoundException: 장바구니에 해당 상품이 없는 경우
            ProductNotFoundException: 재고 확인 시 상품이 존재하지 않는 경우
            InsufficientStockException: 새 수량이 재고를 초과하는 경우
        """
        with store.transaction(PRODUCTS, USERS):
            users = store.load_users()
            user = CartService._load_user(users, user_id)

            line = CartService._find_line(user, item_id)
            if line is None:
                raise CartItemNotFoundException(user_id, item_id)

            if quantity == 0:
                user["cartItems"].remove(line)
            else:
                if settings.enforce_stock_on_update:
                    product = ProductService.find_product(
                        store.load_products(), item_id
                    )
                    if product is None:
                        raise ProductNotFoundException(item_id)
                    stock = product.get("stock", 0)
                    if stock < quantity:
                        raise InsufficientStockException(item_id, quantity, stock)
                line["quantity"] = quantity

            UserService.recompute_cart_count(user)
            store.save_users(users)

        logger.info(
            "Set cart quantity to %d (cartCount=%d)",
            quantity,
            user["cartCount"],
            extra={"user_id": user_id, "item_id": item_id},
        )
        return user

    @staticmethod
    def remove_item(user_id: int, item_id: int, store: DataStore) -> dict:
        """
        장바구니에서 상품 라인을 삭제합니다.

        Raises:
            UserNotFoundException: 사용자를 찾을 수 없는 경우
            CartItemNotFoundException: 장바구니에 해당 상품이 없는 경우
        """
        with store.transaction(USERS):
            users = store.load_users()
            user = CartService._load_user(users, user_id)

            line = CartService._find_line(user, item_id)
            if line is None:
                raise CartItemNotFoundException(user_id, item_id)

            user["cartItems"].remove(line)
            UserService.recompute_cart_count(user)
            store.save_users(users)

        logger.info(
            "Removed line from cart (cartCount=%d)",
            user["cartCount"],
            extra={"user_id": user_id, "item_id": item_id},
        )
        return user
