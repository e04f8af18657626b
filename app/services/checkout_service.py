"""
결제 처리 서비스

장바구니의 모든 라인을 먼저 검증한 뒤에만 재고를 차감하므로,
한 라인이라도 재고가 부족하면 어떤 상품의 재고도 바뀌지 않습니다.
"""

import logging

from app.core.exceptions import (
    EmptyCartException,
    InsufficientStockException,
    ProductNotFoundException,
    UserNotFoundException,
)
from app.db.json_storage import PRODUCTS, USERS
from app.db.store import DataStore
from app.services.product_service import ProductService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


class CheckoutService:
    """결제 처리 서비스 클래스"""

    @staticmethod
    def checkout(user_id: int, store: DataStore) -> dict:
        """
        사용자의 장바구니를 결제합니다.

        프로세스:
        1. 상품/사용자 컬렉션 락 획득 (정렬된 순서)
        2. 사용자 조회, 빈 장바구니 거부
        3. 모든 라인 검증 (상품 존재, 재고 충분) - 첫 실패에서 중단
        4. 모든 상품 재고 차감
        5. 장바구니 비우기, cartCount = 0
        6. 상품 → 사용자 순서로 저장

        Args:
            user_id: 사용자 ID
            store: 데이터 저장소

        Returns:
            {"success": True, "message": ..., "products": [...], "user": {...}}

        Raises:
            UserNotFoundException: 사용자를 찾을 수 없는 경우
            EmptyCartException: 장바구니가 비어 있는 경우
            ProductNotFoundException: 장바구니의 상품이 더 이상 존재하지 않는 경우
            InsufficientStockException: 재고가 부족한 라인이 있는 경우
        """
        with store.transaction(PRODUCTS, USERS):
            products = store.load_products()
            users = store.load_users()

            user = UserService.find_user(users, user_id)
            if user is None:
                raise UserNotFoundException(user_id)

            cart_items = user.get("cartItems") or []
            if not cart_items:
                raise EmptyCartException(user_id)

            # 같은 상품 라인이 여러 개면 수량을 합산 (라인 순서 유지)
            requested: dict[int, int] = {}
            for line in cart_items:
                requested[line["itemId"]] = (
                    requested.get(line["itemId"], 0) + line["quantity"]
                )

            # 1단계: 전체 검증 (아무것도 수정하지 않음)
            matched = []
            for item_id, quantity in requested.items():
                product = ProductService.find_product(products, item_id)
                if product is None:
                    raise ProductNotFoundException(item_id)
                stock = product.get("stock", 0)
                if stock < quantity:
                    raise InsufficientStockException(item_id, quantity, stock)
                matched.append((product, quantity))

            # 2단계: 전체 적용
            for product, quantity in matched:
                product["stock"] -= quantity

            purchased = sum(quantity for _, quantity in matched)
            user["cartItems"] = []
            UserService.recompute_cart_count(user)

            store.save_products(products)
            store.save_users(users)

        logger.info(
            "Checkout complete (%d products, %d units)",
            len(matched),
            purchased,
            extra={"user_id": user_id},
        )
        return {
            "success": True,
            "message": "Checkout successful",
            "products": products,
            "user": user,
        }
