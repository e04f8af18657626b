"""Tests for CartService."""

import json

import pytest

from app.core.exceptions import (
    CartFullException,
    CartItemNotFoundException,
    InsufficientStockException,
    ProductNotFoundException,
    UserNotFoundException,
)
from app.services.cart_service import CartService


class TestAddItem:
    """Test: 장바구니 추가 테스트"""

    def test_add_new_line(self, store, settings, stored):
        """Test: 새 라인 추가 후 cartCount 갱신"""
        user = CartService.add_item(1, 1, 2, store, settings)

        assert user["cartItems"] == [{"itemId": 1, "quantity": 2}]
        assert user["cartCount"] == 2
        assert stored("users")[0]["cartItems"] == [{"itemId": 1, "quantity": 2}]

    def test_add_accumulates_existing_line(self, store, settings):
        """Test: 같은 상품은 수량 누적"""
        CartService.add_item(1, 1, 2, store, settings)
        user = CartService.add_item(1, 1, 3, store, settings)

        assert user["cartItems"] == [{"itemId": 1, "quantity": 5}]
        assert user["cartCount"] == 5

    def test_add_over_stock_including_existing(self, store, settings, stored):
        """Test: 기존 수량 + 추가 수량이 재고를 넘으면 거부"""
        CartService.add_item(1, 1, 4, store, settings)

        with pytest.raises(InsufficientStockException) as exc_info:
            CartService.add_item(1, 1, 2, store, settings)

        assert exc_info.value.requested == 6
        assert exc_info.value.available == 5
        assert stored("users")[0]["cartItems"] == [{"itemId": 1, "quantity": 4}]

    def test_add_out_of_stock_product(self, store, settings):
        """Test: 재고가 0인 상품"""
        with pytest.raises(InsufficientStockException):
            CartService.add_item(1, 3, 1, store, settings)

    def test_add_unknown_product(self, store, settings):
        """Test: 존재하지 않는 상품"""
        with pytest.raises(ProductNotFoundException):
            CartService.add_item(1, 999, 1, store, settings)

    def test_add_unknown_user(self, store, settings):
        """Test: 존재하지 않는 사용자"""
        with pytest.raises(UserNotFoundException):
            CartService.add_item(42, 1, 1, store, settings)

    def test_add_cart_full(self, store, settings):
        """Test: 라인 수 상한 도달 시 새 라인 거부, 기존 라인 누적은 허용"""
        products = [{"id": i, "title": f"P{i}", "price": 1, "stock": 10} for i in range(1, 5)]
        settings.products_path.write_text(json.dumps(products), encoding="utf-8")
        store.cache.invalidate()

        for item_id in (1, 2, 3):
            CartService.add_item(1, item_id, 1, store, settings)

        with pytest.raises(CartFullException):
            CartService.add_item(1, 4, 1, store, settings)

        user = CartService.add_item(1, 1, 1, store, settings)
        assert user["cartCount"] == 4


class TestUpdateItemQuantity:
    """Test: 장바구니 수량 변경 테스트"""

    def test_update_quantity(self, store, settings):
        """Test: 수량 변경 후 cartCount 갱신"""
        user = CartService.update_item_quantity(2, 2, 4, store, settings)

        assert user["cartItems"] == [{"itemId": 2, "quantity": 4}]
        assert user["cartCount"] == 4

    def test_update_to_zero_removes_line(self, store, settings):
        """Test: 수량 0이면 라인 삭제"""
        user = CartService.update_item_quantity(2, 2, 0, store, settings)

        assert user["cartItems"] == []
        assert user["cartCount"] == 0

    def test_update_over_stock(self, store, settings, stored):
        """Test: 재고를 넘는 수량으로 변경 시 거부"""
        with pytest.raises(InsufficientStockException):
            CartService.update_item_quantity(2, 2, 11, store, settings)

        assert stored("users")[1]["cartItems"] == [{"itemId": 2, "quantity": 1}]

    def test_update_over_stock_when_not_enforced(self, store, settings):
        """Test: 재고 확인을 끄면 재고를 넘는 수량도 허용"""
        relaxed = settings.model_copy(update={"enforce_stock_on_update": False})

        user = CartService.update_item_quantity(2, 2, 11, store, relaxed)

        assert user["cartCount"] == 11

    def test_update_line_not_in_cart(self, store, settings):
        """Test: 장바구니에 없는 상품"""
        with pytest.raises(CartItemNotFoundException):
            CartService.update_item_quantity(1, 1, 1, store, settings)

    def test_update_unknown_user(self, store, settings):
        """Test: 존재하지 않는 사용자"""
        with pytest.raises(UserNotFoundException):
            CartService.update_item_quantity(42, 1, 1, store, settings)


class TestRemoveItem:
    """Test: 장바구니 삭제 테스트"""

    def test_remove_line(self, store, stored):
        """Test: 라인 삭제 후 저장"""
        user = CartService.remove_item(2, 2, store)

        assert user["cartItems"] == []
        assert user["cartCount"] == 0
        assert stored("users")[1]["cartCount"] == 0

    def test_remove_line_not_in_cart(self, store):
        """Test: 장바구니에 없는 상품 삭제 시 예외"""
        with pytest.raises(CartItemNotFoundException):
            CartService.remove_item(1, 1, store)

    def test_remove_unknown_user(self, store):
        """Test: 존재하지 않는 사용자"""
        with pytest.raises(UserNotFoundException):
            CartService.remove_item(42, 1, store)
