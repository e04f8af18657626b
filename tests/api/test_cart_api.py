"""
장바구니 API 엔드포인트 통합 테스트
"""

import json

import pytest


class TestUsers:
    """GET /users 엔드포인트 테스트"""

    def test_list_users(self, test_client):
        """사용자 목록 조회 (추가 필드 유지)"""
        response = test_client.get("/api/users")

        assert response.status_code == 200
        data = response.json()
        assert [u["id"] for u in data] == [1, 2]
        assert data[0]["name"] == "Alice"

    def test_get_user(self, test_client):
        """사용자 조회 (camelCase 필드)"""
        response = test_client.get("/users/2")

        assert response.status_code == 200
        data = response.json()
        assert data["cartItems"] == [{"itemId": 2, "quantity": 1}]
        assert data["cartCount"] == 1

    def test_get_user_not_found(self, test_client):
        """존재하지 않는 사용자 조회 시 404"""
        response = test_client.get("/users/42")

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    def test_get_user_invalid_id(self, test_client):
        """잘못된 사용자 ID는 400"""
        response = test_client.get("/users/abc")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid user ID"}


class TestAddToCart:
    """POST /users/{id}/cart 엔드포인트 테스트"""

    def test_add_to_empty_cart(self, test_client, stored):
        """빈 장바구니에 추가"""
        response = test_client.post("/users/1/cart", json={"itemId": 1, "quantity": 2})

        assert response.status_code == 201
        data = response.json()
        assert data["cartItems"] == [{"itemId": 1, "quantity": 2}]
        assert data["cartCount"] == 2
        assert stored("users")[0]["cartCount"] == 2

    def test_add_same_item_twice_accumulates(self, test_client):
        """같은 상품을 두 번 추가하면 수량 누적"""
        test_client.post("/users/1/cart", json={"itemId": 1, "quantity": 2})
        response = test_client.post("/api/users/1/cart", json={"itemId": 1, "quantity": 1})

        assert response.json()["cartItems"] == [{"itemId": 1, "quantity": 3}]
        assert response.json()["cartCount"] == 3

    def test_add_default_quantity(self, test_client):
        """quantity 생략 시 1"""
        response = test_client.post("/users/1/cart", json={"itemId": 2})

        assert response.status_code == 201
        assert response.json()["cartItems"] == [{"itemId": 2, "quantity": 1}]

    def test_add_over_stock(self, test_client):
        """재고 초과 시 400"""
        response = test_client.post("/users/1/cart", json={"itemId": 1, "quantity": 6})

        assert response.status_code == 400
        assert "exceeds stock" in response.json()["error"]

    def test_add_unknown_product(self, test_client):
        """존재하지 않는 상품은 400"""
        response = test_client.post("/users/1/cart", json={"itemId": 999, "quantity": 1})

        assert response.status_code == 400
        assert response.json() == {"error": "Product does not exist"}

    def test_add_unknown_user(self, test_client):
        """존재하지 않는 사용자는 404"""
        response = test_client.post("/users/42/cart", json={"itemId": 1, "quantity": 1})

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    @pytest.mark.parametrize(
        "body",
        [
            {"quantity": 1},
            {"itemId": 0, "quantity": 1},
            {"itemId": "1", "quantity": 1},
            {"itemId": 1, "quantity": 0},
            {"itemId": 1, "quantity": -2},
            {"itemId": 1, "quantity": 1.5},
        ],
    )
    def test_add_invalid_body(self, test_client, body):
        """잘못된 itemId/quantity 는 400"""
        response = test_client.post("/users/1/cart", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid itemId or quantity"}

    def test_add_cart_full(self, test_client, settings):
        """장바구니 라인 상한 도달 시 400"""
        products = [{"id": i, "title": f"P{i}", "price": 1, "stock": 10} for i in range(1, 5)]
        settings.products_path.write_text(json.dumps(products), encoding="utf-8")
        test_client.app.state.store.cache.invalidate()

        for item_id in (1, 2, 3):
            assert test_client.post("/users/1/cart", json={"itemId": item_id}).status_code == 201

        response = test_client.post("/users/1/cart", json={"itemId": 4})

        assert response.status_code == 400
        assert "Cart is full" in response.json()["error"]


class TestUpdateCartItem:
    """PATCH /users/{id}/cart/{itemId} 엔드포인트 테스트"""

    def test_update_quantity(self, test_client):
        """수량 변경"""
        response = test_client.patch("/users/2/cart/2", json={"quantity": 3})

        assert response.status_code == 200
        assert response.json()["cartItems"] == [{"itemId": 2, "quantity": 3}]
        assert response.json()["cartCount"] == 3

    def test_update_to_zero_removes_line(self, test_client):
        """수량 0이면 라인 삭제, cartCount 재계산"""
        test_client.post("/users/2/cart", json={"itemId": 1, "quantity": 2})

        response = test_client.patch("/api/users/2/cart/2", json={"quantity": 0})

        assert response.status_code == 200
        assert response.json()["cartItems"] == [{"itemId": 1, "quantity": 2}]
        assert response.json()["cartCount"] == 2

    def test_update_over_stock(self, test_client):
        """재고를 넘는 수량은 400"""
        response = test_client.patch("/users/2/cart/2", json={"quantity": 11})

        assert response.status_code == 400
        assert "exceeds stock" in response.json()["error"]

    def test_update_line_not_in_cart(self, test_client):
        """장바구니에 없는 상품은 404"""
        response = test_client.patch("/users/1/cart/1", json={"quantity": 1})

        assert response.status_code == 404
        assert response.json() == {"error": "Item not in cart"}

    def test_update_negative_quantity(self, test_client):
        """음수 수량은 400"""
        response = test_client.patch("/users/2/cart/2", json={"quantity": -1})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid itemId or quantity"}

    def test_update_invalid_item_id(self, test_client):
        """잘못된 상품 ID는 400"""
        response = test_client.patch("/users/2/cart/abc", json={"quantity": 1})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid item ID"}


class TestRemoveCartItem:
    """DELETE /users/{id}/cart/{itemId} 엔드포인트 테스트"""

    def test_remove_line(self, test_client, stored):
        """라인 삭제"""
        response = test_client.delete("/users/2/cart/2")

        assert response.status_code == 200
        assert response.json()["cartItems"] == []
        assert response.json()["cartCount"] == 0
        assert stored("users")[1]["cartItems"] == []

    def test_remove_line_not_in_cart(self, test_client):
        """장바구니에 없는 상품 삭제 시 404"""
        response = test_client.delete("/api/users/1/cart/1")

        assert response.status_code == 404
        assert response.json() == {"error": "Item not in cart"}
