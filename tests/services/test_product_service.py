"""Tests for ProductService."""

import pytest

from app.core.config import Settings
from app.core.exceptions import (
    CommentLimitExceededException,
    ProductNotFoundException,
)
from app.db.store import DataStore
from app.services.product_service import ProductService, average_rating


class TestAverageRating:
    """Test: 평균 평점 계산"""

    def test_rounds_to_two_decimals(self):
        """Test: 소수점 둘째 자리 반올림"""
        assert average_rating([{"rating": 5}, {"rating": 4}, {"rating": 4}]) == 4.33

    def test_exact_half_rounds_up(self):
        """Test: 정확히 절반인 평균은 올림 (33 / 8 = 4.125)"""
        comments = [{"rating": r} for r in (5, 5, 5, 5, 5, 4, 2, 2)]

        assert average_rating(comments) == 4.13

    def test_whole_number_average(self):
        """Test: 정수 평균은 float 로 반환"""
        assert average_rating([{"rating": 3}, {"rating": 5}]) == 4.0

    def test_no_comments(self):
        """Test: 댓글이 없으면 None"""
        assert average_rating([]) is None
        assert average_rating(None) is None


class TestGetProduct:
    """Test: 상품 조회 테스트"""

    def test_list_products(self, store: DataStore):
        """Test: 저장된 상품 전체 조회"""
        products = ProductService.list_products(store)

        assert [p["id"] for p in products] == [1, 2, 3]
        assert "rating" not in products[0]

    def test_get_product_with_rating(self, store: DataStore):
        """Test: 평균 평점이 포함된 상품 조회"""
        product = ProductService.get_product(2, store)

        assert product["title"] == "Mechanical Keyboard"
        assert product["rating"] == 4.33

    def test_get_product_without_comments(self, store: DataStore):
        """Test: 댓글이 없는 상품은 rating=None"""
        assert ProductService.get_product(1, store)["rating"] is None
        assert ProductService.get_product(3, store)["rating"] is None

    def test_get_product_not_found(self, store: DataStore):
        """Test: 존재하지 않는 상품 조회 시 예외"""
        with pytest.raises(ProductNotFoundException) as exc_info:
            ProductService.get_product(999, store)

        assert exc_info.value.product_id == 999


class TestAddComment:
    """Test: 댓글 추가 테스트"""

    def test_add_comment_persists(self, store: DataStore, settings: Settings, stored):
        """Test: 댓글이 파일에 저장되고 평점이 갱신됨"""
        product = ProductService.add_comment(1, "  dave ", " Great ", 3, store, settings)

        assert product["comments"] == [{"user": "dave", "text": "Great", "rating": 3}]
        assert product["rating"] == 3.0
        assert stored("products")[0]["comments"] == [
            {"user": "dave", "text": "Great", "rating": 3}
        ]

    def test_add_comment_creates_missing_list(self, store: DataStore, settings: Settings):
        """Test: comments 필드가 없는 상품에도 댓글 추가"""
        product = ProductService.add_comment(3, "erin", "Meh", 2, store, settings)

        assert len(product["comments"]) == 1
        assert product["rating"] == 2.0

    def test_add_comment_limit(self, store: DataStore, settings: Settings, stored):
        """Test: 댓글 수 상한 도달 시 거부 (상품 2는 이미 3개)"""
        with pytest.raises(CommentLimitExceededException):
            ProductService.add_comment(2, "frank", "More", 5, store, settings)

        assert len(stored("products")[1]["comments"]) == 3

    def test_add_comment_product_not_found(self, store: DataStore, settings: Settings):
        """Test: 존재하지 않는 상품에 댓글 추가 시 예외"""
        with pytest.raises(ProductNotFoundException):
            ProductService.add_comment(999, "gina", "Hi", 4, store, settings)
