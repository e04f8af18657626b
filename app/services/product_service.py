"""상품 조회 및 댓글 관리 서비스."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from app.core.config import Settings
from app.core.exceptions import (
    CommentLimitExceededException,
    ProductNotFoundException,
)
from app.db.json_storage import PRODUCTS
from app.db.store import DataStore

logger = logging.getLogger(__name__)


def average_rating(comments: Optional[list[dict]]) -> Optional[float]:
    """
    댓글 평점의 평균을 소수점 둘째 자리까지 반올림하여 반환합니다.
    정확히 절반인 값은 올림합니다 (4.125 → 4.13).

    Args:
        comments: 댓글 리스트 (없거나 비어 있으면 None 반환)

    Returns:
        평균 평점 또는 None

    Example:
        >>> average_rating([{"rating": 5}, {"rating": 4}, {"rating": 4}])
        4.33
        >>> average_rating([{"rating": 5}] * 5 + [{"rating": 4}] + [{"rating": 2}] * 2)
        4.13
        >>> average_rating([]) is None
        True
    """
    if not comments:
        return None
    total = sum(comment.get("rating") or 0 for comment in comments)
    mean = Decimal(total) / Decimal(len(comments))
    return float(mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class ProductService:
    """상품 조회, 평점 계산, 댓글 추가 서비스."""

    @staticmethod
    def find_product(products: list[dict], product_id: int) -> Optional[dict]:
        """컬렉션에서 ID로 상품을 찾습니다. 없으면 None."""
        return next((p for p in products if p.get("id") == product_id), None)

    @staticmethod
    def with_rating(product: dict) -> dict:
        """평균 평점(rating)을 추가한 상품 사본을 반환합니다."""
        return {**product, "rating": average_rating(product.get("comments"))}

    @staticmethod
    def list_products(store: DataStore) -> list[dict]:
        """
        상품 목록을 조회합니다.

        Args:
            store: 데이터 저장소

        Returns:
            상품 dict 리스트 (파일에 저장된 그대로)
        """
        return store.load_products()

    @staticmethod
    def get_product(product_id: int, store: DataStore) -> dict:
        """
        상품 ID로 상품을 조회하고 평균 평점을 함께 반환합니다.

        Args:
            product_id: 상품 ID
            store: 데이터 저장소

        Returns:
            rating 이 포함된 상품 dict

        Raises:
            ProductNotFoundException: 상품을 찾을 수 없는 경우
        """
        product = ProductService.find_product(store.load_products(), product_id)
        if product is None:
            raise ProductNotFoundException(product_id)
        return ProductService.with_rating(product)

    @staticmethod
    def add_comment(
        product_id: int,
        author: str,
        text: str,
        rating: int,
        store: DataStore,
        settings: Settings,
    ) -> dict:
        """
        상품에 댓글을 추가합니다.

        플로우:
        1. 상품 컬렉션 락 획득
        2. 상품 조회 (없으면 404)
        3. 댓글 수 상한 확인
        4. 댓글 추가 후 컬렉션 전체 저장
        5. 새로 계산한 평균 평점과 함께 상품 반환

        Args:
            product_id: 상품 ID
            author: 작성자 이름
            text: 댓글 본문
            rating: 평점 (1-5)
            store: 데이터 저장소
            settings: 애플리케이션 설정 (댓글 상한)

        Returns:
            rating 이 포함된 상품 dict

        Raises:
            ProductNotFoundException: 상품을 찾을 수 없는 경우
            CommentLimitExceededException: 댓글 수가 상한에 도달한 경우
        """
        with store.transaction(PRODUCTS):
            products = store.load_products()
            product = ProductService.find_product(products, product_id)
            if product is None:
                raise ProductNotFoundException(product_id)

            comments = product.setdefault("comments", [])
            if len(comments) >= settings.max_comments_per_product:
                raise CommentLimitExceededException(
                    product_id, settings.max_comments_per_product
                )

            comments.append(
                {"user": author.strip(), "text": text.strip(), "rating": rating}
            )
            store.save_products(products)

        logger.info(
            "Comment added (rating=%d, total=%d)",
            rating,
            len(comments),
            extra={"product_id": product_id},
        )
        return ProductService.with_rating(product)
