"""사용자 조회 서비스."""

from typing import Optional

from app.core.exceptions import UserNotFoundException
from app.db.store import DataStore


class UserService:
    """사용자 조회 및 장바구니 파생 값 계산"""

    @staticmethod
    def list_users(store: DataStore) -> list[dict]:
        return store.load_users()

    @staticmethod
    def find_user(users: list[dict], user_id: int) -> Optional[dict]:
        """컬렉션에서 ID로 사용자를 찾습니다. 없으면 None."""
        return next((u for u in users if u.get("id") == user_id), None)

    @staticmethod
    def get_user(user_id: int, store: DataStore) -> dict:
        """
        사용자 ID로 사용자를 조회합니다.

        Raises:
            UserNotFoundException: 사용자를 찾을 수 없는 경우
        """
        user = UserService.find_user(store.load_users(), user_id)
        if user is None:
            raise UserNotFoundException(user_id)
        return user

    @staticmethod
    def recompute_cart_count(user: dict) -> int:
        """
        cartCount(장바구니 수량 합계)를 다시 계산하여 저장합니다.

        장바구니를 수정한 직후 항상 호출해야 합니다.
        """
        user["cartCount"] = sum(line["quantity"] for line in user.get("cartItems", []))
        return user["cartCount"]
