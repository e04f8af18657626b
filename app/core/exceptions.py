"""
커스텀 예외 정의

애플리케이션 전역에서 사용되는 커스텀 예외 클래스들입니다.
라우터에서 HTTPException으로 변환되며, 응답 본문은 {"error": message} 형태입니다.
"""


class UserNotFoundException(Exception):
    """
    사용자를 찾을 수 없을 때 발생하는 예외

    HTTP Status Code: 404 Not Found
    """

    def __init__(self, user_id: int):
        self.user_id = user_id
        self.message = "User not found"
        super().__init__(self.message)


class ProductNotFoundException(Exception):
    """
    상품을 찾을 수 없을 때 발생하는 예외

    HTTP Status Code: 404 Not Found (상품 조회)
                      400 Bad Request (장바구니에서 참조한 상품이 없는 경우)
    """

    def __init__(self, product_id: int):
        self.product_id = product_id
        self.message = "Product not found"
        super().__init__(self.message)


class CartItemNotFoundException(Exception):
    """
    장바구니에 해당 상품이 없을 때 발생하는 예외

    HTTP Status Code: 404 Not Found
    """

    def __init__(self, user_id: int, item_id: int):
        self.user_id = user_id
        self.item_id = item_id
        self.message = "Item not in cart"
        super().__init__(self.message)


class InsufficientStockException(Exception):
    """
    재고 부족 시 발생하는 예외

    HTTP Status Code: 400 Bad Request
    """

    def __init__(self, product_id: int, requested: int, available: int):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        self.message = (
            f"Insufficient stock for product {product_id}: "
            f"requested {requested} exceeds stock {available}"
        )
        super().__init__(self.message)


class EmptyCartException(Exception):
    """
    빈 장바구니로 결제를 시도할 때 발생하는 예외

    HTTP Status Code: 400 Bad Request
    """

    def __init__(self, user_id: int):
        self.user_id = user_id
        self.message = "Cart is empty"
        super().__init__(self.message)


class CartFullException(Exception):
    """
    장바구니 라인 수가 상한에 도달했을 때 발생하는 예외

    HTTP Status Code: 400 Bad Request
    """

    def __init__(self, user_id: int, limit: int):
        self.user_id = user_id
        self.limit = limit
        self.message = f"Cart is full (max {limit} items)"
        super().__init__(self.message)


class CommentLimitExceededException(Exception):
    """
    상품의 댓글 수가 상한에 도달했을 때 발생하는 예외

    HTTP Status Code: 400 Bad Request
    """

    def __init__(self, product_id: int, limit: int):
        self.product_id = product_id
        self.limit = limit
        self.message = "Too many comments"
        super().__init__(self.message)


class LockAcquisitionException(Exception):
    """
    락 획득 실패 시 발생하는 예외

    HTTP Status Code: 409 Conflict
    """

    def __init__(self, resource: str, message: str = "Failed to acquire lock"):
        self.resource = resource
        self.message = f"{message} for resource: {resource}"
        super().__init__(self.message)


class StorageException(Exception):
    """
    JSON 데이터 파일 읽기/쓰기 실패 시 발생하는 예외

    HTTP Status Code: 500 Internal Server Error
    (개발 모드가 아니면 상세 메시지는 응답에 포함하지 않음)
    """

    def __init__(self, resource: str, operation: str, reason: str):
        self.resource = resource
        self.operation = operation
        self.reason = reason
        self.message = f"Failed to {operation} {resource}: {reason}"
        super().__init__(self.message)

    @property
    def public_message(self) -> str:
        """운영 모드에서 노출하는 일반 메시지"""
        return f"Failed to {self.operation} {self.resource}"
