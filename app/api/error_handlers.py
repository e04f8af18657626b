"""
전역 예외 핸들러

모든 에러 응답은 {"error": message} 형태입니다.
- RequestValidationError → 400 (필드별 메시지)
- HTTPException → 해당 상태 코드 (detail 을 메시지로 사용)
- LockAcquisitionException → 409
- StorageException, 그 외 예외 → 500 (개발 모드에서만 상세 메시지 노출)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings
from app.core.exceptions import LockAcquisitionException, StorageException

logger = logging.getLogger(__name__)

# 검증 실패 위치(loc 의 마지막 요소)별 응답 메시지
_FIELD_MESSAGES = {
    "user_id": "Invalid user ID",
    "product_id": "Invalid product ID",
    "item_id": "Invalid item ID",
    "itemId": "Invalid itemId or quantity",
    "quantity": "Invalid itemId or quantity",
    "rating": "Rating must be 1-5",
    "user": "User name must be at most 100 characters",
    "author": "User name must be at most 100 characters",
    "text": "Text must be at most 500 characters",
}


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": message}, headers=headers
    )


def validation_message(errors: list[dict]) -> str:
    """
    Pydantic 검증 에러 목록에서 첫 번째 에러에 해당하는 메시지를 만듭니다.

    Example:
        >>> validation_message([{"loc": ("path", "user_id"), "type": "greater_than"}])
        'Invalid user ID'
    """
    if not errors:
        return "Invalid request"
    error = errors[0]

    # model_validator 에서 발생시킨 ValueError 는 그 메시지를 그대로 사용
    if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
        return str(error["ctx"]["error"])

    loc = error.get("loc") or ()
    field = str(loc[-1]) if loc else ""
    if field in _FIELD_MESSAGES:
        return _FIELD_MESSAGES[field]
    if loc and loc[0] == "body":
        return "Invalid request body"
    return "Invalid request"


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    """앱에 전역 예외 핸들러를 등록합니다."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info(
            "Validation error: %s", exc.errors(), extra={"path": request.url.path}
        )
        return error_response(
            status.HTTP_400_BAD_REQUEST, validation_message(exc.errors())
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail
        if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
            message = "Endpoint not found"
        return error_response(exc.status_code, str(message), getattr(exc, "headers", None))

    @app.exception_handler(LockAcquisitionException)
    async def lock_error_handler(request: Request, exc: LockAcquisitionException):
        logger.warning(exc.message, extra={"path": request.url.path})
        return error_response(status.HTTP_409_CONFLICT, exc.message)

    @app.exception_handler(StorageException)
    async def storage_error_handler(request: Request, exc: StorageException):
        logger.error(
            exc.message, extra={"resource": exc.resource, "path": request.url.path}
        )
        message = exc.message if settings.is_development else exc.public_message
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception: %s", exc, exc_info=True, extra={"path": request.url.path}
        )
        message = str(exc) if settings.is_development else "Server error"
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)
