"""
HTTP 미들웨어

- RateLimitMiddleware: IP별 요청 횟수 제한 (429)
- BodySizeLimitMiddleware: 요청 본문 크기 제한 (413, Content-Length 가 없는 chunked 요청 포함)
"""

import logging

from fastapi import HTTPException, Request, status
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.api.error_handlers import error_response
from app.core.rate_limit import RateLimitDecision, SlidingWindowRateLimiter

logger = logging.getLogger(__name__)


def _rate_limit_headers(decision: RateLimitDecision) -> dict[str, str]:
    return {
        "RateLimit-Limit": str(decision.limit),
        "RateLimit-Remaining": str(decision.remaining),
        "RateLimit-Reset": str(decision.reset_seconds),
    }


class RateLimitMiddleware(BaseHTTPMiddleware):
    """클라이언트 IP 기준으로 윈도우당 최대 요청 수를 넘으면 429 를 반환합니다."""

    def __init__(self, app, limiter: SlidingWindowRateLimiter):
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        client_ip = request.client.host if request.client else "unknown"
        decision = self.limiter.hit(client_ip)
        headers = _rate_limit_headers(decision)

        if not decision.allowed:
            logger.warning(
                "Rate limit exceeded", extra={"client_ip": client_ip, "path": request.url.path}
            )
            headers["Retry-After"] = str(decision.reset_seconds)
            return error_response(
                status.HTTP_429_TOO_MANY_REQUESTS, "Too many requests", headers
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response


class BodySizeLimitMiddleware:
    """
    요청 본문이 max_bytes 를 넘으면 413 을 반환합니다.

    Content-Length 헤더가 있으면 본문을 읽기 전에 거부하고,
    없으면(chunked 전송) 수신한 바이트 수를 세다가 한도를 넘는 순간 거부합니다.
    """

    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            try:
                too_large = int(content_length) > self.max_bytes
            except ValueError:
                response = error_response(
                    status.HTTP_400_BAD_REQUEST, "Invalid Content-Length header"
                )
                await response(scope, receive, send)
                return
            if too_large:
                response = error_response(
                    status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, "Request body too large"
                )
                await response(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    # 본문을 읽는 라우트 안에서 발생하므로 전역 HTTPException 핸들러가 응답을 만듦
                    raise HTTPException(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        detail="Request body too large",
                    )
            return message

        await self.app(scope, limited_receive, send)
