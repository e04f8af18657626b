import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.middleware import BodySizeLimitMiddleware, RateLimitMiddleware
from app.api.routes import health, products, users
from app.api.static import CachedStaticFiles
from app.core.config import Settings, get_settings
from app.core.logging import setup_logging
from app.core.rate_limit import SlidingWindowRateLimiter
from app.db.store import DataStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """시작/종료 시 로깅 설정 및 상태 출력"""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, json_format=not settings.is_development)
    logger.info(
        "Shop API started (env=%s, data_dir=%s, lock_backend=%s)",
        settings.app_env,
        settings.data_dir,
        settings.lock_backend,
    )
    yield
    logger.info("Shop API shutting down")


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DataStore] = None,
    rate_limiter: Optional[SlidingWindowRateLimiter] = None,
) -> FastAPI:
    """
    FastAPI 앱을 생성합니다.

    Args:
        settings: 애플리케이션 설정 (없으면 환경 변수에서 로드)
        store: 데이터 저장소 (없으면 설정으로 생성)
        rate_limiter: 요청 제한기 (없으면 설정으로 생성)
    """
    settings = settings or get_settings()
    store = store or DataStore.from_settings(settings)
    rate_limiter = rate_limiter or SlidingWindowRateLimiter(
        settings.rate_limit_max_requests, settings.rate_limit_window_seconds
    )

    app = FastAPI(
        title="Shop API",
        description="JSON 파일 기반 상품 카탈로그 및 장바구니 API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.rate_limiter = rate_limiter
    app.state.started_at = time.monotonic()

    # 미들웨어 (나중에 추가한 것이 바깥쪽에서 실행됨)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(RateLimitMiddleware, limiter=rate_limiter)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app, settings)

    # 라우터 등록: /api 접두사 경로와 접두사 없는 경로에 같은 핸들러를 등록
    for router in (products.router, users.router):
        app.include_router(router, prefix="/api", tags=["shop"])
        app.include_router(router, include_in_schema=False)
    app.include_router(health.router, tags=["health"])

    app.mount(
        "/images",
        CachedStaticFiles(directory=settings.images_dir, check_dir=False),
        name="images",
    )

    @app.get("/")
    def root():
        """루트 엔드포인트"""
        return {
            "message": "Shop API",
            "status": "running",
            "docs": "/docs",
        }

    return app


app = create_app()
