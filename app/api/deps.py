"""
FastAPI 의존성 주입 함수들

create_app() 에서 app.state 에 올려 둔 설정과 데이터 저장소를 제공합니다.
"""

from fastapi import Request

from app.core.config import Settings
from app.db.store import DataStore


def get_store(request: Request) -> DataStore:
    """
    현재 앱의 DataStore 를 반환하는 의존성 함수

    Example:
        @router.get("/products")
        def list_products(store: DataStore = Depends(get_store)):
            return ProductService.list_products(store)
    """
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    """현재 앱의 Settings 를 반환하는 의존성 함수"""
    return request.app.state.settings
