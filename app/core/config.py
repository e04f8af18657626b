"""
애플리케이션 설정 관리

Pydantic Settings를 사용하여 환경 변수를 로드합니다.
.env 파일 또는 시스템 환경 변수에서 설정을 읽어옵니다.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정 클래스"""

    # 서버 설정
    host: str = "0.0.0.0"
    port: int = 5000
    app_env: str = "production"  # development | production
    enable_clustering: bool = False  # CPU 코어 수만큼 워커 프로세스 실행
    workers: int = 0  # 0이면 CPU 코어 수 사용

    # 데이터 파일 설정
    data_dir: Path = Path("data")
    products_file: str = "products.json"
    users_file: str = "users.json"
    images_dir: Path = Path("images")

    # 캐시 설정
    cache_ttl_seconds: float = 5.0

    # 요청 제한 설정 (IP당 15분에 100회)
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: float = 15 * 60
    max_body_bytes: int = 10 * 1024

    # 도메인 제한 값
    max_comments_per_product: int = 1000
    max_cart_lines: int = 100
    enforce_stock_on_update: bool = True  # False면 수량 변경 시 재고 확인 생략

    # 락 설정
    lock_backend: Literal["local", "redis"] = "local"
    lock_timeout_seconds: int = 10
    lock_retry_attempts: int = 50
    lock_retry_delay_ms: int = 100

    # Redis 설정 (lock_backend=redis 일 때만 사용)
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: str = ""

    # 애플리케이션 설정
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # 정의되지 않은 환경 변수 무시
    )

    @property
    def is_development(self) -> bool:
        """개발 모드 여부 (JSON 들여쓰기 저장, 상세 에러 메시지)"""
        return self.app_env.lower() == "development"

    @property
    def products_path(self) -> Path:
        return self.data_dir / self.products_file

    @property
    def users_path(self) -> Path:
        return self.data_dir / self.users_file

    @property
    def worker_count(self) -> int:
        """
        실행할 워커 프로세스 수

        클러스터링이 꺼져 있으면 항상 1입니다.
        """
        if not self.enable_clustering:
            return 1
        if self.workers > 0:
            return self.workers
        return os.cpu_count() or 1

    @property
    def redis_url(self) -> str:
        """
        Redis 연결 URL 생성

        비밀번호가 있는 경우: redis://:password@host:port/db
        비밀번호가 없는 경우: redis://host:port/db
        """
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"


@lru_cache
def get_settings() -> Settings:
    """
    Settings 인스턴스를 반환하는 팩토리 함수

    프로세스당 한 번만 환경 변수를 읽습니다.
    """
    return Settings()
