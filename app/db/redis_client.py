"""
Redis 클라이언트 연결 관리

lock_backend=redis 설정에서 워커 프로세스 간 공유 락에 사용합니다.
"""

from redis import Redis

from app.core.config import Settings


def create_redis_client(settings: Settings) -> Redis:
    """
    Redis 클라이언트 생성

    Args:
        settings: 애플리케이션 설정 객체

    Returns:
        Redis 클라이언트 인스턴스
    """
    return Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        db=settings.redis_db,
        password=settings.redis_password if settings.redis_password else None,
        decode_responses=True,
    )
