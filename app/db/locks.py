"""
리소스 단위 락

상품/사용자 컬렉션의 읽기-수정-쓰기 구간을 직렬화합니다.
- LocalLockManager: 단일 프로세스 (스레드 락)
- RedisLockManager: 다중 워커 프로세스 (Redis SETNX 락)
"""

import logging
import threading
import time
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional

from redis import Redis

from app.core.config import Settings
from app.core.exceptions import LockAcquisitionException
from app.db.redis_client import create_redis_client

logger = logging.getLogger(__name__)


class LocalLockManager:
    """프로세스 내부 스레드 락 (FastAPI 동기 핸들러는 스레드풀에서 실행됨)"""

    def __init__(self):
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, resource: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(resource, threading.Lock())

    def acquire(self, resource: str) -> threading.Lock:
        lock = self._lock_for(resource)
        lock.acquire()
        return lock

    def release(self, resource: str, token: threading.Lock) -> None:
        token.release()

    @contextmanager
    def hold(self, *resources: str) -> Iterator[None]:
        """
        여러 리소스의 락을 정렬된 순서로 획득하고 역순으로 해제합니다.

        항상 같은 순서로 획득하므로 두 리소스를 함께 잡는 결제 처리와
        한 리소스만 잡는 요청이 섞여도 교착 상태가 생기지 않습니다.
        """
        with _hold_all(self, resources):
            yield


class RedisLockManager:
    """
    Redis SETNX 기반 분산 락

    워커 프로세스가 여러 개일 때 같은 Redis를 바라보면 프로세스 간에도 상호 배제가 보장됩니다.
    """

    # 락 ID가 일치하는 경우에만 삭제 (다른 클라이언트의 락을 실수로 해제하지 않도록)
    RELEASE_SCRIPT = """
    if redis.call("GET", KEYS[1]) == ARGV[1] then
        return redis.call("DEL", KEYS[1])
    else
        return 0
    end
    """

    def __init__(self, redis: Redis, settings: Settings):
        self.redis = redis
        self.timeout_seconds = settings.lock_timeout_seconds
        self.retry_attempts = settings.lock_retry_attempts
        self.retry_delay = settings.lock_retry_delay_ms / 1000.0  # ms를 초로 변환

    @staticmethod
    def _get_lock_key(resource: str) -> str:
        return f"lock:{resource}"

    def _try_acquire(self, resource: str) -> Optional[str]:
        """
        TTL을 설정하여 SETNX로 락 획득을 1회 시도합니다.

        Returns:
            획득 성공 시 락 ID (UUID), 이미 점유 중이면 None
        """
        lock_id = str(uuid.uuid4())
        # NX: 키가 없을 때만 설정, EX: 데드락 방지를 위한 만료 시간
        acquired = self.redis.set(
            self._get_lock_key(resource), lock_id, nx=True, ex=self.timeout_seconds
        )
        return lock_id if acquired else None

    def acquire(self, resource: str) -> str:
        """
        재시도하며 락을 획득합니다.

        Returns:
            락 ID

        Raises:
            LockAcquisitionException: 최대 재시도 횟수 초과
        """
        for attempt in range(self.retry_attempts):
            lock_id = self._try_acquire(resource)
            if lock_id is not None:
                return lock_id
            if attempt < self.retry_attempts - 1:
                time.sleep(self.retry_delay)

        logger.warning(
            "Lock acquisition failed after %d attempts",
            self.retry_attempts,
            extra={"resource": resource},
        )
        raise LockAcquisitionException(
            resource,
            f"Failed to acquire lock after {self.retry_attempts} retries",
        )

    def release(self, resource: str, token: str) -> bool:
        """Lua 스크립트로 원자적으로 락을 해제합니다."""
        result = self.redis.eval(
            self.RELEASE_SCRIPT, 1, self._get_lock_key(resource), token
        )
        return bool(result)

    @contextmanager
    def hold(self, *resources: str) -> Iterator[None]:
        """LocalLockManager.hold 와 같은 규칙으로 여러 리소스 락을 잡습니다."""
        with _hold_all(self, resources):
            yield


@contextmanager
def _hold_all(manager, resources) -> Iterator[None]:
    held = []
    try:
        for resource in sorted(set(resources)):
            held.append((resource, manager.acquire(resource)))
        yield
    finally:
        for resource, token in reversed(held):
            manager.release(resource, token)


def create_lock_manager(settings: Settings, redis: Optional[Redis] = None):
    """
    설정에 맞는 락 매니저를 생성합니다.

    Args:
        settings: 애플리케이션 설정 (lock_backend)
        redis: lock_backend=redis 일 때 사용할 클라이언트 (없으면 설정으로 생성)
    """
    if settings.lock_backend == "redis":
        if redis is None:
            redis = create_redis_client(settings)
        return RedisLockManager(redis, settings)
    return LocalLockManager()
