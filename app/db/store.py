"""
데이터 저장소 게이트웨이

서비스 계층은 이 모듈의 DataStore 만 사용합니다.
- 읽기: 캐시 → (미스 시) JSON 파일
- 쓰기: JSON 파일 → 캐시 덮어쓰기
- 트랜잭션: 리소스 락으로 읽기-수정-쓰기 구간을 직렬화 (구간 안의 읽기는 파일에서 직접)
"""

import copy
import threading
from contextlib import contextmanager
from typing import Iterator

from app.core.config import Settings
from app.db.cache import SnapshotCache
from app.db.json_storage import PRODUCTS, USERS, JsonFileStorage
from app.db.locks import LocalLockManager, RedisLockManager, create_lock_manager


class DataStore:
    """상품/사용자 컬렉션 접근 객체"""

    def __init__(
        self,
        storage: JsonFileStorage,
        cache: SnapshotCache,
        locks: LocalLockManager | RedisLockManager,
    ):
        self.storage = storage
        self.cache = cache
        self.locks = locks
        self._local = threading.local()

    @classmethod
    def from_settings(cls, settings: Settings) -> "DataStore":
        return cls(
            storage=JsonFileStorage(settings),
            cache=SnapshotCache(settings.cache_ttl_seconds),
            locks=create_lock_manager(settings),
        )

    def _in_transaction(self) -> bool:
        return getattr(self._local, "depth", 0) > 0

    def _load(self, resource: str) -> list[dict]:
        if self._in_transaction():
            # 락 구간에서는 다른 워커의 쓰기를 놓치지 않도록 항상 파일에서 읽음
            documents = self.storage.read(resource)
            self.cache.put(resource, copy.deepcopy(documents))
            return documents

        snapshot = self.cache.get_or_load(
            resource, lambda: self.storage.read(resource)
        )
        # 호출자의 수정이 쓰기 성공 전에 캐시에 반영되지 않도록 복사본 반환
        return copy.deepcopy(snapshot)

    def _save(self, resource: str, documents: list[dict]) -> None:
        # 파일 쓰기가 실패하면 예외가 전파되고 캐시는 이전 상태 그대로 남음
        self.storage.write(resource, documents)
        self.cache.put(resource, copy.deepcopy(documents))

    def load_products(self) -> list[dict]:
        return self._load(PRODUCTS)

    def load_users(self) -> list[dict]:
        return self._load(USERS)

    def save_products(self, products: list[dict]) -> None:
        self._save(PRODUCTS, products)

    def save_users(self, users: list[dict]) -> None:
        self._save(USERS, users)

    @contextmanager
    def transaction(self, *resources: str) -> Iterator[None]:
        """
        읽기-수정-쓰기 구간 동안 리소스 락을 잡습니다.

        구간 안의 load_* 는 캐시를 거치지 않고 파일을 직접 읽으므로,
        다른 워커 프로세스가 방금 쓴 내용도 반영됩니다.

        Example:
            with store.transaction(PRODUCTS, USERS):
                products = store.load_products()
                ...
                store.save_products(products)
        """
        with self.locks.hold(*resources):
            self._local.depth = getattr(self._local, "depth", 0) + 1
            try:
                yield
            finally:
                self._local.depth -= 1
