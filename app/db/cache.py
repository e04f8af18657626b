"""
컬렉션 스냅샷 캐시

리소스(products, users)별로 마지막으로 읽거나 쓴 컬렉션을 짧은 TTL 동안 보관합니다.
쓰기 성공 시에는 무효화 대신 쓰기 결과로 덮어씁니다.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class _Snapshot:
    data: list[dict]
    stored_at: float


class SnapshotCache:
    """
    TTL 기반 read-through 캐시

    프로세스 메모리에만 보관하므로 워커 프로세스마다 별도의 캐시를 가집니다.
    다른 워커의 쓰기는 TTL이 지난 뒤에야 보입니다.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._snapshots: dict[str, _Snapshot] = {}
        self._lock = threading.Lock()

    def is_fresh(self, resource: str) -> bool:
        """스냅샷이 존재하고 TTL 이내인지 확인합니다."""
        with self._lock:
            return self._fresh_snapshot(resource) is not None

    def get_or_load(
        self, resource: str, loader: Callable[[], list[dict]]
    ) -> list[dict]:
        """
        유효한 스냅샷이 있으면 반환하고, 없으면 loader로 읽어 저장합니다.

        Args:
            resource: 리소스 이름
            loader: 캐시 미스 시 원본(파일)을 읽는 함수

        Returns:
            컬렉션 (캐시에 보관 중인 객체 그 자체이므로 호출자가 수정하면 안 됨)

        Raises:
            loader가 발생시킨 예외를 그대로 전달 (캐시는 갱신하지 않음)
        """
        with self._lock:
            snapshot = self._fresh_snapshot(resource)
            if snapshot is not None:
                return snapshot.data

        data = loader()
        self.put(resource, data)
        return data

    def put(self, resource: str, data: list[dict]) -> None:
        """스냅샷을 덮어쓰고 타임스탬프를 초기화합니다."""
        with self._lock:
            self._snapshots[resource] = _Snapshot(data=data, stored_at=self.clock())

    def invalidate(self, resource: str | None = None) -> None:
        """스냅샷 삭제 (resource가 없으면 전체)"""
        with self._lock:
            if resource is None:
                self._snapshots.clear()
            else:
                self._snapshots.pop(resource, None)

    def _fresh_snapshot(self, resource: str) -> _Snapshot | None:
        snapshot = self._snapshots.get(resource)
        if snapshot is None:
            return None
        if self.clock() - snapshot.stored_at >= self.ttl_seconds:
            return None
        return snapshot
